"""Entry point for the Lambda invoke step.

Examples:
  INPUT_FUNCTIONNAME=demo INPUT_REGION=us-east-1 python -m lambda_invoke_action

  INPUT_FUNCTIONNAME=demo INPUT_PAYLOAD='{"a": 1}' \
    python -m lambda_invoke_action --dry-run
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from .config import configure_logging
from .errors import ConfigInputError
from .inputs import InputReader
from .invocation import build_request, read_resilience_config, run
from .workflow import WorkflowWriter

# Request fields whose content is only reported by length in dry-run output.
_REDACTED_FIELDS = ("Payload", "ClientContext")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lambda-invoke-action",
        description="Invoke an AWS Lambda function using GitHub Actions step inputs (INPUT_* variables).",
    )
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL (DEBUG, INFO, WARNING, ERROR).")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the Invoke request that would be sent without calling AWS.",
    )
    return parser


def _dry_run(reader: InputReader, writer: WorkflowWriter) -> int:
    try:
        request = build_request(reader)
        resilience = read_resilience_config(reader)
    except ConfigInputError as exc:
        writer.set_failed(str(exc))
        return writer.exit_code
    shown = {
        key: (f"<{len(value)} chars>" if key in _REDACTED_FIELDS else value)
        for key, value in request.items()
    }
    summary = {
        "request": shown,
        "timeout_millis": resilience.timeout_millis,
        "max_retries": resilience.max_retries,
    }
    writer.write("[DRY-RUN] " + json.dumps(summary, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    reader = InputReader()
    writer = WorkflowWriter()
    if args.dry_run:
        return _dry_run(reader, writer)

    run(reader=reader, writer=writer)
    return writer.exit_code


if __name__ == "__main__":
    sys.exit(main())
