"""config.py — Constants, input names, environment defaults, logging setup."""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional

__all__ = [
    "API_VERSION",
    "ASSUME_ROLE_DURATION_SECONDS",
    "DEFAULT_STS_REGION",
    "FUNCTION_FAILURE_MESSAGE",
    "INPUT_ACCESS_KEY_ID",
    "INPUT_ASSUMED_ROLE_ARN",
    "INPUT_HTTP_TIMEOUT",
    "INPUT_MAX_RETRIES",
    "INPUT_REGION",
    "INPUT_SECRET_ACCESS_KEY",
    "INPUT_SESSION_TOKEN",
    "INPUT_SUCCEED_ON_FUNCTION_FAILURE",
    "LOG_LEVEL",
    "OUTPUT_RESPONSE",
    "REQUEST_FIELDS",
    "ROLE_SESSION_NAME",
    "configure_logging",
]

# ---------------------------------------------------------------------------
# AWS constants
# ---------------------------------------------------------------------------

API_VERSION = "2015-03-31"
ROLE_SESSION_NAME = "DatabaseMigrationSession"
ASSUME_ROLE_DURATION_SECONDS = 1200
# STS needs a region when the step does not supply REGION.
DEFAULT_STS_REGION = os.environ.get("DEFAULT_STS_REGION", "us-east-1")

# ---------------------------------------------------------------------------
# Step inputs / outputs
# ---------------------------------------------------------------------------

INPUT_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
INPUT_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
INPUT_SESSION_TOKEN = "AWS_SESSION_TOKEN"

INPUT_ASSUMED_ROLE_ARN = "ASSUMED_ROLE_ARN"
INPUT_REGION = "REGION"

INPUT_HTTP_TIMEOUT = "HTTP_TIMEOUT"
INPUT_MAX_RETRIES = "MAX_RETRIES"
INPUT_SUCCEED_ON_FUNCTION_FAILURE = "SUCCEED_ON_FUNCTION_FAILURE"

# Lambda Invoke parameters passed through verbatim when non-empty.
REQUEST_FIELDS = (
    "FunctionName",
    "InvocationType",
    "LogType",
    "ClientContext",
    "Payload",
    "Qualifier",
)

OUTPUT_RESPONSE = "response"
FUNCTION_FAILURE_MESSAGE = "Lambda invocation failed! See outputs.response for more information."

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def configure_logging(level: Optional[str] = None) -> None:
    """Route package logs to stderr so stdout stays free for workflow commands."""
    resolved = str(level or LOG_LEVEL or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )
