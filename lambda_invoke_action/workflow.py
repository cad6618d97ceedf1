"""workflow.py — Output recording and failure signalling for the host runner.

Implements the subset of GitHub Actions workflow commands the step needs:
``set_output`` (``GITHUB_OUTPUT`` file, falling back to the legacy
``::set-output`` command), ``add_mask``, ``set_failed`` and log groups.
"""
from __future__ import annotations

import json
import logging
import os
import sys
import uuid
from typing import Any, Callable, Optional, TextIO

__all__ = [
    "WorkflowWriter",
    "escape_data",
    "escape_property",
]

logger = logging.getLogger(__name__)


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def _to_command_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


class WorkflowWriter:
    """Writes outputs and workflow commands for one run.

    ``output_path`` defaults to ``$GITHUB_OUTPUT``; ``stream`` defaults to
    stdout, where the runner scans for ``::command::`` lines. Text that did not
    come from this step goes through ``write_untrusted``.
    """

    def __init__(
        self,
        output_path: Optional[str] = None,
        stream: Optional[TextIO] = None,
        delimiter_factory: Optional[Callable[[], str]] = None,
        token_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self.output_path = output_path if output_path is not None else os.environ.get("GITHUB_OUTPUT", "")
        self.stream = stream or sys.stdout
        self._delimiter_factory = delimiter_factory or (lambda: f"ghadelimiter_{uuid.uuid4()}")
        self._token_factory = token_factory or (lambda: uuid.uuid4().hex)
        self.failed = False
        self.failure_message: Optional[str] = None

    def _command(self, command: str, message: str, **properties: str) -> None:
        props = ",".join(f"{key}={escape_property(val)}" for key, val in properties.items() if val)
        head = f"::{command} {props}" if props else f"::{command}"
        self.stream.write(f"{head}::{escape_data(message)}\n")
        self.stream.flush()

    def set_output(self, name: str, value: Any) -> None:
        text = _to_command_value(value)
        if not self.output_path:
            self.stream.write("\n")
            self._command("set-output", text, name=name)
            return
        delimiter = self._delimiter_factory()
        if delimiter in name or delimiter in text:
            raise ValueError(f"Unexpected input: output value contains the delimiter {delimiter}")
        with open(self.output_path, "a", encoding="utf-8") as handle:
            handle.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
        logger.debug("Recorded output %s (%d chars)", name, len(text))

    def write(self, text: str) -> None:
        self.stream.write(text if text.endswith("\n") else text + "\n")
        self.stream.flush()

    def write_untrusted(self, text: str) -> None:
        """Echo text the runner must not interpret, e.g. logs from the invoked function."""
        token = self._token_factory()
        if token in text:
            raise ValueError("Unexpected input: text contains the stop-commands token")
        self._command("stop-commands", token)
        self.write(text)
        self._command(token, "")

    def add_mask(self, secret: str) -> None:
        if secret:
            self._command("add-mask", secret)

    def start_group(self, title: str) -> None:
        self._command("group", title)

    def end_group(self) -> None:
        self._command("endgroup", "")

    def set_failed(self, message: str) -> None:
        """Mark the run failed; the entry point turns this into exit code 1."""
        self.failed = True
        self.failure_message = message
        self._command("error", message)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0
