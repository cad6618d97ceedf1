"""invocation.py — Invocation orchestration for a single run.

Flow:
    START
    → resolve credentials (direct or STS AssumeRole)    CREDENTIALS_RESOLVED
    → read HTTP_TIMEOUT / MAX_RETRIES, build request      REQUEST_BUILT
    → Lambda Invoke                                        INVOKED
    → write outputs.response                               OUTCOME_RECORDED
    → DONE, or FAILED on a function error without SUCCEED_ON_FUNCTION_FAILURE

Any exception moves the run straight to FAILED with its message as the
failure reason.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

from botocore.exceptions import BotoCoreError, ClientError

from .aws_clients import ClientSettings, ResilienceConfig, get_lambda_client
from .config import (
    FUNCTION_FAILURE_MESSAGE,
    INPUT_HTTP_TIMEOUT,
    INPUT_MAX_RETRIES,
    INPUT_REGION,
    INPUT_SUCCEED_ON_FUNCTION_FAILURE,
    OUTPUT_RESPONSE,
    REQUEST_FIELDS,
)
from .credentials import resolve_credentials
from .errors import ConfigInputError, FunctionExecutionError, TransportError
from .inputs import InputReader
from .serialization import decode_log_result, dump_output, response_to_output
from .workflow import WorkflowWriter

__all__ = [
    "InvocationSuccess",
    "RunResult",
    "TransportFailure",
    "build_request",
    "finalize",
    "invoke",
    "read_resilience_config",
    "run",
]

logger = logging.getLogger(__name__)

STATE_START = "START"
STATE_CREDENTIALS_RESOLVED = "CREDENTIALS_RESOLVED"
STATE_REQUEST_BUILT = "REQUEST_BUILT"
STATE_INVOKED = "INVOKED"
STATE_OUTCOME_RECORDED = "OUTCOME_RECORDED"
STATE_DONE = "DONE"
STATE_FAILED = "FAILED"

LambdaClientFactory = Callable[[ClientSettings], Any]


@dataclass(frozen=True)
class InvocationSuccess:
    """The Invoke call completed; ``function_error`` is set if the function raised."""

    response: Dict[str, Any]
    function_error: Optional[str] = None


@dataclass(frozen=True)
class TransportFailure:
    reason: str


InvocationOutcome = Union[InvocationSuccess, TransportFailure]


@dataclass
class RunResult:
    state: str = STATE_START
    response: Optional[Dict[str, Any]] = None
    failure: Optional[str] = None
    history: list = field(default_factory=lambda: [STATE_START])

    def advance(self, state: str) -> None:
        logger.debug("Run state %s -> %s", self.state, state)
        self.state = state
        self.history.append(state)

    @property
    def succeeded(self) -> bool:
        return self.state == STATE_DONE


# ---------------------------------------------------------------------------
# Request / client configuration
# ---------------------------------------------------------------------------


def build_request(reader: InputReader) -> Dict[str, str]:
    """Return the sparse Invoke parameters: only fields with a non-empty input."""
    request: Dict[str, str] = {}
    for name in REQUEST_FIELDS:
        value = reader.optional(name)
        if value is not None:
            request[name] = value
    return request


def read_resilience_config(reader: InputReader) -> ResilienceConfig:
    timeout_millis = reader.integer(INPUT_HTTP_TIMEOUT)
    max_retries = reader.integer(INPUT_MAX_RETRIES)
    if timeout_millis is not None and timeout_millis < 0:
        raise ConfigInputError(f"Input {INPUT_HTTP_TIMEOUT} must not be negative, got {timeout_millis}")
    if max_retries is not None and max_retries < 0:
        raise ConfigInputError(f"Input {INPUT_MAX_RETRIES} must not be negative, got {max_retries}")
    return ResilienceConfig(timeout_millis=timeout_millis, max_retries=max_retries)


def _require_function_name(request: Dict[str, str]) -> None:
    if not request.get("FunctionName"):
        raise ConfigInputError("Input FunctionName is required")


# ---------------------------------------------------------------------------
# Invoke / outcome handling
# ---------------------------------------------------------------------------


def invoke(
    request: Dict[str, str],
    settings: ClientSettings,
    lambda_client_factory: Optional[LambdaClientFactory] = None,
) -> InvocationOutcome:
    """Call Lambda Invoke once; retries happen inside botocore only."""
    factory = lambda_client_factory or get_lambda_client
    params = dict(request)
    logger.info(
        "Invoking %s (type=%s, region=%s)",
        params.get("FunctionName"),
        params.get("InvocationType", "RequestResponse"),
        settings.region or "default",
    )
    try:
        client = factory(settings)
        raw = client.invoke(**params)
    except (ClientError, BotoCoreError) as exc:
        logger.error("Invoke failed before the function ran: %s", exc)
        return TransportFailure(reason=str(exc))

    response = response_to_output(raw or {})
    function_error = response.get("FunctionError") or None
    logger.info("Invoke returned status %s (FunctionError=%s)", response.get("StatusCode"), function_error)
    return InvocationSuccess(response=response, function_error=function_error)


def _record_outcome(outcome: InvocationOutcome, writer: WorkflowWriter) -> Dict[str, Any]:
    if isinstance(outcome, TransportFailure):
        raise TransportError(outcome.reason)
    writer.set_output(OUTPUT_RESPONSE, dump_output(outcome.response))
    log_tail = decode_log_result(outcome.response.get("LogResult"))
    if log_tail:
        writer.start_group("Function log tail")
        writer.write_untrusted(log_tail)
        writer.end_group()
    return outcome.response


def _check_outcome(outcome: InvocationSuccess, succeed_on_function_failure: bool) -> None:
    if not outcome.function_error:
        return
    if succeed_on_function_failure:
        logger.warning(
            "Function reported %s; ignored because %s is true",
            outcome.function_error,
            INPUT_SUCCEED_ON_FUNCTION_FAILURE,
        )
        return
    raise FunctionExecutionError(FUNCTION_FAILURE_MESSAGE)


def finalize(
    outcome: InvocationOutcome,
    succeed_on_function_failure: bool,
    writer: WorkflowWriter,
) -> Dict[str, Any]:
    """Record the response, then fail on a function error unless the policy allows it.

    The output is written before any FunctionExecutionError is raised.
    """
    response = _record_outcome(outcome, writer)
    _check_outcome(outcome, succeed_on_function_failure)
    return response


# ---------------------------------------------------------------------------
# Run boundary
# ---------------------------------------------------------------------------


def _failure_reason(exc: BaseException) -> str:
    message = str(exc)
    if message:
        return message
    return json.dumps({"name": type(exc).__name__, "args": [repr(arg) for arg in exc.args]})


def run(
    reader: Optional[InputReader] = None,
    writer: Optional[WorkflowWriter] = None,
    sts_client_factory: Optional[Callable[..., Any]] = None,
    lambda_client_factory: Optional[LambdaClientFactory] = None,
) -> RunResult:
    reader = reader or InputReader()
    writer = writer or WorkflowWriter()
    result = RunResult()
    try:
        credentials = resolve_credentials(reader, sts_client_factory, writer)
        result.advance(STATE_CREDENTIALS_RESOLVED)

        settings = ClientSettings(
            credentials=credentials,
            region=reader.optional(INPUT_REGION),
            resilience=read_resilience_config(reader),
        )
        request = build_request(reader)
        _require_function_name(request)
        result.advance(STATE_REQUEST_BUILT)

        outcome = invoke(request, settings, lambda_client_factory)
        result.advance(STATE_INVOKED)

        result.response = _record_outcome(outcome, writer)
        result.advance(STATE_OUTCOME_RECORDED)

        _check_outcome(outcome, reader.flag(INPUT_SUCCEED_ON_FUNCTION_FAILURE))
        result.advance(STATE_DONE)
    except Exception as exc:
        result.failure = _failure_reason(exc)
        result.advance(STATE_FAILED)
        logger.error("Run failed: %s", result.failure)
        writer.set_failed(result.failure)
    return result
