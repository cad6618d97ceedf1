"""errors.py — Exception taxonomy for a single invocation run.

Every error raised below is caught once at the run boundary
(``invocation.run``) and reported as the run's failure message.
"""
from __future__ import annotations


class LambdaInvokeActionError(RuntimeError):
    """Base class for errors raised while running the step."""


class ConfigInputError(LambdaInvokeActionError):
    """Raised when a step input is missing or malformed (e.g. non-numeric HTTP_TIMEOUT)."""


class AuthExchangeError(LambdaInvokeActionError):
    """Raised when STS rejects the assume-role exchange."""


class TransportError(LambdaInvokeActionError):
    """Raised when the Invoke call could not be delivered or was rejected by the service."""


class FunctionExecutionError(LambdaInvokeActionError):
    """Raised when the invoked function itself reported an error and the run must fail."""
