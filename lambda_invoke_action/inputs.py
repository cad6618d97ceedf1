"""inputs.py — Step input reading.

GitHub Actions exposes each ``with:`` input as an ``INPUT_<NAME>`` environment
variable (name upper-cased, spaces replaced by underscores). A missing input
and an input supplied as an empty string are indistinguishable there, so
``get_input`` returns ``""`` for both and ``get_optional_input`` maps both to
``None``.
"""
from __future__ import annotations

import os
from typing import Mapping, Optional

from .errors import ConfigInputError

__all__ = [
    "InputReader",
    "get_bool_input",
    "get_input",
    "get_int_input",
    "get_optional_input",
]


def _env_key(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the input value, or ``""`` when it is absent."""
    env = os.environ if environ is None else environ
    return str(env.get(_env_key(name)) or "").strip()


def get_optional_input(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    value = get_input(name, environ)
    return value or None


def get_bool_input(name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    return get_input(name, environ).lower() == "true"


def get_int_input(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Parse an integer input; ``None`` when absent, ConfigInputError when malformed."""
    raw = get_input(name, environ)
    if not raw:
        return None
    try:
        return int(raw, 10)
    except ValueError:
        raise ConfigInputError(f"Input {name} must be an integer, got {raw!r}") from None


class InputReader:
    """Read-only view over the pipeline variable store.

    Defaults to the process environment; tests pass a plain dict keyed by
    ``INPUT_*`` names.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    @classmethod
    def from_values(cls, values: Mapping[str, str]) -> "InputReader":
        """Build a reader from input names rather than ``INPUT_*`` keys."""
        return cls({_env_key(name): value for name, value in values.items()})

    def get(self, name: str) -> str:
        return get_input(name, self._environ)

    def optional(self, name: str) -> Optional[str]:
        return get_optional_input(name, self._environ)

    def flag(self, name: str) -> bool:
        return get_bool_input(name, self._environ)

    def integer(self, name: str) -> Optional[int]:
        return get_int_input(name, self._environ)
