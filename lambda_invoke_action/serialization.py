"""serialization.py — Lambda Invoke response to output conversion."""
from __future__ import annotations

import base64
import binascii
import datetime as dt
import json
from typing import Any, Dict, Optional, Tuple

__all__ = [
    "decode_log_result",
    "dump_output",
    "response_to_output",
]

# Fields of the Invoke response worth recording; ResponseMetadata is transport noise.
RESPONSE_FIELDS = ("StatusCode", "FunctionError", "LogResult", "ExecutedVersion", "Payload")


def _read_payload(payload: Any) -> Tuple[str, Optional[str]]:
    """Return the payload text and, when it is not UTF-8, the encoding used for it."""
    if payload is None:
        return "", None
    if hasattr(payload, "read"):
        payload = payload.read()
    if isinstance(payload, (bytes, bytearray)):
        try:
            return bytes(payload).decode("utf-8"), None
        except UnicodeDecodeError:
            return base64.b64encode(bytes(payload)).decode("ascii"), "base64"
    return str(payload), None


def response_to_output(response: Dict[str, Any]) -> Dict[str, Any]:
    """Return the recordable part of an Invoke response with Payload as text.

    A payload that is not valid UTF-8 is recorded base64-encoded with
    ``PayloadEncoding: "base64"`` alongside it.
    """
    out: Dict[str, Any] = {}
    for key in RESPONSE_FIELDS:
        if key not in response:
            continue
        value = response[key]
        if key != "Payload":
            out[key] = value
            continue
        text, encoding = _read_payload(value)
        out[key] = text
        if encoding:
            out["PayloadEncoding"] = encoding
    return out


def decode_log_result(log_result: Optional[str]) -> str:
    """Decode the base64 log tail returned when LogType=Tail."""
    if not log_result:
        return ""
    try:
        return base64.b64decode(log_result).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError):
        return ""


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (dt.datetime, dt.date)):
        return obj.isoformat()
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).decode("utf-8", errors="replace")
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dump_output(value: Any) -> str:
    return json.dumps(value, default=_json_default)
