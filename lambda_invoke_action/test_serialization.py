"""Unit tests for Invoke response conversion."""

from __future__ import annotations

import base64
import datetime as dt
import io

from botocore.response import StreamingBody

from lambda_invoke_action.serialization import decode_log_result, dump_output, response_to_output


def test_response_to_output_drops_metadata_and_reads_payload():
    body = b'{"statusCode": 200}'
    raw = {
        "ResponseMetadata": {"RequestId": "abc"},
        "StatusCode": 200,
        "ExecutedVersion": "7",
        "Payload": StreamingBody(io.BytesIO(body), len(body)),
    }
    assert response_to_output(raw) == {
        "StatusCode": 200,
        "ExecutedVersion": "7",
        "Payload": '{"statusCode": 200}',
    }


def test_response_to_output_keeps_function_error():
    out = response_to_output({"StatusCode": 200, "FunctionError": "Unhandled", "Payload": b"x"})
    assert out["FunctionError"] == "Unhandled"
    assert out["Payload"] == "x"


def test_async_invoke_has_empty_payload():
    out = response_to_output({"StatusCode": 202, "Payload": StreamingBody(io.BytesIO(b""), 0)})
    assert out == {"StatusCode": 202, "Payload": ""}


def test_decode_log_result():
    encoded = base64.b64encode(b"REPORT Duration: 1 ms").decode()
    assert decode_log_result(encoded) == "REPORT Duration: 1 ms"
    assert decode_log_result(None) == ""
    assert decode_log_result("not base64!!") == ""


def test_dump_output_handles_datetimes():
    text = dump_output({"at": dt.datetime(2026, 1, 2, 3, 4, 5)})
    assert text == '{"at": "2026-01-02T03:04:05"}'


def test_non_utf8_payload_is_base64_encoded():
    raw = b"\xff\xfe\x00binary"
    out = response_to_output({"StatusCode": 200, "Payload": StreamingBody(io.BytesIO(raw), len(raw))})
    assert out["PayloadEncoding"] == "base64"
    assert base64.b64decode(out["Payload"]) == raw


def test_utf8_payload_has_no_encoding_marker():
    out = response_to_output({"Payload": "héllo".encode("utf-8")})
    assert out == {"Payload": "héllo"}
