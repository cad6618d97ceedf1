"""Unit tests for step input reading."""

from __future__ import annotations

import unittest

from lambda_invoke_action.errors import ConfigInputError
from lambda_invoke_action.inputs import (
    InputReader,
    get_bool_input,
    get_input,
    get_int_input,
    get_optional_input,
)


class GetInputTests(unittest.TestCase):
    def test_reads_uppercased_env_key(self):
        env = {"INPUT_FUNCTIONNAME": "demo"}
        self.assertEqual(get_input("FunctionName", env), "demo")

    def test_spaces_become_underscores(self):
        env = {"INPUT_MY_INPUT": "x"}
        self.assertEqual(get_input("my input", env), "x")

    def test_missing_is_empty_string(self):
        self.assertEqual(get_input("Payload", {}), "")

    def test_value_is_stripped(self):
        self.assertEqual(get_input("REGION", {"INPUT_REGION": "  us-east-1\n"}), "us-east-1")

    def test_optional_maps_empty_to_none(self):
        self.assertIsNone(get_optional_input("Payload", {"INPUT_PAYLOAD": ""}))
        self.assertIsNone(get_optional_input("Payload", {}))
        self.assertEqual(get_optional_input("Payload", {"INPUT_PAYLOAD": "{}"}), "{}")


class TypedInputTests(unittest.TestCase):
    def test_bool_is_case_insensitive(self):
        for raw in ("true", "TRUE", "True"):
            self.assertTrue(get_bool_input("X", {"INPUT_X": raw}))
        for raw in ("", "false", "yes", "1"):
            self.assertFalse(get_bool_input("X", {"INPUT_X": raw}))

    def test_int_absent_is_none(self):
        self.assertIsNone(get_int_input("HTTP_TIMEOUT", {}))

    def test_int_parses(self):
        self.assertEqual(get_int_input("MAX_RETRIES", {"INPUT_MAX_RETRIES": "3"}), 3)

    def test_int_rejects_non_numeric(self):
        with self.assertRaises(ConfigInputError) as ctx:
            get_int_input("HTTP_TIMEOUT", {"INPUT_HTTP_TIMEOUT": "abc"})
        self.assertIn("HTTP_TIMEOUT", str(ctx.exception))
        self.assertIn("abc", str(ctx.exception))


class InputReaderTests(unittest.TestCase):
    def test_from_values_uses_input_names(self):
        reader = InputReader.from_values({"FunctionName": "demo", "SUCCEED_ON_FUNCTION_FAILURE": "True"})
        self.assertEqual(reader.get("FunctionName"), "demo")
        self.assertTrue(reader.flag("SUCCEED_ON_FUNCTION_FAILURE"))
        self.assertIsNone(reader.optional("Qualifier"))
        self.assertIsNone(reader.integer("MAX_RETRIES"))


if __name__ == "__main__":
    unittest.main()
