"""Tests for the command-line entry point."""

from __future__ import annotations

import json
import unittest
from unittest.mock import patch

from lambda_invoke_action import __main__ as entry


class MainTests(unittest.TestCase):
    def test_parser_defaults(self):
        args = entry.build_parser().parse_args([])
        self.assertFalse(args.dry_run)
        self.assertIsNone(args.log_level)

    @patch.dict("os.environ", {"INPUT_FUNCTIONNAME": "demo", "INPUT_PAYLOAD": '{"a": 1}', "INPUT_MAX_RETRIES": "2"}, clear=True)
    @patch("lambda_invoke_action.__main__.run")
    def test_dry_run_prints_redacted_request(self, mock_run):
        with patch("sys.stdout") as stdout:
            code = entry.main(["--dry-run"])
        self.assertEqual(code, 0)
        mock_run.assert_not_called()
        written = "".join(call.args[0] for call in stdout.write.call_args_list)
        self.assertTrue(written.startswith("[DRY-RUN] "))
        summary = json.loads(written[len("[DRY-RUN] "):])
        self.assertEqual(summary["request"], {"FunctionName": "demo", "Payload": "<8 chars>"})
        self.assertEqual(summary["max_retries"], 2)

    @patch.dict("os.environ", {"INPUT_HTTP_TIMEOUT": "abc"}, clear=True)
    def test_dry_run_reports_bad_input(self):
        with patch("sys.stdout"):
            self.assertEqual(entry.main(["--dry-run"]), 1)

    @patch.dict("os.environ", {}, clear=True)
    @patch("lambda_invoke_action.__main__.run")
    def test_exit_code_follows_failure_signal(self, mock_run):
        mock_run.side_effect = lambda reader, writer: writer.set_failed("boom")
        with patch("sys.stdout"):
            self.assertEqual(entry.main([]), 1)

    @patch.dict("os.environ", {}, clear=True)
    @patch("lambda_invoke_action.__main__.run")
    def test_exit_code_zero_on_success(self, mock_run):
        self.assertEqual(entry.main([]), 0)
        mock_run.assert_called_once()


if __name__ == "__main__":
    unittest.main()
