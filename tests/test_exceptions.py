"""
Tests for error types and formatting
"""

import subprocess
import sys
import unittest
from pathlib import Path

# Add the project root to Python path for development testing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from toolexiftool.core.exceptions import (
    ExiftoolExecutionError, ExiftoolNotFoundError, PathNotFoundError, ToolExiftoolError,
    format_error_for_cli, format_error_for_json, handle_exception_gracefully
)


class TestToolExiftoolError(unittest.TestCase):

    def test_full_message(self):
        error = ToolExiftoolError("Main message", "Some details", ["First", "Second"])
        message = error.get_full_message()
        self.assertTrue(message.startswith("Main message"))
        self.assertIn("Technical details: Some details", message)
        self.assertIn("  • Second", message)
        self.assertEqual(str(error), message)

    def test_to_dict(self):
        data = ExiftoolNotFoundError().to_dict()
        self.assertEqual(data['error_type'], "ExiftoolNotFoundError")
        self.assertEqual(data['message'], "Could not find the exiftool executable")
        self.assertIsNone(data['details'])
        self.assertTrue(data['suggestions'])

    def test_execution_error_details(self):
        error = ExiftoolExecutionError(["exiftool", "a.jpg"], 2, "Error: boom\n")
        self.assertIn("exit code 2", error.message)
        self.assertIn("Command: exiftool a.jpg", error.details)
        self.assertIn("Error: boom", error.details)


class TestFormatting(unittest.TestCase):

    def test_cli_format(self):
        error = PathNotFoundError("missing.jpg", FileNotFoundError("nope"))
        brief = format_error_for_cli(error)
        self.assertIn("❌ Could not find or access path: missing.jpg", brief)
        self.assertIn("💡 Suggestions:", brief)
        self.assertNotIn("nope", brief)
        self.assertIn("nope", format_error_for_cli(error, verbose=True))

    def test_cli_format_unexpected(self):
        self.assertIn("An unexpected error occurred: boom", format_error_for_cli(ValueError("boom")))

    def test_json_format(self):
        self.assertEqual(format_error_for_json(ValueError("boom"))['error_type'], "UnexpectedError")
        self.assertEqual(format_error_for_json(PathNotFoundError("x"))['error_type'], "PathNotFoundError")


class TestDecorator(unittest.TestCase):

    def test_passes_results_through(self):
        self.assertEqual(handle_exception_gracefully(lambda x: x * 2)(3), 6)

    def test_converts_os_errors(self):
        @handle_exception_gracefully
        def read(path):
            raise FileNotFoundError(2, "No such file", path)

        with self.assertRaises(PathNotFoundError) as ctx:
            read("gone.jpg")
        self.assertEqual(ctx.exception.path, "gone.jpg")

    def test_converts_subprocess_errors(self):
        @handle_exception_gracefully
        def run():
            raise subprocess.TimeoutExpired(["exiftool"], 5)

        with self.assertRaises(ToolExiftoolError):
            run()

    def test_keeps_own_errors(self):
        @handle_exception_gracefully
        def run():
            raise ExiftoolNotFoundError("/opt/exiftool")

        with self.assertRaises(ExiftoolNotFoundError):
            run()


if __name__ == '__main__':
    unittest.main()
