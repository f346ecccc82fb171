"""
Custom exceptions for toolexiftool with user-friendly error messages
"""

import functools
import subprocess
from typing import Optional, List, Dict, Any


class ToolExiftoolError(Exception):
    """Base exception class for toolexiftool with user-friendly messaging."""

    def __init__(self, message: str, details: Optional[str] = None, suggestions: Optional[List[str]] = None):
        """
        Initialize toolexiftool exception.

        Args:
            message: Main error message (user-friendly)
            details: Technical details for debugging
            suggestions: List of suggested solutions
        """
        self.message = message
        self.details = details
        self.suggestions = suggestions or []
        super().__init__(self.get_full_message())

    def get_full_message(self) -> str:
        """Get the complete error message with suggestions."""
        msg = self.message
        if self.details:
            msg += f"\n\nTechnical details: {self.details}"
        if self.suggestions:
            msg += f"\n\nSuggestions:\n" + "\n".join(f"  • {s}" for s in self.suggestions)
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions
        }


class ExiftoolNotFoundError(ToolExiftoolError):
    """Raised when the exiftool executable cannot be located."""

    def __init__(self, executable: Optional[str] = None, original_error: Optional[Exception] = None):
        if executable:
            message = f"Could not run exiftool at: {executable}"
        else:
            message = "Could not find the exiftool executable"
        details = str(original_error) if original_error else None
        suggestions = [
            "Install exiftool from https://exiftool.org/",
            "Make sure exiftool is on your PATH",
            "Point to the executable with --exiftool or TOOLEXIFTOOL_EXIFTOOL"
        ]
        super().__init__(message, details, suggestions)
        self.executable = executable


class ExiftoolExecutionError(ToolExiftoolError):
    """Raised when exiftool exits with an error and produces no output."""

    def __init__(self, command: List[str], returncode: int, stderr: str = ""):
        message = f"exiftool failed with exit code {returncode}"
        details = f"Command: {' '.join(command)}"
        if stderr:
            details += f"\n{stderr.strip()}"
        suggestions = [
            "Check that the given paths are readable",
            "Run the command above by hand to see the full exiftool output",
            "Use --verbose for more technical details"
        ]
        super().__init__(message, details, suggestions)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class OutputParseError(ToolExiftoolError):
    """Raised when exiftool output cannot be parsed."""

    def __init__(self, reason: str, original_error: Optional[Exception] = None):
        message = f"Could not parse exiftool output: {reason}"
        details = str(original_error) if original_error else None
        suggestions = [
            "Make sure a recent exiftool version is installed",
            "Check that exiftool supports JSON output (-j)",
            "Report this issue if it persists"
        ]
        super().__init__(message, details, suggestions)
        self.reason = reason


class PathNotFoundError(ToolExiftoolError):
    """Raised when an input path does not exist."""

    def __init__(self, path: str, original_error: Optional[Exception] = None):
        message = f"Could not find or access path: {path}"
        details = str(original_error) if original_error else None
        suggestions = [
            "Check that the path is correct",
            "Verify that the file or folder exists and is readable",
            "Try using an absolute path instead of a relative path"
        ]
        super().__init__(message, details, suggestions)
        self.path = path


class NoMetadataError(ToolExiftoolError):
    """Raised when exiftool returned no files for the given input."""

    def __init__(self, paths: List[str]):
        message = "exiftool did not return metadata for any file"
        details = f"Input: {', '.join(paths)}"
        suggestions = [
            "Check that the folders contain files",
            "Try reading folders recursively with --recursive"
        ]
        super().__init__(message, details, suggestions)
        self.paths = paths


class BinaryExtractionError(ToolExiftoolError):
    """Raised when binary tag data cannot be extracted."""

    def __init__(self, file_path: str, tag: str, original_error: Optional[Exception] = None):
        message = f"Failed to extract binary data of tag '{tag}' from {file_path}"
        details = str(original_error) if original_error else None
        suggestions = [
            "Check that the selected tag holds binary data",
            "Verify that the file is still readable"
        ]
        super().__init__(message, details, suggestions)
        self.file_path = file_path
        self.tag = tag


class BinarySaveError(ToolExiftoolError):
    """Raised when extracted binary data cannot be written."""

    def __init__(self, output_path: str, original_error: Optional[Exception] = None):
        message = f"Failed to save binary data to {output_path}"
        details = str(original_error) if original_error else None
        suggestions = [
            "Check that you have write permissions to the download directory",
            "Set TOOLEXIFTOOL_DOWNLOAD_DIR to a writable location",
            "Ensure there's enough disk space available"
        ]
        super().__init__(message, details, suggestions)
        self.output_path = output_path


class ClipboardError(ToolExiftoolError):
    """Raised when the clipboard cannot be written."""

    def __init__(self, original_error: Optional[Exception] = None):
        message = "Failed to set clipboard contents"
        details = str(original_error) if original_error else None
        suggestions = [
            "Make sure a clipboard is available in this session",
            "Use --print to dump the values instead"
        ]
        super().__init__(message, details, suggestions)


class ConfigurationError(ToolExiftoolError):
    """Raised when there's a configuration issue."""

    def __init__(self, setting: str, value: Any, expected: str):
        message = f"Invalid configuration for '{setting}': got '{value}', expected {expected}"
        suggestions = [
            f"Check the value for '{setting}' in your environment or command line",
            "Refer to the documentation for valid configuration options"
        ]
        super().__init__(message, None, suggestions)
        self.setting = setting
        self.value = value


def handle_exception_gracefully(func):
    """
    Decorator to handle exceptions gracefully and convert them to user-friendly messages.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ToolExiftoolError:
            raise
        except FileNotFoundError as e:
            path = e.filename or (args[0] if args else "unknown")
            raise PathNotFoundError(str(path), e)
        except PermissionError as e:
            path = e.filename or (args[0] if args else "unknown")
            raise PathNotFoundError(str(path), e)
        except subprocess.SubprocessError as e:
            raise ToolExiftoolError(
                f"exiftool could not be run from {func.__name__}",
                str(e),
                ["Try running the operation again", "Use --verbose for more technical details"]
            )
    return wrapper


def format_error_for_cli(error: Exception, verbose: bool = False) -> str:
    """
    Format an error for command-line display.

    Args:
        error: The exception to format
        verbose: Whether to include technical details

    Returns:
        Formatted error message
    """
    if isinstance(error, ToolExiftoolError):
        msg = f"❌ {error.message}"

        if verbose and error.details:
            msg += f"\n\n🔍 Technical details:\n{error.details}"

        if error.suggestions:
            msg += f"\n\n💡 Suggestions:"
            for suggestion in error.suggestions:
                msg += f"\n  • {suggestion}"

        return msg
    else:
        msg = f"❌ An unexpected error occurred: {str(error)}"
        if verbose:
            import traceback
            msg += f"\n\n🔍 Technical details:\n{traceback.format_exc()}"
        msg += f"\n\n💡 Suggestions:\n  • Try running the command again\n  • Check your input parameters\n  • Use --verbose for more details"
        return msg


def format_error_for_json(error: Exception) -> Dict[str, Any]:
    """
    Format an error for JSON output.

    Args:
        error: The exception to format

    Returns:
        Dictionary representation of the error
    """
    if isinstance(error, ToolExiftoolError):
        return error.to_dict()
    else:
        return {
            "error_type": "UnexpectedError",
            "message": str(error),
            "details": type(error).__name__,
            "suggestions": [
                "Try running the operation again",
                "Check the input parameters",
                "Report this issue if it persists"
            ]
        }
