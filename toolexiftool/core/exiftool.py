"""
Thin wrapper around the exiftool executable
"""

import json
import logging
import subprocess
from typing import Any, Dict, List, Optional, Sequence

from .models import FileTags, TagEntry, TagValue, binary_size_kb, split_table
from .exceptions import (
    BinaryExtractionError, ExiftoolExecutionError, ExiftoolNotFoundError,
    OutputParseError
)
from ..config.constants import (
    EXIFTOOL_BINARY_ARG, EXIFTOOL_READ_ARGS, EXIFTOOL_RECURSIVE_ARG
)
from ..config.settings import find_exiftool

logger = logging.getLogger(__name__)


def get_exiftool_executable_path(explicit: Optional[str] = None) -> str:
    """
    Resolve the exiftool executable.

    Raises:
        ExiftoolNotFoundError: if no executable can be found
    """
    executable = find_exiftool(explicit)
    if executable is None:
        raise ExiftoolNotFoundError(explicit)
    return executable


def build_read_command(executable: str, paths: Sequence[str], recursive: bool = False) -> List[str]:
    command = [executable, *[str(p) for p in paths], *EXIFTOOL_READ_ARGS]
    if recursive:
        command.append(EXIFTOOL_RECURSIVE_ARG)
    return command


def _optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def parse_tag(key: str, obj: Dict[str, Any]) -> TagEntry:
    """
    Build a TagEntry from one '-j -l' tag object.

    Raises:
        KeyError, TypeError, ValueError: if required fields are missing or malformed
    """
    name = obj['desc']
    table = obj['table']
    if not isinstance(name, str) or not isinstance(table, str):
        raise TypeError("'desc' and 'table' must be strings")

    val = TagValue.from_json(obj['val'])
    num = obj.get('num')
    entry = TagEntry(
        name=name,
        table=split_table(table),
        val=val,
        id=_optional_int(obj.get('id')),
        num=TagValue.from_json(num) if num is not None else None,
        index=_optional_int(obj.get('index')),
        binary_size_kb=binary_size_kb(val),
    )

    instance, sep, short_name = key.partition(':')
    if sep:
        entry.instance = instance
        entry.short_name = short_name
    else:
        entry.short_name = key
    return entry


def read_entry(obj: Dict[str, Any]) -> FileTags:
    """Convert one per-file JSON object into FileTags."""
    result = FileTags(file_name="")
    for key, value in obj.items():
        if isinstance(value, str) and "SourceFile" in key:
            result.file_name = value
        if not isinstance(value, dict):
            continue
        try:
            result.tag_entries.append(parse_tag(key, value))
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Skipping malformed tag {key!r} in {result.file_name or '<unknown>'}: {e}")
    return result


def parse_output(payload: bytes) -> List[FileTags]:
    """
    Parse the JSON array exiftool prints with -j.

    Raises:
        OutputParseError: if the payload is not a JSON array of objects
    """
    try:
        data = json.loads(payload)
    except (ValueError, UnicodeDecodeError) as e:
        raise OutputParseError("invalid JSON", e)

    if not isinstance(data, list):
        raise OutputParseError(f"expected a JSON array, got {type(data).__name__}")

    results = []
    for item in data:
        if not isinstance(item, dict):
            raise OutputParseError(f"expected an object per file, got {type(item).__name__}")
        results.append(read_entry(item))
    return results


def run(paths: Sequence[str], recursive: bool = False, executable: Optional[str] = None) -> List[FileTags]:
    """
    Run exiftool over `paths` and return the parsed tags per file.

    Args:
        paths: Files and/or folders to read
        recursive: Whether exiftool should descend into sub-folders
        executable: Explicit exiftool path

    Returns:
        List of FileTags, in the order exiftool reported them
    """
    executable = get_exiftool_executable_path(executable)
    command = build_read_command(executable, paths, recursive)
    logger.debug(f"Running: {' '.join(command)}")

    try:
        completed = subprocess.run(command, capture_output=True, check=False)
    except OSError as e:
        raise ExiftoolNotFoundError(executable, e)

    stderr = completed.stderr.decode('utf-8', 'replace') if completed.stderr else ""
    for line in stderr.splitlines():
        if line.strip():
            logger.warning(f"exiftool: {line.strip()}")

    if not completed.stdout.strip():
        if completed.returncode != 0:
            raise ExiftoolExecutionError(command, completed.returncode, stderr)
        return []

    results = parse_output(completed.stdout)
    logger.info(f"Read {len(results)} file(s) with exiftool")
    return results


def extract_binary(file_path: str, entry: TagEntry, executable: Optional[str] = None) -> bytes:
    """
    Extract the raw bytes of a binary tag with `exiftool <file> -<tag> -b`.

    Raises:
        BinaryExtractionError: if the tag has no binary data or exiftool fails
    """
    if not entry.is_binary:
        raise BinaryExtractionError(file_path, entry.short_name, ValueError("tag holds no binary data"))

    executable = get_exiftool_executable_path(executable)
    command = [executable, str(file_path), f"-{entry.short_name}", EXIFTOOL_BINARY_ARG]
    logger.debug(f"Running: {' '.join(command)}")

    try:
        completed = subprocess.run(command, capture_output=True, check=False)
    except OSError as e:
        raise BinaryExtractionError(file_path, entry.short_name, e)

    if completed.returncode != 0 and not completed.stdout:
        stderr = completed.stderr.decode('utf-8', 'replace') if completed.stderr else ""
        raise BinaryExtractionError(file_path, entry.short_name,
                                    RuntimeError(stderr.strip() or f"exit code {completed.returncode}"))
    return completed.stdout
