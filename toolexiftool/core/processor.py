"""
Core reading logic: validate input paths and collect tags with exiftool
"""

import os
import logging
import concurrent.futures
from typing import Dict, List, Any, Optional, Sequence

import tqdm

from . import exiftool
from .models import FileTags
from .exceptions import NoMetadataError, PathNotFoundError, handle_exception_gracefully

logger = logging.getLogger(__name__)


def normalize_paths(paths: Sequence[str]) -> List[str]:
    """
    Validate input paths, keeping them as given.

    Raises:
        PathNotFoundError: for the first path that does not exist
    """
    result = []
    for path in paths:
        path = os.path.normpath(str(path))
        if not os.path.exists(path):
            raise PathNotFoundError(path)
        result.append(path)
    return result


def is_single_file(paths: Sequence[str]) -> bool:
    """True when the input is exactly one regular file."""
    return len(paths) == 1 and not os.path.isdir(paths[0])


def needs_recursion_prompt(paths: Sequence[str]) -> bool:
    """True when any folder argument contains a sub-folder."""
    for path in paths:
        if not os.path.isdir(path):
            continue
        try:
            with os.scandir(path) as it:
                if any(entry.is_dir() for entry in it):
                    return True
        except OSError as e:
            logger.warning(f"Could not list {path}: {e}")
    return False


@handle_exception_gracefully
def read_paths(paths: Sequence[str], options: Optional[Dict[str, Any]] = None) -> List[FileTags]:
    """
    Read the tags of all files behind `paths`.

    Args:
        paths: Files and/or folders, in the order given on the command line
        options: Dictionary of reading options (recursive, max_workers,
            show_progress, exiftool)

    Returns:
        List of FileTags in input order
    """
    if options is None:
        options = {}

    paths = normalize_paths(paths)
    recursive = options.get('recursive', False)
    executable = options.get('exiftool')

    if len(paths) <= 1:
        results = exiftool.run(paths, recursive, executable)
    else:
        results = _read_parallel(paths, recursive, executable, options)

    if not results:
        raise NoMetadataError(list(paths))
    return results


def _read_parallel(paths: List[str], recursive: bool, executable: Optional[str],
                   options: Dict[str, Any]) -> List[FileTags]:
    """Run one exiftool process per input path, keeping input order."""
    max_workers = options.get('max_workers') or min(32, (os.cpu_count() or 1) + 4)
    per_path: List[List[FileTags]] = [[] for _ in paths]

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_index = {
            executor.submit(exiftool.run, [path], recursive, executable): i
            for i, path in enumerate(paths)
        }

        if options.get('show_progress', True):
            with tqdm.tqdm(total=len(paths), desc="Reading metadata", unit="path") as pbar:
                for future in concurrent.futures.as_completed(future_to_index):
                    per_path[future_to_index[future]] = future.result()
                    pbar.update(1)
        else:
            for future in concurrent.futures.as_completed(future_to_index):
                per_path[future_to_index[future]] = future.result()

    return [tags for chunk in per_path for tags in chunk]
