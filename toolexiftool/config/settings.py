"""
Runtime settings resolved from the command line and the environment
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .constants import (
    DEFAULT_DOWNLOAD_SUBDIR, ENV_DOWNLOAD_DIR, ENV_EXIFTOOL, ENV_MAX_WORKERS,
    EXIFTOOL_DEFAULT_EXECUTABLE
)
from ..core.exceptions import ConfigurationError


@dataclass
class Settings:
    """Resolved runtime settings."""
    exiftool: Optional[str] = None
    download_dir: Path = Path.home() / DEFAULT_DOWNLOAD_SUBDIR
    max_workers: Optional[int] = None

    @classmethod
    def load(cls, exiftool: Optional[str] = None,
             environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings, letting explicit arguments win over the environment.

        Raises:
            ConfigurationError: if an environment value is invalid
        """
        if environ is None:
            environ = os.environ

        settings = cls()
        settings.exiftool = exiftool or environ.get(ENV_EXIFTOOL) or None

        download_dir = environ.get(ENV_DOWNLOAD_DIR)
        if download_dir:
            path = Path(download_dir).expanduser()
            if path.exists() and not path.is_dir():
                raise ConfigurationError(ENV_DOWNLOAD_DIR, download_dir, "a directory")
            settings.download_dir = path

        max_workers = environ.get(ENV_MAX_WORKERS)
        if max_workers:
            try:
                settings.max_workers = int(max_workers)
            except ValueError:
                raise ConfigurationError(ENV_MAX_WORKERS, max_workers, "a positive integer")
            if settings.max_workers < 1:
                raise ConfigurationError(ENV_MAX_WORKERS, max_workers, "a positive integer")

        return settings


def find_exiftool(explicit: Optional[str] = None,
                  environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Locate exiftool: explicit path, then environment, then PATH."""
    if environ is None:
        environ = os.environ
    candidate = explicit or environ.get(ENV_EXIFTOOL)
    if candidate:
        return shutil.which(candidate) or (candidate if os.path.isfile(candidate) else None)
    return shutil.which(EXIFTOOL_DEFAULT_EXECUTABLE)
