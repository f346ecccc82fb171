"""
toolexiftool - graphical viewer for exiftool metadata
"""

from .config.constants import VERSION as __version__

from .core.models import FileTags, TagEntry, TagValue
from .core.processor import read_paths
from .cli import main

__all__ = ['main', 'read_paths', 'FileTags', 'TagEntry', 'TagValue']
