"""
Base class for headless tag reports
"""

import abc
import logging
from typing import Any, Dict, List, Optional, Sequence

from ..core.compare import CompareRow, build_compare_rows, visible_rows
from ..core.exceptions import ToolExiftoolError
from ..core.models import FileTags, TagEntry

logger = logging.getLogger(__name__)


class BaseReporter(abc.ABC):
    """
    Render FileTags without the GUI.

    Options understood by every reporter:
        filter: filter string, same syntax as the viewer (<<Family>> for families)
        short: use short tag names
        numerical: prefer numerical values
        only_diff: comparison only lists differing rows
    """

    @abc.abstractmethod
    def generate_report(self, files: Sequence[FileTags], options: Optional[Dict[str, Any]] = None) -> str:
        """Render the tags of each file."""

    @abc.abstractmethod
    def generate_comparison(self, files: Sequence[FileTags], rows: Sequence[CompareRow],
                            options: Optional[Dict[str, Any]] = None) -> str:
        """Render the side-by-side comparison of `files`."""

    @staticmethod
    def filtered_entries(tags: FileTags, options: Dict[str, Any]) -> List[TagEntry]:
        text = options.get('filter') or ""
        return [e for e in tags.tag_entries if not text or e.matches(text)]

    @staticmethod
    def comparison_rows(files: Sequence[FileTags], options: Dict[str, Any]) -> List[CompareRow]:
        rows = build_compare_rows(files)
        return visible_rows(rows, options.get('filter') or "", bool(options.get('only_diff')))

    def write_report(self, files: Sequence[FileTags], output_file: Optional[str] = None,
                     options: Optional[Dict[str, Any]] = None, compare: bool = False) -> None:
        """Write a tag or comparison report to `output_file` or stdout."""
        options = options or {}
        if compare:
            output = self.generate_comparison(files, self.comparison_rows(files, options), options)
        else:
            output = self.generate_report(files, options)

        if output_file:
            try:
                with open(output_file, 'w', encoding='utf-8', newline='') as f:
                    f.write(output)
            except OSError as e:
                raise ToolExiftoolError(
                    f"Failed to write report to {output_file}",
                    str(e),
                    ["Check that you have write permissions to the output directory",
                     "Try a different output location"]
                )
            logger.info(f"Report written to {output_file}")
            print(f"Report written to {output_file}")
        else:
            print(output)
