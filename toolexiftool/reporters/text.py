"""
Plain-text reports rendered with tabulate
"""

import os
from typing import Any, Dict, Optional, Sequence

from colorama import Fore, Style
from tabulate import tabulate

from .base import BaseReporter
from ..core.compare import CompareRow, row_differs
from ..core.models import FileTags


class TextReporter(BaseReporter):
    """Tables for terminals; differing comparison rows are highlighted when colour is on."""

    def __init__(self, color: bool = False, tablefmt: str = "simple"):
        self.color = color
        self.tablefmt = tablefmt

    def _headers(self, options: Dict[str, Any]):
        tag = "Tag [Short]" if options.get('short') else "Tag [Detailed]"
        value = "Value [Numerical]" if options.get('numerical') else "Value [Readable]"
        return tag, value

    def generate_report(self, files: Sequence[FileTags], options: Optional[Dict[str, Any]] = None) -> str:
        options = options or {}
        if not files:
            return "No files to report."

        short, numerical = bool(options.get('short')), bool(options.get('numerical'))
        tag_header, value_header = self._headers(options)
        parts = []
        for i, tags in enumerate(files):
            if i > 0:
                parts.append("=" * 70)
            title = f"File: {tags.file_name}"
            parts.append(f"{Fore.CYAN}{title}{Style.RESET_ALL}" if self.color else title)

            entries = self.filtered_entries(tags, options)
            if not entries:
                parts.append("  No matching tags.")
                continue
            table = [
                [e.family(), e.display_name(short), e.display_value(numerical)]
                for e in entries
            ]
            parts.append(tabulate(table, headers=["Family", tag_header, value_header],
                                  tablefmt=self.tablefmt))
        return "\n".join(parts)

    def generate_comparison(self, files: Sequence[FileTags], rows: Sequence[CompareRow],
                            options: Optional[Dict[str, Any]] = None) -> str:
        options = options or {}
        if not files:
            return "No files to compare."

        short, numerical = bool(options.get('short')), bool(options.get('numerical'))
        tag_header, _ = self._headers(options)
        headers = [tag_header] + [os.path.basename(str(f.file_name)) for f in files]

        table = []
        for row in rows:
            cells = [row.main.display_name(short)]
            cells += [v.display_value(numerical) if v is not None else "" for v in row.values]
            if self.color and row_differs(row.values):
                cells = [f"{Fore.YELLOW}{c}{Style.RESET_ALL}" for c in cells]
            table.append(cells)

        parts = ["File Metadata Comparison Report", "=" * 60]
        for i, f in enumerate(files):
            parts.append(f"File {i + 1}: {f.file_name}")
        parts.append("")
        if table:
            parts.append(tabulate(table, headers=headers, tablefmt=self.tablefmt))
        else:
            parts.append("No matching tags.")
        return "\n".join(parts)
