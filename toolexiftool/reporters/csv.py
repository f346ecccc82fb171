"""
CSV reports
"""

import csv
import io
from typing import Any, Dict, Optional, Sequence

from .base import BaseReporter
from ..core.compare import CompareRow
from ..core.models import FileTags

TAG_COLUMNS = ['file_name', 'family', 'short_name', 'name', 'id', 'value', 'numerical_value', 'index']


class CSVReporter(BaseReporter):
    """One row per tag, or one row per compared tag with a column per file."""

    def generate_report(self, files: Sequence[FileTags], options: Optional[Dict[str, Any]] = None) -> str:
        options = options or {}
        numerical = bool(options.get('numerical'))
        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow(TAG_COLUMNS)
        for tags in files:
            for e in self.filtered_entries(tags, options):
                writer.writerow([
                    tags.file_name, e.family(), e.short_name, e.name,
                    '' if e.id is None else e.id,
                    e.display_value(numerical),
                    '' if e.num is None else e.num.to_string(),
                    '' if e.index is None else e.index,
                ])
        return out.getvalue()

    def generate_comparison(self, files: Sequence[FileTags], rows: Sequence[CompareRow],
                            options: Optional[Dict[str, Any]] = None) -> str:
        options = options or {}
        short, numerical = bool(options.get('short')), bool(options.get('numerical'))
        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow(['family', 'tag'] + [f.file_name for f in files])
        for row in rows:
            writer.writerow(
                [row.main.family(), row.main.display_name(short)]
                + [v.display_value(numerical) if v is not None else '' for v in row.values]
            )
        return out.getvalue()
