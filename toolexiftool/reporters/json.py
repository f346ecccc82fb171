"""
JSON reports
"""

import json
from typing import Any, Dict, Optional, Sequence

from .base import BaseReporter
from ..core.compare import CompareRow, row_differs
from ..core.models import FileTags


class JSONReporter(BaseReporter):

    def __init__(self, indent: int = 2):
        self.indent = indent

    def generate_report(self, files: Sequence[FileTags], options: Optional[Dict[str, Any]] = None) -> str:
        options = options or {}
        data = {
            'files': [
                {
                    'file_name': tags.file_name,
                    'tags': [e.to_dict() for e in self.filtered_entries(tags, options)],
                }
                for tags in files
            ]
        }
        return json.dumps(data, indent=self.indent, ensure_ascii=False, default=str)

    def generate_comparison(self, files: Sequence[FileTags], rows: Sequence[CompareRow],
                            options: Optional[Dict[str, Any]] = None) -> str:
        numerical = bool((options or {}).get('numerical'))
        data = {
            'files': [f.file_name for f in files],
            'rows': [
                {
                    'short_name': row.main.short_name,
                    'name': row.main.name,
                    'family': row.main.family(),
                    'differs': row_differs(row.values),
                    'values': [v.display_value(numerical) if v is not None else None for v in row.values],
                }
                for row in rows
            ],
        }
        return json.dumps(data, indent=self.indent, ensure_ascii=False, default=str)
