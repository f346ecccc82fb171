"""
Side-by-side comparison of tags across files
"""

from typing import Dict, List, NamedTuple, Optional, Sequence

from .models import FileTags, TagEntry, TagKey


class CompareRow(NamedTuple):
    """One tag across all files; `values` holds None where a file lacks it."""
    main: TagEntry
    values: List[Optional[TagEntry]]


def build_compare_rows(files: Sequence[FileTags]) -> List[CompareRow]:
    """Union of tag keys over all files, in first-seen order."""
    mappings = [f.as_mapping() for f in files]
    keys: Dict[TagKey, None] = {}
    for mapping in mappings:
        for key in mapping:
            keys.setdefault(key, None)

    rows = []
    for key in keys:
        values = [mapping.get(key) for mapping in mappings]
        main = next(v for v in values if v is not None)
        rows.append(CompareRow(main, values))
    return rows


def row_differs(values: Sequence[Optional[TagEntry]]) -> bool:
    if not values:
        return False
    first = values[0]
    for value in values:
        if first is None or value is None:
            if first is not value:
                return True
        elif value != first:
            return True
    return False


def row_matches(values: Sequence[Optional[TagEntry]], text: str) -> bool:
    if not text:
        return True
    return any(v is not None and v.matches(text) for v in values)


def visible_rows(rows: Sequence[CompareRow], text: str, only_diff: bool) -> List[CompareRow]:
    return [
        row for row in rows
        if row_matches(row.values, text) and (not only_diff or row_differs(row.values))
    ]
