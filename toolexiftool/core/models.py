"""
Data models for exiftool tag output
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union

from ..config.constants import (
    BINARY_MARKER, FAMILY_FILTER_PREFIX, FAMILY_FILTER_SUFFIX, FAMILY_SEPARATOR,
    TAG_DOCS_FAMILY_ALIASES, TAG_DOCS_URL
)


def _json_text(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(',', ':'))


@dataclass(frozen=True)
class TagValue:
    """A tag value: a plain string or a list of JSON values."""
    raw: Union[str, Tuple[Any, ...]]

    @classmethod
    def from_json(cls, value: Any) -> "TagValue":
        if isinstance(value, list):
            return cls(tuple(value))
        if isinstance(value, bool):
            return cls("true" if value else "false")
        if isinstance(value, (int, float)):
            return cls(_json_text(value))
        if isinstance(value, str):
            return cls(value)
        raise ValueError(f"unsupported tag value: {value!r}")

    @property
    def is_list(self) -> bool:
        return isinstance(self.raw, tuple)

    def to_string(self) -> str:
        if self.is_list:
            return " ".join(_json_text(v) for v in self.raw)
        return self.raw

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring test; `needle` must already be lowercase."""
        if self.is_list:
            return any(needle in _json_text(v).lower() for v in self.raw)
        return needle in self.raw.lower()

    def __str__(self) -> str:
        return self.to_string()


class TagKey(NamedTuple):
    """Identity of a tag across files."""
    short_name: str
    table: Tuple[str, str]


def split_table(table: str) -> Tuple[str, str]:
    """Split 'Family::Subfamily' at the first separator."""
    family, sep, subfamily = table.partition(FAMILY_SEPARATOR)
    if not sep:
        return table, ""
    return family, subfamily


def binary_size_kb(value: TagValue) -> Optional[float]:
    """Size in kilobytes for values like '(Binary data 1234 bytes, ...)'."""
    if value.is_list or BINARY_MARKER not in value.raw:
        return None
    digits = "".join(ch for ch in value.raw if ch.isascii() and ch.isdigit())
    if not digits:
        return None
    return int(digits) / 1024


@dataclass
class TagEntry:
    """A single metadata tag reported by exiftool."""
    name: str
    table: Tuple[str, str]
    val: TagValue
    short_name: str = ""
    instance: str = ""
    id: Optional[int] = None
    num: Optional[TagValue] = None
    index: Optional[int] = None
    binary_size_kb: Optional[float] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagEntry):
            return NotImplemented
        return (self.short_name == other.short_name
                and self.binary_size_kb == other.binary_size_kb
                and self.id == other.id
                and self.table == other.table
                and self.val == other.val
                and self.index == other.index)

    __hash__ = None

    @property
    def is_binary(self) -> bool:
        return self.binary_size_kb is not None

    def key(self) -> TagKey:
        return TagKey(self.short_name, self.table)

    def family(self) -> str:
        family, subfamily = self.table
        if not subfamily:
            return family
        return f"{family}{FAMILY_SEPARATOR}{subfamily}"

    def numerical_text(self) -> str:
        """Numerical value, falling back to the readable one."""
        return (self.num or self.val).to_string()

    def display_name(self, short: bool = False) -> str:
        return self.short_name if short else self.name

    def display_value(self, numerical: bool = False) -> str:
        if self.is_binary:
            return f"{self.binary_size_kb:.1f}Kb binary data; Can be extracted"
        if numerical and self.num is not None:
            return self.num.to_string()
        return self.val.to_string()

    def matches(self, text: str) -> bool:
        """
        Check the entry against a filter string.

        A filter wrapped in << >> only matches the tag family; anything else
        matches names and values.
        """
        needle = text.lower()
        if (len(needle) >= len(FAMILY_FILTER_PREFIX) + len(FAMILY_FILTER_SUFFIX)
                and needle.startswith(FAMILY_FILTER_PREFIX)
                and needle.endswith(FAMILY_FILTER_SUFFIX)):
            inner = needle[len(FAMILY_FILTER_PREFIX):-len(FAMILY_FILTER_SUFFIX)]
            return inner in self.family().lower()
        return (needle in self.name.lower()
                or needle in self.short_name.lower()
                or self.val.matches(needle)
                or (self.num is not None and self.num.matches(needle)))

    def describe(self) -> str:
        """Multi-line description used for clipboard export."""
        tag_id = f"{self.id} (0x{self.id:X})" if self.id is not None else "Unknown"
        lines = [
            f"Name: {self.name}",
            f"Short name: {self.short_name}",
            f"Tag ID: {tag_id}",
            f"Tag family: {self.family()}",
            f"Tag value: {self.val}",
            f"Tag numerical value: {self.numerical_text()}",
        ]
        if self.index is not None:
            lines.append(f"Tag index: {self.index}")
        return "\n".join(lines)

    def docs_url(self) -> str:
        family = self.table[0]
        return TAG_DOCS_URL.format(family=TAG_DOCS_FAMILY_ALIASES.get(family, family))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'short_name': self.short_name,
            'instance': self.instance,
            'id': self.id,
            'family': self.family(),
            'value': self.val.to_string(),
            'numerical_value': self.num.to_string() if self.num is not None else None,
            'index': self.index,
            'binary_size_kb': self.binary_size_kb,
        }


@dataclass
class FileTags:
    """All tags exiftool reported for one file."""
    file_name: str
    tag_entries: List[TagEntry] = field(default_factory=list)

    def as_mapping(self) -> Dict[TagKey, TagEntry]:
        return {entry.key(): entry for entry in self.tag_entries}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file_name': self.file_name,
            'tags': [entry.to_dict() for entry in self.tag_entries],
        }
