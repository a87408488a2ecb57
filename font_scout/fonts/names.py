"""Name-table values and their resolution to a single display string.

A name entry arrives in one of three shapes:

* :class:`PlainName` - a bare string;
* :class:`LocalizedName` - a mapping keyed by language or platform code
  (``{"en": "Roboto", "ja": "..."}``);
* :class:`RecordName` - the raw records of an sfnt ``name`` table, one per
  platform/encoding/language triple.

Fonts parsed from a binary always produce :class:`RecordName`; collaborators
that hand over already decoded names use :func:`name_table_from_mapping`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

__all__: Sequence[str] = (
    "NameRecordEntry",
    "PlainName",
    "LocalizedName",
    "RecordName",
    "NameValue",
    "NameTable",
    "clean_name_text",
    "classify_name_value",
    "name_table_from_records",
    "name_table_from_mapping",
    "lookup_name",
)

MICROSOFT_PLATFORM = 3
LANG_EN_US = 1033
PREFERRED_LANGUAGE_KEYS: Tuple[str, ...] = ("en", "en-US", "en-us", "1033", "0", "default")

_WHITESPACE_RE = re.compile(r"\s+")


def clean_name_text(text: str) -> Optional[str]:
    """Drop NUL bytes, collapse whitespace runs and trim. Empty text counts as absent."""
    cleaned = _WHITESPACE_RE.sub(" ", text.replace("\0", "")).strip()
    return cleaned or None


@dataclass(frozen=True, slots=True)
class NameRecordEntry:
    name_id: int
    platform_id: int
    language_id: int
    text: str


@dataclass(frozen=True, slots=True)
class PlainName:
    text: str

    def resolve(self) -> Optional[str]:
        return clean_name_text(self.text)


@dataclass(frozen=True, slots=True)
class LocalizedName:
    values: Mapping[str, Any]

    def resolve(self) -> Optional[str]:
        for key in PREFERRED_LANGUAGE_KEYS:
            value = self.values.get(key)
            text = clean_name_text(value) if isinstance(value, str) else None
            if text:
                return text
        for value in self.values.values():
            text = clean_name_text(value) if isinstance(value, str) else None
            if text:
                return text
        return None


@dataclass(frozen=True, slots=True)
class RecordName:
    records: Tuple[NameRecordEntry, ...]

    def resolve(self) -> Optional[str]:
        """Prefer the Windows English (or language-neutral) record, else the first one."""
        if not self.records:
            return None
        for record in self.records:
            if record.platform_id == MICROSOFT_PLATFORM and record.language_id in (LANG_EN_US, 0):
                text = clean_name_text(record.text)
                if text:
                    return text
        return clean_name_text(self.records[0].text)


NameValue = Union[PlainName, LocalizedName, RecordName]
NameTable = Dict[int, NameValue]


def classify_name_value(name_id: int, raw: Any) -> Optional[NameValue]:
    """Wrap a decoded name value in the matching tagged shape, None if unusable."""
    if isinstance(raw, str):
        return PlainName(raw)
    if isinstance(raw, Mapping):
        return LocalizedName({str(k): v for k, v in raw.items()})
    if isinstance(raw, (list, tuple)):
        records = []
        for item in raw:
            if not isinstance(item, Mapping):
                continue
            if int(item.get("nameID", item.get("name_id", name_id))) != name_id:
                continue
            text = item.get("text")
            if not isinstance(text, str):
                continue
            records.append(
                NameRecordEntry(
                    name_id=name_id,
                    platform_id=int(item.get("platformID", item.get("platform_id", -1))),
                    language_id=int(item.get("languageID", item.get("language_id", -1))),
                    text=text,
                )
            )
        return RecordName(tuple(records))
    return None


def name_table_from_records(records: Iterable[NameRecordEntry]) -> NameTable:
    """Group flat name records by nameID, keeping their original order."""
    grouped: Dict[int, list[NameRecordEntry]] = {}
    for record in records:
        grouped.setdefault(record.name_id, []).append(record)
    return {name_id: RecordName(tuple(items)) for name_id, items in grouped.items()}


def name_table_from_mapping(raw: Mapping[Any, Any]) -> NameTable:
    """Build a name table from ``{nameID: value}`` where each value has any supported shape.

    Keys that are not integers (``"fontFamily"`` and the like) are ignored.
    """
    table: NameTable = {}
    for key, value in raw.items():
        try:
            name_id = int(key)
        except (TypeError, ValueError):
            continue
        classified = classify_name_value(name_id, value)
        if classified is not None:
            table[name_id] = classified
    return table


def lookup_name(table: NameTable, *name_ids: int) -> Optional[str]:
    """Resolve the first of *name_ids* that yields non-empty text."""
    for name_id in name_ids:
        value = table.get(name_id)
        if value is None:
            continue
        text = value.resolve()
        if text:
            return text
    return None
