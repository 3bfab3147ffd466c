"""Free-text search over table records.

A record is kept when any of its scalar fields contains the search term
(case-insensitive). Every field of the record participates, not only the
declared columns. Non-scalar values (None, lists, dicts, nested objects)
are skipped. Filtering only removes rows; it never reorders them.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, TypeVar

from .columns import record_fields

__all__ = ["filter_records", "normalize_term", "record_matches", "scalar_text"]

T = TypeVar("T")


def normalize_term(term: str | None) -> str:
    if not term or not term.strip():
        return ""
    return term.casefold()


def scalar_text(value: Any) -> Optional[str]:
    """Text form of a scalar field, or None when the value is not searchable."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return None


def record_matches(record: Any, needle: str) -> bool:
    """``needle`` must already be normalized."""
    for _name, value in record_fields(record):
        text = scalar_text(value)
        if text is not None and needle in text.casefold():
            return True
    return False


def filter_records(records: Iterable[T], term: str | None) -> List[T]:
    needle = normalize_term(term)
    if not needle:
        return list(records)
    return [r for r in records if record_matches(r, needle)]
