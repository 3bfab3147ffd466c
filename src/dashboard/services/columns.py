"""Column registry and generic record field access.

A table is described by a static, caller-supplied list of
``ColumnDescriptor`` objects. Descriptors are pure data: they name the field
key, header label, sortability, alignment and an optional render hook. The
engine never assumes a record schema; values are looked up by key through
``field_value`` so dict rows, dataclasses and plain objects all work.

The render hook only affects presentation (``ColumnDescriptor.display``);
sorting, filtering and pagination operate on raw field values.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

__all__ = [
    "Align",
    "ColumnDescriptor",
    "ColumnRegistry",
    "InvalidTableConfigError",
    "field_value",
    "record_fields",
    "status_tone",
]

_log = logging.getLogger(__name__)

RenderHook = Callable[[Any, Any], Any]


class InvalidTableConfigError(ValueError):
    """Raised when a table is configured with inconsistent metadata."""


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def field_value(record: Any, key: str) -> Any:
    """Return ``record[key]`` (mappings) or ``record.key`` (objects).

    Missing fields yield ``None``; this never raises.
    """
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def record_fields(record: Any) -> List[Tuple[str, Any]]:
    """List every (name, value) pair of a record, in declaration order.

    Handles mappings, dataclasses, namedtuples, ``__slots__`` classes and
    plain objects; anything else yields no fields.
    """
    if isinstance(record, Mapping):
        return list(record.items())
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return [(f.name, getattr(record, f.name, None)) for f in dataclasses.fields(record)]
    if isinstance(record, tuple) and hasattr(record, "_asdict"):
        return list(record._asdict().items())
    pairs = [
        (name, getattr(record, name))
        for name in _slot_names(type(record))
        if hasattr(record, name)
    ]
    try:
        attrs = vars(record)
    except TypeError:
        return pairs
    return pairs + [(k, v) for k, v in attrs.items() if not k.startswith("_")]


def _slot_names(cls: type) -> List[str]:
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if not s.startswith("_") and s not in names)
    return names


_SUCCESS_WORDS = ("active", "approved", "verified", "completed", "success")
_WARNING_WORDS = ("pending", "processing")
_DANGER_WORDS = ("rejected", "banned", "failed", "error")


def status_tone(value: Any) -> str:
    """Classify a status label into a badge tone.

    Returns one of ``success``, ``warning``, ``danger`` or ``neutral``.
    "inactive" is checked before the success keywords, so it renders neutral
    instead of matching "active" (the web dashboard painted it green).
    """
    if not isinstance(value, str):
        return "neutral"
    lowered = value.lower()
    # must precede the "active" keyword match
    if "inactive" in lowered:
        return "neutral"
    if any(w in lowered for w in _SUCCESS_WORDS):
        return "success"
    if any(w in lowered for w in _WARNING_WORDS):
        return "warning"
    if any(w in lowered for w in _DANGER_WORDS):
        return "danger"
    return "neutral"


@dataclass(frozen=True)
class ColumnDescriptor:
    key: str
    label: str
    sortable: bool = False
    align: Align = Align.LEFT
    width: Optional[str] = None
    render: Optional[RenderHook] = None

    @property
    def is_status(self) -> bool:
        return "status" in self.key.lower()

    def value(self, record: Any) -> Any:
        return field_value(record, self.key)

    def display(self, record: Any) -> Any:
        """Presentation value for a cell (render hook wins over defaults)."""
        raw = self.value(record)
        if self.render is not None:
            return self.render(raw, record)
        if raw is None:
            return ""
        return raw if isinstance(raw, str) else str(raw)

    def display_text(self, record: Any) -> str:
        shown = self.display(record)
        return "" if shown is None else str(shown)


class ColumnRegistry:
    """Ordered, immutable collection of column descriptors."""

    def __init__(self, columns: Iterable[ColumnDescriptor]):
        cols = tuple(columns)
        index: Dict[str, ColumnDescriptor] = {}
        for col in cols:
            if not col.key:
                _log.warning("Rejected column with empty key (label=%r)", col.label)
                raise InvalidTableConfigError("Column key must be a non-empty string")
            if col.key in index:
                _log.warning("Rejected duplicate column key %r", col.key)
                raise InvalidTableConfigError(f"Duplicate column key: {col.key!r}")
            index[col.key] = col
        self._columns = cols
        self._index = index

    def __iter__(self) -> Iterator[ColumnDescriptor]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __getitem__(self, position: int) -> ColumnDescriptor:
        return self._columns[position]

    def get(self, key: str) -> Optional[ColumnDescriptor]:
        return self._index.get(key)

    def keys(self) -> List[str]:
        return [c.key for c in self._columns]

    def labels(self) -> List[str]:
        return [c.label for c in self._columns]

    def is_sortable(self, key: str) -> bool:
        col = self._index.get(key)
        return bool(col and col.sortable)

    @classmethod
    def coerce(cls, columns: "ColumnRegistry | Iterable[ColumnDescriptor]") -> "ColumnRegistry":
        return columns if isinstance(columns, ColumnRegistry) else cls(columns)
