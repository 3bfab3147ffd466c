"""Single-column sort engine for tabular view models.

Orders records by one field according to a ``SortDirective``. The order is
total and consistent so it can be re-applied on every recomputation without
visibly reshuffling rows:

 - ``None`` equals ``None`` and sorts before any defined value (ascending);
   descending negates the whole comparison so nulls move to the end.
 - Strings use a locale-aware collation key (accent- and case-insensitive
   first, then accents, then case with lowercase first) instead of code
   point order.
 - Everything else uses the natural ``<`` / ``>`` operators. Values that do
   not support ordering against each other fall back to type name, then text.

Python's sort is stable, so equal rows keep their input order in both
directions.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Any, Iterable, List, Optional, Tuple, TypeVar

from .columns import field_value

__all__ = [
    "SortDirection",
    "SortDirective",
    "collation_key",
    "compare_values",
    "next_directive",
    "sort_records",
]

T = TypeVar("T")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class SortDirective:
    key: str
    direction: SortDirection = SortDirection.ASC

    @property
    def ascending(self) -> bool:
        return self.direction is SortDirection.ASC

    def reversed(self) -> "SortDirective":
        return SortDirective(self.key, self.direction.flipped())


def collation_key(text: str) -> Tuple[str, str, str]:
    """Sort key approximating a locale collation for mixed-case accented text."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return (base, text.casefold(), text.swapcase())


def _cmp(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def compare_values(a: Any, b: Any) -> int:
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    if isinstance(a, str) and isinstance(b, str):
        return _cmp(collation_key(a), collation_key(b))
    try:
        return _cmp(a, b)
    except TypeError:
        # Heterogeneous column: group by type, then compare text
        return _cmp((type(a).__name__, str(a)), (type(b).__name__, str(b)))


def sort_records(records: Iterable[T], directive: Optional[SortDirective]) -> List[T]:
    """Return a new list ordered by ``directive`` (source order when None)."""
    rows = list(records)
    if directive is None:
        return rows
    key = directive.key
    sign = 1 if directive.ascending else -1

    def _compare(left: T, right: T) -> int:
        return sign * compare_values(field_value(left, key), field_value(right, key))

    rows.sort(key=cmp_to_key(_compare))
    return rows


def next_directive(current: Optional[SortDirective], key: str) -> SortDirective:
    """Directive after a header click on column ``key``.

    A new column starts ascending; clicking the active column toggles the
    direction. Clicking never returns to source order.
    """
    if current is not None and current.key == key:
        return current.reversed()
    return SortDirective(key, SortDirection.ASC)
