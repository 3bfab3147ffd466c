"""Row selection for the currently visible page.

Selection is a set of indices relative to the visible page slice, not to a
stable record identity. Owners must call ``clear()`` whenever the page's
membership changes (sort, search, paging, new data); ``resolve`` drops
indices that no longer map to a row so stale entries never leak out.
``toggle`` ignores indices outside the visible page.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Set, TypeVar

__all__ = ["SelectionManager"]

T = TypeVar("T")

SelectionListener = Callable[[List[int]], None]


class SelectionManager:
    def __init__(self, on_change: Optional[SelectionListener] = None) -> None:
        self._selected: Set[int] = set()
        self._on_change = on_change

    # Mutation ---------------------------------------------------------
    def toggle(self, index: int, visible_count: int) -> None:
        if not 0 <= index < visible_count:
            return
        if index in self._selected:
            self._selected.discard(index)
        else:
            self._selected.add(index)
        self._notify()

    def select_all(self, flag: bool, visible_count: int) -> None:
        target = set(range(visible_count)) if flag else set()
        if target == self._selected:
            return
        self._selected = target
        self._notify()

    def clear(self) -> bool:
        """Empty the selection; returns True if anything was selected."""
        if not self._selected:
            return False
        self._selected.clear()
        self._notify()
        return True

    # Query ------------------------------------------------------------
    def indices(self) -> List[int]:
        return sorted(self._selected)

    @property
    def count(self) -> int:
        return len(self._selected)

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    def all_selected(self, visible_count: int) -> bool:
        return visible_count > 0 and self._selected == set(range(visible_count))

    def resolve(self, visible: Sequence[T]) -> List[T]:
        return [visible[i] for i in self.indices() if i < len(visible)]

    # Internal ---------------------------------------------------------
    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.indices())
