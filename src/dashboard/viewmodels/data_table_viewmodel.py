"""ViewModel behind every entity table (users, suppliers, orders, ...).

Owns the directive state of one rendered table (sort directive, search term,
current page, selection) and re-derives the visible page synchronously on
every transition::

    records -> sorted -> filtered -> page slice

Transitions:
 - ``sort_by`` / ``reset_sort``: re-sort, re-filter, back to page 1, clear selection
 - ``set_search_term``: re-filter the sorted rows, back to page 1, clear selection
 - ``go_to_page`` / ``next_page`` / ``previous_page``: clamp, re-slice, clear selection
 - ``toggle_row`` / ``select_all`` / ``clear_selection``: selection only
 - ``set_records``: new data from the source; everything recomputed, page clamped

Selection indices are relative to the visible page, so any transition that
changes page membership clears them. Consumers only ever receive resolved
records through ``on_selection_change``.

The pipeline never raises; only invalid construction arguments do.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

from dashboard.services.columns import ColumnDescriptor, ColumnRegistry, InvalidTableConfigError
from dashboard.services.event_bus import EventBus, TableEvent
from dashboard.services.paginator import (
    PageRange,
    PageSlice,
    clamp_page,
    page_range,
    page_window,
    paginate,
    total_pages,
)
from dashboard.services.selection import SelectionManager
from dashboard.services.service_locator import services
from dashboard.services.settings_service import SettingsService
from dashboard.services.table_filter import filter_records
from dashboard.services.table_sort import SortDirective, next_directive, sort_records

__all__ = ["DataTableViewModel", "ViewState"]

_log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ViewState(Generic[T]):
    """Snapshot handed to renderers after each recomputation."""

    visible: Tuple[T, ...]
    total_pages: int
    current_page: int
    sort_directive: Optional[SortDirective]
    selected_count: int
    selected_indices: Tuple[int, ...]
    search_term: str
    filtered_count: int
    total_count: int
    page_window: Tuple[int, ...]
    page_range: PageRange
    all_selected: bool
    show_pagination: bool
    empty_message: str

    @property
    def is_empty(self) -> bool:
        return not self.visible

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


class DataTableViewModel(Generic[T]):
    def __init__(
        self,
        columns: ColumnRegistry | Iterable[ColumnDescriptor],
        records: Iterable[T] = (),
        *,
        page_size: int | None = None,
        pagination: bool | None = None,
        selectable: bool | None = None,
        initial_sort: SortDirective | None = None,
        on_row_click: Callable[[T], Any] | None = None,
        on_selection_change: Callable[[List[T]], Any] | None = None,
        event_bus: EventBus | None = None,
        empty_message: str | None = None,
    ):
        prefs = SettingsService.instance
        self.columns = ColumnRegistry.coerce(columns)
        self.page_size = prefs.page_size if page_size is None else page_size
        if self.page_size < 1:
            _log.warning("Rejected table page size %r", self.page_size)
            raise InvalidTableConfigError(f"page_size must be >= 1, got {self.page_size}")
        if initial_sort is not None and initial_sort.key not in self.columns:
            _log.warning("Rejected initial sort on unknown column %r", initial_sort.key)
            raise InvalidTableConfigError(f"Unknown sort column: {initial_sort.key!r}")
        self.pagination = prefs.pagination if pagination is None else pagination
        self.selectable = prefs.selectable if selectable is None else selectable
        self.empty_message = prefs.empty_message if empty_message is None else empty_message
        self.on_row_click = on_row_click
        self.on_selection_change = on_selection_change
        self._bus = event_bus if event_bus is not None else services.try_get("event_bus")

        self._records: List[T] = list(records)
        self._sort: Optional[SortDirective] = initial_sort
        self._term = ""
        self._page = 1
        self._sorted: List[T] = []
        self._filtered: List[T] = []
        self._slice: PageSlice[T] = PageSlice(visible=[], total_pages=1)
        self._selection = SelectionManager(on_change=self._on_selection_indices)
        self._resort()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def sort_directive(self) -> Optional[SortDirective]:
        return self._sort

    @property
    def search_term(self) -> str:
        return self._term

    @property
    def current_page(self) -> int:
        return self._page

    @property
    def total_pages(self) -> int:
        return self._slice.total_pages

    def records(self) -> List[T]:
        return list(self._records)

    def filtered_rows(self) -> List[T]:
        return list(self._filtered)

    def visible_rows(self) -> List[T]:
        return list(self._slice.visible)

    def selected_records(self) -> List[T]:
        return self._selection.resolve(self._slice.visible)

    def is_selected(self, index: int) -> bool:
        return self._selection.is_selected(index)

    def state(self) -> ViewState[T]:
        visible = self._slice.visible
        pages = self._slice.total_pages
        return ViewState(
            visible=tuple(visible),
            total_pages=pages,
            current_page=self._page,
            sort_directive=self._sort,
            selected_count=self._selection.count,
            selected_indices=tuple(self._selection.indices()),
            search_term=self._term,
            filtered_count=len(self._filtered),
            total_count=len(self._records),
            page_window=tuple(page_window(self._page, pages)),
            page_range=self._page_range(),
            all_selected=self._selection.all_selected(len(visible)),
            show_pagination=self.pagination and pages > 1,
            empty_message=self.empty_message,
        )

    # ------------------------------------------------------------------
    # Data source
    # ------------------------------------------------------------------
    def set_records(self, records: Iterable[T]) -> ViewState[T]:
        self._records = list(records)
        self._resort()
        self._selection.clear()
        return self._emit_view()

    # ------------------------------------------------------------------
    # Sort / search / page transitions
    # ------------------------------------------------------------------
    def sort_by(self, key: str) -> ViewState[T]:
        """Header click on column ``key`` (ignored for non-sortable columns)."""
        if not self.columns.is_sortable(key):
            return self.state()
        self._sort = next_directive(self._sort, key)
        _log.debug("sort %s %s", self._sort.key, self._sort.direction.value)
        return self._after_sort_change()

    def reset_sort(self) -> ViewState[T]:
        if self._sort is None:
            return self.state()
        self._sort = None
        _log.debug("sort reset to source order")
        return self._after_sort_change()

    def set_search_term(self, term: str) -> ViewState[T]:
        self._term = term or ""
        _log.debug("search %r", self._term)
        self._page = 1
        self._refilter()
        self._selection.clear()
        self._publish(TableEvent.SEARCH_CHANGED, self._term)
        return self._emit_view()

    def go_to_page(self, page: int) -> ViewState[T]:
        self._page = clamp_page(page, self._page_count())
        _log.debug("page %d (requested %d)", self._page, page)
        self._reslice()
        self._selection.clear()
        self._publish(TableEvent.PAGE_CHANGED, self._page)
        return self._emit_view()

    def next_page(self) -> ViewState[T]:
        return self.go_to_page(self._page + 1)

    def previous_page(self) -> ViewState[T]:
        return self.go_to_page(self._page - 1)

    # ------------------------------------------------------------------
    # Selection transitions
    # ------------------------------------------------------------------
    def toggle_row(self, index: int) -> List[T]:
        if self.selectable:
            self._selection.toggle(index, len(self._slice.visible))
        return self.selected_records()

    def select_all(self, flag: bool) -> List[T]:
        if self.selectable:
            self._selection.select_all(flag, len(self._slice.visible))
        return self.selected_records()

    def clear_selection(self) -> List[T]:
        self._selection.clear()
        return self.selected_records()

    # ------------------------------------------------------------------
    # Row activation
    # ------------------------------------------------------------------
    def click_row(self, index: int) -> Optional[T]:
        visible = self._slice.visible
        if not 0 <= index < len(visible):
            return None
        record = visible[index]
        if self.on_row_click is not None:
            self.on_row_click(record)
        self._publish(TableEvent.ROW_CLICKED, record)
        return record

    # ------------------------------------------------------------------
    # Export protocol
    # ------------------------------------------------------------------
    def get_export_rows(self, *, page_only: bool = False) -> tuple[List[str], List[List[str]]]:
        rows: Sequence[T] = self._slice.visible if page_only else self._filtered
        headers = self.columns.labels()
        data = [[col.display_text(r) for col in self.columns] for r in rows]
        return headers, data

    def get_export_payload(self, *, page_only: bool = False) -> List[dict]:
        rows: Sequence[T] = self._slice.visible if page_only else self._filtered
        return [{col.key: col.value(r) for col in self.columns} for r in rows]

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    def _after_sort_change(self) -> ViewState[T]:
        self._page = 1
        self._resort()
        self._selection.clear()
        self._publish(TableEvent.SORT_CHANGED, self._sort)
        return self._emit_view()

    def _resort(self) -> None:
        self._sorted = sort_records(self._records, self._sort)
        self._refilter()

    def _refilter(self) -> None:
        self._filtered = filter_records(self._sorted, self._term)
        self._page = clamp_page(self._page, self._page_count())
        self._reslice()

    def _reslice(self) -> None:
        if self.pagination:
            self._slice = paginate(self._filtered, self._page, self.page_size)
        else:
            self._slice = PageSlice(visible=list(self._filtered), total_pages=1)

    def _page_count(self) -> int:
        if not self.pagination:
            return 1
        return total_pages(len(self._filtered), self.page_size)

    def _page_range(self) -> PageRange:
        if not self.pagination:
            return page_range(1, max(1, len(self._filtered)), len(self._filtered))
        return page_range(self._page, self.page_size, len(self._filtered))

    def _on_selection_indices(self, _indices: List[int]) -> None:
        resolved = self._selection.resolve(self._slice.visible)
        if self.on_selection_change is not None:
            self.on_selection_change(resolved)
        self._publish(TableEvent.SELECTION_CHANGED, resolved)

    def _emit_view(self) -> ViewState[T]:
        snapshot = self.state()
        self._publish(TableEvent.VIEW_CHANGED, snapshot)
        return snapshot

    def _publish(self, event: TableEvent, payload: Any) -> None:
        if isinstance(self._bus, EventBus):
            self._bus.publish(event, payload)
