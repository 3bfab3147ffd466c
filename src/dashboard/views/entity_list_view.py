"""Entity list screen widget (users, suppliers, orders, categories)."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from PyQt6.QtWidgets import QWidget

from dashboard.viewmodels.entity_list import BaseEntityList, entity_list
from dashboard.views.data_table_view import DataTableView

__all__ = ["EntityListView"]


class EntityListView(DataTableView):
    """DataTableView bound to an entity preset, titled after the entity kind."""

    def __init__(
        self,
        kind: str,
        records: Iterable[Any] = (),
        parent: Optional[QWidget] = None,
        *,
        on_row_click: Callable[[Any], Any] | None = None,
        debounce_ms: int | None = None,
    ):
        model: BaseEntityList[Any] = entity_list(kind, records, on_row_click=on_row_click)
        super().__init__(model, parent, title=model.title, debounce_ms=debounce_ms)
        self.kind = kind
