"""Entity list view model (users, suppliers, orders, categories).

Thin wrapper over ``DataTableViewModel`` applying the defaults shared by
every entity screen: pagination on, "No data available" placeholder, and a
row-click callback used for navigation to the entity's detail page.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from dashboard.config.settings import ENTITY_EMPTY_MESSAGE
from dashboard.services import entity_columns
from dashboard.services.columns import ColumnDescriptor, ColumnRegistry
from dashboard.services.event_bus import EventBus
from dashboard.viewmodels.data_table_viewmodel import DataTableViewModel

__all__ = ["BaseEntityList", "ENTITY_PRESETS", "entity_list"]

T = TypeVar("T")

ENTITY_PRESETS: dict[str, Callable[[], ColumnRegistry]] = {
    "users": entity_columns.user_columns,
    "suppliers": entity_columns.supplier_columns,
    "orders": entity_columns.order_columns,
    "categories": entity_columns.category_columns,
}


class BaseEntityList(DataTableViewModel[T]):
    def __init__(
        self,
        columns: ColumnRegistry | Iterable[ColumnDescriptor],
        records: Iterable[T] = (),
        *,
        on_row_click: Callable[[T], Any] | None = None,
        title: str = "",
        pagination: bool = True,
        empty_message: str = ENTITY_EMPTY_MESSAGE,
        event_bus: EventBus | None = None,
    ):
        super().__init__(
            columns,
            records,
            pagination=pagination,
            on_row_click=on_row_click,
            empty_message=empty_message,
            event_bus=event_bus,
        )
        self.title = title


def entity_list(kind: str, records: Iterable[Any] = (), **kwargs: Any) -> BaseEntityList[Any]:
    """Build an entity list for one of ``ENTITY_PRESETS`` (e.g. ``"suppliers"``).

    The title defaults to the capitalized kind. Unknown kinds raise ``KeyError``.
    """
    columns = ENTITY_PRESETS[kind]()
    kwargs.setdefault("title", kind.capitalize())
    return BaseEntityList(columns, records, **kwargs)