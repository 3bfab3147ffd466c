"""Column presets for the dashboard's entity lists.

Each factory returns a fresh ``ColumnRegistry`` describing how a list of
users, suppliers, orders or categories is labelled and rendered. Render
hooks produce plain text; the Qt layer decides styling (badge tone etc.).
Row actions (view / edit / delete buttons) belong to the screens, not here.
"""

from __future__ import annotations

from typing import Any

from .columns import Align, ColumnDescriptor, ColumnRegistry, field_value

__all__ = [
    "category_columns",
    "format_currency",
    "format_title",
    "order_columns",
    "supplier_columns",
    "user_columns",
]


def format_currency(value: Any, currency: str = "$") -> str:
    if value is None:
        return ""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return str(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency}{abs(amount):,.2f}"


def format_title(value: Any) -> str:
    text = "" if value is None else str(value)
    return text[:1].upper() + text[1:]


def _name_with_id(value: Any, record: Any) -> str:
    ident = field_value(record, "id")
    name = "" if value is None else str(value)
    return f"{name} (ID: {ident})" if ident is not None else name


def user_columns() -> ColumnRegistry:
    return ColumnRegistry(
        [
            ColumnDescriptor("name", "Name", sortable=True, render=_name_with_id),
            ColumnDescriptor("email", "Email", sortable=True),
            ColumnDescriptor("type", "Type", sortable=True),
            ColumnDescriptor("status", "Status", sortable=True, render=lambda v, _r: format_title(v)),
            ColumnDescriptor("lastLogin", "Last Login", sortable=True),
        ]
    )


def supplier_columns() -> ColumnRegistry:
    return ColumnRegistry(
        [
            ColumnDescriptor("name", "Supplier Name", sortable=True, render=_name_with_id),
            ColumnDescriptor("email", "Email", sortable=True),
            ColumnDescriptor("phone", "Phone", sortable=True),
            ColumnDescriptor(
                "verificationStatus",
                "Status",
                sortable=True,
                render=lambda v, _r: format_title(v),
            ),
            ColumnDescriptor("joinDate", "Join Date", sortable=True),
        ]
    )


def order_columns() -> ColumnRegistry:
    return ColumnRegistry(
        [
            ColumnDescriptor("id", "Order ID", sortable=True),
            ColumnDescriptor("customerName", "Customer", sortable=True),
            ColumnDescriptor("supplierName", "Supplier", sortable=True),
            ColumnDescriptor(
                "totalAmount",
                "Total Amount",
                sortable=True,
                align=Align.RIGHT,
                render=lambda v, _r: format_currency(v),
            ),
            ColumnDescriptor("status", "Status", sortable=True, render=lambda v, _r: format_title(v)),
            ColumnDescriptor("orderDate", "Order Date", sortable=True),
            ColumnDescriptor("deliveryDate", "Delivery Date", sortable=True),
        ]
    )


def category_columns() -> ColumnRegistry:
    return ColumnRegistry(
        [
            ColumnDescriptor("id", "ID", sortable=True),
            ColumnDescriptor("name", "Name", sortable=True),
            ColumnDescriptor("description", "Description", sortable=True),
            ColumnDescriptor("productCount", "Products", sortable=True, align=Align.RIGHT),
            ColumnDescriptor("status", "Status", sortable=True, render=lambda v, _r: format_title(v)),
            ColumnDescriptor("createdAt", "Created At", sortable=True),
        ]
    )
