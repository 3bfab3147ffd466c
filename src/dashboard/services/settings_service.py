"""Runtime table preferences.

Centralizes the defaults used when a table is created without explicit
options (page size, search debounce, selection and pagination toggles).
Seeded from ``dashboard.config.settings`` so environment overrides apply;
tests and screens may mutate ``SettingsService.instance`` at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from dashboard.config import settings as config

__all__ = ["SettingsService"]


@dataclass
class SettingsService:
    """Runtime settings and feature flags.

    Attributes:
        page_size: Rows per page for new tables. Default 10.
        search_debounce_ms: Delay before a search box keystroke is dispatched
            to the view model. Zero dispatches immediately.
        pagination: Whether new tables paginate by default.
        selectable: Whether new tables show row checkboxes by default.
        empty_message: Placeholder text when a table has no visible rows.
        export_enabled: Whether views offer CSV / JSON export.
    """

    instance: ClassVar["SettingsService"]

    page_size: int = config.DEFAULT_PAGE_SIZE
    search_debounce_ms: int = config.SEARCH_DEBOUNCE_MS
    pagination: bool = True
    selectable: bool = True
    empty_message: str = config.DEFAULT_EMPTY_MESSAGE
    export_enabled: bool = config.ENABLE_EXPORT


SettingsService.instance = SettingsService()
