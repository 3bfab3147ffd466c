"""Global configuration and constants for dashboard tables."""

from __future__ import annotations

import os
from typing import Final

DEFAULT_PAGE_SIZE: Final = int(os.environ.get("DASHBOARD_PAGE_SIZE", "10"))
SEARCH_DEBOUNCE_MS: Final = int(os.environ.get("DASHBOARD_SEARCH_DEBOUNCE_MS", "300"))
PAGE_WINDOW_SIZE: Final = 5  # page-number buttons shown at once

DEFAULT_EMPTY_MESSAGE: Final = "No results found"
ENTITY_EMPTY_MESSAGE: Final = "No data available"

# Feature flags
ENABLE_EXPORT: Final = os.environ.get("DASHBOARD_ENABLE_EXPORT", "1") != "0"
