"""Admin dashboard table engine public API.

Curated, intentionally small surface for callers (entity list screens,
tests) to interact with the data-view engine without depending on deep
internal module paths.

Design Principles:
- Keep exports minimal & stable; prefer namespaced access for the rest.
- Avoid side-effect heavy imports (no implicit QApplication creation).
"""

from __future__ import annotations

from .services.service_locator import (  # noqa: F401
    services,
    ServiceLocator,
    ServiceAlreadyRegisteredError,
    ServiceNotFoundError,
)
from .services.event_bus import (  # noqa: F401
    EventBus,
    TableEvent,
    Event,
)
from .services.columns import (  # noqa: F401
    Align,
    ColumnDescriptor,
    ColumnRegistry,
    InvalidTableConfigError,
)
from .services.table_sort import SortDirection, SortDirective  # noqa: F401
from .viewmodels.data_table_viewmodel import DataTableViewModel, ViewState  # noqa: F401
