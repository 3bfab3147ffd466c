"""Application bootstrap for the dashboard tables.

Responsibilities:
 - Optional headless bootstrap (tests / environments without a display)
 - Registering shared services (event bus, settings, log capture)
 - Returning a single context object with references

PyQt6 is imported lazily so unit tests of the headless engine do not need a
GUI stack.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from dashboard.services.event_bus import EventBus
from dashboard.services.logging_service import LoggingService
from dashboard.services.service_locator import ServiceLocator, services
from dashboard.services.settings_service import SettingsService

try:  # Lazy / optional Qt import
    from PyQt6.QtWidgets import QApplication  # type: ignore

    _QT_AVAILABLE = True
except ImportError:  # pragma: no cover - headless environments
    QApplication = None  # type: ignore
    _QT_AVAILABLE = False

__all__ = ["AppContext", "create_app"]

_log = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Container with references created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication instance (None if headless or Qt missing)
    headless: Whether headless bootstrap was used
    services: Global service locator (post-initialization state)
    event_bus: Fresh event bus for this session
    settings: Runtime table preferences
    logging_service: Ring-buffer log capture attached to the ``dashboard`` logger
    duration_s: Total elapsed seconds for bootstrap
    """

    qt_app: Optional[Any]
    headless: bool
    services: ServiceLocator
    event_bus: EventBus
    settings: SettingsService
    logging_service: LoggingService
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)


def create_app(*, headless: bool | None = None, log_capacity: int = 500) -> AppContext:
    """Create and initialize the dashboard application context.

    Every call provides a fresh EventBus and LoggingService (test isolation);
    a previously registered logging service is detached first.
    """
    started = time.perf_counter()
    if headless is None:
        headless = not _QT_AVAILABLE

    qt_app = None
    if not headless and _QT_AVAILABLE:
        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    previous = services.try_get("logging_service")
    if isinstance(previous, LoggingService):
        previous.detach()

    bus = EventBus()
    log_svc = LoggingService(capacity=log_capacity, logger_name="dashboard")
    services.register("event_bus", bus, allow_override=True)
    services.register("settings", SettingsService.instance, allow_override=True)
    services.register("logging_service", log_svc, allow_override=True)
    log_svc.attach()

    duration = time.perf_counter() - started
    _log.debug("bootstrap complete in %.4fs (headless=%s)", duration, headless)
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        services=services,
        event_bus=bus,
        settings=SettingsService.instance,
        logging_service=log_svc,
        duration_s=duration,
        metadata={"qt_available": _QT_AVAILABLE},
    )
