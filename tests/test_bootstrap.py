import logging

from dashboard.app.bootstrap import create_app
from dashboard.services.event_bus import EventBus
from dashboard.services.logging_service import LoggingService
from dashboard.services.settings_service import SettingsService


def test_headless_bootstrap_registers_services():
    ctx = create_app(headless=True)
    assert ctx.qt_app is None
    assert ctx.headless
    assert isinstance(ctx.services.get("event_bus"), EventBus)
    assert ctx.services.get("settings") is SettingsService.instance
    assert isinstance(ctx.services.get("logging_service"), LoggingService)
    assert ctx.duration_s >= 0


def test_bootstrap_gives_fresh_bus_and_reattaches_logging():
    first = create_app(headless=True)
    second = create_app(headless=True)
    assert first.event_bus is not second.event_bus
    assert not first.logging_service.attached
    assert second.logging_service.attached
    logging.getLogger("dashboard.probe").info("ping")
    assert [e.message for e in second.logging_service.recent()][-1] == "ping"
    assert "ping" not in [e.message for e in first.logging_service.recent()]
