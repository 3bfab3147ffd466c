# Shared fixtures: isolated service registry / settings per test and a
# headless QApplication for widget tests.

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from dashboard.services.logging_service import LoggingService  # noqa: E402
from dashboard.services.service_locator import services  # noqa: E402
from dashboard.services.settings_service import SettingsService  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_services():
    saved = {key: services.get(key) for key in services.list_keys()}
    services.clear()
    yield services
    log_svc = services.try_get("logging_service")
    if isinstance(log_svc, LoggingService):
        log_svc.detach()
    services.clear()
    for key, value in saved.items():
        services.register(key, value)


@pytest.fixture(autouse=True)
def _fresh_settings():
    original = SettingsService.instance
    SettingsService.instance = SettingsService()
    yield SettingsService.instance
    SettingsService.instance = original


@pytest.fixture(scope="session")
def qt_app():
    widgets = pytest.importorskip("PyQt6.QtWidgets")
    return widgets.QApplication.instance() or widgets.QApplication(sys.argv[:1])
