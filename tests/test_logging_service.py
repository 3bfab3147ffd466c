import logging

import pytest

from dashboard.services.event_bus import EventBus, TableEvent
from dashboard.services.logging_service import LoggingService, get_logging_service
from dashboard.viewmodels.data_table_viewmodel import DataTableViewModel
from dashboard.services.columns import ColumnDescriptor


@pytest.fixture()
def capture(_isolated_services):
    bus = EventBus()
    _isolated_services.register("event_bus", bus)
    svc = LoggingService(capacity=5, logger_name="dashboard")
    _isolated_services.register("logging_service", svc)
    svc.attach()
    yield svc, bus
    svc.detach()


def test_transitions_are_logged(capture):
    svc, _ = capture
    vm = DataTableViewModel([ColumnDescriptor("n", "N", sortable=True)], [{"n": 1}])
    vm.sort_by("n")
    vm.set_search_term("1")
    messages = [e.message for e in svc.recent()]
    assert "sort n asc" in messages
    assert "search '1'" in messages


def test_capacity_and_filter(capture):
    svc, _ = capture
    log = logging.getLogger("dashboard.tests")
    for i in range(8):
        log.info("M%d", i)
    logging.getLogger("dashboard.other").warning("careful")
    recents = svc.recent()
    assert len(recents) == 5
    assert recents[-1].message == "careful"
    assert [e.name for e in svc.filter(level="WARNING")] == ["dashboard.other"]
    assert len(svc.filter(name_contains="tests")) == 4
    svc.clear()
    assert svc.recent() == []


def test_records_published_to_bus(capture):
    svc, bus = capture
    seen = []
    bus.subscribe(TableEvent.LOG_RECORD_ADDED, lambda e: seen.append(e.payload["message"]))
    logging.getLogger("dashboard.x").info("hello")
    assert seen == ["hello"]
    assert get_logging_service() is svc


def test_outside_loggers_not_captured(capture):
    svc, _ = capture
    logging.getLogger("elsewhere").error("ignored")
    assert svc.recent() == []
