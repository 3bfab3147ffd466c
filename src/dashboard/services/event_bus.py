"""EventBus core.

Lightweight synchronous publish/subscribe mechanism with typed events used
by table view models to announce recomputations, selection changes and row
clicks to the surrounding application.

Goals:
 - Decouple producers (view models) and consumers (screens, panels)
 - No Qt dependency
 - Safe error isolation: one failing handler doesn't break the publish cycle
 - One-shot (once) subscriptions and unsubscribe handles
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Deque, Dict, List, Protocol, Tuple

__all__ = [
    "TableEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class TableEvent(str, Enum):
    VIEW_CHANGED = "view_changed"  # any recomputation of the visible page
    SORT_CHANGED = "sort_changed"
    SEARCH_CHANGED = "search_changed"
    PAGE_CHANGED = "page_changed"
    SELECTION_CHANGED = "selection_changed"
    ROW_CLICKED = "row_clicked"
    LOG_RECORD_ADDED = "log_record_added"


@dataclass
class Event:
    name: str  # matches TableEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _event_key(name: str | TableEvent) -> str:
    return name.value if isinstance(name, TableEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers run outside the lock (snapshot first) so they may subscribe or
    unsubscribe re-entrantly. Handler exceptions are collected in
    ``errors`` (the most recent ``ERROR_CAPACITY``) instead of propagating
    to the publisher.
    """

    DEFAULT_TRACE_CAPACITY = 50
    ERROR_CAPACITY = 100

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: Deque[Tuple[Event, BaseException]] = deque(maxlen=self.ERROR_CAPACITY)
        self._tracing_enabled = False
        self._traces: Deque[Tuple[str, float]] = deque(maxlen=self.DEFAULT_TRACE_CAPACITY)

    # Subscriptions ------------------------------------------------------
    def subscribe(
        self, name: str | TableEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_event_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event, [])
            remaining = [s for s in bucket if s is not sub]
            if remaining:
                self._subs[sub.event] = remaining
            else:
                self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    # Publishing ---------------------------------------------------------
    def publish(self, name: str | TableEvent, payload: Any = None) -> Event:
        key = _event_key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
            if self._tracing_enabled:
                self._traces.append((key, evt.timestamp))
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                with self._lock:
                    self._errors.append((evt, exc))
            if sub.once:
                self.unsubscribe(sub)
        return evt

    # Introspection -----------------------------------------------------
    def subscriber_count(self, name: str | TableEvent) -> int:
        with self._lock:
            return len(self._subs.get(_event_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)

    def enable_tracing(self, enabled: bool = True) -> None:
        with self._lock:
            self._tracing_enabled = enabled

    def recent_traces(self) -> list[Tuple[str, float]]:
        with self._lock:
            return list(self._traces)
