from dashboard.services.event_bus import EventBus, TableEvent


def test_subscribe_publish_basic():
    bus = EventBus()
    received = []
    bus.subscribe(TableEvent.PAGE_CHANGED, lambda evt: received.append((evt.name, evt.payload)))
    bus.publish(TableEvent.PAGE_CHANGED, 3)
    assert received == [("page_changed", 3)]


def test_once_subscription():
    bus = EventBus()
    count = 0

    def incr(_):
        nonlocal count
        count += 1

    bus.subscribe(TableEvent.VIEW_CHANGED, incr, once=True)
    bus.publish(TableEvent.VIEW_CHANGED)
    bus.publish(TableEvent.VIEW_CHANGED)
    assert count == 1
    assert bus.subscriber_count(TableEvent.VIEW_CHANGED) == 0


def test_error_isolation():
    bus = EventBus()
    order = []

    def bad(_):
        order.append("bad")
        raise RuntimeError("boom")

    bus.subscribe("custom", bad)
    bus.subscribe("custom", lambda _: order.append("good"))
    bus.publish("custom", 123)
    assert order == ["bad", "good"]
    assert len(bus.errors) == 1


def test_unsubscribe_and_tracing():
    bus = EventBus()
    sub = bus.subscribe("x", lambda _: None)
    bus.unsubscribe(sub)
    assert not sub.active
    assert bus.subscriber_count("x") == 0
    bus.enable_tracing()
    bus.publish(TableEvent.ROW_CLICKED, {"id": 1})
    assert [name for name, _ts in bus.recent_traces()] == ["row_clicked"]


def test_error_log_is_bounded():
    bus = EventBus()

    def bad(evt):
        raise ValueError(evt.payload)

    bus.subscribe("custom", bad)
    for i in range(EventBus.ERROR_CAPACITY + 5):
        bus.publish("custom", i)
    errors = bus.errors
    assert len(errors) == EventBus.ERROR_CAPACITY
    assert errors[0][0].payload == 5
    assert str(errors[-1][1]) == str(EventBus.ERROR_CAPACITY + 4)
