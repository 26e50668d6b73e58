from season_trends.services.event_bus import ChartEvent, EventBus


def test_subscribe_and_publish_order():
    bus = EventBus()
    order = []

    def h1(e):
        order.append(("h1", e.name))

    def h2(e):
        order.append(("h2", e.name))

    bus.subscribe(ChartEvent.FILTERS_CHANGED, h1)
    bus.subscribe(ChartEvent.FILTERS_CHANGED, h2)
    bus.publish(ChartEvent.FILTERS_CHANGED, {"league": "AL"})
    assert order == [
        ("h1", ChartEvent.FILTERS_CHANGED.value),
        ("h2", ChartEvent.FILTERS_CHANGED.value),
    ]


def test_unsubscribe():
    bus = EventBus()
    calls = []
    sub = bus.subscribe(ChartEvent.REDRAW_COMPLETE, lambda e: calls.append(1))
    bus.publish(ChartEvent.REDRAW_COMPLETE)
    bus.unsubscribe(sub)
    bus.publish(ChartEvent.REDRAW_COMPLETE)
    assert calls == [1]
    assert not sub.active


def test_unsubscribed_during_publish_is_skipped():
    bus = EventBus()
    calls = []
    later = None

    def first(e):
        bus.unsubscribe(later)

    bus.subscribe(ChartEvent.TOOLTIP_CHANGED, first)
    later = bus.subscribe(ChartEvent.TOOLTIP_CHANGED, lambda e: calls.append(1))
    bus.publish(ChartEvent.TOOLTIP_CHANGED)
    assert calls == []


def test_payload_and_string_names():
    bus = EventBus()
    seen = []
    bus.subscribe("filters_changed", lambda e: seen.append(e.payload))
    evt = bus.publish(ChartEvent.FILTERS_CHANGED, 42)
    assert seen == [42]
    assert evt.name == "filters_changed"


def test_error_isolation():
    bus = EventBus()
    calls = []

    def bad(e):
        raise RuntimeError("boom")

    def good(e):
        calls.append("ok")

    bus.subscribe(ChartEvent.REDRAW_COMPLETE, bad)
    bus.subscribe(ChartEvent.REDRAW_COMPLETE, good)
    bus.publish(ChartEvent.REDRAW_COMPLETE)
    assert calls == ["ok"]
    assert len(bus.errors) == 1
    assert isinstance(bus.errors[0][1], RuntimeError)


def test_handler_may_subscribe_during_publish():
    bus = EventBus()
    late = []

    def first(e):
        if not late:
            bus.subscribe(ChartEvent.FILTERS_CHANGED, lambda ev: late.append(ev.payload))

    bus.subscribe(ChartEvent.FILTERS_CHANGED, first)
    bus.publish(ChartEvent.FILTERS_CHANGED, 1)
    bus.publish(ChartEvent.FILTERS_CHANGED, 2)
    assert late == [2]
