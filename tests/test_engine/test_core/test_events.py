import logging
from enum import Enum, auto

from kcengine.core.events import EventBus, Event

class MockEvent(Enum):
    TEST_EVENT = auto()
    OTHER_EVENT = auto()

def test_event_bus_subscribe_publish(event_bus):
    received = []
    def handler(event):
        received.append(event)

    event_bus.subscribe(MockEvent.TEST_EVENT, handler)
    event_bus.publish(MockEvent.TEST_EVENT, data="test")

    assert len(received) == 1
    assert received[0].type == MockEvent.TEST_EVENT
    assert received[0]["data"] == "test"

def test_event_bus_unsubscribe(event_bus):
    received = []
    def handler(event):
        received.append(event)

    event_bus.subscribe(MockEvent.TEST_EVENT, handler)
    event_bus.unsubscribe(MockEvent.TEST_EVENT, handler)
    event_bus.publish(MockEvent.TEST_EVENT)

    assert received == []

def test_event_priority(event_bus):
    order = []

    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("low"), priority=1, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("high"), priority=10, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("normal"), priority=5, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("normal2"), priority=5, weak=False)

    event_bus.publish(MockEvent.TEST_EVENT)

    assert order == ["high", "normal", "normal2", "low"]

def test_event_consumption(event_bus):
    received = []

    def consumer(event):
        received.append("consumer")
        event.consume()

    def later_handler(event):
        received.append("later")

    event_bus.subscribe(MockEvent.TEST_EVENT, consumer, priority=10)
    event_bus.subscribe(MockEvent.TEST_EVENT, later_handler, priority=5)

    event = event_bus.publish(MockEvent.TEST_EVENT)

    assert received == ["consumer"]
    assert event.consumed

def test_one_shot_handler(event_bus):
    calls = []
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: calls.append(1), one_shot=True, weak=False)

    event_bus.publish(MockEvent.TEST_EVENT)
    event_bus.publish(MockEvent.TEST_EVENT)

    assert calls == [1]
    assert event_bus.subscriber_count(MockEvent.TEST_EVENT) == 0

def test_weak_handler_is_dropped(event_bus):
    class Listener:
        def __init__(self):
            self.calls = 0

        def on_event(self, event):
            self.calls += 1

    listener = Listener()
    event_bus.subscribe(MockEvent.TEST_EVENT, listener.on_event)
    assert event_bus.subscriber_count(MockEvent.TEST_EVENT) == 1

    del listener
    event_bus.publish(MockEvent.TEST_EVENT)

    assert event_bus.subscriber_count(MockEvent.TEST_EVENT) == 0

def test_events_published_while_dispatching_are_queued(event_bus):
    order = []

    def first(event):
        order.append("test:start")
        event_bus.publish(MockEvent.OTHER_EVENT)
        order.append("test:end")

    event_bus.subscribe(MockEvent.TEST_EVENT, first, weak=False)
    event_bus.subscribe(MockEvent.OTHER_EVENT, lambda e: order.append("other"), weak=False)

    event_bus.publish(MockEvent.TEST_EVENT)

    assert order == ["test:start", "test:end", "other"]

def test_handler_error_is_logged_and_dispatch_continues(event_bus, caplog):
    received = []

    def broken(event):
        raise RuntimeError("boom")

    event_bus.subscribe(MockEvent.TEST_EVENT, broken, priority=10, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: received.append(e), weak=False)

    with caplog.at_level(logging.ERROR, logger="kcengine.core.events"):
        event_bus.publish(MockEvent.TEST_EVENT)

    assert len(received) == 1
    assert "Error in event handler" in caplog.text

def test_event_get_default():
    event = Event(type=MockEvent.TEST_EVENT, data={"a": 1})
    assert event.get("a") == 1
    assert event.get("missing", 5) == 5

def test_one_shot_handler_that_unsubscribes_another(event_bus):
    calls = []

    def other(event):
        calls.append("other")

    def once(event):
        calls.append("once")
        event_bus.unsubscribe(MockEvent.TEST_EVENT, other)

    event_bus.subscribe(MockEvent.TEST_EVENT, once, priority=10, one_shot=True, weak=False)
    event_bus.subscribe(MockEvent.TEST_EVENT, other, weak=False)

    event_bus.publish(MockEvent.TEST_EVENT)
    event_bus.publish(MockEvent.TEST_EVENT)

    # Removed before its turn, and the one-shot never fires again
    assert calls == ["once"]
    assert event_bus.subscriber_count(MockEvent.TEST_EVENT) == 0
