"""
Tests for the synchronous event bus.
"""
from petra_designer.application.events.event_bus import ALL_EVENTS, EventBus
from petra_designer.application.events.events import NodeAdded, NodeRemoved


class TestEventBus:

    def test_subscribe_by_class_or_name(self):
        bus = EventBus()
        received = []
        bus.subscribe(NodeAdded, received.append)
        bus.subscribe("NodeRemoved", received.append)

        bus.publish(NodeAdded(data={"node_id": "a"}))
        bus.publish(NodeRemoved(data={"node_id": "a"}))
        assert [e.name for e in received] == ["NodeAdded", "NodeRemoved"]

    def test_wildcard(self):
        bus = EventBus()
        received = []
        bus.subscribe(ALL_EVENTS, received.append)
        bus.publish(NodeAdded())
        assert len(received) == 1

    def test_duplicate_subscription_ignored(self):
        bus = EventBus()
        received = []
        bus.subscribe(NodeAdded, received.append)
        bus.subscribe(NodeAdded, received.append)
        bus.publish(NodeAdded())
        assert len(received) == 1
        assert bus.subscriber_count(NodeAdded) == 1

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        bus.subscribe(NodeAdded, received.append)
        bus.unsubscribe(NodeAdded, received.append)
        bus.publish(NodeAdded())
        assert received == []
        assert bus.subscriber_count() == 0

    def test_handler_error_isolated(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise ValueError("broken handler")

        bus.subscribe(NodeAdded, broken)
        bus.subscribe(NodeAdded, received.append)
        bus.publish(NodeAdded())
        assert len(received) == 1
