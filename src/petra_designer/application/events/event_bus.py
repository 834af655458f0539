"""
Event Bus System

Synchronous publish/subscribe for domain events. Handlers run on the
caller's thread, in subscription order, after the state change committed.
"""
from typing import Callable, Dict, List, Type, Union

from petra_designer.application.events.events import DomainEvent
from petra_designer.utils.message import Log


ALL_EVENTS = "*"

Handler = Callable[[DomainEvent], None]


class EventBus:
    """
    Event bus for publishing and subscribing to domain events.

    Usage:
        bus = EventBus()
        bus.subscribe(NodeAdded, handle_node_added)
        bus.subscribe("*", log_everything)
        bus.publish(NodeAdded(data={...}))
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def _normalize_event_name(self, event_name_or_class: Union[str, Type[DomainEvent]]) -> str:
        if isinstance(event_name_or_class, str):
            return event_name_or_class
        return getattr(event_name_or_class, "name", event_name_or_class.__name__)

    def subscribe(self, event_name: Union[str, Type[DomainEvent]], handler: Handler) -> None:
        """
        Subscribe to events of a specific type ("*" for every event).

        Subscribing the same handler twice has no effect.
        """
        handlers = self._subscribers.setdefault(self._normalize_event_name(event_name), [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_name: Union[str, Type[DomainEvent]], handler: Handler) -> None:
        event_name = self._normalize_event_name(event_name)
        handlers = self._subscribers.get(event_name)
        if handlers and handler in handlers:
            handlers.remove(handler)
            if not handlers:
                del self._subscribers[event_name]

    def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event to all subscribers.

        A failing handler is logged and does not stop delivery to the others;
        the state change that produced the event has already committed.
        """
        handlers = list(self._subscribers.get(event.name, ())) + \
            list(self._subscribers.get(ALL_EVENTS, ()))
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                Log.error(f"EventBus: Error in handler for '{event.name}': {e}")

    def subscriber_count(self, event_name: Union[str, Type[DomainEvent]] = None) -> int:
        if event_name is None:
            return sum(len(h) for h in self._subscribers.values())
        return len(self._subscribers.get(self._normalize_event_name(event_name), ()))
