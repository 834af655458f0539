"""Event system for application layer"""

from petra_designer.application.events.events import (
    DomainEvent,
    # Node events
    NodeAdded,
    NodeUpdated,
    NodeRemoved,
    # Connection events
    ConnectionCreated,
    ConnectionRemoved,
    # Document events
    DocumentReplaced,
    SelectionChanged,
    HistoryMoved,
)
from petra_designer.application.events.event_bus import ALL_EVENTS, EventBus

__all__ = [
    'DomainEvent',
    'NodeAdded',
    'NodeUpdated',
    'NodeRemoved',
    'ConnectionCreated',
    'ConnectionRemoved',
    'DocumentReplaced',
    'SelectionChanged',
    'HistoryMoved',
    'ALL_EVENTS',
    'EventBus',
]
