"""
Domain Events

Published by the FlowStore after every committed change so that an
observing UI layer can refresh without polling.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict


@dataclass
class DomainEvent:
    """Base class for all domain events"""
    name: ClassVar[str] = "DomainEvent"
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class NodeAdded(DomainEvent):
    name: ClassVar[str] = "NodeAdded"


@dataclass
class NodeUpdated(DomainEvent):
    name: ClassVar[str] = "NodeUpdated"


@dataclass
class NodeRemoved(DomainEvent):
    """
    Data fields:
        - node_id: removed node
        - edge_ids: edges removed with it (cascade)
    """
    name: ClassVar[str] = "NodeRemoved"


@dataclass
class ConnectionCreated(DomainEvent):
    name: ClassVar[str] = "ConnectionCreated"


@dataclass
class ConnectionRemoved(DomainEvent):
    name: ClassVar[str] = "ConnectionRemoved"


@dataclass
class DocumentReplaced(DomainEvent):
    """Raised by clear() and load(); data["reason"] is "clear" or "load"."""
    name: ClassVar[str] = "DocumentReplaced"


@dataclass
class SelectionChanged(DomainEvent):
    name: ClassVar[str] = "SelectionChanged"


@dataclass
class HistoryMoved(DomainEvent):
    """Raised by undo()/redo(); data["direction"] is "undo" or "redo"."""
    name: ClassVar[str] = "HistoryMoved"
