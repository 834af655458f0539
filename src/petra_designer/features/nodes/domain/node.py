"""
Node entity

A node on the diagram: identity, canvas position and a kind-tagged payload.
Nodes are immutable; updates produce new instances.
"""
from dataclasses import dataclass, replace
from typing import Any, Mapping
import uuid

from petra_designer.features.nodes.domain.node_kind import NodeKind
from petra_designer.features.nodes.domain.payloads import Payload, apply_patch, payload_class


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def coerce(cls, value: Any) -> 'Position':
        if isinstance(value, Position):
            return value
        if isinstance(value, Mapping):
            return cls(x=value.get("x", 0.0), y=value.get("y", 0.0))
        x, y = value
        return cls(x=x, y=y)


@dataclass(frozen=True)
class Node:
    """
    Node entity.

    Invariants:
    - id is non-empty (generated when blank)
    - kind is derived from the payload type
    """
    id: str
    position: Position
    payload: Payload

    def __post_init__(self):
        if not self.id:
            object.__setattr__(self, "id", uuid.uuid4().hex[:12])
        object.__setattr__(self, "position", Position.coerce(self.position))
        if not isinstance(self.payload, Payload):
            raise TypeError(f"Node payload must be a Payload, got {type(self.payload).__name__}")

    @property
    def kind(self) -> NodeKind:
        return self.payload.kind

    @property
    def label(self) -> str:
        return self.payload.label

    def with_payload(self, patch: Mapping[str, Any]) -> 'Node':
        """Copy with patched payload fields (KeyError on unknown fields)."""
        return replace(self, payload=apply_patch(self.payload, patch))

    def moved_to(self, position: Any) -> 'Node':
        return replace(self, position=Position.coerce(position))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "position": self.position.to_dict(),
            "payload": self.payload.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Node':
        """Create from dictionary"""
        kind = NodeKind.from_string(data["kind"])
        return cls(
            id=data["id"],
            position=Position.coerce(data.get("position") or {}),
            payload=payload_class(kind).from_dict(data.get("payload") or {}),
        )

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id} ({self.label!r})"
