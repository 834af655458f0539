"""
Edge entity

A wire between two nodes. Handles name ports on block nodes; signal and
protocol nodes expose a single unnamed port, so their handle is None.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple
import uuid


EdgeKey = Tuple[str, Optional[str], str, Optional[str]]


@dataclass(frozen=True)
class Edge:
    """
    Edge entity.

    Two edges are duplicates when their key
    (source_node_id, source_handle, target_node_id, target_handle) matches;
    the id does not take part in that comparison.
    """
    id: str
    source_node_id: str
    target_node_id: str
    source_handle: Optional[str] = None
    target_handle: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            object.__setattr__(self, "id", uuid.uuid4().hex[:12])
        if not self.source_node_id:
            raise ValueError("Source node ID cannot be empty")
        if not self.target_node_id:
            raise ValueError("Target node ID cannot be empty")

    @property
    def key(self) -> EdgeKey:
        return (self.source_node_id, self.source_handle, self.target_node_id, self.target_handle)

    def touches(self, node_id: str) -> bool:
        return self.source_node_id == node_id or self.target_node_id == node_id

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            "id": self.id,
            "source_node_id": self.source_node_id,
            "source_handle": self.source_handle,
            "target_node_id": self.target_node_id,
            "target_handle": self.target_handle,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Edge':
        """Create from dictionary"""
        return cls(
            id=data.get("id", ""),
            source_node_id=data["source_node_id"],
            source_handle=data.get("source_handle"),
            target_node_id=data["target_node_id"],
            target_handle=data.get("target_handle"),
        )

    def __str__(self) -> str:
        source = f"{self.source_node_id}.{self.source_handle}" if self.source_handle else self.source_node_id
        target = f"{self.target_node_id}.{self.target_handle}" if self.target_handle else self.target_node_id
        return f"{source} -> {target}"


def candidate(
    source_node_id: str,
    target_node_id: str,
    source_handle: Optional[str] = None,
    target_handle: Optional[str] = None,
) -> Edge:
    """Build an edge with a fresh id, e.g. for connect()."""
    return Edge("", source_node_id, target_node_id, source_handle, target_handle)
