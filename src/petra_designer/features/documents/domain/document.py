"""
Document entity

The unit of persistence: an ordered node set plus an ordered edge set.
Documents are immutable values; store transitions build new ones.

Invariants (checked by check_document, enforced by the store):
1. Every edge endpoint references an existing node
2. No two edges share the same (source, source_handle, target, target_handle) key
3. Handles on block nodes name declared ports
4. Signal canonical names are unique (enforced by the config generator)
5. Deleting a node deletes every edge touching it
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from petra_designer.features.connections.domain.connection import Edge
from petra_designer.features.nodes.domain.node import Node
from petra_designer.features.nodes.domain.node_kind import NodeKind


DOCUMENT_FORMAT_VERSION = 1


@dataclass(frozen=True)
class Document:
    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))

    # Lookups

    def node_map(self) -> Dict[str, Node]:
        return {n.id: n for n in self.nodes}

    def get_node(self, node_id: str) -> Optional[Node]:
        return next((n for n in self.nodes if n.id == node_id), None)

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return next((e for e in self.edges if e.id == edge_id), None)

    def nodes_of_kind(self, kind: NodeKind) -> Iterator[Node]:
        return (n for n in self.nodes if n.kind is kind)

    def edges_touching(self, node_id: str) -> Tuple[Edge, ...]:
        return tuple(e for e in self.edges if e.touches(node_id))

    def incoming(self, node_id: str) -> Tuple[Edge, ...]:
        return tuple(e for e in self.edges if e.target_node_id == node_id)

    def __len__(self) -> int:
        return len(self.nodes)

    # Value-style updates

    def with_nodes(self, nodes: Iterable[Node]) -> 'Document':
        return replace(self, nodes=tuple(nodes))

    def with_edges(self, edges: Iterable[Edge]) -> 'Document':
        return replace(self, edges=tuple(edges))

    # Serialization

    def to_dict(self) -> dict:
        return {
            "version": DOCUMENT_FORMAT_VERSION,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Document':
        return cls(
            nodes=tuple(Node.from_dict(n) for n in data.get("nodes") or ()),
            edges=tuple(Edge.from_dict(e) for e in data.get("edges") or ()),
        )


EMPTY_DOCUMENT = Document()
