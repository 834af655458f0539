"""
Connection Validator

Decides whether a candidate edge may be added to a document.

Rules, in order:
1. Structural: both endpoints exist; handles on block nodes name a declared
   port in the right direction (outputs for the source, inputs for the target).
2. Duplicate: no existing edge with the same
   (source, source_handle, target, target_handle) key.
3. Kind compatibility via KIND_RULES keyed by (source kind, target kind).
   Pairs without an entry are admissible (permissive default).

Cycles are not checked; cycle handling belongs to the runtime.
"""
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from petra_designer.features.connections.domain.connection import Edge
from petra_designer.features.nodes.domain.node import Node
from petra_designer.features.nodes.domain.node_kind import NodeKind
from petra_designer.features.nodes.domain.payloads import PortSpec
from petra_designer.shared.application.validation.validation_framework import ValidationResult
from petra_designer.shared.domain.value_objects.port_type import get_port_type


INVALID_CONNECTION = "Invalid connection"
CONNECTION_EXISTS = "Connection already exists"
TWILIO_BOOL_ONLY = "Twilio can only be triggered by bool signals"

NodeLookup = Union[Mapping[str, Node], Iterable[Node]]
KindRule = Callable[[Node, Node, Edge, bool], Optional[str]]


def _as_lookup(nodes: NodeLookup) -> Mapping[str, Node]:
    if isinstance(nodes, Mapping):
        return nodes
    return {n.id: n for n in nodes}


def _port_type_of(node: Node, handle: Optional[str], output: bool) -> Optional[str]:
    """Declared type flowing through (node, handle), None when untyped."""
    if node.kind is NodeKind.SIGNAL:
        return node.payload.signal_type
    if node.kind is NodeKind.BLOCK:
        port = node.payload.get_output(handle) if output else node.payload.get_input(handle)
        return port.type if port else None
    return None


def _check_port_types(source: Node, target: Node, edge: Edge) -> Optional[str]:
    source_type = _port_type_of(source, edge.source_handle, output=True)
    target_type = _port_type_of(target, edge.target_handle, output=False)
    if source_type is None or target_type is None:
        return None
    if not get_port_type(source_type).is_compatible_with(get_port_type(target_type)):
        return f"Port type mismatch: {source_type} cannot drive {target_type}"
    return None


def _typed_wire(source: Node, target: Node, edge: Edge, strict: bool) -> Optional[str]:
    # signal -> block, block -> signal, block -> block
    return _check_port_types(source, target, edge) if strict else None


def _twilio_trigger(source: Node, target: Node, edge: Edge, strict: bool) -> Optional[str]:
    if source.kind is NodeKind.SIGNAL and source.payload.signal_type != "bool":
        return TWILIO_BOOL_ONLY
    if strict and source.kind is NodeKind.BLOCK:
        port = source.payload.get_output(edge.source_handle)
        if port and not get_port_type(port.type).is_compatible_with(get_port_type("bool")):
            return TWILIO_BOOL_ONLY
    return None


KIND_RULES: Dict[Tuple[NodeKind, NodeKind], KindRule] = {
    (NodeKind.SIGNAL, NodeKind.BLOCK): _typed_wire,
    (NodeKind.BLOCK, NodeKind.SIGNAL): _typed_wire,
    (NodeKind.BLOCK, NodeKind.BLOCK): _typed_wire,
}
for _kind in NodeKind:
    KIND_RULES.setdefault((_kind, NodeKind.TWILIO), _twilio_trigger)


def _check_handle(node: Node, handle: Optional[str], output: bool) -> Optional[str]:
    if node.kind is not NodeKind.BLOCK:
        return None
    ports: Tuple[PortSpec, ...] = node.payload.outputs if output else node.payload.inputs
    if handle is None or all(p.name != handle for p in ports):
        direction = "output" if output else "input"
        return f"{INVALID_CONNECTION}: block '{node.label}' has no {direction} port '{handle}'"
    return None


def check_structure(edge: Edge, nodes: NodeLookup) -> Optional[str]:
    """Structural part of the rules (endpoints and block handles)."""
    lookup = _as_lookup(nodes)
    source = lookup.get(edge.source_node_id)
    target = lookup.get(edge.target_node_id)
    if source is None or target is None:
        return INVALID_CONNECTION
    return _check_handle(source, edge.source_handle, output=True) or \
        _check_handle(target, edge.target_handle, output=False)


def check_kind_rules(edge: Edge, nodes: NodeLookup, strict_port_types: bool = False) -> Optional[str]:
    """Kind compatibility part of the rules for a structurally valid edge."""
    lookup = _as_lookup(nodes)
    source = lookup.get(edge.source_node_id)
    target = lookup.get(edge.target_node_id)
    if source is None or target is None:
        return None
    rule = KIND_RULES.get((source.kind, target.kind))
    return rule(source, target, edge, strict_port_types) if rule else None


def validate_connection(
    edge: Edge,
    nodes: NodeLookup,
    edges: Iterable[Edge],
    strict_port_types: bool = False,
) -> ValidationResult:
    """
    Validate a candidate edge against the current document.

    Args:
        edge: Candidate edge (its id is ignored)
        nodes: Nodes of the document (iterable or id -> Node mapping)
        edges: Existing edges
        strict_port_types: Also reject bool/numeric port type mismatches

    Returns:
        ValidationResult; result.error carries the user-facing message
    """
    lookup = _as_lookup(nodes)

    error = check_structure(edge, lookup)
    if error:
        return ValidationResult.failure(error)

    if any(existing.key == edge.key for existing in edges):
        return ValidationResult.failure(CONNECTION_EXISTS)

    error = check_kind_rules(edge, lookup, strict_port_types)
    if error:
        return ValidationResult.failure(error)
    return ValidationResult.success()
