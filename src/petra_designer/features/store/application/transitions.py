"""
Store transitions

The store state is an immutable FlowState; every mutation is an action
applied by a pure function:

    new_state = apply_action(state, action)

A transition either returns a complete new state or raises a DesignerError
before anything is built, so a rejected action can never leave a partial
write behind. The FlowStore facade owns the current state, the history and
the event bus.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from petra_designer.application.errors import (
    DesignerError,
    DuplicateError,
    FieldValidationError,
    IncompatibleConnectionError,
    StructuralError,
)
from petra_designer.features.connections.application.connection_validator import (
    CONNECTION_EXISTS,
    INVALID_CONNECTION,
    check_kind_rules,
    check_structure,
    validate_connection,
)
from petra_designer.features.connections.domain.connection import Edge
from petra_designer.features.documents.application.document_checks import check_structure_invariants
from petra_designer.features.documents.domain.document import EMPTY_DOCUMENT, Document
from petra_designer.features.nodes.application.field_validator import validate_fields
from petra_designer.features.nodes.domain.block_catalog import get_block_spec
from petra_designer.features.nodes.domain.node import Node, Position
from petra_designer.features.nodes.domain.node_kind import NodeKind


@dataclass(frozen=True)
class FlowState:
    """The (nodes, edges, selection) triple."""
    document: Document = EMPTY_DOCUMENT
    selected_node_id: Optional[str] = None

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self.document.nodes

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self.document.edges


# Actions

@dataclass(frozen=True)
class AddNode:
    node: Node


@dataclass(frozen=True)
class UpdatePayload:
    node_id: str
    patch: Mapping[str, Any] = field(default_factory=dict)
    validate: bool = True
    strict_port_types: bool = False


@dataclass(frozen=True)
class MoveNode:
    node_id: str
    position: Position


@dataclass(frozen=True)
class DeleteNode:
    node_id: str


@dataclass(frozen=True)
class Connect:
    edge: Edge
    strict_port_types: bool = False


@dataclass(frozen=True)
class DeleteEdge:
    edge_id: str


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Load:
    document: Document


@dataclass(frozen=True)
class Select:
    node_id: Optional[str]


def _require_node(state: FlowState, node_id: str) -> Node:
    node = state.document.get_node(node_id)
    if node is None:
        raise StructuralError(f"Node not found: {node_id}")
    return node


def _replace_node(document: Document, node: Node) -> Document:
    return document.with_nodes(node if n.id == node.id else n for n in document.nodes)


def _add_node(state: FlowState, action: AddNode) -> FlowState:
    if state.document.get_node(action.node.id) is not None:
        raise DuplicateError(f"Node id already exists: {action.node.id}")
    return replace(state, document=state.document.with_nodes(state.nodes + (action.node,)))


def _with_block_type_defaults(node: Node, patch: Mapping[str, Any]) -> Dict[str, Any]:
    """
    A block type change resets ports and params to the catalog defaults
    unless the patch sets them itself.
    """
    patch = dict(patch)
    new_type = patch.get("block_type")
    if node.kind is not NodeKind.BLOCK or new_type is None or new_type == node.payload.block_type:
        return patch
    spec = get_block_spec(new_type)
    patch.setdefault("inputs", spec.inputs)
    patch.setdefault("outputs", spec.outputs)
    patch.setdefault("params", spec.default_params())
    return patch


def _update_payload(state: FlowState, action: UpdatePayload) -> FlowState:
    node = _require_node(state, action.node_id)
    patch = _with_block_type_defaults(node, action.patch)
    try:
        updated = node.with_payload(patch)
    except (KeyError, TypeError, ValueError) as e:
        message = e.args[0] if isinstance(e, KeyError) and e.args else str(e)
        raise FieldValidationError(message) from e

    if action.validate:
        validate_fields(updated).raise_if_invalid(FieldValidationError)

    document = _replace_node(state.document, updated)
    node_map = document.node_map()
    if updated.kind is NodeKind.BLOCK:
        # Drop wires whose handle no longer names a port
        document = document.with_edges(
            e for e in document.edges
            if not e.touches(updated.id) or check_structure(e, node_map) is None
        )
    # Remaining wires must still satisfy the kind rules
    for edge in document.edges:
        if edge.touches(updated.id):
            error = check_kind_rules(edge, node_map, action.strict_port_types)
            if error:
                raise IncompatibleConnectionError(f"{error} (edge {edge.id})")
    return replace(state, document=document)


def _move_node(state: FlowState, action: MoveNode) -> FlowState:
    node = _require_node(state, action.node_id)
    return replace(state, document=_replace_node(state.document, node.moved_to(action.position)))


def _delete_node(state: FlowState, action: DeleteNode) -> FlowState:
    _require_node(state, action.node_id)
    document = Document(
        nodes=(n for n in state.nodes if n.id != action.node_id),
        edges=(e for e in state.edges if not e.touches(action.node_id)),
    )
    selected = None if state.selected_node_id == action.node_id else state.selected_node_id
    return FlowState(document, selected)


def _connect(state: FlowState, action: Connect) -> FlowState:
    edge = action.edge
    result = validate_connection(edge, state.document.node_map(), state.edges,
                                 strict_port_types=action.strict_port_types)
    if not result.valid:
        if result.error.startswith(INVALID_CONNECTION):
            raise StructuralError(result.error)
        if result.error == CONNECTION_EXISTS:
            raise DuplicateError(result.error)
        raise IncompatibleConnectionError(result.error)
    if state.document.get_edge(edge.id) is not None:
        raise DuplicateError(f"Edge id already exists: {edge.id}")
    return replace(state, document=state.document.with_edges(state.edges + (edge,)))


def _delete_edge(state: FlowState, action: DeleteEdge) -> FlowState:
    if state.document.get_edge(action.edge_id) is None:
        raise StructuralError(f"Edge not found: {action.edge_id}")
    return replace(state, document=state.document.with_edges(
        e for e in state.edges if e.id != action.edge_id
    ))


def _clear(state: FlowState, action: Clear) -> FlowState:
    return FlowState()


def _load(state: FlowState, action: Load) -> FlowState:
    result = check_structure_invariants(action.document)
    if not result.valid:
        raise StructuralError("; ".join(result.errors))
    return FlowState(action.document)


def _select(state: FlowState, action: Select) -> FlowState:
    if action.node_id is not None:
        _require_node(state, action.node_id)
    return replace(state, selected_node_id=action.node_id)


_TRANSITIONS: Dict[type, Callable[[FlowState, Any], FlowState]] = {
    AddNode: _add_node,
    UpdatePayload: _update_payload,
    MoveNode: _move_node,
    DeleteNode: _delete_node,
    Connect: _connect,
    DeleteEdge: _delete_edge,
    Clear: _clear,
    Load: _load,
    Select: _select,
}


def apply_action(state: FlowState, action: Any) -> FlowState:
    """
    Apply an action to a state.

    Raises:
        DesignerError: If the action is rejected (state is left untouched)
    """
    transition = _TRANSITIONS.get(type(action))
    if transition is None:
        raise DesignerError(f"Unknown action: {type(action).__name__}")
    return transition(state, action)
