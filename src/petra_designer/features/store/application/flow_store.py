"""
Flow Store

Owns the designer state and is the API surface consumed by a UI layer.

Every mutation runs through a pure transition (see transitions.py). On
success the new state is committed, the document is recorded in the
snapshot history and a domain event is published. On rejection nothing
changes and the CommandResult carries the validator's message.

Usage:
    store = FlowStore()
    signal = store.add_node("signal", (0, 0)).data
    block = store.add_node("GT", (300, 0)).data
    result = store.connect(candidate(signal.id, block.id, target_handle="in1"))
    if not result.success:
        show(result.message)
    text = store.generate()
"""
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Union

from petra_designer.application.api.result_types import CommandResult
from petra_designer.application.errors import DesignerError, ParseError
from petra_designer.application.events.event_bus import EventBus
from petra_designer.application.events.events import (
    ConnectionCreated,
    ConnectionRemoved,
    DocumentReplaced,
    DomainEvent,
    HistoryMoved,
    NodeAdded,
    NodeRemoved,
    NodeUpdated,
    SelectionChanged,
)
from petra_designer.application.settings.designer_settings import DesignerSettings
from petra_designer.features.config.application.config_generator import generate_config
from petra_designer.features.config.application.config_parser import ParsedFlow, parse_config
from petra_designer.features.connections.application.connection_validator import validate_connection
from petra_designer.features.connections.domain.connection import Edge
from petra_designer.features.documents.application.document_checks import (
    LogicSummary,
    check_document,
    validate_logic,
)
from petra_designer.features.documents.domain.document import Document
from petra_designer.features.nodes.application.field_validator import validate_fields
from petra_designer.features.nodes.domain.node import Node, Position
from petra_designer.features.nodes.domain.node_defaults import default_payload
from petra_designer.features.store.application.history import SnapshotHistory
from petra_designer.features.store.application.transitions import (
    AddNode,
    Clear,
    Connect,
    DeleteEdge,
    DeleteNode,
    FlowState,
    Load,
    MoveNode,
    Select,
    UpdatePayload,
    apply_action,
)
from petra_designer.shared.application.validation.validation_framework import ValidationResult
from petra_designer.utils.message import Log


class FlowStore:
    """
    Holds the canonical (nodes, edges, selection) state.

    Not thread-safe: one mutation commits fully before the next begins.
    """

    def __init__(
        self,
        settings: Optional[DesignerSettings] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.settings = settings or DesignerSettings()
        self.event_bus = event_bus or EventBus()
        self._state = FlowState()
        self._history = SnapshotHistory(self.settings.history_limit, self._state.document)

    # State access

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def document(self) -> Document:
        return self._state.document

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self._state.nodes

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._state.edges

    @property
    def selected_node_id(self) -> Optional[str]:
        return self._state.selected_node_id

    @property
    def selected_node(self) -> Optional[Node]:
        if self._state.selected_node_id is None:
            return None
        return self.document.get_node(self._state.selected_node_id)

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.document.get_node(node_id)

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self.document.get_edge(edge_id)

    # Events

    def subscribe(self, event: Union[str, type], handler: Callable[[DomainEvent], None]) -> None:
        self.event_bus.subscribe(event, handler)

    def unsubscribe(self, event: Union[str, type], handler: Callable[[DomainEvent], None]) -> None:
        self.event_bus.unsubscribe(event, handler)

    # Internals

    def _apply(self, action: Any, record: bool = True) -> FlowState:
        """
        Apply an action and commit the result.

        Raises:
            DesignerError: If the action is rejected; nothing is committed
        """
        new_state = apply_action(self._state, action)
        document_changed = new_state.document is not self._state.document
        self._state = new_state
        if record and document_changed:
            self._history.push(new_state.document)
        return new_state

    def _rejected(self, operation: str, error: DesignerError) -> CommandResult:
        Log.warning(f"FlowStore: {operation} rejected: {error.message}")
        return CommandResult.error_result(message=error.message)

    # Mutations

    def add_node(
        self,
        kind: str,
        position: Any = None,
        node_id: str = "",
        payload: Optional[Mapping[str, Any]] = None,
    ) -> CommandResult[Node]:
        """
        Add a node with the default payload for its kind.

        Args:
            kind: Node kind ("signal", "block", "mqtt", ...) or a block type
                ("GT", "ON_DELAY", ...) which creates a preset block node
            position: Canvas position, (x, y) or {"x", "y"}; origin when None
            node_id: Explicit id (generated when empty)
            payload: Field overrides applied to the default payload
        """
        try:
            defaults = default_payload(kind)
        except ValueError as e:
            Log.warning(f"FlowStore: add_node rejected: {e}")
            return CommandResult.error_result(message=str(e))

        try:
            node = Node(node_id, Position.coerce(position or (0, 0)), defaults)
            if payload:
                node = node.with_payload(payload)
            self._apply(AddNode(node))
        except (KeyError, TypeError, ValueError) as e:
            message = e.args[0] if isinstance(e, KeyError) and e.args else str(e)
            Log.warning(f"FlowStore: add_node rejected: {message}")
            return CommandResult.error_result(message=message)
        except DesignerError as e:
            return self._rejected("add_node", e)

        Log.info(f"FlowStore: Added {node}")
        self.event_bus.publish(NodeAdded(data={"node_id": node.id, "kind": node.kind.value}))
        return CommandResult.success_result(message=f"Added {node.kind.value} '{node.label}'", data=node)

    def update_payload(
        self,
        node_id: str,
        patch: Mapping[str, Any],
        validate: bool = True,
    ) -> CommandResult[Node]:
        """
        Patch payload fields of a node.

        With validate=True (default) the patched node must pass field
        validation or the update is rejected. Changing a block's type resets
        its ports and params and removes wires to ports that disappeared.
        An update that leaves a remaining wire breaking the connection rules (for
        example a Twilio trigger signal that is no longer bool) is rejected.
        """
        edges_before = {e.id for e in self.edges}
        try:
            self._apply(UpdatePayload(node_id, dict(patch), validate, self.settings.strict_port_types))
        except DesignerError as e:
            return self._rejected("update_payload", e)

        node = self.document.get_node(node_id)
        dropped = sorted(edges_before - {e.id for e in self.edges})
        Log.info(f"FlowStore: Updated {node} fields: {', '.join(patch) or '-'}")
        self.event_bus.publish(NodeUpdated(data={
            "node_id": node_id,
            "fields": list(patch),
            "dropped_edge_ids": dropped,
        }))
        return CommandResult.success_result(message=f"Updated '{node.label}'", data=node)

    def move_node(self, node_id: str, position: Any) -> CommandResult[Node]:
        try:
            self._apply(MoveNode(node_id, Position.coerce(position)))
        except DesignerError as e:
            return self._rejected("move_node", e)

        node = self.document.get_node(node_id)
        self.event_bus.publish(NodeUpdated(data={"node_id": node_id, "fields": ["position"]}))
        return CommandResult.success_result(message=f"Moved '{node.label}'", data=node)

    def delete_node(self, node_id: str) -> CommandResult[None]:
        """Delete a node and every edge touching it."""
        edge_ids = [e.id for e in self.document.edges_touching(node_id)]
        was_selected = self.selected_node_id == node_id
        try:
            self._apply(DeleteNode(node_id))
        except DesignerError as e:
            return self._rejected("delete_node", e)

        Log.info(f"FlowStore: Deleted node {node_id} and {len(edge_ids)} edge(s)")
        self.event_bus.publish(NodeRemoved(data={"node_id": node_id, "edge_ids": edge_ids}))
        if was_selected:
            self.event_bus.publish(SelectionChanged(data={"node_id": None}))
        return CommandResult.success_result(message=f"Deleted node {node_id}")

    def connect(self, edge: Edge) -> CommandResult[Edge]:
        """
        Add an edge after running the connection validator.

        The rejection message is the validator's message.
        """
        try:
            self._apply(Connect(edge, self.settings.strict_port_types))
        except DesignerError as e:
            return self._rejected("connect", e)

        Log.info(f"FlowStore: Connected {edge}")
        self.event_bus.publish(ConnectionCreated(data={"edge_id": edge.id}))
        return CommandResult.success_result(message=f"Connected {edge}", data=edge)

    def delete_edge(self, edge_id: str) -> CommandResult[None]:
        try:
            self._apply(DeleteEdge(edge_id))
        except DesignerError as e:
            return self._rejected("delete_edge", e)

        Log.info(f"FlowStore: Deleted edge {edge_id}")
        self.event_bus.publish(ConnectionRemoved(data={"edge_id": edge_id}))
        return CommandResult.success_result(message=f"Deleted edge {edge_id}")

    def clear(self) -> CommandResult[None]:
        self._apply(Clear())
        Log.info("FlowStore: Cleared document")
        self.event_bus.publish(DocumentReplaced(data={"reason": "clear"}))
        return CommandResult.success_result(message="Cleared document")

    def load(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> CommandResult[Document]:
        """
        Replace the whole document.

        Rejected when an edge dangles, duplicates another or names a port
        its block does not declare.
        """
        try:
            document = Document(nodes, edges)
            self._apply(Load(document))
        except DesignerError as e:
            return self._rejected("load", e)

        Log.info(f"FlowStore: Loaded {len(document.nodes)} node(s), {len(document.edges)} edge(s)")
        self.event_bus.publish(DocumentReplaced(data={"reason": "load"}))
        return CommandResult.success_result(message="Loaded document", data=document)

    def select(self, node_id: Optional[str]) -> CommandResult[Optional[Node]]:
        """Select a node (None clears the selection). Not recorded in history."""
        try:
            self._apply(Select(node_id), record=False)
        except DesignerError as e:
            return self._rejected("select", e)

        self.event_bus.publish(SelectionChanged(data={"node_id": node_id}))
        return CommandResult.success_result(message="Selection changed", data=self.selected_node)

    # History

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo()

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo()

    def _restore(self, document: Document, direction: str) -> CommandResult[Document]:
        selected = self.selected_node_id
        if selected is not None and document.get_node(selected) is None:
            selected = None
        self._state = FlowState(document, selected)
        Log.info(f"FlowStore: {direction.capitalize()} to snapshot {self._history.cursor}")
        self.event_bus.publish(HistoryMoved(data={
            "direction": direction,
            "cursor": self._history.cursor,
        }))
        return CommandResult.success_result(message=direction.capitalize(), data=document)

    def undo(self) -> CommandResult[Document]:
        document = self._history.undo()
        if document is None:
            return CommandResult.error_result(message="Nothing to undo")
        return self._restore(document, "undo")

    def redo(self) -> CommandResult[Document]:
        document = self._history.redo()
        if document is None:
            return CommandResult.error_result(message="Nothing to redo")
        return self._restore(document, "redo")

    # Validation

    def validate_field(self, node: Union[Node, str]) -> ValidationResult:
        """Field validation for a node or a node id."""
        if isinstance(node, str):
            found = self.document.get_node(node)
            if found is None:
                return ValidationResult.failure(f"Node not found: {node}")
            node = found
        return validate_fields(node)

    def validate_connection(self, edge: Edge) -> ValidationResult:
        return validate_connection(edge, self.document.node_map(), self.edges,
                                   strict_port_types=self.settings.strict_port_types)

    def validate_logic(self) -> LogicSummary:
        return validate_logic(self.document)

    def check(self) -> ValidationResult:
        return check_document(self.document, self.settings.strict_port_types)

    # Config text

    def generate(self) -> str:
        """
        Configuration text for the current document.

        Raises:
            ConfigGenerationError: If two signals share a canonical name
        """
        text = generate_config(self.nodes, self.edges, self.settings)
        Log.info(f"FlowStore: Generated config ({len(self.nodes)} node(s))")
        return text

    def parse(self, text: str) -> ParsedFlow:
        """Parse configuration text without touching the store."""
        return parse_config(text)

    def import_config(self, text: str) -> CommandResult[ParsedFlow]:
        """
        Replace the document with the one described by configuration text.

        A parse failure leaves the store unchanged.
        """
        try:
            flow = parse_config(text)
        except ParseError as e:
            return self._rejected("import_config", e)

        result = self.load(flow.nodes, flow.edges)
        if not result.success:
            return CommandResult.error_result(message=result.message, errors=result.errors)
        return CommandResult(
            status=result.status,
            message=(
                f"Imported {len(flow.nodes)} node(s), {len(flow.edges)} edge(s), "
                f"{len(flow.warnings)} warning(s)"
            ),
            data=flow,
        )

    def import_file(self, path: Union[str, Path]) -> CommandResult[ParsedFlow]:
        """Read a configuration file and import it (see import_config)."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            Log.warning(f"FlowStore: import_file could not read {path}: {e}")
            return CommandResult.error_result(message=f"Could not read {path}: {e}")
        return self.import_config(text)
