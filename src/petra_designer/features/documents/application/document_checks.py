"""
Document checks

Whole-document validation on top of the per-edge and per-node validators.
"""
from dataclasses import dataclass, field
from typing import List

from petra_designer.features.connections.application.connection_validator import (
    CONNECTION_EXISTS,
    check_kind_rules,
    check_structure,
)
from petra_designer.features.documents.domain.document import Document
from petra_designer.features.nodes.application.field_validator import validate_fields
from petra_designer.features.nodes.application.naming import assign_signal_names
from petra_designer.features.nodes.domain.node_kind import NodeKind
from petra_designer.shared.application.validation.validation_framework import ValidationResult


def check_structure_invariants(document: Document) -> ValidationResult:
    """
    Invariants a stored document must always satisfy: unique ids, edge
    endpoints and block handles resolve, no duplicate edge keys.
    """
    result = ValidationResult()
    node_map = {}
    for node in document.nodes:
        if node.id in node_map:
            result.add_error(f"Duplicate node id '{node.id}'")
        node_map[node.id] = node

    edge_ids = set()
    edge_keys = set()
    for edge in document.edges:
        if edge.id in edge_ids:
            result.add_error(f"Duplicate edge id '{edge.id}'")
        edge_ids.add(edge.id)

        error = check_structure(edge, node_map)
        if error:
            result.add_error(f"Edge {edge.id} ({edge}): {error}")
        if edge.key in edge_keys:
            result.add_error(f"Edge {edge.id} ({edge}): {CONNECTION_EXISTS}")
        edge_keys.add(edge.key)
    return result


def check_document(document: Document, strict_port_types: bool = False) -> ValidationResult:
    """
    Full check: structural invariants, connection kind rules, unique signal
    names and every node's field rules. Collects all errors.
    """
    result = check_structure_invariants(document)

    node_map = document.node_map()
    for edge in document.edges:
        if check_structure(edge, node_map) is None:
            error = check_kind_rules(edge, node_map, strict_port_types)
            if error:
                result.add_error(f"Edge {edge.id} ({edge}): {error}")

    _, duplicates = assign_signal_names(document.nodes_of_kind(NodeKind.SIGNAL))
    for name in duplicates:
        result.add_error(f"Duplicate signal name '{name}'")

    for node in document.nodes:
        fields_result = validate_fields(node)
        if not fields_result.valid:
            result.add_error(f"{node.kind.value} '{node.label or node.id}': {fields_result.error}")
    return result


@dataclass
class LogicSummary:
    valid: bool
    node_count: int
    connection_count: int
    errors: List[str] = field(default_factory=list)


def validate_logic(document: Document) -> LogicSummary:
    """Summary shown before export."""
    errors = []
    if not document.nodes:
        errors.append("No blocks in design")
    errors.extend(check_document(document).errors)
    return LogicSummary(
        valid=not errors,
        node_count=len(document.nodes),
        connection_count=len(document.edges),
        errors=errors,
    )
