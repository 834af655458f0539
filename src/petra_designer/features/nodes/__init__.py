"""
Nodes feature module.

Usage:
    from petra_designer.features.nodes.domain import Node, SignalPayload
    from petra_designer.features.nodes.application import normalize, validate_fields
"""
from petra_designer.features.nodes.domain import (
    Node,
    NodeKind,
    Position,
)

__all__ = [
    'Node',
    'NodeKind',
    'Position',
]
