"""
Default payloads for newly added nodes.

add_node accepts either a node kind ("signal", "mqtt", ...) or a block type
("GT", "ON_DELAY", ...), the latter producing a block node preset from the
block catalog.
"""
from typing import Tuple

from petra_designer.features.nodes.domain.block_catalog import get_block_spec, is_known_block_type
from petra_designer.features.nodes.domain.node_kind import NodeKind
from petra_designer.features.nodes.domain.payloads import BlockPayload, Payload, payload_class


def block_payload_for(block_type: str, label: str = None) -> BlockPayload:
    spec = get_block_spec(block_type)
    block_type = spec.block_type or block_type
    return BlockPayload(
        label=label or f"New {block_type.upper()}",
        block_type=block_type,
        inputs=spec.inputs,
        outputs=spec.outputs,
        params=spec.default_params(),
    )


def resolve_kind(kind_or_block_type: str) -> Tuple[NodeKind, str]:
    """
    Map a palette entry to (node kind, block type).

    Raises:
        ValueError: If the entry is neither a node kind nor a known block type
    """
    try:
        kind = NodeKind.from_string(kind_or_block_type)
    except ValueError:
        if not is_known_block_type(kind_or_block_type):
            raise ValueError(f"Unknown node kind or block type: {kind_or_block_type!r}") from None
        return NodeKind.BLOCK, kind_or_block_type.upper()
    return kind, "AND" if kind is NodeKind.BLOCK else ""


def default_payload(kind_or_block_type: str) -> Payload:
    """Fresh payload for a palette entry."""
    kind, block_type = resolve_kind(kind_or_block_type)
    if kind is NodeKind.BLOCK:
        return block_payload_for(block_type)
    return payload_class(kind)()
