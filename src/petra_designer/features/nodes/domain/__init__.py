"""
Domain layer for nodes feature.

Contains:
- NodeKind value object
- Payload variants (one per kind) and PortSpec
- Node entity and Position
- Block catalog and default payloads
"""
from petra_designer.features.nodes.domain.node_kind import NodeKind
from petra_designer.features.nodes.domain.payloads import (
    Payload,
    PortSpec,
    SignalPayload,
    BlockPayload,
    MqttPayload,
    S7Payload,
    TwilioPayload,
    ModbusPayload,
    apply_patch,
    payload_class,
)
from petra_designer.features.nodes.domain.node import Node, Position
from petra_designer.features.nodes.domain.block_catalog import BlockSpec, get_block_spec
from petra_designer.features.nodes.domain.node_defaults import default_payload, block_payload_for

__all__ = [
    'NodeKind',
    'Payload',
    'PortSpec',
    'SignalPayload',
    'BlockPayload',
    'MqttPayload',
    'S7Payload',
    'TwilioPayload',
    'ModbusPayload',
    'apply_patch',
    'payload_class',
    'Node',
    'Position',
    'BlockSpec',
    'get_block_spec',
    'default_payload',
    'block_payload_for',
]
