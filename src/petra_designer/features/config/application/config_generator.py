"""
Config Generator

Compiles a document (nodes + edges) into the runtime configuration.

build_config() returns the configuration mapping; generate_config() renders
it as YAML text. Both are pure and deterministic: the same document and
settings always give the same text.

Top-level key order: signals, blocks, scan_time_ms, twilio, mqtt, s7.
"""
from typing import Dict, Iterable, List, Optional, Sequence

from petra_designer.application.errors import ConfigGenerationError
from petra_designer.application.settings.designer_settings import DesignerSettings
from petra_designer.features.config.infrastructure.yaml_codec import dump_config
from petra_designer.features.connections.domain.connection import Edge
from petra_designer.features.documents.domain.document import Document
from petra_designer.features.nodes.application.naming import assign_signal_names, normalize
from petra_designer.features.nodes.domain.node import Node
from petra_designer.features.nodes.domain.node_kind import NodeKind
from petra_designer.utils.message import Log


UNKNOWN_TRIGGER = "unknown_trigger"
UNNAMED = "unnamed"


class _WireNames:
    """Resolves the name a wire carries, given the node at its far end."""

    def __init__(self, nodes: Sequence[Node]):
        self.nodes = {n.id: n for n in nodes}
        signals = [n for n in nodes if n.kind is NodeKind.SIGNAL]
        self.signal_names, self.duplicates = assign_signal_names(signals)
        self.block_names: Dict[str, str] = {}
        for index, node in enumerate(n for n in nodes if n.kind is NodeKind.BLOCK):
            self.block_names[node.id] = normalize(node.label, f"block_{index}")

    def name_of(self, node_id: str, fallback: str = UNNAMED) -> Optional[str]:
        """
        Signal canonical name; block-to-block wires carry the upstream
        block's name; anything else its normalized label.
        """
        if node_id in self.signal_names:
            return self.signal_names[node_id]
        if node_id in self.block_names:
            return self.block_names[node_id]
        node = self.nodes.get(node_id)
        if node is None:
            return None
        return normalize(node.label, fallback)


def _wired_ports(
    node: Node,
    port_names: Iterable[str],
    edges: Sequence[Edge],
    names: _WireNames,
    inputs: bool,
) -> Dict[str, str]:
    wiring: Dict[str, str] = {}
    for port in port_names:
        for edge in edges:
            if inputs and edge.target_node_id == node.id and edge.target_handle == port:
                other = edge.source_node_id
            elif not inputs and edge.source_node_id == node.id and edge.source_handle == port:
                other = edge.target_node_id
            else:
                continue
            if other in names.block_names:
                # Block-to-block wires are named after the upstream block on both ends
                other = edge.source_node_id
            name = names.name_of(other)
            if name is not None:
                wiring[port] = name
                break
    return wiring


def _signals_section(nodes: Sequence[Node], names: _WireNames) -> List[dict]:
    return [
        {
            "name": names.signal_names[node.id],
            "type": node.payload.signal_type,
            "initial": node.payload.initial,
        }
        for node in nodes if node.kind is NodeKind.SIGNAL
    ]


def _blocks_section(nodes: Sequence[Node], edges: Sequence[Edge], names: _WireNames) -> List[dict]:
    blocks = []
    for node in nodes:
        if node.kind is not NodeKind.BLOCK:
            continue
        payload = node.payload
        entry = {
            "name": names.block_names[node.id],
            "type": payload.block_type,
            "inputs": _wired_ports(node, payload.input_names(), edges, names, inputs=True),
            "outputs": _wired_ports(node, payload.output_names(), edges, names, inputs=False),
        }
        if payload.params:
            entry["params"] = dict(payload.params)
        blocks.append(entry)
    return blocks


def _twilio_section(
    document: Document,
    names: _WireNames,
    settings: DesignerSettings,
) -> Optional[dict]:
    twilio_nodes = [n for n in document.nodes_of_kind(NodeKind.TWILIO) if n.payload.configured]
    if not twilio_nodes:
        return None

    actions = []
    for index, node in enumerate(twilio_nodes):
        trigger = next(iter(document.incoming(node.id)), None)
        trigger_signal = UNKNOWN_TRIGGER
        if trigger is not None:
            trigger_signal = names.name_of(trigger.source_node_id, UNKNOWN_TRIGGER) or UNKNOWN_TRIGGER
        actions.append({
            "name": normalize(node.label, f"twilio_{index}"),
            "trigger_signal": trigger_signal,
            "action_type": node.payload.action_type,
            "to_number": node.payload.to_number,
            "content": node.payload.content,
            "cooldown_seconds": settings.twilio_cooldown_seconds,
        })
    return {"from_number": settings.twilio_from_number, "actions": actions}


def _mqtt_section(nodes: Sequence[Node]) -> Optional[dict]:
    # Only one broker connection is representable
    node = next((n for n in nodes if n.kind is NodeKind.MQTT and n.payload.configured), None)
    if node is None:
        return None
    payload = node.payload
    return {
        "broker_host": payload.broker_host,
        "broker_port": payload.broker_port,
        "client_id": payload.client_id,
        "topic_prefix": payload.topic_prefix,
        "publish_on_change": payload.publish_on_change,
    }


def _s7_section(nodes: Sequence[Node], settings: DesignerSettings) -> Optional[dict]:
    s7_nodes = [n for n in nodes if n.kind is NodeKind.S7 and n.payload.configured]
    if not s7_nodes:
        return None

    connection = s7_nodes[0].payload
    mappings = []
    for node in s7_nodes:
        payload = node.payload
        mapping = {
            "signal": payload.signal,
            "area": payload.area,
            "db_number": payload.db_number,
            "address": payload.address,
            "data_type": payload.data_type,
            "direction": payload.direction,
        }
        if payload.data_type == "bool":
            mapping["bit"] = payload.bit if payload.bit is not None else 0
        mappings.append(mapping)

    return {
        "ip": connection.ip,
        "rack": connection.rack,
        "slot": connection.slot,
        "poll_interval_ms": settings.s7_poll_interval_ms,
        "mappings": mappings,
    }


def build_config(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    settings: Optional[DesignerSettings] = None,
) -> dict:
    """
    Build the configuration mapping for a document.

    Args:
        nodes: Document nodes, in document order
        edges: Document edges, in document order
        settings: Source of the fixed constants (defaults when None)

    Returns:
        Ordered dict ready for dumping

    Raises:
        ConfigGenerationError: If two signals share a canonical name
    """
    settings = settings or DesignerSettings()
    nodes = tuple(nodes)
    edges = tuple(edges)

    names = _WireNames(nodes)
    if names.duplicates:
        raise ConfigGenerationError(
            f"Duplicate signal name(s): {', '.join(names.duplicates)}"
        )

    config = {
        "signals": _signals_section(nodes, names),
        "blocks": _blocks_section(nodes, edges, names),
        "scan_time_ms": settings.scan_time_ms,
    }
    optional_sections = (
        ("twilio", _twilio_section(Document(nodes, edges), names, settings)),
        ("mqtt", _mqtt_section(nodes)),
        ("s7", _s7_section(nodes, settings)),
    )
    for key, section in optional_sections:
        if section is not None:
            config[key] = section
    return config


def generate_config(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    settings: Optional[DesignerSettings] = None,
) -> str:
    """Render the document as configuration text (see build_config)."""
    config = build_config(nodes, edges, settings)
    Log.debug(
        f"ConfigGenerator: Generated {len(config['signals'])} signal(s), "
        f"{len(config['blocks'])} block(s)"
    )
    return dump_config(config)
