"""
Config Parser

Rebuilds a document from runtime configuration text.

Layout is synthetic: signals in a column at x=0, blocks at x=300,
protocol nodes at x=600. Block ports are recreated from the keys of the
entry's inputs/outputs maps and typed "any" since the format carries no
port types.

A block port naming something other than a declared signal (for example an
upstream block, see ConfigGenerator) cannot be rewired; the wire is dropped
and reported in ParsedFlow.warnings.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from petra_designer.application.errors import ParseError
from petra_designer.features.config.infrastructure.yaml_codec import load_config
from petra_designer.features.connections.domain.connection import Edge
from petra_designer.features.nodes.domain.node import Node, Position
from petra_designer.features.nodes.domain.payloads import (
    SIGNAL_TYPES,
    BlockPayload,
    MqttPayload,
    PortSpec,
    S7Payload,
    SignalPayload,
    TwilioPayload,
)
from petra_designer.utils.message import Log


SIGNAL_COLUMN_X = 0
BLOCK_COLUMN_X = 300
PROTOCOL_COLUMN_X = 600
SIGNAL_ROW_HEIGHT = 80
BLOCK_ROW_HEIGHT = 120


@dataclass
class ParsedFlow:
    """Result of parse_config()."""
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    scan_time_ms: Optional[int] = None


def _section_list(config: Mapping, key: str) -> List[Any]:
    value = config.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _section_map(config: Mapping, key: str) -> Optional[Mapping]:
    value = config.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ParseError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def _entry(value: Any, where: str, required: Tuple[str, ...] = ()) -> Mapping:
    if not isinstance(value, Mapping):
        raise ParseError(f"{where}: expected a mapping, got {type(value).__name__}")
    for key in required:
        if value.get(key) in (None, ""):
            raise ParseError(f"{where}: missing '{key}'")
    return value


def _port_map(value: Any, where: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ParseError(f"{where}: expected a mapping of port -> signal")
    if any(port is None or not str(port).strip() for port in value):
        raise ParseError(f"{where}: port names cannot be empty")
    return {str(port): (None if name is None else str(name)) for port, name in value.items()}


class _FlowBuilder:
    """Accumulates nodes, edges and warnings while walking the config."""

    def __init__(self):
        self.flow = ParsedFlow()
        self.signal_ids: Dict[str, str] = {}
        self.protocol_row = 0

    def warn(self, message: str) -> None:
        self.flow.warnings.append(message)
        Log.warning(f"ConfigParser: {message}")

    def add_protocol_node(self, node_id: str, payload) -> Node:
        node = Node(node_id, Position(PROTOCOL_COLUMN_X, self.protocol_row * BLOCK_ROW_HEIGHT), payload)
        self.protocol_row += 1
        self.flow.nodes.append(node)
        return node

    def signals(self, entries: List[Any]) -> None:
        for idx, raw in enumerate(entries):
            where = f"signals[{idx}]"
            entry = _entry(raw, where, required=("name",))
            name = str(entry["name"])
            signal_type = entry.get("type") or "float"
            if signal_type not in SIGNAL_TYPES:
                raise ParseError(
                    f"{where}: unknown signal type '{signal_type}' "
                    f"(expected one of: {', '.join(SIGNAL_TYPES)})"
                )
            initial = entry.get("initial")
            node_id = f"signal_{idx}"
            self.flow.nodes.append(Node(
                node_id,
                Position(SIGNAL_COLUMN_X, idx * SIGNAL_ROW_HEIGHT),
                SignalPayload(
                    label=name,
                    signal_type=signal_type,
                    initial=0 if initial is None else initial,
                    mode=entry.get("mode") or "write",
                ),
            ))
            if name in self.signal_ids:
                self.warn(f"{where}: duplicate signal name '{name}'; wires resolve to the first one")
                continue
            self.signal_ids[name] = node_id

    def blocks(self, entries: List[Any]) -> None:
        for idx, raw in enumerate(entries):
            where = f"blocks[{idx}]"
            entry = _entry(raw, where, required=("type",))
            node_id = f"block_{idx}"
            inputs = _port_map(entry.get("inputs"), f"{where}.inputs")
            outputs = _port_map(entry.get("outputs"), f"{where}.outputs")
            params = entry.get("params") or {}
            if not isinstance(params, Mapping):
                raise ParseError(f"{where}.params: expected a mapping")

            label = str(entry.get("name") or node_id)
            self.flow.nodes.append(Node(
                node_id,
                Position(BLOCK_COLUMN_X, idx * BLOCK_ROW_HEIGHT),
                BlockPayload(
                    label=label,
                    block_type=str(entry["type"]),
                    inputs=[PortSpec(port, "any") for port in inputs],
                    outputs=[PortSpec(port, "any") for port in outputs],
                    params=dict(params),
                ),
            ))

            for port, signal_name in inputs.items():
                signal_id = self.signal_ids.get(signal_name)
                if signal_id is None:
                    self.warn(f"Block '{label}' input '{port}' references unknown signal "
                              f"'{signal_name}'; wire dropped")
                    continue
                self.flow.edges.append(Edge(f"{signal_id}-{node_id}-{port}", signal_id, node_id,
                                            target_handle=port))

            for port, signal_name in outputs.items():
                signal_id = self.signal_ids.get(signal_name)
                if signal_id is None:
                    self.warn(f"Block '{label}' output '{port}' references unknown signal "
                              f"'{signal_name}'; wire dropped")
                    continue
                self.flow.edges.append(Edge(f"{node_id}-{signal_id}-{port}", node_id, signal_id,
                                            source_handle=port))

    def twilio(self, section: Mapping) -> None:
        for idx, raw in enumerate(_section_list(section, "actions")):
            entry = _entry(raw, f"twilio.actions[{idx}]")
            node_id = f"twilio_{idx}"
            defaults = TwilioPayload()
            self.add_protocol_node(node_id, TwilioPayload(
                label=str(entry.get("name") or node_id),
                configured=True,
                action_type=entry.get("action_type") or defaults.action_type,
                to_number=str(entry.get("to_number") or defaults.to_number),
                content=str(entry.get("content") or defaults.content),
            ))

            trigger = entry.get("trigger_signal")
            if isinstance(trigger, (Mapping, list)):
                raise ParseError(f"twilio.actions[{idx}].trigger_signal: expected a signal name, "
                                 f"got {type(trigger).__name__}")
            trigger = None if trigger is None else str(trigger)
            signal_id = self.signal_ids.get(trigger)
            if signal_id is None:
                self.warn(f"Twilio action '{entry.get('name') or node_id}' references unknown "
                          f"trigger signal '{trigger}'; wire dropped")
                continue
            self.flow.edges.append(Edge(f"{signal_id}-{node_id}", signal_id, node_id))

    def mqtt(self, section: Mapping) -> None:
        defaults = MqttPayload()
        self.add_protocol_node("mqtt_0", MqttPayload(
            label="MQTT",
            configured=True,
            broker_host=section.get("broker_host") or defaults.broker_host,
            broker_port=section.get("broker_port") or defaults.broker_port,
            client_id=section.get("client_id") or defaults.client_id,
            topic_prefix=section.get("topic_prefix") or defaults.topic_prefix,
            publish_on_change=bool(section.get("publish_on_change", defaults.publish_on_change)),
        ))

    def s7(self, section: Mapping) -> None:
        # Each mapping becomes its own node carrying the shared connection
        defaults = S7Payload()
        connection = {
            "ip": section.get("ip") or defaults.ip,
            "rack": section.get("rack", defaults.rack),
            "slot": section.get("slot", defaults.slot),
        }
        for idx, raw in enumerate(_section_list(section, "mappings")):
            entry = _entry(raw, f"s7.mappings[{idx}]")
            signal = str(entry.get("signal") or defaults.signal)
            self.add_protocol_node(f"s7_{idx}", S7Payload(
                label=f"S7 {signal}",
                configured=True,
                area=entry.get("area") or defaults.area,
                db_number=entry.get("db_number", defaults.db_number),
                address=entry.get("address", defaults.address),
                data_type=entry.get("data_type") or defaults.data_type,
                bit=entry.get("bit"),
                direction=entry.get("direction") or defaults.direction,
                signal=signal,
                **connection,
            ))


def parse_config(text: str) -> ParsedFlow:
    """
    Parse configuration text into nodes and edges.

    Missing top-level keys are treated as empty; empty text gives an empty
    flow.

    Raises:
        ParseError: If the text is not YAML, is not a mapping at the top
            level, or holds a malformed signal or block entry
    """
    config = load_config(text or "")
    if config is None:
        return ParsedFlow()
    if not isinstance(config, Mapping):
        raise ParseError(f"Configuration must be a mapping at the top level, got {type(config).__name__}")

    builder = _FlowBuilder()
    builder.signals(_section_list(config, "signals"))
    builder.blocks(_section_list(config, "blocks"))

    twilio = _section_map(config, "twilio")
    if twilio is not None:
        builder.twilio(twilio)
    mqtt = _section_map(config, "mqtt")
    if mqtt is not None:
        builder.mqtt(mqtt)
    s7 = _section_map(config, "s7")
    if s7 is not None:
        builder.s7(s7)

    flow = builder.flow
    scan_time = config.get("scan_time_ms")
    if scan_time is not None:
        if isinstance(scan_time, bool) or not isinstance(scan_time, int):
            raise ParseError(f"'scan_time_ms' must be an integer, got {scan_time!r}")
        flow.scan_time_ms = scan_time

    Log.parser(
        f"ConfigParser: Parsed {len(flow.nodes)} node(s), {len(flow.edges)} edge(s), "
        f"{len(flow.warnings)} warning(s)"
    )
    return flow
