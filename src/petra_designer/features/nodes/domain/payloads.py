"""
Node payloads

One frozen dataclass per node kind. The payload class is the tag: a node's
kind is always the kind of its payload, so kind and fields cannot disagree.

Enumerated fields are plain strings so that documents round-trip through
JSON/YAML unchanged; their allowed values live in the constants below and
are enforced by the field validator.
"""
from dataclasses import dataclass, field, fields, replace
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Union

from petra_designer.features.nodes.domain.node_kind import NodeKind


SIGNAL_TYPES = ("bool", "int", "float")
SIGNAL_MODES = ("read", "write")
MQTT_MODES = ("read", "write", "read_write")
DIRECTIONS = ("read", "write", "read_write")
S7_AREAS = ("DB", "I", "Q", "M")
S7_DATA_TYPES = ("bool", "byte", "word", "int", "dint", "real")
TWILIO_ACTION_TYPES = ("sms", "call")
MODBUS_DATA_TYPES = ("coil", "discrete_input", "holding_register", "input_register")

Scalar = Union[bool, int, float]


@dataclass(frozen=True)
class PortSpec:
    """Named, typed port declared on a block."""
    name: str
    type: str = "any"

    def __post_init__(self):
        if not self.name or not str(self.name).strip():
            raise ValueError("Port name cannot be empty")

    def to_dict(self) -> dict:
        return {"name": self.name, "type": self.type}

    @classmethod
    def coerce(cls, value: Any) -> 'PortSpec':
        """Accept a PortSpec, a {"name", "type"} mapping or a bare name."""
        if isinstance(value, PortSpec):
            return value
        if isinstance(value, Mapping):
            return cls(name=str(value["name"]), type=str(value.get("type", "any")))
        return cls(name=str(value))


def _ports(values: Any) -> Tuple[PortSpec, ...]:
    return tuple(PortSpec.coerce(v) for v in (values or ()))


@dataclass(frozen=True)
class Payload:
    """Base class for all payloads."""
    kind: ClassVar[NodeKind]
    label: str = ""

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Payload':
        """Build from a mapping, ignoring keys the payload does not declare."""
        known = set(cls.field_names())
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class SignalPayload(Payload):
    kind: ClassVar[NodeKind] = NodeKind.SIGNAL
    label: str = "New Signal"
    signal_type: str = "float"
    initial: Scalar = 0
    mode: str = "write"


@dataclass(frozen=True)
class BlockPayload(Payload):
    kind: ClassVar[NodeKind] = NodeKind.BLOCK
    label: str = "New Block"
    block_type: str = "AND"
    inputs: Tuple[PortSpec, ...] = ()
    outputs: Tuple[PortSpec, ...] = ()
    params: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "inputs", _ports(self.inputs))
        object.__setattr__(self, "outputs", _ports(self.outputs))
        object.__setattr__(self, "params", dict(self.params or {}))

    def input_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.inputs)

    def output_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.outputs)

    def get_input(self, name: str) -> Optional[PortSpec]:
        return next((p for p in self.inputs if p.name == name), None)

    def get_output(self, name: str) -> Optional[PortSpec]:
        return next((p for p in self.outputs if p.name == name), None)

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "block_type": self.block_type,
            "inputs": [p.to_dict() for p in self.inputs],
            "outputs": [p.to_dict() for p in self.outputs],
            "params": dict(self.params),
        }


@dataclass(frozen=True)
class MqttPayload(Payload):
    kind: ClassVar[NodeKind] = NodeKind.MQTT
    label: str = "New MQTT"
    configured: bool = False
    broker_host: str = "localhost"
    broker_port: int = 1883
    client_id: str = "petra_client"
    topic_prefix: str = "petra"
    username: Optional[str] = None
    password: Optional[str] = None
    mode: str = "read_write"
    publish_on_change: bool = True


@dataclass(frozen=True)
class S7Payload(Payload):
    kind: ClassVar[NodeKind] = NodeKind.S7
    label: str = "New S7"
    configured: bool = False
    ip: str = "192.168.1.100"
    rack: int = 0
    slot: int = 1
    area: str = "DB"
    db_number: int = 1
    address: int = 0
    data_type: str = "real"
    bit: Optional[int] = None
    direction: str = "read"
    signal: str = "plc_data"


@dataclass(frozen=True)
class TwilioPayload(Payload):
    kind: ClassVar[NodeKind] = NodeKind.TWILIO
    label: str = "New Twilio"
    configured: bool = False
    action_type: str = "sms"
    to_number: str = "+1234567890"
    content: str = "Alert from PETRA"


@dataclass(frozen=True)
class ModbusPayload(Payload):
    kind: ClassVar[NodeKind] = NodeKind.MODBUS
    label: str = "New Modbus"
    configured: bool = False
    host: str = "localhost"
    port: int = 502
    unit_id: int = 1
    address: int = 0
    data_type: str = "holding_register"
    direction: str = "read"
    signal: str = "modbus_data"


PAYLOAD_TYPES: Dict[NodeKind, type] = {
    NodeKind.SIGNAL: SignalPayload,
    NodeKind.BLOCK: BlockPayload,
    NodeKind.MQTT: MqttPayload,
    NodeKind.S7: S7Payload,
    NodeKind.TWILIO: TwilioPayload,
    NodeKind.MODBUS: ModbusPayload,
}


def payload_class(kind: NodeKind) -> type:
    return PAYLOAD_TYPES[kind]


def apply_patch(payload: Payload, patch: Mapping[str, Any]) -> Payload:
    """
    Return a copy of payload with the patched fields.

    Raises:
        KeyError: If the patch names a field the payload does not declare
    """
    known = set(payload.field_names())
    unknown = sorted(set(patch) - known)
    if unknown:
        raise KeyError(
            f"Unknown field(s) for {payload.kind.value} node: {', '.join(unknown)}"
        )
    return replace(payload, **dict(patch))
