"""
Node kind value object

Closed set of node kinds a document may contain.
"""
from enum import Enum


class NodeKind(Enum):
    """
    Node kind enumeration.

    - SIGNAL: typed named value, single unnamed port
    - BLOCK: logic/math/timer unit with named ports
    - MQTT, S7, TWILIO: protocol adapters emitted into the config
    - MODBUS: extension adapter, kept in documents but not emitted
    """
    SIGNAL = "signal"
    BLOCK = "block"
    MQTT = "mqtt"
    S7 = "s7"
    TWILIO = "twilio"
    MODBUS = "modbus"

    @classmethod
    def from_string(cls, value: str) -> 'NodeKind':
        """Create NodeKind from string (case-insensitive)"""
        try:
            return cls(value.lower())
        except (ValueError, AttributeError):
            raise ValueError(f"Invalid node kind: {value!r}") from None
