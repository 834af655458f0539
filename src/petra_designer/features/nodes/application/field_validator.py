"""
Field Validator

Per-kind configuration rules for node payloads. Rules run in declaration
order and the first failing rule is reported as a single message naming the
offending field. Validators never raise.
"""
from typing import Callable, Dict

from petra_designer.features.nodes.domain.block_catalog import GENERATOR_BLOCK_TYPES, TIMER_BLOCK_TYPES
from petra_designer.features.nodes.domain.node import Node
from petra_designer.features.nodes.domain.node_kind import NodeKind
from petra_designer.features.nodes.domain.payloads import (
    DIRECTIONS,
    MODBUS_DATA_TYPES,
    MQTT_MODES,
    S7_AREAS,
    S7_DATA_TYPES,
    SIGNAL_MODES,
    SIGNAL_TYPES,
    TWILIO_ACTION_TYPES,
    BlockPayload,
    ModbusPayload,
    MqttPayload,
    S7Payload,
    SignalPayload,
    TwilioPayload,
)
from petra_designer.shared.application.validation.validation_framework import (
    ChoicesValidator,
    CustomValidator,
    LengthValidator,
    PatternValidator,
    RangeValidator,
    RequiredValidator,
    TypeValidator,
    ValidationResult,
    first_failure,
    validate_field,
)


E164_PATTERN = r"\+[1-9]\d{1,14}"
TWILIO_CONTENT_MAX = 1600
TIMER_PRESET_MAX_MS = 3_600_000
GENERATOR_FREQUENCY_MAX = 100


def _is_ipv4(value: str) -> bool:
    parts = value.split(".")
    return len(parts) == 4 and all(
        p.isascii() and p.isdigit() and len(p) <= 3 and int(p) <= 255 for p in parts
    )


def _required(name: str, value) -> ValidationResult:
    return validate_field(name, value, RequiredValidator())


def _validate_signal(payload: SignalPayload) -> ValidationResult:
    numeric = payload.signal_type in ("int", "float")
    return first_failure(
        _required("label", payload.label),
        validate_field("signal_type", payload.signal_type, ChoicesValidator(SIGNAL_TYPES)),
        validate_field("initial", payload.initial, [
            RequiredValidator(),
            CustomValidator(
                lambda v: isinstance(v, (int, float)) and (numeric != isinstance(v, bool)),
                f"must be a {'number' if numeric else 'boolean'} for a {payload.signal_type} signal",
            ),
        ]),
        validate_field("mode", payload.mode, ChoicesValidator(SIGNAL_MODES)),
    )


def _validate_block(payload: BlockPayload) -> ValidationResult:
    block_type = (payload.block_type or "").upper()
    params = payload.params
    results = [
        _required("label", payload.label),
        _required("block_type", payload.block_type),
        validate_field("inputs", payload.input_names(), CustomValidator(
            lambda names: len(set(names)) == len(names), "must have unique port names")),
        validate_field("outputs", payload.output_names(), CustomValidator(
            lambda names: len(set(names)) == len(names), "must have unique port names")),
    ]
    for key, value in params.items():
        results.append(validate_field(f"params.{key}", value, RangeValidator()))

    if block_type in TIMER_BLOCK_TYPES:
        results.append(validate_field("params.preset_ms", params.get("preset_ms"), [
            RequiredValidator(),
            RangeValidator(0, TIMER_PRESET_MAX_MS),
        ]))
    if block_type in GENERATOR_BLOCK_TYPES:
        results.append(validate_field("params.frequency", params.get("frequency"), [
            RequiredValidator(),
            RangeValidator(0, GENERATOR_FREQUENCY_MAX),
        ]))
        results.append(validate_field("params.amplitude", params.get("amplitude"), [
            RequiredValidator(),
            RangeValidator(0, exclusive_min=True),
        ]))
    return first_failure(*results)


def _validate_twilio(payload: TwilioPayload) -> ValidationResult:
    return first_failure(
        _required("label", payload.label),
        validate_field("action_type", payload.action_type, ChoicesValidator(TWILIO_ACTION_TYPES)),
        validate_field("to_number", payload.to_number, [
            RequiredValidator(),
            PatternValidator(E164_PATTERN, "must be an E.164 phone number (e.g. +15551234567)"),
        ]),
        validate_field("content", payload.content, [
            RequiredValidator(),
            LengthValidator(max_length=TWILIO_CONTENT_MAX),
        ]),
    )


def _validate_mqtt(payload: MqttPayload) -> ValidationResult:
    return first_failure(
        _required("label", payload.label),
        _required("broker_host", payload.broker_host),
        validate_field("broker_port", payload.broker_port, [
            RequiredValidator(),
            RangeValidator(1, 65535, integer=True),
        ]),
        _required("client_id", payload.client_id),
        validate_field("topic_prefix", payload.topic_prefix, [
            RequiredValidator(),
            TypeValidator(str),
            CustomValidator(lambda v: "#" not in v and "+" not in v,
                            "must not contain MQTT wildcards ('#' or '+')"),
        ]),
        validate_field("mode", payload.mode, ChoicesValidator(MQTT_MODES)),
    )


def _validate_s7(payload: S7Payload) -> ValidationResult:
    results = [
        _required("label", payload.label),
        _required("signal", payload.signal),
        validate_field("ip", payload.ip, [
            RequiredValidator(),
            CustomValidator(lambda v: isinstance(v, str) and _is_ipv4(v),
                            "must be a dotted-quad IPv4 address"),
        ]),
        validate_field("rack", payload.rack, [RequiredValidator(), RangeValidator(0, 7, integer=True)]),
        validate_field("slot", payload.slot, [RequiredValidator(), RangeValidator(0, 31, integer=True)]),
        validate_field("area", payload.area, ChoicesValidator(S7_AREAS)),
    ]
    if payload.area == "DB":
        results.append(validate_field("db_number", payload.db_number, [
            RequiredValidator(), RangeValidator(1, integer=True)]))
    results += [
        validate_field("address", payload.address, [RequiredValidator(), RangeValidator(0, integer=True)]),
        validate_field("data_type", payload.data_type, ChoicesValidator(S7_DATA_TYPES)),
    ]
    if payload.data_type == "bool":
        # bit None is emitted as bit 0
        results.append(validate_field("bit", payload.bit, RangeValidator(0, 7, integer=True)))
    results.append(validate_field("direction", payload.direction, ChoicesValidator(DIRECTIONS)))
    return first_failure(*results)


def _validate_modbus(payload: ModbusPayload) -> ValidationResult:
    return first_failure(
        _required("label", payload.label),
        _required("host", payload.host),
        validate_field("port", payload.port, [RequiredValidator(), RangeValidator(1, 65535, integer=True)]),
        validate_field("unit_id", payload.unit_id, [RequiredValidator(), RangeValidator(0, 247, integer=True)]),
        validate_field("address", payload.address, [RequiredValidator(), RangeValidator(0, integer=True)]),
        validate_field("data_type", payload.data_type, ChoicesValidator(MODBUS_DATA_TYPES)),
        validate_field("direction", payload.direction, ChoicesValidator(DIRECTIONS)),
        _required("signal", payload.signal),
    )


_VALIDATORS: Dict[NodeKind, Callable] = {
    NodeKind.SIGNAL: _validate_signal,
    NodeKind.BLOCK: _validate_block,
    NodeKind.TWILIO: _validate_twilio,
    NodeKind.MQTT: _validate_mqtt,
    NodeKind.S7: _validate_s7,
    NodeKind.MODBUS: _validate_modbus,
}


def validate_fields(node: Node) -> ValidationResult:
    """
    Validate a node's payload against the rules for its kind.

    Returns:
        ValidationResult; result.error names the first offending field
    """
    validator = _VALIDATORS.get(node.kind)
    if validator is None:
        return ValidationResult.failure(f"Unknown node kind: {node.kind}")
    return validator(node.payload)
