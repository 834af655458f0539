"""
Config text checker

Structural check of configuration text before it is handed to the runtime
or imported. Collects every problem instead of stopping at the first one.
"""
from typing import Any, Mapping

from petra_designer.application.errors import ParseError
from petra_designer.features.config.infrastructure.yaml_codec import load_config
from petra_designer.features.nodes.domain.payloads import SIGNAL_TYPES
from petra_designer.shared.application.validation.validation_framework import (
    ChoicesValidator,
    RangeValidator,
    RequiredValidator,
    ValidationResult,
    validate_field,
)


def _check_signals(signals: Any, result: ValidationResult) -> None:
    if not isinstance(signals, list):
        result.add_error("signals must be a list")
        return
    for idx, entry in enumerate(signals):
        where = f"signals[{idx}]"
        if not isinstance(entry, Mapping):
            result.add_error(f"{where} must be a mapping")
            continue
        result.merge(validate_field(f"{where}.name", entry.get("name"), RequiredValidator()))
        result.merge(validate_field(f"{where}.type", entry.get("type"), [
            RequiredValidator(), ChoicesValidator(SIGNAL_TYPES),
        ]))


def _check_blocks(blocks: Any, result: ValidationResult) -> None:
    if not isinstance(blocks, list):
        result.add_error("blocks must be a list")
        return
    for idx, entry in enumerate(blocks):
        where = f"blocks[{idx}]"
        if not isinstance(entry, Mapping):
            result.add_error(f"{where} must be a mapping")
            continue
        result.merge(validate_field(f"{where}.name", entry.get("name"), RequiredValidator()))
        result.merge(validate_field(f"{where}.type", entry.get("type"), RequiredValidator()))
        for key in ("inputs", "outputs", "params"):
            value = entry.get(key)
            if value is not None and not isinstance(value, Mapping):
                result.add_error(f"{where}.{key} must be a mapping")


def validate_config_text(text: str) -> ValidationResult:
    """
    Check configuration text.

    Requires a YAML mapping with `signals` and `blocks` lists of well-formed
    entries and a positive integer `scan_time_ms`.
    """
    result = ValidationResult()
    try:
        config = load_config(text or "")
    except ParseError as e:
        result.add_error(e.message)
        return result

    if not isinstance(config, Mapping):
        result.add_error("Configuration must be a mapping at the top level")
        return result

    for key in ("signals", "blocks"):
        if key not in config:
            result.add_error(f"Missing '{key}' section")
    if "signals" in config:
        _check_signals(config["signals"], result)
    if "blocks" in config:
        _check_blocks(config["blocks"], result)

    result.merge(validate_field("scan_time_ms", config.get("scan_time_ms"), [
        RequiredValidator(), RangeValidator(1, integer=True),
    ]))
    return result
