"""
Designer Settings

Settings that shape the generated configuration and the store.

Stored as settings.json in the per-user config directory. Loading is
backwards-compatible: unknown keys are ignored, missing keys take their
default, and invalid values are logged and replaced by the default.

Usage:
    settings = DesignerSettings.load()
    settings.scan_time_ms        # 100
    settings.save()
"""
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json

from petra_designer.shared.application.validation.validation_framework import (
    ChoicesValidator,
    PatternValidator,
    RangeValidator,
    TypeValidator,
    ValidationResult,
    validate_field,
)
from petra_designer.utils.message import Log
from petra_designer.utils.paths import get_settings_path


@dataclass
class DesignerSettings:
    """
    Settings schema. Every field has a default; field metadata carries the
    validator applied on load.
    """
    # Constants written into every generated config
    scan_time_ms: int = field(default=100, metadata={
        "validator": RangeValidator(1, integer=True)})
    twilio_from_number: str = field(default="+1234567890", metadata={
        "validator": PatternValidator(r"\+[1-9]\d{1,14}", "must be an E.164 phone number")})
    twilio_cooldown_seconds: int = field(default=300, metadata={
        "validator": RangeValidator(0, integer=True)})
    s7_poll_interval_ms: int = field(default=100, metadata={
        "validator": RangeValidator(1, integer=True)})

    # Store
    history_limit: int = field(default=50, metadata={
        "validator": RangeValidator(1, 500, integer=True)})
    strict_port_types: bool = field(default=False, metadata={
        "validator": TypeValidator(bool)})

    log_level: str = field(default="INFO", metadata={
        "validator": ChoicesValidator(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])})

    def validate(self) -> ValidationResult:
        """Validate every field, collecting all errors."""
        result = ValidationResult()
        for f in fields(self):
            validator = f.metadata.get("validator")
            if validator is not None:
                result.merge(validate_field(f.name, getattr(self, f.name), validator))
        return result

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DesignerSettings':
        """
        Build settings from a mapping.

        Unknown keys are ignored; invalid values fall back to the default.
        """
        defaults = cls()
        values = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if value is None:
                continue
            validator = f.metadata.get("validator")
            if validator is not None:
                check = validate_field(f.name, value, validator)
                if not check.valid:
                    Log.warning(
                        f"DesignerSettings: {check.error}; using default {getattr(defaults, f.name)!r}"
                    )
                    continue
            values[f.name] = value
        return cls(**values)

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> 'DesignerSettings':
        """
        Load settings from JSON, defaulting when the file is missing or unreadable.
        """
        path = Path(path) if path else get_settings_path()
        if not path.exists():
            Log.debug(f"DesignerSettings: No settings file at {path}, using defaults")
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            Log.warning(f"DesignerSettings: Could not read {path}: {e}; using defaults")
            return cls()
        if not isinstance(data, dict):
            Log.warning(f"DesignerSettings: {path} does not hold a JSON object; using defaults")
            return cls()
        Log.info(f"DesignerSettings: Loaded settings from {path}")
        return cls.from_dict(data)

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        path = Path(path) if path else get_settings_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        Log.info(f"DesignerSettings: Saved settings to {path}")
        return path
