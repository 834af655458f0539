"""
Validation Framework

Composable validators returning result values instead of raising.
Used by the field validator, the connection validator, the settings
loader and the config text checker.

Usage:
    result = validate_field("broker_port", payload.broker_port, [
        RequiredValidator(),
        RangeValidator(1, 65535),
    ])
    if not result.valid:
        show(result.error)
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional, Union
import re


@dataclass
class ValidationResult:
    """
    Result of a validation.

    Attributes:
        valid: True if all validations passed
        errors: Error messages (validation failures)
        warnings: Warning messages (non-blocking)
        field_name: Optional field name prefixed to messages
    """
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    field_name: Optional[str] = None

    @property
    def error(self) -> Optional[str]:
        """First error message, or None when valid."""
        return self.errors[0] if self.errors else None

    def add_error(self, message: str) -> None:
        """Add an error and mark as invalid."""
        if self.field_name and not message.startswith(self.field_name):
            message = f"{self.field_name} {message}"
        self.errors.append(message)
        self.valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(message)

    def merge(self, other: 'ValidationResult') -> None:
        if not other.valid:
            self.valid = False
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def __bool__(self) -> bool:
        return self.valid

    def raise_if_invalid(self, exc_type: type) -> None:
        """Raise exc_type with the first error if the result is invalid."""
        if not self.valid:
            raise exc_type(self.error)

    @classmethod
    def success(cls) -> 'ValidationResult':
        return cls(valid=True)

    @classmethod
    def failure(cls, message: str, field_name: Optional[str] = None) -> 'ValidationResult':
        result = cls(valid=False, field_name=field_name)
        result.errors.append(f"{field_name} {message}" if field_name else message)
        return result


class Validator(ABC):
    """
    Base class for validators. Subclasses implement validate().
    """

    @abstractmethod
    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        pass

    def __call__(self, value: Any, field_name: str = "") -> ValidationResult:
        return self.validate(value, field_name)


class RequiredValidator(Validator):
    """Value must not be None, a blank string or an empty collection."""

    def __init__(self, message: str = "is required"):
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        if value is None:
            result.add_error(self.message)
        elif isinstance(value, str) and not value.strip():
            result.add_error(self.message)
        elif isinstance(value, (list, tuple, dict, set)) and len(value) == 0:
            result.add_error(self.message)
        return result


class RangeValidator(Validator):
    """
    Numeric value within [min_value, max_value] (either bound optional).

    Booleans are rejected: True is not a port number.
    """

    def __init__(
        self,
        min_value: Optional[Union[int, float]] = None,
        max_value: Optional[Union[int, float]] = None,
        message: Optional[str] = None,
        integer: bool = False,
        exclusive_min: bool = False,
    ):
        self.min_value = min_value
        self.max_value = max_value
        self.message = message
        self.integer = integer
        self.exclusive_min = exclusive_min

    def _describe(self) -> str:
        if self.min_value is not None and self.max_value is not None:
            return f"must be between {self.min_value} and {self.max_value}"
        if self.min_value is not None:
            if self.exclusive_min:
                return f"must be greater than {self.min_value}"
            return f"must be at least {self.min_value}"
        return f"must be at most {self.max_value}"

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        if value is None:
            return result  # RequiredValidator handles None

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            result.add_error(f"must be a number, got {type(value).__name__}")
            return result
        if self.integer and not float(value).is_integer():
            result.add_error("must be a whole number")
            return result

        too_low = self.min_value is not None and (
            value <= self.min_value if self.exclusive_min else value < self.min_value
        )
        too_high = self.max_value is not None and value > self.max_value
        if too_low or too_high:
            result.add_error(self.message or self._describe())
        return result


class PatternValidator(Validator):
    """String must match a regex (full match)."""

    def __init__(self, pattern: str, message: Optional[str] = None):
        self.pattern = pattern
        self.compiled = re.compile(pattern)
        self.message = message or f"does not match pattern: {pattern}"

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        if value is None:
            return result
        if not isinstance(value, str):
            result.add_error(f"must be a string, got {type(value).__name__}")
        elif not self.compiled.fullmatch(value):
            result.add_error(self.message)
        return result


class LengthValidator(Validator):
    """Length of a string or collection within bounds."""

    def __init__(self, min_length: Optional[int] = None, max_length: Optional[int] = None):
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        if value is None:
            return result
        try:
            length = len(value)
        except TypeError:
            result.add_error(f"cannot determine length of {type(value).__name__}")
            return result

        if self.min_length is not None and length < self.min_length:
            result.add_error(f"must be at least {self.min_length} characters")
        if self.max_length is not None and length > self.max_length:
            result.add_error(f"must be at most {self.max_length} characters")
        return result


class ChoicesValidator(Validator):
    """Value must be one of the allowed choices."""

    def __init__(self, choices: Iterable[Any], message: Optional[str] = None):
        self.choices = list(choices)
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        if value is None:
            return result
        if value not in self.choices:
            choices_str = ", ".join(str(c) for c in self.choices)
            result.add_error(self.message or f"must be one of: {choices_str}")
        return result


class TypeValidator(Validator):
    """Value must be an instance of the expected type(s)."""

    def __init__(self, expected_type: Union[type, tuple], message: Optional[str] = None):
        self.expected_type = expected_type
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        if value is None:
            return result
        if not isinstance(value, self.expected_type):
            if isinstance(self.expected_type, tuple):
                type_names = " or ".join(t.__name__ for t in self.expected_type)
            else:
                type_names = self.expected_type.__name__
            result.add_error(self.message or f"must be {type_names}, got {type(value).__name__}")
        return result


class CustomValidator(Validator):
    """
    Validator backed by a predicate.

    Usage:
        CustomValidator(lambda v: "#" not in v, "must not contain '#'")
    """

    def __init__(self, func: Callable[[Any], bool], message: str = "validation failed"):
        self.func = func
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        if value is None:
            return result
        try:
            passed = self.func(value)
        except (TypeError, ValueError, AttributeError):
            passed = False
        if not passed:
            result.add_error(self.message)
        return result


class All(Validator):
    """
    AND-composition. Stops at the first failing validator by default so a
    field reports a single message.
    """

    def __init__(self, *validators: Validator, stop_on_first_error: bool = True):
        self.validators = validators
        self.stop_on_first_error = stop_on_first_error

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        for validator in self.validators:
            sub_result = validator.validate(value, field_name)
            result.merge(sub_result)
            if self.stop_on_first_error and not sub_result.valid:
                break
        return result


def validate(
    value: Any,
    validators: Union[Validator, List[Validator]],
    field_name: str = "",
) -> ValidationResult:
    """Validate a value against one validator or a list (AND-composed)."""
    if isinstance(validators, Validator):
        return validators.validate(value, field_name)
    return All(*validators).validate(value, field_name)


def validate_field(
    field_name: str,
    value: Any,
    validators: Union[Validator, List[Validator]],
) -> ValidationResult:
    """Validate a field value (field_name first for readability)."""
    return validate(value, validators, field_name)


def first_failure(*results: ValidationResult) -> ValidationResult:
    """
    Return the first invalid result, or success.

    Field rules are checked in declaration order and report one message.
    """
    for result in results:
        if not result.valid:
            return result
    return ValidationResult.success()
