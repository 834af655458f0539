"""
Shared validation module.

Key Components:
- ValidationResult: Result container with errors/warnings
- Validator: Base class for validators
- Common validators: Required, Range, Pattern, Length, Choices, etc.
- validate() / validate_field(): Convenience functions for validation chains
"""
from .validation_framework import (
    ValidationResult,
    Validator,
    # Common validators
    RequiredValidator,
    RangeValidator,
    PatternValidator,
    LengthValidator,
    ChoicesValidator,
    TypeValidator,
    CustomValidator,
    All,
    # Convenience functions
    validate,
    validate_field,
    first_failure,
)

__all__ = [
    'ValidationResult',
    'Validator',
    'RequiredValidator',
    'RangeValidator',
    'PatternValidator',
    'LengthValidator',
    'ChoicesValidator',
    'TypeValidator',
    'CustomValidator',
    'All',
    'validate',
    'validate_field',
    'first_failure',
]
