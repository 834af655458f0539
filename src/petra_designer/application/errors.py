"""
Designer errors

Raised by pure store transitions, the config generator and the config
parser. Validators return ValidationResult values instead; the FlowStore
facade converts these exceptions into CommandResult errors.
"""
from typing import Optional


class DesignerError(Exception):
    """Base class for all designer errors."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        self.message = message
        self.field_name = field_name
        super().__init__(message)


class StructuralError(DesignerError):
    """Edge references a missing node or handle, or a node id is unknown."""


class DuplicateError(DesignerError):
    """Duplicate edge or duplicate identifier."""


class ConfigGenerationError(DuplicateError):
    """Two signals normalize to the same canonical name."""


class FieldValidationError(DesignerError):
    """A node payload failed its per-field rules."""


class IncompatibleConnectionError(DesignerError):
    """Both endpoints exist but their kinds or port types may not be wired."""


class ParseError(DesignerError):
    """Malformed configuration or document text."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)
