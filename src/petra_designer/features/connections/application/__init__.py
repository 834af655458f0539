"""
Application layer for connections feature.

Contains:
- validate_connection (edge admissibility rules)
"""
from petra_designer.features.connections.application.connection_validator import (
    CONNECTION_EXISTS,
    INVALID_CONNECTION,
    TWILIO_BOOL_ONLY,
    check_structure,
    validate_connection,
)

__all__ = [
    'CONNECTION_EXISTS',
    'INVALID_CONNECTION',
    'TWILIO_BOOL_ONLY',
    'check_structure',
    'validate_connection',
]
