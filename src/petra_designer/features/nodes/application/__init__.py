"""
Application layer for nodes feature.

Contains:
- normalize (label -> canonical name)
- validate_fields (per-kind payload rules)
"""
from petra_designer.features.nodes.application.naming import assign_signal_names, normalize
from petra_designer.features.nodes.application.field_validator import validate_fields

__all__ = [
    'assign_signal_names',
    'normalize',
    'validate_fields',
]
