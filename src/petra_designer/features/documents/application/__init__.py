"""
Application layer for documents feature.

Contains:
- check_structure_invariants / check_document (whole-document validation)
- validate_logic (pre-export summary)
"""
from petra_designer.features.documents.application.document_checks import (
    LogicSummary,
    check_document,
    check_structure_invariants,
    validate_logic,
)

__all__ = [
    'LogicSummary',
    'check_document',
    'check_structure_invariants',
    'validate_logic',
]
