"""
Documents feature module.

Usage:
    from petra_designer.features.documents.domain import Document
    from petra_designer.features.documents.application import check_document
    from petra_designer.features.documents.infrastructure import load_document
"""
from petra_designer.features.documents.domain import Document, EMPTY_DOCUMENT

__all__ = [
    'Document',
    'EMPTY_DOCUMENT',
]
