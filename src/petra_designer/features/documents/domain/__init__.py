"""
Domain layer for documents feature.

Contains:
- Document entity (node set + edge set)
"""
from petra_designer.features.documents.domain.document import Document, EMPTY_DOCUMENT

__all__ = [
    'Document',
    'EMPTY_DOCUMENT',
]
