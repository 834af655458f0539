"""
Infrastructure layer for documents feature.

Contains:
- JSON persistence of documents
"""
from petra_designer.features.documents.infrastructure.document_io import (
    document_from_json,
    document_to_json,
    load_document,
    save_document,
)

__all__ = [
    'document_from_json',
    'document_to_json',
    'load_document',
    'save_document',
]
