"""
Store feature module.

Usage:
    from petra_designer.features.store import FlowStore
"""
from petra_designer.features.store.application import FlowStore

__all__ = [
    'FlowStore',
]
