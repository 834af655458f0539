"""
Application layer for store feature.

Contains:
- FlowState and the pure transitions (apply_action)
- SnapshotHistory (bounded undo/redo)
- FlowStore facade
"""
from petra_designer.features.store.application.transitions import FlowState, apply_action
from petra_designer.features.store.application.history import SnapshotHistory
from petra_designer.features.store.application.flow_store import FlowStore

__all__ = [
    'FlowState',
    'apply_action',
    'SnapshotHistory',
    'FlowStore',
]
