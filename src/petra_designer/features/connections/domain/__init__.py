"""
Domain layer for connections feature.

Contains:
- Edge entity (wire between two nodes)
"""
from petra_designer.features.connections.domain.connection import Edge, EdgeKey, candidate

__all__ = [
    'Edge',
    'EdgeKey',
    'candidate',
]
