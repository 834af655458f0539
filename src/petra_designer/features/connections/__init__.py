"""
Connections feature module.

Usage:
    from petra_designer.features.connections.domain import Edge
    from petra_designer.features.connections.application import validate_connection
"""
from petra_designer.features.connections.domain import Edge

__all__ = [
    'Edge',
]
