"""Shared value objects."""
from .port_type import PortType, get_port_type

__all__ = [
    'PortType',
    'get_port_type',
]
