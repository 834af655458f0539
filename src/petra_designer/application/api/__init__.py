"""
Application API Layer

Structured results returned by store commands.
"""
from .result_types import CommandResult, ResultStatus

__all__ = [
    "CommandResult",
    "ResultStatus",
]
