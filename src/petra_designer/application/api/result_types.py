"""
Result Types for store commands

Structured return values for FlowStore mutations.
"""
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar
from enum import Enum


class ResultStatus(Enum):
    """Status of a command execution"""
    SUCCESS = "success"
    ERROR = "error"


T = TypeVar('T')


@dataclass
class CommandResult(Generic[T]):
    """
    Structured result from a store command.

    - status: success or error
    - message: human-readable result message (the validator's message on rejection)
    - data: the created/updated entity, if any
    - errors: detailed error messages

    Examples:
        CommandResult[Node] - add_node
        CommandResult[Edge] - connect
        CommandResult[None] - delete/clear
    """
    status: ResultStatus
    message: str
    data: Optional[T] = None
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @property
    def failed(self) -> bool:
        return self.status == ResultStatus.ERROR

    @property
    def error(self) -> Optional[str]:
        """Message shown to the user when the command was rejected."""
        return self.message if self.failed else None

    @classmethod
    def success_result(cls, message: str, data: T = None) -> 'CommandResult[T]':
        return cls(status=ResultStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error_result(cls, message: str, errors: List[str] = None) -> 'CommandResult[T]':
        return cls(status=ResultStatus.ERROR, message=message, errors=errors or [message])

    def __bool__(self) -> bool:
        return self.success
