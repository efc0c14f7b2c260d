"""
Error kinds and the result contract returned by every registry operation.

Components raise `RegistryError` at the first failing precondition; the registry
facade rolls back the surrounding store transaction and converts it into a
`Result` so callers never see an exception for a refused operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure kinds an operation can yield."""

    UNAUTHORIZED = "ERR-UNAUTHORIZED"
    INVALID_INPUT = "ERR-INVALID-INPUT"
    ACHIEVEMENT_NOT_FOUND = "ERR-ACHIEVEMENT-NOT-FOUND"
    CERTIFICATION_NOT_FOUND = "ERR-CERTIFICATION-NOT-FOUND"
    USER_NOT_FOUND = "ERR-USER-NOT-FOUND"
    REWARD_ALREADY_CLAIMED = "ERR-REWARD-ALREADY-CLAIMED"
    INSUFFICIENT_BALANCE = "ERR-INSUFFICIENT-BALANCE"
    LIMIT_EXCEEDED = "ERR-LIMIT-EXCEEDED"


class RegistryError(Exception):
    """Raised inside an operation to abort it with a specific error kind."""

    def __init__(self, kind: ErrorKind, message: str = "") -> None:
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a registry operation: either a value or exactly one error kind.
    """

    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str = "") -> "Result[T]":
        return cls(error=kind, message=message or kind.value)

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise RegistryError(self.error, self.message)
        return self.value  # type: ignore[return-value]


__all__ = ["ErrorKind", "RegistryError", "Result"]
