"""Error types raised by the todo data-access layer."""
from __future__ import annotations

from typing import Optional


class TodoStoreError(RuntimeError):
    """Base class for every failure surfaced by the todo store."""


class InvalidIdentifier(TodoStoreError, ValueError):
    """Raised when a todo identifier cannot be parsed as an ObjectId."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid todo identifier: {value!r}")
        self.value = value


class InvalidParameter(TodoStoreError, ValueError):
    """Raised when a recognised query parameter carries an unusable value."""

    def __init__(self, parameter: str, value: object, reason: Optional[str] = None) -> None:
        message = f"Invalid value {value!r} for query parameter '{parameter}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class StoreFailure(TodoStoreError):
    """Raised (or returned on inserts) when the document store rejects an operation."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Document store failed during {operation}{detail}")
        self.operation = operation
        self.cause = cause


__all__ = ["TodoStoreError", "InvalidIdentifier", "InvalidParameter", "StoreFailure"]
