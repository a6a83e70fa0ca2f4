"""Domain models for todo records stored in MongoDB."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .errors import StoreFailure


@dataclass(frozen=True)
class Todo:
    """Represents a todo document held in the ``todos`` collection."""

    name: str
    age: int
    company: str
    email: str
    id: Optional[str] = None

    @staticmethod
    def from_document(document: Mapping[str, Any]) -> "Todo":
        """Create a :class:`Todo` from a raw MongoDB document."""
        raw_id = document.get("_id")
        return Todo(
            id=str(raw_id) if raw_id is not None else None,
            name=document.get("name"),
            age=document.get("age"),
            company=document.get("company"),
            email=document.get("email"),
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "age": self.age,
            "company": self.company,
            "email": self.email,
        }


@dataclass(frozen=True)
class InsertOutcome:
    """Result of inserting a todo: either the new identifier or the failure."""

    todo_id: Optional[str] = None
    error: Optional[StoreFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.todo_id is not None


__all__ = ["Todo", "InsertOutcome"]
