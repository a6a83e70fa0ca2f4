"""Read and create operations for todo documents.

:class:`TodoRepository` is bound to a single collection of an injected
database handle. Lookups return MongoDB relaxed Extended JSON text, inserts
return an :class:`~todostore.models.InsertOutcome`.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from bson import json_util
from bson.errors import BSONError, InvalidId
from bson.objectid import ObjectId
from pymongo.errors import OperationFailure, PyMongoError

from .errors import InvalidIdentifier, InvalidParameter, StoreFailure
from .models import InsertOutcome, Todo

logger = logging.getLogger("todostore.repository")

DEFAULT_COLLECTION = "todos"

# Query parameters translated into filters; anything else is ignored.
RECOGNIZED_PARAMETERS = ("age", "company")

QueryParams = Mapping[str, Union[str, Sequence[str]]]

# Ages filter as signed 32-bit integers written with ASCII digits only.
_AGE_PATTERN = re.compile(r"[+-]?[0-9]+")
_AGE_MIN = -(2**31)
_AGE_MAX = 2**31 - 1

# Server error code for a $regex it cannot compile; older servers report BadValue.
_BAD_REGEX_CODE = 51091


def _first_value(raw: Union[str, Sequence[str]]) -> Optional[str]:
    if isinstance(raw, str):
        return raw
    for value in raw:
        return value
    return None


def _parse_age(raw_age: str) -> int:
    if not _AGE_PATTERN.fullmatch(raw_age):
        raise InvalidParameter("age", raw_age, "expected an integer")
    age = int(raw_age)
    if not _AGE_MIN <= age <= _AGE_MAX:
        raise InvalidParameter("age", raw_age, "out of range")
    return age


def _is_bad_regex(exc: OperationFailure) -> bool:
    return exc.code == _BAD_REGEX_CODE or "regular expression" in str(exc).lower()


def _parse_identifier(todo_id: str) -> ObjectId:
    if not isinstance(todo_id, str):
        raise InvalidIdentifier(todo_id)
    try:
        return ObjectId(todo_id)
    except (InvalidId, TypeError) as exc:
        raise InvalidIdentifier(todo_id) from exc


def build_filter(query_params: QueryParams, *, literal_company_match: bool = False) -> Dict[str, Any]:
    """Translate request query parameters into a MongoDB filter document.

    ``age`` becomes an integer equality match and ``company`` a
    case-insensitive regular expression, which the server compiles. Only
    the first value of a multi-valued parameter is used. Unrecognised
    parameters are ignored.
    """

    filter_doc: Dict[str, Any] = {}
    ignored = sorted(set(query_params) - set(RECOGNIZED_PARAMETERS))
    if ignored:
        logger.debug("Ignoring unrecognised query parameters: %s", ", ".join(ignored))

    if "age" in query_params:
        raw_age = _first_value(query_params["age"])
        if raw_age is not None:
            filter_doc["age"] = _parse_age(raw_age)

    if "company" in query_params:
        pattern = _first_value(query_params["company"])
        if pattern is not None:
            if literal_company_match:
                pattern = re.escape(pattern)
            filter_doc["company"] = {"$regex": pattern, "$options": "i"}

    return filter_doc


def serialize_documents(documents: Iterable[Mapping[str, Any]]) -> str:
    return "[" + ", ".join(json_util.dumps(document) for document in documents) + "]"


class TodoRepository:
    """Data access for the todos collection of a MongoDB database."""

    def __init__(
        self,
        database: Any,
        collection_name: str = DEFAULT_COLLECTION,
        *,
        literal_company_match: bool = False,
    ) -> None:
        self._collection = database[collection_name]
        self._literal_company_match = literal_company_match

    @property
    def collection_name(self) -> str:
        return self._collection.name

    def get_todo(self, todo_id: str) -> Optional[str]:
        """Return the JSON for the todo with ``todo_id``, or ``None`` when it does not exist."""

        object_id = _parse_identifier(todo_id)
        try:
            document = self._collection.find_one({"_id": object_id})
        except PyMongoError as exc:
            raise StoreFailure("get_todo", exc) from exc

        if document is None:
            return None
        return json_util.dumps(document)

    def get_todos(self, query_params: QueryParams) -> str:
        """Return a JSON array of every todo matching ``query_params``."""

        filter_doc = build_filter(query_params, literal_company_match=self._literal_company_match)
        try:
            documents = list(self._collection.find(filter_doc))
        except OperationFailure as exc:
            if "company" in filter_doc and _is_bad_regex(exc):
                pattern = filter_doc["company"]["$regex"]
                raise InvalidParameter("company", pattern, str(exc)) from exc
            raise StoreFailure("get_todos", exc) from exc
        except PyMongoError as exc:
            raise StoreFailure("get_todos", exc) from exc

        logger.debug("Matched %d todo(s) for filter %s", len(documents), filter_doc)
        return serialize_documents(documents)

    def add_todo(self, name: str, age: int, company: str, email: str) -> InsertOutcome:
        """Insert a new todo and report its identifier or the store failure."""

        document = Todo(name=name, age=age, company=company, email=email).to_document()
        try:
            result = self._collection.insert_one(document)
        except (PyMongoError, BSONError, OverflowError) as exc:
            logger.exception(
                "Failed to add new todo [name=%s, age=%s, company=%s, email=%s]",
                name,
                age,
                company,
                email,
            )
            return InsertOutcome(error=StoreFailure("add_todo", exc))

        todo_id = str(result.inserted_id)
        logger.info(
            "Successfully added new todo [_id=%s, name=%s, age=%s, company=%s, email=%s]",
            todo_id,
            name,
            age,
            company,
            email,
        )
        return InsertOutcome(todo_id=todo_id)


__all__ = [
    "DEFAULT_COLLECTION",
    "RECOGNIZED_PARAMETERS",
    "TodoRepository",
    "build_filter",
    "serialize_documents",
]
