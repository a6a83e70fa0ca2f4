from __future__ import annotations

from bson.objectid import ObjectId

from todostore.errors import StoreFailure
from todostore.models import InsertOutcome, Todo


def test_todo_from_document_renders_identifier_as_hex() -> None:
    object_id = ObjectId()
    todo = Todo.from_document(
        {"_id": object_id, "name": "Amy", "age": 25, "company": "Acme", "email": "amy@acme.test"}
    )

    assert todo.id == str(object_id)
    assert todo.name == "Amy"
    assert todo.age == 25


def test_todo_to_document_excludes_identifier() -> None:
    todo = Todo(id="abc", name="Bo", age=30, company="Initech", email="bo@initech.test")

    assert todo.to_document() == {
        "name": "Bo",
        "age": 30,
        "company": "Initech",
        "email": "bo@initech.test",
    }


def test_insert_outcome_distinguishes_success_and_failure() -> None:
    assert InsertOutcome(todo_id="5f1d7f1e2c8b9a0012345678").ok
    assert not InsertOutcome(error=StoreFailure("add_todo")).ok
    assert not InsertOutcome().ok
