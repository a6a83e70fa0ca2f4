from __future__ import annotations

import mongomock
import pytest

from todostore.repository import TodoRepository


@pytest.fixture()
def database():
    client = mongomock.MongoClient()
    yield client["test"]
    client.close()


@pytest.fixture()
def repository(database) -> TodoRepository:
    return TodoRepository(database)


@pytest.fixture()
def seeded(database):
    """Insert the two reference todos and return their documents."""

    amy = {"name": "Amy", "age": 25, "company": "Acme", "email": "amy@acme.test"}
    bo = {"name": "Bo", "age": 30, "company": "Initech", "email": "bo@initech.test"}
    database["todos"].insert_many([amy, bo])
    return amy, bo
