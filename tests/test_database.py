from __future__ import annotations

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from todostore.config import StoreConfig
from todostore.database import create_client, get_database, ping
from todostore.errors import StoreFailure


def test_create_client_applies_configuration() -> None:
    config = StoreConfig(uri="mongodb://localhost:27017", database="lab", server_selection_timeout_ms=150)

    client = create_client(config)
    try:
        assert client.options.server_selection_timeout == pytest.approx(0.15)
        assert get_database(client, config).name == "lab"
    finally:
        client.close()


def test_ping_wraps_driver_errors() -> None:
    class UnreachableDatabase:
        name = "dev"

        def command(self, name: str):
            raise ServerSelectionTimeoutError("no servers available")

    with pytest.raises(StoreFailure) as excinfo:
        ping(UnreachableDatabase())

    assert excinfo.value.operation == "ping"
