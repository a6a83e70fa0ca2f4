"""MongoDB connection helpers for the todo store."""
from __future__ import annotations

import logging

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .config import StoreConfig
from .errors import StoreFailure

logger = logging.getLogger("todostore.database")


def create_client(config: StoreConfig) -> MongoClient:
    """Build a client for the configured server.

    The client connects lazily; the caller owns it and must ``close()`` it.
    """

    return MongoClient(config.uri, serverSelectionTimeoutMS=config.server_selection_timeout_ms)


def get_database(client: MongoClient, config: StoreConfig) -> Database:
    return client[config.database]


def ping(database: Database) -> None:
    """Round-trip a ``ping`` command, raising :class:`StoreFailure` when unreachable."""

    try:
        database.command("ping")
    except PyMongoError as exc:
        raise StoreFailure("ping", exc) from exc
    logger.debug("MongoDB server reachable for database %s", database.name)


__all__ = ["create_client", "get_database", "ping"]
