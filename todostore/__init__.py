"""Data-access layer for todo records stored in MongoDB."""

from __future__ import annotations

from .config import StoreConfig, load_store_config, resolve_config_path
from .errors import InvalidIdentifier, InvalidParameter, StoreFailure, TodoStoreError
from .models import InsertOutcome, Todo
from .repository import TodoRepository, build_filter

__all__ = [
    "InsertOutcome",
    "InvalidIdentifier",
    "InvalidParameter",
    "StoreConfig",
    "StoreFailure",
    "Todo",
    "TodoRepository",
    "TodoStoreError",
    "build_filter",
    "load_store_config",
    "resolve_config_path",
]
