"""Configuration management for the todo store."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

_DEFAULT_URI = "mongodb://localhost:27017"
_DEFAULT_DATABASE = "dev"
_DEFAULT_COLLECTION = "todos"
_DEFAULT_TIMEOUT_MS = 5000

_ENV_OVERRIDES = {
    "TODOSTORE_MONGO_URI": "uri",
    "TODOSTORE_DB_NAME": "database",
    "TODOSTORE_COLLECTION": "collection",
    "TODOSTORE_TIMEOUT_MS": "server_selection_timeout_ms",
    "TODOSTORE_LITERAL_COMPANY_MATCH": "literal_company_match",
}


def _parse_bool(value: object, field: str) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off", ""}:
        return False
    raise ValueError(f"Invalid boolean value {value!r} for store setting '{field}'")


def _parse_positive_int(value: object, field: str) -> int:
    try:
        parsed = int(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"Invalid integer value {value!r} for store setting '{field}'") from exc
    if parsed <= 0:
        raise ValueError(f"Store setting '{field}' must be positive, got {parsed}")
    return parsed


def _require_text(value: object, field: str) -> str:
    text = str(value).strip()
    if not text:
        raise ValueError(f"Store setting '{field}' must not be empty")
    return text


@dataclass(frozen=True)
class StoreConfig:
    """Connection details for the MongoDB server holding the todos."""

    uri: str = _DEFAULT_URI
    database: str = _DEFAULT_DATABASE
    collection: str = _DEFAULT_COLLECTION
    server_selection_timeout_ms: int = _DEFAULT_TIMEOUT_MS
    literal_company_match: bool = False

    @staticmethod
    def from_dict(data: Mapping[str, object]) -> "StoreConfig":
        """Create a :class:`StoreConfig` from raw dictionary data."""
        unknown = set(data.keys()) - set(StoreConfig.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown store configuration fields: {', '.join(sorted(unknown))}")

        return StoreConfig(
            uri=_require_text(data.get("uri", _DEFAULT_URI), "uri"),
            database=_require_text(data.get("database", _DEFAULT_DATABASE), "database"),
            collection=_require_text(data.get("collection", _DEFAULT_COLLECTION), "collection"),
            server_selection_timeout_ms=_parse_positive_int(
                data.get("server_selection_timeout_ms", _DEFAULT_TIMEOUT_MS),
                "server_selection_timeout_ms",
            ),
            literal_company_match=_parse_bool(
                data.get("literal_company_match", False), "literal_company_match"
            ),
        )

    def with_env_overrides(self, environ: Optional[Mapping[str, str]] = None) -> "StoreConfig":
        """Return a copy with any ``TODOSTORE_*`` environment variables applied."""
        env = os.environ if environ is None else environ
        overrides: Dict[str, object] = {}
        for variable, field in _ENV_OVERRIDES.items():
            value = env.get(variable)
            if value is not None and value.strip() != "":
                overrides[field] = value
        if not overrides:
            return self

        merged = {
            "uri": self.uri,
            "database": self.database,
            "collection": self.collection,
            "server_selection_timeout_ms": self.server_selection_timeout_ms,
            "literal_company_match": self.literal_company_match,
        }
        merged.update(overrides)
        return StoreConfig.from_dict(merged)


def load_store_config(
    config_path: Path, environ: Optional[Mapping[str, str]] = None
) -> StoreConfig:
    """Load store settings from a YAML file, falling back to defaults when it is absent."""
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
        if not isinstance(raw, dict):
            raise ValueError("Configuration file must contain a mapping at the top level")
        section = raw.get("store") or {}
        if not isinstance(section, dict):
            raise ValueError("The 'store' key must map to a dictionary of settings")
        config = StoreConfig.from_dict(section)
    else:
        config = StoreConfig()
    return config.with_env_overrides(environ)


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the configuration file."""
    if env_value:
        candidate = Path(env_value).expanduser().resolve(strict=False)
    else:
        candidate = (Path(__file__).resolve().parent.parent / "config" / "store.yaml").resolve(strict=False)
    return candidate


__all__ = ["StoreConfig", "load_store_config", "resolve_config_path"]
