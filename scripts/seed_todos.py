import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from todostore.config import load_store_config, resolve_config_path
from todostore.database import create_client, get_database
from todostore.models import Todo
from todostore.repository import TodoRepository

_REQUIRED_FIELDS = ("name", "age", "company", "email")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load todos from a JSON file into MongoDB")
    parser.add_argument("source", type=Path, help="JSON file holding an array of todo objects")
    parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to the store configuration (defaults to TODOSTORE_CONFIG or config/store.yaml)",
    )
    return parser.parse_args(argv)


def load_records(source: Path) -> List[Todo]:
    with source.open("r", encoding="utf-8") as handle:
        raw = json.load(handle)
    if not isinstance(raw, list):
        raise ValueError(f"{source} must contain a JSON array of todo objects")

    records: List[Todo] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValueError(f"Entry {index} is not a JSON object")
        missing = [field for field in _REQUIRED_FIELDS if field not in item]
        if missing:
            raise ValueError(f"Entry {index} is missing: {', '.join(missing)}")
        try:
            age = int(item["age"])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Entry {index} has a non-integer age {item['age']!r}") from exc
        records.append(
            Todo.from_document(
                {
                    "name": str(item["name"]),
                    "age": age,
                    "company": str(item["company"]),
                    "email": str(item["email"]),
                }
            )
        )
    return records


def seed(repository: TodoRepository, records: List[Todo]) -> Tuple[int, int]:
    """Insert every record, returning ``(inserted, failed)`` counts."""
    inserted = 0
    failed = 0
    for record in records:
        outcome = repository.add_todo(record.name, record.age, record.company, record.email)
        if outcome.ok:
            inserted += 1
        else:
            failed += 1
    return inserted, failed


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    args = parse_args(argv)

    try:
        records = load_records(args.source)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    config = load_store_config(resolve_config_path(args.config_path or os.getenv("TODOSTORE_CONFIG")))
    client = create_client(config)
    try:
        repository = TodoRepository(
            get_database(client, config),
            config.collection,
            literal_company_match=config.literal_company_match,
        )
        inserted, failed = seed(repository, records)
    finally:
        client.close()

    print(f"Inserted {inserted} todo(s) into {config.database}.{config.collection}")
    if failed:
        print(f"{failed} todo(s) could not be inserted; see the log above.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
