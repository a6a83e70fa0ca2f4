"""Command-line interface for the todo store."""

from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

from todostore.config import StoreConfig, load_store_config, resolve_config_path
from todostore.database import create_client, get_database, ping
from todostore.errors import TodoStoreError
from todostore.repository import TodoRepository

logger = logging.getLogger("todostore.main")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Todo store utilities")
    parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to the store configuration (defaults to TODOSTORE_CONFIG or config/store.yaml)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="list")

    list_parser = subparsers.add_parser("list", help="Print todos matching the given filters")
    list_parser.add_argument("--age", default=None, help="Only todos with exactly this age")
    list_parser.add_argument(
        "--company",
        default=None,
        help="Only todos whose company matches this case-insensitive pattern",
    )

    get_parser = subparsers.add_parser("get", help="Print a single todo by identifier")
    get_parser.add_argument("todo_id", help="Hex ObjectId of the todo")

    add_parser = subparsers.add_parser("add", help="Insert a new todo")
    add_parser.add_argument("name")
    add_parser.add_argument("age", type=int)
    add_parser.add_argument("company")
    add_parser.add_argument("email")

    subparsers.add_parser("ping", help="Check that the configured MongoDB server is reachable")

    args_list = list(argv) if argv is not None else sys.argv[1:]
    return parser.parse_args(args_list)


def _load_config(config_path: Optional[str]) -> StoreConfig:
    path = resolve_config_path(config_path or os.getenv("TODOSTORE_CONFIG"))
    config = load_store_config(path)
    logger.debug("Loaded store configuration from %s", path)
    return config


def _query_params(args: argparse.Namespace) -> Dict[str, List[str]]:
    params: Dict[str, List[str]] = {}
    if args.age is not None:
        params["age"] = [args.age]
    if args.company is not None:
        params["company"] = [args.company]
    return params


def _run(args: argparse.Namespace, database: Any, config: StoreConfig) -> int:
    if args.command == "ping":
        ping(database)
        print(f"MongoDB reachable; using database '{config.database}'.")
        return 0

    repository = TodoRepository(
        database,
        config.collection,
        literal_company_match=config.literal_company_match,
    )

    if args.command == "list":
        print(repository.get_todos(_query_params(args)))
        return 0

    if args.command == "get":
        payload = repository.get_todo(args.todo_id)
        if payload is None:
            print(f"No todo found with id {args.todo_id}", file=sys.stderr)
            return 1
        print(payload)
        return 0

    if args.command == "add":
        outcome = repository.add_todo(args.name, args.age, args.company, args.email)
        if not outcome.ok:
            print(f"Failed to add todo: {outcome.error}", file=sys.stderr)
            return 1
        print(outcome.todo_id)
        return 0

    raise SystemExit(f"Unknown command {args.command!r}")


def main(argv: Sequence[str] | None = None, *, database: Any = None) -> int:
    """Entry point for CLI usage."""

    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        config = _load_config(args.config_path)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    client = None
    if database is None:
        client = create_client(config)
        database = get_database(client, config)

    try:
        return _run(args, database, config)
    except TodoStoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        if client is not None:
            client.close()


if __name__ == "__main__":
    raise SystemExit(main())
