"""CLI entrypoint for tabledesk."""

import argparse
import asyncio
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional

from tabledesk.config.loader import DEFAULT_CONFIG_PATH, get_sqlite_path, load_config
from tabledesk.database.errors import DatabaseError, ValidationError
from tabledesk.database.item_repo import ItemRepository
from tabledesk.database.sqlite_client import SqliteService
from tabledesk.table.models import ItemRow, SortDirection, SortField
from tabledesk.table.view_state import ItemTableController
from tabledesk.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _load_cli_config(path: Optional[str]) -> Dict[str, Any]:
    if path:
        return load_config(Path(path))
    # The default config file is optional.
    if not DEFAULT_CONFIG_PATH.exists():
        logger.debug(f"No {DEFAULT_CONFIG_PATH} found, using defaults")
        return {}
    return load_config()


def _build_controller(args: argparse.Namespace) -> ItemTableController:
    config = _load_cli_config(args.config)
    sqlite_path = args.db or get_sqlite_path(config)
    return ItemTableController(ItemRepository(SqliteService(sqlite_path)))


def _print_rows(rows: List[ItemRow]) -> None:
    if not rows:
        print("No items.")
        return
    print(f"{'ID':<8} {'Name':<40} {'Created':<20}")
    print("-" * 70)
    for row in rows:
        print(f"{row.id:<8} {row.name:<40} {row.created_at:<20}")


def _report(controller: ItemTableController) -> int:
    if controller.error:
        print(f"Error: {controller.error}", file=sys.stderr)
        return 1
    return 0


@asynccontextmanager
async def _open_controller(args: argparse.Namespace) -> AsyncIterator[ItemTableController]:
    """Initialize a controller and always release its storage afterwards."""
    controller = _build_controller(args)
    try:
        await controller.initialize()
        yield controller
    finally:
        storage = controller.repository.storage
        if isinstance(storage, SqliteService):
            await storage.close()


async def cmd_init(args: argparse.Namespace) -> int:
    """Create the database and table."""
    async with _open_controller(args) as controller:
        if controller.error:
            return _report(controller)
        print(f"Database ready ({len(controller.rows)} items)")
        return 0


async def cmd_list(args: argparse.Namespace) -> int:
    """List items, filtered and sorted."""
    async with _open_controller(args) as controller:
        if controller.error:
            return _report(controller)
        controller.search_query = args.search or ""
        controller.sort_field = SortField(args.sort)
        controller.sort_direction = SortDirection.DESC if args.desc else SortDirection.ASC
        _print_rows(controller.filtered_and_sorted_items)
        return 0


async def cmd_add(args: argparse.Namespace) -> int:
    """Add an item by name."""
    try:
        ItemRepository.validate_name(args.name)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    async with _open_controller(args) as controller:
        if controller.error:
            return _report(controller)
        await controller.add_item(args.name)
        code = _report(controller)
        if code == 0:
            print(f"Added {args.name!r} ({len(controller.rows)} items)")
        return code


async def cmd_delete(args: argparse.Namespace) -> int:
    """Delete an item by id."""
    async with _open_controller(args) as controller:
        if controller.error:
            return _report(controller)
        await controller.delete_item(args.id)
        code = _report(controller)
        if code == 0:
            print(f"Deleted item {args.id} ({len(controller.rows)} items)")
        return code


async def cmd_query(args: argparse.Namespace) -> int:
    """Run a raw SQL statement."""
    async with _open_controller(args) as controller:
        if controller.error:
            return _report(controller)
        repository = controller.repository
        try:
            rows = await repository.execute_raw_query(args.sql)
        except DatabaseError as e:
            logger.error(str(e))
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if repository.is_modification_query(args.sql):
            print("Statement executed.")
        else:
            for row in rows or []:
                print(" | ".join(str(value) for value in row))
            print(f"({len(rows or [])} rows)")
        return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="tabledesk",
        description="Search, sort and edit the rows of a single SQLite table",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to config YAML")
    parser.add_argument("--db", type=str, default=None, help="SQLite path (overrides config)")
    parser.add_argument("--log-level", type=str, default=None, help="Log level (default: WARNING)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="Create the database and table")
    init_parser.set_defaults(func=cmd_init)

    list_parser = subparsers.add_parser("list", help="List items")
    list_parser.add_argument("--search", type=str, default="", help="Filter by name or id substring")
    list_parser.add_argument(
        "--sort",
        type=str,
        choices=[f.value for f in SortField],
        default=SortField.ID.value,
        help="Sort field (default: id)",
    )
    list_parser.add_argument("--desc", action="store_true", help="Sort descending")
    list_parser.set_defaults(func=cmd_list)

    add_parser = subparsers.add_parser("add", help="Add an item")
    add_parser.add_argument("name", type=str, help="Item name")
    add_parser.set_defaults(func=cmd_add)

    delete_parser = subparsers.add_parser("delete", help="Delete an item")
    delete_parser.add_argument("id", type=int, help="Item id")
    delete_parser.set_defaults(func=cmd_delete)

    query_parser = subparsers.add_parser("query", help="Run a raw SQL statement")
    query_parser.add_argument("sql", type=str, help="SQL text")
    query_parser.set_defaults(func=cmd_query)

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return

    try:
        code = asyncio.run(args.func(args))
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
