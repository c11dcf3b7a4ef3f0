"""Repository for test_table operations."""

from typing import Iterable, List, Optional

from tabledesk.database.errors import DatabaseError, ValidationError
from tabledesk.database.schema import TEST_TABLE
from tabledesk.database.sqlite_client import Row, SqliteService, StorageService
from tabledesk.table.models import ItemRow, SortDirection, SortField
from tabledesk.table.sorting import sort_items
from tabledesk.utils.logging import get_logger

logger = get_logger(__name__)

MODIFICATION_PREFIXES = ("insert", "update", "delete")


class ItemRepository:
    """
    Translates item operations into SQL against a storage service.

    Holds no state of its own besides the injected storage service.
    """

    def __init__(self, storage: StorageService):
        self.storage = storage

    async def initialize(self) -> bool:
        return await self.storage.initialize()

    async def get_all(self) -> Optional[List[ItemRow]]:
        """
        Fetch every row of the table.

        Returns:
            List of ItemRow in storage order, or None when storage returned
            no result at all
        """
        result = await self.storage.execute_with_rows(f"SELECT * FROM {TEST_TABLE}")
        if result is None:
            return None
        return [ItemRow.from_db_row(row) for row in result]

    async def create(self, name: str) -> None:
        """
        Insert a row with the given name. The name is stored as given.

        Raises:
            ValidationError: If name is empty or whitespace only
        """
        self.validate_name(name)
        await self.storage.execute(f"INSERT INTO {TEST_TABLE} (name) VALUES (?)", [name])
        logger.debug(f"Inserted item {name!r}")

    @staticmethod
    def validate_name(name: str) -> None:
        if not name.strip():
            raise ValidationError("Name cannot be empty")

    async def delete(self, item_id: int) -> None:
        await self.storage.execute(f"DELETE FROM {TEST_TABLE} WHERE id = ?", [item_id])
        logger.debug(f"Deleted item {item_id}")

    async def execute_raw_query(self, query: str) -> Optional[List[Row]]:
        """
        Run an arbitrary statement through the row-returning path.

        Raises:
            DatabaseError: Wrapping any failure raised by storage
        """
        try:
            return await self.storage.execute_with_rows(query)
        except Exception as e:
            logger.warning(f"Raw query failed: {e}")
            raise DatabaseError(f"Failed to execute raw query: {e}") from e

    @staticmethod
    def sort_items(
        items: Iterable[ItemRow],
        field: SortField,
        direction: SortDirection,
    ) -> List[ItemRow]:
        return sort_items(items, field, direction)

    @staticmethod
    def is_modification_query(query: str) -> bool:
        return query.lower().strip().startswith(MODIFICATION_PREFIXES)


def create_item_repository(sqlite_path: str) -> ItemRepository:
    return ItemRepository(SqliteService(sqlite_path))
