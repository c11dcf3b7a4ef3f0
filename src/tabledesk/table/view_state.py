"""UI-facing state for the item table: rows, status flags, search and sort."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from tabledesk.database.item_repo import ItemRepository
from tabledesk.table.models import ItemRow, SortDirection, SortField
from tabledesk.table.sorting import filter_items, sort_items
from tabledesk.utils.logging import get_logger

logger = get_logger(__name__)

INIT_RETURNED_FALSE = "SQLite initialization returned false"


class ErrorKind(str, Enum):
    INITIALIZE = "initialize"
    LOAD = "load"
    ADD = "add"
    DELETE = "delete"


_ERROR_PREFIXES = {
    ErrorKind.INITIALIZE: "Failed to initialize database",
    ErrorKind.LOAD: "Failed to load data",
    ErrorKind.ADD: "Failed to add item",
    ErrorKind.DELETE: "Failed to delete item",
}


class OperationError(BaseModel):
    """Failure of one controller operation."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    detail: str
    # Set when the detail is already the full user-facing message.
    preformatted: bool = False

    @property
    def message(self) -> str:
        if self.preformatted:
            return self.detail
        return f"{_ERROR_PREFIXES[self.kind]}: {self.detail}"

    def __str__(self) -> str:
        return self.message


class ItemTableController:
    """
    Holds the observable state of the item table and drives the repository.

    Operations never raise: failures are recorded in ``last_error`` (and
    its formatted ``error`` string) and returned to the caller. Calls are
    expected to be awaited one at a time.
    """

    def __init__(self, repository: ItemRepository):
        self.repository = repository
        self.initialized = False
        self.rows: List[ItemRow] = []
        self.loading = False
        self.search_query = ""
        self.sort_field = SortField.ID
        self.sort_direction = SortDirection.ASC
        self.last_error: Optional[OperationError] = None

    @property
    def error(self) -> Optional[str]:
        return self.last_error.message if self.last_error else None

    @property
    def filtered_and_sorted_items(self) -> List[ItemRow]:
        result = filter_items(self.rows, self.search_query)
        return sort_items(result, self.sort_field, self.sort_direction)

    def _fail(self, kind: ErrorKind, exc: Exception) -> OperationError:
        self.last_error = OperationError(kind=kind, detail=str(exc))
        logger.warning(self.last_error.message)
        return self.last_error

    async def initialize(self) -> Optional[OperationError]:
        try:
            self.initialized = bool(await self.repository.initialize())
            if self.initialized:
                return await self.load_items()
            self.last_error = OperationError(
                kind=ErrorKind.INITIALIZE, detail=INIT_RETURNED_FALSE, preformatted=True
            )
            logger.warning(INIT_RETURNED_FALSE)
            return self.last_error
        except Exception as e:
            return self._fail(ErrorKind.INITIALIZE, e)

    async def load_items(self) -> Optional[OperationError]:
        try:
            self.loading = True
            # Storage may answer with no result set at all.
            self.rows = list(await self.repository.get_all() or [])
            logger.debug(f"Loaded {len(self.rows)} items")
            return None
        except Exception as e:
            return self._fail(ErrorKind.LOAD, e)
        finally:
            self.loading = False

    async def add_item(self, name: str) -> Optional[OperationError]:
        if not name.strip():
            return None

        try:
            self.loading = True
            await self.repository.create(name)
            return await self.load_items()
        except Exception as e:
            return self._fail(ErrorKind.ADD, e)
        finally:
            self.loading = False

    async def delete_item(self, item_id: int) -> Optional[OperationError]:
        try:
            self.loading = True
            await self.repository.delete(item_id)
            return await self.load_items()
        except Exception as e:
            return self._fail(ErrorKind.DELETE, e)
        finally:
            self.loading = False

    def toggle_sort(self, field: SortField) -> None:
        field = SortField(field)
        # Callers may assign plain strings to the public sort attributes.
        if SortField(self.sort_field) == field:
            self.sort_field = field
            self.sort_direction = (
                SortDirection.DESC
                if SortDirection(self.sort_direction) == SortDirection.ASC
                else SortDirection.ASC
            )
        else:
            self.sort_field = field
            self.sort_direction = SortDirection.ASC

    def clear_error(self) -> None:
        self.last_error = None
