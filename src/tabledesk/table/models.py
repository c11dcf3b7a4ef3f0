from enum import Enum
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict

from tabledesk.database.errors import DatabaseError

# Positional order of SELECT * FROM test_table.
ITEM_COLUMNS = ("id", "name", "created_at")


class SortField(str, Enum):
    ID = "id"
    NAME = "name"
    CREATED_AT = "created_at"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ItemRow(BaseModel):
    """One row of the item table. Immutable once read."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    created_at: str

    @classmethod
    def from_db_row(cls, row: Sequence[Any]) -> "ItemRow":
        if len(row) != len(ITEM_COLUMNS):
            raise DatabaseError(
                f"Expected {len(ITEM_COLUMNS)} columns {ITEM_COLUMNS}, got {len(row)}"
            )
        return cls(**dict(zip(ITEM_COLUMNS, row)))
