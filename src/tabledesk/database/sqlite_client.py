"""SQLite access: engine helper and the async storage service."""

import asyncio
from typing import Any, List, Optional, Protocol, Sequence, Tuple

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from tabledesk.database.errors import DatabaseError
from tabledesk.database.schema import create_all
from tabledesk.utils.logging import get_logger

logger = get_logger(__name__)

Row = Tuple[Any, ...]


def get_engine(sqlite_path: str) -> Engine:
    engine_url = f"sqlite:///{sqlite_path}"
    # Statements run on worker threads.
    kwargs = {"connect_args": {"check_same_thread": False}}
    if sqlite_path == ":memory:":
        kwargs["poolclass"] = StaticPool
    engine = create_engine(engine_url, future=True, **kwargs)
    create_all(engine)
    return engine


class StorageService(Protocol):
    """Statement execution surface the repository depends on."""

    async def initialize(self) -> bool: ...

    async def execute(self, sql: str, params: Sequence[Any]) -> None: ...

    async def execute_with_rows(
        self, sql: str, params: Optional[Sequence[Any]] = None
    ) -> Optional[List[Row]]: ...


class SqliteService:
    """
    Async storage service over a SQLite file.

    Statements take qmark (``?``) parameters and run in their own
    transaction. Blocking driver calls are pushed to a worker thread and
    serialized by a lock, so one statement runs at a time.
    """

    def __init__(self, sqlite_path: str):
        self.sqlite_path = sqlite_path
        self._engine: Optional[Engine] = None
        self._lock = asyncio.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    async def initialize(self) -> bool:
        if self._engine is not None:
            return True
        async with self._lock:
            # Another caller may have opened it while we waited.
            if self._engine is not None:
                return True
            try:
                self._engine = await asyncio.to_thread(get_engine, self.sqlite_path)
            except SQLAlchemyError as e:
                logger.error(f"Failed to open SQLite database {self.sqlite_path}: {e}")
                return False
        logger.debug(f"Opened SQLite database {self.sqlite_path}")
        return True

    async def execute(self, sql: str, params: Sequence[Any]) -> None:
        await self._run(sql, params, want_rows=False)

    async def execute_with_rows(
        self, sql: str, params: Optional[Sequence[Any]] = None
    ) -> Optional[List[Row]]:
        return await self._run(sql, params, want_rows=True)

    async def close(self) -> None:
        if self._engine is None:
            return
        async with self._lock:
            engine, self._engine = self._engine, None
            if engine is not None:
                await asyncio.to_thread(engine.dispose)

    async def _run(
        self, sql: str, params: Optional[Sequence[Any]], want_rows: bool
    ) -> Optional[List[Row]]:
        engine = self._engine
        if engine is None:
            raise DatabaseError("SQLite service is not initialized")
        bound = tuple(params or ())
        logger.debug(f"Executing: {sql} {bound}")
        async with self._lock:
            return await asyncio.to_thread(_execute_sync, engine, sql, bound, want_rows)

    async def __aenter__(self) -> "SqliteService":
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


def _execute_sync(
    engine: Engine, sql: str, params: Tuple[Any, ...], want_rows: bool
) -> Optional[List[Row]]:
    with engine.begin() as conn:
        result = conn.exec_driver_sql(sql, params)
        if not want_rows or not result.returns_rows:
            return None
        return [tuple(row) for row in result.fetchall()]
