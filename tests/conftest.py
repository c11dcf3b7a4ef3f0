"""Pytest configuration and fixtures."""

import locale
from typing import Any, List, Optional, Sequence

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tabledesk.database.item_repo import ItemRepository
from tabledesk.database.schema import Base
from tabledesk.database.sqlite_client import SqliteService


class FakeStorage:
    """In-memory stand-in for the storage service that records every call."""

    def __init__(
        self,
        rows: Optional[List[tuple]] = None,
        init_result: bool = True,
        error: Optional[Exception] = None,
    ):
        self.rows = rows
        self.init_result = init_result
        self.error = error
        self.calls: List[tuple] = []
        self.on_call = None

    def _record(self, *call: Any) -> None:
        self.calls.append(call)
        if self.on_call is not None:
            self.on_call(call)
        if self.error is not None:
            raise self.error

    async def initialize(self) -> bool:
        self._record("initialize")
        return self.init_result

    async def execute(self, sql: str, params: Sequence[Any]) -> None:
        self._record("execute", sql, list(params))

    async def execute_with_rows(self, sql: str, params: Optional[Sequence[Any]] = None):
        self._record("execute_with_rows", sql, params)
        return self.rows


@pytest.fixture(autouse=True)
def c_collation():
    """Pin string collation so name ordering is deterministic."""
    previous = locale.setlocale(locale.LC_COLLATE)
    locale.setlocale(locale.LC_COLLATE, "C")
    try:
        yield
    finally:
        locale.setlocale(locale.LC_COLLATE, previous)


@pytest.fixture
def session():
    """Create a temporary in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_path(tmp_path):
    return str(tmp_path / "tabledesk.db")


@pytest.fixture
def sqlite_service(sqlite_path):
    return SqliteService(sqlite_path)


@pytest.fixture
def repository(sqlite_service):
    return ItemRepository(sqlite_service)


@pytest.fixture
def fake_storage():
    return FakeStorage(rows=[])


@pytest.fixture
def make_storage():
    """Factory for FakeStorage instances with custom behaviour."""
    return FakeStorage
