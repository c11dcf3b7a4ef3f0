from sqlalchemy import Column, Integer, String, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()

TEST_TABLE = "test_table"


class ItemRecord(Base):
    __tablename__ = TEST_TABLE

    # Column order is the positional order SELECT * returns.
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    created_at = Column(String, nullable=False, server_default=text("CURRENT_TIMESTAMP"))


def create_all(engine: Engine) -> None:
    Base.metadata.create_all(engine)
