"""Database engine creation and schema initialization"""

from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from mdpages.crud import tables  # noqa: F401  registers table metadata


def make_engine(db_url: str):
    """Create an engine; in-memory SQLite shares one connection so tables persist across sessions."""
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            db_url, echo=False,
            connect_args={"check_same_thread": False}, poolclass=StaticPool,
        )
    return create_engine(db_url, echo=False)


def init_db(engine) -> None:
    """Create all tables that do not exist yet."""
    SQLModel.metadata.create_all(engine)


def reset_db(engine) -> None:
    """Drop and recreate all tables."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
