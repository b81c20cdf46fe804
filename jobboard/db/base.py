"""Database engine configuration."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def create_db_engine(database_url: str) -> Engine:
    """Create an engine for the document store.

    In-memory SQLite shares one connection across threads so every request
    handled by the threadpool sees the same data.
    """
    if not database_url:
        raise ValueError("DATABASE_URL not configured")

    if database_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Test connections before use
        pool_recycle=300,  # Recycle connections after 5 minutes
    )


def init_db(engine: Engine) -> None:
    """Create the document table if it does not exist."""
    from jobboard.db import tables  # noqa: F401

    Base.metadata.create_all(bind=engine)
