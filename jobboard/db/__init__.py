"""Database package."""

from jobboard.db.base import Base, create_db_engine, init_db
from jobboard.db.filters import Contains, Eq, Filter, MissingOrEmpty, Ne
from jobboard.db.store import MAX_BATCH_SIZE, DocumentStore, KeySchema
from jobboard.db.tables import Document

__all__ = [
    "Base",
    "create_db_engine",
    "init_db",
    "Document",
    "DocumentStore",
    "KeySchema",
    "MAX_BATCH_SIZE",
    "Filter",
    "Eq",
    "Ne",
    "Contains",
    "MissingOrEmpty",
]
