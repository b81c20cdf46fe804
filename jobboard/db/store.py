"""
Document store adapter.

Wraps a SQLAlchemy engine behind the primitive operations every controller
uses: scan, query, get, put, update, delete and batch_put. Items are plain
dicts addressed by a (partition key, sort key) pair declared per table.
"""

import copy
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from jobboard.db.filters import Filter
from jobboard.db.tables import Document
from jobboard.errors import StoreError, ValidationError

logger = logging.getLogger(__name__)

# Largest number of items a single batch write may carry.
MAX_BATCH_SIZE = 25


@dataclass(frozen=True)
class KeySchema:
    """Key attributes of a table. ``sort_key`` is None for single-key tables."""

    partition_key: str
    sort_key: str | None = None

    @property
    def key_fields(self) -> tuple[str, ...]:
        if self.sort_key:
            return (self.partition_key, self.sort_key)
        return (self.partition_key,)

    def key_of(self, item: dict) -> dict:
        """Extract the key attributes from an item."""
        return {name: item.get(name) for name in self.key_fields}

    def storage_key(self, key: dict) -> tuple[str, str]:
        for name in self.key_fields:
            value = key.get(name)
            if value is None or value == "":
                raise ValidationError(f"{name} is required")
        sort_value = str(key[self.sort_key]) if self.sort_key else ""
        return str(key[self.partition_key]), sort_value


class DocumentStore:
    """Key/value document store over a single SQLAlchemy table."""

    def __init__(self, engine: Engine):
        self._engine = engine
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        self._schemas: dict[str, KeySchema] = {}

    @property
    def engine(self) -> Engine:
        return self._engine

    def define_table(self, table: str, schema: KeySchema) -> None:
        """Declare the key schema of a logical table."""
        existing = self._schemas.get(table)
        if existing is not None and existing != schema:
            raise ValueError(f"Table {table!r} already defined with {existing}")
        self._schemas[table] = schema

    def schema(self, table: str) -> KeySchema:
        try:
            return self._schemas[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table!r}") from None

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Store {operation} failed: {e}")
            raise StoreError(f"{operation} failed: {e}") from e
        finally:
            session.close()

    # Reads

    def scan(self, table: str, filter: Filter | None = None) -> list[dict]:
        """Return every item of ``table`` matching ``filter``."""
        self.schema(table)
        with self._session(f"scan {table}") as session:
            rows = session.scalars(
                select(Document)
                .where(Document.table_name == table)
                .order_by(Document.partition_key, Document.sort_key)
            ).all()
            return self._matching(rows, filter)

    def query(self, table: str, partition_value: Any, filter: Filter | None = None) -> list[dict]:
        """Return the items of one partition matching ``filter``."""
        self.schema(table)
        with self._session(f"query {table}") as session:
            rows = session.scalars(
                select(Document)
                .where(
                    Document.table_name == table,
                    Document.partition_key == str(partition_value),
                )
                .order_by(Document.sort_key)
            ).all()
            return self._matching(rows, filter)

    def get(self, table: str, key: dict) -> dict | None:
        partition, sort = self.schema(table).storage_key(key)
        with self._session(f"get {table}") as session:
            row = session.get(Document, (table, partition, sort))
            return copy.deepcopy(row.data) if row else None

    # Writes

    def put(self, table: str, item: dict) -> None:
        """Insert or fully replace an item."""
        schema = self.schema(table)
        with self._session(f"put {table}") as session:
            self._put_row(session, table, schema, item)

    def update(self, table: str, key: dict, attrs: dict) -> dict:
        """Set ``attrs`` on the item at ``key`` and return the new item.

        Key attributes in ``attrs`` are ignored. A missing item is created
        from the key, matching upsert semantics of the underlying store.
        """
        schema = self.schema(table)
        partition, sort = schema.storage_key(key)
        with self._session(f"update {table}") as session:
            row = session.get(Document, (table, partition, sort))
            data = copy.deepcopy(row.data) if row else dict(schema.key_of(key))
            for name, value in attrs.items():
                if name not in schema.key_fields:
                    data[name] = value
            if row is None:
                row = Document(table_name=table, partition_key=partition, sort_key=sort)
                session.add(row)
            row.data = data
            row.updated_at = datetime.now(UTC)
            return copy.deepcopy(data)

    def delete(self, table: str, key: dict) -> None:
        """Delete the item at ``key``. Deleting a missing item is a no-op."""
        partition, sort = self.schema(table).storage_key(key)
        with self._session(f"delete {table}") as session:
            row = session.get(Document, (table, partition, sort))
            if row is not None:
                session.delete(row)

    def batch_put(self, table: str, items: list[dict]) -> None:
        """Write up to ``MAX_BATCH_SIZE`` items in one transaction."""
        if len(items) > MAX_BATCH_SIZE:
            raise ValueError(f"batch_put accepts at most {MAX_BATCH_SIZE} items, got {len(items)}")
        schema = self.schema(table)
        with self._session(f"batch_put {table}") as session:
            for item in items:
                self._put_row(session, table, schema, item)

    def _put_row(self, session: Session, table: str, schema: KeySchema, item: dict) -> None:
        partition, sort = schema.storage_key(item)
        row = session.get(Document, (table, partition, sort))
        if row is None:
            row = Document(table_name=table, partition_key=partition, sort_key=sort)
            session.add(row)
        row.data = copy.deepcopy(item)
        row.updated_at = datetime.now(UTC)

    @staticmethod
    def _matching(rows, filter: Filter | None) -> list[dict]:
        items = [copy.deepcopy(row.data) for row in rows]
        if not filter:
            return items
        return [item for item in items if filter.matches(item)]
