"""
Shared controller behaviour for listing resources.

A controller binds one table to the listing pipeline and implements the
create / get / update / delete / bulk-upload operations against that
table's key schema. Subclasses describe themselves through class attributes
and override ``build_item`` (and ``update`` where the key schema needs it).
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from jobboard.db import MAX_BATCH_SIZE, DocumentStore, Eq, Filter, KeySchema
from jobboard.errors import NotFoundError, StoreError, ValidationError
from jobboard.services.pipeline import ListingConfig, ListingPage, ListingPipeline, ListQuery
from jobboard.utils.text import now_iso, parse_timestamp

logger = logging.getLogger(__name__)


class RowError(BaseModel):
    row: int
    error: str


class BulkUploadResult(BaseModel):
    uploaded: int = 0
    errors: list[RowError] = Field(default_factory=list)


def require_fields(payload: dict, fields) -> None:
    """Raise ValidationError naming the first missing or blank field."""
    for name in fields:
        value = payload.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{name} is required")


def newest(items: list[dict], field: str = "lastUpdated") -> dict | None:
    if not items:
        return None
    return max(items, key=lambda i: parse_timestamp(i.get(field)))


class ResourceController:
    """CRUD and listing for one resource table."""

    label = "Item"
    collection = "items"
    id_field = "id"
    required_fields: tuple[str, ...] = ()
    # Largest number of valid rows a single bulk upload may carry.
    bulk_row_limit: int | None = None

    def __init__(self, store: DocumentStore, table: str, schema: KeySchema):
        self.store = store
        self.table = table
        self.schema = schema
        store.define_table(table, schema)
        self.pipeline = ListingPipeline(store, self.listing_config())

    def listing_config(self) -> ListingConfig:
        raise NotImplementedError

    # Reads

    def list(self, query: ListQuery) -> ListingPage:
        return self.pipeline.list(query)

    def find(self, item_id: str) -> dict | None:
        """Look an item up by its identifier, scanning when the table has a sort key."""
        if self.schema.sort_key is None:
            return self.store.get(self.table, {self.schema.partition_key: item_id})
        return newest(self.store.scan(self.table, Filter((Eq(self.id_field, item_id),))))

    def get(self, item_id: str) -> dict:
        item = self.find(item_id)
        if item is None:
            raise NotFoundError(f"{self.label} not found")
        return item

    def read(self, item_id: str) -> dict:
        """``get`` plus the same enrichment listing pages receive."""
        item = self.get(item_id)
        enricher = self.pipeline.config.enricher
        return enricher([item])[0] if enricher else item

    def list_by_category(self, category: str, query: ListQuery) -> ListingPage:
        """List one category, as a partition query when category is the partition key."""
        if self.schema.partition_key == "category":
            query.partition = category
        else:
            query.filters = {**query.filters, "category": category}
        return self.pipeline.list(query)

    # Writes

    def build_item(self, payload: dict) -> dict:
        """Validate a create payload and return the item to store."""
        raise NotImplementedError

    def build_row(self, row: dict) -> dict:
        """Build an item from one spreadsheet row; blank cells are dropped."""
        return self.build_item({k: v for k, v in row.items() if v is not None})

    def create(self, payload: dict) -> dict:
        item = self.build_item(dict(payload))
        self.store.put(self.table, item)
        logger.info(f"Created {self.table} item {item.get(self.id_field)}")
        return item

    def update(self, item_id: str, patch: dict) -> dict:
        """Merge ``patch`` into the stored item and write it back whole."""
        existing = self.get(item_id)
        merged = {**existing, **patch}
        for name in self.schema.key_fields:
            merged[name] = existing[name]
        merged["lastUpdated"] = now_iso()
        self.store.put(self.table, merged)
        return merged

    def delete(self, item_id: str) -> bool:
        """Delete every stored copy of the item. Returns False when nothing matched."""
        if self.schema.sort_key is None:
            copies = [item for item in [self.find(item_id)] if item is not None]
        else:
            copies = self.store.scan(self.table, Filter((Eq(self.id_field, item_id),)))
        for item in copies:
            self.store.delete(self.table, self.schema.key_of(item))
        if not copies:
            logger.info(f"Delete of unknown {self.table} item {item_id} ignored")
        return bool(copies)

    def bulk_upload(self, rows: list[dict]) -> BulkUploadResult:
        """
        Build one item per row and write them in batches.

        Args:
            rows: Spreadsheet rows, first data row first

        Returns:
            Uploaded count plus a per-row error list (rows are 1-based)
        """
        result = BulkUploadResult()
        built: list[tuple[int, dict]] = []
        for index, row in enumerate(rows, start=1):
            try:
                built.append((index, self.build_row(row)))
            except ValidationError as e:
                result.errors.append(RowError(row=index, error=e.message))

        if self.bulk_row_limit is not None and len(built) > self.bulk_row_limit:
            raise ValidationError(f"Maximum {self.bulk_row_limit} {self.collection} allowed per upload")

        for start in range(0, len(built), MAX_BATCH_SIZE):
            batch = built[start : start + MAX_BATCH_SIZE]
            try:
                self.store.batch_put(self.table, [item for _, item in batch])
            except StoreError as e:
                logger.error(f"Bulk write to {self.table} failed for rows {batch[0][0]}-{batch[-1][0]}: {e}")
                result.errors.extend(RowError(row=index, error="Batch write failed") for index, _ in batch)
                continue
            result.uploaded += len(batch)

        logger.info(f"Bulk upload to {self.table}: {result.uploaded} written, {len(result.errors)} errors")
        return result
