"""
Listing pipeline shared by every resource.

fetch (scan or partition query) -> store-side filter -> case-insensitive
text search -> recency sort -> paginate -> per-page enrichment.

Pagination is computed in memory from the filtered set, so the whole table
is read on every request. That is fine at the current table sizes; moving to
store-side pagination would change what ``totalItems`` means.
"""

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from jobboard.db import DocumentStore, Filter
from jobboard.db.filters import Condition
from jobboard.utils.text import normalize_search_text, parse_timestamp

# Builds a store condition from a raw query-string value.
FilterBuilder = Callable[[str], Condition]
# Enriches a page of items in place of the originals.
Enricher = Callable[[list[dict]], list[dict]]


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    totalItems: int
    hasNext: bool
    hasPrev: bool


@dataclass
class ListingPage:
    items: list[dict]
    pagination: Pagination


@dataclass
class ListQuery:
    """Parsed listing request."""

    page: int = 1
    limit: int | None = None
    filters: dict[str, str] = field(default_factory=dict)
    q: str | None = None
    partition: str | None = None


@dataclass
class ListingConfig:
    """How one resource plugs into the pipeline."""

    table: str
    timestamp_field: str
    default_limit: int
    search_fields: Sequence[str]
    base_filter: Filter = field(default_factory=Filter)
    filter_builders: dict[str, FilterBuilder] = field(default_factory=dict)
    enricher: Enricher | None = None


def matches_search(item: dict, normalized_query: str, fields: Sequence[str]) -> bool:
    """True if any of ``fields`` contains the normalized query as a substring.

    Spaces are also compared collapsed, so "nodejs" (from "Node.js") is
    found in "node js developer".
    """
    compact_query = normalized_query.replace(" ", "")
    for name in fields:
        value = item.get(name)
        if not isinstance(value, str):
            continue
        text = normalize_search_text(value)
        if normalized_query in text or compact_query in text.replace(" ", ""):
            return True
    return False


def sort_by_recency(items: list[dict], timestamp_field: str) -> list[dict]:
    """Newest first; items without a usable timestamp sort as the oldest."""
    return sorted(items, key=lambda item: parse_timestamp(item.get(timestamp_field)), reverse=True)


def paginate(items: list[Any], page: int, limit: int) -> tuple[list[Any], Pagination]:
    total = len(items)
    start = (page - 1) * limit
    end = start + limit
    pagination = Pagination(
        currentPage=page,
        totalPages=math.ceil(total / limit),
        totalItems=total,
        hasNext=end < total,
        hasPrev=page > 1,
    )
    return items[start:end], pagination


class ListingPipeline:
    """Run listing queries for one resource against the document store."""

    def __init__(self, store: DocumentStore, config: ListingConfig):
        self.store = store
        self.config = config

    def build_filter(self, filters: dict[str, str]) -> Filter:
        store_filter = self.config.base_filter
        for name, raw in filters.items():
            if raw is None or raw == "":
                continue
            builder = self.config.filter_builders.get(name)
            if builder is None:
                continue
            store_filter = store_filter.and_(builder(raw))
        return store_filter

    def fetch(self, query: ListQuery) -> list[dict]:
        """Candidate items after store-side filtering and text search."""
        store_filter = self.build_filter(query.filters)
        if query.partition is not None:
            items = self.store.query(self.config.table, query.partition, store_filter)
        else:
            items = self.store.scan(self.config.table, store_filter)

        if query.q:
            needle = normalize_search_text(query.q)
            if needle:
                items = [i for i in items if matches_search(i, needle, self.config.search_fields)]
        return items

    def list(self, query: ListQuery) -> ListingPage:
        if query.page < 1:
            raise ValueError("page must be >= 1")
        limit = query.limit or self.config.default_limit
        if limit < 1:
            raise ValueError("limit must be >= 1")

        items = sort_by_recency(self.fetch(query), self.config.timestamp_field)
        page_items, pagination = paginate(items, query.page, limit)

        if self.config.enricher and page_items:
            page_items = self.config.enricher(page_items)
        return ListingPage(items=page_items, pagination=pagination)
