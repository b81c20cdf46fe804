"""
Updates for tables whose partition key is a mutable business field.

When the partition field changes the item cannot be updated in place; it is
written under the new key first and the old key is deleted afterwards. If the
process dies between the two writes the item exists twice (never zero
times). ``find_duplicates`` / ``reconcile`` detect and repair that state.

Locate-then-mutate is two store calls with no lock in between, so two
concurrent updates of the same item can lose one of the writes.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass

from jobboard.db import DocumentStore, Eq, Filter
from jobboard.errors import NotFoundError
from jobboard.utils.text import now_iso, parse_timestamp

logger = logging.getLogger(__name__)

# Adjusts a merged item before it is written under its new key.
RelocationHook = Callable[[dict, dict], dict]


@dataclass
class UpdateOutcome:
    item: dict
    relocated: bool
    previous_partition: str | None = None


class RelocatingUpdater:
    """Update-by-sort-key for one table, relocating on partition changes."""

    def __init__(
        self,
        store: DocumentStore,
        table: str,
        label: str = "Item",
        before_relocate: RelocationHook | None = None,
    ):
        self.store = store
        self.table = table
        self.label = label
        self.schema = store.schema(table)
        if not self.schema.sort_key:
            raise ValueError(f"{table} has no sort key to locate items by")
        self.before_relocate = before_relocate

    def locate(self, sort_value: str) -> dict:
        """Find the item by sort key alone; the partition is not known up front."""
        matches = self.store.scan(self.table, Filter((Eq(self.schema.sort_key, sort_value),)))
        if not matches:
            raise NotFoundError(f"{self.label} not found")
        if len(matches) > 1:
            logger.warning(
                f"{self.table}: {len(matches)} copies of {self.schema.sort_key}={sort_value}, "
                f"updating the most recent"
            )
            matches.sort(key=lambda i: parse_timestamp(i.get("lastUpdated")), reverse=True)
        return matches[0]

    def update(self, sort_value: str, patch: dict) -> UpdateOutcome:
        existing = self.locate(sort_value)
        partition_field = self.schema.partition_key
        old_partition = existing.get(partition_field)
        new_partition = patch.get(partition_field)

        # Keys are stored as strings; 2024 and "2024" address the same row.
        if new_partition and str(new_partition) != str(old_partition):
            return self._relocate(existing, patch, old_partition, new_partition)

        attrs = {k: v for k, v in patch.items() if k not in self.schema.key_fields}
        attrs["lastUpdated"] = now_iso()
        item = self.store.update(self.table, self.schema.key_of(existing), attrs)
        return UpdateOutcome(item=item, relocated=False)

    def _relocate(self, existing: dict, patch: dict, old_partition, new_partition) -> UpdateOutcome:
        sort_field = self.schema.sort_key
        merged = {**existing, **patch}
        merged[self.schema.partition_key] = new_partition
        merged[sort_field] = existing[sort_field]
        merged["lastUpdated"] = now_iso()
        if self.before_relocate:
            merged = self.before_relocate(existing, merged)

        logger.info(
            f"Moving {self.table} {existing[sort_field]} from "
            f"{old_partition!r} to {new_partition!r}"
        )
        # Insert first: a failure before the delete leaves a duplicate, not a loss.
        self.store.put(self.table, merged)
        self.store.delete(self.table, {self.schema.partition_key: old_partition, sort_field: existing[sort_field]})
        return UpdateOutcome(item=merged, relocated=True, previous_partition=old_partition)


def find_duplicates(store: DocumentStore, table: str) -> dict[str, list[dict]]:
    """Sort-key values stored under more than one partition."""
    schema = store.schema(table)
    groups: dict[str, list[dict]] = defaultdict(list)
    for item in store.scan(table):
        groups[str(item.get(schema.sort_key))].append(item)
    return {key: items for key, items in groups.items() if len(items) > 1}


def reconcile(store: DocumentStore, table: str, apply: bool = False) -> list[dict]:
    """Keep the newest copy of each duplicated item and delete the rest.

    Returns the stale copies. Nothing is deleted unless ``apply`` is set.
    """
    schema = store.schema(table)
    stale: list[dict] = []
    for sort_value, copies in find_duplicates(store, table).items():
        copies.sort(key=lambda i: parse_timestamp(i.get("lastUpdated")), reverse=True)
        keep, extra = copies[0], copies[1:]
        logger.info(
            f"{table}: {sort_value} kept under {keep.get(schema.partition_key)!r}, "
            f"{len(extra)} stale cop{'y' if len(extra) == 1 else 'ies'}"
        )
        for item in extra:
            stale.append(item)
            if apply:
                store.delete(table, schema.key_of(item))
    return stale
