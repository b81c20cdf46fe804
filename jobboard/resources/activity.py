"""Admin audit trail."""

import logging
import re

from jobboard.db import DocumentStore, Eq, KeySchema
from jobboard.errors import StoreError
from jobboard.services.pipeline import ListingConfig, ListingPage, ListingPipeline, ListQuery
from jobboard.utils.text import new_uuid, now_iso

logger = logging.getLogger(__name__)


def normalize_target_type(target_type: str | None) -> str:
    """``"sarkari-job"`` -> ``"Sarkari Job"``."""
    spaced = re.sub(r"[-_]", " ", target_type or "")
    return re.sub(r"\b\w", lambda m: m.group().upper(), spaced)


class ActivityLog:
    """Records admin mutations and lists them newest first."""

    def __init__(self, store: DocumentStore, table: str):
        self.store = store
        self.table = table
        store.define_table(table, KeySchema("id"))
        self.pipeline = ListingPipeline(
            store,
            ListingConfig(
                table=table,
                timestamp_field="timestamp",
                default_limit=20,
                search_fields=("action", "targetType", "targetId", "adminEmail"),
                filter_builders={
                    "adminEmail": lambda v: Eq("adminEmail", v),
                    "action": lambda v: Eq("action", v.upper()),
                },
            ),
        )

    def record(self, action: str, target_type: str, target_id: str, admin_email: str) -> dict | None:
        """Store one activity. A failed write is logged and never raised."""
        activity = {
            "id": new_uuid(),
            "action": (action or "").upper(),
            "targetType": normalize_target_type(target_type),
            "targetId": target_id,
            "adminEmail": admin_email,
            "timestamp": now_iso(),
        }
        try:
            self.store.put(self.table, activity)
        except StoreError as e:
            logger.error(f"Error logging activity {activity['action']} {target_id}: {e}")
            return None
        return activity

    def recent(self, query: ListQuery) -> ListingPage:
        return self.pipeline.list(query)
