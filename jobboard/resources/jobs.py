"""Private-sector jobs, partitioned by category."""

from jobboard.db import Contains, DocumentStore, Eq, Filter, KeySchema, MissingOrEmpty
from jobboard.db.filters import Condition
from jobboard.resources.base import ResourceController, require_fields
from jobboard.services.pipeline import ListingConfig
from jobboard.services.relocation import RelocatingUpdater
from jobboard.utils.text import coerce_list, new_uuid, now_iso

# Batch filter value meaning "no batch was given".
NOT_MENTIONED = "Not Mentioned"

JOB_REQUIRED_FIELDS = (
    "role",
    "companyName",
    "location",
    "salary",
    "jobDescription",
    "originalLink",
    "category",
    "expiresOn",
)


def batch_condition(value: str) -> Condition:
    if value == NOT_MENTIONED:
        return MissingOrEmpty("batch")
    return Contains("batch", value)


class JobsController(ResourceController):
    label = "Job"
    collection = "jobs"
    id_field = "jobId"
    required_fields = JOB_REQUIRED_FIELDS

    def __init__(self, store: DocumentStore, table: str):
        super().__init__(store, table, KeySchema("category", "jobId"))
        self.updater = RelocatingUpdater(store, table, label=self.label)

    def listing_config(self) -> ListingConfig:
        return ListingConfig(
            table=self.table,
            timestamp_field="postedOn",
            default_limit=15,
            search_fields=("role", "companyName"),
            base_filter=Filter((Eq("status", "active"),)),
            filter_builders={
                "category": lambda v: Eq("category", v),
                "role": lambda v: Eq("role", v),
                "location": lambda v: Contains("location", v),
                "batch": batch_condition,
                "tags": lambda v: Contains("tags", v),
            },
        )

    def build_item(self, payload: dict) -> dict:
        require_fields(payload, self.required_fields)
        item = {
            **payload,
            "jobId": payload.get("jobId") or new_uuid(),
            "tags": coerce_list(payload.get("tags")),
            "batch": coerce_list(payload.get("batch")),
            "postedOn": now_iso(),
            "status": "active",
        }
        return item

    def update(self, item_id: str, patch: dict) -> dict:
        patch = {k: v for k, v in patch.items() if k != "jobId"}
        for name in ("tags", "batch"):
            if name in patch:
                patch[name] = coerce_list(patch[name])
        return self.updater.update(item_id, patch).item
