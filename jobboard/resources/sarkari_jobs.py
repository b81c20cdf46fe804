"""Government ("sarkari") jobs, partitioned by organization."""

from jobboard.db import DocumentStore, Eq, Filter, KeySchema
from jobboard.resources.base import ResourceController, require_fields
from jobboard.services.pipeline import ListingConfig, sort_by_recency
from jobboard.tools.tabular import excel_date
from jobboard.utils.text import new_uuid, now_iso

SARKARI_REQUIRED_FIELDS = ("postName", "organization", "officialWebsite", "notificationLink")

# Spreadsheet columns folded into ``importantDates``.
DATE_COLUMNS = ("applicationStart", "applicationEnd", "examDate")

RESULT_OUT = "result-out"


class SarkariJobsController(ResourceController):
    label = "Sarkari job"
    collection = "jobs"
    id_field = "jobId"
    required_fields = SARKARI_REQUIRED_FIELDS

    def __init__(self, store: DocumentStore, table: str):
        super().__init__(store, table, KeySchema("organization", "jobId"))

    def listing_config(self) -> ListingConfig:
        return ListingConfig(
            table=self.table,
            timestamp_field="createdAt",
            default_limit=15,
            search_fields=("postName", "title", "organization", "category"),
            base_filter=Filter((Eq("status", "active"),)),
            filter_builders={"organization": lambda v: Eq("organization", v)},
        )

    def results(self) -> list[dict]:
        """Every listing whose results are out, newest first."""
        items = self.store.scan(self.table, Filter((Eq("status", RESULT_OUT),)))
        return sort_by_recency(items, "createdAt")

    def build_item(self, payload: dict) -> dict:
        require_fields(payload, self.required_fields)
        return {
            **payload,
            "jobId": payload.get("jobId") or new_uuid(),
            "createdAt": now_iso(),
            "status": "active",
        }

    def build_row(self, row: dict) -> dict:
        row = {k: v for k, v in row.items() if v is not None}
        dates = {name: excel_date(row.pop(name)) for name in DATE_COLUMNS if name in row}
        if dates:
            row["importantDates"] = dates
        return self.build_item(row)

    def update(self, item_id: str, patch: dict) -> dict:
        """Field-level update; the organization of an existing listing is fixed."""
        existing = self.get(item_id)
        attrs = {k: v for k, v in patch.items() if k not in self.schema.key_fields}
        attrs["lastUpdated"] = now_iso()
        return self.store.update(self.table, self.schema.key_of(existing), attrs)
