"""Internships, partitioned by category, with the company logo stored on the item."""

import logging

from jobboard.db import Contains, DocumentStore, Eq, Filter, KeySchema
from jobboard.resources.base import BulkUploadResult, ResourceController, require_fields
from jobboard.services.pipeline import ListingConfig
from jobboard.services.relocation import RelocatingUpdater
from jobboard.tools.logo import LogoResolver
from jobboard.utils.text import coerce_list, now_iso, prefixed_id

logger = logging.getLogger(__name__)

INTERNSHIP_REQUIRED_FIELDS = ("title", "company", "location", "applyLink", "category")

NOT_SPECIFIED = "Not specified"


def _text(value) -> str:
    return str(value).strip() if value is not None else ""


class InternshipsController(ResourceController):
    label = "Internship"
    collection = "internships"
    id_field = "id"
    required_fields = INTERNSHIP_REQUIRED_FIELDS

    def __init__(self, store: DocumentStore, table: str, logos: LogoResolver):
        self.logos = logos
        super().__init__(store, table, KeySchema("category", "id"))
        self.updater = RelocatingUpdater(store, table, label=self.label, before_relocate=self._refresh_logo)

    def listing_config(self) -> ListingConfig:
        return ListingConfig(
            table=self.table,
            timestamp_field="postedAt",
            default_limit=15,
            search_fields=("title", "company"),
            base_filter=Filter((Eq("isActive", True),)),
            filter_builders={
                "category": lambda v: Eq("category", v),
                "location": lambda v: Contains("location", v),
                "batch": lambda v: Contains("batch", v),
            },
        )

    def filter_options(self) -> dict[str, list[str]]:
        """Distinct categories, locations and batches of active internships."""
        items = self.store.scan(self.table, self.pipeline.config.base_filter)
        batches = {b for item in items for b in coerce_list(item.get("batch"))}
        return {
            "categories": sorted({i["category"] for i in items if i.get("category")}),
            "locations": sorted({i["location"] for i in items if i.get("location")}),
            "batches": sorted(batches),
        }

    def build_item(self, payload: dict) -> dict:
        require_fields(payload, self.required_fields)
        now = now_iso()
        company = _text(payload["company"])
        return {
            "id": payload.get("id") or prefixed_id("intern"),
            "title": _text(payload["title"]),
            "company": company,
            "companyLogo": payload.get("companyLogo") or self.logos.resolve(company),
            "location": _text(payload["location"]),
            "startDate": payload.get("startDate") or "",
            "endDate": payload.get("endDate") or "",
            "stipend": payload.get("stipend") or NOT_SPECIFIED,
            "duration": payload.get("duration") or NOT_SPECIFIED,
            "applyLink": _text(payload["applyLink"]),
            "description": payload.get("description") or "",
            "skills": coerce_list(payload.get("skills")),
            "category": _text(payload["category"]),
            "batch": coerce_list(payload.get("batch")),
            "postedAt": now,
            "lastUpdated": now,
            "isActive": True,
        }

    def bulk_upload(self, rows: list[dict]) -> BulkUploadResult:
        # One lookup per distinct company instead of one per row.
        logos = self.logos.resolve_many(_text(row.get("company")) for row in rows)
        prepared = []
        for row in rows:
            company = _text(row.get("company"))
            prepared.append({**row, "companyLogo": logos[company]} if company in logos else row)
        return super().bulk_upload(prepared)

    def update(self, item_id: str, patch: dict) -> dict:
        patch = {k: v for k, v in patch.items() if k != "id"}
        for name in ("batch", "skills"):
            if name in patch:
                patch[name] = coerce_list(patch[name])
        return self.updater.update(item_id, patch).item

    def _refresh_logo(self, existing: dict, merged: dict) -> dict:
        if merged.get("company") != existing.get("company"):
            merged["companyLogo"] = self.logos.resolve(merged.get("company"))
        return merged
