"""Certifications, keyed by id. Provider logos are resolved per page, never stored."""

from jobboard.db import DocumentStore, Eq, KeySchema
from jobboard.resources.base import ResourceController, require_fields
from jobboard.services.pipeline import ListingConfig
from jobboard.tools.logo import LogoResolver
from jobboard.utils.text import now_iso, prefixed_id

CERTIFICATION_FIELDS = ("title", "provider", "category", "link")

MAX_UPLOAD_ROWS = 1000


class CertificationsController(ResourceController):
    label = "Certification"
    collection = "certifications"
    id_field = "id"
    required_fields = CERTIFICATION_FIELDS
    bulk_row_limit = MAX_UPLOAD_ROWS

    def __init__(self, store: DocumentStore, table: str, logos: LogoResolver):
        self.logos = logos
        super().__init__(store, table, KeySchema("id"))

    def listing_config(self) -> ListingConfig:
        return ListingConfig(
            table=self.table,
            timestamp_field="postedAt",
            default_limit=30,
            search_fields=("title", "provider", "category"),
            filter_builders={"category": lambda v: Eq("category", v)},
            enricher=self.add_provider_logos,
        )

    def add_provider_logos(self, items: list[dict]) -> list[dict]:
        return self.logos.enrich(items, "provider", "providerLogo")

    def build_item(self, payload: dict) -> dict:
        require_fields(payload, self.required_fields)
        now = now_iso()
        item = {name: str(payload[name]).strip() for name in CERTIFICATION_FIELDS}
        item["id"] = payload.get("id") or prefixed_id("cert")
        item["postedAt"] = now
        item["lastUpdated"] = now
        return item

    def update(self, item_id: str, patch: dict) -> dict:
        """Replace the four descriptive fields; all of them are required."""
        require_fields(patch, self.required_fields)
        self.get(item_id)
        attrs = {name: patch[name] for name in CERTIFICATION_FIELDS}
        attrs["lastUpdated"] = now_iso()
        return self.store.update(self.table, {"id": item_id}, attrs)
