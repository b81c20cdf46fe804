"""Walk-in interview listings, keyed by id."""

from jobboard.db import Contains, DocumentStore, Eq, KeySchema
from jobboard.resources.base import ResourceController, require_fields
from jobboard.services.pipeline import ListingConfig
from jobboard.tools.logo import LogoResolver
from jobboard.utils.text import new_uuid, now_iso

WALKING_REQUIRED_FIELDS = (
    "title",
    "company",
    "location",
    "experience",
    "category",
    "date",
    "time",
    "applyLink",
)


class WalkingController(ResourceController):
    label = "Walking opportunity"
    collection = "walking"
    id_field = "id"
    required_fields = WALKING_REQUIRED_FIELDS

    def __init__(self, store: DocumentStore, table: str, logos: LogoResolver):
        self.logos = logos
        super().__init__(store, table, KeySchema("id"))

    def listing_config(self) -> ListingConfig:
        return ListingConfig(
            table=self.table,
            timestamp_field="postedAt",
            default_limit=30,
            search_fields=("title", "company", "category", "experience"),
            filter_builders={
                "category": lambda v: Eq("category", v, ignore_case=True),
                "location": lambda v: Contains("location", v, ignore_case=True),
            },
            enricher=self.add_company_logos,
        )

    def add_company_logos(self, items: list[dict]) -> list[dict]:
        return self.logos.enrich(items, "company", "companyLogo")

    def filter_options(self) -> dict[str, list[str]]:
        items = self.store.scan(self.table)
        return {
            "categories": sorted({i["category"] for i in items if i.get("category")}),
            "locations": sorted({i["location"] for i in items if i.get("location")}),
        }

    def build_item(self, payload: dict) -> dict:
        require_fields(payload, self.required_fields)
        item = {name: str(payload[name]).strip() for name in WALKING_REQUIRED_FIELDS}
        item["id"] = payload.get("id") or new_uuid()
        item["postedAt"] = now_iso()
        item["isActive"] = True
        return item
