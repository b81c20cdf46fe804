"""Newsletter subscriptions: one item per (email, category)."""

import logging
import re

from jobboard.db import DocumentStore, Eq, KeySchema
from jobboard.errors import NotFoundError, ValidationError
from jobboard.resources.base import ResourceController, require_fields
from jobboard.services.pipeline import ListingConfig
from jobboard.tools.notifications import NotificationSink, NullNotificationSink
from jobboard.utils.text import coerce_list, now_iso

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SUBSCRIPTIONS_TOPIC = "new-subscriptions"


def validate_email(email) -> str:
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email.strip()):
        raise ValidationError("Invalid email format")
    return email.strip()


class SubscriptionsController(ResourceController):
    label = "Subscription"
    collection = "subscriptions"
    id_field = "email"
    required_fields = ("email", "category")

    def __init__(self, store: DocumentStore, table: str, notifications: NotificationSink | None = None):
        self.notifications = notifications or NullNotificationSink()
        super().__init__(store, table, KeySchema("email", "category"))

    def listing_config(self) -> ListingConfig:
        return ListingConfig(
            table=self.table,
            timestamp_field="subscribedAt",
            default_limit=30,
            search_fields=("email", "category"),
            filter_builders={"category": lambda v: Eq("category", v)},
        )

    def build_item(self, payload: dict) -> dict:
        require_fields(payload, self.required_fields)
        return {
            "email": validate_email(payload["email"]),
            "category": str(payload["category"]).strip(),
            "subscribedAt": now_iso(),
        }

    def subscribe(self, email, categories) -> dict:
        """
        Subscribe ``email`` to every category in ``categories``.

        Re-subscribing to a category overwrites the earlier item, so this is
        an upsert and subscriptions have no separate update operation.
        """
        if not email or not isinstance(categories, list) or not coerce_list(categories):
            raise ValidationError("Email and categories array are required")
        email = validate_email(email)
        categories = coerce_list(categories)

        items = [self.build_item({"email": email, "category": category}) for category in categories]
        for item in items:
            self.store.put(self.table, item)

        self.notifications.send(
            SUBSCRIPTIONS_TOPIC,
            email,
            {"email": email, "categories": categories, "subscribedAt": items[0]["subscribedAt"]},
        )
        logger.info(f"Subscribed {email} to {len(categories)} categories")
        return {"email": email, "categories": categories, "subscriptions": items}

    def get(self, item_id: str) -> dict:
        """All categories one email is subscribed to."""
        items = self.store.query(self.table, item_id)
        if not items:
            raise NotFoundError(f"{self.label} not found")
        return {
            "email": item_id,
            "categories": sorted(item["category"] for item in items),
            "subscriptions": items,
        }

    def create(self, payload: dict) -> dict:
        return self.subscribe(payload.get("email"), payload.get("categories"))

    def update(self, item_id: str, patch: dict) -> dict:
        raise ValidationError("Subscriptions cannot be updated; subscribe again instead")
