"""
Outbound notifications for newsletter processing.

The message bus producer is disabled; ``NullNotificationSink`` stands in for
it so callers publish events without knowing whether anything listens.
"""

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def send(self, topic: str, key: str, value: dict[str, Any]) -> None: ...


class NullNotificationSink:
    """Accepts every event and drops it."""

    def send(self, topic: str, key: str, value: dict[str, Any]) -> None:
        logger.debug(f"Notifications disabled, dropping {topic} event for {key}")
