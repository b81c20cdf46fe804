"""
Text, list and timestamp helpers shared by the listing pipeline and controllers.
"""

import random
import re
import string
import time
import uuid
from datetime import UTC, datetime
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_NON_SEARCHABLE = re.compile(r"[^a-z0-9 ]")


def normalize_search_text(value: Any) -> str:
    """Lower-case and drop everything outside ``[a-z0-9 ]``; "Node.js" -> "nodejs"."""
    if value is None:
        return ""
    return _NON_SEARCHABLE.sub("", str(value).lower()).strip()


def coerce_list(value: Any) -> list[str]:
    """Coerce a tags/batch/skills value into a list of strings.

    Items may hold a real array or a comma-joined string (bulk uploads and
    older items); numbers come through from spreadsheets.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        parts = [str(v) for v in value if v is not None]
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        parts = str(value).split(",")
    elif isinstance(value, str):
        parts = value.split(",")
    else:
        parts = [str(value)]
    return [p.strip() for p in parts if p.strip()]


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp; missing or unparsable values sort as epoch 0."""
    if not value or not isinstance(value, str):
        return EPOCH
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_uuid() -> str:
    return str(uuid.uuid4())


def prefixed_id(prefix: str) -> str:
    """Build ids like ``intern_1718000000000_k3j9x0a1b``."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"
