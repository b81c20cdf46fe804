"""
Company / provider logo lookup.

Logos are resolved at read time from a third-party brand-logo service and
never persisted by listing reads. Any failure resolves to a placeholder so a
slow or missing logo never fails the surrounding request.
"""

import logging
import re
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

import httpx

from jobboard.config import settings

logger = logging.getLogger(__name__)

MAX_CONCURRENT_LOOKUPS = 8


def logo_slug(name: str) -> str:
    """``"Tata Consultancy"`` -> ``"tataconsultancy"``."""
    return re.sub(r"\s+", "", name.lower())


class LogoResolver:
    """Resolve brand names to logo URLs with a placeholder fallback."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        placeholder: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.logo_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.logo_timeout
        self.placeholder = placeholder or settings.placeholder_logo
        self._transport = transport

    def url_for(self, name: str) -> str:
        return f"{self.base_url}/{logo_slug(name)}.com"

    def resolve(self, name: str | None) -> str:
        """
        Look up the logo for ``name``.

        Args:
            name: Company or provider name

        Returns:
            Logo URL on a 2xx response, otherwise the placeholder path
        """
        if not name or not str(name).strip():
            return self.placeholder

        url = self.url_for(str(name))
        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=True, transport=self._transport) as client:
                response = client.get(url)
            if response.is_success:
                return url
            logger.warning(f"Logo lookup for {name!r} returned HTTP {response.status_code}")
        except httpx.HTTPError as e:
            logger.warning(f"Could not fetch logo for {name!r}: {e}")
        return self.placeholder

    def resolve_many(self, names: Iterable[str | None]) -> dict[str, str]:
        """Resolve each distinct name once, concurrently."""
        distinct = list(dict.fromkeys(n for n in names if n))
        if not distinct:
            return {}
        workers = min(MAX_CONCURRENT_LOOKUPS, len(distinct))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return dict(zip(distinct, pool.map(self.resolve, distinct)))

    def enrich(self, items: list[dict], source_field: str, target_field: str) -> list[dict]:
        """Return copies of ``items`` with ``target_field`` set to the resolved logo."""
        logos = self.resolve_many(item.get(source_field) for item in items)
        return [
            {**item, target_field: logos.get(item.get(source_field), self.placeholder)}
            for item in items
        ]
