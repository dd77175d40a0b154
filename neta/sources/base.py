import hashlib
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

import httpx

from neta.core.errors import SourceFetchError
from neta.core.logging import get_logger
from neta.models.neta import RawItem
from neta.utils.dates import to_iso_timestamp
from neta.utils.error_logger import log_error, log_http_error

logger = get_logger(__name__)

"""
Source conventions:
------------------
Every adapter exposes the same fixed set of feed keys. A key selects one
upstream query or feed; unknown or missing keys resolve to DEFAULT_FEED_KEY.

fetch() never raises. Transport failures, non-2xx statuses, provider error
envelopes and empty results all come back as an empty item tuple plus a note
that says what happened, e.g. "NewsData.io [food]: NewsData API error: 503".
"""

DEFAULT_FEED_KEY = "general"
FEED_KEYS = ("general", "culture", "food", "society", "travel", "business", "technology", "sports")

USER_AGENT = "NetaNews/1.0 (+https://github.com/neta-news)"


@dataclass(frozen=True)
class SourceFetchResult:
    """Items from one fetch plus a human-readable note on the outcome."""

    items: tuple[RawItem, ...]
    note: str


def fallback_identifier(title: str, link: str | None, index: int) -> str:
    """Identifier for items the source did not assign one to."""
    if link:
        return link
    digest = hashlib.sha1(f"{index}:{title}".encode("utf-8")).hexdigest()[:12]
    return f"item-{digest}"


def ensure_unique_identifiers(items: list[RawItem]) -> list[RawItem]:
    """Suffix repeated identifiers (``-2``, ``-3``...) so each is unique in the batch."""
    seen: dict[str, int] = {}
    taken = {item.identifier for item in items}
    unique: list[RawItem] = []
    for item in items:
        count = seen.get(item.identifier, 0) + 1
        seen[item.identifier] = count
        if count == 1:
            unique.append(item)
            continue
        suffix = count
        candidate = f"{item.identifier}-{suffix}"
        while candidate in taken:
            suffix += 1
            candidate = f"{item.identifier}-{suffix}"
        taken.add(candidate)
        unique.append(item.model_copy(update={"identifier": candidate}))
    return unique


def build_raw_item(
    *,
    identifier: str | None,
    title: str | None,
    snippet: str | None,
    link: str | None,
    published: Any,
    tags: Any,
    index: int,
) -> RawItem | None:
    """Normalize loosely-typed source fields into a RawItem.

    Returns None when the entry has no usable title or link.
    """
    clean_title = (title or "").strip()
    clean_link = (link or "").strip()
    if not clean_title or not clean_link:
        return None

    clean_tags: tuple[str, ...] = ()
    if isinstance(tags, (list, tuple)):
        clean_tags = tuple(str(tag).strip() for tag in tags if tag and str(tag).strip())

    clean_id = str(identifier).strip() if identifier else ""
    return RawItem(
        identifier=clean_id or fallback_identifier(clean_title, clean_link, index),
        title=clean_title,
        snippet=(snippet or "").strip(),
        link=clean_link,
        published_at=to_iso_timestamp(published),
        source_category_tags=clean_tags,
    )


class SourceAdapter(ABC):
    """Base class for news sources."""

    feeds: Mapping[str, Any] = {}

    def __init__(
        self,
        name: str,
        *,
        batch_size: int = 5,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.name = name
        self.batch_size = batch_size
        self.timeout = httpx.Timeout(timeout=timeout, connect=min(timeout, 10.0))
        self._client = client

    def resolve_feed_key(self, selector: str | None) -> str:
        """Map a selector onto a known feed key, falling back to the default feed."""
        key = (selector or "").strip().lower()
        if key in self.feeds:
            return key
        if key:
            logger.info(f"Unknown feed selector {selector!r} for {self.name}; using {DEFAULT_FEED_KEY}")
        return DEFAULT_FEED_KEY

    @asynccontextmanager
    async def get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client, or a short-lived one for this fetch."""
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            yield client

    async def get(self, url: str, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """Single GET without retries; non-2xx becomes SourceFetchError."""
        async with self.get_client() as client:
            logger.debug(f"Fetching {self.name} feed: {url}")
            response = await client.get(url, params=params)

        if not response.is_success:
            log_http_error(
                self.name,
                url,
                response=response,
                operation="source_fetch",
                context={"status_code": response.status_code},
            )
            raise SourceFetchError(
                f"{self.api_label} error: {response.status_code}", status_code=response.status_code
            )
        return response

    @property
    def api_label(self) -> str:
        return f"{self.name} API"

    @abstractmethod
    async def fetch_items(self, feed_key: str) -> list[RawItem]:
        """
        Fetch and normalize raw items for ``feed_key``.

        May raise SourceFetchError or httpx errors; fetch() converts them.
        """

    async def fetch(self, selector: str | None = None) -> SourceFetchResult:
        """Fetch at most ``batch_size`` items. Never raises."""
        feed_key = self.resolve_feed_key(selector)
        prefix = f"{self.name} [{feed_key}]"

        try:
            items = await self.fetch_items(feed_key)
        except SourceFetchError as e:
            logger.warning(f"{prefix}: {e}")
            return SourceFetchResult(items=(), note=f"{prefix}: {e}")
        except httpx.HTTPError as e:
            log_error(self.name, e, operation="source_fetch", context={"feed_key": feed_key})
            return SourceFetchResult(
                items=(), note=f"{prefix}: request failed ({type(e).__name__}: {e})"
            )
        except Exception as e:  # noqa: BLE001
            log_error(self.name, e, operation="source_fetch", context={"feed_key": feed_key})
            return SourceFetchResult(items=(), note=f"{prefix}: unexpected error: {e}")

        if not items:
            logger.info(f"{prefix}: no articles found")
            return SourceFetchResult(items=(), note=f"{prefix}: no articles found")

        capped = ensure_unique_identifiers(items[: self.batch_size])
        logger.info(f"Fetched {len(capped)} items from {prefix}")
        return SourceFetchResult(
            items=tuple(capped), note=f"{prefix}: {len(capped)} articles found"
        )
