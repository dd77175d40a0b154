"""RSS adapter backed by Google News search feeds."""

from __future__ import annotations

from urllib.parse import urlencode

import feedparser
import httpx
from bs4 import BeautifulSoup

from neta.core.errors import SourceFetchError
from neta.core.logging import get_logger
from neta.models.neta import RawItem
from neta.sources.base import SourceAdapter, build_raw_item
from neta.utils.error_logger import log_feed_error

logger = get_logger(__name__)

GOOGLE_NEWS_SEARCH = "https://news.google.com/rss/search"

# Feed key -> search query
RSS_QUERIES: dict[str, str] = {
    "general": "Japan",
    "culture": "Japan culture",
    "food": "Japan food",
    "society": "Japan society",
    "travel": "Japan travel tourism",
    "business": "Japan business economy",
    "technology": "Japan technology",
    "sports": "Japan sports",
}


def build_feed_url(query: str, *, language: str = "en", country: str = "US") -> str:
    params = {"q": query, "hl": f"{language}-{country}", "gl": country, "ceid": f"{country}:{language}"}
    return f"{GOOGLE_NEWS_SEARCH}?{urlencode(params)}"


def _html_to_text(value: str | None) -> str:
    if not value:
        return ""
    return BeautifulSoup(value, "html.parser").get_text(" ", strip=True)


def _entry_tags(entry: feedparser.FeedParserDict) -> list[str]:
    tags = []
    for tag in entry.get("tags") or []:
        term = tag.get("term") if hasattr(tag, "get") else None
        if term:
            tags.append(term)
    return tags


class RssSourceAdapter(SourceAdapter):
    """Fetches an RSS feed per feed key and normalizes its entries."""

    feeds = RSS_QUERIES

    def __init__(
        self,
        *,
        language: str = "en",
        batch_size: int = 5,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
        feed_urls: dict[str, str] | None = None,
    ):
        super().__init__("RSS", batch_size=batch_size, timeout=timeout, client=client)
        self.feed_urls = feed_urls or {
            key: build_feed_url(query, language=language) for key, query in RSS_QUERIES.items()
        }

    @property
    def api_label(self) -> str:
        return "RSS feed"

    async def fetch_items(self, feed_key: str) -> list[RawItem]:
        feed_url = self.feed_urls.get(feed_key) or self.feed_urls["general"]
        response = await self.get(feed_url)

        feed = feedparser.parse(response.content)
        if feed.bozo and not feed.entries:
            error = feed.get("bozo_exception") or ValueError("unparsable feed")
            log_feed_error(self.name, feed_url, error, feed_name=feed_key, entries_processed=0)
            raise SourceFetchError(f"{self.api_label} could not be parsed: {error}")

        items: list[RawItem] = []
        for index, entry in enumerate(feed.entries):
            published = (
                entry.get("published_parsed")
                or entry.get("updated_parsed")
                or entry.get("published")
            )
            item = build_raw_item(
                identifier=entry.get("id") or entry.get("guid"),
                title=entry.get("title"),
                snippet=_html_to_text(entry.get("summary")),
                link=entry.get("link"),
                published=published,
                tags=_entry_tags(entry),
                index=index,
            )
            if item is None:
                logger.debug(f"Skipping RSS entry without title/link at index {index}")
                continue
            items.append(item)
            if len(items) >= self.batch_size:
                break

        return items
