"""NewsData.io REST adapter."""

from __future__ import annotations

from typing import Any

import httpx

from neta.core.errors import SourceFetchError
from neta.core.logging import get_logger
from neta.models.neta import RawItem
from neta.sources.base import SourceAdapter, build_raw_item

logger = get_logger(__name__)

NEWSDATA_ENDPOINT = "https://newsdata.io/api/1/news"

# Feed key -> NewsData ``category`` parameter (None = no category filter)
NEWSDATA_CATEGORIES: dict[str, str | None] = {
    "general": None,
    "culture": "entertainment",
    "food": "food",
    "society": "politics",
    "travel": "tourism",
    "business": "business",
    "technology": "technology",
    "sports": "sports",
}


class NewsDataSourceAdapter(SourceAdapter):
    """Fetches Japan-related English articles from the NewsData.io ``/news`` endpoint."""

    feeds = NEWSDATA_CATEGORIES

    def __init__(
        self,
        api_key: str,
        *,
        country: str = "jp",
        language: str = "en",
        batch_size: int = 5,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__("NewsData.io", batch_size=batch_size, timeout=timeout, client=client)
        self.api_key = api_key
        self.country = country
        self.language = language

    @property
    def api_label(self) -> str:
        return "NewsData API"

    def build_params(self, feed_key: str) -> dict[str, Any]:
        params: dict[str, Any] = {
            "apikey": self.api_key,
            "country": self.country,
            "language": self.language,
            "size": self.batch_size,
        }
        category = self.feeds.get(feed_key)
        if category:
            params["category"] = category
        return params

    async def fetch_items(self, feed_key: str) -> list[RawItem]:
        response = await self.get(NEWSDATA_ENDPOINT, params=self.build_params(feed_key))

        try:
            data = response.json()
        except ValueError as e:
            raise SourceFetchError(f"{self.api_label} returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise SourceFetchError(f"{self.api_label} returned an unexpected payload")

        if data.get("status") == "error":
            results = data.get("results")
            message = results.get("message") if isinstance(results, dict) else None
            raise SourceFetchError(f"{self.api_label} error: {message or 'unknown error'}")

        results = data.get("results") or []
        if not isinstance(results, list):
            raise SourceFetchError(f"{self.api_label} returned no results list")

        items: list[RawItem] = []
        for index, article in enumerate(results):
            if not isinstance(article, dict):
                continue
            item = build_raw_item(
                identifier=article.get("article_id"),
                title=article.get("title"),
                snippet=article.get("description"),
                link=article.get("link"),
                published=article.get("pubDate"),
                tags=article.get("category"),
                index=index,
            )
            if item is None:
                logger.debug(f"Skipping NewsData article without title/link at index {index}")
                continue
            items.append(item)

        return items
