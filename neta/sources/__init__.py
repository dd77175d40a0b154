"""News source adapters."""

from neta.sources.base import (
    DEFAULT_FEED_KEY,
    FEED_KEYS,
    SourceAdapter,
    SourceFetchResult,
)
from neta.sources.factory import build_source_adapter
from neta.sources.newsdata import NewsDataSourceAdapter
from neta.sources.rss import RssSourceAdapter

__all__ = [
    "DEFAULT_FEED_KEY",
    "FEED_KEYS",
    "NewsDataSourceAdapter",
    "RssSourceAdapter",
    "SourceAdapter",
    "SourceFetchResult",
    "build_source_adapter",
]
