"""Build the configured source adapter."""

from __future__ import annotations

import httpx

from neta.core.config import PipelineConfig
from neta.core.errors import ConfigurationError
from neta.sources.base import SourceAdapter
from neta.sources.newsdata import NewsDataSourceAdapter
from neta.sources.rss import RssSourceAdapter


def build_source_adapter(
    config: PipelineConfig, client: httpx.AsyncClient | None = None
) -> SourceAdapter:
    """Return the adapter for ``config.news_source``."""
    if config.news_source == "newsdata":
        if not config.newsdata_api_key:
            raise ConfigurationError("NEWSDATA_API_KEY is not configured")
        return NewsDataSourceAdapter(
            config.newsdata_api_key,
            country=config.newsdata_country,
            language=config.newsdata_language,
            batch_size=config.batch_size,
            timeout=config.http_timeout_seconds,
            client=client,
        )
    if config.news_source == "rss":
        return RssSourceAdapter(
            language=config.newsdata_language,
            batch_size=config.batch_size,
            timeout=config.http_timeout_seconds,
            client=client,
        )
    raise ConfigurationError(f"Unsupported news source: {config.news_source}")
