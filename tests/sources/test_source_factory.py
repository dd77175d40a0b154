import pytest

from neta.core.config import resolve_pipeline_config
from neta.core.errors import ConfigurationError
from neta.sources import NewsDataSourceAdapter, RssSourceAdapter, build_source_adapter


def test_builds_newsdata_adapter(settings):
    adapter = build_source_adapter(resolve_pipeline_config(settings))

    assert isinstance(adapter, NewsDataSourceAdapter)
    assert adapter.api_key == "nd-test-key"
    assert adapter.batch_size == 3


def test_builds_rss_adapter_without_newsdata_key(settings):
    config = resolve_pipeline_config(
        settings.model_copy(update={"news_source": "rss", "newsdata_api_key": None})
    )

    adapter = build_source_adapter(config)

    assert isinstance(adapter, RssSourceAdapter)
    assert set(adapter.feed_urls) >= {"general", "food", "culture"}


def test_unknown_source_is_configuration_error(settings):
    with pytest.raises(ConfigurationError, match="NEWS_SOURCE"):
        resolve_pipeline_config(settings.model_copy(update={"news_source": "twitter"}))
