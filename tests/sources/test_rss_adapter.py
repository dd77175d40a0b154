import httpx
import pytest

from neta.sources.rss import RssSourceAdapter

RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Japan - Google News</title>
    <link>https://news.google.com</link>
    <description>Google News</description>
    <item>
      <title>Autumn leaves draw crowds to Kyoto</title>
      <link>https://example.jp/kyoto-leaves</link>
      <guid isPermaLink="false">guid-kyoto</guid>
      <pubDate>Mon, 19 Oct 2026 08:30:00 GMT</pubDate>
      <description>&lt;a href="https://example.jp"&gt;Visitors&lt;/a&gt; flock to temples.</description>
      <category>Travel</category>
    </item>
    <item>
      <title>Ramen prices climb</title>
      <link>https://example.jp/ramen</link>
      <description></description>
    </item>
    <item>
      <title>Third story</title>
      <link>https://example.jp/third</link>
    </item>
  </channel>
</rss>
"""


def _adapter(handler, **kwargs) -> RssSourceAdapter:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RssSourceAdapter(client=client, **kwargs)


@pytest.mark.asyncio
async def test_parses_feed_entries():
    adapter = _adapter(lambda request: httpx.Response(200, text=RSS_FEED), batch_size=5)

    result = await adapter.fetch("travel")

    assert len(result.items) == 3
    first = result.items[0]
    assert first.identifier == "guid-kyoto"
    assert first.title == "Autumn leaves draw crowds to Kyoto"
    assert first.snippet == "Visitors flock to temples."
    assert first.link == "https://example.jp/kyoto-leaves"
    assert first.published_at == "2026-10-19T08:30:00+00:00"
    assert first.source_category_tags == ("Travel",)
    assert result.items[1].identifier == "https://example.jp/ramen"
    assert result.items[1].snippet == ""
    assert result.note == "RSS [travel]: 3 articles found"


@pytest.mark.asyncio
async def test_requests_feed_for_selected_key():
    seen: list[httpx.URL] = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, text=RSS_FEED)

    adapter = _adapter(handler)

    await adapter.fetch("food")

    assert len(seen) == 1
    assert seen[0].host == "news.google.com"
    assert seen[0].params["q"] == "Japan food"
    assert seen[0].params["ceid"] == "US:en"


@pytest.mark.asyncio
async def test_caps_entries():
    adapter = _adapter(lambda request: httpx.Response(200, text=RSS_FEED), batch_size=2)

    result = await adapter.fetch(None)

    assert len(result.items) == 2


@pytest.mark.asyncio
async def test_http_error_status_is_reported():
    adapter = _adapter(lambda request: httpx.Response(404, text="not found"))

    result = await adapter.fetch(None)

    assert result.items == ()
    assert result.note == "RSS [general]: RSS feed error: 404"


@pytest.mark.asyncio
async def test_unparsable_feed_is_reported():
    adapter = _adapter(lambda request: httpx.Response(200, text="definitely not xml <<<"))

    result = await adapter.fetch(None)

    assert result.items == ()
    assert result.note.startswith("RSS [general]:")
