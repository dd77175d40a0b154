import json

import pytest

from neta.models.diagnostics import NetaResponse
from neta.services.diagnostics import assemble_diagnostics
from scripts import generate_netas


class StubService:
    def __init__(self):
        self.selectors = []

    async def generate(self, selector=None):
        self.selectors.append(selector)
        return NetaResponse(
            netas=[], debug=assemble_diagnostics("RSS [food]: no articles found", "No articles to process")
        )


def test_parse_args_defaults():
    args = generate_netas.parse_args([])

    assert args.category is None
    assert args.source is None
    assert args.log_level is None


def test_parse_args_rejects_unknown_source():
    with pytest.raises(SystemExit):
        generate_netas.parse_args(["--source", "twitter"])


@pytest.mark.asyncio
async def test_run_reports_missing_credentials(monkeypatch, settings):
    monkeypatch.setattr(
        generate_netas,
        "get_settings",
        lambda: settings.model_copy(update={"newsdata_api_key": ""}),
    )

    exit_code, payload = await generate_netas.run(None, None)

    assert exit_code == 1
    assert json.loads(payload) == {"error": "NEWSDATA_API_KEY is not configured", "netas": []}


@pytest.mark.asyncio
async def test_run_applies_source_override(monkeypatch, settings):
    stub = StubService()
    seen_settings = []

    def fake_build(resolved):
        seen_settings.append(resolved)
        return stub

    monkeypatch.setattr(generate_netas, "get_settings", lambda: settings)
    monkeypatch.setattr(generate_netas, "build_neta_service", fake_build)

    exit_code, payload = await generate_netas.run("food", "rss")

    assert exit_code == 0
    assert seen_settings[0].news_source == "rss"
    assert stub.selectors == ["food"]
    body = json.loads(payload)
    assert body["netas"] == []
    assert body["debug"]["transform"] == "No articles to process"
