import asyncio

import pytest

from neta.core.errors import ProviderError
from neta.services.batch import NOTHING_TO_PROCESS, BatchOrchestrator, ItemOutcome, summarize_outcomes


class FakeCompleter:
    """Answers by headline; headlines listed in ``failures`` raise ProviderError."""

    def __init__(self, response: str, failures: dict[str, str] | None = None, delays=None):
        self.response = response
        self.failures = failures or {}
        self.delays = delays or {}
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        for headline, delay in self.delays.items():
            if headline in prompt:
                await asyncio.sleep(delay)
        for headline, message in self.failures.items():
            if f"Article Title: {headline}\n" in prompt:
                raise ProviderError(message)
        return self.response


@pytest.mark.asyncio
async def test_all_items_succeed(make_item, guide_json):
    items = [make_item(i) for i in range(1, 4)]
    completer = FakeCompleter(guide_json)

    result = await BatchOrchestrator(completer).process(items)

    assert [record.identifier for record in result.records] == ["a1", "a2", "a3"]
    assert result.summary == "3/3 processed"
    assert result.failures == ()
    assert len(completer.prompts) == 3


@pytest.mark.asyncio
async def test_one_provider_failure_drops_only_that_item(make_item, guide_json):
    items = [make_item(i) for i in range(1, 4)]
    completer = FakeCompleter(guide_json, failures={"Headline 2": "upstream 529 overloaded"})

    result = await BatchOrchestrator(completer).process(items)

    assert [record.identifier for record in result.records] == ["a1", "a3"]
    assert result.summary.startswith("2/3 processed")
    assert "upstream 529 overloaded" in result.summary
    assert "[a2] Headline 2" in result.summary


@pytest.mark.asyncio
async def test_zero_items_makes_no_provider_calls(guide_json):
    completer = FakeCompleter(guide_json)

    result = await BatchOrchestrator(completer).process([])

    assert result.records == ()
    assert result.summary == NOTHING_TO_PROCESS
    assert completer.prompts == []


@pytest.mark.asyncio
async def test_all_items_failing_is_not_an_error(make_item):
    items = [make_item(i) for i in range(1, 3)]
    completer = FakeCompleter("this is not json")

    result = await BatchOrchestrator(completer).process(items)

    assert result.records == ()
    assert result.summary.startswith("0/2 processed; errors: ")
    assert "[a1]" in result.summary
    assert "[a2]" in result.summary
    assert len(result.failures) == 2


@pytest.mark.asyncio
async def test_unexpected_exception_is_contained(make_item, guide_json):
    def exploding_parser(item, raw_text):
        raise KeyError("boom")

    orchestrator = BatchOrchestrator(FakeCompleter(guide_json), parser=exploding_parser)

    result = await orchestrator.process([make_item(1)])

    assert result.records == ()
    assert "unexpected KeyError" in result.summary


@pytest.mark.asyncio
async def test_results_keep_input_order_despite_completion_order(make_item, guide_json):
    items = [make_item(i) for i in range(1, 4)]
    completer = FakeCompleter(guide_json, delays={"Headline 1": 0.05, "Headline 2": 0.02})

    result = await BatchOrchestrator(completer).process(items)

    assert [record.identifier for record in result.records] == ["a1", "a2", "a3"]


@pytest.mark.asyncio
async def test_items_run_concurrently(make_item, guide_json):
    items = [make_item(i) for i in range(1, 6)]
    delays = {f"Headline {i}": 0.2 for i in range(1, 6)}
    completer = FakeCompleter(guide_json, delays=delays)

    loop = asyncio.get_running_loop()
    start = loop.time()
    await BatchOrchestrator(completer).process(items)
    elapsed = loop.time() - start

    assert elapsed < 0.8


@pytest.mark.asyncio
async def test_record_identifiers_are_a_subset_without_duplicates(make_item, guide_json):
    items = [make_item(i) for i in range(1, 6)]
    completer = FakeCompleter(guide_json, failures={"Headline 4": "boom"})

    result = await BatchOrchestrator(completer).process(items)
    identifiers = [record.identifier for record in result.records]

    assert len(result.records) <= len(items)
    assert len(identifiers) == len(set(identifiers))
    assert set(identifiers) <= {item.identifier for item in items}


def test_summarize_outcomes_formats_errors(make_item):
    outcomes = [
        ItemOutcome(index=0, item=make_item(1), error="[a1] Headline 1: boom"),
        ItemOutcome(index=1, item=make_item(2), error="[a2] Headline 2: bang"),
    ]

    assert summarize_outcomes(outcomes) == (
        "0/2 processed; errors: [a1] Headline 1: boom | [a2] Headline 2: bang"
    )
