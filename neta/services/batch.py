"""Concurrent fan-out of the per-item guide pipeline."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from neta.core.errors import MalformedResponseError, ProviderError
from neta.core.logging import get_logger
from neta.models.neta import GuideRecord, RawItem
from neta.services.guide_parser import parse_guide
from neta.services.llm_prompts import build_guide_prompt
from neta.utils.error_logger import log_processing_error

logger = get_logger(__name__)

NOTHING_TO_PROCESS = "No articles to process"
EXPECTED_ITEM_ERRORS = (ProviderError, MalformedResponseError)


class Completer(Protocol):
    async def complete(self, prompt: str) -> str: ...


@dataclass(frozen=True)
class ItemOutcome:
    """Tagged result of one item pipeline: exactly one of record/error is set."""

    index: int
    item: RawItem
    record: GuideRecord | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass(frozen=True)
class BatchResult:
    records: tuple[GuideRecord, ...]
    summary: str
    failures: tuple[str, ...] = ()


def summarize_outcomes(outcomes: Sequence[ItemOutcome]) -> str:
    """``N/M processed``, plus the per-item errors when any item failed."""
    if not outcomes:
        return NOTHING_TO_PROCESS
    succeeded = sum(1 for outcome in outcomes if outcome.ok)
    summary = f"{succeeded}/{len(outcomes)} processed"
    failures = [outcome.error for outcome in outcomes if not outcome.ok and outcome.error]
    if failures:
        summary += "; errors: " + " | ".join(failures)
    return summary


class BatchOrchestrator:
    """Runs prompt -> completion -> parse for every item concurrently.

    One item's failure never aborts the batch; an all-failed batch is a
    successful batch with zero yield.
    """

    def __init__(
        self,
        completion_client: Completer,
        *,
        prompt_builder: Callable[[RawItem], str] = build_guide_prompt,
        parser: Callable[[RawItem, str], GuideRecord] = parse_guide,
    ):
        self.completion_client = completion_client
        self.prompt_builder = prompt_builder
        self.parser = parser

    async def _run_item(self, index: int, item: RawItem) -> ItemOutcome:
        try:
            prompt = self.prompt_builder(item)
            raw_text = await self.completion_client.complete(prompt)
            record = self.parser(item, raw_text)
        except Exception as e:  # noqa: BLE001
            log_processing_error(
                "batch", item.identifier, e, operation="guide_pipeline", context={"title": item.title}
            )
            reason = str(e) if isinstance(e, EXPECTED_ITEM_ERRORS) else f"unexpected {type(e).__name__}: {e}"
            return ItemOutcome(index=index, item=item, error=f"[{item.identifier}] {item.title}: {reason}")

        logger.debug(f"Built guide for {item.identifier}")
        return ItemOutcome(index=index, item=item, record=record)

    async def process(self, items: Sequence[RawItem]) -> BatchResult:
        """Transform ``items`` into guide records, preserving input order."""
        if not items:
            logger.info(NOTHING_TO_PROCESS)
            return BatchResult(records=(), summary=NOTHING_TO_PROCESS)

        outcomes = await asyncio.gather(
            *(self._run_item(index, item) for index, item in enumerate(items))
        )
        outcomes = sorted(outcomes, key=lambda outcome: outcome.index)

        records = tuple(outcome.record for outcome in outcomes if outcome.record is not None)
        failures = tuple(outcome.error for outcome in outcomes if outcome.error)
        summary = summarize_outcomes(outcomes)

        if failures:
            logger.warning(f"Guide batch degraded: {summary}")
        else:
            logger.info(f"Guide batch complete: {summary}")

        return BatchResult(records=records, summary=summary, failures=failures)
