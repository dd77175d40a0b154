"""End-to-end invocation: fetch -> transform -> diagnostics."""

from __future__ import annotations

from neta.core.config import resolve_pipeline_config
from neta.core.logging import get_logger
from neta.core.settings import Settings, get_settings
from neta.core.timing import timed
from neta.models.diagnostics import NetaResponse
from neta.services.batch import BatchOrchestrator
from neta.services.completion import CompletionClient
from neta.services.diagnostics import assemble_diagnostics
from neta.sources.base import SourceAdapter
from neta.sources.factory import build_source_adapter

logger = get_logger(__name__)


class NetaService:
    """Produces the boundary payload for one request."""

    def __init__(self, source: SourceAdapter, orchestrator: BatchOrchestrator):
        self.source = source
        self.orchestrator = orchestrator

    async def generate(self, selector: str | None = None) -> NetaResponse:
        """Fetch a batch for ``selector`` and turn it into conversation guides.

        Never raises for source or provider trouble; those end up in ``debug``.
        """
        with timed(f"fetch {self.source.name} [{selector or 'default'}]"):
            fetched = await self.source.fetch(selector)

        with timed(f"transform {len(fetched.items)} items"):
            batch = await self.orchestrator.process(fetched.items)

        diagnostics = assemble_diagnostics(fetched.note, batch.summary)
        logger.info(
            "Neta invocation finished: %s records (%s; %s)",
            len(batch.records),
            diagnostics.source_description,
            diagnostics.transform_summary,
        )
        return NetaResponse(netas=list(batch.records), debug=diagnostics)


def build_neta_service(settings: Settings | None = None) -> NetaService:
    """Resolve configuration once and wire the pipeline.

    Raises:
        ConfigurationError: Before any network work, when a credential is missing.
    """
    config = resolve_pipeline_config(settings or get_settings())
    source = build_source_adapter(config)
    orchestrator = BatchOrchestrator(CompletionClient.from_config(config))
    return NetaService(source, orchestrator)
