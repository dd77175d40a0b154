"""Assemble the per-invocation diagnostic object."""

from __future__ import annotations

from neta.models.diagnostics import BatchDiagnostics
from neta.utils.dates import utc_now_iso


def assemble_diagnostics(source_note: str, batch_summary: str) -> BatchDiagnostics:
    """Package fetch and transform outcomes, timestamped at call time."""
    return BatchDiagnostics(
        source_description=source_note,
        transform_summary=batch_summary,
        generated_at=utc_now_iso(),
    )
