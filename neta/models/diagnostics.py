"""Diagnostics and boundary response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from neta.models.neta import GuideRecord


class BatchDiagnostics(BaseModel):
    """Explains fetch and transform outcomes for one invocation."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "news": "NewsData.io [general]: 3 articles found",
                "transform": "2/3 processed; errors: [a2] Train fares rise: provider timed out",
                "timestamp": "2026-10-19T09:00:00+00:00",
            }
        },
    )

    source_description: str = Field(..., alias="news")
    transform_summary: str = Field(..., alias="transform")
    generated_at: str = Field(..., alias="timestamp")


class NetaResponse(BaseModel):
    """Successful invocation payload: guides plus diagnostics."""

    netas: list[GuideRecord] = Field(default_factory=list)
    debug: BatchDiagnostics


class ErrorResponse(BaseModel):
    """Hard-failure payload (configuration problems)."""

    error: str
    netas: list[GuideRecord] = Field(default_factory=list)
