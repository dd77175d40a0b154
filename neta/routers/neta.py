"""Neta API endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from neta.models.diagnostics import ErrorResponse, NetaResponse
from neta.services.neta_service import NetaService, build_neta_service
from neta.sources.base import FEED_KEYS

router = APIRouter(prefix="/api", tags=["neta"])

_neta_service: NetaService | None = None


def get_neta_service() -> NetaService:
    """Return the process-wide service, building it on first use.

    A ConfigurationError is not cached, so fixing the environment and
    retrying works without a restart.
    """
    global _neta_service
    if _neta_service is None:
        _neta_service = build_neta_service()
    return _neta_service


@router.get(
    "/neta",
    response_model=NetaResponse,
    responses={500: {"model": ErrorResponse, "description": "Missing configuration"}},
    summary="Generate conversation guides from today's news",
    description=(
        "Fetch a small batch of news for the selected category and turn each article into a "
        f"conversation guide. Known categories: {', '.join(FEED_KEYS)}; anything else uses "
        "the default feed."
    ),
)
async def get_netas(
    service: Annotated[NetaService, Depends(get_neta_service)],
    category: Annotated[str | None, Query(description="Feed category key")] = None,
) -> NetaResponse:
    return await service.generate(category)
