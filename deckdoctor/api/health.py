"""
Liveness and readiness probes.

The service is live as soon as it answers; it is ready only once a card
catalog has been installed.
"""

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

from deckdoctor.services.catalog_state import current_lookup_index

router = APIRouter(tags=["health"])


class ProbeResponse(BaseModel):
    status: str
    cards: int | None = None


@router.get("/health", response_model=ProbeResponse)
async def health() -> ProbeResponse:
    """Always healthy while the process serves requests; the catalog is not consulted."""
    return ProbeResponse(status="healthy")


@router.get("/ready", response_model=ProbeResponse, responses={503: {"model": ProbeResponse}})
async def ready(request: Request, response: Response) -> ProbeResponse:
    """Ready with the catalog size, or 503 while no catalog is loaded."""
    index = current_lookup_index(request.app)
    if index is None:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ProbeResponse(status="not ready")
    return ProbeResponse(status="ready", cards=len(index.catalog))
