"""FastAPI routes for the coverscout API.

# Endpoint                                Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/artist/{name}/covers?page=N     GET     Songs the artist covered
# /api/v1/artist/{name}/covered?page=N    GET     Songs of the artist covered by others
# /api/v1/health                          GET     Health check + fetcher status

``{name}`` is a path parameter, so names containing ``/`` work when sent
percent-encoded (``/api/v1/artist/AC%2FDC/covers``).

Dependencies are resolved from ``app.state`` (populated at startup in
``main.py``) through ``Depends`` with the ``Annotated`` pattern.  Routes do
not catch domain errors; ``ErrorHandlingMiddleware`` maps them to HTTP.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from coverscout import __version__
from coverscout.api.schemas import CoversResponse, ErrorResponse, HealthResponse
from coverscout.interfaces.page_fetcher import IPageFetcher
from coverscout.models.covers import RelationKind
from coverscout.services.covers_service import CoversService

router = APIRouter(prefix="/api/v1")

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Blank artist name"},
    404: {"model": ErrorResponse, "description": "No relations for this artist"},
    429: {"model": ErrorResponse, "description": "Solving proxy kept failing"},
}


def _get_covers_service(request: Request) -> CoversService:
    return request.app.state.covers_service


def _get_page_fetcher(request: Request) -> IPageFetcher:
    return request.app.state.page_fetcher


CoversServiceDep = Annotated[CoversService, Depends(_get_covers_service)]
PageQuery = Annotated[int, Query(ge=1, description="1-based listing page")]


@router.get(
    "/artist/{name:path}/covers",
    response_model=CoversResponse,
    responses=_ERROR_RESPONSES,
)
async def get_covers(name: str, service: CoversServiceDep, page: PageQuery = 1) -> CoversResponse:
    """Songs *name* covered."""
    result = await service.scrape(name, RelationKind.COVERS_BY, str(page))
    return CoversResponse.from_result(result)


@router.get(
    "/artist/{name:path}/covered",
    response_model=CoversResponse,
    responses=_ERROR_RESPONSES,
)
async def get_covered(name: str, service: CoversServiceDep, page: PageQuery = 1) -> CoversResponse:
    """Songs by *name* that other artists covered."""
    result = await service.scrape(name, RelationKind.COVERED_BY_OTHERS, str(page))
    return CoversResponse.from_result(result)


@router.get("/health", response_model=HealthResponse)
async def health(fetcher: Annotated[IPageFetcher, Depends(_get_page_fetcher)]) -> HealthResponse:
    """Report liveness and whether the page fetcher is configured.

    Does not call the proxy; a liveness check should not burn a browser session.
    """
    available = fetcher.is_available()
    return HealthResponse(
        status="ok" if available else "degraded",
        version=__version__,
        providers={fetcher.get_provider_name(): {"available": available}},
    )
