"""coverscout FastAPI application entry point.

Wires the FlareSolverr fetcher, the relation extractor and the covers
service together, stores them on ``app.state`` for the route dependencies,
and configures structured logging.  The shared ``httpx.AsyncClient`` is
opened in the lifespan and closed on shutdown.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from coverscout import __version__
from coverscout.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from coverscout.api.routes import router as api_router
from coverscout.config import Settings, settings
from coverscout.providers.fetcher.flaresolverr_provider import FlareSolverrFetcher
from coverscout.services.covers_service import CoversService
from coverscout.services.relation_extractor import RelationExtractor
from coverscout.utils.logging import configure_logging

configure_logging(log_level=settings.log_level)
_logger: structlog.BoundLogger = structlog.get_logger(logger_name=__name__)


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.

    Raises
    ------
    ConfigurationError
        If the retry/timeout settings are unusable.
    """
    app_settings.validate_fetch_budget()

    http_client = httpx.AsyncClient()
    page_fetcher = FlareSolverrFetcher.from_settings(http_client, app_settings)
    covers_service = CoversService(
        fetcher=page_fetcher,
        extractor=RelationExtractor(),
        base_url=app_settings.site_base_url,
    )

    return {
        "http_client": http_client,
        "page_fetcher": page_fetcher,
        "covers_service": covers_service,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise providers and services on startup, clean up on shutdown."""
    app_settings: Settings = application.state.settings
    components = _build_all(app_settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=__version__,
        environment=app_settings.app_env,
        flaresolverr_url=app_settings.flaresolverr_url,
        max_attempts=app_settings.fetch_max_attempts,
    )

    yield

    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="coverscout API",
        version=__version__,
        description=(
            "Cover-song relationships for an artist, scraped from WhoSampled "
            "through a FlareSolverr browser-solving proxy."
        ),
        lifespan=_lifespan,
    )
    application.state.settings = app_settings or settings

    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    application.include_router(api_router)

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "coverscout.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
