"""Discovery HTTP service used by the operator UI."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from showscout import __version__
from showscout.domain.discovery import (
    InvalidRequestError,
    ProviderError,
    UnknownVenueError,
    UnsupportedProviderError,
)

from .schema import (
    BatchPreviewOut,
    EventStubOut,
    HealthOut,
    PreviewBatchIn,
    ScrapedEventOut,
    ScrapeIn,
    VenueOut,
)

if TYPE_CHECKING:
    from showscout.domain.discovery import DiscoveryOrchestrator

log = getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(orchestrator: DiscoveryOrchestrator) -> FastAPI:
    app = FastAPI(title="showscout discovery", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    _install_error_handlers(app)

    @app.get("/discovery/venues", response_model=list[VenueOut])
    async def list_venues() -> list[VenueOut]:
        return [VenueOut.from_domain(venue) for venue in orchestrator.venues]

    @app.get("/discovery/preview/{slug}", response_model=list[EventStubOut])
    async def preview(slug: str) -> list[EventStubOut]:
        events = await orchestrator.preview(slug)
        return [EventStubOut.from_domain(stub) for stub in events]

    @app.post("/discovery/preview-batch", response_model=list[BatchPreviewOut])
    async def preview_batch(body: PreviewBatchIn) -> list[BatchPreviewOut]:
        if not body.venue_slugs:
            raise InvalidRequestError("venueSlugs array is required")
        results = await orchestrator.preview_batch(body.venue_slugs)
        return [BatchPreviewOut.from_domain(result) for result in results]

    @app.post("/discovery/scrape/{slug}", response_model=list[ScrapedEventOut])
    async def scrape(slug: str, body: ScrapeIn) -> list[ScrapedEventOut]:
        if not body.event_ids:
            raise InvalidRequestError("eventIds array is required")
        events = await orchestrator.scrape(slug, body.event_ids)
        return [ScrapedEventOut.from_domain(event) for event in events]

    @app.get("/discovery/health", response_model=HealthOut)
    async def health() -> HealthOut:
        return HealthOut(status="ok", timestamp=datetime.now(UTC))

    return app


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidRequestError)
    async def invalid_request(_request: Request, exc: InvalidRequestError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def invalid_body(_request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request body")
        return _error(400, f"{location}: {message}" if location else message)

    @app.exception_handler(UnknownVenueError)
    async def unknown_venue(_request: Request, exc: UnknownVenueError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(UnsupportedProviderError)
    async def unsupported_provider(
        _request: Request, exc: UnsupportedProviderError
    ) -> JSONResponse:
        return _error(500, str(exc))

    @app.exception_handler(ProviderError)
    async def provider_failed(_request: Request, exc: ProviderError) -> JSONResponse:
        log.warning("Provider failure: %s", exc)
        return _error(500, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return _error(exc.status_code, message)

    @app.exception_handler(Exception)
    async def unexpected(_request: Request, exc: Exception) -> JSONResponse:
        log.exception("Unhandled error in discovery service")
        return _error(500, str(exc) or type(exc).__name__)
