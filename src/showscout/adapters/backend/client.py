"""HTTP client for a show backend's admin API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from showscout.adapters.http_resilience import ResilientClient
from showscout.domain.ports import RemoteBackendError, ShowListing

from .schema import (
    ArtistListingResponse,
    BulkConfirmResponse,
    BulkPreviewPayload,
    BulkPreviewResponse,
    DataImportResponse,
    DiscoveryImportPayload,
    DiscoveryImportResponse,
    ErrorBody,
    EventCheckItem,
    EventCheckPayload,
    EventCheckResponse,
    ShowListingResponse,
    VenueListingResponse,
)
from .translator import (
    artist_from_payload,
    bulk_import_outcome,
    data_import_payload,
    data_import_result,
    discovery_import_result,
    import_preview,
    import_statuses,
    scraped_event_payload,
    show_from_payload,
    show_to_text,
    venue_from_payload,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import date

    from pydantic import BaseModel

    from showscout.config.http_resilience import ResilienceConfig
    from showscout.config.targets import TargetConfig
    from showscout.domain.model import (
        DataImportRequest,
        DataImportResult,
        DiscoveryImportResult,
        ExportedArtist,
        ExportedShow,
        ExportedVenue,
        ImportStatus,
        ScrapedEvent,
    )
    from showscout.domain.ports import BulkImportOutcome, ImportPreview

log = getLogger(__name__)

type QueryParams = dict[str, str | int]


class BackendAPIError(RemoteBackendError):
    """Raised when a backend call fails; the backend's own message is kept verbatim."""

    def __init__(
        self,
        message: str,
        *,
        target: str,
        status: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message, target=target, status=status)
        self.body = body

    def __str__(self) -> str:
        if self.status is None:
            return f"{self.target}: {self.args[0]}"
        return f"{self.target}: {self.status} {self.args[0]}"


class BackendClient:
    """Admin API client for one target; implements the ``RemoteBackend`` port."""

    def __init__(
        self,
        target: TargetConfig,
        *,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._target = target
        self._resilience = target.resilience
        self._client_factory = client_factory or ResilientClient
        self.name = target.name

    async def list_shows(
        self,
        *,
        limit: int = 500,
        offset: int = 0,
        status: str = "all",
        from_date: date | None = None,
        city: str | None = None,
        state: str | None = None,
    ) -> ShowListing:
        params: QueryParams = {"limit": limit, "offset": offset, "status": status}
        if from_date is not None:
            params["from_date"] = from_date.isoformat()
        if city:
            params["city"] = city
        if state:
            params["state"] = state
        payload = await self._request("GET", "/admin/export/shows", params=params)
        listing = self._validate(ShowListingResponse, payload)
        return ShowListing(
            shows=[show_from_payload(show) for show in listing.shows],
            total=listing.total,
        )

    async def list_artists(self, *, limit: int = 500, offset: int = 0) -> list[ExportedArtist]:
        payload = await self._request(
            "GET", "/admin/export/artists", params={"limit": limit, "offset": offset}
        )
        listing = self._validate(ArtistListingResponse, payload)
        return [artist_from_payload(artist) for artist in listing.artists]

    async def list_venues(self, *, limit: int = 500, offset: int = 0) -> list[ExportedVenue]:
        payload = await self._request(
            "GET", "/admin/export/venues", params={"limit": limit, "offset": offset}
        )
        listing = self._validate(VenueListingResponse, payload)
        return [venue_from_payload(venue) for venue in listing.venues]

    async def preview_import(self, shows: Sequence[ExportedShow]) -> ImportPreview:
        body = BulkPreviewPayload(shows=[show_to_text(show) for show in shows])
        payload = await self._request("POST", "/admin/shows/import/bulk/preview", body=body)
        return import_preview(self._validate(BulkPreviewResponse, payload))

    async def confirm_import(self, shows: Sequence[ExportedShow]) -> BulkImportOutcome:
        body = BulkPreviewPayload(shows=[show_to_text(show) for show in shows])
        payload = await self._request("POST", "/admin/shows/import/bulk/confirm", body=body)
        return bulk_import_outcome(self._validate(BulkConfirmResponse, payload))

    async def import_data(self, request: DataImportRequest) -> DataImportResult:
        payload = await self._request(
            "POST", "/admin/data/import", body=data_import_payload(request)
        )
        return data_import_result(self._validate(DataImportResponse, payload))

    async def import_events(
        self, events: Sequence[ScrapedEvent], *, dry_run: bool = False
    ) -> DiscoveryImportResult:
        body = DiscoveryImportPayload(
            events=[scraped_event_payload(event) for event in events], dry_run=dry_run
        )
        payload = await self._request("POST", "/admin/discovery/import", body=body)
        return discovery_import_result(self._validate(DiscoveryImportResponse, payload))

    async def check_events(self, events: Sequence[ScrapedEvent]) -> dict[str, ImportStatus]:
        body = EventCheckPayload(
            events=[EventCheckItem(id=event.id, venue_slug=event.venue_slug) for event in events]
        )
        payload = await self._request("POST", "/admin/discovery/check", body=body)
        return import_statuses(self._validate(EventCheckResponse, payload))

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: QueryParams | None = None,
        body: BaseModel | None = None,
    ) -> dict[str, object]:
        token = self._target.require_token()
        headers = {"Authorization": f"Bearer {token}"}
        json_body = body.model_dump(by_alias=True, exclude_none=True) if body is not None else None

        log.debug("%s %s %s", self.name, method, path)
        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.request(
                    method, path, params=params, json=json_body, headers=headers
                )
            except httpx.HTTPError as exc:
                raise BackendAPIError(f"request failed: {exc}", target=self.name) from exc

        if response.is_error:
            raise self._error_from(response)

        try:
            payload = response.json()
        except ValueError as exc:
            raise BackendAPIError(
                "response was not JSON", target=self.name, status=response.status_code
            ) from exc
        if not isinstance(payload, dict):
            raise BackendAPIError(
                "unexpected response payload", target=self.name, status=response.status_code
            )
        return payload

    def _validate[M: BaseModel](self, model: type[M], payload: dict[str, object]) -> M:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise BackendAPIError(
                f"unexpected {model.__name__} payload: {exc.error_count()} errors",
                target=self.name,
            ) from exc

    def _error_from(self, response: httpx.Response) -> BackendAPIError:
        message: str | None = None
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            try:
                message = ErrorBody.model_validate(payload).text
            except ValidationError:
                message = None
        if not message:
            message = response.text.strip()[:200] or response.reason_phrase or "request failed"
        return BackendAPIError(
            message, target=self.name, status=response.status_code, body=response.text
        )
