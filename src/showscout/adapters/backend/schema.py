"""Wire schemas for the show backend admin API."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class BackendModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug("Backend %s: unmodeled keys: %s", type(self).__name__, ", ".join(sorted(new_keys)))


class SocialFields(BackendModel):
    instagram: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    youtube: str | None = None
    spotify: str | None = None
    soundcloud: str | None = None
    bandcamp: str | None = None
    website: str | None = None


class ExportedVenuePayload(SocialFields):
    name: str
    address: str | None = None
    city: str = ""
    state: str = ""
    zipcode: str | None = None
    verified: bool = False


class ExportedArtistPayload(SocialFields):
    name: str
    city: str | None = None
    state: str | None = None
    bandcamp_embed_url: str | None = Field(default=None, alias="bandcampEmbedUrl")


class ShowArtistPayload(BackendModel):
    name: str
    position: int = 0
    set_type: str = Field(default="opener", alias="setType")


class ExportedShowPayload(BackendModel):
    title: str
    event_date: str = Field(alias="eventDate")
    city: str | None = None
    state: str | None = None
    price: float | None = None
    age_requirement: str | None = Field(default=None, alias="ageRequirement")
    description: str | None = None
    status: str = "approved"
    is_sold_out: bool = Field(default=False, alias="isSoldOut")
    is_cancelled: bool = Field(default=False, alias="isCancelled")
    venues: list[ExportedVenuePayload] = Field(default_factory=list)
    artists: list[ShowArtistPayload] = Field(default_factory=list)


class ShowListingResponse(BackendModel):
    shows: list[ExportedShowPayload] = Field(default_factory=list)
    total: int = 0


class ArtistListingResponse(BackendModel):
    artists: list[ExportedArtistPayload] = Field(default_factory=list)
    total: int = 0


class VenueListingResponse(BackendModel):
    venues: list[ExportedVenuePayload] = Field(default_factory=list)
    total: int = 0


class DataImportPayload(BackendModel):
    shows: list[ExportedShowPayload] | None = None
    artists: list[ExportedArtistPayload] | None = None
    venues: list[ExportedVenuePayload] | None = None
    dry_run: bool = Field(default=False, alias="dryRun")


class EntityImportStatsPayload(BackendModel):
    total: int = 0
    imported: int = 0
    duplicates: int = 0
    updated: int = 0
    errors: int = 0
    messages: list[str] | None = None


class DataImportResponse(BackendModel):
    shows: EntityImportStatsPayload = Field(default_factory=EntityImportStatsPayload)
    artists: EntityImportStatsPayload = Field(default_factory=EntityImportStatsPayload)
    venues: EntityImportStatsPayload = Field(default_factory=EntityImportStatsPayload)


class ScrapedEventPayload(BackendModel):
    id: str
    title: str
    date: str
    venue: str
    venue_slug: str = Field(alias="venueSlug")
    image_url: str | None = Field(default=None, alias="imageUrl")
    doors_time: str | None = Field(default=None, alias="doorsTime")
    show_time: str | None = Field(default=None, alias="showTime")
    ticket_url: str | None = Field(default=None, alias="ticketUrl")
    artists: list[str] = Field(default_factory=list)
    scraped_at: str = Field(alias="scrapedAt")
    price: str | None = None
    age_restriction: str | None = Field(default=None, alias="ageRestriction")
    is_sold_out: bool | None = Field(default=None, alias="isSoldOut")
    is_cancelled: bool | None = Field(default=None, alias="isCancelled")


class DiscoveryImportPayload(BackendModel):
    events: list[ScrapedEventPayload]
    dry_run: bool = Field(default=False, alias="dryRun")


class DiscoveryImportResponse(BackendModel):
    total: int = 0
    imported: int = 0
    duplicates: int = 0
    rejected: int = 0
    pending_review: int = 0
    updated: int = 0
    errors: int = 0
    messages: list[str] | None = None


class EventCheckItem(BackendModel):
    id: str
    venue_slug: str = Field(alias="venueSlug")


class EventCheckPayload(BackendModel):
    events: list[EventCheckItem]


class EventCheckStatus(BackendModel):
    exists: bool = False
    show_id: int | None = Field(default=None, alias="showId")
    status: str | None = None


class EventCheckResponse(BackendModel):
    events: dict[str, EventCheckStatus] = Field(default_factory=dict)


class BulkPreviewPayload(BackendModel):
    shows: list[str]


class PreviewShow(BackendModel):
    title: str = ""
    event_date: str = ""
    city: str | None = None
    state: str | None = None


class PreviewEntity(BackendModel):
    name: str
    city: str | None = None
    state: str | None = None
    position: int | None = None
    set_type: str | None = None
    existing_id: int | None = None
    will_create: bool = False


class ShowPreviewEntry(BackendModel):
    show: PreviewShow = Field(default_factory=PreviewShow)
    venues: list[PreviewEntity] = Field(default_factory=list)
    artists: list[PreviewEntity] = Field(default_factory=list)
    warnings: list[str] | None = None
    can_import: bool = False


class BulkPreviewSummary(BackendModel):
    total_shows: int = 0
    new_artists: int = 0
    new_venues: int = 0
    existing_artists: int = 0
    existing_venues: int = 0
    warning_count: int = 0
    can_import_all: bool = False


class BulkPreviewResponse(BackendModel):
    previews: list[ShowPreviewEntry] = Field(default_factory=list)
    summary: BulkPreviewSummary = Field(default_factory=BulkPreviewSummary)


class BulkConfirmEntry(BackendModel):
    success: bool = False
    show: PreviewShow | None = None
    error: str | None = None


class BulkConfirmResponse(BackendModel):
    results: list[BulkConfirmEntry] = Field(default_factory=list)
    success_count: int = 0
    error_count: int = 0


class ErrorBody(BackendModel):
    detail: str | None = None
    message: str | None = None
    error: str | None = None

    @property
    def text(self) -> str | None:
        return self.detail or self.message or self.error
