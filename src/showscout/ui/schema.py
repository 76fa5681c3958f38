"""JSON shapes of the discovery service."""

from __future__ import annotations

import datetime as dt  # noqa: TC003
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from showscout.domain.model import (
        BatchPreviewResult,
        EventStub,
        ScrapedEvent,
        VenueConfig,
    )


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class VenueOut(ApiModel):
    slug: str
    name: str
    provider_type: str = Field(alias="providerType")
    city: str
    state: str

    @classmethod
    def from_domain(cls, venue: VenueConfig) -> VenueOut:
        return cls(
            slug=venue.slug,
            name=venue.name,
            provider_type=str(venue.provider_type),
            city=venue.city,
            state=venue.state,
        )


class EventStubOut(ApiModel):
    id: str
    title: str
    date: dt.date
    venue: str

    @classmethod
    def from_domain(cls, stub: EventStub) -> EventStubOut:
        return cls(id=stub.id, title=stub.title, date=stub.date, venue=stub.venue)


class ScrapedEventOut(ApiModel):
    id: str
    title: str
    date: dt.date
    venue: str
    venue_slug: str = Field(alias="venueSlug")
    image_url: str | None = Field(default=None, alias="imageUrl")
    doors_time: str | None = Field(default=None, alias="doorsTime")
    show_time: str | None = Field(default=None, alias="showTime")
    ticket_url: str | None = Field(default=None, alias="ticketUrl")
    artists: list[str]
    scraped_at: dt.datetime = Field(alias="scrapedAt")
    price: str | None = None
    age_restriction: str | None = Field(default=None, alias="ageRestriction")
    is_sold_out: bool = Field(default=False, alias="isSoldOut")
    is_cancelled: bool = Field(default=False, alias="isCancelled")

    @classmethod
    def from_domain(cls, event: ScrapedEvent) -> ScrapedEventOut:
        return cls(
            id=event.id,
            title=event.title,
            date=event.date,
            venue=event.venue,
            venue_slug=event.venue_slug,
            image_url=event.image_url,
            doors_time=event.doors_time,
            show_time=event.show_time,
            ticket_url=event.ticket_url,
            artists=list(event.artists),
            scraped_at=event.scraped_at,
            price=event.price,
            age_restriction=event.age_restriction,
            is_sold_out=event.is_sold_out,
            is_cancelled=event.is_cancelled,
        )


class BatchPreviewOut(ApiModel):
    venue_slug: str = Field(alias="venueSlug")
    events: list[EventStubOut] | None = None
    error: str | None = None

    @classmethod
    def from_domain(cls, result: BatchPreviewResult) -> BatchPreviewOut:
        return cls(
            venue_slug=result.venue_slug,
            events=(
                [EventStubOut.from_domain(stub) for stub in result.events]
                if result.events is not None
                else None
            ),
            error=result.error,
        )


class PreviewBatchIn(ApiModel):
    venue_slugs: list[str] | None = Field(default=None, alias="venueSlugs")


class ScrapeIn(ApiModel):
    event_ids: list[str] | None = Field(default=None, alias="eventIds")


class HealthOut(ApiModel):
    status: str
    timestamp: dt.datetime
