"""Listing pages that embed schema.org ``MusicEvent`` JSON-LD."""

from __future__ import annotations

import hashlib
import re
from logging import getLogger
from typing import TYPE_CHECKING

from showscout.domain.model import EventStub, ScrapedEvent

from ._text import (
    artists_from_title,
    clean_artist_name,
    date_from_iso,
    decode_entities,
    format_offer_price,
    iter_json_ld,
    time_from_iso,
)
from .schema import parse_events

if TYPE_CHECKING:
    from showscout.adapters.pages import PageFetcher
    from showscout.domain.model import VenueConfig

    from .schema import JsonLdEvent

log = getLogger(__name__)

MUSIC_EVENT = frozenset({"MusicEvent"})
_TICKETMASTER_ID = re.compile(r"/event/([A-Za-z0-9]+)$")


def event_id(event: JsonLdEvent) -> str:
    """Ticketmaster event id from the event URL, else a digest of title and start."""

    if event.url:
        match = _TICKETMASTER_ID.search(event.url)
        if match:
            return match.group(1)
    digest = hashlib.sha1(
        f"{event.name or ''}|{event.start_date or ''}".encode(), usedforsecurity=False
    )
    return f"jsonld-{digest.hexdigest()[:12]}"


def ticket_url(event: JsonLdEvent) -> str | None:
    if event.url:
        return event.url
    offer = event.first_offer
    return offer.url if offer else None


def lineup(event: JsonLdEvent) -> list[str]:
    names = [clean_artist_name(name) for name in event.performer_names]
    names = [name for name in names if name]
    return names or artists_from_title(decode_entities(event.name))


class JsonLdProvider:
    def __init__(self, pages: PageFetcher) -> None:
        self._pages = pages

    async def _events(self, venue: VenueConfig) -> list[JsonLdEvent]:
        markup = await self._pages.fetch(venue.url)
        events = parse_events(list(iter_json_ld(markup)), types=MUSIC_EVENT)
        log.debug("%s: %d MusicEvent blocks", venue.slug, len(events))
        return events

    async def preview(self, venue: VenueConfig) -> list[EventStub]:
        stubs: list[EventStub] = []
        for event in await self._events(venue):
            event_date = date_from_iso(event.start_date)
            if event_date is None:
                continue
            stubs.append(
                EventStub(
                    id=event_id(event),
                    title=decode_entities(event.name) or "Unknown Event",
                    date=event_date,
                    venue=event.location_name or venue.name,
                )
            )
        return stubs

    async def scrape(self, venue: VenueConfig, event_ids: frozenset[str]) -> list[ScrapedEvent]:
        scraped: list[ScrapedEvent] = []
        for event in await self._events(venue):
            identifier = event_id(event)
            event_date = date_from_iso(event.start_date)
            if identifier not in event_ids or event_date is None:
                continue
            offer = event.first_offer
            scraped.append(
                ScrapedEvent(
                    id=identifier,
                    title=decode_entities(event.name) or "Unknown Event",
                    date=event_date,
                    venue=venue.name,
                    venue_slug=venue.slug,
                    image_url=event.image_url,
                    doors_time=time_from_iso(event.door_time),
                    show_time=time_from_iso(event.start_date),
                    ticket_url=ticket_url(event),
                    artists=tuple(lineup(event)),
                    price=format_offer_price(offer.price) if offer else None,
                    is_sold_out=event.is_sold_out,
                    is_cancelled=event.is_cancelled,
                )
            )
        return scraped

