"""Wix sites: event pages listed in a sitemap, each carrying JSON-LD."""

from __future__ import annotations

import re
from datetime import date
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

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
    from collections.abc import Callable

    from showscout.adapters.pages import PageFetcher
    from showscout.domain.model import VenueConfig

    from .schema import JsonLdEvent

log = getLogger(__name__)

EVENT_PAGE_CONCURRENCY = 10
_EVENT_PAGE = re.compile(r"/events/([^/?#]+)/?$")


def sitemap_event_urls(xml: str) -> list[str]:
    soup = BeautifulSoup(xml, "html.parser")
    urls = (loc.get_text(strip=True) for loc in soup.find_all("loc"))
    return [url for url in urls if _EVENT_PAGE.search(urlsplit(url).path)]


def slug_from_url(url: str) -> str:
    match = _EVENT_PAGE.search(urlsplit(url).path)
    return match.group(1) if match else url


def _site_root(venue: VenueConfig) -> str:
    parts = urlsplit(venue.url)
    return f"{parts.scheme}://{parts.netloc}"


def _first_event(markup: str) -> JsonLdEvent | None:
    events = parse_events(list(iter_json_ld(markup)))
    return events[0] if events else None


def _ticket_url(event: JsonLdEvent, page_url: str) -> str:
    offer = event.first_offer
    if offer is not None and offer.url:
        return offer.url
    return event.url or page_url


class WixProvider:
    def __init__(self, pages: PageFetcher, *, clock: Callable[[], date] = date.today) -> None:
        self._pages = pages
        self._clock = clock

    async def preview(self, venue: VenueConfig) -> list[EventStub]:
        # The sitemap carries no titles or dates, so each event page is read here.
        sitemap_url = venue.sitemap_url or f"{_site_root(venue)}/event-pages-sitemap.xml"
        urls = sitemap_event_urls(await self._pages.fetch(sitemap_url))
        log.info("%s: %d event pages in sitemap", venue.slug, len(urls))
        pages = await self._pages.fetch_many(urls, limit=EVENT_PAGE_CONCURRENCY)

        today = self._clock()
        stubs: list[EventStub] = []
        for url, markup in pages.items():
            event = _first_event(markup)
            event_date = date_from_iso(event.start_date) if event else None
            if event is None or event_date is None or event_date < today:
                continue
            stubs.append(
                EventStub(
                    id=slug_from_url(url),
                    title=decode_entities(event.name) or "Unknown Event",
                    date=event_date,
                    venue=event.location_name or venue.name,
                )
            )
        stubs.sort(key=lambda stub: stub.date)
        return stubs

    async def scrape(self, venue: VenueConfig, event_ids: frozenset[str]) -> list[ScrapedEvent]:
        root = _site_root(venue)
        urls = {f"{root}/events/{event_id}": event_id for event_id in sorted(event_ids)}
        pages = await self._pages.fetch_many(urls, limit=EVENT_PAGE_CONCURRENCY)

        scraped: list[ScrapedEvent] = []
        for url, markup in pages.items():
            event = _first_event(markup)
            event_date = date_from_iso(event.start_date) if event else None
            if event is None or event_date is None:
                log.warning("%s: no event data on %s", venue.slug, url)
                continue
            title = decode_entities(event.name) or "Unknown Event"
            performers = [clean_artist_name(name) for name in event.performer_names]
            artists = tuple(name for name in performers if name) or tuple(
                artists_from_title(title)
            )
            offer = event.first_offer
            scraped.append(
                ScrapedEvent(
                    id=urls[url],
                    title=title,
                    date=event_date,
                    venue=event.location_name or venue.name,
                    venue_slug=venue.slug,
                    image_url=event.image_url,
                    show_time=time_from_iso(event.start_date),
                    doors_time=time_from_iso(event.door_time),
                    ticket_url=_ticket_url(event, url),
                    artists=artists,
                    price=format_offer_price(offer.price) if offer else None,
                    is_sold_out=event.is_sold_out,
                    is_cancelled=event.is_cancelled,
                )
            )
        return scraped
