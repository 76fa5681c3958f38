"""Venue sites embedding the SeeTickets event list widget."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from showscout.domain.model import EventStub, ScrapedEvent

from ._text import (
    clean_artist_name,
    collapse_whitespace,
    normalize_time,
    parse_listing_date,
    trailing_numeric_id,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from showscout.adapters.pages import PageRenderer
    from showscout.domain.model import VenueConfig

CONTAINER = ".seetickets-list-event-container"
_DOORS = re.compile(r"Doors\s+at\s+(\d{1,2}:\d{2}\s*[AP]M)", re.IGNORECASE)
_SHOW = re.compile(r"Show\s+at\s+(\d{1,2}:\d{2}\s*[AP]M)", re.IGNORECASE)
_MIN_AGE = re.compile(r"(\d{1,2})\+")
_SPECIAL_GUESTS = re.compile(r"^special\s+guests?$", re.IGNORECASE)


@dataclass(slots=True, frozen=True)
class ListingRow:
    id: str
    title: str
    headliner: str
    supporting: str
    date_text: str
    time_text: str
    ages: str
    price: str
    image_url: str
    ticket_url: str
    sold_out: bool

    @property
    def display_title(self) -> str:
        return self.headliner or self.title


def _text(container: Tag, selector: str) -> str:
    node = container.select_one(selector)
    return collapse_whitespace(node.get_text(" ", strip=True)) if node else ""


def parse_listing(markup: str, base_url: str) -> list[ListingRow]:
    soup = BeautifulSoup(markup, "html.parser")
    rows: list[ListingRow] = []
    for container in soup.select(CONTAINER):
        link = container.select_one("p.title a")
        href = str(link.get("href") or "") if link else ""
        if not href:
            continue
        ticket_url = urljoin(base_url, href)
        image = container.select_one("img")
        buy_block = container.select_one(".buy-and-share-block")
        rows.append(
            ListingRow(
                id=trailing_numeric_id(ticket_url),
                title=_text(container, "p.title a"),
                headliner=_text(container, "p.headliners"),
                supporting=_text(container, "p.supporting-talent"),
                date_text=_text(container, "p.date"),
                time_text=_text(container, "p.doortime-showtime"),
                ages=_text(container, "span.ages"),
                price=_text(container, "span.price"),
                image_url=str(image.get("src") or "") if image else "",
                ticket_url=ticket_url,
                sold_out=bool(
                    buy_block and re.search(r"sold\s*out", buy_block.get_text(" "), re.IGNORECASE)
                ),
            )
        )
    return rows


def parse_artists(headliner: str, supporting: str) -> list[str]:
    """Co-headliners are comma separated; support reads "with X, Y and Z"."""

    artists = [clean_artist_name(name) for name in headliner.split(",")]
    support = re.sub(r"^with\s+", "", supporting, flags=re.IGNORECASE).strip()
    if support:
        for part in support.split(","):
            for name in re.split(r"\s+and\s+", part, flags=re.IGNORECASE):
                cleaned = clean_artist_name(name)
                if cleaned and not _SPECIAL_GUESTS.match(cleaned):
                    artists.append(cleaned)
    return [artist for artist in artists if artist]


def parse_ages(raw: str) -> str | None:
    if not raw:
        return None
    if re.search(r"all\s*ages?", raw, re.IGNORECASE):
        return "All Ages"
    match = _MIN_AGE.search(raw)
    return f"{match.group(1)}+" if match else raw


def _listing_time(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return normalize_time(match.group(1)) if match else None


class SeeTicketsProvider:
    def __init__(self, renderer: PageRenderer, *, clock: Callable[[], date] = date.today) -> None:
        self._renderer = renderer
        self._clock = clock

    async def _rows(self, venue: VenueConfig) -> list[ListingRow]:
        async with self._renderer.session() as browser:
            page = await browser.render(
                venue.url, wait_until="networkidle", wait_for_selector=CONTAINER
            )
        return parse_listing(page.html, venue.url)

    async def preview(self, venue: VenueConfig) -> list[EventStub]:
        today = self._clock()
        stubs: list[EventStub] = []
        for row in await self._rows(venue):
            event_date = parse_listing_date(row.date_text, today=today)
            if event_date is None:
                continue
            stubs.append(
                EventStub(id=row.id, title=row.display_title, date=event_date, venue=venue.name)
            )
        return stubs

    async def scrape(self, venue: VenueConfig, event_ids: frozenset[str]) -> list[ScrapedEvent]:
        today = self._clock()
        scraped: list[ScrapedEvent] = []
        for row in await self._rows(venue):
            if row.id not in event_ids:
                continue
            event_date = parse_listing_date(row.date_text, today=today)
            if event_date is None:
                continue
            price = None
            if row.price:
                price = row.price if row.price.startswith("$") else f"${row.price}"
            scraped.append(
                ScrapedEvent(
                    id=row.id,
                    title=row.display_title,
                    date=event_date,
                    venue=venue.name,
                    venue_slug=venue.slug,
                    image_url=row.image_url or None,
                    doors_time=_listing_time(_DOORS, row.time_text),
                    show_time=_listing_time(_SHOW, row.time_text),
                    ticket_url=row.ticket_url,
                    artists=tuple(parse_artists(row.display_title, row.supporting)),
                    price=price,
                    age_restriction=parse_ages(row.ages),
                    is_sold_out=row.sold_out,
                )
            )
        return scraped
