"""The Empty Bottle's own event widget."""

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

ITEM = ".eb-item"
_SOLD_OUT = re.compile(r"\*SOLD OUT\*\s*", re.IGNORECASE)
_CANCELLED = re.compile(r"\*CANCELLED\*\s*", re.IGNORECASE)
_FREE_SERIES_PREFIX = re.compile(r"^FREE\s+\w+\s+w/\s*", re.IGNORECASE)
_TRUNCATED_SERIES = re.compile(r"^FREE\s+\w+\s+w$", re.IGNORECASE)
_SERIES_WITH_ARTIST = re.compile(r"^.+?\swith\s+(.+)$", re.IGNORECASE)
_BACKGROUND_URL = re.compile(r"url\(([^)]+)\)")


@dataclass(slots=True, frozen=True)
class CleanTitle:
    title: str
    sold_out: bool
    cancelled: bool
    free: bool


def clean_title(raw: str) -> CleanTitle:
    """Strip status markers and a "FREE MONDAY w/" style series prefix."""

    sold_out = bool(_SOLD_OUT.search(raw))
    cancelled = bool(_CANCELLED.search(raw))
    title = _CANCELLED.sub("", _SOLD_OUT.sub("", raw)).strip()
    free = bool(re.match(r"^FREE\b", title, re.IGNORECASE))
    if free:
        title = _FREE_SERIES_PREFIX.sub("", title).strip()
    return CleanTitle(title=title, sold_out=sold_out, cancelled=cancelled, free=free)


def clean_artists(raw_names: list[str]) -> list[str]:
    """Tidy the performer list.

    The first entry may be a truncated series label ("FREE MONDAY w") or read
    "Series Name with Artist"; both are reduced to the artist.
    """

    artists: list[str] = []
    for index, raw in enumerate(raw_names):
        name = _CANCELLED.sub("", _SOLD_OUT.sub("", raw)).strip()
        if not name:
            continue
        if index == 0:
            if _TRUNCATED_SERIES.match(name):
                continue
            match = _SERIES_WITH_ARTIST.match(name)
            if match:
                name = match.group(1).strip()
        if not name or re.match(r"^FREE\s", name, re.IGNORECASE):
            continue
        artists.append(clean_artist_name(name))
    return [artist for artist in artists if artist]


@dataclass(slots=True, frozen=True)
class WidgetItem:
    id: str
    title: str
    date_text: str
    start_time: str
    performers: list[str]
    restrictions: str
    buy_link: str
    image_url: str


def _text(node: Tag, selector: str) -> str:
    found = node.select_one(selector)
    return collapse_whitespace(found.get_text(" ", strip=True)) if found else ""


def parse_widget(markup: str, base_url: str) -> list[WidgetItem]:
    soup = BeautifulSoup(markup, "html.parser")
    items: list[WidgetItem] = []
    for item in soup.select(ITEM):
        buy = item.select_one("a.buy-button")
        href = str(buy.get("href") or "") if buy else ""
        if not href:
            continue
        buy_link = urljoin(base_url, href)

        image = item.select_one(".item-image-inner")
        style = str(image.get("style") or "") if image else ""
        image_match = _BACKGROUND_URL.search(style)
        items.append(
            WidgetItem(
                id=trailing_numeric_id(buy_link),
                title=_text(item, ".title"),
                date_text=_text(item, ".date"),
                start_time=_text(item, ".start-time"),
                performers=[
                    collapse_whitespace(li.get_text(" ", strip=True))
                    for li in item.select(".performing li")
                ],
                restrictions=_text(item, ".restrictions"),
                buy_link=buy_link,
                image_url=image_match.group(1).strip("'\" ") if image_match else "",
            )
        )
    return items


class EmptyBottleProvider:
    def __init__(self, renderer: PageRenderer, *, clock: Callable[[], date] = date.today) -> None:
        self._renderer = renderer
        self._clock = clock

    async def _items(self, venue: VenueConfig) -> list[WidgetItem]:
        async with self._renderer.session() as browser:
            page = await browser.render(venue.url, wait_for_selector=ITEM)
        return parse_widget(page.html, venue.url)

    async def preview(self, venue: VenueConfig) -> list[EventStub]:
        today = self._clock()
        stubs: list[EventStub] = []
        for item in await self._items(venue):
            event_date = parse_listing_date(item.date_text, today=today)
            if event_date is None:
                continue
            stubs.append(
                EventStub(
                    id=item.id,
                    title=clean_title(item.title).title,
                    date=event_date,
                    venue=venue.name,
                )
            )
        return stubs

    async def scrape(self, venue: VenueConfig, event_ids: frozenset[str]) -> list[ScrapedEvent]:
        today = self._clock()
        scraped: list[ScrapedEvent] = []
        for item in await self._items(venue):
            if item.id not in event_ids:
                continue
            event_date = parse_listing_date(item.date_text, today=today)
            if event_date is None:
                continue
            cleaned = clean_title(item.title)
            artists = clean_artists(item.performers)
            title = cleaned.title or (artists[0] if artists else item.title)
            scraped.append(
                ScrapedEvent(
                    id=item.id,
                    title=title,
                    date=event_date,
                    venue=venue.name,
                    venue_slug=venue.slug,
                    image_url=item.image_url or None,
                    show_time=normalize_time(item.start_time),
                    ticket_url=item.buy_link,
                    artists=tuple(artists or [title]),
                    price="Free" if cleaned.free else None,
                    age_restriction=item.restrictions or None,
                    is_sold_out=cleaned.sold_out,
                    is_cancelled=cleaned.cancelled,
                )
            )
        return scraped
