"""TicketWeb calendar pages exposing ``window.all_events``."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from showscout.domain.discovery.errors import ProviderError, ProviderParseError
from showscout.domain.model import EventStub, ScrapedEvent

from ._text import (
    artists_from_title,
    date_from_iso,
    decode_entities,
    normalize_time,
    strip_html,
    to_title_case,
)

if TYPE_CHECKING:
    from showscout.adapters.pages import BrowserSession, PageRenderer
    from showscout.domain.model import VenueConfig

log = getLogger(__name__)

CALENDAR_READY = "() => typeof window.all_events !== 'undefined'"
CALENDAR_EVENTS = "() => window.all_events || []"
DIALOG_PREFIX = "tw-event-dialog-"
_IMG_SRC = re.compile(r"""src=["']([^"']+)["']""")


class CalendarEvent(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    title: str = ""
    start: str = ""
    venue: str | None = None
    image: str | None = Field(default=None, alias="imageUrl")
    doors: str | None = None
    display_time: str | None = Field(default=None, alias="displayTime")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value

    @property
    def display_title(self) -> str:
        return to_title_case(decode_entities(self.title))

    @property
    def image_url(self) -> str | None:
        if not self.image:
            return None
        match = _IMG_SRC.search(self.image)
        if match:
            return match.group(1)
        return self.image if self.image.startswith("http") else None


def parse_calendar(value: object) -> list[CalendarEvent]:
    if not isinstance(value, list):
        raise ProviderParseError("window.all_events is not a list")
    events: list[CalendarEvent] = []
    for raw in value:
        try:
            events.append(CalendarEvent.model_validate(raw))
        except ValidationError as exc:
            log.debug("Skipping calendar entry: %s", exc)
    return events


def dialog_links(markup: str, base_url: str) -> tuple[dict[str, str], dict[str, str]]:
    """Map event ids to ticket links and detail page links found in the event dialogs."""

    soup = BeautifulSoup(markup, "html.parser")
    tickets: dict[str, str] = {}
    details: dict[str, str] = {}
    for dialog in soup.select(f'[id^="{DIALOG_PREFIX}"]'):
        event_id = str(dialog.get("id", "")).removeprefix(DIALOG_PREFIX)
        ticket = dialog.select_one('a[href*="ticketweb"]')
        if ticket is not None and ticket.get("href"):
            tickets[event_id] = urljoin(base_url, str(ticket["href"]))
        detail = dialog.select_one(".tw-name a")
        if detail is not None and detail.get("href"):
            details[event_id] = urljoin(base_url, str(detail["href"]))
    return tickets, details


def detail_artists(markup: str) -> list[str]:
    soup = BeautifulSoup(markup, "html.parser")
    names = (link.get_text(" ", strip=True) for link in soup.select(".artist-list .row h4 a"))
    return [to_title_case(name, force=True) for name in names if name]


class TicketWebProvider:
    def __init__(self, renderer: PageRenderer, *, detail_timeout_ms: int = 15_000) -> None:
        self._renderer = renderer
        self._detail_timeout_ms = detail_timeout_ms

    async def preview(self, venue: VenueConfig) -> list[EventStub]:
        async with self._renderer.session() as browser:
            page = await browser.render(
                venue.url, wait_for_function=CALENDAR_READY, evaluate=CALENDAR_EVENTS
            )
        stubs: list[EventStub] = []
        for event in parse_calendar(page.value):
            event_date = date_from_iso(event.start)
            if event_date is None:
                continue
            stubs.append(
                EventStub(
                    id=event.id,
                    title=event.display_title,
                    date=event_date,
                    venue=strip_html(event.venue) or venue.name,
                )
            )
        return stubs

    async def scrape(self, venue: VenueConfig, event_ids: frozenset[str]) -> list[ScrapedEvent]:
        scraped: list[ScrapedEvent] = []
        async with self._renderer.session() as browser:
            page = await browser.render(
                venue.url, wait_for_function=CALENDAR_READY, evaluate=CALENDAR_EVENTS
            )
            selected = [event for event in parse_calendar(page.value) if event.id in event_ids]
            tickets, details = dialog_links(page.html, venue.url)

            for position, event in enumerate(selected, start=1):
                event_date = date_from_iso(event.start)
                if event_date is None:
                    continue
                log.info(
                    "%s: [%d/%d] %s", venue.slug, position, len(selected), event.display_title[:40]
                )
                artists = await self._lineup(browser, details.get(event.id))
                scraped.append(
                    ScrapedEvent(
                        id=event.id,
                        title=event.display_title,
                        date=event_date,
                        venue=strip_html(event.venue) or venue.name,
                        venue_slug=venue.slug,
                        image_url=event.image_url,
                        doors_time=normalize_time(event.doors),
                        show_time=normalize_time(event.display_time),
                        ticket_url=tickets.get(event.id),
                        artists=tuple(artists or artists_from_title(event.display_title)),
                    )
                )
        return scraped

    async def _lineup(self, browser: BrowserSession, detail_url: str | None) -> list[str]:
        if detail_url is None:
            return []
        try:
            detail = await browser.render(detail_url, timeout_ms=self._detail_timeout_ms)
        except ProviderError as exc:
            log.warning("Detail page unavailable, using title as lineup: %s", exc)
            return []
        return detail_artists(detail.html)
