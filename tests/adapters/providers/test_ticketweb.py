from __future__ import annotations

import asyncio
from datetime import date

import pytest

from showscout.adapters.providers import TicketWebProvider
from showscout.adapters.providers.ticketweb import detail_artists, parse_calendar
from showscout.domain.discovery import ProviderParseError
from showscout.domain.model import ProviderType, VenueConfig
from tests.support.pages import FakeRenderer, read_fixture

VENUE = VenueConfig(
    slug="rebel-lounge",
    name="The Rebel Lounge",
    provider_type=ProviderType.TICKETWEB,
    url="https://www.therebellounge.example/calendar",
    city="Phoenix",
    state="AZ",
)

CALENDAR = [
    {
        "id": 1001,
        "title": "BAND X",
        "start": "2025-06-01T20:00:00",
        "venue": "<span>The Rebel Lounge</span>",
        "imageUrl": "<img src='https://img.tw.example/1001.jpg'>",
        "doors": "7:00 pm",
        "displayTime": "8:00 pm",
    },
    {"id": "1002", "title": "Duo &amp; Friends", "start": "2025-06-02"},
    {"title": "Missing id"},
]


def _renderer() -> FakeRenderer:
    renderer = FakeRenderer()
    renderer.add(VENUE.url, html=read_fixture("ticketweb_calendar.html"), value=CALENDAR)
    renderer.add(
        "https://www.therebellounge.example/event/band-x-1001",
        html=read_fixture("ticketweb_detail.html"),
    )
    return renderer


def test_parse_calendar_skips_invalid_entries() -> None:
    events = parse_calendar(CALENDAR)

    assert [event.id for event in events] == ["1001", "1002"]
    assert events[0].display_title == "Band X"
    assert events[1].display_title == "Duo & Friends"


def test_parse_calendar_requires_a_list() -> None:
    with pytest.raises(ProviderParseError):
        parse_calendar(None)


def test_detail_artists_are_title_cased() -> None:
    assert detail_artists(read_fixture("ticketweb_detail.html")) == [
        "Band X",
        "DJ Shadows of the Night",
    ]


def test_preview_reads_calendar() -> None:
    stubs = asyncio.run(TicketWebProvider(_renderer()).preview(VENUE))

    assert [(stub.id, stub.date, stub.venue) for stub in stubs] == [
        ("1001", date(2025, 6, 1), "The Rebel Lounge"),
        ("1002", date(2025, 6, 2), "The Rebel Lounge"),
    ]


def test_scrape_visits_detail_pages_and_falls_back_to_title() -> None:
    renderer = _renderer()

    band_x, duo = asyncio.run(
        TicketWebProvider(renderer).scrape(VENUE, frozenset({"1001", "1002"}))
    )

    assert renderer.sessions == 1
    assert band_x.artists == ("Band X", "DJ Shadows of the Night")
    assert band_x.ticket_url == "https://www.ticketweb.com/event/band-x-tickets/1001"
    assert band_x.image_url == "https://img.tw.example/1001.jpg"
    assert band_x.doors_time == "7:00 PM"
    assert band_x.show_time == "8:00 PM"
    assert duo.artists == ("Duo & Friends",)
    assert duo.ticket_url == "https://www.ticketweb.com/event/duo-tickets/1002"
