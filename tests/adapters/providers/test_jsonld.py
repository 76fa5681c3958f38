from __future__ import annotations

import asyncio
from datetime import date

from showscout.adapters.providers import JsonLdProvider
from showscout.domain.model import ProviderType, VenueConfig
from tests.support.pages import FakePages, read_fixture

VENUE = VenueConfig(
    slug="van-buren",
    name="The Van Buren",
    provider_type=ProviderType.JSONLD,
    url="https://www.thevanburenphx.example/shows",
    city="Phoenix",
    state="AZ",
)


def _provider() -> JsonLdProvider:
    return JsonLdProvider(FakePages({VENUE.url: read_fixture("jsonld_listing.html")}))


def test_preview_lists_dated_music_events() -> None:
    stubs = asyncio.run(_provider().preview(VENUE))

    assert [(stub.title, stub.date) for stub in stubs] == [
        ("Band X & Friends", date(2025, 6, 1)),
        ("Solo Artist - The Long Way Tour", date(2025, 6, 14)),
    ]
    assert stubs[0].id == "0C005F2B8E6A1234"
    assert stubs[1].id.startswith("jsonld-")
    assert stubs[0].venue == "The Van Buren"


def test_preview_ids_are_stable_across_calls() -> None:
    provider = _provider()

    first = asyncio.run(provider.preview(VENUE))
    second = asyncio.run(provider.preview(VENUE))

    assert [stub.id for stub in first] == [stub.id for stub in second]


def test_scrape_reads_offer_status_and_lineup() -> None:
    provider = _provider()
    ids = frozenset(stub.id for stub in asyncio.run(provider.preview(VENUE)))

    band_x, solo = asyncio.run(provider.scrape(VENUE, ids))

    assert band_x.artists == ("Band X", "Support Act")
    assert band_x.doors_time == "7:00 PM"
    assert band_x.show_time == "8:00 PM"
    assert band_x.price == "$35"
    assert band_x.is_sold_out
    assert band_x.image_url == "https://img.example/band-x.jpg"
    assert band_x.ticket_url == "https://www.ticketmaster.com/band-x/event/0C005F2B8E6A1234"

    assert solo.artists == ("Solo Artist",)
    assert solo.price == "Free"
    assert solo.is_cancelled
    assert solo.ticket_url == "https://tickets.example/solo"
    assert solo.venue_slug == "van-buren"


def test_scrape_only_returns_requested_ids() -> None:
    events = asyncio.run(_provider().scrape(VENUE, frozenset({"0C005F2B8E6A1234"})))

    assert [event.title for event in events] == ["Band X & Friends"]
