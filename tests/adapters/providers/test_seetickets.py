from __future__ import annotations

import asyncio
from datetime import date

from showscout.adapters.providers import SeeTicketsProvider
from showscout.adapters.providers.seetickets import parse_ages, parse_artists, parse_listing
from showscout.domain.model import ProviderType, VenueConfig
from tests.support.pages import FakeRenderer, read_fixture

VENUE = VenueConfig(
    slug="crescent-ballroom",
    name="Crescent Ballroom",
    provider_type=ProviderType.SEETICKETS,
    url="https://www.crescentphx.example/events",
    city="Phoenix",
    state="AZ",
)


def _provider() -> SeeTicketsProvider:
    renderer = FakeRenderer()
    renderer.add(VENUE.url, html=read_fixture("seetickets_listing.html"))
    return SeeTicketsProvider(renderer, clock=lambda: date(2026, 1, 15))


def test_parse_listing_skips_rows_without_ticket_link() -> None:
    rows = parse_listing(read_fixture("seetickets_listing.html"), VENUE.url)

    assert [row.id for row in rows] == ["4512345", "4519999"]
    assert rows[0].ticket_url == (
        "https://www.crescentphx.example/event/band-x/crescent-ballroom/4512345"
    )
    assert rows[1].sold_out
    assert not rows[0].sold_out


def test_parse_artists_splits_headliners_and_support() -> None:
    artists = parse_artists(
        "BAND X, Co Headliner", "with Opener One, Opener Two and Special Guests"
    )

    assert artists == ["BAND X", "Co Headliner", "Opener One", "Opener Two"]


def test_parse_ages() -> None:
    assert parse_ages("Ages 18+ to enter") == "18+"
    assert parse_ages("ALL AGES") == "All Ages"
    assert parse_ages("") is None


def test_preview_resolves_year_less_dates() -> None:
    stubs = asyncio.run(_provider().preview(VENUE))

    assert [(stub.id, stub.date) for stub in stubs] == [
        ("4512345", date(2026, 2, 19)),
        ("4519999", date(2026, 3, 7)),
    ]
    assert stubs[1].title == "Late Night"


def test_scrape_reads_times_price_and_ages() -> None:
    band_x, late = asyncio.run(_provider().scrape(VENUE, frozenset({"4512345", "4519999"})))

    assert band_x.doors_time == "7:00 PM"
    assert band_x.show_time == "8:00 PM"
    assert band_x.price == "$25.00"
    assert band_x.age_restriction == "16+"
    assert band_x.artists == ("BAND X", "Co Headliner", "Opener One", "Opener Two")
    assert band_x.image_url == "https://img.seetickets.example/poster-1.jpg"

    assert late.is_sold_out
    assert late.price is None
    assert late.doors_time == "9:30 PM"
    assert late.show_time is None
    assert late.age_restriction == "All Ages"
    assert late.artists == ("Late Night",)
