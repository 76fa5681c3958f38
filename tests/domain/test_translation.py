from __future__ import annotations

from datetime import date

import pytest

from showscout.domain.model import SetType, ShowStatus
from showscout.domain.translation import (
    lineup,
    parse_price,
    scraped_event_to_show,
    scraped_events_to_shows,
)
from tests.support.discovery import make_scraped, make_venue


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$25.00", 25.0),
        ("$20 - $25", 20.0),
        ("Free", 0.0),
        ("$1,200", 1200.0),
        ("TBA", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_price(raw: str | None, expected: float | None) -> None:
    assert parse_price(raw) == expected


def test_lineup_marks_first_artist_as_headliner() -> None:
    artists = lineup(["Band X", "Opener One", "Opener Two"])

    assert [artist.set_type for artist in artists] == [
        SetType.HEADLINER,
        SetType.OPENER,
        SetType.OPENER,
    ]
    assert [artist.position for artist in artists] == [0, 1, 2]


def test_scraped_event_becomes_show_at_its_venue() -> None:
    venue = make_venue("crescent-ballroom", city="Phoenix", state="AZ")
    event = make_scraped(
        "e1",
        venue_slug=venue.slug,
        on=date(2025, 6, 1),
        title="Band X",
        artists=("Band X", "Support"),
        price="$18.50",
    )

    show = scraped_event_to_show(event, venue)

    assert show.title == "Band X"
    assert show.event_date == "2025-06-01"
    assert (show.city, show.state) == ("Phoenix", "AZ")
    assert show.price == 18.5
    assert show.status is ShowStatus.APPROVED
    assert [venue_out.name for venue_out in show.venues] == ["Crescent Ballroom"]
    assert [artist.name for artist in show.artists] == ["Band X", "Support"]


def test_event_without_artists_uses_title_as_headliner() -> None:
    venue = make_venue("club")
    show = scraped_event_to_show(make_scraped("e1", venue_slug="club", title="Solo Act"), venue)

    assert [(artist.name, artist.set_type) for artist in show.artists] == [
        ("Solo Act", SetType.HEADLINER)
    ]


def test_unknown_venue_slug_is_rejected() -> None:
    with pytest.raises(KeyError, match="unknown venue"):
        scraped_events_to_shows([make_scraped("e1", venue_slug="ghost")], {})
