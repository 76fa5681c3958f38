"""Turn scraped events into the show records the backends import."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from showscout.domain.model import (
    ExportedShow,
    ExportedVenue,
    SetType,
    ShowArtist,
    ShowStatus,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from showscout.domain.model import ScrapedEvent, VenueConfig

_PRICE = re.compile(r"(\d+(?:\.\d{1,2})?)")


def parse_price(raw: str | None) -> float | None:
    """Read the first amount out of a listing price ("$25.00", "$20-$25"); "Free" is 0."""

    if raw is None or not raw.strip():
        return None
    if raw.strip().lower() == "free":
        return 0.0
    match = _PRICE.search(raw.replace(",", ""))
    return float(match.group(1)) if match else None


def lineup(artists: Iterable[str]) -> tuple[ShowArtist, ...]:
    """First artist headlines; the rest open, in listing order."""

    return tuple(
        ShowArtist(
            name=name,
            position=position,
            set_type=SetType.HEADLINER if position == 0 else SetType.OPENER,
        )
        for position, name in enumerate(artists)
    )


def scraped_event_to_show(
    event: ScrapedEvent,
    venue: VenueConfig,
    *,
    status: ShowStatus = ShowStatus.APPROVED,
) -> ExportedShow:
    return ExportedShow(
        title=event.title,
        event_date=event.date.isoformat(),
        city=venue.city,
        state=venue.state,
        price=parse_price(event.price),
        age_requirement=event.age_restriction,
        status=status,
        is_sold_out=event.is_sold_out,
        is_cancelled=event.is_cancelled,
        venues=(ExportedVenue(name=venue.name, city=venue.city, state=venue.state, verified=True),),
        artists=lineup(event.artists or (event.title,)),
    )


def scraped_events_to_shows(
    events: Iterable[ScrapedEvent],
    venues: Mapping[str, VenueConfig],
) -> list[ExportedShow]:
    shows: list[ExportedShow] = []
    for event in events:
        venue = venues.get(event.venue_slug)
        if venue is None:
            raise KeyError(f"Scraped event {event.id} references unknown venue {event.venue_slug}")
        shows.append(scraped_event_to_show(event, venue))
    return shows

