"""Natural keys used to match candidate shows with a target's inventory."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

if TYPE_CHECKING:
    from collections.abc import Iterable

    from showscout.domain.model import ExportedShow

    from .contracts import ShowKey

DEFAULT_TIMEZONE = "America/Phoenix"

STATE_TIMEZONES: dict[str, str] = {
    "AZ": "America/Phoenix",
    "CA": "America/Los_Angeles",
    "NV": "America/Los_Angeles",
    "CO": "America/Denver",
    "NM": "America/Denver",
    "TX": "America/Chicago",
    "IL": "America/Chicago",
    "NY": "America/New_York",
}


def show_timezone(show: ExportedShow) -> ZoneInfo:
    """Time zone of the show's venue, from the show's state or its first venue's."""

    state = show.state or next((venue.state for venue in show.venues if venue.state), "")
    return ZoneInfo(STATE_TIMEZONES.get(state.strip().upper(), DEFAULT_TIMEZONE))


def show_date(show: ExportedShow) -> str:
    """Calendar date of the show where it takes place, as ``YYYY-MM-DD``.

    Backends export ``eventDate`` as an RFC 3339 instant while translated shows
    carry a plain date; both reduce to the venue's local date. Values that do
    not parse are compared as given.
    """

    raw = show.event_date.strip()
    try:
        moment = datetime.fromisoformat(raw)
    except ValueError:
        return raw
    if moment.tzinfo is not None:
        moment = moment.astimezone(show_timezone(show))
    return moment.date().isoformat()


def show_key(show: ExportedShow) -> ShowKey:
    # Heuristic: two different shows with the same title on the same date collide.
    return (show.title.strip(), show_date(show))


def index_by_key(shows: Iterable[ExportedShow]) -> dict[ShowKey, ExportedShow]:
    """Index shows by key; on a collision the first listed show wins."""

    index: dict[ShowKey, ExportedShow] = {}
    for show in shows:
        index.setdefault(show_key(show), show)
    return index
