"""Discovered event records (preview and detail level)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, frozen=True)
class EventStub:
    """Cheap preview row for one listing.

    ``id`` is provider-local and stays the same across repeated previews of the
    same venue, so selections survive a refresh.
    """

    id: str
    title: str
    date: date
    venue: str


@dataclass(slots=True, frozen=True, kw_only=True)
class ScrapedEvent:
    """Detail-level event produced by a scrape of previously previewed ids."""

    id: str
    title: str
    date: date
    venue: str
    venue_slug: str
    image_url: str | None = None
    doors_time: str | None = None
    show_time: str | None = None
    ticket_url: str | None = None
    artists: tuple[str, ...] = ()
    scraped_at: datetime = field(default_factory=_utcnow)
    price: str | None = None
    age_restriction: str | None = None
    is_sold_out: bool = False
    is_cancelled: bool = False


@dataclass(slots=True, frozen=True)
class BatchPreviewResult:
    """Outcome of one venue's preview inside a batch; exactly one of the fields is set."""

    venue_slug: str
    events: list[EventStub] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True, frozen=True)
class BatchScrapeResult:
    venue_slug: str
    events: list[ScrapedEvent] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True, frozen=True)
class ImportStatus:
    """Whether a scraped event already exists on a target backend."""

    exists: bool
    show_id: int | None = None
    status: str | None = None
