"""Curated records exchanged with remote show backends."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import SetType, ShowStatus


@dataclass(slots=True, frozen=True, kw_only=True)
class SocialLinks:
    instagram: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    youtube: str | None = None
    spotify: str | None = None
    soundcloud: str | None = None
    bandcamp: str | None = None
    website: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class ExportedArtist:
    name: str
    city: str | None = None
    state: str | None = None
    bandcamp_embed_url: str | None = None
    social: SocialLinks = field(default_factory=SocialLinks)


@dataclass(slots=True, frozen=True, kw_only=True)
class ExportedVenue:
    name: str
    city: str
    state: str
    address: str | None = None
    zipcode: str | None = None
    verified: bool = False
    social: SocialLinks = field(default_factory=SocialLinks)


@dataclass(slots=True, frozen=True)
class ShowArtist:
    name: str
    position: int
    set_type: SetType | str = SetType.OPENER


@dataclass(slots=True, frozen=True, kw_only=True)
class ExportedShow:
    """A show as the backends export and import it.

    ``event_date`` is kept in the backend's own string format; reconciliation
    compares it verbatim.
    """

    title: str
    event_date: str
    city: str | None = None
    state: str | None = None
    price: float | None = None
    age_requirement: str | None = None
    description: str | None = None
    status: ShowStatus | str = ShowStatus.APPROVED
    is_sold_out: bool = False
    is_cancelled: bool = False
    venues: tuple[ExportedVenue, ...] = ()
    artists: tuple[ShowArtist, ...] = ()


@dataclass(slots=True, frozen=True, kw_only=True)
class DataImportRequest:
    shows: tuple[ExportedShow, ...] = ()
    artists: tuple[ExportedArtist, ...] = ()
    venues: tuple[ExportedVenue, ...] = ()
    dry_run: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.shows or self.artists or self.venues)


@dataclass(slots=True, frozen=True, kw_only=True)
class EntityImportStats:
    """Per-entity-type counts exactly as a target reported them."""

    total: int = 0
    imported: int = 0
    duplicates: int = 0
    updated: int = 0
    errors: int = 0
    messages: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True, kw_only=True)
class DataImportResult:
    shows: EntityImportStats = field(default_factory=EntityImportStats)
    artists: EntityImportStats = field(default_factory=EntityImportStats)
    venues: EntityImportStats = field(default_factory=EntityImportStats)


@dataclass(slots=True, frozen=True, kw_only=True)
class DiscoveryImportResult:
    """Statistics returned by a target for an import of scraped events."""

    total: int = 0
    imported: int = 0
    duplicates: int = 0
    rejected: int = 0
    pending_review: int = 0
    updated: int = 0
    errors: int = 0
    messages: tuple[str, ...] = ()


@dataclass(slots=True, kw_only=True)
class CombinedImportResult[R]:
    """Aggregated multi-target outcome.

    Every attempted target has a key in ``results``; the value is ``None`` when the
    request to that target did not complete, in which case ``errors`` holds the
    reason under the same key.
    """

    results: dict[str, R | None] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> tuple[str, ...]:
        return tuple(name for name, result in self.results.items() if result is not None)

    @property
    def failed(self) -> tuple[str, ...]:
        return tuple(self.errors)
