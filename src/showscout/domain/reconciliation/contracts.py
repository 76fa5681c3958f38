"""Reconciliation result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from showscout.domain.model import MatchClassification

if TYPE_CHECKING:
    from showscout.domain.model import ExportedShow
    from showscout.domain.ports import EntitySuggestion


type ShowKey = tuple[str, str]


@dataclass(slots=True, frozen=True, kw_only=True)
class ShowMatch:
    """Classification of one candidate show against one target's listing."""

    candidate: ExportedShow
    classification: MatchClassification
    existing: ExportedShow | None = None
    changed_fields: tuple[str, ...] = ()

    @property
    def is_existing(self) -> bool:
        return self.classification is not MatchClassification.NEW


@dataclass(slots=True, frozen=True, kw_only=True)
class LineupResolution:
    """Backend-resolved identities for the artists and venues of one candidate show."""

    candidate: ExportedShow
    artists: tuple[EntitySuggestion, ...] = ()
    venues: tuple[EntitySuggestion, ...] = ()
    warnings: tuple[str, ...] = ()
    can_import: bool = False

    @property
    def new_artists(self) -> tuple[str, ...]:
        return tuple(artist.name for artist in self.artists if artist.will_create)

    @property
    def new_venues(self) -> tuple[str, ...]:
        return tuple(venue.name for venue in self.venues if venue.will_create)


@dataclass(slots=True, kw_only=True)
class TargetReconciliation:
    """One target's view of the candidates; ``error`` is set when the listing could not be read."""

    target: str
    matches: list[ShowMatch] = field(default_factory=list)
    error: str | None = None

    def with_classification(self, classification: MatchClassification) -> list[ShowMatch]:
        return [match for match in self.matches if match.classification is classification]

    @property
    def new_shows(self) -> list[ExportedShow]:
        return [m.candidate for m in self.with_classification(MatchClassification.NEW)]
