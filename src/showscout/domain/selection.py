"""Curation state for one operator session.

The session tracks which venues were chosen, the last preview of each venue,
the event ids picked from those previews, and the scraped events accumulated so
far. Transitions run under a lock because several of them read and then write
compound state.
"""

from __future__ import annotations

import threading
from datetime import date
from typing import TYPE_CHECKING

from showscout.domain.model import CurationStep

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from showscout.domain.model import EventStub, ImportStatus, ScrapedEvent, VenueConfig


class NavigationError(RuntimeError):
    """Raised when a step is not reachable from the current state."""

    def __init__(self, step: CurationStep, reason: str) -> None:
        super().__init__(f"Cannot navigate to {step}: {reason}")
        self.step = step
        self.reason = reason


class SelectionSession:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._step = CurationStep.VENUES
        self._venues: tuple[VenueConfig, ...] = ()
        self._previews: dict[str, list[EventStub]] = {}
        self._selected: dict[str, set[str]] = {}
        self._scraped: list[ScrapedEvent] = []
        self._scraped_ids: set[str] = set()
        self._import_statuses: dict[str, ImportStatus] = {}

    # -- read access ---------------------------------------------------------

    @property
    def step(self) -> CurationStep:
        return self._step

    @property
    def venues(self) -> tuple[VenueConfig, ...]:
        return self._venues

    @property
    def scraped_events(self) -> tuple[ScrapedEvent, ...]:
        with self._lock:
            return tuple(self._scraped)

    @property
    def import_statuses(self) -> dict[str, ImportStatus]:
        with self._lock:
            return dict(self._import_statuses)

    def preview_for(self, venue_slug: str) -> list[EventStub]:
        with self._lock:
            return list(self._previews.get(venue_slug, ()))

    def selected_ids(self, venue_slug: str) -> frozenset[str]:
        with self._lock:
            return frozenset(self._selected.get(venue_slug, ()))

    def selections(self) -> dict[str, frozenset[str]]:
        """Non-empty selections per venue, ready to hand to a batch scrape."""

        with self._lock:
            return {slug: frozenset(ids) for slug, ids in self._selected.items() if ids}

    @property
    def total_selected(self) -> int:
        with self._lock:
            return sum(len(ids) for ids in self._selected.values())

    @property
    def total_available(self) -> int:
        with self._lock:
            return sum(len(stubs) for stubs in self._previews.values())

    # -- transitions ---------------------------------------------------------

    def choose_venues(self, venues: Iterable[VenueConfig]) -> None:
        """Start a new curation pass over ``venues``; earlier previews and picks are dropped."""

        with self._lock:
            self._venues = tuple(venues)
            self._previews.clear()
            self._selected.clear()
            self._import_statuses.clear()

    def record_preview(self, venue_slug: str, stubs: Iterable[EventStub]) -> None:
        """Store a venue's preview; its selection starts out empty."""

        with self._lock:
            self._previews[venue_slug] = list(stubs)
            self._selected[venue_slug] = set()

    def toggle_event(self, venue_slug: str, event_id: str) -> bool:
        """Flip one id's membership and return whether it is now selected."""

        with self._lock:
            selected = self._selected.setdefault(venue_slug, set())
            if event_id in selected:
                selected.remove(event_id)
                return False
            selected.add(event_id)
            return True

    def select_all(self, venue_slug: str, *, today: date | None = None) -> int:
        """Replace the venue's selection with its events dated today or later.

        Past events that were toggled on by hand are dropped from the selection.
        """

        cutoff = today or date.today()
        with self._lock:
            upcoming = {stub.id for stub in self._previews.get(venue_slug, ()) if stub.date >= cutoff}
            self._selected[venue_slug] = upcoming
            return len(upcoming)

    def select_none(self, venue_slug: str) -> None:
        with self._lock:
            self._selected[venue_slug] = set()

    def accumulate_scraped(self, events: Iterable[ScrapedEvent]) -> int:
        """Append events whose id has not been seen this session; return how many were added."""

        added = 0
        with self._lock:
            for event in events:
                if event.id in self._scraped_ids:
                    continue
                self._scraped_ids.add(event.id)
                self._scraped.append(event)
                added += 1
        return added

    def set_import_statuses(self, statuses: Mapping[str, ImportStatus]) -> None:
        with self._lock:
            self._import_statuses = dict(statuses)

    def reset(self) -> None:
        with self._lock:
            self._step = CurationStep.VENUES
            self._venues = ()
            self._previews.clear()
            self._selected.clear()
            self._scraped.clear()
            self._scraped_ids.clear()
            self._import_statuses.clear()

    # -- navigation ----------------------------------------------------------

    def _blocker(self, step: CurationStep) -> str | None:
        if step is CurationStep.PREVIEW and not self._venues:
            return "no venues chosen"
        if step is CurationStep.IMPORT and not self._scraped:
            return "no events scraped"
        return None

    def can_navigate(self, step: CurationStep) -> bool:
        with self._lock:
            return self._blocker(step) is None

    def navigate(self, step: CurationStep) -> None:
        with self._lock:
            reason = self._blocker(step)
            if reason is not None:
                raise NavigationError(step, reason)
            self._step = step
