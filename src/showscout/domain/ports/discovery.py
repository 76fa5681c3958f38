"""Port implemented by each event source adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from showscout.domain.model import EventStub, ScrapedEvent, VenueConfig


@runtime_checkable
class DiscoveryProvider(Protocol):
    """Reads one kind of external listing.

    ``preview`` lists upcoming events without visiting detail pages. ``scrape``
    returns detail records for the requested ids only and may silently omit ids
    whose listing has disappeared. Both raise ``ProviderError`` subclasses.
    """

    async def preview(self, venue: VenueConfig) -> list[EventStub]: ...

    async def scrape(self, venue: VenueConfig, event_ids: frozenset[str]) -> list[ScrapedEvent]: ...


__all__ = ["DiscoveryProvider"]
