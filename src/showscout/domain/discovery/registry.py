"""Provider registry keyed by provider type."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from showscout.domain.model import ProviderType

from .errors import (
    NoEventsFoundError,
    ProviderError,
    ProviderFetchError,
    ProviderParseError,
    UnsupportedProviderError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from showscout.domain.model import EventStub, ScrapedEvent, VenueConfig
    from showscout.domain.ports import DiscoveryProvider

log = getLogger(__name__)


class GuardedProvider:
    """Adapter boundary around a provider.

    Every failure leaving a provider call is a ``ProviderError``; previews with
    no events are errors, and scrape results are limited to the requested ids.
    """

    def __init__(self, provider_type: ProviderType, provider: DiscoveryProvider) -> None:
        self.provider_type = provider_type
        self._provider = provider

    async def preview(self, venue: VenueConfig) -> list[EventStub]:
        try:
            events = await self._provider.preview(venue)
        except ProviderError as exc:
            exc.venue_slug = exc.venue_slug or venue.slug
            raise
        except httpx.HTTPError as exc:
            raise ProviderFetchError(
                f"Failed to load {venue.name}: {exc}", venue_slug=venue.slug
            ) from exc
        except Exception as exc:
            log.exception("%s provider crashed while previewing %s", self.provider_type, venue.slug)
            raise ProviderParseError(
                f"Unexpected page shape for {venue.name}: {exc}", venue_slug=venue.slug
            ) from exc

        if not events:
            raise NoEventsFoundError(f"No events found for {venue.name}", venue_slug=venue.slug)
        return events

    async def scrape(self, venue: VenueConfig, event_ids: frozenset[str]) -> list[ScrapedEvent]:
        try:
            events = await self._provider.scrape(venue, event_ids)
        except ProviderError as exc:
            exc.venue_slug = exc.venue_slug or venue.slug
            raise
        except httpx.HTTPError as exc:
            raise ProviderFetchError(
                f"Failed to load {venue.name}: {exc}", venue_slug=venue.slug
            ) from exc
        except Exception as exc:
            log.exception("%s provider crashed while scraping %s", self.provider_type, venue.slug)
            raise ProviderParseError(
                f"Unexpected page shape for {venue.name}: {exc}", venue_slug=venue.slug
            ) from exc

        requested = [event for event in events if event.id in event_ids]
        if len(requested) != len(events):
            log.warning(
                "%s returned %d unrequested events; dropped",
                venue.slug,
                len(events) - len(requested),
            )
        return requested


class ProviderRegistry:
    """Maps provider types to their implementation.

    Adding a source type means adding a ``ProviderType`` member and registering
    one provider; the orchestrator never changes.
    """

    def __init__(self) -> None:
        self._providers: dict[ProviderType, GuardedProvider] = {}

    def register(self, provider_type: ProviderType | str, provider: DiscoveryProvider) -> None:
        key = ProviderType(provider_type)
        if key in self._providers:
            log.warning("Replacing provider registered for %s", key)
        self._providers[key] = GuardedProvider(key, provider)

    def get(self, provider_type: ProviderType | str) -> GuardedProvider:
        try:
            return self._providers[ProviderType(provider_type)]
        except (KeyError, ValueError):
            raise UnsupportedProviderError(str(provider_type)) from None

    def __contains__(self, provider_type: object) -> bool:
        try:
            return ProviderType(str(provider_type)) in self._providers
        except ValueError:
            return False

    def __iter__(self) -> Iterator[ProviderType]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)
