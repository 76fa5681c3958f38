"""Concurrency-bounded fan-out of provider calls across venues."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from showscout.domain.model import BatchPreviewResult, BatchScrapeResult

from .errors import DiscoveryError, InvalidRequestError, UnknownVenueError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence

    from showscout.domain.model import EventStub, ScrapedEvent, VenueConfig

    from .registry import GuardedProvider, ProviderRegistry

log = getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 5


def chunked[T](items: Sequence[T], size: int) -> list[Sequence[T]]:
    return [items[start : start + size] for start in range(0, len(items), size)]


class DiscoveryOrchestrator:
    """Dispatches preview and scrape calls to providers.

    At most ``max_concurrency`` provider calls are in flight at once. Batch calls
    work through their input in chunks of that size; a venue's failure is stored
    in its own result slot and never affects other venues.
    """

    def __init__(
        self,
        *,
        venues: Iterable[VenueConfig],
        registry: ProviderRegistry,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._venues: dict[str, VenueConfig] = {venue.slug: venue for venue in venues}
        self._registry = registry
        self.max_concurrency = max_concurrency
        self._semaphore: asyncio.Semaphore | None = None
        self._semaphore_loop: asyncio.AbstractEventLoop | None = None

    @property
    def venues(self) -> tuple[VenueConfig, ...]:
        return tuple(self._venues.values())

    def get_venue(self, slug: str) -> VenueConfig:
        try:
            return self._venues[slug]
        except KeyError:
            raise UnknownVenueError(slug) from None

    def _resolve(self, slug: str) -> tuple[VenueConfig, GuardedProvider]:
        venue = self.get_venue(slug)
        return venue, self._registry.get(venue.provider_type)

    def _limiter(self) -> asyncio.Semaphore:
        # asyncio primitives bind to the loop that first waits on them.
        loop = asyncio.get_running_loop()
        if self._semaphore is None or self._semaphore_loop is not loop:
            self._semaphore = asyncio.Semaphore(self.max_concurrency)
            self._semaphore_loop = loop
        return self._semaphore

    async def _bounded[T](self, call: Callable[[], Awaitable[T]]) -> T:
        async with self._limiter():
            return await call()

    async def preview(self, slug: str) -> list[EventStub]:
        venue, provider = self._resolve(slug)
        log.info("Previewing %s (%s)", venue.slug, venue.provider_type)
        events = await self._bounded(lambda: provider.preview(venue))
        log.info("%s: %d events found", venue.slug, len(events))
        return events

    async def scrape(self, slug: str, event_ids: Iterable[str]) -> list[ScrapedEvent]:
        requested = frozenset(event_ids)
        if not requested:
            raise InvalidRequestError(f"No event ids given to scrape for {slug}")
        venue, provider = self._resolve(slug)
        log.info("Scraping %d events from %s", len(requested), venue.slug)
        events = await self._bounded(lambda: provider.scrape(venue, requested))
        log.info("%s: %d of %d events scraped", venue.slug, len(events), len(requested))
        return events

    async def preview_batch(self, slugs: Sequence[str]) -> list[BatchPreviewResult]:
        """Preview many venues; the result list has one entry per input slug, in input order."""

        results: list[BatchPreviewResult | None] = [None] * len(slugs)

        async def run_slot(index: int, slug: str) -> None:
            try:
                events = await self.preview(slug)
            except DiscoveryError as exc:
                log.warning("%s: preview failed: %s", slug, exc)
                results[index] = BatchPreviewResult(venue_slug=slug, error=str(exc))
            else:
                results[index] = BatchPreviewResult(venue_slug=slug, events=events)

        for offset, chunk in self._chunks(slugs):
            await asyncio.gather(
                *(run_slot(offset + position, slug) for position, slug in enumerate(chunk))
            )

        return [result for result in results if result is not None]

    async def scrape_batch(self, selections: Mapping[str, Iterable[str]]) -> list[BatchScrapeResult]:
        """Scrape the selected ids of several venues with the same isolation as previews."""

        items = [(slug, frozenset(ids)) for slug, ids in selections.items()]
        results: list[BatchScrapeResult | None] = [None] * len(items)

        async def run_slot(index: int, slug: str, ids: frozenset[str]) -> None:
            try:
                events = await self.scrape(slug, ids)
            except DiscoveryError as exc:
                log.warning("%s: scrape failed: %s", slug, exc)
                results[index] = BatchScrapeResult(venue_slug=slug, error=str(exc))
            else:
                results[index] = BatchScrapeResult(venue_slug=slug, events=events)

        for offset, chunk in self._chunks(items):
            await asyncio.gather(
                *(
                    run_slot(offset + position, slug, ids)
                    for position, (slug, ids) in enumerate(chunk)
                )
            )

        return [result for result in results if result is not None]

    def _chunks[T](self, items: Sequence[T]) -> list[tuple[int, Sequence[T]]]:
        return [
            (index * self.max_concurrency, chunk)
            for index, chunk in enumerate(chunked(items, self.max_concurrency))
        ]
