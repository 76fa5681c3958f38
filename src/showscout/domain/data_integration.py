"""Import curated records into one or several target backends."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from showscout.config.errors import ConfigurationError, UnknownTargetError
from showscout.config.targets import ALL_TARGETS
from showscout.domain.model import CombinedImportResult
from showscout.domain.ports import RemoteBackendError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping, Sequence

    from showscout.domain.model import (
        DataImportRequest,
        DataImportResult,
        DiscoveryImportResult,
        ExportedShow,
        ScrapedEvent,
    )
    from showscout.domain.ports import BulkImportOutcome, RemoteBackend

log = getLogger(__name__)


class MultiTargetImporter:
    """Sends one import request per selected target.

    Targets are attempted independently: a failure is recorded under that
    target's name and never prevents or discards another target's outcome.
    """

    def __init__(self, backends: Mapping[str, RemoteBackend]) -> None:
        self._backends = dict(backends)

    @property
    def targets(self) -> tuple[str, ...]:
        return tuple(self._backends)

    def backend(self, name: str) -> RemoteBackend:
        try:
            return self._backends[name]
        except KeyError:
            raise UnknownTargetError(name, self.targets) from None

    def resolve_targets(self, target: str) -> tuple[str, ...]:
        if target == ALL_TARGETS:
            return self.targets
        if target not in self._backends:
            raise UnknownTargetError(target, self.targets)
        return (target,)

    async def import_data(
        self,
        request: DataImportRequest,
        target: str,
        *,
        dry_run: bool | None = None,
    ) -> CombinedImportResult[DataImportResult]:
        """Import shows, artists and venues; ``dry_run`` overrides the request's flag."""

        effective = request if dry_run is None else replace(request, dry_run=dry_run)
        log.info(
            "Importing %d shows, %d artists, %d venues into %s%s",
            len(effective.shows),
            len(effective.artists),
            len(effective.venues),
            target,
            " (dry run)" if effective.dry_run else "",
        )
        return await self._fan_out(target, lambda backend: backend.import_data(effective))

    async def import_events(
        self,
        events: Sequence[ScrapedEvent],
        target: str,
        *,
        dry_run: bool = False,
    ) -> CombinedImportResult[DiscoveryImportResult]:
        log.info(
            "Importing %d scraped events into %s%s",
            len(events),
            target,
            " (dry run)" if dry_run else "",
        )
        return await self._fan_out(
            target, lambda backend: backend.import_events(events, dry_run=dry_run)
        )

    async def confirm_shows(
        self, shows: Sequence[ExportedShow], target: str
    ) -> CombinedImportResult[BulkImportOutcome]:
        """Create ``shows`` through each target's bulk import, which resolves their lineups."""

        log.info("Confirming %d shows on %s", len(shows), target)
        return await self._fan_out(target, lambda backend: backend.confirm_import(shows))

    async def _fan_out[R](
        self,
        target: str,
        call: Callable[[RemoteBackend], Awaitable[R]],
    ) -> CombinedImportResult[R]:
        names = self.resolve_targets(target)
        outcomes: list[R | None] = [None] * len(names)
        errors: list[str | None] = [None] * len(names)

        async def run_slot(index: int, name: str) -> None:
            try:
                outcomes[index] = await call(self._backends[name])
            except (RemoteBackendError, ConfigurationError) as exc:
                log.warning("%s: import failed: %s", name, exc)
                errors[index] = str(exc)
            else:
                log.info("%s: import finished", name)

        await asyncio.gather(*(run_slot(index, name) for index, name in enumerate(names)))

        combined: CombinedImportResult[R] = CombinedImportResult()
        for name, outcome, error in zip(names, outcomes, errors, strict=True):
            combined.results[name] = outcome
            if error is not None:
                combined.errors[name] = error
        return combined
