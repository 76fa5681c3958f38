"""Per-target reconciliation of candidate shows."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from showscout.config.errors import ConfigurationError
from showscout.domain.ports import RemoteBackendError

from .contracts import TargetReconciliation
from .resolve import lineups_from_preview, reconcile_shows

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from showscout.domain.model import ExportedShow, ImportStatus, ScrapedEvent
    from showscout.domain.ports import RemoteBackend

    from .contracts import LineupResolution

log = getLogger(__name__)

LISTING_PAGE_SIZE = 500
LISTING_STATUS = "all"
MAX_LISTING_PAGES = 20


async def fetch_inventory(
    backend: RemoteBackend,
    *,
    page_size: int = LISTING_PAGE_SIZE,
    max_pages: int = MAX_LISTING_PAGES,
) -> list[ExportedShow]:
    """Read a target's shows of every status, page by page."""

    shows: list[ExportedShow] = []
    for page in range(max_pages):
        listing = await backend.list_shows(
            limit=page_size, offset=page * page_size, status=LISTING_STATUS
        )
        shows.extend(listing.shows)
        if not listing.shows or len(shows) >= listing.total:
            break
    else:
        log.warning(
            "%s: stopped reading inventory after %d pages (%d shows)",
            backend.name,
            max_pages,
            len(shows),
        )
    return shows


class ReconciliationEngine:
    """Classifies candidates independently against each configured target."""

    def __init__(self, backends: Mapping[str, RemoteBackend]) -> None:
        self._backends = dict(backends)

    @property
    def targets(self) -> tuple[str, ...]:
        return tuple(self._backends)

    async def reconcile(
        self,
        candidates: Sequence[ExportedShow],
        targets: Sequence[str] | None = None,
    ) -> dict[str, TargetReconciliation]:
        names = list(targets) if targets is not None else list(self._backends)
        reports: list[TargetReconciliation | None] = [None] * len(names)

        async def run_slot(index: int, name: str) -> None:
            try:
                existing = await fetch_inventory(self._backends[name])
            except (RemoteBackendError, ConfigurationError) as exc:
                log.warning("%s: could not read show listing: %s", name, exc)
                reports[index] = TargetReconciliation(target=name, error=str(exc))
                return
            matches = reconcile_shows(candidates, existing)
            log.info(
                "%s: %d of %d candidates already exist",
                name,
                sum(1 for match in matches if match.is_existing),
                len(matches),
            )
            reports[index] = TargetReconciliation(target=name, matches=matches)

        await asyncio.gather(*(run_slot(index, name) for index, name in enumerate(names)))
        return {report.target: report for report in reports if report is not None}

    async def resolve_lineups(
        self,
        target: str,
        candidates: Sequence[ExportedShow],
    ) -> list[LineupResolution]:
        """Ask ``target`` which artists and venues of the candidates it already knows."""

        if not candidates:
            return []
        preview = await self._backends[target].preview_import(candidates)
        return lineups_from_preview(candidates, preview)


async def check_import_statuses(
    backend: RemoteBackend,
    events: Sequence[ScrapedEvent],
) -> dict[str, ImportStatus]:
    """Look up which scraped events a target already holds; lookup failures yield no statuses."""

    if not events:
        return {}
    try:
        return await backend.check_events(events)
    except RemoteBackendError as exc:
        log.warning("%s: import status check failed: %s", backend.name, exc)
        return {}
