"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from showscout.adapters.backend import BackendClient
from showscout.adapters.providers import build_default_registry
from showscout.config import (
    LOCAL,
    get_discovery_config,
    get_import_targets,
    get_target_config,
    load_venues,
)
from showscout.domain.data_integration import MultiTargetImporter
from showscout.domain.discovery import DiscoveryOrchestrator
from showscout.domain.model import (
    CombinedImportResult,
    CurationStep,
    DataImportRequest,
    DataImportResult,
    DiscoveryImportResult,
    ExportedShow,
    ImportStatus,
    ScrapedEvent,
)
from showscout.domain.ports import BulkImportOutcome
from showscout.domain.reconciliation import (
    ReconciliationEngine,
    TargetReconciliation,
    check_import_statuses,
    fetch_inventory,
)
from showscout.domain.selection import SelectionSession
from showscout.domain.translation import scraped_events_to_shows

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence
    from datetime import date

    from showscout.config import DiscoveryConfig, TargetConfig
    from showscout.domain.model import BatchPreviewResult, BatchScrapeResult, VenueConfig
    from showscout.domain.ports import RemoteBackend

log = getLogger(__name__)


def build_orchestrator(
    config: DiscoveryConfig | None = None,
    *,
    venues: Iterable[VenueConfig] | None = None,
) -> DiscoveryOrchestrator:
    effective = config or get_discovery_config()
    return DiscoveryOrchestrator(
        venues=venues if venues is not None else load_venues(),
        registry=build_default_registry(effective),
        max_concurrency=effective.max_concurrency,
    )


def build_backends(targets: Mapping[str, TargetConfig] | None = None) -> dict[str, RemoteBackend]:
    effective = targets if targets is not None else get_import_targets()
    return {name: BackendClient(target) for name, target in effective.items()}


def preview_venues(
    slugs: Sequence[str],
    *,
    orchestrator: DiscoveryOrchestrator | None = None,
) -> list[BatchPreviewResult]:
    effective = orchestrator or build_orchestrator()
    return asyncio.run(effective.preview_batch(slugs))


def scrape_venue(
    slug: str,
    event_ids: Iterable[str],
    *,
    orchestrator: DiscoveryOrchestrator | None = None,
) -> list[ScrapedEvent]:
    effective = orchestrator or build_orchestrator()
    return asyncio.run(effective.scrape(slug, event_ids))


@dataclass(slots=True)
class DiscoveryRun:
    """Outcome of an unattended preview, select, scrape pass."""

    session: SelectionSession
    previews: list[BatchPreviewResult] = field(default_factory=list)
    scrapes: list[BatchScrapeResult] = field(default_factory=list)
    statuses: dict[str, dict[str, ImportStatus]] = field(default_factory=dict)
    imports: CombinedImportResult[DiscoveryImportResult] | None = None

    @property
    def events(self) -> tuple[ScrapedEvent, ...]:
        return self.session.scraped_events


async def run_discovery(
    slugs: Sequence[str],
    *,
    orchestrator: DiscoveryOrchestrator,
    session: SelectionSession | None = None,
    importer: MultiTargetImporter | None = None,
    target: str | None = None,
    dry_run: bool = False,
    today: date | None = None,
) -> DiscoveryRun:
    """Preview the venues, select every upcoming event, scrape them and optionally import.

    The selection session drives the pass so the same guards apply as in the
    interactive workflow.
    """

    curation = session or SelectionSession()
    curation.choose_venues(orchestrator.get_venue(slug) for slug in slugs)
    curation.navigate(CurationStep.PREVIEW)
    run = DiscoveryRun(session=curation)

    run.previews = await orchestrator.preview_batch(slugs)
    for result in run.previews:
        if result.events is None:
            continue
        curation.record_preview(result.venue_slug, result.events)
        curation.select_all(result.venue_slug, today=today)
    log.info(
        "Selected %d of %d previewed events", curation.total_selected, curation.total_available
    )

    selections = curation.selections()
    if not selections:
        log.warning("Nothing to scrape: no upcoming events selected")
        return run

    run.scrapes = await orchestrator.scrape_batch(selections)
    for result in run.scrapes:
        if result.events is not None:
            curation.accumulate_scraped(result.events)

    if not curation.can_navigate(CurationStep.IMPORT):
        log.warning("No events scraped; nothing to import")
        return run
    curation.navigate(CurationStep.IMPORT)

    if importer is None or target is None:
        return run

    events = list(curation.scraped_events)
    for name in importer.resolve_targets(target):
        backend = importer.backend(name)
        run.statuses[name] = await check_import_statuses(backend, events)
        curation.set_import_statuses(run.statuses[name])
    run.imports = await importer.import_events(events, target, dry_run=dry_run)
    return run


def discover(
    slugs: Sequence[str],
    *,
    target: str | None = None,
    dry_run: bool = False,
    orchestrator: DiscoveryOrchestrator | None = None,
    importer: MultiTargetImporter | None = None,
) -> DiscoveryRun:
    effective = orchestrator or build_orchestrator()
    if target is not None and importer is None:
        importer = MultiTargetImporter(build_backends())
    return asyncio.run(
        run_discovery(
            slugs,
            orchestrator=effective,
            importer=importer,
            target=target,
            dry_run=dry_run,
        )
    )


def shows_from_scraped(
    events: Iterable[ScrapedEvent],
    *,
    venues: Iterable[VenueConfig] | None = None,
) -> list[ExportedShow]:
    catalogue = {venue.slug: venue for venue in (venues if venues is not None else load_venues())}
    return scraped_events_to_shows(events, catalogue)


def reconcile(
    shows: Sequence[ExportedShow],
    target: str,
    *,
    importer: MultiTargetImporter | None = None,
) -> dict[str, TargetReconciliation]:
    """Classify ``shows`` against each selected target's current inventory."""

    effective = importer or MultiTargetImporter(build_backends())
    names = effective.resolve_targets(target)
    engine = ReconciliationEngine({name: effective.backend(name) for name in names})
    return asyncio.run(engine.reconcile(shows))


def import_data(
    request: DataImportRequest,
    target: str,
    *,
    dry_run: bool | None = None,
    importer: MultiTargetImporter | None = None,
) -> CombinedImportResult[DataImportResult]:
    effective = importer or MultiTargetImporter(build_backends())
    return asyncio.run(effective.import_data(request, target, dry_run=dry_run))


def import_scraped_events(
    events: Sequence[ScrapedEvent],
    target: str,
    *,
    dry_run: bool = False,
    importer: MultiTargetImporter | None = None,
) -> CombinedImportResult[DiscoveryImportResult]:
    effective = importer or MultiTargetImporter(build_backends())
    return asyncio.run(effective.import_events(events, target, dry_run=dry_run))


@dataclass(slots=True)
class SyncShowsResult:
    exported: int
    reconciliation: dict[str, TargetReconciliation]
    imports: CombinedImportResult[DataImportResult]


async def sync_shows_async(
    *,
    source: RemoteBackend,
    importer: MultiTargetImporter,
    target: str,
    dry_run: bool = False,
) -> SyncShowsResult:
    """Copy shows that a target does not have yet from the local source instance.

    Each target receives only the shows reconciliation classified as new for it.
    """

    names = importer.resolve_targets(target)
    shows = await fetch_inventory(source)
    log.info("Exported %d shows from %s", len(shows), source.name)

    engine = ReconciliationEngine({name: importer.backend(name) for name in names})
    reports = await engine.reconcile(shows)

    combined: CombinedImportResult[DataImportResult] = CombinedImportResult()
    for name in names:
        report = reports[name]
        if report.error is not None:
            combined.results[name] = None
            combined.errors[name] = report.error
            continue
        request = DataImportRequest(shows=tuple(report.new_shows), dry_run=dry_run)
        if request.is_empty:
            log.info("%s: no new shows to import", name)
            combined.results[name] = DataImportResult()
            continue
        outcome = await importer.import_data(request, name)
        combined.results.update(outcome.results)
        combined.errors.update(outcome.errors)

    return SyncShowsResult(exported=len(shows), reconciliation=reports, imports=combined)


def sync_shows(
    target: str,
    *,
    dry_run: bool = False,
    source: RemoteBackend | None = None,
    importer: MultiTargetImporter | None = None,
) -> SyncShowsResult:
    return asyncio.run(
        sync_shows_async(
            source=source or BackendClient(get_target_config(LOCAL)),
            importer=importer or MultiTargetImporter(build_backends()),
            target=target,
            dry_run=dry_run,
        )
    )


async def publish_new_shows_async(
    shows: Sequence[ExportedShow],
    *,
    importer: MultiTargetImporter,
    target: str,
) -> tuple[dict[str, TargetReconciliation], CombinedImportResult[BulkImportOutcome]]:
    """Reconcile ``shows`` and send only each target's new ones through its bulk import."""

    names = importer.resolve_targets(target)
    engine = ReconciliationEngine({name: importer.backend(name) for name in names})
    reports = await engine.reconcile(shows)

    combined: CombinedImportResult[BulkImportOutcome] = CombinedImportResult()
    for name in names:
        report = reports[name]
        if report.error is not None:
            combined.results[name] = None
            combined.errors[name] = report.error
            continue
        fresh = report.new_shows
        if not fresh:
            combined.results[name] = BulkImportOutcome()
            continue
        outcome = await importer.confirm_shows(fresh, name)
        combined.results.update(outcome.results)
        combined.errors.update(outcome.errors)
    return reports, combined


def publish_new_shows(
    shows: Sequence[ExportedShow],
    target: str,
    *,
    importer: MultiTargetImporter | None = None,
) -> tuple[dict[str, TargetReconciliation], CombinedImportResult[BulkImportOutcome]]:
    return asyncio.run(
        publish_new_shows_async(
            shows,
            importer=importer or MultiTargetImporter(build_backends()),
            target=target,
        )
    )
