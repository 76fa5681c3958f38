from __future__ import annotations

import asyncio
from datetime import date

from showscout.app import publish_new_shows_async, run_discovery, sync_shows_async
from showscout.domain.data_integration import MultiTargetImporter
from showscout.domain.discovery import DiscoveryOrchestrator, ProviderRegistry
from showscout.domain.model import CurationStep, ExportedShow, ProviderType
from tests.support.backends import FakeBackend
from tests.support.discovery import FakeProvider, make_stub, make_venue

TODAY = date(2025, 6, 10)


def _orchestrator(provider: FakeProvider, slugs: list[str]) -> DiscoveryOrchestrator:
    registry = ProviderRegistry()
    registry.register(ProviderType.JSONLD, provider)
    return DiscoveryOrchestrator(venues=[make_venue(slug) for slug in slugs], registry=registry)


def test_discovery_selects_upcoming_events_and_imports_them() -> None:
    provider = FakeProvider(
        previews={
            "club": [make_stub("old", on=date(2025, 5, 1)), make_stub("new", on=date(2025, 7, 1))],
            "hall": [make_stub("h1", on=date(2025, 6, 20))],
        },
    )
    stage = FakeBackend("stage", existing_event_ids={"h1"})
    importer = MultiTargetImporter({"stage": stage})

    run = asyncio.run(
        run_discovery(
            ["club", "hall"],
            orchestrator=_orchestrator(provider, ["club", "hall"]),
            importer=importer,
            target="stage",
            today=TODAY,
        )
    )

    assert sorted(event.id for event in run.events) == ["h1", "new"]
    assert run.session.step is CurationStep.IMPORT
    assert run.statuses["stage"]["h1"].exists
    assert run.imports is not None
    assert run.imports.succeeded == ("stage",)
    assert len(stage.event_imports[0][0]) == 2


def test_discovery_keeps_going_when_a_venue_fails() -> None:
    provider = FakeProvider(
        previews={"club": [make_stub("c1", on=date(2025, 7, 1))]},
        failing={"hall"},
    )

    run = asyncio.run(
        run_discovery(
            ["club", "hall"],
            orchestrator=_orchestrator(provider, ["club", "hall"]),
            today=TODAY,
        )
    )

    assert [result.venue_slug for result in run.previews if not result.ok] == ["hall"]
    assert [event.id for event in run.events] == ["c1"]
    assert run.imports is None


def test_discovery_without_upcoming_events_stops_before_scraping() -> None:
    provider = FakeProvider(previews={"club": [make_stub("c1", on=date(2025, 1, 1))]})

    run = asyncio.run(
        run_discovery(["club"], orchestrator=_orchestrator(provider, ["club"]), today=TODAY)
    )

    assert run.scrapes == []
    assert run.session.step is CurationStep.PREVIEW


def test_sync_shows_imports_only_new_shows_per_target() -> None:
    band_x = ExportedShow(title="Band X", event_date="2025-06-01")
    band_y = ExportedShow(title="Band Y", event_date="2025-06-02")
    local = FakeBackend("local", shows=[band_x, band_y])
    stage = FakeBackend("stage", shows=[band_x])
    production = FakeBackend("production", fail_with="unauthorized")
    importer = MultiTargetImporter({"stage": stage, "production": production})

    result = asyncio.run(sync_shows_async(source=local, importer=importer, target="both"))

    assert result.exported == 2
    assert [request.shows for request in stage.imports] == [(band_y,)]
    assert result.imports.results["production"] is None
    assert result.imports.errors["production"] == "unauthorized"


def test_sync_shows_skips_targets_that_are_up_to_date() -> None:
    band_x = ExportedShow(title="Band X", event_date="2025-06-01")
    stage = FakeBackend("stage", shows=[band_x])

    result = asyncio.run(
        sync_shows_async(
            source=FakeBackend("local", shows=[band_x]),
            importer=MultiTargetImporter({"stage": stage}),
            target="stage",
        )
    )

    assert stage.imports == []
    assert result.imports.succeeded == ("stage",)


def test_publish_confirms_new_shows_only() -> None:
    band_x = ExportedShow(title="Band X", event_date="2025-06-01")
    band_x_next_day = ExportedShow(title="Band X", event_date="2025-06-02")
    stage = FakeBackend("stage", shows=[band_x])

    reports, published = asyncio.run(
        publish_new_shows_async(
            [band_x, band_x_next_day],
            importer=MultiTargetImporter({"stage": stage}),
            target="stage",
        )
    )

    assert reports["stage"].new_shows == [band_x_next_day]
    assert stage.confirmed == [[band_x_next_day]]
    outcome = published.results["stage"]
    assert outcome is not None
    assert outcome.success_count == 1
