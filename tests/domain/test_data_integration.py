from __future__ import annotations

import asyncio

import pytest

from showscout.config import UnknownTargetError
from showscout.domain.data_integration import MultiTargetImporter
from showscout.domain.model import DataImportRequest, ExportedShow
from tests.support.backends import FakeBackend
from tests.support.discovery import make_scraped


def _importer(**backends: FakeBackend) -> MultiTargetImporter:
    return MultiTargetImporter(backends)


def test_resolve_targets() -> None:
    importer = _importer(stage=FakeBackend("stage"), production=FakeBackend("production"))

    assert importer.resolve_targets("both") == ("stage", "production")
    assert importer.resolve_targets("stage") == ("stage",)
    with pytest.raises(UnknownTargetError):
        importer.resolve_targets("qa")


def test_one_failing_target_does_not_discard_the_other() -> None:
    stage = FakeBackend("stage")
    production = FakeBackend("production", fail_with="Internal Server Error")
    importer = _importer(stage=stage, production=production)
    request = DataImportRequest(shows=(ExportedShow(title="Band X", event_date="2025-06-01"),))

    result = asyncio.run(importer.import_data(request, "both"))

    stage_result = result.results["stage"]
    assert stage_result is not None
    assert stage_result.shows.imported == 1
    assert result.results["production"] is None
    assert result.errors == {"production": "Internal Server Error"}
    assert result.succeeded == ("stage",)
    assert result.failed == ("production",)


def test_dry_run_override_reaches_backend() -> None:
    stage = FakeBackend("stage")
    request = DataImportRequest(shows=(ExportedShow(title="Band X", event_date="2025-06-01"),))

    asyncio.run(_importer(stage=stage).import_data(request, "stage", dry_run=True))

    assert stage.imports[0].dry_run is True


def test_import_events_fans_out_with_dry_run() -> None:
    stage = FakeBackend("stage")
    production = FakeBackend("production")
    events = [make_scraped("1"), make_scraped("2")]

    result = asyncio.run(
        _importer(stage=stage, production=production).import_events(events, "both", dry_run=True)
    )

    assert result.succeeded == ("stage", "production")
    assert stage.event_imports[0][1] is True
    assert len(production.event_imports[0][0]) == 2


def test_confirm_shows_targets_only_named_backend() -> None:
    stage = FakeBackend("stage")
    production = FakeBackend("production")
    shows = [ExportedShow(title="Band X", event_date="2025-06-01")]

    result = asyncio.run(_importer(stage=stage, production=production).confirm_shows(shows, "stage"))

    outcome = result.results["stage"]
    assert outcome is not None
    assert outcome.success_count == 1
    assert production.confirmed == []
