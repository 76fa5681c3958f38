from __future__ import annotations

import asyncio

import pytest

from showscout.domain.model import ExportedShow, ExportedVenue, MatchClassification
from showscout.domain.ports import ImportPreview
from showscout.domain.reconciliation import (
    ReconciliationEngine,
    check_import_statuses,
    classify_show,
    fetch_inventory,
    index_by_key,
    lineups_from_preview,
    reconcile_shows,
    show_date,
    show_key,
)
from tests.support.backends import FakeBackend
from tests.support.discovery import make_scraped


def _show(title: str, event_date: str, **fields: object) -> ExportedShow:
    return ExportedShow(title=title, event_date=event_date, **fields)  # type: ignore[arg-type]


def test_show_key_trims_title_and_date() -> None:
    assert show_key(_show("  Band X ", " 2025-06-01")) == ("Band X", "2025-06-01")


def test_show_key_uses_local_date_of_exported_instants() -> None:
    # 03:00 UTC is still the previous evening in Phoenix and Chicago.
    phoenix = _show("Band X", "2025-06-02T03:00:00Z", state="AZ")
    chicago = _show("Band X", "2025-06-02T01:30:00+00:00", state="IL")

    assert show_key(phoenix) == ("Band X", "2025-06-01")
    assert show_date(chicago) == "2025-06-01"
    assert show_date(_show("Band X", "2025-06-02T18:00:00Z", state="AZ")) == "2025-06-02"


def test_show_date_falls_back_to_venue_state_then_phoenix() -> None:
    at_venue = _show(
        "Band X",
        "2025-06-02T04:30:00Z",
        venues=(ExportedVenue(name="Palace", city="Austin", state="TX"),),
    )

    assert show_date(at_venue) == "2025-06-01"
    assert show_date(_show("Band X", "2025-06-02T06:00:00Z")) == "2025-06-01"


def test_show_date_keeps_unparseable_values() -> None:
    assert show_date(_show("Band X", " June 1st ")) == "June 1st"


def test_candidate_date_matches_exported_instant() -> None:
    existing = [_show("Band X", "2025-06-02T03:00:00Z", state="AZ")]

    matches = reconcile_shows(
        [_show("Band X", "2025-06-01", state="AZ"), _show("Band X", "2025-06-02", state="AZ")],
        existing,
    )

    assert [match.classification for match in matches] == [
        MatchClassification.EXISTING_UNCHANGED,
        MatchClassification.NEW,
    ]


def test_index_keeps_first_show_on_collision() -> None:
    first = _show("Band X", "2025-06-01", price=10.0)
    second = _show("Band X", "2025-06-01", price=12.0)

    assert index_by_key([first, second])[("Band X", "2025-06-01")] is first


def test_same_title_and_date_is_existing() -> None:
    existing = [_show("Band X", "2025-06-01")]

    matches = reconcile_shows(
        [_show("Band X", "2025-06-01"), _show("Band X", "2025-06-02")],
        existing,
    )

    assert [match.classification for match in matches] == [
        MatchClassification.EXISTING_UNCHANGED,
        MatchClassification.NEW,
    ]
    assert matches[0].existing is existing[0]
    assert matches[1].existing is None


def test_changed_listing_fields_make_show_updatable() -> None:
    existing = _show("Band X", "2025-06-01", price=20.0, is_sold_out=False)

    match = classify_show(_show("Band X", "2025-06-01", price=20.0, is_sold_out=True), existing)

    assert match.classification is MatchClassification.EXISTING_UPDATABLE
    assert match.changed_fields == ("is_sold_out",)


def test_unknown_candidate_price_is_not_a_change() -> None:
    existing = _show("Band X", "2025-06-01", price=20.0)

    match = classify_show(_show("Band X", "2025-06-01"), existing)

    assert match.classification is MatchClassification.EXISTING_UNCHANGED


def test_engine_reports_each_target_independently() -> None:
    stage = FakeBackend("stage", shows=[_show("Band X", "2025-06-01")])
    production = FakeBackend("production", fail_with="listing unavailable")
    engine = ReconciliationEngine({"stage": stage, "production": production})

    reports = asyncio.run(engine.reconcile([_show("Band X", "2025-06-01")]))

    assert reports["stage"].error is None
    assert reports["stage"].matches[0].is_existing
    assert reports["stage"].new_shows == []
    assert reports["production"].matches == []
    assert reports["production"].error == "listing unavailable"


def test_fetch_inventory_pages_until_total() -> None:
    backend = FakeBackend("local", shows=[_show(f"Show {n}", "2025-06-01") for n in range(5)])

    shows = asyncio.run(fetch_inventory(backend, page_size=2))

    assert len(shows) == 5
    assert backend.listing_calls == 3


def test_resolve_lineups_pairs_preview_entries() -> None:
    engine = ReconciliationEngine({"stage": FakeBackend("stage")})
    candidates = [_show("Band X", "2025-06-01"), _show("Band Y", "2025-06-02")]

    resolutions = asyncio.run(engine.resolve_lineups("stage", candidates))

    assert [resolution.candidate for resolution in resolutions] == candidates
    assert all(resolution.can_import for resolution in resolutions)


def test_lineups_from_preview_rejects_mismatched_lengths() -> None:
    with pytest.raises(ValueError, match="0 entries for 1 shows"):
        lineups_from_preview([_show("Band X", "2025-06-01")], ImportPreview())


def test_import_status_check_degrades_to_empty() -> None:
    failing = FakeBackend("stage", fail_with="boom")
    working = FakeBackend("production", existing_event_ids={"1"})
    events = [make_scraped("1"), make_scraped("2")]

    assert asyncio.run(check_import_statuses(failing, events)) == {}
    statuses = asyncio.run(check_import_statuses(working, events))
    assert statuses["1"].exists
    assert not statuses["2"].exists
