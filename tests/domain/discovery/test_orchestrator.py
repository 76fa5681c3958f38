from __future__ import annotations

import asyncio
from datetime import date

import pytest

from showscout.domain.discovery import (
    DiscoveryOrchestrator,
    InvalidRequestError,
    ProviderRegistry,
    UnknownVenueError,
    UnsupportedProviderError,
)
from showscout.domain.discovery.orchestrator import chunked
from showscout.domain.model import ProviderType
from tests.support.discovery import FakeProvider, make_stub, make_venue


def _orchestrator(
    provider: FakeProvider, slugs: list[str], *, max_concurrency: int = 5
) -> DiscoveryOrchestrator:
    registry = ProviderRegistry()
    registry.register(ProviderType.JSONLD, provider)
    return DiscoveryOrchestrator(
        venues=[make_venue(slug) for slug in slugs],
        registry=registry,
        max_concurrency=max_concurrency,
    )


def test_chunked_splits_in_order() -> None:
    assert chunked([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert chunked([], 3) == []


def test_preview_batch_isolates_failing_venue() -> None:
    provider = FakeProvider(
        previews={
            "a": [make_stub("a1", on=date(2025, 6, 1))],
            "c": [make_stub("c1", on=date(2025, 6, 2)), make_stub("c2", on=date(2025, 6, 3))],
        },
        failing={"b"},
    )
    orchestrator = _orchestrator(provider, ["a", "b", "c"])

    results = asyncio.run(orchestrator.preview_batch(["a", "b", "c"]))

    assert [result.venue_slug for result in results] == ["a", "b", "c"]
    assert results[0].events is not None and len(results[0].events) == 1
    assert results[1].events is None
    assert results[1].error == "b is down"
    assert results[2].events is not None and len(results[2].events) == 2


def test_preview_batch_reports_unknown_venue_in_its_slot() -> None:
    provider = FakeProvider(previews={"a": [make_stub("a1", on=date(2025, 6, 1))]})
    orchestrator = _orchestrator(provider, ["a"])

    results = asyncio.run(orchestrator.preview_batch(["missing", "a"]))

    assert results[0].error == "Unknown venue: missing"
    assert results[1].ok


def test_empty_preview_is_an_error() -> None:
    orchestrator = _orchestrator(FakeProvider(previews={"a": []}), ["a"])

    results = asyncio.run(orchestrator.preview_batch(["a"]))

    assert results[0].events is None
    assert results[0].error is not None
    assert "No events found" in results[0].error


def test_preview_batch_never_exceeds_concurrency_bound() -> None:
    slugs = [f"venue-{index}" for index in range(12)]
    provider = FakeProvider(
        previews={slug: [make_stub(f"{slug}-1", on=date(2025, 6, 1))] for slug in slugs},
        delay=0.01,
    )
    orchestrator = _orchestrator(provider, slugs, max_concurrency=5)

    results = asyncio.run(orchestrator.preview_batch(slugs))

    assert len(results) == 12
    assert all(result.ok for result in results)
    assert provider.peak <= 5


def test_concurrent_single_previews_share_the_bound() -> None:
    slugs = [f"venue-{index}" for index in range(8)]
    provider = FakeProvider(
        previews={slug: [make_stub(f"{slug}-1", on=date(2025, 6, 1))] for slug in slugs},
        delay=0.01,
    )
    orchestrator = _orchestrator(provider, slugs, max_concurrency=3)

    async def run_all() -> None:
        await asyncio.gather(*(orchestrator.preview(slug) for slug in slugs))

    asyncio.run(run_all())

    assert provider.peak <= 3


def test_orchestrator_can_be_reused_across_event_loops() -> None:
    provider = FakeProvider(previews={"a": [make_stub("a1", on=date(2025, 6, 1))]})
    orchestrator = _orchestrator(provider, ["a"], max_concurrency=1)

    first = asyncio.run(orchestrator.preview("a"))
    second = asyncio.run(orchestrator.preview("a"))

    assert first == second


def test_preview_unknown_venue_raises() -> None:
    orchestrator = _orchestrator(FakeProvider(), ["a"])

    with pytest.raises(UnknownVenueError, match="Unknown venue: nope"):
        asyncio.run(orchestrator.preview("nope"))


def test_preview_without_registered_provider_raises() -> None:
    orchestrator = DiscoveryOrchestrator(
        venues=[make_venue("wix-venue", provider_type=ProviderType.WIX)],
        registry=ProviderRegistry(),
    )

    with pytest.raises(UnsupportedProviderError, match="No provider for type: wix"):
        asyncio.run(orchestrator.preview("wix-venue"))


def test_scrape_requires_event_ids() -> None:
    orchestrator = _orchestrator(FakeProvider(), ["a"])

    with pytest.raises(InvalidRequestError):
        asyncio.run(orchestrator.scrape("a", []))


def test_scrape_batch_keeps_input_order_and_isolation() -> None:
    provider = FakeProvider(
        previews={
            "a": [make_stub("a1", on=date(2025, 6, 1)), make_stub("a2", on=date(2025, 6, 2))],
            "b": [make_stub("b1", on=date(2025, 6, 1))],
        },
        failing={"b"},
    )
    orchestrator = _orchestrator(provider, ["a", "b"])

    results = asyncio.run(orchestrator.scrape_batch({"b": {"b1"}, "a": {"a2"}}))

    assert [result.venue_slug for result in results] == ["b", "a"]
    assert results[0].error == "b is down"
    assert results[1].events is not None
    assert [event.id for event in results[1].events] == ["a2"]


def test_max_concurrency_must_be_positive() -> None:
    with pytest.raises(ValueError, match="max_concurrency"):
        _orchestrator(FakeProvider(), ["a"], max_concurrency=0)
