from __future__ import annotations

from showscout.adapters.providers import build_default_registry
from showscout.config import DiscoveryConfig
from showscout.domain.model import ProviderType
from tests.support.pages import FakePages, FakeRenderer


def test_every_provider_type_is_registered() -> None:
    registry = build_default_registry(DiscoveryConfig(), pages=FakePages(), renderer=FakeRenderer())

    assert set(registry) == set(ProviderType)
