from __future__ import annotations

import pytest

from showscout.config import (
    LOCAL,
    PRODUCTION,
    STAGE,
    MissingConfigurationError,
    MissingTargetTokenError,
    get_discovery_config,
    get_import_targets,
    get_target_config,
)


def test_target_reads_url_and_token_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHOWSCOUT_STAGE_URL", "https://stage.test/")
    monkeypatch.setenv("SHOWSCOUT_STAGE_TOKEN", "secret")

    config = get_target_config(STAGE)

    assert config.base_url == "https://stage.test/"
    assert config.require_token() == "secret"
    assert config.resilience.base_url == "https://stage.test"
    assert config.resilience.cache is None


def test_known_targets_fall_back_to_default_urls(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHOWSCOUT_LOCAL_URL", raising=False)

    assert get_target_config(LOCAL).base_url == "http://localhost:8080"


def test_unknown_target_needs_a_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHOWSCOUT_QA_URL", raising=False)

    with pytest.raises(MissingConfigurationError, match="SHOWSCOUT_QA_URL"):
        get_target_config("qa")


def test_missing_token_names_the_target(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHOWSCOUT_PRODUCTION_TOKEN", raising=False)

    with pytest.raises(MissingTargetTokenError, match="Production API token not configured"):
        get_target_config(PRODUCTION).require_token()


def test_import_targets_are_stage_then_production() -> None:
    assert list(get_import_targets()) == [STAGE, PRODUCTION]


def test_backend_retries_only_reads(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHOWSCOUT_STAGE_URL", raising=False)

    retry = get_target_config(STAGE).resilience.retry

    assert retry is not None
    assert "POST" not in retry.allowed_methods


def test_discovery_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHOWSCOUT_MAX_CONCURRENCY", "2")
    monkeypatch.setenv("SHOWSCOUT_PORT", "4000")
    monkeypatch.setenv("SHOWSCOUT_BROWSER_HEADLESS", "false")

    config = get_discovery_config()

    assert config.max_concurrency == 2
    assert config.port == 4000
    assert not config.browser.headless
