from __future__ import annotations

import pytest

from showscout.config import (
    ConfigurationError,
    MissingConfigurationError,
    int_env_var,
    optional_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")

    assert optional_env_var("EXAMPLE_VAR") is None


def test_int_env_var_parses_and_validates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_INT", raising=False)
    assert int_env_var("EXAMPLE_INT", 5) == 5

    monkeypatch.setenv("EXAMPLE_INT", " 12 ")
    assert int_env_var("EXAMPLE_INT", 5, minimum=1) == 12

    monkeypatch.setenv("EXAMPLE_INT", "0")
    with pytest.raises(ConfigurationError, match=">= 1"):
        int_env_var("EXAMPLE_INT", 5, minimum=1)

    monkeypatch.setenv("EXAMPLE_INT", "many")
    with pytest.raises(ConfigurationError, match="must be an integer"):
        int_env_var("EXAMPLE_INT", 5)
