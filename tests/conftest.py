from __future__ import annotations

import os
from pathlib import Path  # noqa: TC003

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a developer's ``SHOWSCOUT_*`` settings and page cache out of the tests."""

    for name in list(os.environ):
        if name.startswith("SHOWSCOUT_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("SHOWSCOUT_CACHE_DIR", str(tmp_path / "cache"))
