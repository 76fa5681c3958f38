from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from showscout.config import storage


def test_get_cache_dir_prefers_explicit_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    custom = tmp_path / "custom-cache"
    monkeypatch.setenv("SHOWSCOUT_CACHE_DIR", str(custom))

    assert storage.get_cache_dir() == custom.resolve()


def test_get_cache_dir_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("SHOWSCOUT_CACHE_DIR")
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))

    assert storage.get_cache_dir() == (tmp_path / "xdg" / storage.APP_DIR_NAME).resolve()


def test_get_http_cache_path_creates_directory(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("SHOWSCOUT_CACHE_DIR", str(tmp_path / "cache-dir"))

    path = storage.get_http_cache_path()

    assert path == (tmp_path / "cache-dir" / storage.HTTP_CACHE_FILENAME).resolve()
    assert path.parent.exists()
