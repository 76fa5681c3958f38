"""Local storage locations."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "showscout"
HTTP_CACHE_FILENAME: Final[str] = "http-cache.sqlite"


def get_cache_dir() -> Path:
    """Return the directory for disposable cached data."""

    env_dir = os.getenv("SHOWSCOUT_CACHE_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()

    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_CACHE_HOME")
        base_path = Path(base) if base else (Path.home() / ".cache")

    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_http_cache_path() -> Path:
    """Return the page cache database path, creating its directory."""

    cache_dir = get_cache_dir()
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir / HTTP_CACHE_FILENAME
