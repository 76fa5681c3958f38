from __future__ import annotations

import asyncio
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from showscout.adapters.http_resilience import ResilienceConfig, ResilientClient
from showscout.adapters.pages import HttpPageLoader
from showscout.domain.discovery import ProviderFetchError

CONFIG = ResilienceConfig(name="venue-pages", retry=None, cache=None)


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    return factory


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/missing":
        return httpx.Response(404, text="not here")
    return httpx.Response(200, text=f"<html>{request.url.path}</html>")


def test_fetch_returns_page_text() -> None:
    loader = HttpPageLoader(CONFIG, client_factory=_make_client_factory(_handler))

    assert asyncio.run(loader.fetch("https://venue.example/events")) == "<html>/events</html>"


def test_fetch_raises_fetch_error_on_status() -> None:
    loader = HttpPageLoader(CONFIG, client_factory=_make_client_factory(_handler))

    with pytest.raises(ProviderFetchError, match="404"):
        asyncio.run(loader.fetch("https://venue.example/missing"))


def test_fetch_many_skips_failures_and_duplicates() -> None:
    loader = HttpPageLoader(CONFIG, client_factory=_make_client_factory(_handler))
    urls = [
        "https://venue.example/a",
        "https://venue.example/missing",
        "https://venue.example/a",
        "https://venue.example/b",
    ]

    pages = asyncio.run(loader.fetch_many(urls, limit=2))

    assert list(pages) == ["https://venue.example/a", "https://venue.example/b"]
