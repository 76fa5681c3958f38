"""Page loaders shared by the providers: plain HTTP and a headless browser."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal, Protocol

import httpx
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from showscout.adapters.http_resilience import ResilientClient
from showscout.config.discovery import BrowserConfig
from showscout.config.http_resilience import DEFAULT_USER_AGENT
from showscout.domain.discovery.errors import ProviderFetchError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Iterable
    from contextlib import AbstractAsyncContextManager

    from playwright.async_api import Browser

    from showscout.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

type WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]

DEFAULT_FETCH_CONCURRENCY = 10


@dataclass(slots=True, frozen=True)
class RenderedPage:
    url: str
    html: str
    value: object = None


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> str: ...

    async def fetch_many(
        self, urls: Iterable[str], *, limit: int = DEFAULT_FETCH_CONCURRENCY
    ) -> dict[str, str]: ...


class BrowserSession(Protocol):
    async def render(
        self,
        url: str,
        *,
        wait_until: WaitUntil = "domcontentloaded",
        wait_for_selector: str | None = None,
        wait_for_function: str | None = None,
        evaluate: str | None = None,
        timeout_ms: int | None = None,
    ) -> RenderedPage: ...


class PageRenderer(Protocol):
    def session(self) -> AbstractAsyncContextManager[BrowserSession]: ...


class HttpPageLoader:
    """Fetches static pages through a ``ResilientClient``."""

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient

    async def fetch(self, url: str) -> str:
        async with self._client_factory(self._config) as client:
            return await self._get_text(client, url)

    async def fetch_many(
        self, urls: Iterable[str], *, limit: int = DEFAULT_FETCH_CONCURRENCY
    ) -> dict[str, str]:
        """Fetch pages concurrently; pages that fail to load are logged and left out."""

        ordered = list(dict.fromkeys(urls))
        pages: list[str | None] = [None] * len(ordered)
        semaphore = asyncio.Semaphore(limit)

        async with self._client_factory(self._config) as client:

            async def run_slot(index: int, url: str) -> None:
                async with semaphore:
                    try:
                        pages[index] = await self._get_text(client, url)
                    except ProviderFetchError as exc:
                        log.warning("Skipping %s: %s", url, exc)

            await asyncio.gather(*(run_slot(index, url) for index, url in enumerate(ordered)))

        return {url: page for url, page in zip(ordered, pages, strict=True) if page is not None}

    async def _get_text(self, client: ResilientClient, url: str) -> str:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ProviderFetchError(
                f"Failed to fetch {url}: {exc.response.status_code} {exc.response.reason_phrase}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderFetchError(f"Failed to fetch {url}: {exc}") from exc
        return response.text


class PlaywrightSession:
    def __init__(self, browser: Browser, config: BrowserConfig) -> None:
        self._browser = browser
        self._config = config

    async def render(
        self,
        url: str,
        *,
        wait_until: WaitUntil = "domcontentloaded",
        wait_for_selector: str | None = None,
        wait_for_function: str | None = None,
        evaluate: str | None = None,
        timeout_ms: int | None = None,
    ) -> RenderedPage:
        page = await self._browser.new_page(user_agent=DEFAULT_USER_AGENT)
        try:
            await page.goto(
                url,
                wait_until=wait_until,
                timeout=timeout_ms or self._config.navigation_timeout_ms,
            )
            if wait_for_selector is not None:
                await page.wait_for_selector(
                    wait_for_selector,
                    state="attached",
                    timeout=self._config.selector_timeout_ms,
                )
            if wait_for_function is not None:
                await page.wait_for_function(
                    wait_for_function,
                    timeout=self._config.selector_timeout_ms,
                    polling=500,
                )
            value = await page.evaluate(evaluate) if evaluate is not None else None
            html = await page.content()
        except PlaywrightError as exc:
            raise ProviderFetchError(f"Failed to render {url}: {exc.message}") from exc
        finally:
            await page.close()
        return RenderedPage(url=url, html=html, value=value)


class BrowserPageLoader:
    """Renders script-driven pages with headless Chromium."""

    def __init__(self, config: BrowserConfig | None = None) -> None:
        self._config = config or BrowserConfig()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[PlaywrightSession]:
        async with async_playwright() as playwright:
            try:
                browser = await playwright.chromium.launch(headless=self._config.headless)
            except PlaywrightError as exc:
                raise ProviderFetchError(f"Could not start browser: {exc.message}") from exc
            try:
                yield PlaywrightSession(browser, self._config)
            finally:
                await browser.close()
