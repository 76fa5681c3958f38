from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from showscout.adapters.pages import RenderedPage
from showscout.domain.discovery import ProviderFetchError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def read_fixture(name: str) -> str:
    return (DATA_DIR / name).read_text(encoding="utf-8")


@dataclass
class FakePages:
    """``PageFetcher`` serving canned markup by URL; unknown URLs fail like a 404."""

    pages: dict[str, str] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)

    async def fetch(self, url: str) -> str:
        self.requested.append(url)
        try:
            return self.pages[url]
        except KeyError:
            raise ProviderFetchError(f"404 for {url}") from None

    async def fetch_many(self, urls: Iterable[str], *, limit: int = 10) -> dict[str, str]:
        loaded: dict[str, str] = {}
        for url in urls:
            self.requested.append(url)
            if url in self.pages:
                loaded[url] = self.pages[url]
        return loaded


@dataclass
class FakeSession:
    pages: dict[str, RenderedPage]
    rendered: list[str]

    async def render(
        self,
        url: str,
        *,
        wait_until: str = "domcontentloaded",
        wait_for_selector: str | None = None,
        wait_for_function: str | None = None,
        evaluate: str | None = None,
        timeout_ms: int | None = None,
    ) -> RenderedPage:
        self.rendered.append(url)
        try:
            return self.pages[url]
        except KeyError:
            raise ProviderFetchError(f"Timed out rendering {url}") from None


@dataclass
class FakeRenderer:
    """``PageRenderer`` whose sessions replay canned rendered pages."""

    pages: dict[str, RenderedPage] = field(default_factory=dict)
    rendered: list[str] = field(default_factory=list)
    sessions: int = 0

    def add(self, url: str, html: str = "", value: object = None) -> None:
        self.pages[url] = RenderedPage(url=url, html=html, value=value)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[FakeSession]:
        self.sessions += 1
        yield FakeSession(self.pages, self.rendered)
