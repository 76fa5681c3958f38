"""Discovery providers and the default registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from showscout.adapters.pages import BrowserPageLoader, HttpPageLoader
from showscout.domain.discovery import ProviderRegistry
from showscout.domain.model import ProviderType

from .emptybottle import EmptyBottleProvider
from .jsonld import JsonLdProvider
from .seetickets import SeeTicketsProvider
from .ticketweb import TicketWebProvider
from .wix import WixProvider

if TYPE_CHECKING:
    from showscout.adapters.pages import PageFetcher, PageRenderer
    from showscout.config.discovery import DiscoveryConfig


def build_default_registry(
    config: DiscoveryConfig,
    *,
    pages: PageFetcher | None = None,
    renderer: PageRenderer | None = None,
) -> ProviderRegistry:
    """Register one provider per ``ProviderType``, sharing the page loaders."""

    fetcher = pages or HttpPageLoader(config.pages)
    browser = renderer or BrowserPageLoader(config.browser)

    registry = ProviderRegistry()
    registry.register(
        ProviderType.TICKETWEB,
        TicketWebProvider(browser, detail_timeout_ms=config.browser.detail_timeout_ms),
    )
    registry.register(ProviderType.JSONLD, JsonLdProvider(fetcher))
    registry.register(ProviderType.WIX, WixProvider(fetcher))
    registry.register(ProviderType.SEETICKETS, SeeTicketsProvider(browser))
    registry.register(ProviderType.EMPTYBOTTLE, EmptyBottleProvider(browser))
    return registry


__all__ = [
    "EmptyBottleProvider",
    "JsonLdProvider",
    "SeeTicketsProvider",
    "TicketWebProvider",
    "WixProvider",
    "build_default_registry",
]
