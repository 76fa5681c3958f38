"""Statically configured event sources."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import ProviderType


@dataclass(slots=True, frozen=True, kw_only=True)
class VenueConfig:
    """A venue whose listings are read through one provider type.

    ``url`` is the public listing page; ``sitemap_url`` is only used by providers
    that enumerate event pages from a sitemap instead of a listing page.
    """

    slug: str
    name: str
    provider_type: ProviderType
    url: str
    city: str
    state: str
    sitemap_url: str | None = None


@dataclass(slots=True, frozen=True)
class VenueCity:
    city: str
    state: str
    venue_count: int
