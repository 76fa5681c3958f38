"""Venue catalogue loading."""

from __future__ import annotations

import tomllib
from collections import Counter
from pathlib import Path

from showscout.domain.model import ProviderType, VenueCity, VenueConfig

from .env import optional_env_var
from .errors import ConfigurationError

VENUES_FILE_ENV = "SHOWSCOUT_VENUES_FILE"

DEFAULT_VENUES: tuple[VenueConfig, ...] = (
    VenueConfig(
        slug="valley-bar",
        name="Valley Bar",
        provider_type=ProviderType.TICKETWEB,
        url="https://www.valleybarphx.com/calendar/",
        city="Phoenix",
        state="AZ",
    ),
    VenueConfig(
        slug="crescent-ballroom",
        name="Crescent Ballroom",
        provider_type=ProviderType.TICKETWEB,
        url="https://www.crescentphx.com/calendar/",
        city="Phoenix",
        state="AZ",
    ),
    VenueConfig(
        slug="the-van-buren",
        name="The Van Buren",
        provider_type=ProviderType.JSONLD,
        url="https://thevanburenphx.com/shows",
        city="Phoenix",
        state="AZ",
    ),
    VenueConfig(
        slug="celebrity-theatre",
        name="Celebrity Theatre",
        provider_type=ProviderType.WIX,
        url="https://www.celebritytheatre.com",
        city="Phoenix",
        state="AZ",
        sitemap_url="https://www.celebritytheatre.com/event-pages-sitemap.xml",
    ),
    VenueConfig(
        slug="arizona-financial-theatre",
        name="Arizona Financial Theatre",
        provider_type=ProviderType.JSONLD,
        url="https://www.arizonafinancialtheatre.com/shows",
        city="Phoenix",
        state="AZ",
    ),
    VenueConfig(
        slug="the-rebel-lounge",
        name="The Rebel Lounge",
        provider_type=ProviderType.SEETICKETS,
        url="https://therebellounge.com/events/",
        city="Phoenix",
        state="AZ",
    ),
    VenueConfig(
        slug="empty-bottle",
        name="Empty Bottle",
        provider_type=ProviderType.EMPTYBOTTLE,
        url="https://www.emptybottle.com/",
        city="Chicago",
        state="IL",
    ),
)


def load_venues(path: Path | None = None) -> tuple[VenueConfig, ...]:
    """Return the venue catalogue.

    ``path`` (or ``$SHOWSCOUT_VENUES_FILE``) points at a TOML file with one
    ``[[venues]]`` table per venue; without either, the built-in catalogue is used.
    """

    if path is None:
        configured = optional_env_var(VENUES_FILE_ENV)
        if configured is None:
            return DEFAULT_VENUES
        path = Path(configured)

    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Venue file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid venue file {path}: {exc}") from exc

    entries = document.get("venues")
    if not isinstance(entries, list) or not entries:
        raise ConfigurationError(f"Venue file {path} defines no [[venues]] tables")

    venues = tuple(_parse_venue(entry, path) for entry in entries)
    duplicates = [slug for slug, count in Counter(v.slug for v in venues).items() if count > 1]
    if duplicates:
        raise ConfigurationError(f"Duplicate venue slugs in {path}: {', '.join(duplicates)}")
    return venues


def _parse_venue(entry: object, path: Path) -> VenueConfig:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Venue entries in {path} must be tables")
    required = ("slug", "name", "provider_type", "url", "city", "state")
    missing = [key for key in required if not str(entry.get(key) or "").strip()]
    if missing:
        raise ConfigurationError(f"Venue entry in {path} is missing: {', '.join(missing)}")
    try:
        provider_type = ProviderType(entry["provider_type"])
    except ValueError as exc:
        raise ConfigurationError(
            f"Venue {entry['slug']} has unknown provider_type {entry['provider_type']!r}"
        ) from exc
    sitemap_url = entry.get("sitemap_url")
    return VenueConfig(
        slug=str(entry["slug"]),
        name=str(entry["name"]),
        provider_type=provider_type,
        url=str(entry["url"]),
        city=str(entry["city"]),
        state=str(entry["state"]),
        sitemap_url=str(sitemap_url) if sitemap_url else None,
    )


def venue_cities(venues: tuple[VenueConfig, ...] | list[VenueConfig]) -> list[VenueCity]:
    """Group venues by city and state, sorted by city name."""

    counts = Counter((venue.city, venue.state) for venue in venues)
    return [
        VenueCity(city=city, state=state, venue_count=count)
        for (city, state), count in sorted(counts.items())
    ]
