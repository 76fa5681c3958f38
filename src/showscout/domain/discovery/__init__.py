"""Event discovery: provider registry and orchestrator."""

from __future__ import annotations

from .errors import (
    DiscoveryError,
    InvalidRequestError,
    NoEventsFoundError,
    ProviderError,
    ProviderFetchError,
    ProviderParseError,
    UnknownVenueError,
    UnsupportedProviderError,
)
from .orchestrator import DEFAULT_MAX_CONCURRENCY, DiscoveryOrchestrator
from .registry import GuardedProvider, ProviderRegistry

__all__ = [
    "DEFAULT_MAX_CONCURRENCY",
    "DiscoveryError",
    "DiscoveryOrchestrator",
    "GuardedProvider",
    "InvalidRequestError",
    "NoEventsFoundError",
    "ProviderError",
    "ProviderFetchError",
    "ProviderParseError",
    "ProviderRegistry",
    "UnknownVenueError",
    "UnsupportedProviderError",
]
