"""Errors raised while discovering events."""

from __future__ import annotations


class DiscoveryError(RuntimeError):
    """Base class for discovery failures."""


class InvalidRequestError(DiscoveryError):
    """Raised when a caller passes unusable input (for example, no event ids)."""


class UnknownVenueError(DiscoveryError):
    def __init__(self, slug: str) -> None:
        super().__init__(f"Unknown venue: {slug}")
        self.slug = slug


class UnsupportedProviderError(DiscoveryError):
    def __init__(self, provider_type: str) -> None:
        super().__init__(f"No provider for type: {provider_type}")
        self.provider_type = provider_type


class ProviderError(DiscoveryError):
    """Raised by providers; carries the venue it happened for when known."""

    def __init__(self, message: str, *, venue_slug: str | None = None) -> None:
        super().__init__(message)
        self.venue_slug = venue_slug


class ProviderFetchError(ProviderError):
    """Network failure or non-success response while loading a source page."""


class ProviderParseError(ProviderError):
    """The source page did not have the expected shape."""


class NoEventsFoundError(ProviderError):
    """A preview produced no extractable events."""
