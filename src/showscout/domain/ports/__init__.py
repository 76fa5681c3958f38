"""Domain ports."""

from __future__ import annotations

from .backend import (
    BulkImportOutcome,
    EntitySuggestion,
    ImportPreview,
    ImportPreviewSummary,
    RemoteBackend,
    RemoteBackendError,
    ShowImportOutcome,
    ShowImportPreview,
    ShowListing,
)
from .discovery import DiscoveryProvider

__all__ = [
    "BulkImportOutcome",
    "DiscoveryProvider",
    "EntitySuggestion",
    "ImportPreview",
    "ImportPreviewSummary",
    "RemoteBackend",
    "RemoteBackendError",
    "ShowImportOutcome",
    "ShowImportPreview",
    "ShowListing",
]
