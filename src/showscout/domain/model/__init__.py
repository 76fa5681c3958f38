"""Domain model for venue discovery, curation and import."""

from __future__ import annotations

from .enums import CurationStep, MatchClassification, ProviderType, SetType, ShowStatus
from .events import BatchPreviewResult, BatchScrapeResult, EventStub, ImportStatus, ScrapedEvent
from .exported import (
    CombinedImportResult,
    DataImportRequest,
    DataImportResult,
    DiscoveryImportResult,
    EntityImportStats,
    ExportedArtist,
    ExportedShow,
    ExportedVenue,
    ShowArtist,
    SocialLinks,
)
from .venues import VenueCity, VenueConfig

__all__ = [
    "BatchPreviewResult",
    "BatchScrapeResult",
    "CombinedImportResult",
    "CurationStep",
    "DataImportRequest",
    "DataImportResult",
    "DiscoveryImportResult",
    "EntityImportStats",
    "EventStub",
    "ExportedArtist",
    "ExportedShow",
    "ExportedVenue",
    "ImportStatus",
    "MatchClassification",
    "ProviderType",
    "ScrapedEvent",
    "SetType",
    "ShowArtist",
    "ShowStatus",
    "SocialLinks",
    "VenueCity",
    "VenueConfig",
]
