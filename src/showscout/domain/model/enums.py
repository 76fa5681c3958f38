"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ProviderType(StrEnum):
    TICKETWEB = "ticketweb"
    JSONLD = "jsonld"
    WIX = "wix"
    SEETICKETS = "seetickets"
    EMPTYBOTTLE = "emptybottle"


class CurationStep(StrEnum):
    """Steps of one curation pass, in navigation order."""

    VENUES = "venues"
    PREVIEW = "preview"
    IMPORT = "import"


class MatchClassification(StrEnum):
    NEW = "new"
    EXISTING_UNCHANGED = "existing_unchanged"
    EXISTING_UPDATABLE = "existing_updatable"


class SetType(StrEnum):
    HEADLINER = "headliner"
    OPENER = "opener"


class ShowStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    PRIVATE = "private"
