"""Port for the remote show backends (read, preview and write calls)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from showscout.domain.model import (
        DataImportRequest,
        DataImportResult,
        DiscoveryImportResult,
        ExportedShow,
        ImportStatus,
        ScrapedEvent,
    )


@dataclass(slots=True, frozen=True)
class ShowListing:
    shows: list[ExportedShow]
    total: int


@dataclass(slots=True, frozen=True, kw_only=True)
class EntitySuggestion:
    """Backend's identity decision for one artist or venue of a previewed show."""

    name: str
    existing_id: int | None = None
    will_create: bool = False
    city: str | None = None
    state: str | None = None
    position: int | None = None
    set_type: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class ShowImportPreview:
    title: str
    event_date: str
    venues: tuple[EntitySuggestion, ...] = ()
    artists: tuple[EntitySuggestion, ...] = ()
    warnings: tuple[str, ...] = ()
    can_import: bool = False


@dataclass(slots=True, frozen=True, kw_only=True)
class ImportPreviewSummary:
    total_shows: int = 0
    new_artists: int = 0
    new_venues: int = 0
    existing_artists: int = 0
    existing_venues: int = 0
    warning_count: int = 0
    can_import_all: bool = False


@dataclass(slots=True, frozen=True)
class ImportPreview:
    previews: list[ShowImportPreview] = field(default_factory=list)
    summary: ImportPreviewSummary = field(default_factory=ImportPreviewSummary)


@dataclass(slots=True, frozen=True, kw_only=True)
class ShowImportOutcome:
    success: bool
    title: str | None = None
    error: str | None = None


@dataclass(slots=True, frozen=True)
class BulkImportOutcome:
    outcomes: list[ShowImportOutcome] = field(default_factory=list)
    success_count: int = 0
    error_count: int = 0


@runtime_checkable
class RemoteBackend(Protocol):
    """One target backend. Failures raise ``BackendAPIError``; nothing is retried on write."""

    name: str

    async def list_shows(
        self,
        *,
        limit: int = 500,
        offset: int = 0,
        status: str = "all",
        from_date: date | None = None,
        city: str | None = None,
        state: str | None = None,
    ) -> ShowListing: ...

    async def preview_import(self, shows: Sequence[ExportedShow]) -> ImportPreview: ...

    async def confirm_import(self, shows: Sequence[ExportedShow]) -> BulkImportOutcome: ...

    async def import_data(self, request: DataImportRequest) -> DataImportResult: ...

    async def import_events(
        self, events: Sequence[ScrapedEvent], *, dry_run: bool = False
    ) -> DiscoveryImportResult: ...

    async def check_events(self, events: Sequence[ScrapedEvent]) -> dict[str, ImportStatus]: ...


class RemoteBackendError(RuntimeError):
    """A backend call failed; ``status`` is the HTTP status when a response arrived."""

    def __init__(self, message: str, *, target: str, status: int | None = None) -> None:
        super().__init__(message)
        self.target = target
        self.status = status


__all__ = [
    "BulkImportOutcome",
    "EntitySuggestion",
    "ImportPreview",
    "ImportPreviewSummary",
    "RemoteBackend",
    "RemoteBackendError",
    "ShowImportOutcome",
    "ShowImportPreview",
    "ShowListing",
]
