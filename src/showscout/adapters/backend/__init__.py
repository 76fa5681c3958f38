"""Public interface for the show backend adapter."""

from __future__ import annotations

from .client import BackendAPIError, BackendClient
from .documents import (
    DocumentError,
    dump_scraped_events,
    read_import_request,
    read_scraped_events,
    write_import_request,
    write_scraped_events,
)

__all__ = [
    "BackendAPIError",
    "BackendClient",
    "DocumentError",
    "dump_scraped_events",
    "read_import_request",
    "read_scraped_events",
    "write_import_request",
    "write_scraped_events",
]
