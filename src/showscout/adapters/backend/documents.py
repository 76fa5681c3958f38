"""JSON documents exchanged with operators: import requests and scraped event lists."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from .schema import DataImportPayload, ScrapedEventPayload
from .translator import (
    data_import_payload,
    data_import_request,
    scraped_event_from_payload,
    scraped_event_payload,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from showscout.domain.model import DataImportRequest, ScrapedEvent

_SCRAPED_EVENTS = TypeAdapter(list[ScrapedEventPayload])


class DocumentError(ValueError):
    """Raised when an operator-supplied document cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path


def read_import_request(path: Path) -> DataImportRequest:
    """Read ``{shows?, artists?, venues?, dryRun?}`` in the backend's export format."""

    try:
        payload = DataImportPayload.model_validate_json(path.read_bytes())
    except OSError as exc:
        raise DocumentError(path, exc.strerror or str(exc)) from exc
    except ValidationError as exc:
        raise DocumentError(path, f"invalid import document ({exc.error_count()} errors)") from exc
    return data_import_request(payload)


def write_import_request(request: DataImportRequest, path: Path) -> None:
    document = data_import_payload(request).model_dump(by_alias=True, exclude_none=True)
    path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")


def read_scraped_events(path: Path) -> list[ScrapedEvent]:
    try:
        payloads = _SCRAPED_EVENTS.validate_json(path.read_bytes())
    except OSError as exc:
        raise DocumentError(path, exc.strerror or str(exc)) from exc
    except ValidationError as exc:
        raise DocumentError(path, f"invalid event list ({exc.error_count()} errors)") from exc
    try:
        return [scraped_event_from_payload(payload) for payload in payloads]
    except ValueError as exc:
        raise DocumentError(path, str(exc)) from exc


def dump_scraped_events(events: Iterable[ScrapedEvent]) -> str:
    document = [
        scraped_event_payload(event).model_dump(by_alias=True, exclude_none=True)
        for event in events
    ]
    return json.dumps(document, indent=2) + "\n"


def write_scraped_events(events: Iterable[ScrapedEvent], path: Path) -> None:
    path.write_text(dump_scraped_events(events), encoding="utf-8")
