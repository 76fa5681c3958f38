"""Classify candidate shows and resolve their lineups."""

from __future__ import annotations

from typing import TYPE_CHECKING

from showscout.domain.model import MatchClassification

from .contracts import LineupResolution, ShowMatch
from .normalize import index_by_key, show_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from showscout.domain.model import ExportedShow
    from showscout.domain.ports import ImportPreview

UPDATABLE_FIELDS = ("price", "age_requirement", "is_sold_out", "is_cancelled")


def changed_fields(candidate: ExportedShow, existing: ExportedShow) -> tuple[str, ...]:
    """Mutable listing fields where the candidate carries a different, known value."""

    changes: list[str] = []
    for name in UPDATABLE_FIELDS:
        new_value = getattr(candidate, name)
        if new_value is None:
            continue
        if new_value != getattr(existing, name):
            changes.append(name)
    return tuple(changes)


def classify_show(candidate: ExportedShow, existing: ExportedShow | None) -> ShowMatch:
    if existing is None:
        return ShowMatch(candidate=candidate, classification=MatchClassification.NEW)
    changes = changed_fields(candidate, existing)
    return ShowMatch(
        candidate=candidate,
        existing=existing,
        classification=(
            MatchClassification.EXISTING_UPDATABLE
            if changes
            else MatchClassification.EXISTING_UNCHANGED
        ),
        changed_fields=changes,
    )


def reconcile_shows(
    candidates: Iterable[ExportedShow],
    existing: Iterable[ExportedShow],
) -> list[ShowMatch]:
    """Match each candidate against ``existing`` by (title, event date)."""

    index = index_by_key(existing)
    return [classify_show(candidate, index.get(show_key(candidate))) for candidate in candidates]


def lineups_from_preview(
    candidates: Sequence[ExportedShow],
    preview: ImportPreview,
) -> list[LineupResolution]:
    """Pair the backend's per-show preview entries with the candidates, by position."""

    if len(preview.previews) != len(candidates):
        raise ValueError(
            f"Import preview returned {len(preview.previews)} entries for {len(candidates)} shows"
        )
    return [
        LineupResolution(
            candidate=candidate,
            artists=entry.artists,
            venues=entry.venues,
            warnings=entry.warnings,
            can_import=entry.can_import,
        )
        for candidate, entry in zip(candidates, preview.previews, strict=True)
    ]
