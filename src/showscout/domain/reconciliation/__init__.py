"""Matching candidate shows against target backends."""

from __future__ import annotations

from .contracts import LineupResolution, ShowKey, ShowMatch, TargetReconciliation
from .engine import ReconciliationEngine, check_import_statuses, fetch_inventory
from .normalize import index_by_key, show_date, show_key
from .resolve import changed_fields, classify_show, lineups_from_preview, reconcile_shows

__all__ = [
    "LineupResolution",
    "ReconciliationEngine",
    "ShowKey",
    "ShowMatch",
    "TargetReconciliation",
    "changed_fields",
    "check_import_statuses",
    "classify_show",
    "fetch_inventory",
    "index_by_key",
    "lineups_from_preview",
    "reconcile_shows",
    "show_date",
    "show_key",
]
