from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from showscout.adapters.backend import (
    dump_scraped_events,
    read_import_request,
    read_scraped_events,
    write_import_request,
    write_scraped_events,
)
from showscout.app import (
    build_orchestrator,
    discover,
    import_data,
    import_scraped_events,
    preview_venues,
    publish_new_shows,
    reconcile,
    scrape_venue,
    shows_from_scraped,
    sync_shows,
)
from showscout.config import (
    ALL_TARGETS,
    configure_logging,
    get_discovery_config,
    load_venues,
    venue_cities,
)
from showscout.domain.model import DataImportRequest, MatchClassification

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from showscout.domain.model import CombinedImportResult
    from showscout.domain.reconciliation import TargetReconciliation

log = logging.getLogger(__name__)


def _add_target(parser: argparse.ArgumentParser, *, required: bool = True) -> None:
    parser.add_argument(
        "--target",
        type=str,
        required=required,
        help=f"Target backend name, or '{ALL_TARGETS}' for every configured target",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Discover, curate and import venue shows")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the discovery HTTP service")
    serve.add_argument("--host", type=str, help="Interface to bind (defaults to config)")
    serve.add_argument("--port", type=int, help="Port to bind (defaults to config)")

    venues = subparsers.add_parser("venues", help="List configured venues")
    venues.add_argument("--cities", action="store_true", help="Group venues by city instead")

    preview = subparsers.add_parser("preview", help="Preview upcoming events of venues")
    preview.add_argument("slugs", nargs="+", help="Venue slugs")

    scrape = subparsers.add_parser("scrape", help="Scrape full details of selected events")
    scrape.add_argument("slug", help="Venue slug")
    scrape.add_argument("--ids", nargs="+", required=True, help="Event ids from a preview")
    scrape.add_argument("--output", type=Path, help="Write the scraped events to this JSON file")

    discover_cmd = subparsers.add_parser(
        "discover",
        help="Preview venues, select every upcoming event and scrape them",
    )
    discover_cmd.add_argument("slugs", nargs="+", help="Venue slugs")
    discover_cmd.add_argument("--output", type=Path, help="Write scraped events to this file")
    _add_target(discover_cmd, required=False)
    discover_cmd.add_argument("--dry-run", action="store_true", help="Ask targets not to persist")

    translate = subparsers.add_parser(
        "translate", help="Turn a scraped event file into an import document"
    )
    translate.add_argument("file", type=Path, help="Scraped events JSON file")
    translate.add_argument("--output", type=Path, required=True, help="Import document to write")

    reconcile_cmd = subparsers.add_parser(
        "reconcile", help="Classify shows against each target's inventory"
    )
    reconcile_cmd.add_argument("file", type=Path, help="Import document or scraped events file")
    reconcile_cmd.add_argument(
        "--from-scraped",
        action="store_true",
        help="Read the file as scraped events and translate them to shows first",
    )
    reconcile_cmd.add_argument(
        "--publish",
        action="store_true",
        help="Create the shows that are new on each target through its bulk import",
    )
    _add_target(reconcile_cmd)

    import_cmd = subparsers.add_parser("import", help="Import shows, artists and venues")
    import_cmd.add_argument("file", type=Path, help="Import document (backend export format)")
    _add_target(import_cmd)
    import_cmd.add_argument("--dry-run", action="store_true", help="Ask targets not to persist")

    import_events = subparsers.add_parser("import-events", help="Import scraped events")
    import_events.add_argument("file", type=Path, help="Scraped events JSON file")
    _add_target(import_events)
    import_events.add_argument("--dry-run", action="store_true", help="Ask targets not to persist")

    sync = subparsers.add_parser(
        "sync-shows", help="Copy shows missing on the targets from the local backend"
    )
    _add_target(sync)
    sync.add_argument("--dry-run", action="store_true", help="Ask targets not to persist")

    return parser.parse_args(list(argv))


def _log_combined(result: CombinedImportResult[object]) -> None:
    for name, outcome in result.results.items():
        if outcome is None:
            log.error("%s: failed: %s", name, result.errors.get(name, "unknown error"))
        else:
            log.info("%s: %s", name, outcome)


def _log_reconciliation(reports: dict[str, TargetReconciliation]) -> None:
    for name, report in reports.items():
        if report.error is not None:
            log.error("%s: could not reconcile: %s", name, report.error)
            continue
        log.info(
            "%s: %d new, %d unchanged, %d updatable",
            name,
            len(report.with_classification(MatchClassification.NEW)),
            len(report.with_classification(MatchClassification.EXISTING_UNCHANGED)),
            len(report.with_classification(MatchClassification.EXISTING_UPDATABLE)),
        )
        for match in report.with_classification(MatchClassification.EXISTING_UPDATABLE):
            log.info(
                "  %s (%s): %s changed",
                match.candidate.title,
                match.candidate.event_date,
                ", ".join(match.changed_fields),
            )


def _serve(args: argparse.Namespace) -> None:
    import uvicorn  # noqa: PLC0415

    from showscout.ui.server import create_app  # noqa: PLC0415

    config = get_discovery_config()
    if args.host is not None:
        config = replace(config, host=args.host)
    if args.port is not None:
        config = replace(config, port=args.port)
    app = create_app(build_orchestrator(config))
    uvicorn.run(app, host=config.host, port=config.port)


def _list_venues(args: argparse.Namespace) -> None:
    venues = load_venues()
    if args.cities:
        for city in venue_cities(venues):
            log.info("%s, %s: %d venues", city.city, city.state, city.venue_count)
        return
    for venue in venues:
        log.info(
            "%s  %s (%s, %s) [%s]",
            venue.slug,
            venue.name,
            venue.city,
            venue.state,
            venue.provider_type,
        )


def _preview(args: argparse.Namespace) -> None:
    for result in preview_venues(args.slugs):
        if result.events is None:
            log.error("%s: %s", result.venue_slug, result.error)
            continue
        log.info("%s: %d events", result.venue_slug, len(result.events))
        for stub in result.events:
            log.info("  %s  %s  %s", stub.id, stub.date.isoformat(), stub.title)


def _scrape(args: argparse.Namespace) -> None:
    events = scrape_venue(args.slug, args.ids)
    log.info("%s: scraped %d events", args.slug, len(events))
    if args.output is not None:
        write_scraped_events(events, args.output)
        log.info("Wrote %s", args.output)
    else:
        sys.stdout.write(dump_scraped_events(events))


def _discover(args: argparse.Namespace) -> None:
    run = discover(args.slugs, target=args.target, dry_run=args.dry_run)
    for result in (*run.previews, *run.scrapes):
        if result.error is not None:
            log.error("%s: %s", result.venue_slug, result.error)
    log.info("Collected %d events", len(run.events))
    if args.output is not None:
        write_scraped_events(run.events, args.output)
        log.info("Wrote %s", args.output)
    for name, statuses in run.statuses.items():
        existing = sum(1 for status in statuses.values() if status.exists)
        log.info("%s: %d of %d events already imported", name, existing, len(run.events))
    if run.imports is not None:
        _log_combined(run.imports)


def _translate(args: argparse.Namespace) -> None:
    shows = shows_from_scraped(read_scraped_events(args.file))
    write_import_request(DataImportRequest(shows=tuple(shows)), args.output)
    log.info("Wrote %d shows to %s", len(shows), args.output)


def _reconcile(args: argparse.Namespace) -> None:
    if args.from_scraped:
        shows = shows_from_scraped(read_scraped_events(args.file))
    else:
        shows = list(read_import_request(args.file).shows)
    if args.publish:
        reports, published = publish_new_shows(shows, args.target)
        _log_reconciliation(reports)
        _log_combined(published)
    else:
        _log_reconciliation(reconcile(shows, args.target))


def _import(args: argparse.Namespace) -> None:
    request = read_import_request(args.file)
    if request.is_empty:
        raise ValueError(f"{args.file}: nothing to import")
    _log_combined(import_data(request, args.target, dry_run=args.dry_run or None))


def _import_events(args: argparse.Namespace) -> None:
    events = read_scraped_events(args.file)
    if not events:
        raise ValueError(f"{args.file}: nothing to import")
    _log_combined(import_scraped_events(events, args.target, dry_run=args.dry_run))


def _sync_shows(args: argparse.Namespace) -> None:
    result = sync_shows(args.target, dry_run=args.dry_run)
    log.info("Exported %d shows from the local backend", result.exported)
    _log_reconciliation(result.reconciliation)
    _log_combined(result.imports)


_COMMANDS = {
    "serve": _serve,
    "venues": _list_venues,
    "preview": _preview,
    "scrape": _scrape,
    "discover": _discover,
    "translate": _translate,
    "reconcile": _reconcile,
    "import": _import,
    "import-events": _import_events,
    "sync-shows": _sync_shows,
}


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(
        level=logging.DEBUG if parsed_args.verbose else logging.INFO, force=parsed_args.verbose
    )

    try:
        _COMMANDS[parsed_args.command](parsed_args)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
