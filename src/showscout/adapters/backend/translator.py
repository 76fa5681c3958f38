"""Translate between backend wire payloads and domain records."""

from __future__ import annotations

import base64
from datetime import date, datetime

from showscout.domain.model import (
    DataImportRequest,
    DataImportResult,
    DiscoveryImportResult,
    EntityImportStats,
    ExportedArtist,
    ExportedShow,
    ExportedVenue,
    ImportStatus,
    ScrapedEvent,
    SetType,
    ShowArtist,
    SocialLinks,
)
from showscout.domain.ports import (
    BulkImportOutcome,
    EntitySuggestion,
    ImportPreview,
    ImportPreviewSummary,
    ShowImportOutcome,
    ShowImportPreview,
)

from .schema import (
    BulkConfirmResponse,
    BulkPreviewResponse,
    DataImportPayload,
    DataImportResponse,
    DiscoveryImportResponse,
    EntityImportStatsPayload,
    EventCheckResponse,
    ExportedArtistPayload,
    ExportedShowPayload,
    ExportedVenuePayload,
    PreviewEntity,
    ScrapedEventPayload,
    ShowArtistPayload,
    SocialFields,
)


def _social(payload: SocialFields) -> SocialLinks:
    return SocialLinks(
        instagram=payload.instagram,
        facebook=payload.facebook,
        twitter=payload.twitter,
        youtube=payload.youtube,
        spotify=payload.spotify,
        soundcloud=payload.soundcloud,
        bandcamp=payload.bandcamp,
        website=payload.website,
    )


def _social_fields(links: SocialLinks) -> dict[str, str | None]:
    return {
        "instagram": links.instagram,
        "facebook": links.facebook,
        "twitter": links.twitter,
        "youtube": links.youtube,
        "spotify": links.spotify,
        "soundcloud": links.soundcloud,
        "bandcamp": links.bandcamp,
        "website": links.website,
    }


def _set_type(value: str) -> SetType | str:
    try:
        return SetType(value)
    except ValueError:
        return value


def venue_from_payload(payload: ExportedVenuePayload) -> ExportedVenue:
    return ExportedVenue(
        name=payload.name,
        address=payload.address,
        city=payload.city,
        state=payload.state,
        zipcode=payload.zipcode,
        verified=payload.verified,
        social=_social(payload),
    )


def artist_from_payload(payload: ExportedArtistPayload) -> ExportedArtist:
    return ExportedArtist(
        name=payload.name,
        city=payload.city,
        state=payload.state,
        bandcamp_embed_url=payload.bandcamp_embed_url,
        social=_social(payload),
    )


def show_from_payload(payload: ExportedShowPayload) -> ExportedShow:
    return ExportedShow(
        title=payload.title,
        event_date=payload.event_date,
        city=payload.city,
        state=payload.state,
        price=payload.price,
        age_requirement=payload.age_requirement,
        description=payload.description,
        status=payload.status,
        is_sold_out=payload.is_sold_out,
        is_cancelled=payload.is_cancelled,
        venues=tuple(venue_from_payload(venue) for venue in payload.venues),
        artists=tuple(
            ShowArtist(
                name=artist.name,
                position=artist.position,
                set_type=_set_type(artist.set_type),
            )
            for artist in payload.artists
        ),
    )


def venue_to_payload(venue: ExportedVenue) -> ExportedVenuePayload:
    return ExportedVenuePayload(
        name=venue.name,
        address=venue.address,
        city=venue.city,
        state=venue.state,
        zipcode=venue.zipcode,
        verified=venue.verified,
        **_social_fields(venue.social),
    )


def artist_to_payload(artist: ExportedArtist) -> ExportedArtistPayload:
    return ExportedArtistPayload(
        name=artist.name,
        city=artist.city,
        state=artist.state,
        bandcamp_embed_url=artist.bandcamp_embed_url,
        **_social_fields(artist.social),
    )


def show_to_payload(show: ExportedShow) -> ExportedShowPayload:
    return ExportedShowPayload(
        title=show.title,
        event_date=show.event_date,
        city=show.city,
        state=show.state,
        price=show.price,
        age_requirement=show.age_requirement,
        description=show.description,
        status=str(show.status),
        is_sold_out=show.is_sold_out,
        is_cancelled=show.is_cancelled,
        venues=[venue_to_payload(venue) for venue in show.venues],
        artists=[
            ShowArtistPayload(
                name=artist.name, position=artist.position, set_type=str(artist.set_type)
            )
            for artist in show.artists
        ],
    )


def show_to_text(show: ExportedShow) -> str:
    """Base64 show document as accepted by the bulk import preview and confirm endpoints."""

    document = show_to_payload(show).model_dump_json(by_alias=True, exclude_none=True)
    return base64.b64encode(document.encode()).decode("ascii")


def data_import_payload(request: DataImportRequest) -> DataImportPayload:
    return DataImportPayload(
        shows=[show_to_payload(show) for show in request.shows] or None,
        artists=[artist_to_payload(artist) for artist in request.artists] or None,
        venues=[venue_to_payload(venue) for venue in request.venues] or None,
        dry_run=request.dry_run,
    )


def _stats(payload: EntityImportStatsPayload) -> EntityImportStats:
    return EntityImportStats(
        total=payload.total,
        imported=payload.imported,
        duplicates=payload.duplicates,
        updated=payload.updated,
        errors=payload.errors,
        messages=tuple(payload.messages or ()),
    )


def data_import_result(payload: DataImportResponse) -> DataImportResult:
    return DataImportResult(
        shows=_stats(payload.shows),
        artists=_stats(payload.artists),
        venues=_stats(payload.venues),
    )


def scraped_event_payload(event: ScrapedEvent) -> ScrapedEventPayload:
    return ScrapedEventPayload(
        id=event.id,
        title=event.title,
        date=event.date.isoformat(),
        venue=event.venue,
        venue_slug=event.venue_slug,
        image_url=event.image_url,
        doors_time=event.doors_time,
        show_time=event.show_time,
        ticket_url=event.ticket_url,
        artists=list(event.artists),
        scraped_at=event.scraped_at.isoformat(),
        price=event.price,
        age_restriction=event.age_restriction,
        is_sold_out=event.is_sold_out or None,
        is_cancelled=event.is_cancelled or None,
    )


def discovery_import_result(payload: DiscoveryImportResponse) -> DiscoveryImportResult:
    return DiscoveryImportResult(
        total=payload.total,
        imported=payload.imported,
        duplicates=payload.duplicates,
        rejected=payload.rejected,
        pending_review=payload.pending_review,
        updated=payload.updated,
        errors=payload.errors,
        messages=tuple(payload.messages or ()),
    )


def import_statuses(payload: EventCheckResponse) -> dict[str, ImportStatus]:
    return {
        event_id: ImportStatus(exists=entry.exists, show_id=entry.show_id, status=entry.status)
        for event_id, entry in payload.events.items()
    }


def _suggestion(entity: PreviewEntity) -> EntitySuggestion:
    return EntitySuggestion(
        name=entity.name,
        existing_id=entity.existing_id,
        will_create=entity.will_create,
        city=entity.city,
        state=entity.state,
        position=entity.position,
        set_type=entity.set_type,
    )


def import_preview(payload: BulkPreviewResponse) -> ImportPreview:
    summary = payload.summary
    return ImportPreview(
        previews=[
            ShowImportPreview(
                title=entry.show.title,
                event_date=entry.show.event_date,
                venues=tuple(_suggestion(venue) for venue in entry.venues),
                artists=tuple(_suggestion(artist) for artist in entry.artists),
                warnings=tuple(entry.warnings or ()),
                can_import=entry.can_import,
            )
            for entry in payload.previews
        ],
        summary=ImportPreviewSummary(
            total_shows=summary.total_shows,
            new_artists=summary.new_artists,
            new_venues=summary.new_venues,
            existing_artists=summary.existing_artists,
            existing_venues=summary.existing_venues,
            warning_count=summary.warning_count,
            can_import_all=summary.can_import_all,
        ),
    )


def data_import_request(payload: DataImportPayload) -> DataImportRequest:
    return DataImportRequest(
        shows=tuple(show_from_payload(show) for show in payload.shows or ()),
        artists=tuple(artist_from_payload(artist) for artist in payload.artists or ()),
        venues=tuple(venue_from_payload(venue) for venue in payload.venues or ()),
        dry_run=payload.dry_run,
    )


def scraped_event_from_payload(payload: ScrapedEventPayload) -> ScrapedEvent:
    return ScrapedEvent(
        id=payload.id,
        title=payload.title,
        date=date.fromisoformat(payload.date[:10]),
        venue=payload.venue,
        venue_slug=payload.venue_slug,
        image_url=payload.image_url,
        doors_time=payload.doors_time,
        show_time=payload.show_time,
        ticket_url=payload.ticket_url,
        artists=tuple(payload.artists),
        scraped_at=datetime.fromisoformat(payload.scraped_at),
        price=payload.price,
        age_restriction=payload.age_restriction,
        is_sold_out=bool(payload.is_sold_out),
        is_cancelled=bool(payload.is_cancelled),
    )


def bulk_import_outcome(payload: BulkConfirmResponse) -> BulkImportOutcome:
    return BulkImportOutcome(
        outcomes=[
            ShowImportOutcome(
                success=entry.success,
                title=entry.show.title if entry.show is not None else None,
                error=entry.error,
            )
            for entry in payload.results
        ],
        success_count=payload.success_count,
        error_count=payload.error_count,
    )
