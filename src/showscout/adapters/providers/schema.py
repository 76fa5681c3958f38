"""schema.org event shapes found in JSON-LD blocks."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

EVENT_TYPES = frozenset({"Event", "MusicEvent"})


class JsonLdModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class JsonLdImage(JsonLdModel):
    url: str | None = None


class JsonLdPlace(JsonLdModel):
    name: str | None = None


class JsonLdPerformer(JsonLdModel):
    name: str | None = None


class JsonLdOffer(JsonLdModel):
    url: str | None = None
    price: float | str | None = None
    availability: str | None = None


class JsonLdEvent(JsonLdModel):
    type: str | list[str] | None = Field(default=None, alias="@type")
    name: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    door_time: str | None = Field(default=None, alias="doorTime")
    url: str | None = None
    image: str | JsonLdImage | list[str | JsonLdImage] | None = None
    event_status: str | None = Field(default=None, alias="eventStatus")
    location: JsonLdPlace | list[JsonLdPlace] | None = None
    performer: JsonLdPerformer | list[JsonLdPerformer] | None = None
    offers: JsonLdOffer | list[JsonLdOffer] | None = None

    @property
    def types(self) -> frozenset[str]:
        if self.type is None:
            return frozenset()
        return frozenset([self.type] if isinstance(self.type, str) else self.type)

    @property
    def performer_names(self) -> list[str]:
        performers = self.performer if isinstance(self.performer, list) else [self.performer]
        return [p.name for p in performers if p is not None and p.name]

    @property
    def first_offer(self) -> JsonLdOffer | None:
        if isinstance(self.offers, list):
            return self.offers[0] if self.offers else None
        return self.offers

    @property
    def all_offers(self) -> list[JsonLdOffer]:
        if self.offers is None:
            return []
        return self.offers if isinstance(self.offers, list) else [self.offers]

    @property
    def image_url(self) -> str | None:
        images = self.image if isinstance(self.image, list) else [self.image]
        for image in images:
            if isinstance(image, str) and image:
                return image
            if isinstance(image, JsonLdImage) and image.url:
                return image.url
        return None

    @property
    def location_name(self) -> str | None:
        places = self.location if isinstance(self.location, list) else [self.location]
        return next((place.name for place in places if place is not None and place.name), None)

    @property
    def is_cancelled(self) -> bool:
        return bool(self.event_status and "EventCancelled" in self.event_status)

    @property
    def is_sold_out(self) -> bool:
        return any(
            offer.availability is not None and "SoldOut" in offer.availability
            for offer in self.all_offers
        )


def parse_events(
    objects: list[dict[str, object]],
    *,
    types: frozenset[str] = EVENT_TYPES,
) -> list[JsonLdEvent]:
    """Validate JSON-LD objects whose ``@type`` is one of ``types``; others are ignored."""

    events: list[JsonLdEvent] = []
    for obj in objects:
        try:
            event = JsonLdEvent.model_validate(obj)
        except ValidationError:
            continue
        if event.types & types:
            events.append(event)
    return events
