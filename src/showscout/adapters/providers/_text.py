"""Text clean-up helpers shared by the providers."""

from __future__ import annotations

import html
import json
import re
from datetime import date, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

if TYPE_CHECKING:
    from collections.abc import Iterator

log = getLogger(__name__)

_LOWERCASE_WORDS = frozenset(
    {"a", "an", "the", "and", "but", "or", "for", "nor", "on", "at", "to", "by", "with", "of", "in"}
)
_UPPERCASE_WORD = re.compile(r"^(dj|mc|vs\.?|ft\.?|feat\.?)$", re.IGNORECASE)
_TOUR_SUFFIX = re.compile(r"\s*[-–—]\s*(?:the\s+)?[^-–—]*tour.*$", re.IGNORECASE)
_STATUS_MARKER = re.compile(r"\*(?:SOLD OUT|CANCELLED)\*\s*", re.IGNORECASE)
_CLOCK = re.compile(r"(\d{1,2}):(\d{2})\s*([ap])\.?m\.?", re.IGNORECASE)
_ISO_CLOCK = re.compile(r"T(\d{2}):(\d{2})")
_TRAILING_ID = re.compile(r"/(\d+)/?(?:\?|#|$)")
_WEEKDAY_PREFIX = re.compile(r"^[A-Za-z]+,?\s+(?=[A-Za-z])")
_LISTING_DATE_FORMATS = ("%b %d %Y", "%B %d %Y", "%b. %d %Y", "%m/%d %Y")


def to_title_case(text: str, *, force: bool = False) -> str:
    """Title-case shouting text; mixed-case text is returned unchanged unless ``force``."""

    if not text:
        return text
    if not force:
        upper = sum(1 for char in text if char.isupper())
        lower = sum(1 for char in text if char.islower())
        if lower > upper:
            return text

    words: list[str] = []
    for index, word in enumerate(text.lower().split(" ")):
        if _UPPERCASE_WORD.match(word):
            words.append(word.upper())
        elif index > 0 and word in _LOWERCASE_WORDS:
            words.append(word)
        else:
            words.append("-".join(part[:1].upper() + part[1:] for part in word.split("-")))
    return " ".join(words)


def decode_entities(text: str | None) -> str:
    return html.unescape(text) if text else ""


def strip_html(markup: str | None) -> str:
    if not markup:
        return ""
    return BeautifulSoup(markup, "html.parser").get_text(" ", strip=True)


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def clean_artist_name(name: str) -> str:
    cleaned = collapse_whitespace(_STATUS_MARKER.sub("", decode_entities(name)))
    return cleaned.strip(" \"'“”‘’,;")


def strip_tour_suffix(title: str) -> str:
    return _TOUR_SUFFIX.sub("", title).strip()


def artists_from_title(title: str) -> list[str]:
    """Fallback lineup: the title without a trailing tour name."""

    cleaned = clean_artist_name(strip_tour_suffix(title))
    return [cleaned] if cleaned else [title]


def format_clock(hour: int, minute: int) -> str:
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def normalize_time(raw: str | None) -> str | None:
    """Read the first clock time in ``raw`` as "H:MM AM/PM"."""

    if not raw:
        return None
    match = _CLOCK.search(raw)
    if match is None:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    meridiem = match.group(3).upper()
    return f"{hour}:{minute:02d} {meridiem}M"


def time_from_iso(value: str | None) -> str | None:
    """Wall-clock time written in an ISO timestamp, without timezone conversion."""

    if not value:
        return None
    match = _ISO_CLOCK.search(value)
    if match is None:
        return None
    return format_clock(int(match.group(1)), int(match.group(2)))


def date_from_iso(value: str | None) -> date | None:
    if not value or len(value) < 10:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _months_back(today: date, months: int) -> date:
    index = today.year * 12 + today.month - 1 - months
    return date(index // 12, index % 12 + 1, 1)


def parse_listing_date(text: str, *, today: date) -> date | None:
    """Parse a year-less listing date such as "Thu Feb 19" or "Friday March 6".

    The current year is assumed unless that puts the date more than two months
    in the past, in which case the event is taken to be next year's.
    """

    cleaned = collapse_whitespace(_WEEKDAY_PREFIX.sub("", text.strip()))
    if not cleaned:
        return None
    cutoff = _months_back(today, 2)
    for year in (today.year, today.year + 1):
        parsed = _parse_with_year(cleaned, year)
        if parsed is None:
            continue
        if year == today.year and parsed < cutoff:
            continue
        return parsed
    return None


def _parse_with_year(text: str, year: int) -> date | None:
    for fmt in _LISTING_DATE_FORMATS:
        try:
            return datetime.strptime(f"{text} {year}", fmt).date()  # noqa: DTZ007
        except ValueError:
            continue
    return None


def trailing_numeric_id(url: str) -> str:
    """Platform event id at the end of a ticket URL; the URL itself when there is none."""

    match = _TRAILING_ID.search(url)
    return match.group(1) if match else url


def iter_json_ld(markup: str) -> Iterator[dict[str, object]]:
    """Yield every JSON-LD object on a page, flattening arrays and ``@graph`` lists."""

    soup = BeautifulSoup(markup, "html.parser")
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            log.debug("Skipping malformed JSON-LD block")
            continue
        yield from _flatten(data)


def _flatten(data: object) -> Iterator[dict[str, object]]:
    if isinstance(data, list):
        for item in data:
            yield from _flatten(item)
    elif isinstance(data, dict):
        graph = data.get("@graph")
        if isinstance(graph, list):
            yield from _flatten(graph)
        else:
            yield data


def format_offer_price(price: float | str | None) -> str | None:
    """Render a structured-data offer price the way listings print it ("$25", "Free")."""

    if price is None or price == "":
        return None
    try:
        amount = float(price)
    except (TypeError, ValueError):
        return str(price)
    if amount == 0:
        return "Free"
    return f"${amount:g}"
