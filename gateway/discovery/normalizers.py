"""Reshaping of Discovery API payloads into client-facing records.

Every function here is pure: it takes decoded JSON and returns a new value.
Each output field has a fixed default for missing upstream data, so a payload
with absent nested objects never raises. Only a payload whose top level is
not a JSON object is treated as malformed (UpstreamResponseError).

Upstream shapes relied on:
- search/suggest:  {"_embedded": {"events": [...], "venues": [...], "attractions": [...]}}
- event:           {"id", "name", "url", "dates": {"start": {...}, "status": {"code"}},
                    "images": [...], "classifications": [...], "priceRanges": [...],
                    "seatmap": {"staticUrl"}, "_embedded": {"venues", "attractions"}}
- venue:           {"name", "url", "address": {"line1"}, "city": {"name"},
                    "state": {"stateCode"}, "postalCode", "location": {"latitude", "longitude"}}
"""

import math
from typing import Any, Dict, List, Optional

from gateway.domain.models import Artist, EventDetail, SearchResultRow, VenueInfo, VenueLocation
from gateway.logging import get_logger

from .exceptions import UpstreamResponseError

logger = get_logger(__name__, component="normalization")

MAX_ARTISTS = 5
MAX_SUGGESTIONS = 10

GENRE_SEPARATOR = " | "
ADDRESS_SEPARATOR = ", "
GOOGLE_MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={lat},{lng}"

# Checked in order, first substring match wins
TICKET_STATUS_COLORS = (
    ("onsale", "green"),
    ("offsale", "red"),
    ("cancel", "black"),
    ("postpon", "orange"),
    ("resched", "orange"),
)
DEFAULT_STATUS_COLOR = "gray"

SUGGESTION_SOURCES = ("attractions", "venues", "events")


# ---------------------------------------------------------------------------
# Field access helpers
# ---------------------------------------------------------------------------


def _object(value: Any) -> Dict[str, Any]:
    """Return value if it is a JSON object, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def _objects(value: Any) -> List[Dict[str, Any]]:
    """Return the JSON objects in value if it is an array, otherwise []."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _first(value: Any) -> Optional[Dict[str, Any]]:
    items = _objects(value)
    return items[0] if items else None


def _text(value: Any) -> str:
    """Stringify a scalar, mapping None to ""."""
    if value is None:
        return ""
    return str(value)


def _number(value: Any) -> Optional[float]:
    """Convert an upstream number or numeric string to float, None if unusable."""
    if value is None or isinstance(value, bool) or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _require_object(payload: Any, what: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise UpstreamResponseError(
            f"Expected JSON object for {what}, got {type(payload).__name__}"
        )
    return payload


def _first_venue(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return _first(_object(event.get("_embedded")).get("venues"))


# ---------------------------------------------------------------------------
# Field builders
# ---------------------------------------------------------------------------


def _squareness(image: Dict[str, Any]) -> float:
    """|width - height|; images without both dimensions rank last."""
    width = _number(image.get("width"))
    height = _number(image.get("height"))
    if width is None or height is None:
        return math.inf
    return abs(width - height)


def pick_image(images: Any) -> str:
    """Return the url of the most square image.

    Ties keep upstream order. Falls back to the first image's url, then "".
    """
    candidates = _objects(images)
    if not candidates:
        return ""

    best = sorted(candidates, key=_squareness)[0]
    return _text(best.get("url")) or _text(candidates[0].get("url"))


def pick_genre(classifications: Any) -> str:
    """Join segment, genre and subGenre names of the first classification."""
    first = _first(classifications)
    if first is None:
        return ""

    names = [
        _text(_object(first.get(level)).get("name"))
        for level in ("segment", "genre", "subGenre")
    ]
    return GENRE_SEPARATOR.join(name for name in names if name)


def full_address(venue: Optional[Dict[str, Any]]) -> str:
    """Single-line address: name, line 1, "city, state", postal code."""
    if not venue:
        return ""

    city_state = ADDRESS_SEPARATOR.join(
        part
        for part in (
            _text(_object(venue.get("city")).get("name")),
            _text(_object(venue.get("state")).get("stateCode")),
        )
        if part
    )
    parts = (
        _text(venue.get("name")),
        _text(_object(venue.get("address")).get("line1")),
        city_state,
        _text(venue.get("postalCode")),
    )
    return ADDRESS_SEPARATOR.join(part for part in parts if part)


def ticket_status_color(code: Optional[str]) -> str:
    """Map an upstream ticket status code to a display color."""
    lowered = (code or "").lower()
    for needle, color in TICKET_STATUS_COLORS:
        if needle in lowered:
            return color
    return DEFAULT_STATUS_COLOR


def format_price_range(ranges: Any) -> str:
    """Format the first price range as "$min ~ $max", "From $min" or "Up to $max"."""
    first = _first(ranges)
    if first is None:
        return ""

    low = _number(first.get("min"))
    high = _number(first.get("max"))

    if low is not None and high is not None:
        return f"${low:.2f} ~ ${high:.2f}"
    if low is not None:
        return f"From ${low:.2f}"
    if high is not None:
        return f"Up to ${high:.2f}"
    return ""


# ---------------------------------------------------------------------------
# Payload normalizers
# ---------------------------------------------------------------------------


def _search_row(event: Dict[str, Any]) -> SearchResultRow:
    venue = _first_venue(event)
    return SearchResultRow(
        id=_text(event.get("id")),
        name=_text(event.get("name")),
        date_local=_text(_object(_object(event.get("dates")).get("start")).get("localDate")),
        image_url=pick_image(event.get("images")),
        genre=pick_genre(event.get("classifications")),
        venue=_text(venue.get("name")) if venue else "",
    )


def normalize_search_results(payload: Any) -> List[SearchResultRow]:
    """Convert an events.json payload into result rows.

    A missing or non-array events list yields []. Events without an id are
    skipped since rows are addressed by id.
    """
    events = _object(_require_object(payload, "event search").get("_embedded")).get("events")
    if not isinstance(events, list):
        return []

    rows = []
    for event in _objects(events):
        if not event.get("id"):
            logger.warning(
                "Skipping event without id",
                extra={"event": "normalization.search.missing_id", "event_name": event.get("name")},
            )
            continue
        rows.append(_search_row(event))

    return rows


def normalize_event_detail(payload: Any) -> EventDetail:
    """Convert an events/{id}.json payload into the event detail card."""
    event = _require_object(payload, "event detail")
    dates = _object(event.get("dates"))
    start = _object(dates.get("start"))
    status_code = _text(_object(dates.get("status")).get("code"))
    embedded = _object(event.get("_embedded"))
    venue = _first(embedded.get("venues"))

    artists = [
        Artist(name=_text(attraction.get("name")), url=_text(attraction.get("url")))
        for attraction in _objects(embedded.get("attractions"))[:MAX_ARTISTS]
    ]

    return EventDetail(
        id=_text(event.get("id")),
        name=_text(event.get("name")),
        date_local=_text(start.get("localDate")),
        time_local=_text(start.get("localTime")),
        image_url=pick_image(event.get("images")),
        genre=pick_genre(event.get("classifications")),
        venue=_text(venue.get("name")) if venue else "",
        artists=artists,
        address=full_address(venue),
        ticket_status=status_code,
        ticket_status_color=ticket_status_color(status_code),
        buy_ticket_at=_text(event.get("url")),
        seatmap=_text(_object(event.get("seatmap")).get("staticUrl")),
        price_range=format_price_range(event.get("priceRanges")),
    )


def normalize_venue(payload: Any) -> Optional[VenueInfo]:
    """Convert a venues.json payload into a venue card.

    Returns None when no venue is embedded. Each coordinate is None when
    missing or non-numeric; the maps link is only built when both are usable.
    """
    venues = _object(_require_object(payload, "venue search").get("_embedded")).get("venues")
    venue = _first(venues)
    if venue is None:
        return None

    location = _object(venue.get("location"))
    raw_lat = location.get("latitude")
    raw_lng = location.get("longitude")
    lat = _number(raw_lat)
    lng = _number(raw_lng)

    google_maps_url = None
    if lat is not None and lng is not None:
        google_maps_url = GOOGLE_MAPS_SEARCH_URL.format(lat=raw_lat, lng=raw_lng)

    tm_url = venue.get("url")

    return VenueInfo(
        name=_text(venue.get("name")),
        address=full_address(venue),
        location=VenueLocation(lat=lat, lng=lng),
        google_maps_url=google_maps_url,
        tm_url=_text(tm_url) if tm_url is not None else None,
    )


def normalize_suggestions(payload: Any) -> List[str]:
    """Collect attraction, venue and event names; dedupe and keep the first 10."""
    embedded = _require_object(payload, "suggest").get("_embedded")
    if not isinstance(embedded, dict):
        return []

    names = []
    for source in SUGGESTION_SOURCES:
        for item in _objects(embedded.get(source)):
            name = item.get("name")
            if isinstance(name, str) and name:
                names.append(name)

    return list(dict.fromkeys(names))[:MAX_SUGGESTIONS]
