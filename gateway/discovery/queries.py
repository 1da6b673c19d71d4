"""Outbound request builders for the Discovery API.

Each builder turns already-parsed client parameters into an UpstreamRequest:
an endpoint path relative to the API base URL plus its query parameters.
Builders are pure; the API key is passed in explicitly and nothing here reads
configuration or touches the network.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import quote

from .categories import DEFAULT_CATEGORY, map_category
from .exceptions import ValidationError
from .geo import SEARCH_GEOHASH_PRECISION, encode_location, parse_coordinate

DEFAULT_DISTANCE = "10"
DISTANCE_UNIT = "miles"


@dataclass(frozen=True)
class UpstreamRequest:
    """A single Discovery API call.

    Attributes:
        endpoint: Path relative to the API base URL (e.g. "events.json")
        params: Query parameters in the order they are sent
    """

    endpoint: str
    params: Dict[str, str] = field(default_factory=dict)


def build_search_query(
    api_key: str,
    keyword: Optional[str],
    distance: Optional[str] = None,
    category: Optional[str] = DEFAULT_CATEGORY,
    lat: Optional[str] = None,
    lng: Optional[str] = None,
) -> UpstreamRequest:
    """Build the event search request.

    Distance is forwarded as given (no numeric check); the Discovery API
    parses it itself. A missing or blank distance becomes "10".

    Raises:
        ValidationError: If keyword is empty or a coordinate is missing
    """
    if not keyword:
        raise ValidationError("keyword is required")
    if not lat or not lng:
        raise ValidationError("lat and lng are required")

    geo_point = encode_location(
        parse_coordinate(lat, "lat"),
        parse_coordinate(lng, "lng"),
        SEARCH_GEOHASH_PRECISION,
    )

    params = {
        "apikey": api_key,
        "keyword": str(keyword),
        "radius": str(distance or DEFAULT_DISTANCE),
        "unit": DISTANCE_UNIT,
        "geoPoint": geo_point,
    }

    segment_id = map_category(category)
    if segment_id:
        params["segmentId"] = segment_id

    return UpstreamRequest("events.json", params)


def build_detail_query(api_key: str, event_id: str) -> UpstreamRequest:
    """Build the lookup of a single event by id."""
    if not event_id:
        raise ValidationError("event id is required")
    return UpstreamRequest(f"events/{quote(str(event_id), safe='')}.json", {"apikey": api_key})


def build_venue_query(api_key: str, name: Optional[str]) -> UpstreamRequest:
    """Build the venue lookup; only the first match is ever requested.

    Raises:
        ValidationError: If name is empty
    """
    if not name:
        raise ValidationError("name is required")
    return UpstreamRequest(
        "venues.json",
        {"apikey": api_key, "keyword": str(name), "size": "1"},
    )


def build_suggest_query(api_key: str, keyword: Optional[str]) -> Optional[UpstreamRequest]:
    """Build the autosuggest request.

    Returns None for a blank keyword; the caller answers with an empty list
    without calling upstream.
    """
    if not keyword or not keyword.strip():
        return None
    return UpstreamRequest("suggest", {"apikey": api_key, "keyword": keyword})
