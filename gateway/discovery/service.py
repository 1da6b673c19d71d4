"""Discovery operations exposed to the HTTP layer.

Each operation is build query -> one upstream fetch -> normalize:

    service = DiscoveryService(DiscoveryClient(base_url), api_key)
    rows = service.search("jazz", distance="15", category="Music", lat="34.05", lng="-118.24")

The fetcher is injected so tests can substitute a recording double and
assert exactly which upstream calls were (or were not) made.
"""

import time
from typing import Any, List, Optional, Protocol

from gateway.domain.models import EventDetail, SearchResultRow, VenueInfo
from gateway.logging import get_logger

from .categories import DEFAULT_CATEGORY
from .exceptions import NotFoundError, UpstreamHTTPError
from .normalizers import (
    normalize_event_detail,
    normalize_search_results,
    normalize_suggestions,
    normalize_venue,
)
from .queries import (
    UpstreamRequest,
    build_detail_query,
    build_search_query,
    build_suggest_query,
    build_venue_query,
)

logger = get_logger(__name__, component="discovery")

# 4xx answers about the credential or quota, not the requested event
GATEWAY_CLIENT_ERRORS = frozenset({401, 403, 429})


class Fetcher(Protocol):
    """Anything that can execute an UpstreamRequest and return decoded JSON."""

    def fetch(self, request: UpstreamRequest) -> Any:
        ...


class DiscoveryService:
    """Search, event detail, venue lookup and autosuggest.

    Stateless apart from its collaborators; one instance serves every request.
    """

    def __init__(self, fetcher: Fetcher, api_key: str) -> None:
        self.fetcher = fetcher
        self.api_key = api_key

    def search(
        self,
        keyword: Optional[str],
        distance: Optional[str] = None,
        category: Optional[str] = DEFAULT_CATEGORY,
        lat: Optional[str] = None,
        lng: Optional[str] = None,
    ) -> List[SearchResultRow]:
        """Search events near a coordinate.

        Raises:
            ValidationError: If keyword or a coordinate is missing (no upstream call is made)
            UpstreamError: If the Discovery API call fails
        """
        request = build_search_query(self.api_key, keyword, distance, category, lat, lng)

        started = time.monotonic()
        logger.info(
            "Searching events",
            extra={
                "event": "discovery.search.started",
                "keyword": keyword,
                "radius": request.params["radius"],
                "segment_id": request.params.get("segmentId"),
                "geo_point": request.params["geoPoint"],
            },
        )

        rows = normalize_search_results(self.fetcher.fetch(request))

        logger.info(
            "Search completed",
            extra={
                "event": "discovery.search.completed",
                "count": len(rows),
                "duration_ms": _elapsed_ms(started),
            },
        )
        return rows

    def get_event_detail(self, event_id: str) -> EventDetail:
        """Fetch the detail card for one event.

        Raises:
            NotFoundError: If the Discovery API rejects the id with a 4xx status
                (404 for unknown ids, 400 for malformed ones); 401, 403 and 429
                concern the gateway itself and propagate as UpstreamHTTPError
            UpstreamError: On any other upstream failure
        """
        request = build_detail_query(self.api_key, event_id)

        started = time.monotonic()
        logger.info(
            "Fetching event detail",
            extra={"event": "discovery.event.started", "event_id": event_id},
        )

        try:
            payload = self.fetcher.fetch(request)
        except UpstreamHTTPError as e:
            if _is_missing_event(e.status_code):
                raise NotFoundError(f"event not found: {event_id}") from e
            raise

        detail = normalize_event_detail(payload)

        logger.info(
            "Event detail fetched",
            extra={
                "event": "discovery.event.completed",
                "event_id": event_id,
                "ticket_status": detail.ticket_status,
                "artist_count": len(detail.artists),
                "duration_ms": _elapsed_ms(started),
            },
        )
        return detail

    def get_venue(self, name: Optional[str]) -> Optional[VenueInfo]:
        """Look up the first venue matching name.

        Returns None when nothing matches (including an upstream 404).

        Raises:
            ValidationError: If name is missing (no upstream call is made)
            UpstreamError: On any other upstream failure
        """
        request = build_venue_query(self.api_key, name)

        started = time.monotonic()
        logger.info(
            "Looking up venue",
            extra={"event": "discovery.venue.started", "venue_name": name},
        )

        try:
            payload = self.fetcher.fetch(request)
        except UpstreamHTTPError as e:
            if e.status_code != 404:
                raise
            payload = {}

        venue = normalize_venue(payload)

        logger.info(
            "Venue lookup completed",
            extra={
                "event": "discovery.venue.completed",
                "venue_name": name,
                "found": venue is not None,
                "duration_ms": _elapsed_ms(started),
            },
        )
        return venue

    def suggest(self, keyword: Optional[str]) -> List[str]:
        """Autocomplete suggestions for a partially typed keyword.

        A blank keyword returns [] without contacting the Discovery API.
        """
        request = build_suggest_query(self.api_key, keyword)
        if request is None:
            logger.debug(
                "Blank suggest keyword, skipping upstream call",
                extra={"event": "discovery.suggest.skipped"},
            )
            return []

        started = time.monotonic()
        suggestions = normalize_suggestions(self.fetcher.fetch(request))

        logger.info(
            "Suggestions fetched",
            extra={
                "event": "discovery.suggest.completed",
                "keyword": keyword,
                "count": len(suggestions),
                "duration_ms": _elapsed_ms(started),
            },
        )
        return suggestions


def _elapsed_ms(started: float) -> float:
    return round((time.monotonic() - started) * 1000, 1)


def _is_missing_event(status_code: int) -> bool:
    return 400 <= status_code < 500 and status_code not in GATEWAY_CLIENT_ERRORS
