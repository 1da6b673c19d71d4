"""Discovery API translation layer.

- categories: category label -> segment id
- geo: coordinate parsing and geohash encoding
- queries: UpstreamRequest builders for search, detail, venue and suggest
- normalizers: upstream payload -> client records
- client: DiscoveryClient, the requests-based transport
- service: DiscoveryService, the four client-facing operations

Usage:
    from gateway.discovery import DiscoveryClient, DiscoveryService
    service = DiscoveryService(DiscoveryClient(base_url), api_key)
    service.suggest("tay")
"""

from .categories import SEGMENT_IDS, map_category
from .client import DiscoveryClient
from .exceptions import (
    ClientConfigurationError,
    DiscoveryError,
    NotFoundError,
    UpstreamError,
    UpstreamHTTPError,
    UpstreamResponseError,
    UpstreamTimeoutError,
    ValidationError,
)
from .geo import encode_location
from .queries import (
    UpstreamRequest,
    build_detail_query,
    build_search_query,
    build_suggest_query,
    build_venue_query,
)
from .service import DiscoveryService

__all__ = [
    # Service and transport
    "DiscoveryService",
    "DiscoveryClient",
    "UpstreamRequest",
    # Query building
    "SEGMENT_IDS",
    "map_category",
    "encode_location",
    "build_search_query",
    "build_detail_query",
    "build_venue_query",
    "build_suggest_query",
    # Exceptions
    "DiscoveryError",
    "ValidationError",
    "NotFoundError",
    "UpstreamError",
    "UpstreamHTTPError",
    "UpstreamTimeoutError",
    "UpstreamResponseError",
    "ClientConfigurationError",
]
