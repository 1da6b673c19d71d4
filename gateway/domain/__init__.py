"""Domain models for the event discovery gateway."""

from .models import Artist, EventDetail, SearchResultRow, VenueInfo, VenueLocation

__all__ = ["SearchResultRow", "Artist", "EventDetail", "VenueLocation", "VenueInfo"]
