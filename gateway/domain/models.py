"""Client-facing value models.

These are the flat, presentation-ready shapes returned to the client:
- SearchResultRow: one row of the search results table
- EventDetail: the event detail card
- VenueInfo: the venue card (address, coordinates, map link)

Attributes use snake_case in Python; the JSON wire format uses the camelCase
aliases. Use to_client() to produce the exact JSON-ready dictionary. Missing
upstream data is represented by "" for strings and None for the documented
nullable fields, never by an absent key.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ClientModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_client(self) -> Dict[str, Any]:
        """Serialize with the camelCase field names clients depend on."""
        return self.model_dump(by_alias=True)


class SearchResultRow(_ClientModel):
    """One event in a search result listing."""

    id: str = Field(..., description="Upstream event identifier")
    name: str = Field("", description="Event name")
    date_local: str = Field("", alias="dateLocal", description="Local start date (YYYY-MM-DD)")
    image_url: str = Field("", alias="imageUrl", description="Most square-shaped event image")
    genre: str = Field("", description="Segment | Genre | SubGenre")
    venue: str = Field("", description="Name of the first venue")


class Artist(_ClientModel):
    """A performer or team attached to an event."""

    name: str = ""
    url: str = ""


class EventDetail(SearchResultRow):
    """Full event card shown when a search row is opened."""

    time_local: str = Field("", alias="timeLocal", description="Local start time (HH:MM:SS)")
    artists: List[Artist] = Field(default_factory=list, description="Up to 5 attractions")
    address: str = Field("", description="Single-line venue address")
    ticket_status: str = Field("", alias="ticketStatus", description="Raw upstream status code")
    ticket_status_color: str = Field(
        "gray", alias="ticketStatusColor", description="Display color for the ticket status"
    )
    buy_ticket_at: str = Field("", alias="buyTicketAt", description="Ticket purchase URL")
    seatmap: str = Field("", description="Static seatmap image URL")
    price_range: str = Field("", alias="priceRange", description="Formatted price range")


class VenueLocation(_ClientModel):
    """Venue coordinates; each is None when upstream omits it."""

    lat: Optional[float] = None
    lng: Optional[float] = None


class VenueInfo(_ClientModel):
    """Venue card."""

    name: str = ""
    address: str = ""
    location: VenueLocation = Field(default_factory=VenueLocation)
    google_maps_url: Optional[str] = Field(None, alias="googleMapsUrl")
    tm_url: Optional[str] = Field(None, alias="tmUrl")
