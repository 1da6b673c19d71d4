"""Category label to Discovery API segment id mapping."""

from types import MappingProxyType
from typing import Optional

SEGMENT_IDS = MappingProxyType(
    {
        "Music": "KZFzniwnSyZfZ7v7nJ",
        "Sports": "KZFzniwnSyZfZ7v7nE",
        "Arts & Theatre": "KZFzniwnSyZfZ7v7na",
        "Film": "KZFzniwnSyZfZ7v7nn",
        "Miscellaneous": "KZFzniwnSyZfZ7v7n1",
    }
)

# Label the client sends when no category is selected
DEFAULT_CATEGORY = "Default"


def map_category(label: Optional[str]) -> Optional[str]:
    """Return the segment id for a category label.

    Unknown labels (including "Default") return None, meaning the search is
    sent without a segment filter.
    """
    if not label:
        return None
    return SEGMENT_IDS.get(label)
