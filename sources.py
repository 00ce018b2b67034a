"""Pick an extraction strategy from the shape of a URL."""
from enum import Enum


class SourceKind(Enum):
    DISCUSSION = "discussion"
    LISTING = "listing"
    GENERIC = "generic"


# Checked in order; the first fragment found wins.
HOST_FRAGMENTS = [
    ("reddit.com", SourceKind.DISCUSSION),
    ("producthunt.com", SourceKind.LISTING),
]


def classify_source(url: str) -> SourceKind:
    url_lower = url.lower()
    for fragment, kind in HOST_FRAGMENTS:
        if fragment in url_lower:
            return kind
    return SourceKind.GENERIC
