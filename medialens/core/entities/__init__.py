"""
Business entities representing core domain concepts.

Entities are mutable objects with identity that persist over time.

Exports:
- TechnicalDetails: Technical attributes shared by items and versions
- MediaItem: Logical movie or episode of a library
- MediaItemVersion: One physical file (edition/cut) of a media item
"""

from medialens.core.entities.media import MediaItem, MediaItemVersion, TechnicalDetails

__all__ = [
    "MediaItem",
    "MediaItemVersion",
    "TechnicalDetails",
]
