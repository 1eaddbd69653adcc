"""
Media library entities.

Entities representing the logical works stored in the library (movies and
episodes) and the physical files ("versions") backing them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from medialens.core.value_objects import (
    AudioTrack,
    MediaType,
    QualityScore,
    QualityTier,
    TierQuality,
)


@dataclass
class TechnicalDetails:
    """
    Technical attributes shared by media items and their versions.

    Mirrors NormalizedMediaInfo with flat, mutable fields so that the best
    version's details can be copied onto its parent item.

    Attributes:
        resolution: Resolution tier label ("4K", "1080p", "720p", "480p", "SD")
        video_bitrate: Video bitrate in kbps
        audio_bitrate: Audio bitrate in kbps (primary track)
        audio_title: Primary audio track title, used for commentary detection
        hdr_format: "Dolby Vision", "HDR10+", "HDR10", "HLG" or None
        video_bit_depth: Color bit depth, None when unknown
    """

    resolution: str = ""
    width: int = 0
    height: int = 0
    video_codec: str = ""
    video_bitrate: int = 0
    video_frame_rate: Optional[float] = None
    video_bit_depth: Optional[int] = None
    video_profile: Optional[str] = None
    hdr_format: Optional[str] = None
    color_space: Optional[str] = None
    audio_codec: str = ""
    audio_codec_full: str = ""
    audio_channels: int = 2
    audio_bitrate: int = 0
    audio_sample_rate: Optional[int] = None
    audio_title: Optional[str] = None
    has_object_audio: bool = False
    audio_tracks: tuple[AudioTrack, ...] = ()
    container: str = ""
    duration_seconds: Optional[int] = None


@dataclass
class MediaItemVersion(TechnicalDetails):
    """
    One physical file representing one cut/edition of a media item.

    Attributes:
        id: Internal database ID
        media_item_id: Parent media item ID (set once persisted)
        version_source: Stable identifier derived from the file path
        file_path: Absolute path of the file
        file_size: Size in bytes
        edition: Edition name ("Extended", "Director's Cut"...)
        source_type: "REMUX", "WEB-DL" or None
        label: Display label (resolution, HDR, source type, edition)
        is_best: True for the canonical version of its group
        quality_tier: Resolution tier of the file's own quality score
        tier_quality: Quality level of the file within its tier
        quality_score: Overall score of the file (0-100)
    """

    id: Optional[int] = None
    media_item_id: Optional[int] = None
    version_source: str = ""
    file_path: str = ""
    file_size: int = 0
    edition: Optional[str] = None
    source_type: Optional[str] = None
    label: str = ""
    is_best: bool = False
    quality_tier: Optional[QualityTier] = None
    tier_quality: Optional[TierQuality] = None
    quality_score: Optional[int] = None

    def apply_quality_score(self, score: QualityScore) -> None:
        """Record the file's own quality score on the version."""
        self.quality_tier = score.quality_tier
        self.tier_quality = score.tier_quality
        self.quality_score = score.overall_score


@dataclass
class MediaItem(TechnicalDetails):
    """
    Logical work (movie or episode) of a library.

    The technical attributes are those of the best version.

    Attributes:
        id: Internal database ID
        source_id: Media source the item comes from ("local", a Plex server...)
        library_id: Library inside the source
        provider_item_id: Stable identifier inside the source
        media_type: MOVIE or EPISODE
        title: Movie title or episode title
        year: Release year
        tmdb_id: The Movie Database ID when resolved
        series_title: Series title for episodes
        season_number: Season number for episodes
        episode_number: Episode number for episodes
        file_path: Path of the best version file
        file_size: Size of the best version file in bytes
        file_mtime: Modification time of the best version file
        version_count: Number of versions in the group
    """

    id: Optional[int] = None
    source_id: str = ""
    library_id: Optional[str] = None
    provider_item_id: str = ""
    media_type: MediaType = MediaType.MOVIE
    title: str = ""
    year: Optional[int] = None
    tmdb_id: Optional[int] = None
    series_title: Optional[str] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    file_path: str = ""
    file_size: int = 0
    file_mtime: Optional[datetime] = None
    version_count: int = 1
