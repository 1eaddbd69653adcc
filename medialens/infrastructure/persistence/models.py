"""
Modeles SQLModel pour la base de donnees medialens.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- media_items: Medias (films, episodes) avec les attributs de leur meilleure version
- media_item_versions: Fichiers physiques de chaque media
- quality_scores: Score qualite de chaque media
- settings: Parametres cle/valeur (seuils qualite, montages NFS)

Les champs JSON (*_json) permettent de stocker des listes (pistes audio,
problemes detectes) de maniere serialisee dans SQLite.
"""

from __future__ import annotations

import json
from datetime import datetime

from sqlmodel import Field, Index, SQLModel


class TechnicalColumns(SQLModel):
    """Colonnes techniques communes aux medias et a leurs versions."""

    resolution: str = ""
    width: int = 0
    height: int = 0
    video_codec: str = ""
    video_bitrate: int = 0  # kbps
    video_frame_rate: float | None = None
    video_bit_depth: int | None = None
    video_profile: str | None = None
    hdr_format: str | None = None
    color_space: str | None = None
    audio_codec: str = ""
    audio_codec_full: str = ""
    audio_channels: int = 2
    audio_bitrate: int = 0  # kbps
    audio_sample_rate: int | None = None
    audio_title: str | None = None
    has_object_audio: bool = False
    audio_tracks_json: str | None = None  # JSON: [{"codec": "TrueHD", ...}]
    container: str = ""
    duration_seconds: int | None = None


class MediaItemModel(TechnicalColumns, table=True):
    """
    Modele representant un media (film ou episode).

    Un media est identifie par (source_id, provider_item_id).
    """

    __tablename__ = "media_items"
    __table_args__ = (
        Index("ix_media_items_source_provider", "source_id", "provider_item_id", unique=True),
    )

    id: int | None = Field(default=None, primary_key=True)
    source_id: str = Field(index=True)
    library_id: str | None = Field(default=None, index=True)
    provider_item_id: str
    media_type: str = Field(default="movie", index=True)
    title: str = Field(index=True)
    year: int | None = None
    tmdb_id: int | None = Field(default=None, index=True)
    series_title: str | None = None
    season_number: int | None = None
    episode_number: int | None = None
    file_path: str = Field(default="", index=True)
    file_size: int = 0
    file_mtime: datetime | None = None
    version_count: int = 1
    created_at: datetime | None = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)


class MediaItemVersionModel(TechnicalColumns, table=True):
    """
    Modele representant une version (fichier physique) d'un media.

    Une version est identifiee par version_source (hash du chemin).
    """

    __tablename__ = "media_item_versions"

    id: int | None = Field(default=None, primary_key=True)
    media_item_id: int = Field(foreign_key="media_items.id", index=True)
    version_source: str = Field(index=True, unique=True)
    file_path: str = ""
    file_size: int = 0
    edition: str | None = None
    source_type: str | None = None  # REMUX, WEB-DL
    label: str = ""
    is_best: bool = Field(default=False)
    quality_tier: str | None = None  # SD, 720p, 1080p, 4K
    tier_quality: str | None = None  # LOW, MEDIUM, HIGH
    quality_score: int | None = None
    created_at: datetime | None = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)


class QualityScoreModel(SQLModel, table=True):
    """
    Modele representant le score qualite d'un media.

    Un seul score par media, remplace a chaque scan.
    """

    __tablename__ = "quality_scores"

    id: int | None = Field(default=None, primary_key=True)
    media_item_id: int = Field(foreign_key="media_items.id", index=True, unique=True)
    quality_tier: str  # SD, 720p, 1080p, 4K
    tier_quality: str = Field(index=True)  # LOW, MEDIUM, HIGH
    video_quality: str
    audio_quality: str
    tier_score: int = 0
    bitrate_tier_score: int = 0
    audio_tier_score: int = 0
    overall_score: int = 0
    needs_upgrade: bool = Field(default=False, index=True)
    issues_json: str | None = None  # JSON: ["4K content without HDR", ...]
    premium_indicators_json: str | None = None  # JSON: ["HDR", "Object audio"]
    created_at: datetime | None = Field(default_factory=datetime.utcnow)
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)

    @property
    def issues(self) -> list[str]:
        """Retourne les problemes deserialises."""
        if self.issues_json:
            return json.loads(self.issues_json)
        return []


class SettingModel(SQLModel, table=True):
    """Modele representant un parametre cle/valeur."""

    __tablename__ = "settings"

    key: str = Field(primary_key=True)
    value: str
    updated_at: datetime | None = Field(default_factory=datetime.utcnow)
