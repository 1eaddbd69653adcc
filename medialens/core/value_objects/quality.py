"""
Objets valeur pour l'évaluation de la qualité.

- QualityTier : palier de résolution (SD, 720p, 1080p, 4K)
- TierQuality : niveau de qualité à l'intérieur d'un palier
- BitrateThresholds / TierThresholds / QualityThresholds : seuils configurables
- QualityScore : résultat immutable du scoring d'un média
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class QualityTier(str, Enum):
    """Palier de qualité, déterminé uniquement par la résolution."""

    SD = "SD"
    HD_720 = "720p"
    FHD_1080 = "1080p"
    UHD_4K = "4K"


class TierQuality(str, Enum):
    """Niveau de qualité à l'intérieur d'un palier."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class BitrateThresholds:
    """Seuils de débit en kbps : en dessous de medium = LOW, au-dessus de high = HIGH."""

    medium: int
    high: int


@dataclass(frozen=True)
class TierThresholds:
    """Seuils vidéo et audio d'un palier."""

    video: BitrateThresholds
    audio: BitrateThresholds


@dataclass(frozen=True)
class QualityThresholds:
    """
    Configuration complète du scoring.

    Attributs :
        tiers : Seuils par palier
        codec_efficiency : Facteur multiplicatif appliqué au débit vidéo
            selon le codec normalisé ("HEVC" -> 2.0 : un débit HEVC vaut
            deux fois un débit H.264 équivalent)
    """

    tiers: dict[QualityTier, TierThresholds]
    codec_efficiency: dict[str, float] = field(default_factory=dict)

    def for_tier(self, tier: QualityTier) -> TierThresholds:
        """Retourne les seuils du palier demandé."""
        return self.tiers[tier]

    def efficiency_for(self, video_codec: Optional[str]) -> float:
        """Retourne le facteur d'efficacité du codec (1.0 si inconnu)."""
        if not video_codec:
            return 1.0
        return self.codec_efficiency.get(video_codec, 1.0)


@dataclass(frozen=True)
class QualityScore:
    """
    Résultat du scoring qualité d'un média ou d'une version.

    Attributs :
        quality_tier : Palier déduit de la résolution
        tier_quality : Niveau global dans le palier
        video_quality : Niveau du signal vidéo seul
        audio_quality : Niveau du signal audio seul
        tier_score : Score global 0-100 cohérent avec tier_quality
        bitrate_tier_score : Sous-score vidéo 0-100
        audio_tier_score : Sous-score audio 0-100
        overall_score : Score global (égal à tier_score)
        needs_upgrade : True si une meilleure version est souhaitable
        issues : Problèmes détectés, dans un ordre stable
        premium_indicators : Atouts hors score ("HDR", "Object audio", "10-bit")
        media_item_id : Identifiant du média évalué (si persisté)
    """

    quality_tier: QualityTier
    tier_quality: TierQuality
    video_quality: TierQuality
    audio_quality: TierQuality
    tier_score: int
    bitrate_tier_score: int
    audio_tier_score: int
    overall_score: int
    needs_upgrade: bool
    issues: tuple[str, ...] = ()
    premium_indicators: tuple[str, ...] = ()
    media_item_id: Optional[int] = None

    @property
    def breakdown(self) -> dict[str, int]:
        """Retourne le détail des sous-scores."""
        return {
            "video": self.bitrate_tier_score,
            "audio": self.audio_tier_score,
            "tier": self.tier_score,
        }


@dataclass(frozen=True)
class QualityDistribution:
    """Répartition d'un ensemble de scores par palier et par niveau."""

    total: int = 0
    by_tier: dict[str, dict[str, int]] = field(default_factory=dict)
    by_quality: dict[str, int] = field(default_factory=dict)
    needs_upgrade: int = 0
    average_score: float = 0.0
