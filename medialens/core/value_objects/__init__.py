"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- RawMediaInfo, RawAudioTrack : Informations techniques brutes d'un provider
- NormalizedMediaInfo, AudioTrack : Informations techniques canoniques
- MediaType : Type de media (MOVIE, EPISODE, UNKNOWN)
- ParsedFilename : Informations extraites du parsing d'un nom de fichier
- QualityTier, TierQuality : Palier et niveau de qualite
- BitrateThresholds, TierThresholds, QualityThresholds : Seuils du scoring
- QualityScore, QualityDistribution : Resultats du scoring
"""

from medialens.core.value_objects.media_info import (
    AudioTrack,
    NormalizedMediaInfo,
    RawAudioTrack,
    RawMediaInfo,
)
from medialens.core.value_objects.parsed_info import (
    MediaType,
    ParsedFilename,
)
from medialens.core.value_objects.quality import (
    BitrateThresholds,
    QualityDistribution,
    QualityScore,
    QualityThresholds,
    QualityTier,
    TierQuality,
    TierThresholds,
)

__all__ = [
    "AudioTrack",
    "NormalizedMediaInfo",
    "RawAudioTrack",
    "RawMediaInfo",
    "MediaType",
    "ParsedFilename",
    "BitrateThresholds",
    "QualityDistribution",
    "QualityScore",
    "QualityThresholds",
    "QualityTier",
    "TierQuality",
    "TierThresholds",
]
