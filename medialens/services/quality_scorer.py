"""
Service d'évaluation de la qualité des médias.

Ce module calcule, pour un média ou une version, un palier (déterminé par
la résolution seule), un niveau de qualité dans ce palier et des
sous-scores vidéo/audio, à partir de seuils de débit configurables.

Sous-score (vidéo ou audio) pour un débit b et des seuils {medium, high} :
- b inconnu (0) : 0
- b < medium : floor(60 * b / medium), soit 0-59 (LOW)
- medium <= b < high : floor(60 + 40 * (b - medium) / (high - medium)), soit 60-99 (MEDIUM)
- b >= high : 100 (HIGH)

Le débit vidéo est pondéré par l'efficacité du codec (HEVC x2, AV1 x3...).

Exceptions audio :
- sans perte ou audio objet : 100, jamais signalé
- EAC3/DTS en 6 canaux ou plus : 100 ; AC3 en 6 canaux ou plus : 60
- stéréo : le seuil medium est divisé par deux
- piste de commentaire : jamais signalée, sous-score d'au moins 60

Niveau global : le plus faible des niveaux vidéo et audio (HIGH seulement si
les deux sont HIGH, LOW dès que l'un est LOW). Le score global vaut
round(0.7 * vidéo + 0.3 * audio), ramené dans la plage du niveau.
HDR, audio objet et 10 bits sont des indicateurs premium hors score.
"""

import math
from typing import Iterable, Optional

from medialens.core.entities import TechnicalDetails
from medialens.core.value_objects import (
    AudioTrack,
    BitrateThresholds,
    QualityDistribution,
    QualityScore,
    QualityThresholds,
    QualityTier,
    TierQuality,
)
from medialens.services.audio_ranker import (
    is_commentary_track,
    is_lossless_codec,
    select_best_audio_track,
)
from medialens.services.normalization.units import round_half_up


# ====================
# Courbe des sous-scores
# ====================

MEDIUM_SCORE = 60
HIGH_SCORE = 100
LOW_MAX_SCORE = MEDIUM_SCORE - 1
MEDIUM_MAX_SCORE = HIGH_SCORE - 1

# Poids du score global
WEIGHT_VIDEO = 0.7
WEIGHT_AUDIO = 0.3

STEREO_MAX_CHANNELS = 2
SURROUND_MIN_CHANNELS = 6
STEREO_MEDIUM_FACTOR = 0.5
DEEP_COLOR_MIN_BITS = 10

PREMIUM_LOSSY_CODECS = ("eac3", "e-ac-3", "dd+", "dts")
STANDARD_SURROUND_CODECS = ("ac3", "ac-3")

# Paliers pour lesquels une couleur 8 bits est signalée
DEEP_COLOR_TIERS = (QualityTier.UHD_4K, QualityTier.FHD_1080)


# ====================
# Palier
# ====================

def classify_tier(resolution: Optional[str]) -> QualityTier:
    """
    Détermine le palier de qualité depuis le libellé de résolution.

    "4K"/"2160p" -> 4K, "1080p"/"1080i" -> 1080p, "720p" -> 720p, autre -> SD.
    """
    value = (resolution or "").lower()
    if "4k" in value or "2160" in value:
        return QualityTier.UHD_4K
    if "1080" in value:
        return QualityTier.FHD_1080
    if "720" in value:
        return QualityTier.HD_720
    return QualityTier.SD


# ====================
# Sous-scores
# ====================

def bitrate_sub_score(bitrate: float, thresholds: BitrateThresholds) -> int:
    """
    Calcule un sous-score 0-100 pour un débit.

    Monotone croissante en débit. Un débit inférieur à medium donne
    toujours un score inférieur à 60.

    Args:
        bitrate: Débit en kbps (éventuellement pondéré)
        thresholds: Seuils du palier

    Returns:
        Score de 0 à 100.
    """
    if bitrate <= 0:
        return 0
    if bitrate >= thresholds.high:
        return HIGH_SCORE
    if bitrate < thresholds.medium:
        return math.floor(MEDIUM_SCORE * bitrate / thresholds.medium)
    span = thresholds.high - thresholds.medium
    return math.floor(MEDIUM_SCORE + (HIGH_SCORE - MEDIUM_SCORE) * (bitrate - thresholds.medium) / span)


def quality_from_score(score: int) -> TierQuality:
    """Convertit un sous-score en niveau : < 60 LOW, < 100 MEDIUM, 100 HIGH."""
    if score >= HIGH_SCORE:
        return TierQuality.HIGH
    if score >= MEDIUM_SCORE:
        return TierQuality.MEDIUM
    return TierQuality.LOW


def effective_video_bitrate(item: TechnicalDetails, thresholds: QualityThresholds) -> float:
    """Débit vidéo pondéré par l'efficacité du codec."""
    return item.video_bitrate * thresholds.efficiency_for(item.video_codec)


def score_video(item: TechnicalDetails, thresholds: QualityThresholds, tier: QualityTier) -> int:
    """Sous-score vidéo du média dans son palier."""
    return bitrate_sub_score(
        effective_video_bitrate(item, thresholds), thresholds.for_tier(tier).video
    )


def primary_audio_track(item: TechnicalDetails) -> AudioTrack:
    """
    Piste audio évaluée : la meilleure piste si la liste est connue,
    sinon la piste principale décrite par les champs du média.
    """
    best = select_best_audio_track(item.audio_tracks)
    if best is not None:
        return best
    return AudioTrack(
        codec=item.audio_codec,
        codec_full=item.audio_codec_full,
        channels=item.audio_channels,
        bitrate=item.audio_bitrate,
        title=item.audio_title,
        has_object_audio=item.has_object_audio,
    )


def _is_premium_audio(track: AudioTrack) -> bool:
    return track.has_object_audio or is_lossless_codec(track.codec)


def _audio_thresholds(track: AudioTrack, tier_audio: BitrateThresholds) -> BitrateThresholds:
    if track.channels <= STEREO_MAX_CHANNELS:
        return BitrateThresholds(
            medium=tier_audio.medium * STEREO_MEDIUM_FACTOR, high=tier_audio.high
        )
    return tier_audio


def _fixed_audio_score(track: AudioTrack) -> Optional[int]:
    """Score imposé par le codec, indépendant du débit ; None si le débit décide."""
    if _is_premium_audio(track):
        return HIGH_SCORE
    codec = (track.codec or "").lower()
    if track.channels >= SURROUND_MIN_CHANNELS:
        if any(marker in codec for marker in PREMIUM_LOSSY_CODECS):
            return HIGH_SCORE
        if any(marker in codec for marker in STANDARD_SURROUND_CODECS):
            return MEDIUM_SCORE
    return None


def score_audio(track: AudioTrack, thresholds: QualityThresholds, tier: QualityTier) -> int:
    """Sous-score audio d'une piste dans le palier du média."""
    fixed = _fixed_audio_score(track)
    if fixed is not None:
        score = fixed
    else:
        score = bitrate_sub_score(
            track.bitrate, _audio_thresholds(track, thresholds.for_tier(tier).audio)
        )
    if is_commentary_track(track.title):
        score = max(score, MEDIUM_SCORE)
    return score


# ====================
# Niveau global
# ====================

_QUALITY_ORDER = (TierQuality.LOW, TierQuality.MEDIUM, TierQuality.HIGH)


def combine_quality(video: TierQuality, audio: TierQuality) -> TierQuality:
    """Combine les niveaux vidéo et audio : le plus faible des deux l'emporte."""
    return min(video, audio, key=_QUALITY_ORDER.index)


def combine_scores(video_score: int, audio_score: int, quality: TierQuality) -> int:
    """Score global pondéré, ramené dans la plage du niveau."""
    score = round_half_up(WEIGHT_VIDEO * video_score + WEIGHT_AUDIO * audio_score)
    if quality == TierQuality.HIGH:
        return HIGH_SCORE
    if quality == TierQuality.MEDIUM:
        return min(max(score, MEDIUM_SCORE), MEDIUM_MAX_SCORE)
    return min(score, LOW_MAX_SCORE)


# ====================
# Problèmes et indicateurs
# ====================

def format_bitrate(kbps: int) -> str:
    """Formate un débit : "8500 kbps" -> "8.5 Mbps", "640 kbps" reste en kbps."""
    if kbps >= 1000:
        return f"{kbps / 1000:.1f} Mbps"
    return f"{kbps} kbps"


def has_hdr(item: TechnicalDetails) -> bool:
    """Vrai si un format HDR est renseigné ("None" compte comme absent)."""
    return bool(item.hdr_format) and item.hdr_format != "None"


def collect_issues(
    item: TechnicalDetails,
    track: AudioTrack,
    thresholds: QualityThresholds,
    tier: QualityTier,
) -> tuple[str, ...]:
    """
    Liste les problèmes détectés, dans un ordre stable.

    Un débit inconnu (0) n'est jamais signalé comme faible.
    """
    issues: list[str] = []
    tier_thresholds = thresholds.for_tier(tier)
    tier_label = tier.value

    efficiency = thresholds.efficiency_for(item.video_codec)
    if item.video_bitrate > 0 and effective_video_bitrate(item, thresholds) < tier_thresholds.video.medium:
        codec_name = f" ({item.video_codec})" if efficiency > 1.0 else ""
        issues.append(
            f"Low bitrate for {tier_label}: {format_bitrate(item.video_bitrate)}{codec_name}"
        )

    if tier == QualityTier.UHD_4K and not has_hdr(item):
        issues.append("4K content without HDR")

    if tier in DEEP_COLOR_TIERS and (
        not item.video_bit_depth or item.video_bit_depth < DEEP_COLOR_MIN_BITS
    ):
        issues.append("8-bit color (10-bit recommended)")

    if tier == QualityTier.UHD_4K and not _is_premium_audio(track):
        issues.append("No premium audio")

    if is_commentary_track(track.title):
        return tuple(issues)

    if track.channels < STEREO_MAX_CHANNELS:
        issues.append("Mono audio")
    elif _fixed_audio_score(track) is None and track.bitrate > 0:
        audio_thresholds = _audio_thresholds(track, tier_thresholds.audio)
        if track.bitrate < audio_thresholds.medium:
            if track.channels <= STEREO_MAX_CHANNELS:
                issues.append(f"Low audio quality: {track.bitrate} kbps")
            else:
                issues.append(f"Low audio bitrate for {tier_label}: {track.bitrate} kbps")

    return tuple(issues)


def premium_indicators(item: TechnicalDetails, track: AudioTrack) -> tuple[str, ...]:
    """Atouts non comptés dans le score : HDR, audio objet, couleur 10 bits."""
    indicators = []
    if has_hdr(item):
        indicators.append("HDR")
    if track.has_object_audio:
        indicators.append("Object audio")
    if item.video_bit_depth and item.video_bit_depth >= DEEP_COLOR_MIN_BITS:
        indicators.append("10-bit")
    return tuple(indicators)


# ====================
# Score complet
# ====================

def calculate_quality_score(
    item: TechnicalDetails,
    thresholds: QualityThresholds,
    media_item_id: Optional[int] = None,
) -> QualityScore:
    """
    Calcule le score de qualité d'un média ou d'une version.

    Fonction pure de (item, thresholds) : deux appels sur les mêmes
    entrées donnent des résultats égaux.

    Args:
        item: MediaItem ou MediaItemVersion
        thresholds: Seuils en vigueur pour la passe de scan
        media_item_id: Identifiant à reporter dans le score

    Returns:
        QualityScore avec niveaux, sous-scores, problèmes et indicateurs.
    """
    tier = classify_tier(item.resolution)
    track = primary_audio_track(item)

    video_score = score_video(item, thresholds, tier)
    audio_score = score_audio(track, thresholds, tier)
    video_quality = quality_from_score(video_score)
    audio_quality = quality_from_score(audio_score)
    tier_quality = combine_quality(video_quality, audio_quality)
    tier_score = combine_scores(video_score, audio_score, tier_quality)

    return QualityScore(
        quality_tier=tier,
        tier_quality=tier_quality,
        video_quality=video_quality,
        audio_quality=audio_quality,
        tier_score=tier_score,
        bitrate_tier_score=video_score,
        audio_tier_score=audio_score,
        overall_score=tier_score,
        needs_upgrade=tier_quality == TierQuality.LOW,
        issues=collect_issues(item, track, thresholds, tier),
        premium_indicators=premium_indicators(item, track),
        media_item_id=media_item_id,
    )


# ====================
# Rapports
# ====================

def summarize_distribution(scores: Iterable[QualityScore]) -> QualityDistribution:
    """Compte les scores par palier et par niveau."""
    by_tier = {tier.value: {quality.value: 0 for quality in TierQuality} for tier in QualityTier}
    by_quality = {quality.value: 0 for quality in TierQuality}
    total = 0
    upgrades = 0
    score_sum = 0

    for score in scores:
        total += 1
        score_sum += score.overall_score
        by_tier[score.quality_tier.value][score.tier_quality.value] += 1
        by_quality[score.tier_quality.value] += 1
        if score.needs_upgrade:
            upgrades += 1

    return QualityDistribution(
        total=total,
        by_tier=by_tier,
        by_quality=by_quality,
        needs_upgrade=upgrades,
        average_score=round(score_sum / total, 1) if total else 0.0,
    )


def recommend_upgrade(item: TechnicalDetails, score: QualityScore) -> str:
    """
    Recommande un format cible pour remplacer le fichier.

    Returns:
        "No upgrade needed", "4K UHD Blu-ray" ou "Blu-ray"
    """
    if item.height >= 2160 and score.overall_score >= 90:
        return "No upgrade needed"
    if item.height >= 1080 and score.overall_score < 80:
        return "4K UHD Blu-ray"
    return "Blu-ray"


class QualityScorerService:
    """
    Service d'évaluation de la qualité.

    Ce service est sans état et peut être utilisé comme singleton ; les
    seuils sont toujours fournis par l'appelant.
    """

    def calculate_quality_score(
        self,
        item: TechnicalDetails,
        thresholds: QualityThresholds,
        media_item_id: Optional[int] = None,
    ) -> QualityScore:
        """
        Calcule le score de qualité d'un média.

        Voir calculate_quality_score() pour les détails.
        """
        return calculate_quality_score(item, thresholds, media_item_id)

    def summarize_distribution(self, scores: Iterable[QualityScore]) -> QualityDistribution:
        """
        Répartition des scores.

        Voir summarize_distribution() pour les détails.
        """
        return summarize_distribution(scores)

    def recommend_upgrade(self, item: TechnicalDetails, score: QualityScore) -> str:
        """
        Format cible recommandé.

        Voir recommend_upgrade() pour les détails.
        """
        return recommend_upgrade(item, score)
