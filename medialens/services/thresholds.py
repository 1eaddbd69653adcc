"""
Chargement des seuils de qualité depuis les paramètres.

Clés reconnues (kbps), avec les anciennes clés en repli :
- quality_video_<palier>_medium (ancienne : quality_video_<palier>_low)
- quality_video_<palier>_high
- quality_audio_<palier>_medium (ancienne : quality_audio_<palier>_good)
- quality_audio_<palier>_high (ancienne : quality_audio_<palier>_excellent)
- quality_codec_h264 / h265 / av1 / vp9 (facteurs d'efficacité)

<palier> vaut sd, 720p, 1080p ou 4k. Une valeur absente, non numérique,
non finie ou non positive est remplacée par la valeur par défaut.
"""

import math
from typing import Optional

from loguru import logger

from medialens.core.ports.repositories import ISettingsRepository
from medialens.core.value_objects import (
    BitrateThresholds,
    QualityThresholds,
    QualityTier,
    TierThresholds,
)


# ====================
# Valeurs par défaut (kbps)
# ====================

DEFAULT_VIDEO_THRESHOLDS: dict[QualityTier, BitrateThresholds] = {
    QualityTier.SD: BitrateThresholds(medium=1500, high=3500),
    QualityTier.HD_720: BitrateThresholds(medium=3000, high=8000),
    QualityTier.FHD_1080: BitrateThresholds(medium=6000, high=15000),
    QualityTier.UHD_4K: BitrateThresholds(medium=15000, high=40000),
}

DEFAULT_AUDIO_THRESHOLDS: dict[QualityTier, BitrateThresholds] = {
    QualityTier.SD: BitrateThresholds(medium=128, high=192),
    QualityTier.HD_720: BitrateThresholds(medium=192, high=320),
    QualityTier.FHD_1080: BitrateThresholds(medium=256, high=640),
    QualityTier.UHD_4K: BitrateThresholds(medium=320, high=1000),
}

# Facteurs par libellé de codec normalisé
DEFAULT_CODEC_EFFICIENCY: dict[str, float] = {
    "H.264": 1.0,
    "HEVC": 2.0,
    "AV1": 3.0,
    "VP9": 1.8,
}

SETTINGS_PREFIX = "quality_"

TIER_KEYS: dict[QualityTier, str] = {
    QualityTier.SD: "sd",
    QualityTier.HD_720: "720p",
    QualityTier.FHD_1080: "1080p",
    QualityTier.UHD_4K: "4k",
}

CODEC_KEYS: dict[str, str] = {
    "H.264": "quality_codec_h264",
    "HEVC": "quality_codec_h265",
    "AV1": "quality_codec_av1",
    "VP9": "quality_codec_vp9",
}


def default_thresholds() -> QualityThresholds:
    """Retourne la configuration par défaut."""
    return QualityThresholds(
        tiers={
            tier: TierThresholds(
                video=DEFAULT_VIDEO_THRESHOLDS[tier],
                audio=DEFAULT_AUDIO_THRESHOLDS[tier],
            )
            for tier in QualityTier
        },
        codec_efficiency=dict(DEFAULT_CODEC_EFFICIENCY),
    )


def _read_number(settings: dict[str, str], *keys: str) -> Optional[float]:
    """Lit la première clé présente avec une valeur numérique positive."""
    for key in keys:
        raw = settings.get(key)
        if raw is None or raw == "":
            continue
        try:
            value = float(raw)
        except (TypeError, ValueError):
            logger.warning(f"Paramètre {key} ignoré : valeur non numérique '{raw}'")
            continue
        if not math.isfinite(value):
            logger.warning(f"Paramètre {key} ignoré : valeur non finie '{raw}'")
            continue
        if value <= 0:
            logger.warning(f"Paramètre {key} ignoré : valeur non positive {value}")
            continue
        return value
    return None


def _bitrate_pair(
    settings: dict[str, str],
    kind: str,
    tier_key: str,
    default: BitrateThresholds,
    legacy_medium: str,
    legacy_high: Optional[str],
) -> BitrateThresholds:
    medium_keys = [f"quality_{kind}_{tier_key}_medium", f"quality_{kind}_{tier_key}_{legacy_medium}"]
    high_keys = [f"quality_{kind}_{tier_key}_high"]
    if legacy_high:
        high_keys.append(f"quality_{kind}_{tier_key}_{legacy_high}")

    medium = _read_number(settings, *medium_keys)
    high = _read_number(settings, *high_keys)
    return BitrateThresholds(
        medium=round(medium) if medium is not None else default.medium,
        high=round(high) if high is not None else default.high,
    )


def thresholds_from_settings(settings: dict[str, str]) -> QualityThresholds:
    """
    Construit la configuration depuis un dictionnaire de paramètres.

    Args:
        settings: Paramètres clé/valeur (typiquement le préfixe "quality_")

    Returns:
        QualityThresholds complet, les valeurs manquantes prenant les défauts
    """
    tiers = {}
    for tier, tier_key in TIER_KEYS.items():
        tiers[tier] = TierThresholds(
            video=_bitrate_pair(
                settings, "video", tier_key, DEFAULT_VIDEO_THRESHOLDS[tier], "low", None
            ),
            audio=_bitrate_pair(
                settings, "audio", tier_key, DEFAULT_AUDIO_THRESHOLDS[tier], "good", "excellent"
            ),
        )

    efficiency = {}
    for codec, key in CODEC_KEYS.items():
        value = _read_number(settings, key)
        efficiency[codec] = value if value is not None else DEFAULT_CODEC_EFFICIENCY[codec]

    return QualityThresholds(tiers=tiers, codec_efficiency=efficiency)


class QualityThresholdsProvider:
    """
    Fournit les seuils lus depuis le dépôt de paramètres.

    load() relit toujours les paramètres et mémorise l'instantané ;
    current() renvoie l'instantané (en le chargeant si besoin) ;
    invalidate() l'oublie pour forcer une relecture.

    Un scan appelle load() une fois au début de la passe et utilise cet
    instantané jusqu'à la fin : un changement de paramètre en cours de
    passe est pris en compte à la passe suivante.
    """

    def __init__(self, settings_repository: ISettingsRepository) -> None:
        self._settings_repository = settings_repository
        self._snapshot: Optional[QualityThresholds] = None

    def load(self) -> QualityThresholds:
        """Relit les paramètres et retourne un nouvel instantané."""
        settings = self._settings_repository.get_by_prefix(SETTINGS_PREFIX)
        self._snapshot = thresholds_from_settings(settings)
        logger.debug(f"Seuils qualité chargés ({len(settings)} paramètres personnalisés)")
        return self._snapshot

    def current(self) -> QualityThresholds:
        """Retourne l'instantané courant, chargé au premier appel."""
        if self._snapshot is None:
            return self.load()
        return self._snapshot

    def invalidate(self) -> None:
        """Oublie l'instantané courant."""
        self._snapshot = None

    def set_threshold(self, key: str, value: float) -> None:
        """
        Enregistre un seuil et invalide l'instantané.

        Raises:
            ValueError: Si la clé n'est pas un paramètre de qualité connu
                ou si la valeur n'est pas un nombre fini positif
        """
        if key not in known_setting_keys():
            raise ValueError(f"Paramètre de qualité inconnu : {key}")
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"La valeur de {key} doit être un nombre fini positif")
        self._settings_repository.set(key, str(value))
        self.invalidate()


def known_setting_keys() -> list[str]:
    """Liste les clés de paramètres reconnues (hors anciennes clés)."""
    keys = []
    for kind in ("video", "audio"):
        for tier_key in TIER_KEYS.values():
            keys.append(f"quality_{kind}_{tier_key}_medium")
            keys.append(f"quality_{kind}_{tier_key}_high")
    keys.extend(CODEC_KEYS.values())
    return keys
