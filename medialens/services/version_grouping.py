"""
Regroupement des fichiers en versions et choix de la meilleure version.

Plusieurs fichiers peuvent représenter le même film (version cinéma et
version longue, doublons de qualités différentes). Ils sont regroupés
par identité :
- "tmdb:<id>" quand l'identifiant TMDB est connu ;
- sinon "title:<titre normalisé>|<année>", le titre étant débarrassé
  des suffixes d'édition ("Blade Runner - Director's Cut" -> "blade runner").

La meilleure version d'un groupe est celle de plus haut score_version() :
palier de résolution x 100000, +1000 si HDR, + débit vidéo. À égalité,
la première version rencontrée l'emporte.
"""

import re
from collections.abc import Callable, Hashable, Sequence
from typing import Optional, TypeVar

from medialens.core.entities import MediaItem, MediaItemVersion

T = TypeVar("T")

EDITION_SUFFIX_PATTERN = re.compile(
    r"\s*[-:(]\s*(director'?s?\s*cut|extended|unrated|theatrical|imax|remastered"
    r"|special\s*edition|ultimate\s*edition|collector'?s?\s*edition)\s*[):]?\s*$",
    re.IGNORECASE,
)
EMPTY_PARENS_PATTERN = re.compile(r"\s*\(\s*\)\s*$")

REMUX_PATTERN = re.compile(r"remux", re.IGNORECASE)
WEB_DL_PATTERN = re.compile(r"web-dl|webdl", re.IGNORECASE)

TIER_RANK_MULTIPLIER = 100_000
HDR_BONUS = 1000

# Rang par fragment de résolution, testé dans l'ordre
TIER_RANKS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("2160", "4k"), 4),
    (("1080",), 3),
    (("720",), 2),
)
DEFAULT_TIER_RANK = 1


def normalize_group_title(title: Optional[str]) -> str:
    """
    Normalise un titre pour le regroupement.

    "Blade Runner - Director's Cut" -> "blade runner"
    "Aliens (Extended)" -> "aliens"
    """
    value = EDITION_SUFFIX_PATTERN.sub("", title or "")
    value = EMPTY_PARENS_PATTERN.sub("", value)
    return value.lower().strip()


def group_key(title: Optional[str], year: Optional[int], tmdb_id: Optional[int] = None) -> str:
    """Clé de regroupement : TMDB si connu, sinon titre normalisé et année."""
    if tmdb_id:
        return f"tmdb:{tmdb_id}"
    return f"title:{normalize_group_title(title)}|{year if year else ''}"


def group_by_key(items: Sequence[T], key: Callable[[T], Hashable]) -> list[list[T]]:
    """Regroupe les éléments par clé en conservant l'ordre de première apparition."""
    groups: dict[Hashable, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return list(groups.values())


def detect_source_type(source: Optional[str]) -> Optional[str]:
    """Type de source depuis le tag du nom de fichier : "REMUX", "WEB-DL" ou None."""
    if not source:
        return None
    if REMUX_PATTERN.search(source):
        return "REMUX"
    if WEB_DL_PATTERN.search(source):
        return "WEB-DL"
    return None


def build_version_label(version: MediaItemVersion) -> str:
    """
    Libellé d'affichage : résolution, HDR, type de source, édition.

    Les parties vides sont omises ; un HDR valant "None" est ignoré.
    """
    parts = [version.resolution]
    if version.hdr_format and version.hdr_format != "None":
        parts.append(version.hdr_format)
    parts.append(version.source_type or "")
    parts.append(version.edition or "")
    return " ".join(part for part in parts if part)


def tier_rank(resolution: Optional[str]) -> int:
    """Rang de résolution : 2160p/4K -> 4, 1080p -> 3, 720p -> 2, autre -> 1."""
    value = (resolution or "").lower()
    for fragments, rank in TIER_RANKS:
        if any(fragment in value for fragment in fragments):
            return rank
    return DEFAULT_TIER_RANK


def score_version(version: MediaItemVersion) -> int:
    """Score de sélection : rang x 100000 + bonus HDR + débit vidéo (kbps)."""
    score = tier_rank(version.resolution) * TIER_RANK_MULTIPLIER
    if version.hdr_format and version.hdr_format != "None":
        score += HDR_BONUS
    return score + (version.video_bitrate or 0)


def select_best_version(versions: Sequence[MediaItemVersion]) -> int:
    """
    Index de la meilleure version.

    Comparaison stricte : à score égal, la première version est conservée.

    Raises:
        ValueError: Si la liste est vide
    """
    if not versions:
        raise ValueError("Aucune version à comparer")
    best_index = 0
    best_score = score_version(versions[0])
    for index, version in enumerate(versions[1:], start=1):
        score = score_version(version)
        if score > best_score:
            best_index, best_score = index, score
    return best_index


def mark_best_version(versions: Sequence[MediaItemVersion]) -> MediaItemVersion:
    """Marque exactement une version is_best et la retourne."""
    best_index = select_best_version(versions)
    for index, version in enumerate(versions):
        version.is_best = index == best_index
    return versions[best_index]


TECHNICAL_FIELDS = (
    "resolution", "width", "height", "video_codec", "video_bitrate",
    "video_frame_rate", "video_bit_depth", "video_profile", "hdr_format",
    "color_space", "audio_codec", "audio_codec_full", "audio_channels",
    "audio_bitrate", "audio_sample_rate", "audio_title", "has_object_audio",
    "audio_tracks", "container", "duration_seconds",
)


def apply_best_version(item: MediaItem, best: MediaItemVersion, version_count: int) -> MediaItem:
    """Reporte les attributs techniques de la meilleure version sur le média."""
    for name in TECHNICAL_FIELDS:
        setattr(item, name, getattr(best, name))
    item.file_path = best.file_path
    item.file_size = best.file_size
    item.version_count = version_count
    return item
