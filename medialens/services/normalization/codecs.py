"""
Normalisation des codecs, conteneurs et formats HDR.

Chaque classification est une table ordonnée de règles (prédicat, libellé)
évaluée de haut en bas : la première règle qui correspond gagne. L'ordre
compte pour les alias qui se recouvrent ("dts-hd ma" avant "dts",
"dolby vision" avant "hdr").

Les entrées inconnues sont renvoyées en majuscules (codecs, conteneurs)
ou None (HDR). Une entrée vide ou absente donne "".
"""

from dataclasses import dataclass
from typing import Callable, Optional

from medialens.services.normalization.object_audio import (
    has_atmos_marker,
    has_dts_x_marker,
)
from medialens.services.normalization.units import parse_number

Predicate = Callable[[str], bool]


@dataclass(frozen=True)
class Rule:
    """Règle de classification : le libellé s'applique si le prédicat est vrai."""

    predicate: Predicate
    label: str


def matches(equals: tuple[str, ...] = (), contains: tuple[str, ...] = ()) -> Predicate:
    """Construit un prédicat : égalité stricte avec un alias ou présence d'un fragment."""

    def predicate(value: str) -> bool:
        return value in equals or any(fragment in value for fragment in contains)

    return predicate


def first_match(rules: tuple[Rule, ...], value: str) -> Optional[str]:
    """Retourne le libellé de la première règle vérifiée, None sinon."""
    for rule in rules:
        if rule.predicate(value):
            return rule.label
    return None


def _clean(value: object) -> str:
    if not isinstance(value, str):
        return ""
    return value.lower().strip()


# ====================
# Codecs vidéo
# ====================

VIDEO_CODEC_RULES: tuple[Rule, ...] = (
    Rule(matches(("hevc", "h265", "h.265", "x265"), ("hevc",)), "HEVC"),
    Rule(matches(("h264", "h.264", "avc", "x264"), ("avc", "h264")), "H.264"),
    Rule(matches(("av1",), ("av01",)), "AV1"),
    Rule(matches(contains=("vp9",)), "VP9"),
    Rule(matches(contains=("vp8",)), "VP8"),
    Rule(matches(("mp4v",), ("mpeg4", "divx", "xvid")), "MPEG-4"),
    Rule(matches(("mp2v",), ("mpeg2",)), "MPEG-2"),
    Rule(matches(("vc-1", "wvc1"), ("vc1", "wmv")), "VC-1"),
    Rule(matches(("mpeg1", "mpeg1video")), "MPEG-1"),
    Rule(matches(contains=("prores",)), "ProRes"),
    Rule(matches(contains=("dnxh",)), "DNxHD"),
)


def normalize_video_codec(codec: object) -> str:
    """
    Normalise un codec vidéo vers un libellé standard.

    Exemples : "x265" -> "HEVC", "avc1" -> "H.264", "V_MPEG4/ISO/AVC" -> "H.264".
    """
    value = _clean(codec)
    if not value:
        return ""
    return first_match(VIDEO_CODEC_RULES, value) or value.upper()


# ====================
# Codecs audio
# ====================

# Variantes DTS signalées par un profil séparé (codec "dca" ou "dts")
DTS_PROFILE_RULES: tuple[Rule, ...] = (
    Rule(matches(("ma",), ("dts-hd ma",)), "DTS-HD MA"),
    Rule(matches(("hra",), ("dts-hd hra", "dts-hd hr")), "DTS-HD"),
    Rule(matches(("x",), ("dts:x", "dtsx")), "DTS:X"),
)

AUDIO_CODEC_RULES: tuple[Rule, ...] = (
    Rule(matches(contains=("truehd",)), "TrueHD"),
    Rule(matches(contains=("dts-hd ma", "dtshd_ma", "dts-hd.ma")), "DTS-HD MA"),
    Rule(matches(contains=("dts-hd hr", "dts-hd", "dtshd")), "DTS-HD"),
    Rule(matches(contains=("dts:x", "dtsx")), "DTS:X"),
    Rule(matches(("dca",), ("dts",)), "DTS"),
    Rule(matches(("ec3", "e-ac-3", "ec-3"), ("eac3", "dolby digital plus")), "EAC3"),
    Rule(matches(("ac3", "ac-3", "a52"), ("dolby digital",)), "AC3"),
    Rule(matches(contains=("aac",)), "AAC"),
    Rule(matches(contains=("flac",)), "FLAC"),
    Rule(matches(contains=("alac",)), "ALAC"),
    Rule(matches(("pcm", "lpcm"), ("pcm_",)), "PCM"),
    Rule(matches(contains=("mp3", "mpeg audio")), "MP3"),
    Rule(matches(contains=("opus",)), "Opus"),
    Rule(matches(contains=("vorbis",)), "Vorbis"),
    Rule(matches(contains=("wma",)), "WMA"),
)


def normalize_audio_codec(codec: object, profile: object = None) -> str:
    """
    Normalise un codec audio vers un libellé standard.

    Certains providers signalent les variantes DTS par un codec "dca"/"dts"
    accompagné d'un profil ("MA", "HRA", "X") : ce cas est traité avant
    la table générale.

    Args:
        codec: Codec brut
        profile: Profil audio optionnel

    Returns:
        Libellé normalisé ("TrueHD", "DTS-HD MA", "EAC3"...), "" si absent
    """
    value = _clean(codec)
    if not value:
        return ""
    profile_value = _clean(profile)

    if value == "dca" or (value == "dts" and profile_value):
        label = first_match(DTS_PROFILE_RULES, profile_value)
        if label:
            return label
        if value == "dca":
            return "DTS"

    return first_match(AUDIO_CODEC_RULES, value) or value.upper()


def get_full_audio_codec_name(
    codec: object,
    profile: object = None,
    title: object = None,
    channel_layout: object = None,
) -> str:
    """
    Libellé d'affichage incluant l'audio objet : "TrueHD Atmos", "EAC3 Atmos", "DTS:X".

    Utilise les mêmes marqueurs que has_object_audio().
    """
    base = normalize_audio_codec(codec, profile)
    if not base:
        return ""

    if base in ("TrueHD", "EAC3") and has_atmos_marker(profile, title, channel_layout):
        return f"{base} Atmos"
    if base in ("DTS", "DTS-HD MA") and has_dts_x_marker(profile, title):
        return "DTS:X"
    return base


# ====================
# Conteneurs
# ====================

CONTAINER_RULES: tuple[Rule, ...] = (
    Rule(matches(("mkv", "matroska")), "MKV"),
    Rule(matches(("mp4", "m4v")), "MP4"),
    Rule(matches(("avi",)), "AVI"),
    Rule(matches(("mov", "quicktime")), "MOV"),
    Rule(matches(("wmv", "asf")), "WMV"),
    Rule(matches(("ts", "mpegts")), "TS"),
    Rule(matches(("webm",)), "WebM"),
    Rule(matches(("flv",)), "FLV"),
    Rule(matches(("ogm", "ogg")), "OGG"),
)


def normalize_container(container: object) -> str:
    """
    Normalise un format de conteneur.

    Une liste séparée par des virgules ("matroska,webm") est réduite à
    son premier élément.
    """
    if not isinstance(container, str) or not container:
        return ""
    value = container.split(",")[0].lower().strip()
    if not value:
        return ""
    return first_match(CONTAINER_RULES, value) or value.upper()


# ====================
# Formats HDR
# ====================

HDR_TYPE_RULES: tuple[Rule, ...] = (
    Rule(matches(contains=("dolbyvision", "dolby vision", "dovi")), "Dolby Vision"),
    Rule(matches(contains=("hdr10+", "hdr10plus")), "HDR10+"),
    Rule(matches(("hdr",), ("hdr10",)), "HDR10"),
    Rule(matches(contains=("hlg",)), "HLG"),
)

HDR_PROFILE_RULES: tuple[Rule, ...] = (
    Rule(matches(contains=("dolby vision", "dovi")), "Dolby Vision"),
)

BT2020_PRIMARIES = ("bt2020", "rec2020")
PQ_TRANSFERS = ("smpte2084", "pq", "st2084")


def _color_rules(primaries: str, bit_depth: Optional[float]) -> tuple[Rule, ...]:
    """Règles sur la fonction de transfert, dépendantes des primaires et de la profondeur."""
    is_bt2020 = any(token in primaries for token in BT2020_PRIMARIES)
    deep_color = bit_depth is not None and bit_depth >= 10
    return (
        Rule(lambda trc: "dovi" in trc or "dovi" in primaries, "Dolby Vision"),
        Rule(matches(contains=("hdr10+", "smpte2094")), "HDR10+"),
        Rule(matches(("arib-std-b67",), ("hlg",)), "HLG"),
        Rule(lambda trc: is_bt2020 and any(t in trc for t in PQ_TRANSFERS), "HDR10"),
        Rule(lambda trc: is_bt2020 and deep_color, "HDR10"),
    )


def normalize_hdr_format(
    hdr_type: object = None,
    color_trc: object = None,
    color_primaries: object = None,
    bit_depth: object = None,
    profile: object = None,
) -> Optional[str]:
    """
    Détermine le format HDR.

    Ordre de résolution : type HDR explicite, profil vidéo, puis
    heuristiques sur la fonction de transfert et les primaires, enfin
    10 bits + BT.2020.

    Returns:
        "Dolby Vision", "HDR10+", "HDR10", "HLG", ou None en SDR
    """
    hdr_value = _clean(hdr_type)
    if hdr_value:
        label = first_match(HDR_TYPE_RULES, hdr_value)
        if label:
            return label

    profile_value = _clean(profile)
    if profile_value:
        label = first_match(HDR_PROFILE_RULES, profile_value)
        if label:
            return label

    rules = _color_rules(_clean(color_primaries), parse_number(bit_depth))
    return first_match(rules, _clean(color_trc))
