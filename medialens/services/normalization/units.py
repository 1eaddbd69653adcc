"""
Normalisation des unités : débits, fréquences d'image, fréquences
d'échantillonnage, nombre de canaux et résolution.

Toutes les fonctions sont totales : une entrée absente, vide ou
incompréhensible donne une valeur par défaut, jamais une exception.

Heuristiques à connaître :
- En mode "auto", un débit > AUTO_BPS_THRESHOLD est lu en bps et un
  débit < AUTO_MBPS_THRESHOLD en Mbps. Une vraie piste voix à 50 kbps
  sera donc lue comme 50 Mbps.
- Une fréquence d'échantillonnage < KHZ_THRESHOLD est lue en kHz.
  Une valeur littérale de 500 Hz devient 500 kHz.
"""

import math
import re
from typing import Optional, Union

# ====================
# Seuils des heuristiques
# ====================

AUTO_BPS_THRESHOLD = 100_000
AUTO_MBPS_THRESHOLD = 100
KHZ_THRESHOLD = 1000

DEFAULT_AUDIO_CHANNELS = 2

BITRATE_UNITS = ("bps", "kbps", "mbps", "auto")

# Ordre significatif : "7.1" doit être testé avant "1.0" etc.
CHANNEL_LAYOUT_TOKENS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("7.1",), 8),
    (("6.1",), 7),
    (("5.1",), 6),
    (("5.0",), 5),
    (("4.1",), 5),
    (("4.0", "quad"), 4),
    (("stereo", "2.0"), 2),
    (("mono", "1.0"), 1),
)

# (hauteur minimale, largeur minimale, libellé)
RESOLUTION_BREAKPOINTS: tuple[tuple[int, int, str], ...] = (
    (2160, 3840, "4K"),
    (1080, 1920, "1080p"),
    (720, 1280, "720p"),
    (480, 720, "480p"),
)

_LEADING_FLOAT = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_LEADING_INT = re.compile(r"^\s*([-+]?\d+)")

Number = Union[int, float]


def parse_number(value: object) -> Optional[float]:
    """
    Lit une valeur numérique tolérante : nombre ou chaîne commençant par un nombre.

    "25000 kbps" -> 25000.0, "abc" -> None, NaN -> None.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            match = _LEADING_FLOAT.match(value)
            if not match:
                return None
            number = float(match.group(1))
        else:
            return None
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_int(value: object) -> Optional[int]:
    """Lit un entier : les nombres sont arrondis, les chaînes lues jusqu'au premier non-chiffre."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    number = parse_number(value)
    if number is None:
        return None
    return round_half_up(number)


def round_half_up(value: float) -> int:
    """Arrondi à l'entier le plus proche, les demis vers le haut."""
    return math.floor(value + 0.5)


def _to_kbps(value: float) -> int:
    # Un Mbps énorme peut dépasser la plage des flottants une fois converti
    if not math.isfinite(value):
        return 0
    return round_half_up(value)


def normalize_bitrate(value: object, unit: Optional[str] = "auto") -> int:
    """
    Normalise un débit en kbps entiers.

    Args:
        value: Débit (nombre ou chaîne)
        unit: "bps", "kbps", "mbps" ou "auto" (unité inconnue, absente ou non textuelle = "auto")

    Returns:
        Débit en kbps, 0 pour une valeur absente, négative, nulle ou invalide
    """
    number = parse_number(value)
    if number is None or number <= 0:
        return 0

    unit = unit.lower() if isinstance(unit, str) else "auto"
    if unit == "bps":
        return _to_kbps(number / 1000)
    if unit == "mbps":
        return _to_kbps(number * 1000)
    if unit == "kbps":
        return _to_kbps(number)

    if number > AUTO_BPS_THRESHOLD:
        return _to_kbps(number / 1000)
    if number < AUTO_MBPS_THRESHOLD:
        return _to_kbps(number * 1000)
    return _to_kbps(number)


def _round_frame_rate(value: float) -> Optional[float]:
    if not math.isfinite(value) or value <= 0:
        return None
    scaled = value * 1000
    if not math.isfinite(scaled):
        return None
    return math.floor(scaled + 0.5) / 1000


def normalize_frame_rate(value: object) -> Optional[float]:
    """
    Normalise une fréquence d'image, arrondie à 3 décimales.

    Accepte 23.976, "23.976", "24000/1001", "29.97fps".
    Retourne None si la valeur est invalide ou non positive.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = parse_number(value)
        return _round_frame_rate(number) if number is not None else None
    if not isinstance(value, str):
        return None

    text = value.lower().replace("fps", "").strip()
    if "/" in text:
        numerator_text, _, denominator_text = text.partition("/")
        numerator = parse_number(numerator_text)
        denominator = parse_number(denominator_text)
        if numerator is None or denominator is None or denominator <= 0:
            return None
        return _round_frame_rate(numerator / denominator)

    number = parse_number(text)
    if number is None:
        return None
    return _round_frame_rate(number)


def normalize_sample_rate(value: object) -> Optional[int]:
    """
    Normalise une fréquence d'échantillonnage en Hz.

    Une valeur < KHZ_THRESHOLD est supposée en kHz (48 -> 48000).
    """
    number = parse_int(value)
    if number is None or number <= 0:
        return None
    if number < KHZ_THRESHOLD:
        return number * 1000
    return number


def normalize_audio_channels(channels: object, layout: Optional[str] = None) -> int:
    """
    Détermine le nombre de canaux audio.

    Priorité : nombre explicite, puis disposition ("5.1(side)" -> 6),
    puis comptage des canaux séparés par '+' ("FL+FR+FC" -> 3),
    puis stéréo par défaut.
    """
    count = parse_int(channels)
    if count is not None and count > 0:
        return count

    if layout and isinstance(layout, str):
        layout_lower = layout.lower()
        for tokens, layout_channels in CHANNEL_LAYOUT_TOKENS:
            if any(token in layout_lower for token in tokens):
                return layout_channels

        plus_count = layout_lower.count("+") + 1
        if plus_count > 1:
            return plus_count

    return DEFAULT_AUDIO_CHANNELS


def normalize_resolution(width: object, height: object) -> str:
    """
    Calcule le libellé de résolution depuis les dimensions.

    La hauteur est l'indicateur principal, la largeur le secondaire
    (un 1920x800 recadré reste du 1080p).
    """
    w = parse_number(width) or 0
    h = parse_number(height) or 0

    for min_height, min_width, label in RESOLUTION_BREAKPOINTS:
        if h >= min_height or w >= min_width:
            return label
    if h > 0 or w > 0:
        return "SD"
    return ""
