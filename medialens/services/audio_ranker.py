"""
Classement des pistes audio par qualité.

Paliers de codec (du meilleur au moins bon) :
- 5 : audio objet (Atmos, DTS:X)
- 4 : sans perte (TrueHD, DTS-HD MA, FLAC, ALAC, PCM)
- 3 : quasi sans perte (DTS-HD High Resolution)
- 2 : avec perte haut de gamme (EAC3, DTS)
- 1 : standard (AC3, AAC, MP3...)

La meilleure piste est choisie par palier, puis nombre de canaux, puis
débit. Les pistes de commentaire sont écartées sauf si le fichier n'a
que des pistes de commentaire.
"""

from typing import Optional

from medialens.core.value_objects import AudioTrack


# ====================
# Paliers de codec
# ====================

TIER_OBJECT_AUDIO = 5
TIER_LOSSLESS = 4
TIER_NEAR_LOSSLESS = 3
TIER_HIGH_LOSSY = 2
TIER_STANDARD = 1

TIER_NAMES: dict[int, str] = {
    TIER_OBJECT_AUDIO: "Object Audio",
    TIER_LOSSLESS: "Lossless",
    TIER_NEAR_LOSSLESS: "Near-Lossless",
    TIER_HIGH_LOSSY: "High-Quality Lossy",
    TIER_STANDARD: "Standard",
}

OBJECT_AUDIO_CODECS = ("atmos", "dts:x", "dtsx")

LOSSLESS_CODECS = (
    "truehd", "dts-hd ma", "dtshd_ma", "dtsma", "dts-hd.ma",
    "flac", "alac", "pcm", "lpcm", "wav", "aiff",
)

NEAR_LOSSLESS_CODECS = (
    "dts-hd hra", "dtshd_hra", "dts-hd.hra", "dtshra", "dts-hd", "dtshd",
)

HIGH_LOSSY_CODECS = (
    "dts", "eac3", "ec-3", "dd+", "ddp", "dolby digital plus", "e-ac-3",
)

COMMENTARY_MARKER = "commentary"


def get_audio_codec_tier(codec: Optional[str], has_object_audio: bool = False) -> int:
    """
    Retourne le palier de qualité d'un codec audio.

    Args:
        codec: Codec normalisé ou brut
        has_object_audio: Audio objet détecté sur la piste

    Returns:
        Palier de 1 (standard) à 5 (audio objet)
    """
    if has_object_audio:
        return TIER_OBJECT_AUDIO

    codec_lower = (codec or "").lower()
    if any(marker in codec_lower for marker in OBJECT_AUDIO_CODECS):
        return TIER_OBJECT_AUDIO
    if any(marker in codec_lower for marker in LOSSLESS_CODECS):
        return TIER_LOSSLESS
    if any(marker in codec_lower for marker in NEAR_LOSSLESS_CODECS):
        return TIER_NEAR_LOSSLESS
    if any(marker in codec_lower for marker in HIGH_LOSSY_CODECS):
        return TIER_HIGH_LOSSY
    return TIER_STANDARD


def is_lossless_codec(codec: Optional[str]) -> bool:
    """Vrai pour un codec sans perte ou audio objet."""
    return get_audio_codec_tier(codec) >= TIER_LOSSLESS


def is_commentary_track(title: Optional[str]) -> bool:
    """Vrai si le titre de la piste désigne un commentaire."""
    if not title:
        return False
    return COMMENTARY_MARKER in title.lower()


def _rank_key(track: AudioTrack) -> tuple[int, int, int]:
    return (
        get_audio_codec_tier(track.codec, track.has_object_audio),
        track.channels,
        track.bitrate,
    )


def select_best_audio_track(tracks: tuple[AudioTrack, ...] | list[AudioTrack]) -> Optional[AudioTrack]:
    """
    Sélectionne la meilleure piste audio.

    À égalité complète, la première piste rencontrée est conservée.

    Returns:
        La meilleure piste, ou None si aucune piste
    """
    if not tracks:
        return None

    candidates = [track for track in tracks if not is_commentary_track(track.title)]
    if not candidates:
        candidates = list(tracks)

    best = candidates[0]
    for track in candidates[1:]:
        if _rank_key(track) > _rank_key(best):
            best = track
    return best
