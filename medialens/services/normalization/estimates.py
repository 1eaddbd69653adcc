"""
Estimation du débit audio quand le fichier n'en rapporte pas.

Les valeurs sont des débits typiques par codec et nombre de canaux.
Elles servent au scoring uniquement : un débit estimé reste repérable
via is_estimated_bitrate().
"""

from medialens.services.normalization.units import round_half_up

# (fragments du codec, débit 8 canaux et plus, débit 6-7 canaux, débit <= 5 canaux)
AUDIO_BITRATE_ESTIMATES: tuple[tuple[tuple[str, ...], int, int, int], ...] = (
    (("truehd", "atmos"), 6000, 4000, 2500),
    (("dtshd_ma", "dts-hd ma", "dts-hd.ma"), 5000, 3500, 2000),
    (("dtshd", "dts-hd"), 2500, 2500, 1500),
    (("flac", "pcm", "lpcm"), 3000, 3000, 1500),
    (("dts",), 1509, 1509, 768),
    (("eac3", "e-ac-3", "ec3"), 1024, 640, 384),
    (("ac3", "ac-3"), 640, 640, 384),
    (("aac",), 384, 384, 256),
    (("mp3",), 320, 320, 192),
    (("opus",), 256, 256, 128),
)

DEFAULT_SURROUND_ESTIMATE = 640
DEFAULT_STEREO_ESTIMATE = 256

# Part du débit restant (total - vidéo) attribuée à l'audio, le reste
# étant occupé par les sous-titres et le conteneur
AUDIO_SHARE_OF_REMAINDER = 0.95

ESTIMATED_BITRATES = frozenset(
    {128, 192, 256, 320, 384, 640, 768, 1024, 1500, 1509,
     2000, 2500, 3000, 3500, 4000, 4500, 5000, 6000}
)


def estimate_audio_bitrate(codec: object, channels: object = None) -> int:
    """
    Estime le débit d'une piste audio en kbps.

    Exemples : ("truehd", 8) -> 6000, ("eac3", 6) -> 640, ("aac", 2) -> 256.
    """
    codec_value = codec.lower() if isinstance(codec, str) else ""
    ch = channels if isinstance(channels, int) and not isinstance(channels, bool) and channels > 0 else 2

    for fragments, eight_plus, six_plus, other in AUDIO_BITRATE_ESTIMATES:
        if any(fragment in codec_value for fragment in fragments):
            if ch >= 8:
                return eight_plus
            if ch >= 6:
                return six_plus
            return other

    return DEFAULT_SURROUND_ESTIMATE if ch >= 6 else DEFAULT_STEREO_ESTIMATE


def calculate_audio_bitrate_from_file(
    total_bitrate: int, video_bitrate: int, audio_track_count: int
) -> int:
    """
    Déduit le débit par piste audio depuis le débit global du fichier.

    Plus fiable que l'estimation pour les codecs sans perte. Retourne 0
    si le calcul est impossible.
    """
    if total_bitrate <= 0 or video_bitrate <= 0 or audio_track_count <= 0:
        return 0
    audio_bitrate = (total_bitrate - video_bitrate) * AUDIO_SHARE_OF_REMAINDER
    if audio_bitrate <= 0:
        return 0
    return round_half_up(audio_bitrate / audio_track_count)


def is_estimated_bitrate(bitrate: int) -> bool:
    """Vrai si le débit correspond à une valeur d'estimation connue."""
    return bitrate in ESTIMATED_BITRATES
