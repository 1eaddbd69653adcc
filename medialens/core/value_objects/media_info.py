"""
Objets valeur pour les informations techniques des fichiers média.

Deux niveaux de représentation :
- RawMediaInfo : champs bruts tels que fournis par un provider (pymediainfo,
  Plex, Kodi...). Aucun invariant : tout champ peut être absent, vide ou
  exprimé dans une unité ambiguë.
- NormalizedMediaInfo : enregistrement canonique produit par l'agrégateur
  de normalisation (services/normalization).

Les pistes audio suivent le même découpage (RawAudioTrack / AudioTrack).
"""

from dataclasses import dataclass
from typing import Optional, Union

# Valeur numérique telle que rencontrée chez les providers : nombre ou chaîne
NumberLike = Union[int, float, str]


@dataclass(frozen=True)
class RawAudioTrack:
    """
    Piste audio brute d'un fichier.

    Attributs :
        codec : Codec tel que rapporté ("A_TRUEHD", "E-AC-3", "dca"...)
        channels : Nombre de canaux (nombre ou chaîne)
        channel_layout : Disposition des canaux ("5.1(side)", "L R C LFE"...)
        bitrate : Débit dans l'unité bitrate_unit
        bitrate_unit : "bps", "kbps", "mbps" ou "auto"
        sample_rate : Fréquence d'échantillonnage (Hz ou kHz)
        profile : Profil/format commercial ("MA", "Atmos"...)
        title : Titre de la piste ("Commentary", "Atmos 7.1"...)
        language : Code langue
        is_default : Piste par défaut du conteneur
    """

    codec: Optional[str] = None
    channels: Optional[NumberLike] = None
    channel_layout: Optional[str] = None
    bitrate: Optional[NumberLike] = None
    bitrate_unit: str = "auto"
    sample_rate: Optional[NumberLike] = None
    profile: Optional[str] = None
    title: Optional[str] = None
    language: Optional[str] = None
    is_default: bool = False


@dataclass(frozen=True)
class RawMediaInfo:
    """
    Informations techniques brutes d'un fichier, tous champs optionnels.

    Les adapters providers traduisent leur format natif vers cette forme
    avant d'appeler normalize_media_info().
    """

    # Vidéo
    video_codec: Optional[str] = None
    video_width: Optional[NumberLike] = None
    video_height: Optional[NumberLike] = None
    video_bitrate: Optional[NumberLike] = None
    video_bitrate_unit: str = "auto"
    video_frame_rate: Optional[NumberLike] = None
    video_bit_depth: Optional[NumberLike] = None
    video_profile: Optional[str] = None
    video_level: Optional[str] = None
    hdr_type: Optional[str] = None
    color_trc: Optional[str] = None
    color_primaries: Optional[str] = None
    color_space: Optional[str] = None

    # Audio (piste principale)
    audio_codec: Optional[str] = None
    audio_channels: Optional[NumberLike] = None
    audio_channel_layout: Optional[str] = None
    audio_bitrate: Optional[NumberLike] = None
    audio_bitrate_unit: str = "auto"
    audio_sample_rate: Optional[NumberLike] = None
    audio_profile: Optional[str] = None
    audio_title: Optional[str] = None
    audio_tracks: tuple[RawAudioTrack, ...] = ()

    # Conteneur
    container: Optional[str] = None
    duration_seconds: Optional[NumberLike] = None
    overall_bitrate: Optional[NumberLike] = None
    overall_bitrate_unit: str = "auto"


@dataclass(frozen=True)
class AudioTrack:
    """Piste audio normalisée."""

    index: int = 0
    codec: str = ""
    codec_full: str = ""
    channels: int = 2
    bitrate: int = 0
    sample_rate: Optional[int] = None
    language: Optional[str] = None
    title: Optional[str] = None
    profile: Optional[str] = None
    has_object_audio: bool = False
    is_default: bool = False


@dataclass(frozen=True)
class NormalizedMediaInfo:
    """
    Enregistrement canonique des informations techniques.

    Les débits sont en kbps (entiers >= 0), les dimensions en pixels,
    la fréquence d'échantillonnage en Hz. hdr_format vaut None en SDR.
    """

    video_codec: str = ""
    resolution: str = ""
    width: int = 0
    height: int = 0
    video_bitrate: int = 0
    video_frame_rate: Optional[float] = None
    video_bit_depth: Optional[int] = None
    video_profile: Optional[str] = None
    video_level: Optional[str] = None
    hdr_format: Optional[str] = None
    color_space: Optional[str] = None
    audio_codec: str = ""
    audio_codec_full: str = ""
    audio_channels: int = 2
    audio_bitrate: int = 0
    audio_sample_rate: Optional[int] = None
    audio_title: Optional[str] = None
    has_object_audio: bool = False
    audio_tracks: tuple[AudioTrack, ...] = ()
    container: str = ""
    duration_seconds: Optional[int] = None
