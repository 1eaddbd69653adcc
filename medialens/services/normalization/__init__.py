"""
Normalisation des métadonnées techniques hétérogènes.

Modules :
- codecs : codecs vidéo/audio, conteneurs, formats HDR (tables de règles ordonnées)
- units : débits, fréquences, canaux, résolution
- object_audio : détection Atmos / DTS:X
- estimates : estimation du débit audio manquant
- aggregator : composition en NormalizedMediaInfo

Toutes les fonctions sont pures et totales : aucune entrée ne lève d'exception.
"""

from medialens.services.normalization.aggregator import (
    normalize_audio_track,
    normalize_media_info,
)
from medialens.services.normalization.codecs import (
    get_full_audio_codec_name,
    normalize_audio_codec,
    normalize_container,
    normalize_hdr_format,
    normalize_video_codec,
)
from medialens.services.normalization.object_audio import has_object_audio
from medialens.services.normalization.units import (
    normalize_audio_channels,
    normalize_bitrate,
    normalize_frame_rate,
    normalize_resolution,
    normalize_sample_rate,
)

__all__ = [
    "normalize_media_info",
    "normalize_audio_track",
    "normalize_video_codec",
    "normalize_audio_codec",
    "normalize_container",
    "normalize_hdr_format",
    "get_full_audio_codec_name",
    "has_object_audio",
    "normalize_bitrate",
    "normalize_frame_rate",
    "normalize_sample_rate",
    "normalize_audio_channels",
    "normalize_resolution",
]
