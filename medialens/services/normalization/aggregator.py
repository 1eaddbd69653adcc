"""
Agrégation : RawMediaInfo -> NormalizedMediaInfo.

Composition pure des normaliseurs, sans I/O ni connaissance des
providers. Quand l'enregistrement brut ne précise pas de piste audio
principale, la meilleure piste de audio_tracks en tient lieu.
"""

from typing import Optional

from medialens.core.value_objects import (
    AudioTrack,
    NormalizedMediaInfo,
    RawAudioTrack,
    RawMediaInfo,
)
from medialens.services.audio_ranker import select_best_audio_track
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
    parse_int,
)


def _positive_int(value: object) -> Optional[int]:
    number = parse_int(value)
    if number is None or number <= 0:
        return None
    return number


def _text(value: object) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _detect_object_audio(codec: object, normalized_codec: str, profile, title, layout) -> bool:
    # Le libellé normalisé couvre les codecs bruts opaques ("dca" + profil DTS:X)
    return has_object_audio(codec, profile, title, layout) or has_object_audio(
        normalized_codec, profile, title, layout
    )


def normalize_audio_track(track: RawAudioTrack, index: int = 0) -> AudioTrack:
    """Normalise une piste audio brute."""
    codec = normalize_audio_codec(track.codec, track.profile)
    return AudioTrack(
        index=index,
        codec=codec,
        codec_full=get_full_audio_codec_name(
            track.codec, track.profile, track.title, track.channel_layout
        ),
        channels=normalize_audio_channels(track.channels, track.channel_layout),
        bitrate=normalize_bitrate(track.bitrate, track.bitrate_unit),
        sample_rate=normalize_sample_rate(track.sample_rate),
        language=_text(track.language),
        title=_text(track.title),
        profile=_text(track.profile),
        has_object_audio=_detect_object_audio(
            track.codec, codec, track.profile, track.title, track.channel_layout
        ),
        is_default=bool(track.is_default),
    )


def _primary_audio_from_raw(raw: RawMediaInfo) -> AudioTrack:
    return normalize_audio_track(
        RawAudioTrack(
            codec=raw.audio_codec,
            channels=raw.audio_channels,
            channel_layout=raw.audio_channel_layout,
            bitrate=raw.audio_bitrate,
            bitrate_unit=raw.audio_bitrate_unit,
            sample_rate=raw.audio_sample_rate,
            profile=raw.audio_profile,
            title=raw.audio_title,
        )
    )


def normalize_media_info(raw: RawMediaInfo) -> NormalizedMediaInfo:
    """
    Produit l'enregistrement canonique d'un fichier.

    Exemple :
        RawMediaInfo(video_codec="x265", video_width=3840, video_height=2160,
                     video_bitrate=25000000, video_bitrate_unit="bps",
                     audio_codec="eac3", audio_channels=6, hdr_type="DolbyVision")
        -> video_codec="HEVC", resolution="4K", video_bitrate=25000,
           audio_codec="EAC3", audio_channels=6, hdr_format="Dolby Vision"
    """
    width = max(parse_int(raw.video_width) or 0, 0)
    height = max(parse_int(raw.video_height) or 0, 0)

    tracks = tuple(
        normalize_audio_track(track, index) for index, track in enumerate(raw.audio_tracks)
    )
    if _text(raw.audio_codec) is None and tracks:
        primary = select_best_audio_track(tracks)
    else:
        primary = _primary_audio_from_raw(raw)

    return NormalizedMediaInfo(
        video_codec=normalize_video_codec(raw.video_codec),
        resolution=normalize_resolution(width, height),
        width=width,
        height=height,
        video_bitrate=normalize_bitrate(raw.video_bitrate, raw.video_bitrate_unit),
        video_frame_rate=normalize_frame_rate(raw.video_frame_rate),
        video_bit_depth=_positive_int(raw.video_bit_depth),
        video_profile=_text(raw.video_profile),
        video_level=_text(raw.video_level),
        hdr_format=normalize_hdr_format(
            raw.hdr_type,
            raw.color_trc,
            raw.color_primaries,
            raw.video_bit_depth,
            raw.video_profile,
        ),
        color_space=_text(raw.color_space),
        audio_codec=primary.codec,
        audio_codec_full=primary.codec_full,
        audio_channels=primary.channels,
        audio_bitrate=primary.bitrate,
        audio_sample_rate=primary.sample_rate,
        audio_title=primary.title,
        has_object_audio=primary.has_object_audio,
        audio_tracks=tracks,
        container=normalize_container(raw.container),
        duration_seconds=_positive_int(raw.duration_seconds),
    )
