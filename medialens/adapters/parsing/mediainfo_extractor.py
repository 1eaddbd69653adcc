"""
Implementation de l'extracteur de metadonnees techniques avec pymediainfo.

Ce module fournit MediaInfoExtractor qui implemente IMediaInfoExtractor.
Il traduit le vocabulaire MediaInfo ("MLP FBA", "XLL", "BT.2020"...) vers
un RawMediaInfo ; la normalisation reste du ressort de services/normalization.
"""

from pathlib import Path
from typing import Any, Optional

from loguru import logger
from pymediainfo import MediaInfo as PyMediaInfo

from medialens.core.ports.parser import IMediaInfoExtractor
from medialens.core.value_objects.media_info import RawAudioTrack, RawMediaInfo


class MediaInfoExtractor(IMediaInfoExtractor):
    """
    Extracteur de metadonnees techniques utilisant pymediainfo.

    Les debits MediaInfo sont en bits/s, la duree en millisecondes.
    """

    # Formats audio MediaInfo dont le nom differe du codec usuel
    AUDIO_FORMAT_ALIASES: dict[str, str] = {
        "mlp fba": "truehd",
        "mlp": "truehd",
    }

    # Extensions DTS (format_additionalfeatures) -> profil
    DTS_FEATURE_PROFILES: dict[str, str] = {
        "xll x": "X",
        "xll": "MA",
        "xbr": "HRA",
    }

    # Formats de conteneur MediaInfo -> alias reconnus par la normalisation
    CONTAINER_ALIASES: dict[str, str] = {
        "mpeg-4": "mp4",
        "mpeg-ts": "ts",
        "bdav": "ts",
        "avi": "avi",
    }

    def extract(self, file_path: Path) -> Optional[RawMediaInfo]:
        """
        Extrait les metadonnees techniques brutes d'un fichier video.

        Args:
            file_path: Chemin complet vers le fichier video

        Returns:
            RawMediaInfo, ou None si l'extraction echoue
            (fichier absent, non video, corrompu, etc.)
        """
        if not file_path.exists():
            logger.warning(f"Fichier introuvable pour mediainfo : {file_path}")
            return None

        try:
            media_info = PyMediaInfo.parse(str(file_path), full=False)
        except Exception as e:
            logger.error(f"Echec de l'analyse mediainfo de {file_path.name}: {e}")
            return None

        video_tracks = [t for t in media_info.tracks if t.track_type == "Video"]
        audio_tracks = [t for t in media_info.tracks if t.track_type == "Audio"]
        general_tracks = [t for t in media_info.tracks if t.track_type == "General"]

        if not video_tracks:
            logger.warning(f"Aucune piste video dans {file_path.name}")
            return None

        video = video_tracks[0]
        general = general_tracks[0] if general_tracks else None
        profile, level = self._split_profile(video.format_profile)

        return RawMediaInfo(
            video_codec=video.format,
            video_width=video.width,
            video_height=video.height,
            video_bitrate=video.bit_rate or video.nominal_bit_rate,
            video_bitrate_unit="bps",
            video_frame_rate=video.frame_rate,
            video_bit_depth=video.bit_depth,
            video_profile=profile,
            video_level=level,
            hdr_type=video.hdr_format_commercial or video.hdr_format,
            color_trc=self._compact(video.transfer_characteristics),
            color_primaries=self._compact(video.color_primaries),
            color_space=video.color_space,
            audio_tracks=tuple(self._extract_audio_track(t) for t in audio_tracks),
            container=self._extract_container(general),
            duration_seconds=self._extract_duration(general),
            overall_bitrate=general.overall_bit_rate if general else None,
            overall_bitrate_unit="bps",
        )

    def _extract_audio_track(self, track: Any) -> RawAudioTrack:
        """Traduit une piste audio MediaInfo en RawAudioTrack."""
        audio_format = track.format or ""
        codec = self.AUDIO_FORMAT_ALIASES.get(audio_format.lower(), audio_format)

        return RawAudioTrack(
            codec=codec or None,
            channels=track.channel_s,
            channel_layout=track.channel_layout,
            bitrate=track.bit_rate or track.nominal_bit_rate,
            bitrate_unit="bps",
            sample_rate=track.sampling_rate,
            profile=self._audio_profile(codec, track),
            title=track.title,
            language=track.language,
            is_default=str(track.default or "").lower() == "yes",
        )

    def _audio_profile(self, codec: str, track: Any) -> Optional[str]:
        """
        Profil de la piste audio.

        Pour DTS, les extensions ("XLL" = Master Audio, "XLL X" = DTS:X)
        sont converties en profil court. Sinon le nom commercial
        ("Dolby TrueHD with Dolby Atmos") porte les marqueurs utiles.
        """
        if codec.lower() == "dts":
            features = (track.format_additionalfeatures or "").lower().strip()
            if features in self.DTS_FEATURE_PROFILES:
                return self.DTS_FEATURE_PROFILES[features]
        return track.commercial_name or track.format_commercial_ifany

    def _split_profile(self, format_profile: Optional[str]) -> tuple[Optional[str], Optional[str]]:
        """
        Separe profil et niveau : "Main 10@L5.1@High" -> ("Main 10", "L5.1").
        """
        if not format_profile:
            return None, None
        parts = str(format_profile).split("@")
        level = parts[1] if len(parts) > 1 else None
        return parts[0] or None, level

    def _compact(self, value: Optional[str]) -> Optional[str]:
        """Retire points et espaces : "BT.2020" -> "bt2020", "PQ" -> "pq"."""
        if not value:
            return None
        return str(value).lower().replace(".", "").replace(" ", "")

    def _extract_container(self, general: Any) -> Optional[str]:
        if general is None or not general.format:
            return None
        value = str(general.format)
        return self.CONTAINER_ALIASES.get(value.lower(), value)

    def _extract_duration(self, general: Any) -> Optional[float]:
        """
        Extrait la duree en SECONDES depuis la piste generale.

        pymediainfo retourne la duree en millisecondes.
        """
        if general is None or general.duration is None:
            return None
        return float(general.duration) / 1000
