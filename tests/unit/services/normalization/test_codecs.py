"""
Tests unitaires pour la normalisation des codecs, conteneurs et formats HDR.
"""

import pytest

from medialens.services.normalization import (
    get_full_audio_codec_name,
    has_object_audio,
    normalize_audio_codec,
    normalize_container,
    normalize_hdr_format,
    normalize_video_codec,
)


class TestNormalizeVideoCodec:
    """Tests pour normalize_video_codec."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("x265", "HEVC"),
            ("hevc", "HEVC"),
            ("H.265", "HEVC"),
            ("avc1", "H.264"),
            ("V_MPEG4/ISO/AVC", "H.264"),
            ("x264", "H.264"),
            ("av01", "AV1"),
            ("VP9", "VP9"),
            ("XviD", "MPEG-4"),
            ("mpeg2video", "MPEG-2"),
            ("WVC1", "VC-1"),
            ("prores", "ProRes"),
        ],
    )
    def test_aliases(self, raw: str, expected: str) -> None:
        """Les alias connus sont ramenes au libelle standard."""
        assert normalize_video_codec(raw) == expected

    def test_unknown_codec_uppercased(self) -> None:
        """Un codec inconnu est renvoye en majuscules."""
        assert normalize_video_codec("theora") == "THEORA"
        assert normalize_video_codec("  theora ") == "THEORA"

    def test_empty_values(self) -> None:
        """Une valeur absente ou vide donne une chaine vide."""
        assert normalize_video_codec(None) == ""
        assert normalize_video_codec("") == ""
        assert normalize_video_codec(42) == ""

    def test_idempotent_on_canonical_labels(self) -> None:
        """Les libelles canoniques sont stables."""
        for label in ("HEVC", "H.264", "AV1", "VP9", "MPEG-4", "MPEG-2", "VC-1", "ProRes", "DNxHD"):
            assert normalize_video_codec(label) == label


class TestNormalizeAudioCodec:
    """Tests pour normalize_audio_codec."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("A_TRUEHD", "TrueHD"),
            ("truehd", "TrueHD"),
            ("DTS-HD MA", "DTS-HD MA"),
            ("dtshd_ma", "DTS-HD MA"),
            ("DTS-HD HRA", "DTS-HD"),
            ("dca", "DTS"),
            ("DTS", "DTS"),
            ("E-AC-3", "EAC3"),
            ("ec3", "EAC3"),
            ("AC-3", "AC3"),
            ("a52", "AC3"),
            ("aac_latm", "AAC"),
            ("FLAC", "FLAC"),
            ("pcm_s24le", "PCM"),
            ("MPEG Audio", "MP3"),
            ("opus", "Opus"),
        ],
    )
    def test_aliases(self, raw: str, expected: str) -> None:
        """Les alias connus sont ramenes au libelle standard."""
        assert normalize_audio_codec(raw) == expected

    @pytest.mark.parametrize(
        "codec,profile,expected",
        [
            ("dca", "ma", "DTS-HD MA"),
            ("dca", "MA", "DTS-HD MA"),
            ("dca", "hra", "DTS-HD"),
            ("dca", "x", "DTS:X"),
            ("dts", "MA", "DTS-HD MA"),
            ("dts", "DTS", "DTS"),
            ("dca", "core", "DTS"),
        ],
    )
    def test_dts_profile_variants(self, codec: str, profile: str, expected: str) -> None:
        """Le profil distingue les variantes DTS."""
        assert normalize_audio_codec(codec, profile) == expected

    def test_unknown_codec_uppercased(self) -> None:
        """Un codec inconnu est renvoye en majuscules."""
        assert normalize_audio_codec("speex") == "SPEEX"
        assert normalize_audio_codec(" speex  ") == "SPEEX"

    def test_empty_values(self) -> None:
        """Une valeur absente donne une chaine vide."""
        assert normalize_audio_codec(None) == ""
        assert normalize_audio_codec("   ") == ""

    def test_idempotent_on_canonical_labels(self) -> None:
        """Les libelles canoniques sont stables."""
        for label in ("TrueHD", "DTS-HD MA", "DTS-HD", "DTS:X", "DTS", "EAC3", "AC3", "AAC", "FLAC", "PCM"):
            assert normalize_audio_codec(label) == label


class TestFullAudioCodecName:
    """Tests pour get_full_audio_codec_name."""

    def test_truehd_atmos(self) -> None:
        """TrueHD + Atmos dans le profil."""
        assert get_full_audio_codec_name("truehd", "Atmos") == "TrueHD Atmos"

    def test_eac3_atmos_from_title(self) -> None:
        """EAC3 + Atmos dans le titre."""
        assert get_full_audio_codec_name("eac3", None, "English Atmos 5.1") == "EAC3 Atmos"

    def test_dts_x_from_title(self) -> None:
        """DTS + marqueur DTS:X."""
        assert get_full_audio_codec_name("dts", None, "DTS:X 7.1") == "DTS:X"

    def test_aac_atmos_is_not_object_audio(self) -> None:
        """Atmos n'est reconnu que sur TrueHD ou EAC3."""
        assert get_full_audio_codec_name("aac", "Atmos") == "AAC"

    def test_plain_codec(self) -> None:
        """Sans marqueur, le libelle de base est retourne."""
        assert get_full_audio_codec_name("ac3") == "AC3"
        assert get_full_audio_codec_name(None) == ""


class TestHasObjectAudio:
    """Tests pour has_object_audio."""

    def test_truehd_atmos_profile(self) -> None:
        """Marqueur Atmos dans le profil d'une piste TrueHD."""
        assert has_object_audio("truehd", "Atmos", None, None) is True

    def test_eac3_atmos_layout(self) -> None:
        """Marqueur Atmos dans la disposition des canaux."""
        assert has_object_audio("E-AC-3", None, None, "5.1 Atmos") is True

    def test_atmos_requires_base_codec(self) -> None:
        """Atmos sur AAC ou DTS n'est pas de l'audio objet."""
        assert has_object_audio("aac", "Atmos", None, None) is False
        assert has_object_audio("dts", "Atmos", None, None) is False

    def test_dts_x_title(self) -> None:
        """DTS:X dans le titre d'une piste DTS."""
        assert has_object_audio("dts", None, "DTS-X Master", None) is True

    def test_dts_x_not_in_layout(self) -> None:
        """La disposition n'est pas consultee pour DTS:X."""
        assert has_object_audio("dts", None, None, "dts:x") is False

    def test_no_marker(self) -> None:
        """Sans marqueur, pas d'audio objet."""
        assert has_object_audio("truehd") is False
        assert has_object_audio(None) is False


class TestNormalizeContainer:
    """Tests pour normalize_container."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("matroska,webm", "MKV"),
            ("Matroska", "MKV"),
            ("mp4", "MP4"),
            ("mov,mp4,m4a,3gp,3g2,mj2", "MOV"),
            ("mpegts", "TS"),
            ("avi", "AVI"),
        ],
    )
    def test_aliases(self, raw: str, expected: str) -> None:
        """Les formats connus sont normalises, seule la premiere entree compte."""
        assert normalize_container(raw) == expected

    def test_unknown_and_empty(self) -> None:
        """Format inconnu en majuscules, absent -> ""."""
        assert normalize_container("rmvb") == "RMVB"
        assert normalize_container(" rmvb ,avi") == "RMVB"
        assert normalize_container("   ") == ""
        assert normalize_container(None) == ""
        assert normalize_container("") == ""


class TestNormalizeHdrFormat:
    """Tests pour normalize_hdr_format."""

    @pytest.mark.parametrize(
        "hdr_type,expected",
        [
            ("DolbyVision", "Dolby Vision"),
            ("Dolby Vision, Version 1.0, dvhe.08.06, BL+RPU, HDR10 compatible", "Dolby Vision"),
            ("HDR10+ Profile A", "HDR10+"),
            ("SMPTE ST 2086, HDR10 compatible", "HDR10"),
            ("HDR", "HDR10"),
            ("HLG", "HLG"),
        ],
    )
    def test_explicit_type(self, hdr_type: str, expected: str) -> None:
        """Le type HDR explicite est prioritaire."""
        assert normalize_hdr_format(hdr_type) == expected

    def test_profile_dolby_vision(self) -> None:
        """Un profil video Dolby Vision suffit."""
        assert normalize_hdr_format(None, None, None, 10, "dvhe.05 Dolby Vision") == "Dolby Vision"

    def test_pq_with_bt2020(self) -> None:
        """Transfert PQ + primaires BT.2020 -> HDR10."""
        assert normalize_hdr_format(None, "smpte2084", "bt2020", 10) == "HDR10"

    def test_pq_without_bt2020_is_sdr(self) -> None:
        """Transfert PQ sans BT.2020 : pas de conclusion."""
        assert normalize_hdr_format(None, "smpte2084", "bt709", 10) is None

    def test_hlg_transfer(self) -> None:
        """Transfert arib-std-b67 -> HLG."""
        assert normalize_hdr_format(None, "arib-std-b67", "bt2020", 10) == "HLG"

    def test_ten_bit_bt2020_fallback(self) -> None:
        """10 bits + BT.2020 sans transfert connu -> HDR10."""
        assert normalize_hdr_format(None, None, "bt2020", 10) == "HDR10"

    def test_eight_bit_bt2020_is_sdr(self) -> None:
        """8 bits + BT.2020 sans transfert : SDR."""
        assert normalize_hdr_format(None, None, "bt2020", 8) is None

    def test_sdr(self) -> None:
        """Aucun indice HDR -> None."""
        assert normalize_hdr_format() is None
        assert normalize_hdr_format("", "bt709", "bt709", 8) is None
