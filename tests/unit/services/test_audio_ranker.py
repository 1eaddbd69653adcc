"""
Tests unitaires pour le classement des pistes audio.
"""

import pytest

from medialens.core.value_objects import AudioTrack
from medialens.services.audio_ranker import (
    TIER_HIGH_LOSSY,
    TIER_LOSSLESS,
    TIER_NEAR_LOSSLESS,
    TIER_OBJECT_AUDIO,
    TIER_STANDARD,
    get_audio_codec_tier,
    is_commentary_track,
    is_lossless_codec,
    select_best_audio_track,
)


class TestGetAudioCodecTier:
    """Tests pour get_audio_codec_tier."""

    @pytest.mark.parametrize(
        "codec,expected",
        [
            ("TrueHD Atmos", TIER_OBJECT_AUDIO),
            ("DTS:X", TIER_OBJECT_AUDIO),
            ("TrueHD", TIER_LOSSLESS),
            ("DTS-HD MA", TIER_LOSSLESS),
            ("FLAC", TIER_LOSSLESS),
            ("PCM", TIER_LOSSLESS),
            ("DTS-HD", TIER_NEAR_LOSSLESS),
            ("EAC3", TIER_HIGH_LOSSY),
            ("DTS", TIER_HIGH_LOSSY),
            ("AC3", TIER_STANDARD),
            ("AAC", TIER_STANDARD),
            (None, TIER_STANDARD),
        ],
    )
    def test_tiers(self, codec, expected: int) -> None:
        """Palier par codec."""
        assert get_audio_codec_tier(codec) == expected

    def test_object_audio_flag(self) -> None:
        """L'audio objet detecte place la piste au palier maximal."""
        assert get_audio_codec_tier("EAC3", has_object_audio=True) == TIER_OBJECT_AUDIO

    def test_is_lossless(self) -> None:
        """Sans perte et audio objet sont consideres sans perte."""
        assert is_lossless_codec("TrueHD") is True
        assert is_lossless_codec("DTS:X") is True
        assert is_lossless_codec("EAC3") is False


class TestIsCommentaryTrack:
    """Tests pour is_commentary_track."""

    def test_commentary_titles(self) -> None:
        """Le mot commentary, quelle que soit la casse."""
        assert is_commentary_track("Director's Commentary") is True
        assert is_commentary_track("COMMENTARY") is True

    def test_regular_titles(self) -> None:
        """Titres ordinaires ou absents."""
        assert is_commentary_track("English 7.1") is False
        assert is_commentary_track(None) is False


class TestSelectBestAudioTrack:
    """Tests pour select_best_audio_track."""

    def test_empty(self) -> None:
        """Aucune piste -> None."""
        assert select_best_audio_track(()) is None

    def test_tier_first(self) -> None:
        """Le palier prime sur le nombre de canaux."""
        ac3 = AudioTrack(index=0, codec="AC3", channels=6, bitrate=640)
        truehd = AudioTrack(index=1, codec="TrueHD", channels=2, bitrate=1500)

        assert select_best_audio_track([ac3, truehd]) is truehd

    def test_channels_then_bitrate(self) -> None:
        """A palier egal, les canaux puis le debit departagent."""
        stereo = AudioTrack(index=0, codec="AAC", channels=2, bitrate=320)
        surround_low = AudioTrack(index=1, codec="AAC", channels=6, bitrate=256)
        surround_high = AudioTrack(index=2, codec="AAC", channels=6, bitrate=384)

        assert select_best_audio_track([stereo, surround_low, surround_high]) is surround_high

    def test_commentary_skipped(self) -> None:
        """Une piste de commentaire n'est jamais choisie s'il existe une autre piste."""
        commentary = AudioTrack(index=0, codec="FLAC", channels=2, title="Commentary")
        main = AudioTrack(index=1, codec="AC3", channels=6)

        assert select_best_audio_track([commentary, main]) is main

    def test_only_commentary(self) -> None:
        """Si toutes les pistes sont des commentaires, la meilleure est retenue."""
        first = AudioTrack(index=0, codec="AAC", channels=2, title="Commentary 1")
        second = AudioTrack(index=1, codec="AC3", channels=2, title="Commentary 2")

        assert select_best_audio_track([first, second]) is first

    def test_tie_keeps_first(self) -> None:
        """A egalite complete, la premiere piste est conservee."""
        first = AudioTrack(index=0, codec="AC3", channels=6, bitrate=640, language="fr")
        second = AudioTrack(index=1, codec="AC3", channels=6, bitrate=640, language="en")

        assert select_best_audio_track([first, second]) is first
