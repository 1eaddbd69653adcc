"""
Tests unitaires pour l'evaluation de la qualite.

Palier par resolution, sous-scores de debit, exceptions audio,
niveau global, problemes detectes et repartition.
"""

import pytest

from medialens.core.entities import MediaItem, TechnicalDetails
from medialens.core.value_objects import (
    AudioTrack,
    BitrateThresholds,
    QualityScore,
    QualityThresholds,
    QualityTier,
    TierQuality,
)
from medialens.services.quality_scorer import (
    QualityScorerService,
    bitrate_sub_score,
    calculate_quality_score,
    classify_tier,
    combine_quality,
    recommend_upgrade,
    summarize_distribution,
)


# ====================
# Fixtures
# ====================

@pytest.fixture
def movie_1080p() -> TechnicalDetails:
    """Film 1080p H.264 8 bits, EAC3 5.1."""
    return TechnicalDetails(
        resolution="1080p",
        width=1920,
        height=1080,
        video_codec="H.264",
        video_bitrate=10500,
        video_bit_depth=8,
        audio_codec="EAC3",
        audio_channels=6,
        audio_bitrate=640,
    )


@pytest.fixture
def movie_4k_premium() -> TechnicalDetails:
    """Film 4K HEVC Dolby Vision 10 bits, TrueHD Atmos."""
    return TechnicalDetails(
        resolution="4K",
        width=3840,
        height=2160,
        video_codec="HEVC",
        video_bitrate=20000,
        video_bit_depth=10,
        hdr_format="Dolby Vision",
        audio_codec="TrueHD",
        audio_codec_full="TrueHD Atmos",
        audio_channels=8,
        audio_bitrate=4500,
        has_object_audio=True,
    )


@pytest.fixture
def movie_4k_poor() -> TechnicalDetails:
    """Film 4K H.264 SDR 8 bits a faible debit, AC3 5.1."""
    return TechnicalDetails(
        resolution="4K",
        width=3840,
        height=2160,
        video_codec="H.264",
        video_bitrate=8000,
        video_bit_depth=8,
        audio_codec="AC3",
        audio_channels=6,
        audio_bitrate=640,
    )


# ====================
# Palier et sous-scores
# ====================

class TestClassifyTier:
    """Tests pour classify_tier."""

    @pytest.mark.parametrize(
        "resolution,expected",
        [
            ("4K", QualityTier.UHD_4K),
            ("2160p", QualityTier.UHD_4K),
            ("1080p", QualityTier.FHD_1080),
            ("1080i", QualityTier.FHD_1080),
            ("720p", QualityTier.HD_720),
            ("480p", QualityTier.SD),
            ("", QualityTier.SD),
            (None, QualityTier.SD),
        ],
    )
    def test_tiers(self, resolution, expected: QualityTier) -> None:
        """Le palier ne depend que de la resolution."""
        assert classify_tier(resolution) == expected


class TestBitrateSubScore:
    """Tests pour la courbe des sous-scores."""

    THRESHOLDS = BitrateThresholds(medium=6000, high=15000)

    @pytest.mark.parametrize(
        "bitrate,expected",
        [
            (0, 0),
            (-10, 0),
            (3000, 30),
            (5999, 59),
            (6000, 60),
            (10500, 80),
            (14999, 99),
            (15000, 100),
            (40000, 100),
        ],
    )
    def test_curve(self, bitrate: int, expected: int) -> None:
        """Bornes de la courbe LOW / MEDIUM / HIGH."""
        assert bitrate_sub_score(bitrate, self.THRESHOLDS) == expected

    def test_monotonic(self) -> None:
        """Le sous-score ne diminue jamais quand le debit augmente."""
        scores = [bitrate_sub_score(b, self.THRESHOLDS) for b in range(0, 20001, 250)]

        assert scores == sorted(scores)

    def test_below_medium_is_low(self) -> None:
        """Un debit sous le seuil medium donne toujours moins de 60."""
        assert all(bitrate_sub_score(b, self.THRESHOLDS) < 60 for b in range(1, 6000, 97))


class TestCombineQuality:
    """Tests pour combine_quality."""

    @pytest.mark.parametrize(
        "video,audio,expected",
        [
            (TierQuality.LOW, TierQuality.HIGH, TierQuality.LOW),
            (TierQuality.HIGH, TierQuality.LOW, TierQuality.LOW),
            (TierQuality.MEDIUM, TierQuality.LOW, TierQuality.LOW),
            (TierQuality.HIGH, TierQuality.MEDIUM, TierQuality.MEDIUM),
            (TierQuality.MEDIUM, TierQuality.HIGH, TierQuality.MEDIUM),
            (TierQuality.HIGH, TierQuality.HIGH, TierQuality.HIGH),
        ],
    )
    def test_lower_level_wins(
        self, video: TierQuality, audio: TierQuality, expected: TierQuality
    ) -> None:
        """Le niveau global est le plus faible des niveaux video et audio."""
        assert combine_quality(video, audio) == expected


# ====================
# Score complet
# ====================

class TestCalculateQualityScore:
    """Tests pour calculate_quality_score."""

    def test_medium_1080p(self, movie_1080p: TechnicalDetails, thresholds: QualityThresholds) -> None:
        """Video MEDIUM (80), audio EAC3 5.1 HIGH : niveau MEDIUM, score 86."""
        score = calculate_quality_score(movie_1080p, thresholds)

        assert score.quality_tier == QualityTier.FHD_1080
        assert score.video_quality == TierQuality.MEDIUM
        assert score.audio_quality == TierQuality.HIGH
        assert score.tier_quality == TierQuality.MEDIUM
        assert score.bitrate_tier_score == 80
        assert score.audio_tier_score == 100
        assert score.tier_score == 86
        assert score.overall_score == 86
        assert score.needs_upgrade is False
        assert score.issues == ("8-bit color (10-bit recommended)",)

    def test_premium_4k(self, movie_4k_premium: TechnicalDetails, thresholds: QualityThresholds) -> None:
        """HEVC x2 atteint le seuil high, audio objet : HIGH sans probleme."""
        score = calculate_quality_score(movie_4k_premium, thresholds)

        assert score.tier_quality == TierQuality.HIGH
        assert score.overall_score == 100
        assert score.issues == ()
        assert score.premium_indicators == ("HDR", "Object audio", "10-bit")

    def test_poor_4k_issue_order(self, movie_4k_poor: TechnicalDetails, thresholds: QualityThresholds) -> None:
        """Les problemes sont listes dans un ordre stable."""
        score = calculate_quality_score(movie_4k_poor, thresholds)

        assert score.tier_quality == TierQuality.LOW
        assert score.needs_upgrade is True
        assert score.bitrate_tier_score == 32
        assert score.audio_tier_score == 60
        assert score.overall_score == 40
        assert score.issues == (
            "Low bitrate for 4K: 8.0 Mbps",
            "4K content without HDR",
            "8-bit color (10-bit recommended)",
            "No premium audio",
        )

    def test_low_score_never_reaches_medium_band(self, thresholds: QualityThresholds) -> None:
        """Un niveau LOW garde un score inferieur a 60, meme avec un audio parfait."""
        item = TechnicalDetails(
            resolution="1080p",
            video_codec="H.264",
            video_bitrate=5500,
            video_bit_depth=10,
            audio_codec="TrueHD",
            audio_channels=8,
        )

        score = calculate_quality_score(item, thresholds)

        assert score.tier_quality == TierQuality.LOW
        assert score.overall_score == 59

    def test_codec_efficiency_in_issue(self, thresholds: QualityThresholds) -> None:
        """Le codec efficace est mentionne dans le probleme de debit."""
        item = TechnicalDetails(
            resolution="1080p",
            video_codec="HEVC",
            video_bitrate=2000,
            video_bit_depth=10,
            audio_codec="EAC3",
            audio_channels=6,
        )

        score = calculate_quality_score(item, thresholds)

        assert score.issues[0] == "Low bitrate for 1080p: 2.0 Mbps (HEVC)"

    def test_unknown_bitrate_not_flagged(self, thresholds: QualityThresholds) -> None:
        """Un debit inconnu donne un sous-score nul sans probleme de debit."""
        item = TechnicalDetails(resolution="720p", video_codec="H.264", audio_codec="AAC", audio_channels=2)

        score = calculate_quality_score(item, thresholds)

        assert score.bitrate_tier_score == 0
        assert score.issues == ()

    def test_media_item_id_reported(self, movie_1080p: TechnicalDetails, thresholds: QualityThresholds) -> None:
        """L'identifiant du media est reporte dans le score."""
        assert calculate_quality_score(movie_1080p, thresholds, media_item_id=42).media_item_id == 42

    def test_pure_function(self, movie_4k_poor: TechnicalDetails, thresholds: QualityThresholds) -> None:
        """Deux appels sur les memes entrees donnent le meme resultat."""
        assert calculate_quality_score(movie_4k_poor, thresholds) == calculate_quality_score(
            movie_4k_poor, thresholds
        )


class TestAudioScoring:
    """Tests pour les exceptions du score audio."""

    def _score(self, thresholds: QualityThresholds, **audio) -> QualityScore:
        item = TechnicalDetails(
            resolution="1080p",
            video_codec="H.264",
            video_bitrate=20000,
            video_bit_depth=10,
            **audio,
        )
        return calculate_quality_score(item, thresholds)

    def test_lossless_never_flagged(self, thresholds: QualityThresholds) -> None:
        """Une piste sans perte a un debit ridicule reste HIGH."""
        score = self._score(thresholds, audio_codec="FLAC", audio_channels=2, audio_bitrate=10)

        assert score.audio_tier_score == 100
        assert score.issues == ()

    def test_ac3_surround_is_medium(self, thresholds: QualityThresholds) -> None:
        """AC3 5.1 : sous-score fixe de 60."""
        score = self._score(thresholds, audio_codec="AC3", audio_channels=6, audio_bitrate=448)

        assert score.audio_tier_score == 60
        assert score.audio_quality == TierQuality.MEDIUM

    def test_stereo_uses_half_medium(self, thresholds: QualityThresholds) -> None:
        """Stereo AAC 128 kbps en 1080p : 128 >= 256 / 2, donc MEDIUM."""
        score = self._score(thresholds, audio_codec="AAC", audio_channels=2, audio_bitrate=128)

        assert score.audio_tier_score == 60
        assert score.issues == ()

    def test_low_stereo_flagged(self, thresholds: QualityThresholds) -> None:
        """Stereo sous la moitie du seuil : probleme signale."""
        score = self._score(thresholds, audio_codec="AAC", audio_channels=2, audio_bitrate=96)

        assert score.audio_tier_score == 45
        assert score.issues == ("Low audio quality: 96 kbps",)

    def test_low_audio_makes_item_low(self, thresholds: QualityThresholds) -> None:
        """Video HIGH mais stereo AAC 64 kbps : niveau LOW, remplacement conseille."""
        score = self._score(thresholds, audio_codec="AAC", audio_channels=2, audio_bitrate=64)

        assert score.video_quality == TierQuality.HIGH
        assert score.audio_quality == TierQuality.LOW
        assert score.tier_quality == TierQuality.LOW
        assert score.needs_upgrade is True
        assert score.overall_score == 59
        assert score.issues == ("Low audio quality: 64 kbps",)

    def test_low_surround_flagged(self, thresholds: QualityThresholds) -> None:
        """Surround AAC sous le seuil du palier."""
        score = self._score(thresholds, audio_codec="AAC", audio_channels=6, audio_bitrate=192)

        assert score.issues == ("Low audio bitrate for 1080p: 192 kbps",)

    def test_mono_flagged(self, thresholds: QualityThresholds) -> None:
        """Une piste mono est signalee."""
        score = self._score(thresholds, audio_codec="AAC", audio_channels=1, audio_bitrate=96)

        assert "Mono audio" in score.issues

    def test_commentary_never_flagged(self, thresholds: QualityThresholds) -> None:
        """Une piste de commentaire a faible debit n'est jamais signalee."""
        score = self._score(
            thresholds,
            audio_codec="AAC",
            audio_channels=1,
            audio_bitrate=32,
            audio_title="Director's Commentary",
        )

        assert score.issues == ()
        assert score.audio_tier_score >= 60

    def test_best_track_scored(self, thresholds: QualityThresholds) -> None:
        """Avec une liste de pistes, la meilleure (hors commentaire) est evaluee."""
        score = self._score(
            thresholds,
            audio_codec="AAC",
            audio_channels=2,
            audio_bitrate=64,
            audio_tracks=(
                AudioTrack(index=0, codec="AAC", channels=2, bitrate=64, title="Commentary"),
                AudioTrack(index=1, codec="DTS-HD MA", channels=8, bitrate=4000),
            ),
        )

        assert score.audio_tier_score == 100
        assert score.issues == ()

    @pytest.mark.parametrize("bitrate", range(0, 800, 40))
    def test_audio_monotonic(self, thresholds: QualityThresholds, bitrate: int) -> None:
        """Le sous-score audio ne diminue pas quand le debit augmente."""
        lower = self._score(thresholds, audio_codec="AAC", audio_channels=6, audio_bitrate=bitrate)
        higher = self._score(thresholds, audio_codec="AAC", audio_channels=6, audio_bitrate=bitrate + 40)

        assert higher.audio_tier_score >= lower.audio_tier_score


# ====================
# Rapports
# ====================

class TestSummarizeDistribution:
    """Tests pour summarize_distribution."""

    def test_counts(
        self,
        movie_1080p: TechnicalDetails,
        movie_4k_premium: TechnicalDetails,
        movie_4k_poor: TechnicalDetails,
        thresholds: QualityThresholds,
    ) -> None:
        """Comptage par palier et par niveau, moyenne arrondie."""
        scores = [
            calculate_quality_score(item, thresholds)
            for item in (movie_1080p, movie_4k_premium, movie_4k_poor)
        ]

        distribution = summarize_distribution(scores)

        assert distribution.total == 3
        assert distribution.by_tier["4K"] == {"LOW": 1, "MEDIUM": 0, "HIGH": 1}
        assert distribution.by_tier["1080p"]["MEDIUM"] == 1
        assert distribution.by_quality == {"LOW": 1, "MEDIUM": 1, "HIGH": 1}
        assert distribution.needs_upgrade == 1
        assert distribution.average_score == round((86 + 100 + 40) / 3, 1)

    def test_empty(self) -> None:
        """Aucun score : compteurs a zero."""
        distribution = summarize_distribution([])

        assert distribution.total == 0
        assert distribution.average_score == 0.0


class TestRecommendUpgrade:
    """Tests pour recommend_upgrade."""

    def test_recommendations(
        self,
        movie_1080p: TechnicalDetails,
        movie_4k_premium: TechnicalDetails,
        movie_4k_poor: TechnicalDetails,
        thresholds: QualityThresholds,
    ) -> None:
        """Format cible selon la hauteur et le score."""
        premium_score = calculate_quality_score(movie_4k_premium, thresholds)
        poor_score = calculate_quality_score(movie_4k_poor, thresholds)
        medium_score = calculate_quality_score(movie_1080p, thresholds)

        assert recommend_upgrade(movie_4k_premium, premium_score) == "No upgrade needed"
        assert recommend_upgrade(movie_4k_poor, poor_score) == "4K UHD Blu-ray"
        assert recommend_upgrade(movie_1080p, medium_score) == "Blu-ray"


class TestQualityScorerService:
    """Tests pour la facade QualityScorerService."""

    def test_delegates(self, movie_1080p: TechnicalDetails, thresholds: QualityThresholds) -> None:
        """Le service donne les memes resultats que les fonctions."""
        service = QualityScorerService()
        item = MediaItem(title="Inception", **vars(movie_1080p))

        score = service.calculate_quality_score(item, thresholds, media_item_id=7)

        assert score == calculate_quality_score(movie_1080p, thresholds, media_item_id=7)
        assert service.summarize_distribution([score]).total == 1
