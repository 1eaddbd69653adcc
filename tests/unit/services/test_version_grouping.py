"""
Tests unitaires pour le regroupement des versions et le choix de la meilleure.
"""

import pytest

from medialens.core.entities import MediaItem, MediaItemVersion
from medialens.services.version_grouping import (
    apply_best_version,
    build_version_label,
    detect_source_type,
    group_by_key,
    group_key,
    mark_best_version,
    normalize_group_title,
    score_version,
    select_best_version,
    tier_rank,
)


@pytest.fixture
def three_versions() -> list[MediaItemVersion]:
    """Trois fichiers du meme film : 1080p, 2160p HDR, 720p."""
    return [
        MediaItemVersion(
            file_path="/films/Movie.1080p.mkv",
            file_size=10_000,
            resolution="1080p",
            video_bitrate=12000,
        ),
        MediaItemVersion(
            file_path="/films/Movie.2160p.HDR.mkv",
            file_size=40_000,
            resolution="4K",
            hdr_format="HDR10",
            video_bitrate=30000,
            video_codec="HEVC",
        ),
        MediaItemVersion(
            file_path="/films/Movie.720p.mkv",
            file_size=4_000,
            resolution="720p",
            video_bitrate=5000,
        ),
    ]


class TestNormalizeGroupTitle:
    """Tests pour normalize_group_title."""

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Blade Runner - Director's Cut", "blade runner"),
            ("Aliens (Extended)", "aliens"),
            ("Apocalypse Now: Redux", "apocalypse now: redux"),
            ("Dune - Special Edition", "dune"),
            ("  Inception  ", "inception"),
            (None, ""),
        ],
    )
    def test_titles(self, title, expected: str) -> None:
        """Les suffixes d'edition connus sont retires."""
        assert normalize_group_title(title) == expected


class TestGroupKey:
    """Tests pour group_key."""

    def test_tmdb_wins(self) -> None:
        """L'identifiant TMDB prime sur le titre."""
        assert group_key("Inception", 2010, tmdb_id=27205) == "tmdb:27205"

    def test_title_and_year(self) -> None:
        """Sans TMDB : titre normalise et annee."""
        assert group_key("Blade Runner - Director's Cut", 1982) == group_key("Blade Runner", 1982)
        assert group_key("Inception", 2010) == "title:inception|2010"

    def test_different_years_not_grouped(self) -> None:
        """Remakes : meme titre, annees differentes."""
        assert group_key("Dune", 1984) != group_key("Dune", 2021)

    def test_missing_year(self) -> None:
        """Annee inconnue : partie vide."""
        assert group_key("Inception", None) == "title:inception|"


class TestGroupByKey:
    """Tests pour group_by_key."""

    def test_order_of_first_appearance(self) -> None:
        """Les groupes suivent l'ordre de premiere apparition."""
        groups = group_by_key(["b1", "a1", "b2", "c1", "a2"], key=lambda value: value[0])

        assert groups == [["b1", "b2"], ["a1", "a2"], ["c1"]]


class TestDetectSourceType:
    """Tests pour detect_source_type."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("BluRay REMUX", "REMUX"),
            ("remux", "REMUX"),
            ("WEB-DL", "WEB-DL"),
            ("WEBDL", "WEB-DL"),
            ("BluRay", None),
            (None, None),
        ],
    )
    def test_sources(self, source, expected) -> None:
        """Seuls REMUX et WEB-DL sont reconnus."""
        assert detect_source_type(source) == expected


class TestBuildVersionLabel:
    """Tests pour build_version_label."""

    def test_full_label(self) -> None:
        """Resolution, HDR, source et edition dans cet ordre."""
        version = MediaItemVersion(
            resolution="4K", hdr_format="Dolby Vision", source_type="REMUX", edition="Extended"
        )

        assert build_version_label(version) == "4K Dolby Vision REMUX Extended"

    def test_empty_parts_omitted(self) -> None:
        """Les parties vides et le HDR "None" sont ignores."""
        version = MediaItemVersion(resolution="1080p", hdr_format="None")

        assert build_version_label(version) == "1080p"


class TestScoreVersion:
    """Tests pour tier_rank et score_version."""

    @pytest.mark.parametrize(
        "resolution,rank",
        [("4K", 4), ("2160p", 4), ("1080p", 3), ("720p", 2), ("480p", 1), ("", 1)],
    )
    def test_tier_rank(self, resolution: str, rank: int) -> None:
        """Rang par resolution."""
        assert tier_rank(resolution) == rank

    def test_score_formula(self) -> None:
        """Rang x 100000 + 1000 si HDR + debit."""
        sdr = MediaItemVersion(resolution="1080p", video_bitrate=12000)
        hdr = MediaItemVersion(resolution="1080p", video_bitrate=12000, hdr_format="HDR10")

        assert score_version(sdr) == 312000
        assert score_version(hdr) == 313000

    def test_resolution_dominates_bitrate(self) -> None:
        """Un 4K a faible debit bat un 1080p a fort debit."""
        uhd = MediaItemVersion(resolution="4K", video_bitrate=8000)
        fhd = MediaItemVersion(resolution="1080p", video_bitrate=60000)

        assert score_version(uhd) > score_version(fhd)


class TestSelectBestVersion:
    """Tests pour select_best_version et mark_best_version."""

    def test_hdr_2160p_wins(self, three_versions: list[MediaItemVersion]) -> None:
        """La version 2160p HDR est retenue."""
        assert select_best_version(three_versions) == 1

    def test_exactly_one_best(self, three_versions: list[MediaItemVersion]) -> None:
        """Une seule version est marquee is_best."""
        best = mark_best_version(three_versions)

        assert best is three_versions[1]
        assert [v.is_best for v in three_versions] == [False, True, False]

    def test_tie_keeps_first(self) -> None:
        """A score egal, la premiere version l'emporte."""
        first = MediaItemVersion(file_path="/a.mkv", resolution="1080p", video_bitrate=10000)
        second = MediaItemVersion(file_path="/b.mkv", resolution="1080p", video_bitrate=10000)

        assert select_best_version([first, second]) == 0

    def test_empty_raises(self) -> None:
        """Liste vide -> ValueError."""
        with pytest.raises(ValueError):
            select_best_version([])


class TestApplyBestVersion:
    """Tests pour apply_best_version."""

    def test_item_mirrors_best(self, three_versions: list[MediaItemVersion]) -> None:
        """Le media porte les attributs de la meilleure version."""
        item = MediaItem(title="Movie", resolution="720p")
        best = mark_best_version(three_versions)

        apply_best_version(item, best, version_count=len(three_versions))

        assert item.resolution == "4K"
        assert item.hdr_format == "HDR10"
        assert item.video_codec == "HEVC"
        assert item.video_bitrate == 30000
        assert item.file_path == "/films/Movie.2160p.HDR.mkv"
        assert item.file_size == 40_000
        assert item.version_count == 3
        assert item.title == "Movie"
