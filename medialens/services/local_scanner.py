"""
Service de scan d'un dossier local.

Orchestre une passe complete sur un dossier de bibliotheque :

1. Chargement des seuils qualite (un seul instantane pour la passe)
2. Listage des fichiers video
3. Par fichier : parsing du nom, extraction mediainfo, normalisation,
   estimation du debit audio manquant, filtrage des videos courtes
4. Regroupement des versions d'un meme film, noms d'edition, libelles,
   choix de la meilleure version
5. Scoring et enregistrement de chaque groupe en une transaction
6. Suppression des medias dont le fichier a disparu (scan complet uniquement)

L'annulation est verifiee entre deux fichiers.
"""

import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from medialens.config import Settings
from medialens.core.entities import MediaItem, MediaItemVersion
from medialens.core.ports.file_system import IFileSystem
from medialens.core.ports.metadata import IMovieIdResolver
from medialens.core.ports.parser import IFilenameParser, IMediaInfoExtractor
from medialens.core.ports.repositories import IMediaItemRepository
from medialens.core.value_objects import (
    MediaType,
    NormalizedMediaInfo,
    ParsedFilename,
    QualityThresholds,
    RawMediaInfo,
)
from medialens.infrastructure.persistence.hash_service import (
    provider_item_id_for,
    version_source_for,
)
from medialens.services.normalization import normalize_bitrate, normalize_media_info
from medialens.services.normalization.estimates import (
    calculate_audio_bitrate_from_file,
    estimate_audio_bitrate,
)
from medialens.services.quality_scorer import calculate_quality_score
from medialens.services.thresholds import QualityThresholdsProvider
from medialens.services.version_grouping import (
    TECHNICAL_FIELDS,
    apply_best_version,
    build_version_label,
    detect_source_type,
    group_by_key,
    group_key,
    mark_best_version,
)
from medialens.services.version_naming import extract_version_names

# (fichier courant, nombre total, nom du fichier)
ProgressCallback = Callable[[int, int, str], None]
CancelCheck = Callable[[], bool]


class FileDecision(Enum):
    """Issue de l'analyse d'un fichier."""

    ANALYZED = "analyzed"  # Fichier retenu pour le regroupement
    SKIPPED_SHORT = "skipped_short"  # Video plus courte que la duree minimale
    EXTRACTION_FAILED = "extraction_failed"  # Metadonnees techniques illisibles


@dataclass
class ScannedFile:
    """
    Fichier analyse avec succes, en attente de regroupement.

    Attributs:
        parsed: Informations extraites du nom de fichier
        version: Version construite depuis les metadonnees normalisees
        file_mtime: Date de modification du fichier
        tmdb_id: Identifiant TMDB resolu (films uniquement)
    """

    parsed: ParsedFilename
    version: MediaItemVersion
    file_mtime: Optional[datetime] = None
    tmdb_id: Optional[int] = None


@dataclass
class ScanReport:
    """
    Bilan d'une passe de scan.

    Attributs:
        files_found: Fichiers video listes
        files_analyzed: Fichiers analyses et retenus
        files_skipped: Fichiers ecartes (videos trop courtes)
        items_saved: Medias enregistres (un par groupe)
        items_removed: Medias supprimes car leur fichier a disparu
        errors: Erreurs par fichier ou par groupe, le scan continuant
        cancelled: True si le scan a ete interrompu
        duration_seconds: Duree de la passe
    """

    files_found: int = 0
    files_analyzed: int = 0
    files_skipped: int = 0
    items_saved: int = 0
    items_removed: int = 0
    errors: list[str] = field(default_factory=list)
    cancelled: bool = False
    duration_seconds: float = 0.0


def fill_missing_audio_bitrates(info: NormalizedMediaInfo, raw: RawMediaInfo) -> NormalizedMediaInfo:
    """
    Complete les debits audio absents.

    Le debit global du fichier, diminue du debit video, est reparti entre
    les pistes ; a defaut, une estimation par codec et canaux est utilisee.
    """
    track_count = max(len(info.audio_tracks), 1)
    from_file = calculate_audio_bitrate_from_file(
        normalize_bitrate(raw.overall_bitrate, raw.overall_bitrate_unit),
        info.video_bitrate,
        track_count,
    )

    def estimate(codec: str, channels: int) -> int:
        return from_file or estimate_audio_bitrate(codec, channels)

    tracks = tuple(
        replace(track, bitrate=estimate(track.codec, track.channels))
        if track.bitrate == 0 and track.codec
        else track
        for track in info.audio_tracks
    )
    audio_bitrate = info.audio_bitrate
    if audio_bitrate == 0 and info.audio_codec:
        audio_bitrate = estimate(info.audio_codec, info.audio_channels)

    return replace(info, audio_tracks=tracks, audio_bitrate=audio_bitrate)


def version_from_media_info(
    info: NormalizedMediaInfo,
    file_path: Path,
    file_size: int,
    parsed: ParsedFilename,
) -> MediaItemVersion:
    """Construit une version depuis les metadonnees normalisees d'un fichier."""
    version = MediaItemVersion(
        version_source=version_source_for(str(file_path)),
        file_path=str(file_path),
        file_size=file_size,
        edition=parsed.edition,
        source_type=detect_source_type(parsed.source),
    )
    for name in TECHNICAL_FIELDS:
        setattr(version, name, getattr(info, name))
    return version


class LocalFolderScanService:
    """
    Service de scan d'un dossier local vers la base de medias.

    Attributs injectes:
        file_system: Listage et informations des fichiers
        filename_parser: Parser de noms de fichiers
        media_info_extractor: Extracteur de metadonnees techniques brutes
        repository: Stockage des medias, versions et scores
        thresholds_provider: Seuils qualite configurables
        settings: Configuration (duree minimale des films)
        movie_id_resolver: Resolution TMDB optionnelle pour le regroupement
    """

    def __init__(
        self,
        file_system: IFileSystem,
        filename_parser: IFilenameParser,
        media_info_extractor: IMediaInfoExtractor,
        repository: IMediaItemRepository,
        thresholds_provider: QualityThresholdsProvider,
        settings: Settings,
        movie_id_resolver: Optional[IMovieIdResolver] = None,
    ) -> None:
        self._file_system = file_system
        self._filename_parser = filename_parser
        self._media_info_extractor = media_info_extractor
        self._repository = repository
        self._thresholds_provider = thresholds_provider
        self._settings = settings
        self._movie_id_resolver = movie_id_resolver
        self._tmdb_cache: dict[tuple[str, Optional[int]], Optional[int]] = {}

    def scan(
        self,
        folder: Path,
        source_id: str,
        library_id: Optional[str] = None,
        media_type: MediaType = MediaType.MOVIE,
        on_progress: Optional[ProgressCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> ScanReport:
        """
        Scanne un dossier et enregistre ses medias.

        Args:
            folder: Dossier de la bibliotheque
            source_id: Identifiant de la source ("local" par exemple)
            library_id: Identifiant de la bibliotheque dans la source
            media_type: MOVIE (regroupement des versions) ou EPISODE
            on_progress: Appele avant chaque fichier
            should_cancel: Consulte entre deux fichiers ; True interrompt le scan

        Returns:
            ScanReport de la passe
        """
        start = time.monotonic()
        report = ScanReport()

        if not self._file_system.exists(folder):
            report.errors.append(f"Dossier introuvable : {folder}")
            return report

        thresholds = self._thresholds_provider.load()
        self._tmdb_cache.clear()

        files = self._file_system.list_video_files(folder)
        report.files_found = len(files)
        logger.info(f"Scan de {folder}: {len(files)} fichiers video")

        scanned: list[ScannedFile] = []
        for index, file_path in enumerate(files, start=1):
            if should_cancel is not None and should_cancel():
                report.cancelled = True
                logger.info(f"Scan annule apres {index - 1} fichiers")
                break
            if on_progress is not None:
                on_progress(index, len(files), file_path.name)

            try:
                decision, result = self._scan_file(file_path, media_type)
            except Exception as e:
                logger.error(f"Echec de l'analyse de {file_path.name}: {e}")
                report.errors.append(f"{file_path.name}: {e}")
                continue

            if decision == FileDecision.EXTRACTION_FAILED:
                report.errors.append(f"{file_path.name}: extraction des metadonnees impossible")
            elif decision == FileDecision.SKIPPED_SHORT:
                report.files_skipped += 1
            elif result is not None:
                scanned.append(result)

        report.files_analyzed = len(scanned)

        for group in self._group(scanned, media_type):
            try:
                self._save_group(group, source_id, library_id, media_type, thresholds)
                report.items_saved += 1
            except Exception as e:
                names = ", ".join(Path(f.version.file_path).name for f in group)
                report.errors.append(f"Enregistrement impossible ({names}): {e}")

        if not report.cancelled:
            report.items_removed = self._remove_stale(
                files, source_id, library_id, media_type
            )

        report.duration_seconds = time.monotonic() - start
        logger.info(
            f"Scan termine: {report.items_saved} medias, {report.items_removed} supprimes, "
            f"{len(report.errors)} erreurs"
        )
        return report

    def _scan_file(
        self, file_path: Path, media_type: MediaType
    ) -> tuple[FileDecision, Optional[ScannedFile]]:
        """
        Analyse un fichier.

        Returns:
            Tuple (decision, fichier analyse si retenu)
        """
        parsed = self._filename_parser.parse(file_path.name, media_type)

        raw = self._media_info_extractor.extract(file_path)
        if raw is None:
            return FileDecision.EXTRACTION_FAILED, None

        info = fill_missing_audio_bitrates(normalize_media_info(raw), raw)

        min_duration = self._settings.min_movie_duration_seconds
        if (
            media_type == MediaType.MOVIE
            and info.duration_seconds
            and info.duration_seconds < min_duration
        ):
            logger.debug(
                f"Video courte ignoree ({info.duration_seconds // 60} min): {file_path.name}"
            )
            return FileDecision.SKIPPED_SHORT, None

        version = version_from_media_info(
            info, file_path, self._file_system.get_size(file_path), parsed
        )
        tmdb_id = self._resolve_tmdb_id(parsed) if media_type == MediaType.MOVIE else None
        return FileDecision.ANALYZED, ScannedFile(
            parsed=parsed,
            version=version,
            file_mtime=self._file_system.get_mtime(file_path),
            tmdb_id=tmdb_id,
        )

    def _resolve_tmdb_id(self, parsed: ParsedFilename) -> Optional[int]:
        """Identifiant TMDB du film, mis en cache pour la passe."""
        if self._movie_id_resolver is None:
            return None
        key = (parsed.title.lower(), parsed.year)
        if key not in self._tmdb_cache:
            try:
                self._tmdb_cache[key] = self._movie_id_resolver.resolve(parsed.title, parsed.year)
            except Exception as e:
                logger.warning(f"Recherche TMDB impossible pour {parsed.title}: {e}")
                self._tmdb_cache[key] = None
        return self._tmdb_cache[key]

    def _group(self, scanned: list[ScannedFile], media_type: MediaType) -> list[list[ScannedFile]]:
        """Regroupe les films par identite ; un episode forme un groupe a lui seul."""
        if media_type != MediaType.MOVIE:
            return [[item] for item in scanned]

        groups = group_by_key(
            scanned, lambda f: group_key(f.parsed.title, f.parsed.year, f.tmdb_id)
        )
        multi = sum(1 for group in groups if len(group) > 1)
        if multi:
            logger.info(f"{len(scanned)} fichiers regroupes en {len(groups)} films ({multi} multi-versions)")
        return groups

    def _save_group(
        self,
        group: list[ScannedFile],
        source_id: str,
        library_id: Optional[str],
        media_type: MediaType,
        thresholds: QualityThresholds,
    ) -> MediaItem:
        """Nomme, etiquette, choisit la meilleure version, score et enregistre."""
        versions = [scanned.version for scanned in group]
        extract_version_names(versions)
        for version in versions:
            version.label = build_version_label(version)

        best = mark_best_version(versions)
        best_file = group[versions.index(best)]
        parsed = best_file.parsed

        item = MediaItem(
            source_id=source_id,
            library_id=library_id,
            # Premier fichier du groupe : identifiant stable d'un scan a l'autre
            provider_item_id=provider_item_id_for(group[0].version.file_path),
            media_type=media_type,
            title=parsed.title,
            year=parsed.year,
            tmdb_id=best_file.tmdb_id,
            file_mtime=best_file.file_mtime,
        )
        if media_type == MediaType.EPISODE:
            item.series_title = parsed.title
            item.title = parsed.episode_title or parsed.title
            item.season_number = parsed.season
            item.episode_number = parsed.episode
        apply_best_version(item, best, len(versions))

        for version in versions:
            version.apply_quality_score(calculate_quality_score(version, thresholds))
        score = calculate_quality_score(item, thresholds)
        saved = self._repository.save_group(item, versions, score)
        logger.debug(
            f"{saved.title}: {score.quality_tier.value} {score.tier_quality.value} "
            f"({score.overall_score}), {len(versions)} version(s)"
        )
        return saved

    def _remove_stale(
        self,
        files: list[Path],
        source_id: str,
        library_id: Optional[str],
        media_type: MediaType,
    ) -> int:
        """Supprime les medias de la bibliotheque dont le fichier n'existe plus."""
        seen = {str(file_path) for file_path in files}
        removed = 0
        for item in self._repository.get_media_items(source_id, library_id, media_type):
            if item.file_path not in seen and item.id is not None:
                if self._repository.delete_media_item(item.id):
                    removed += 1
                    logger.info(f"Media supprime (fichier absent) : {item.title}")
        return removed

