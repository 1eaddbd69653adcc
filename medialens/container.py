"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI :
adaptateurs (fichiers, guessit, mediainfo), repositories SQLModel
et services (seuils, chemins NFS, scoring, scan).
"""

from dependency_injector import containers, providers

from .adapters.file_system import FileSystemAdapter
from .adapters.parsing.guessit_parser import GuessitFilenameParser
from .adapters.parsing.mediainfo_extractor import MediaInfoExtractor
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import (
    SQLModelMediaItemRepository,
    SQLModelSettingsRepository,
)
from .services.local_scanner import LocalFolderScanService
from .services.path_mapping import NfsMountMappingCache, PathMapper
from .services.quality_scorer import QualityScorerService
from .services.thresholds import QualityThresholdsProvider


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        scanner = container.local_scan_service()
        report = scanner.scan(Path("/media/films"), source_id="local")
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(
        FileSystemAdapter,
        ignored_patterns=config.provided.scan_ignored_patterns,
    )
    filename_parser = providers.Singleton(GuessitFilenameParser)
    media_info_extractor = providers.Singleton(MediaInfoExtractor)

    # Repositories - Factory pour nouvelle instance avec session fraiche
    media_item_repository = providers.Factory(
        SQLModelMediaItemRepository,
        session=session,
    )
    settings_repository = providers.Factory(
        SQLModelSettingsRepository,
        session=session,
    )

    # Services
    thresholds_provider = providers.Factory(
        QualityThresholdsProvider,
        settings_repository=settings_repository,
    )
    nfs_mapping_cache = providers.Factory(
        NfsMountMappingCache.from_settings,
        settings_repository,
    )
    path_mapper = providers.Factory(
        PathMapper,
        nfs_cache=nfs_mapping_cache,
    )
    quality_scorer_service = providers.Singleton(QualityScorerService)

    local_scan_service = providers.Factory(
        LocalFolderScanService,
        file_system=file_system,
        filename_parser=filename_parser,
        media_info_extractor=media_info_extractor,
        repository=media_item_repository,
        thresholds_provider=thresholds_provider,
        settings=config,
    )
