"""
Fixtures pytest partagees pour les tests medialens.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des interfaces (IFileSystem, IFilenameParser, IMediaInfoExtractor)
- Settings de test avec chemins temporaires
- Session SQLModel sur une base SQLite en memoire
- Seuils qualite par defaut
"""

from pathlib import Path
from typing import Iterator, Optional
from unittest.mock import MagicMock

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from medialens.config import Settings
from medialens.core.ports.file_system import IFileSystem
from medialens.core.ports.parser import IFilenameParser, IMediaInfoExtractor
from medialens.core.value_objects import MediaType, ParsedFilename, QualityThresholds
from medialens.infrastructure.persistence import models  # noqa: F401
from medialens.services.thresholds import default_thresholds


@pytest.fixture
def mock_file_system() -> MagicMock:
    """
    Mock de IFileSystem pour les tests.

    Les valeurs de retour doivent etre configurees dans chaque test
    (notamment list_video_files).
    """
    mock = MagicMock(spec=IFileSystem)
    mock.exists.return_value = True
    mock.get_size.return_value = 8 * 1024 * 1024 * 1024  # 8 GB par defaut
    mock.get_mtime.return_value = None
    mock.list_video_files.return_value = []
    return mock


@pytest.fixture
def mock_filename_parser() -> MagicMock:
    """
    Mock de IFilenameParser pour les tests.

    Retourne un ParsedFilename dont le titre est le nom sans extension.
    """
    mock = MagicMock(spec=IFilenameParser)

    def default_parse(filename: str, type_hint: Optional[MediaType] = None) -> ParsedFilename:
        """Parse basique qui utilise le type_hint ou UNKNOWN."""
        title = Path(filename).stem
        media_type = type_hint if type_hint else MediaType.UNKNOWN
        return ParsedFilename(title=title, media_type=media_type)

    mock.parse.side_effect = default_parse
    return mock


@pytest.fixture
def mock_media_info_extractor() -> MagicMock:
    """
    Mock de IMediaInfoExtractor pour les tests.

    Retourne None par defaut (extraction impossible).
    """
    mock = MagicMock(spec=IMediaInfoExtractor)
    mock.extract.return_value = None
    return mock


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec base et log dans un repertoire temporaire."""
    return Settings(
        database_url=f"sqlite:///{tmp_path}/test.db",
        log_file=tmp_path / "test.log",
        min_movie_duration_seconds=45 * 60,
    )


@pytest.fixture
def session() -> Iterator[Session]:
    """Session SQLModel sur une base SQLite en memoire, tables creees."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as db_session:
        yield db_session
    engine.dispose()


@pytest.fixture
def thresholds() -> QualityThresholds:
    """Seuils qualite par defaut."""
    return default_thresholds()
