"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem en lecture seule : le scan des
dossiers locaux n'a jamais besoin de deplacer ou supprimer un fichier.
"""

from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from medialens.core.ports.file_system import IFileSystem
from medialens.utils.constants import IGNORED_PATTERNS, VIDEO_EXTENSIONS


class FileSystemAdapter(IFileSystem):
    """
    Implementation de IFileSystem pour le systeme de fichiers reel.

    Args:
        ignored_patterns: Fragments de noms a ignorer (insensible a la casse).
                          Par defaut IGNORED_PATTERNS.
    """

    def __init__(self, ignored_patterns: Optional[Iterable[str]] = None) -> None:
        patterns = IGNORED_PATTERNS if ignored_patterns is None else ignored_patterns
        self._ignored_patterns = frozenset(pattern.lower() for pattern in patterns)

    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        return path.exists()

    def get_size(self, path: Path) -> int:
        """
        Recupere la taille du fichier en octets.

        Retourne 0 si le fichier n'existe pas.
        """
        try:
            return path.stat().st_size
        except OSError:
            return 0

    def get_mtime(self, path: Path) -> Optional[datetime]:
        """Recupere la date de modification, None si le fichier est inaccessible."""
        try:
            return datetime.fromtimestamp(path.stat().st_mtime)
        except OSError:
            return None

    def list_video_files(self, directory: Path) -> list[Path]:
        """
        Liste les fichiers video dans un repertoire (recursif).

        Filtre:
        - Par extension (VIDEO_EXTENSIONS)
        - Exclut les symlinks
        - Exclut les fichiers contenant un pattern ignore

        Args:
            directory: Repertoire a scanner

        Returns:
            Chemins tries des fichiers video valides
        """
        if not directory.exists():
            return []

        files: list[Path] = []
        try:
            for path in directory.rglob("*"):
                if path.is_dir() or path.is_symlink():
                    continue

                if path.suffix.lower() not in VIDEO_EXTENSIONS:
                    continue

                filename_lower = path.name.lower()
                if any(pattern in filename_lower for pattern in self._ignored_patterns):
                    continue

                files.append(path)
        except OSError as e:
            logger.warning(f"Parcours incomplet de {directory}: {e}")

        return sorted(files)
