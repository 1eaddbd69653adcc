"""
Interfaces ports pour le système de fichiers.

Interfaces abstraites (ports) définissant les contrats pour les opérations fichiers
nécessaires au scan des dossiers locaux.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional


class IFileSystem(ABC):
    """
    Interface pour les opérations de lecture sur les fichiers.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Vérifie si un chemin existe."""
        ...

    @abstractmethod
    def get_size(self, path: Path) -> int:
        """
        Récupère la taille du fichier en octets.

        Retourne :
            Taille du fichier en octets, ou 0 si le fichier n'existe pas
        """
        ...

    @abstractmethod
    def get_mtime(self, path: Path) -> Optional[datetime]:
        """Récupère la date de modification du fichier, None si inaccessible."""
        ...

    @abstractmethod
    def list_video_files(self, directory: Path) -> list[Path]:
        """
        Liste récursivement les fichiers vidéo d'un répertoire.

        Les fichiers ignorés (samples, trailers...) sont exclus. L'ordre
        est stable d'un appel à l'autre.
        """
        ...
