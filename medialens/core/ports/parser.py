"""
Interfaces ports pour le parsing de noms de fichiers et extraction de metadonnees.

Interfaces abstraites (ports) definissant les contrats pour le parsing de noms
de fichiers video et l'extraction des metadonnees techniques brutes.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from medialens.core.value_objects.media_info import RawMediaInfo
from medialens.core.value_objects.parsed_info import MediaType, ParsedFilename


class IFilenameParser(ABC):
    """
    Interface pour le parsing de noms de fichiers video.

    Definit le contrat pour extraire les informations structurees
    (titre, annee, saison, episode, edition, source) depuis un nom de fichier.
    """

    @abstractmethod
    def parse(
        self, filename: str, type_hint: Optional[MediaType] = None
    ) -> ParsedFilename:
        """
        Parse un nom de fichier video et extrait les informations structurees.

        Args:
            filename: Nom du fichier a parser (sans le chemin)
            type_hint: Indication du type de media attendu (depuis la bibliotheque).

        Retourne:
            ParsedFilename avec les informations extraites.
            Le champ title est toujours renseigne (au minimum le nom sans extension).
        """
        ...


class IMediaInfoExtractor(ABC):
    """
    Interface pour l'extraction des metadonnees techniques d'un fichier video.

    Un extracteur est un adapter provider : il traduit sa representation
    native en RawMediaInfo, sans aucune normalisation.
    """

    @abstractmethod
    def extract(self, file_path: Path) -> Optional[RawMediaInfo]:
        """
        Extrait les metadonnees techniques brutes d'un fichier video.

        Args:
            file_path: Chemin complet vers le fichier video

        Retourne:
            RawMediaInfo, ou None si l'extraction echoue
            (fichier non video, corrompu, etc.)
        """
        ...
