"""
Objets valeur pour les informations de parsing de noms de fichiers.

Objets valeur immutables representant les informations extraites du parsing
de noms de fichiers video (guessit) et la classification du type de media.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MediaType(Enum):
    """Type de media detecte depuis le nom de fichier ou le repertoire source.

    Valeurs:
        MOVIE: Film (long-metrage)
        EPISODE: Episode de serie TV (avec saison/episode)
        UNKNOWN: Type non determine
    """

    MOVIE = "movie"
    EPISODE = "episode"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParsedFilename:
    """
    Informations extraites du parsing d'un nom de fichier video.

    Attributs:
        title: Titre extrait (obligatoire)
        year: Annee de sortie (optionnel)
        media_type: Type de media detecte (MOVIE, EPISODE, UNKNOWN)
        season: Numero de saison pour les series
        episode: Numero d'episode pour les series
        episode_title: Titre de l'episode
        resolution: Resolution annoncee par le nom (ex: "1080p", "2160p")
        source: Tag source combine (ex: "Blu-ray Remux", "WEB-DL", "HDTV")
        edition: Edition detectee (ex: "Director's Cut", "Extended")
        release_group: Groupe de release
    """

    title: str
    year: Optional[int] = None
    media_type: MediaType = MediaType.UNKNOWN
    season: Optional[int] = None
    episode: Optional[int] = None
    episode_title: Optional[str] = None
    resolution: Optional[str] = None
    source: Optional[str] = None
    edition: Optional[str] = None
    release_group: Optional[str] = None
