"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance des données
- IMediaItemRepository : Stockage des médias, versions et scores
- ISettingsRepository : Stockage des paramètres clé/valeur

Ports parsing : Contrats d'extraction d'informations
- IFilenameParser : Parsing des noms de fichiers
- IMediaInfoExtractor : Extraction des informations techniques brutes

Ports externes :
- IFileSystem : Opérations de lecture sur les fichiers
- IMovieIdResolver : Résolution d'identifiants TMDB
"""

from medialens.core.ports.file_system import IFileSystem
from medialens.core.ports.metadata import IMovieIdResolver
from medialens.core.ports.parser import IFilenameParser, IMediaInfoExtractor
from medialens.core.ports.repositories import (
    IMediaItemRepository,
    ISettingsRepository,
)

__all__ = [
    # Repositories
    "IMediaItemRepository",
    "ISettingsRepository",
    # Parsing
    "IFilenameParser",
    "IMediaInfoExtractor",
    # Externes
    "IFileSystem",
    "IMovieIdResolver",
]
