"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes :
- cli/ : Interface ligne de commande (Typer)
- file_system : Lecture du système de fichiers
- parsing/ : Parsing de noms de fichiers (guessit) et extraction mediainfo

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""

from medialens.adapters.file_system import FileSystemAdapter
from medialens.adapters.parsing.guessit_parser import GuessitFilenameParser
from medialens.adapters.parsing.mediainfo_extractor import MediaInfoExtractor

__all__ = [
    "FileSystemAdapter",
    "GuessitFilenameParser",
    "MediaInfoExtractor",
]
