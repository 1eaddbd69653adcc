"""
Interface port pour la résolution d'identifiants de films.

La recherche TMDB est un collaborateur externe : le scanner ne
l'utilise que si une implémentation est fournie.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IMovieIdResolver(ABC):
    """Résout l'identifiant TMDB d'un film à partir de son titre."""

    @abstractmethod
    def resolve(self, title: str, year: Optional[int] = None) -> Optional[int]:
        """Retourne l'ID TMDB du film, ou None si aucune correspondance."""
        ...
