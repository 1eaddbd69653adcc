"""
Implementation du parser de noms de fichiers avec guessit.

Ce module fournit GuessitFilenameParser qui implemente IFilenameParser
pour extraire titre, annee, edition et source des noms de fichiers video.
"""

from typing import Any, Optional

from guessit import guessit

from medialens.core.ports.parser import IFilenameParser
from medialens.core.value_objects.parsed_info import MediaType, ParsedFilename


class GuessitFilenameParser(IFilenameParser):
    """
    Parser de noms de fichiers utilisant la bibliotheque guessit.

    Extrait titre, annee, saison, episode, resolution, source et edition
    depuis un nom de fichier video.
    """

    def parse(
        self, filename: str, type_hint: Optional[MediaType] = None
    ) -> ParsedFilename:
        """
        Parse un nom de fichier video et extrait les informations structurees.

        Args:
            filename: Nom du fichier a parser (sans le chemin)
            type_hint: Indication du type de media attendu (depuis la bibliotheque).
                       Si fourni, force guessit a utiliser ce type.

        Returns:
            ParsedFilename avec les informations extraites.
        """
        options = self._build_options(type_hint)
        result = guessit(filename, options)
        return self._map_to_parsed_filename(result, type_hint, filename)

    def _build_options(self, type_hint: Optional[MediaType]) -> dict[str, Any]:
        """Construit le dictionnaire d'options pour guessit."""
        options: dict[str, Any] = {}

        if type_hint == MediaType.MOVIE:
            options["type"] = "movie"
        elif type_hint == MediaType.EPISODE:
            options["type"] = "episode"
        # UNKNOWN: ne pas forcer le type, laisser guessit deviner

        return options

    def _map_to_parsed_filename(
        self,
        result: dict[str, Any],
        type_hint: Optional[MediaType],
        filename: str,
    ) -> ParsedFilename:
        """
        Mappe le resultat guessit vers un ParsedFilename.

        Args:
            result: Dictionnaire retourne par guessit
            type_hint: Type de media attendu (pour override si fourni)
            filename: Nom de fichier original (fallback du titre)

        Returns:
            ParsedFilename avec les informations mappees
        """
        if type_hint is not None and type_hint != MediaType.UNKNOWN:
            media_type = type_hint
        else:
            media_type = self._map_type(result.get("type"))

        return ParsedFilename(
            title=self._extract_title(result, filename),
            year=result.get("year"),
            media_type=media_type,
            season=self._first(result.get("season")),
            episode=self._first(result.get("episode")),
            episode_title=self._as_text(result.get("episode_title")),
            resolution=self._as_text(result.get("screen_size")),
            source=self._extract_source(result),
            edition=self._extract_edition(result),
            release_group=self._as_text(result.get("release_group")),
        )

    def _extract_title(self, result: dict[str, Any], filename: str) -> str:
        """Titre guessit, ou le nom de fichier sans extension en fallback."""
        title = result.get("title")
        if title:
            return str(title)
        stem, dot, _ = filename.rpartition(".")
        return stem if dot and stem else filename

    def _map_type(self, guessit_type: Optional[str]) -> MediaType:
        """Mappe le type guessit ("movie", "episode") vers MediaType."""
        if guessit_type == "movie":
            return MediaType.MOVIE
        elif guessit_type == "episode":
            return MediaType.EPISODE
        else:
            return MediaType.UNKNOWN

    def _first(self, value: Any) -> Any:
        """Premier element si guessit retourne une liste (multi-episodes)."""
        if isinstance(value, list):
            return value[0] if value else None
        return value

    def _as_text(self, value: Any) -> Optional[str]:
        value = self._first(value)
        if value is None:
            return None
        return str(value)

    def _extract_source(self, result: dict[str, Any]) -> Optional[str]:
        """
        Construit le tag source depuis "source" et "other".

        guessit separe la source ("Blu-ray", "Web") des marqueurs ("Remux",
        "Rip") ; on les recombine pour distinguer Remux, WEB-DL et WEBRip.

        Returns:
            Source (ex: "Blu-ray Remux", "WEB-DL", "WEBRip", "HDTV"), ou None
        """
        source = self._as_text(result.get("source"))
        other = result.get("other") or []
        if not isinstance(other, list):
            other = [other]
        markers = {str(marker).lower() for marker in other}

        if source is None:
            return "Remux" if "remux" in markers else None

        if source.lower() == "web":
            return "WEBRip" if "rip" in markers else "WEB-DL"

        if "remux" in markers:
            return f"{source} Remux"
        return source

    def _extract_edition(self, result: dict[str, Any]) -> Optional[str]:
        """Edition(s) guessit ("Director's Cut", "Extended"), jointes par un espace."""
        edition = result.get("edition")
        if edition is None:
            return None
        if isinstance(edition, list):
            return " ".join(str(value) for value in edition) or None
        return str(edition)
