"""
Constantes globales pour medialens.

Ce module contient les constantes utilisees lors du scan des dossiers:
- Extensions video supportees
- Patterns a ignorer lors du scan
"""

# Extensions video reconnues
VIDEO_EXTENSIONS = frozenset({
    ".mkv",
    ".mp4",
    ".avi",
    ".mov",
    ".wmv",
    ".flv",
    ".webm",
    ".m4v",
    ".mpg",
    ".mpeg",
    ".ts",
    ".m2ts",
    ".vob",
})

# Patterns a ignorer (sample, trailers, extras)
IGNORED_PATTERNS = frozenset({
    "sample",
    "trailer",
    "preview",
    "extras",
    "behind the scenes",
    "deleted scenes",
    "featurette",
    "interview",
    "bonus",
})
