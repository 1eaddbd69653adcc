"""
Utilitaires et constantes pour medialens.

Ce module contient les constantes partagees.
"""

from medialens.utils.constants import IGNORED_PATTERNS, VIDEO_EXTENSIONS

__all__ = [
    "VIDEO_EXTENSIONS",
    "IGNORED_PATTERNS",
]
