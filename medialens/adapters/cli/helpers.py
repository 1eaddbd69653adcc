"""
Utilitaires partages pour les commandes CLI de medialens.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- quality_style / format_kbps / format_duration : mise en forme des tableaux
"""

from contextlib import contextmanager
from functools import wraps
from typing import Optional

from loguru import logger as loguru_logger
from rich.console import Console

from medialens.container import Container

console = Console()

# Couleur Rich par niveau de qualite
QUALITY_STYLES = {
    "HIGH": "green",
    "MEDIUM": "yellow",
    "LOW": "red",
}


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Les barres de progression sont cassees par les lignes de log sur stderr.

    Usage:
        with suppress_loguru():
            with Progress(...) as progress:
                ...
    """
    loguru_logger.disable("medialens")
    try:
        yield
    finally:
        loguru_logger.enable("medialens")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return func(container, *args, **kwargs)
        return wrapper
    return decorator


def quality_style(value: str) -> str:
    """Entoure un niveau de qualite de sa couleur Rich."""
    color = QUALITY_STYLES.get(value, "white")
    return f"[{color}]{value}[/{color}]"


def format_kbps(kbps: int) -> str:
    """Debit lisible : 0 -> "-", 18500 -> "18.5 Mbps", 640 -> "640 kbps"."""
    if kbps <= 0:
        return "-"
    if kbps >= 1000:
        return f"{kbps / 1000:.1f} Mbps"
    return f"{kbps} kbps"


def format_duration(seconds: Optional[int]) -> str:
    """Duree lisible : 7384 -> "2h03"."""
    if not seconds:
        return "-"
    hours, remainder = divmod(seconds, 3600)
    return f"{hours}h{remainder // 60:02d}"
