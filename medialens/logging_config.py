"""
Configuration du logging de medialens via loguru.

Deux sorties :
- console (stderr) : colorée, niveau réglable par -v / -q
- fichier : JSON (serialize=True) avec rotation, capture le détail du scan en DEBUG
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Identifiant du handler console, remplace quand la verbosite change
_console_handler_id: Optional[int] = None


def level_for_verbosity(base_level: str, verbose: int = 0, quiet: bool = False) -> str:
    """
    Niveau console selon les options de verbosite de la CLI.

    -q force ERROR ; -v passe a INFO, -vv (et plus) a DEBUG.
    Sans option, le niveau configure est conserve.
    """
    if quiet:
        return "ERROR"
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return base_level


def set_console_level(level: str) -> None:
    """Remplace le handler console par un handler au niveau donne."""
    global _console_handler_id
    if _console_handler_id is not None:
        logger.remove(_console_handler_id)
    _console_handler_id = logger.add(
        sys.stderr,
        level=level,
        format=CONSOLE_FORMAT,
        colorize=True,
    )


def configure_logging(
    log_level: str = "WARNING",
    log_file: Path = Path("logs/medialens.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum de la sortie console
        log_file : Chemin du fichier de log JSON
        rotation_size : Taille maximale avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conserves
    """
    global _console_handler_id
    logger.remove()
    _console_handler_id = None

    set_console_level(log_level)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # Thread-safe
    )

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)
