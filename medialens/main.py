"""
Point d'entrée CLI de medialens.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import (
    analyze,
    map_path,
    nfs_mount,
    report,
    scan,
    set_threshold,
    thresholds,
)
from .config import Settings
from .container import Container
from .logging_config import configure_logging, level_for_verbosity, set_console_level

app = typer.Typer(
    name="medialens",
    help="Normalisation des métadonnées techniques et score qualité d'une vidéothèque",
)
container = Container()


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """medialens - Qualité technique de vidéothèque."""
    if verbose or quiet:
        set_console_level(level_for_verbosity(get_config().log_level, verbose, quiet))


# Analyse et scan
app.command()(analyze)
app.command()(scan)
app.command()(report)

# Paramètres
app.command()(thresholds)
app.command(name="set-threshold")(set_threshold)
app.command(name="map-path")(map_path)
app.command(name="nfs-mount")(nfs_mount)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"medialens v{__version__}")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Durée minimale d'un film : {config.min_movie_duration_seconds // 60} min")
    typer.echo(f"Motifs ignorés : {', '.join(config.scan_ignored_patterns)}")
    typer.echo(f"Niveau de log : {config.log_level}")
    typer.echo(f"Fichier de log : {config.log_file}")


def main() -> None:
    """Point d'entrée de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    # Initialise la base de données (crée les tables si nécessaire)
    container.database.init()

    logger.debug("Démarrage de medialens", version=__version__)

    app()


if __name__ == "__main__":
    main()
