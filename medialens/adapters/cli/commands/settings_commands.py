"""Commandes CLI des parametres : seuils qualite et correspondances de chemins NFS."""

import json
from typing import Annotated

import typer
from rich.table import Table

from medialens.adapters.cli.helpers import console, with_container
from medialens.core.value_objects import QualityThresholds, QualityTier
from medialens.services.path_mapping import NFS_MAPPINGS_SETTING, parse_mappings
from medialens.services.thresholds import known_setting_keys


def display_thresholds(thresholds: QualityThresholds) -> None:
    """Affiche les seuils effectifs par palier et les facteurs de codec."""
    table = Table(title="Seuils qualite (kbps)")
    table.add_column("Palier", style="cyan")
    table.add_column("Video medium", justify="right")
    table.add_column("Video high", justify="right")
    table.add_column("Audio medium", justify="right")
    table.add_column("Audio high", justify="right")
    for tier in QualityTier:
        tier_thresholds = thresholds.for_tier(tier)
        table.add_row(
            tier.value,
            str(tier_thresholds.video.medium),
            str(tier_thresholds.video.high),
            str(tier_thresholds.audio.medium),
            str(tier_thresholds.audio.high),
        )
    console.print(table)

    codecs = Table(title="Efficacite des codecs video")
    codecs.add_column("Codec", style="cyan")
    codecs.add_column("Facteur", justify="right")
    for codec, factor in thresholds.codec_efficiency.items():
        codecs.add_row(codec, f"{factor:g}")
    console.print(codecs)


def thresholds() -> None:
    """Affiche les seuils qualite en vigueur (valeurs par defaut ou personnalisees)."""
    _thresholds()


@with_container()
def _thresholds(container) -> None:
    display_thresholds(container.thresholds_provider().load())
    console.print("[dim]Modifier avec : medialens set-threshold <cle> <valeur>[/dim]")


def set_threshold(
    key: Annotated[
        str,
        typer.Argument(help="Cle du parametre (ex: quality_video_1080p_medium)"),
    ],
    value: Annotated[
        float,
        typer.Argument(help="Nouvelle valeur (kbps ou facteur de codec)"),
    ],
) -> None:
    """
    Modifie un seuil qualite. Le prochain scan l'utilise.

    Exemples:
      medialens set-threshold quality_video_4k_high 50000
      medialens set-threshold quality_codec_av1 2.5
    """
    _set_threshold(key, value)


@with_container()
def _set_threshold(container, key: str, value: float) -> None:
    provider = container.thresholds_provider()
    try:
        provider.set_threshold(key, value)
    except ValueError as e:
        console.print(f"[red]Erreur: {e}[/red]")
        console.print(f"[dim]Cles reconnues : {', '.join(known_setting_keys())}[/dim]")
        raise typer.Exit(1)
    console.print(f"[green]{key} = {value:g}[/green]")


def map_path(
    path: Annotated[
        str,
        typer.Argument(help="Chemin ou URL fournisseur (smb://, nfs://, file://)"),
    ],
) -> None:
    """
    Convertit un chemin fournisseur en chemin local.

    Exemples:
      medialens map-path smb://nas/films/Dune.mkv
      medialens map-path nfs://192.168.1.10/export/films/Dune.mkv
    """
    _map_path(path)


@with_container()
def _map_path(container, path: str) -> None:
    local = container.path_mapper().to_local(path)
    if local == path and "://" in path:
        console.print(f"[yellow]Aucune conversion pour {path}[/yellow]")
        raise typer.Exit(1)
    console.print(local)


def nfs_mount(
    remote: Annotated[
        str,
        typer.Argument(help="Prefixe NFS sans schema (ex: 192.168.1.10/export)"),
    ],
    local: Annotated[
        str,
        typer.Argument(help="Point de montage local (ex: Z: ou /mnt/nas)"),
    ],
) -> None:
    """
    Enregistre une correspondance NFS utilisee par map-path.

    Exemple:
      medialens nfs-mount 192.168.1.10/export Z:
    """
    _nfs_mount(remote, local)


@with_container()
def _nfs_mount(container, remote: str, local: str) -> None:
    repository = container.settings_repository()
    mappings = parse_mappings(repository.get(NFS_MAPPINGS_SETTING))
    mappings[remote.removeprefix("nfs://").rstrip("/")] = local
    repository.set(NFS_MAPPINGS_SETTING, json.dumps(mappings, sort_keys=True))
    console.print(f"[green]nfs://{remote} -> {local}[/green] ({len(mappings)} correspondance(s))")
