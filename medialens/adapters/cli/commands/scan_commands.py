"""Commande CLI scan : analyse d'un dossier local et enregistrement des medias."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from medialens.adapters.cli.helpers import console, suppress_loguru, with_container
from medialens.core.value_objects import MediaType
from medialens.services.local_scanner import ScanReport


def display_scan_report(report: ScanReport) -> None:
    """Affiche le bilan d'une passe de scan."""
    table = Table(title="Bilan du scan", show_header=False)
    table.add_column("", style="cyan")
    table.add_column("", justify="right")
    table.add_row("Fichiers video", str(report.files_found))
    table.add_row("Fichiers analyses", str(report.files_analyzed))
    table.add_row("Videos courtes ignorees", str(report.files_skipped))
    table.add_row("Medias enregistres", str(report.items_saved))
    table.add_row("Medias supprimes", str(report.items_removed))
    table.add_row("Duree", f"{report.duration_seconds:.1f} s")
    console.print(table)

    if report.cancelled:
        console.print("[yellow]Scan interrompu : suppression des medias absents non effectuee.[/yellow]")

    if report.errors:
        console.print(f"\n[red]{len(report.errors)} erreur(s) :[/red]")
        for error in report.errors[:20]:
            console.print(f"  [dim]-[/dim] {error}")
        if len(report.errors) > 20:
            console.print(f"  [dim]... et {len(report.errors) - 20} autres (voir le fichier de log)[/dim]")


@with_container()
def _run_scan(
    container,
    folder: Path,
    source_id: str,
    library_id: Optional[str],
    media_type: MediaType,
) -> ScanReport:
    service = container.local_scan_service()

    with suppress_loguru():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Listage des fichiers...", total=None)

            def on_progress(current: int, total: int, filename: str) -> None:
                progress.update(task, total=total, completed=current - 1, description=filename[:50])

            try:
                report = service.scan(
                    folder,
                    source_id=source_id,
                    library_id=library_id,
                    media_type=media_type,
                    on_progress=on_progress,
                )
            except KeyboardInterrupt:
                console.print("[yellow]Scan interrompu par l'utilisateur[/yellow]")
                raise typer.Exit(130)

            progress.update(task, completed=report.files_found, description="Termine")

    return report


def scan(
    folder: Annotated[
        Path,
        typer.Argument(help="Dossier de la bibliotheque a scanner"),
    ],
    source: Annotated[
        str,
        typer.Option("--source", "-s", help="Identifiant de la source"),
    ] = "local",
    library: Annotated[
        Optional[str],
        typer.Option("--library", "-l", help="Identifiant de la bibliotheque (defaut: le dossier)"),
    ] = None,
    episodes: Annotated[
        bool,
        typer.Option("--episodes", help="Dossier de series : pas de regroupement des versions"),
    ] = False,
) -> None:
    """
    Scanne un dossier local et enregistre ses medias avec leur score qualite.

    Les versions d'un meme film sont regroupees et la meilleure est retenue.
    Les medias dont le fichier a disparu sont supprimes en fin de scan.

    Exemples:
      medialens scan /media/films
      medialens scan /media/series --episodes --library series
    """
    if not folder.is_dir():
        console.print(f"[red]Erreur: Repertoire introuvable: {folder}[/red]")
        raise typer.Exit(1)

    folder = folder.resolve()
    media_type = MediaType.EPISODE if episodes else MediaType.MOVIE
    console.print(f"[bold cyan]Scan:[/bold cyan] {folder}")

    report = _run_scan(folder, source, library or str(folder), media_type)
    display_scan_report(report)

    if report.errors and report.items_saved == 0 and report.files_found > 0:
        raise typer.Exit(1)
