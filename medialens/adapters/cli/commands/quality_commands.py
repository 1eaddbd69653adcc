"""Commandes CLI analyze et report : score d'un fichier et repartition de la bibliotheque."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from medialens.adapters.cli.helpers import (
    console,
    format_duration,
    format_kbps,
    quality_style,
    with_container,
)
from medialens.core.entities import MediaItemVersion
from medialens.core.value_objects import (
    MediaType,
    QualityDistribution,
    QualityScore,
    QualityTier,
    TierQuality,
)
from medialens.services.local_scanner import fill_missing_audio_bitrates, version_from_media_info
from medialens.services.normalization import normalize_media_info
from medialens.services.normalization.estimates import is_estimated_bitrate
from medialens.services.version_grouping import build_version_label


def display_technical_details(version: MediaItemVersion) -> None:
    """Affiche les informations techniques normalisees d'un fichier."""
    table = Table(title=Path(version.file_path).name, show_header=False)
    table.add_column("", style="cyan")
    table.add_column("")

    table.add_row("Resolution", f"{version.resolution} ({version.width}x{version.height})")
    table.add_row("Codec video", version.video_codec or "-")
    table.add_row("Debit video", format_kbps(version.video_bitrate))
    if version.video_bit_depth:
        table.add_row("Profondeur", f"{version.video_bit_depth} bits")
    table.add_row("HDR", version.hdr_format or "SDR")
    if version.video_frame_rate:
        table.add_row("Images/s", f"{version.video_frame_rate:g}")
    table.add_row("Conteneur", version.container or "-")
    table.add_row("Duree", format_duration(version.duration_seconds))
    table.add_row("Libelle", version.label)
    console.print(table)

    if not version.audio_tracks:
        console.print("[dim]Aucune piste audio[/dim]")
        return

    audio = Table(title="Pistes audio")
    audio.add_column("#", justify="right", style="dim")
    audio.add_column("Codec")
    audio.add_column("Canaux", justify="right")
    audio.add_column("Debit", justify="right")
    audio.add_column("Langue")
    audio.add_column("Titre")
    for index, track in enumerate(version.audio_tracks, start=1):
        bitrate = format_kbps(track.bitrate)
        if is_estimated_bitrate(track.bitrate):
            bitrate += " [dim](estime)[/dim]"
        audio.add_row(
            str(index),
            track.codec_full or track.codec or "-",
            str(track.channels),
            bitrate,
            track.language or "-",
            track.title or "",
        )
    console.print(audio)


def display_quality_score(score: QualityScore) -> None:
    """Affiche un score qualite et ses problemes."""
    lines = [
        f"Palier : [bold]{score.quality_tier.value}[/bold]  "
        f"Niveau : {quality_style(score.tier_quality.value)}  "
        f"Score : [bold]{score.overall_score}[/bold]/100",
        f"Video : {quality_style(score.video_quality.value)} ({score.bitrate_tier_score})  "
        f"Audio : {quality_style(score.audio_quality.value)} ({score.audio_tier_score})",
    ]
    if score.premium_indicators:
        lines.append(f"Atouts : [green]{', '.join(score.premium_indicators)}[/green]")
    if score.issues:
        lines.append("Problemes :")
        lines.extend(f"  [yellow]-[/yellow] {issue}" for issue in score.issues)
    if score.needs_upgrade:
        lines.append("[red]Une meilleure version est souhaitable[/red]")
    console.print(Panel("\n".join(lines), title="Qualite"))


def analyze(
    file: Annotated[
        Path,
        typer.Argument(help="Fichier video a analyser"),
    ],
) -> None:
    """
    Analyse un fichier video : informations normalisees et score qualite.

    Rien n'est enregistre en base ; les seuils en vigueur sont utilises.

    Exemple:
      medialens analyze "Dune.2021.2160p.UHD.BluRay.x265.mkv"
    """
    if not file.is_file():
        console.print(f"[red]Erreur: Fichier introuvable: {file}[/red]")
        raise typer.Exit(1)

    _analyze(file)


@with_container()
def _analyze(container, file: Path) -> None:
    """Extraction, normalisation et scoring d'un fichier."""
    raw = container.media_info_extractor().extract(file)
    if raw is None:
        console.print(f"[red]Erreur: Metadonnees techniques illisibles: {file.name}[/red]")
        raise typer.Exit(1)

    parsed = container.filename_parser().parse(file.name, MediaType.UNKNOWN)
    info = fill_missing_audio_bitrates(normalize_media_info(raw), raw)
    version = version_from_media_info(info, file, file.stat().st_size, parsed)
    version.label = build_version_label(version)

    thresholds = container.thresholds_provider().load()
    scorer = container.quality_scorer_service()
    score = scorer.calculate_quality_score(version, thresholds)

    title = parsed.title + (f" ({parsed.year})" if parsed.year else "")
    console.print(f"[bold cyan]{title}[/bold cyan]")
    display_technical_details(version)
    display_quality_score(score)
    console.print(f"Recommandation : {scorer.recommend_upgrade(version, score)}")


def display_distribution(distribution: QualityDistribution) -> None:
    """Affiche la repartition des scores par palier et niveau."""
    table = Table(title=f"Qualite de la bibliotheque ({distribution.total} medias)")
    table.add_column("Palier", style="cyan")
    for quality in TierQuality:
        table.add_column(quality_style(quality.value), justify="right")
    table.add_column("Total", justify="right", style="bold")

    for tier in QualityTier:
        counts = distribution.by_tier.get(tier.value, {})
        row_total = sum(counts.values())
        if row_total == 0:
            continue
        table.add_row(
            tier.value,
            *(str(counts.get(quality.value, 0)) for quality in TierQuality),
            str(row_total),
        )

    table.add_row(
        "Total",
        *(str(distribution.by_quality.get(quality.value, 0)) for quality in TierQuality),
        str(distribution.total),
        style="bold",
    )
    console.print(table)
    console.print(f"Score moyen : [bold]{distribution.average_score}[/bold]")
    console.print(f"A remplacer : [red]{distribution.needs_upgrade}[/red]")


def report(
    source: Annotated[
        Optional[str],
        typer.Option("--source", "-s", help="Limiter a une source"),
    ] = None,
    upgrades: Annotated[
        bool,
        typer.Option("--upgrades", "-u", help="Lister les medias a remplacer"),
    ] = False,
) -> None:
    """
    Affiche la repartition qualite des medias enregistres.

    Exemples:
      medialens report
      medialens report --upgrades
    """
    _report(source, upgrades)


@with_container()
def _report(container, source: Optional[str], upgrades: bool) -> None:
    """Repartition des scores et liste des medias a remplacer."""
    repository = container.media_item_repository()
    scorer = container.quality_scorer_service()

    items = repository.get_media_items(source_id=source)
    scores: list[QualityScore] = []
    to_upgrade = []
    for item in items:
        score = repository.get_quality_score(item.id)
        if score is None:
            continue
        scores.append(score)
        if score.needs_upgrade:
            to_upgrade.append((item, score))

    if not scores:
        console.print("[yellow]Aucun media evalue. Lancez d'abord 'medialens scan'.[/yellow]")
        return

    display_distribution(scorer.summarize_distribution(scores))

    if upgrades and to_upgrade:
        table = Table(title="Medias a remplacer")
        table.add_column("Titre")
        table.add_column("Palier")
        table.add_column("Score", justify="right")
        table.add_column("Probleme principal")
        table.add_column("Cible")
        for item, score in sorted(to_upgrade, key=lambda pair: pair[1].overall_score):
            title = item.title + (f" ({item.year})" if item.year else "")
            table.add_row(
                title,
                score.quality_tier.value,
                str(score.overall_score),
                score.issues[0] if score.issues else "-",
                scorer.recommend_upgrade(item, score),
            )
        console.print(table)
