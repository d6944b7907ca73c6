"""
Commandes CLI de consultation du catalogue (catalog, missing, resolve, status).
"""

from typing import Annotated, Optional

import typer
from rich.table import Table

from nfoorg.adapters.cli.helpers import console, with_container
from nfoorg.core.entities import MissingKind, MissingStatus
from nfoorg.core.exceptions import StorageError
from nfoorg.core.ports.repositories import CatalogFilter, MissingFilter


def catalog(
    title: Annotated[
        Optional[str], typer.Option("--title", "-t", help="Sous-chaine du titre")
    ] = None,
    category: Annotated[
        Optional[str], typer.Option("--category", "-c", help="Sous-chaine de la categorie")
    ] = None,
    complete: Annotated[
        Optional[bool],
        typer.Option("--complete/--incomplete", help="Filtrer sur la completude"),
    ] = None,
    tmdb_id: Annotated[Optional[str], typer.Option("--tmdb-id", help="ID TMDB")] = None,
    season: Annotated[Optional[str], typer.Option("--season", help="Saison")] = None,
) -> None:
    """Liste les titres du catalogue."""
    _catalog(CatalogFilter(title, category, complete, tmdb_id, season))


@with_container()
def _catalog(container, catalog_filter: CatalogFilter) -> None:
    """Implementation de la commande catalog."""
    records = container.catalog_repository().query_catalog(catalog_filter)
    if not records:
        console.print("[yellow]Aucun titre dans le catalogue.[/yellow]")
        return

    table = Table(title="Catalogue", show_header=True)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Titre", style="cyan")
    table.add_column("Annee")
    table.add_column("Categorie")
    table.add_column("Saison", justify="right")
    table.add_column("Resolution")
    table.add_column("Complet")
    table.add_column("Version", justify="right")

    for record in records:
        table.add_row(
            str(record.id),
            record.title,
            record.year,
            record.category,
            record.season,
            record.resolution,
            ("[green]oui[/green]" if record.is_complete else "non") if record.is_series else "",
            str(record.version),
        )
    console.print(table)
    console.print(f"\n[bold]Total: {len(records)} titre(s)[/bold]")


def missing(
    title: Annotated[
        Optional[str], typer.Option("--title", "-t", help="Sous-chaine du titre")
    ] = None,
    tmdb_id: Annotated[Optional[str], typer.Option("--tmdb-id", help="ID TMDB")] = None,
    season: Annotated[Optional[int], typer.Option("--season", help="Numero de saison")] = None,
    status: Annotated[
        Optional[str],
        typer.Option("--status", help="Statut (missing, resolved, ignored)"),
    ] = MissingStatus.MISSING.value,
    episodes: Annotated[
        bool, typer.Option("--episodes", help="Lister les episodes au lieu des saisons")
    ] = False,
) -> None:
    """Liste les saisons (ou episodes) manquants."""
    kind = MissingKind.EPISODE if episodes else MissingKind.SEASON
    _missing(kind, MissingFilter(title, tmdb_id, season, status))


@with_container()
def _missing(container, kind: MissingKind, missing_filter: MissingFilter) -> None:
    """Implementation de la commande missing."""
    items = container.catalog_repository().query_missing(kind, missing_filter)
    if not items:
        console.print("[green]Aucun element manquant.[/green]")
        return

    table = Table(
        title="Episodes manquants" if kind is MissingKind.EPISODE else "Saisons manquantes",
        show_header=True,
    )
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Titre", style="cyan")
    table.add_column("TMDB")
    table.add_column("Saison", justify="right")
    if kind is MissingKind.EPISODE:
        table.add_column("Episode", justify="right")
    table.add_column("Statut")
    table.add_column("Detecte le")

    for item in items:
        row = [str(item.id), item.title, item.tmdb_id, str(item.season)]
        if kind is MissingKind.EPISODE:
            row.append(str(item.episode))
        row.append(item.status)
        row.append(item.detected_at.strftime("%Y-%m-%d") if item.detected_at else "")
        table.add_row(*row)
    console.print(table)
    console.print(f"\n[bold]Total: {len(items)}[/bold]")


def resolve(
    kind: Annotated[MissingKind, typer.Argument(help="Type d'element (season, episode)")],
    item_id: Annotated[int, typer.Argument(help="ID de l'element manquant")],
    status: Annotated[
        str, typer.Option("--status", "-s", help="Nouveau statut")
    ] = MissingStatus.RESOLVED.value,
) -> None:
    """Change le statut d'une saison ou d'un episode manquant."""
    _resolve(kind, item_id, status)


@with_container(exclusive=True)
def _resolve(container, kind: MissingKind, item_id: int, status: str) -> None:
    """Implementation de la commande resolve."""
    try:
        container.catalog_repository().update_status(kind, item_id, status)
    except StorageError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{kind.value} #{item_id} -> {status}[/green]")


def status(
    title: Annotated[str, typer.Argument(help="Titre (ou partie du titre) de la serie")],
) -> None:
    """Affiche le bilan de saisons d'une serie (lecture seule)."""
    _status(title)


@with_container()
def _status(container, title: str) -> None:
    """Implementation de la commande status."""
    records = [
        record
        for record in container.catalog_repository().query_catalog(
            CatalogFilter(title=title, category="Show")
        )
        if record.tmdb_id
    ]
    if not records:
        console.print(f"[yellow]Aucune serie avec ID TMDB pour '{title}'.[/yellow]")
        raise typer.Exit(1)

    tracker = container.completeness_tracker()
    for record in records:
        report = tracker.report_status(record.title, record.tmdb_id, record.target_path)
        if report is None:
            console.print(f"[yellow]{record.title}: bilan indisponible (TMDB)[/yellow]")
            continue
        state = "[green]complete[/green]" if report.is_complete else "[red]incomplete[/red]"
        console.print(
            f"[bold]{record.title}[/bold] ({record.year}) - "
            f"{len(report.present_seasons)}/{report.total_seasons} saison(s), {state}"
        )
        if report.missing_seasons:
            console.print(f"  Saisons manquantes: {report.missing_seasons}")
