"""
Commandes CLI du traitement des NFO (process-nfo, process-dir, scrape).
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from nfoorg.adapters.cli.helpers import console, outcome_style, with_container
from nfoorg.core.exceptions import ScraperError
from nfoorg.services.workflow import TitleOutcome, TitleStatus


class ScrapeTarget(str, Enum):
    """Cible du scraping tinyMediaManager."""

    MOVIES = "movies"
    TV = "tv"
    ALL = "all"


def process_nfo(
    nfo_file: Annotated[
        Path,
        typer.Argument(help="Fichier NFO a traiter"),
    ],
) -> None:
    """Traite un fichier NFO : genres, acteurs, classement et catalogue."""
    _process_nfo(nfo_file)


@with_container(exclusive=True)
def _process_nfo(container, nfo_file: Path) -> None:
    """Implementation de la commande process-nfo."""
    if not nfo_file.is_file():
        console.print(f"[red]Fichier NFO introuvable: {nfo_file}[/red]")
        raise typer.Exit(1)

    workflow = container.workflow_service()
    outcome = workflow.process_nfo(nfo_file)
    _print_outcomes([outcome])

    if outcome.status is TitleStatus.FAILED:
        raise typer.Exit(1)


def process_dir(
    directory: Annotated[
        Path,
        typer.Argument(help="Repertoire a parcourir"),
    ],
) -> None:
    """Traite tous les NFO d'un repertoire (un NFO par repertoire media)."""
    _process_dir(directory)


@with_container(exclusive=True)
def _process_dir(container, directory: Path) -> None:
    """Implementation de la commande process-dir."""
    if not directory.is_dir():
        console.print(f"[red]Repertoire introuvable: {directory}[/red]")
        raise typer.Exit(1)

    workflow = container.workflow_service()
    outcomes = workflow.process_directory(directory)
    if not outcomes:
        console.print(f"[yellow]Aucun fichier NFO trouve dans {directory}[/yellow]")
        raise typer.Exit(1)

    _print_outcomes(outcomes)


def scrape(
    target: Annotated[
        ScrapeTarget,
        typer.Argument(help="Type de medias a scraper"),
    ] = ScrapeTarget.ALL,
) -> None:
    """Lance tinyMediaManager puis traite les NFO des repertoires temporaires."""
    _scrape(target)


@with_container(exclusive=True)
def _scrape(container, target: ScrapeTarget) -> None:
    """Implementation de la commande scrape."""
    workflow = container.workflow_service()
    try:
        outcomes = workflow.process_scrape(target.value)
    except ScraperError as e:
        console.print(f"[red]Scraping en echec: {e.message}[/red]")
        if e.details:
            console.print(f"[dim]{e.details}[/dim]")
        raise typer.Exit(1)

    if not outcomes:
        console.print("[yellow]Aucun fichier NFO trouve apres le scraping[/yellow]")
        return
    _print_outcomes(outcomes)


def _print_outcomes(outcomes: list[TitleOutcome]) -> None:
    """Affiche le resultat du traitement de chaque titre."""
    table = Table(title="Traitement des NFO", show_header=True)
    table.add_column("Fichier", style="cyan")
    table.add_column("Titre")
    table.add_column("Categorie")
    table.add_column("Issue")
    table.add_column("Detail", style="dim")

    for outcome in outcomes:
        style = outcome_style(outcome.status)
        detail = outcome.message
        if outcome.step is not None and outcome.message:
            detail = f"{outcome.step.value}: {outcome.message}"
        elif outcome.placement is not None and outcome.placement.seasons_added:
            detail = f"saisons ajoutees: {outcome.placement.seasons_added}"
        table.add_row(
            outcome.nfo_path.name,
            outcome.title,
            outcome.category.value if outcome.category else "",
            f"[{style}]{outcome.status.value}[/{style}]",
            detail,
        )

    console.print(table)
    counts = {status: 0 for status in TitleStatus}
    for outcome in outcomes:
        counts[outcome.status] += 1
    console.print(
        f"[bold]Total: {len(outcomes)}[/bold] | "
        f"[green]{counts[TitleStatus.PROCESSED]} traite(s)[/green] | "
        f"[yellow]{counts[TitleStatus.SKIPPED]} ignore(s)[/yellow] | "
        f"[red]{counts[TitleStatus.FAILED]} en echec[/red]"
    )
