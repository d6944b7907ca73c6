"""
Point d'entrée CLI de NfoOrg.

Configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import (
    catalog,
    missing,
    process_dir,
    process_nfo,
    resolve,
    scrape,
    status,
)
from .config import Settings, load_settings
from .core.exceptions import ConfigurationError
from .logging_config import configure_logging

app = typer.Typer(
    name="nfoorg",
    help="Classement de vidéothèque à partir des fichiers NFO",
)

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


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
    """NfoOrg - Classement de videotheque par fichiers NFO."""
    if quiet:
        state["quiet"] = True
    else:
        state["verbose"] = verbose

    if quiet or verbose:
        _configure(_load_settings())


# Traitement
app.command(name="process-nfo")(process_nfo)
app.command(name="process-dir")(process_dir)
app.command()(scrape)

# Catalogue
app.command()(catalog)
app.command()(missing)
app.command()(resolve)
app.command()(status)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = _load_settings()
    logger.info("Configuration NfoOrg")
    typer.echo(f"Vidéothèque : {config.cloud_dir}")
    typer.echo(f"tinyMediaManager : {config.tmm_dir}")
    typer.echo("Répertoires temporaires :")
    for index, temp_dir in enumerate(config.temp_dirs, start=1):
        typer.echo(f"  {index}. {temp_dir}")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"Rapports acteurs : {config.report_dir}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"NfoOrg v{__version__}")


def _load_settings() -> Settings:
    """Configuration de la commande en cours (code de sortie 2 si invalide)."""
    try:
        return load_settings()
    except ConfigurationError as e:
        typer.echo(f"{e.message} : {e.details}", err=True)
        raise typer.Exit(2)


def _console_level(config: Settings) -> str:
    if state["quiet"]:
        return "ERROR"
    if state["verbose"] >= 1:
        return "DEBUG"
    return config.log_level


def _configure(config: Settings) -> None:
    configure_logging(
        log_level=_console_level(config),
        log_file=config.log_file,
        rotation_size=config.log_rotation_size,
        retention_count=config.log_retention_count,
    )


def main() -> None:
    """Point d'entrée principal de l'application."""
    try:
        config = load_settings()
    except ConfigurationError as e:
        typer.echo(f"{e.message} : {e.details}", err=True)
        raise SystemExit(2) from e
    _configure(config)
    logger.debug("Démarrage de NfoOrg", version=__version__)
    app()


if __name__ == "__main__":
    main()
