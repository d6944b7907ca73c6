"""
Utilitaires partages pour les commandes CLI de NfoOrg.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- outcome_style : couleur Rich d'une issue de traitement
"""

from contextlib import contextmanager
from functools import wraps

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from nfoorg.adapters.instance_lock import InstanceLockError
from nfoorg.container import Container
from nfoorg.services.workflow import TitleStatus

# Console globale pour tous les affichages
console = Console()

_OUTCOME_STYLES = {
    TitleStatus.PROCESSED: "green",
    TitleStatus.SKIPPED: "yellow",
    TitleStatus.FAILED: "red",
}


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("nfoorg")
    try:
        yield
    finally:
        loguru_logger.enable("nfoorg")


def with_container(requires_db: bool = True, exclusive: bool = False):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Les ressources du container (catalogue, cache, client TMDB) sont
    fermees a la fin de la commande, meme en cas d'erreur.

    Args:
        requires_db: Si True (defaut), initialise le handle du catalogue.
        exclusive: Si True, prend le verrou d'instance unique pendant la
            commande (commandes qui deplacent des fichiers ou ecrivent).

    Usage:
        @with_container(exclusive=True)
        def _my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            container = Container()
            lock = None
            if exclusive:
                lock = container.instance_lock()
                try:
                    lock.acquire()
                except InstanceLockError as e:
                    console.print(f"[red]{e.message}[/red] ({e.details})")
                    raise typer.Exit(1)
            try:
                if requires_db:
                    container.database.init()
                return func(container, *args, **kwargs)
            finally:
                container.shutdown_resources()
                if lock is not None:
                    lock.release()
        return wrapper
    return decorator


def outcome_style(status: TitleStatus) -> str:
    """Couleur Rich associee a l'issue d'un titre."""
    return _OUTCOME_STYLES.get(status, "white")
