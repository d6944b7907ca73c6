"""
Configuration du logging de l'application via loguru.

Deux sorties :
- Console (stderr) : une ligne coloree par evenement, suivie du contexte
  structure (fichier NFO, etape, titre...) passe en kwargs a logger
- Fichier : JSON serialise, rotation par taille, archives compressees

Le traitement d'un lot peut durer longtemps (scraping, attentes) : le
fichier conserve le niveau DEBUG pour reconstituer le parcours d'un titre.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

# Cles de contexte affichees en priorite sur la console
_CONTEXT_KEYS = ("path", "step", "title", "category", "destination", "error")

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)


def _console_format(record) -> str:
    """Format console : message puis contexte cle=valeur (ordre stable)."""
    extra = record["extra"]
    keys = [k for k in _CONTEXT_KEYS if k in extra]
    keys += sorted(k for k in extra if k not in _CONTEXT_KEYS)
    context = " ".join(f"{key}={{extra[{key}]}}" for key in keys)
    suffix = f" <dim>{context}</dim>" if context else ""
    return _CONSOLE_FORMAT + suffix + "\n{exception}"


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum pour la console (DEBUG, INFO, WARNING, ERROR)
        log_file : Fichier de log JSON (None = console uniquement)
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB")
        retention_count : Nombre d'archives conservees
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=_console_format,
        colorize=True,
    )

    if log_file is None:
        return

    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )
    logger.debug("Logging configure", log_file=str(log_file), rotation=rotation_size)
