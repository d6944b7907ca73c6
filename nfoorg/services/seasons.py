"""
Detection des numeros de saison dans les noms de repertoires.

Les repertoires de saison suivent plusieurs conventions ("Season 1",
"第1季", "S01", "S1"). Les regles sont essayees dans l'ordre ; la premiere
qui produit un nombre strictement positif l'emporte.
"""

import re
from pathlib import Path
from typing import Callable, Optional

# (pattern, conversion) essayes dans l'ordre
SEASON_RULES: tuple[tuple[re.Pattern, Callable[[str], int]], ...] = (
    (re.compile(r"season\s*(\d+)", re.IGNORECASE), int),
    (re.compile(r"第(\d+)季"), int),
    (re.compile(r"S(\d+)", re.IGNORECASE), int),
)


def season_number(name: str) -> Optional[int]:
    """
    Extrait le numero de saison d'un nom de repertoire.

    Args:
        name: Nom du repertoire (pas le chemin complet)

    Returns:
        Numero de saison (>= 1), ou None si aucun marqueur n'est reconnu.
    """
    for pattern, convert in SEASON_RULES:
        match = pattern.search(name)
        if match:
            number = convert(match.group(1))
            # "Season 0" / "S00" (specials) ne compte pas comme une saison
            return number if number > 0 else None
    return None


def seasons_in_directory(directory: Path) -> list[int]:
    """
    Liste les saisons presentes sous forme de sous-repertoires.

    Args:
        directory: Repertoire d'une serie

    Returns:
        Numeros de saison tries (liste vide si le repertoire n'existe pas).

    Raises:
        OSError: Si le repertoire existe mais ne peut pas etre lu.
    """
    if not directory.exists():
        return []

    seasons = set()
    for entry in directory.iterdir():
        if entry.is_dir():
            number = season_number(entry.name)
            if number is not None:
                seasons.add(number)
    return sorted(seasons)


def seasons_in_source(directory: Path) -> list[int]:
    """
    Liste les saisons apportees par un repertoire source.

    Un repertoire sans sous-repertoire de saison est traite comme une unite
    mono-saison si son propre nom encode une saison (ex: "Show S02").

    Returns:
        Numeros de saison tries.
    """
    seasons = seasons_in_directory(directory)
    if seasons:
        return seasons

    number = season_number(directory.name)
    return [number] if number is not None else []
