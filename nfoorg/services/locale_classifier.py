"""
Classification d'un titre dans une categorie de destination.

Les signaux de genre (documentaire, variete, animation) sont des indicateurs
de format plus forts que la geographie et passent en premier. Parmi les pays,
c'est le PREMIER pays liste qui decide : les listes de pays de production sont
ordonnees par importance dans les metadonnees source.

Fonction pure : l'appelant affine la liste de pays via TMDB avant l'appel.
"""

from typing import Iterable, Sequence

from nfoorg.core.exceptions import ClassificationError
from nfoorg.core.value_objects import Category
from nfoorg.utils.constants import (
    ANIME_KEYWORDS,
    CN_COUNTRY_KEYWORDS,
    DOCUMENTARY_KEYWORDS,
    JPKR_COUNTRY_KEYWORDS,
    VARIETY_KEYWORDS,
)


def _matches_any(value: str, keywords: Iterable[str]) -> bool:
    """True si une des sous-chaines apparait dans value (insensible a la casse)."""
    lowered = value.lower()
    return any(keyword in lowered for keyword in keywords)


def _any_genre_matches(genres: Sequence[str], keywords: Iterable[str]) -> bool:
    keywords = tuple(keywords)
    return any(_matches_any(genre, keywords) for genre in genres)


def classify(
    countries: Sequence[str],
    is_series: bool,
    genres: Sequence[str] = (),
) -> Category:
    """
    Determine la categorie de destination d'un titre.

    Ordre de priorite (la premiere regle qui correspond l'emporte) :
    1. Genre documentaire -> DOCUMENTARY
    2. Genre variete / tele-realite / talk-show / jeu / concours -> VARIETY
    3. Genre animation -> ANIME_SHOW ou ANIME_MOVIE
    4. Premier pays de la liste : Japon/Coree -> JPKR_*, Chine/HK/Taiwan
       -> CN_*, tout autre pays -> EN_*

    Args:
        countries: Pays de production, dans l'ordre d'importance
        is_series: True pour une serie
        genres: Genres du titre

    Returns:
        Category correspondante.

    Raises:
        ClassificationError: Si aucune regle de genre ne s'applique et que
            la liste de pays est vide.
    """
    if _any_genre_matches(genres, DOCUMENTARY_KEYWORDS):
        return Category.DOCUMENTARY

    if _any_genre_matches(genres, VARIETY_KEYWORDS):
        return Category.VARIETY

    if _any_genre_matches(genres, ANIME_KEYWORDS):
        return Category.ANIME_SHOW if is_series else Category.ANIME_MOVIE

    if not countries:
        raise ClassificationError("no country information")

    first_country = countries[0]
    if _matches_any(first_country, JPKR_COUNTRY_KEYWORDS):
        return Category.JPKR_SHOW if is_series else Category.JPKR_MOVIE
    if _matches_any(first_country, CN_COUNTRY_KEYWORDS):
        return Category.CN_SHOW if is_series else Category.CN_MOVIE
    return Category.EN_SHOW if is_series else Category.EN_MOVIE
