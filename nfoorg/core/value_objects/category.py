"""
Objet valeur pour les categories de destination.

Chaque categorie correspond a un sous-repertoire de la videotheque
(cloud_dir/<categorie>/<titre>). Les valeurs sont les noms de repertoires
historiques de la videotheque et ne doivent pas changer.
"""

from enum import Enum


class Category(str, Enum):
    """Categorie de destination d'un titre.

    Valeurs:
        CN_MOVIE: Film chinois (Chine continentale, Hong Kong, Taiwan)
        CN_SHOW: Serie chinoise
        EN_MOVIE: Film hors Chine, Japon et Coree
        EN_SHOW: Serie hors Chine, Japon et Coree
        JPKR_MOVIE: Film japonais ou coreen
        JPKR_SHOW: Serie japonaise ou coreenne
        ANIME_MOVIE: Film d'animation
        ANIME_SHOW: Serie d'animation
        DOCUMENTARY: Documentaire (film ou serie)
        VARIETY: Emission de variete, talk-show, tele-realite
    """

    CN_MOVIE = "CnMovie"
    CN_SHOW = "CnShow"
    EN_MOVIE = "EnMovie"
    EN_SHOW = "EnShow"
    JPKR_MOVIE = "Jp&KrMovie"
    JPKR_SHOW = "Jp&KrShow"
    ANIME_MOVIE = "DmMovie"
    ANIME_SHOW = "DmShow"
    DOCUMENTARY = "JlShow"
    VARIETY = "XSShow"

    @property
    def is_series_tag(self) -> bool:
        """True si la categorie est une categorie de type 'Show'."""
        return is_series_category(self.value)


def is_series_category(tag: str) -> bool:
    """
    Indique si un tag de categorie designe une categorie de series.

    Les documentaires et emissions de variete sont ranges avec les series.

    Args:
        tag: Valeur brute de la categorie (ex: "CnShow")

    Returns:
        True si le tag contient "Show".
    """
    return "Show" in (tag or "")
