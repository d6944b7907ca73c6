"""
Objets valeur representant le contenu d'un fichier NFO.

Un NfoRecord est produit par le lecteur de metadonnees (adapters/parsing)
et consomme par la classification, le placement et le catalogue.
Les champs texte restent des chaines brutes : le NFO ne garantit ni le
format de l'annee ni celui de la duree.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Actor:
    """Acteur declare dans le NFO (balise <actor>)."""

    name: str
    role: str = ""


@dataclass(frozen=True)
class NfoRecord:
    """
    Contenu structure d'un fichier NFO film (<movie>) ou serie (<tvshow>).

    Attributs:
        title: Titre localise
        original_title: Titre original
        year: Annee (texte brut)
        countries: Pays de production, dans l'ordre du NFO
        genres: Genres, dans l'ordre du NFO
        actors: Acteurs (nom, role)
        runtime: Duree (texte brut, minutes)
        plot: Synopsis
        imdb_id: Identifiant IMDb (ex: "tt0338564")
        tmdb_id: Identifiant TMDB
        season: Numero de saison (texte brut)
        episode: Numero d'episode (texte brut)
        director: Realisateur
        writer: Scenariste
        rating: Note
        is_series: True si la racine XML est <tvshow>
    """

    title: str = ""
    original_title: str = ""
    year: str = ""
    countries: tuple[str, ...] = ()
    genres: tuple[str, ...] = ()
    actors: tuple[Actor, ...] = ()
    runtime: str = ""
    plot: str = ""
    imdb_id: str = ""
    tmdb_id: str = ""
    season: str = ""
    episode: str = ""
    director: str = ""
    writer: str = ""
    rating: str = ""
    is_series: bool = False

    @property
    def full_title(self) -> str:
        """Titre suivi de l'annee, ex: 'Infernal Affairs (2002)'."""
        return f"{self.title} ({self.year})"

    @property
    def actor_names(self) -> tuple[str, ...]:
        """Noms des acteurs, dans l'ordre du NFO."""
        return tuple(actor.name for actor in self.actors)

    def is_resolved(self, has_chinese_title: Optional[bool] = None) -> bool:
        """
        Indique si le NFO contient assez d'informations (scraping reussi).

        Un titre est requis, plus au moins un champ significatif.
        Un titre chinois accompagne d'une annee suffit egalement.

        Args:
            has_chinese_title: Resultat precalcule de la detection du chinois
                dans le titre (calcule a la demande si None)
        """
        if not self.title:
            return False

        if (
            self.genres
            or self.countries
            or self.imdb_id
            or self.tmdb_id
            or self.plot
            or self.actors
        ):
            return True

        if has_chinese_title is None:
            from nfoorg.utils.helpers import contains_chinese

            has_chinese_title = contains_chinese(self.title)
        return bool(has_chinese_title and self.year)
