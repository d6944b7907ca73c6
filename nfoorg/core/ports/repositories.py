"""
Interfaces ports pour le catalogue.

Interface abstraite (port) definissant le contrat de persistance du catalogue
et des elements manquants. L'implementation (adaptateur) fournit le stockage
concret (SQLite via SQLModel).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

from nfoorg.core.entities import (
    CatalogRecord,
    MissingEpisode,
    MissingKind,
    MissingSeason,
)


@dataclass(frozen=True)
class CatalogFilter:
    """
    Filtre de recherche dans le catalogue.

    Chaque champ renseigne ajoute une condition (conjonction). Un filtre
    vide retourne tout le catalogue.

    Attributs :
        title : Sous-chaine du titre
        category : Sous-chaine du tag de categorie (ex: "Show")
        is_complete : Valeur exacte du drapeau de completude
        tmdb_id : Egalite sur l'ID TMDB
        season : Egalite sur la saison (texte)
    """

    title: Optional[str] = None
    category: Optional[str] = None
    is_complete: Optional[bool] = None
    tmdb_id: Optional[str] = None
    season: Optional[str] = None


@dataclass(frozen=True)
class MissingFilter:
    """
    Filtre de recherche des saisons/episodes manquants.

    Attributs :
        title : Sous-chaine du titre
        tmdb_id : Egalite sur l'ID TMDB
        season : Egalite sur le numero de saison
        status : Egalite sur le statut (ex: "missing")
    """

    title: Optional[str] = None
    tmdb_id: Optional[str] = None
    season: Optional[int] = None
    status: Optional[str] = None


class ICatalogRepository(ABC):
    """
    Interface de stockage du catalogue.

    Seule implementation autorisee a modifier les enregistrements ; les
    autres composants manipulent des copies (dataclasses).
    """

    @abstractmethod
    def upsert_catalog(self, record: CatalogRecord) -> CatalogRecord:
        """
        Insere ou met a jour un titre selon sa cle naturelle.

        Insertion avec version=1, sinon mise a jour de tous les champs
        modifiables et version+1 (meme si rien n'a change).
        """
        ...

    @abstractmethod
    def upsert_missing_season(self, item: MissingSeason) -> MissingSeason:
        """Insere une saison manquante sauf si une ligne 'missing' existe deja."""
        ...

    @abstractmethod
    def upsert_missing_episode(self, item: MissingEpisode) -> MissingEpisode:
        """Insere un episode manquant sauf si une ligne 'missing' existe deja."""
        ...

    @abstractmethod
    def update_status(self, kind: MissingKind, item_id: int, status: str) -> None:
        """Modifie le statut d'un element manquant et rafraichit updated_at."""
        ...

    @abstractmethod
    def query_catalog(
        self, catalog_filter: Optional[CatalogFilter] = None
    ) -> list[CatalogRecord]:
        """Liste les titres correspondant au filtre."""
        ...

    @abstractmethod
    def query_missing(
        self, kind: MissingKind, missing_filter: Optional[MissingFilter] = None
    ) -> list[Union[MissingSeason, MissingEpisode]]:
        """Liste les saisons ou episodes manquants correspondant au filtre."""
        ...

    @abstractmethod
    def find_series_record(self, title: str, year: str) -> Optional[CatalogRecord]:
        """Recherche l'enregistrement serie existant pour (titre, annee)."""
        ...
