"""
Entites du catalogue.

Un CatalogRecord represente un titre range dans la videotheque ; les
MissingSeason / MissingEpisode representent les trous detectes pour une
serie. Ces entites sont des objets valeur passes entre les services :
seul le repository du catalogue les persiste.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from nfoorg.core.value_objects.category import is_series_category


class MissingStatus(str, Enum):
    """Statut d'une saison ou d'un episode manquant."""

    MISSING = "missing"
    RESOLVED = "resolved"
    IGNORED = "ignored"


class MissingKind(str, Enum):
    """Type d'element manquant suivi par le catalogue."""

    SEASON = "season"
    EPISODE = "episode"


@dataclass
class CatalogRecord:
    """
    Enregistrement du catalogue pour un titre classe.

    Cle naturelle : (title, year) pour un film, (title, year, season) pour
    une serie. Le compteur de version est gere par le repository et
    augmente de 1 a chaque mise a jour.

    Attributs :
        id : ID interne (None tant que non persiste)
        file_name : Nom du fichier NFO traite
        title / original_title / year : Identite du titre
        country / genres / actors : Listes jointes par ", "
        category : Tag de categorie (ex: "CnMovie")
        source_path : Repertoire d'origine
        target_path : Repertoire de destination dans la videotheque
        processed_at : Date du premier traitement
        updated_at : Date de derniere mise a jour
        resolution : Tag de resolution extrait du nom du NFO (ex: "1080P")
        version : Compteur de mises a jour (1 a l'insertion)
        is_complete : True si toutes les saisons connues sont presentes
    """

    id: Optional[int] = None
    file_name: str = ""
    title: str = ""
    original_title: str = ""
    year: str = ""
    country: str = ""
    genres: str = ""
    actors: str = ""
    category: str = ""
    source_path: str = ""
    target_path: str = ""
    processed_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    runtime: str = ""
    plot: str = ""
    imdb_id: str = ""
    tmdb_id: str = ""
    season: str = ""
    episode: str = ""
    director: str = ""
    writer: str = ""
    rating: str = ""
    resolution: str = ""
    version: int = 1
    is_complete: bool = False

    @property
    def is_series(self) -> bool:
        """True si la categorie est une categorie de series."""
        return is_series_category(self.category)


@dataclass
class MissingSeason:
    """
    Saison absente du disque pour une serie du catalogue.

    media_id est une reference faible vers CatalogRecord.id : la relation
    sert uniquement a la recherche, l'enregistrement parent peut evoluer
    independamment.
    """

    id: Optional[int] = None
    media_id: Optional[int] = None
    title: str = ""
    original_title: str = ""
    tmdb_id: str = ""
    season: int = 0
    detected_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    status: str = MissingStatus.MISSING.value


@dataclass
class MissingEpisode:
    """Episode absent du disque pour une serie du catalogue."""

    id: Optional[int] = None
    media_id: Optional[int] = None
    title: str = ""
    original_title: str = ""
    tmdb_id: str = ""
    season: int = 0
    episode: int = 0
    detected_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    status: str = MissingStatus.MISSING.value


@dataclass
class CompletenessReport:
    """
    Bilan de completude d'une serie.

    Attributs :
        total_seasons : Nombre de saisons connues du service de metadonnees
        present_seasons : Saisons trouvees sur le disque (triees)
        missing_seasons : Saisons de [1, total] absentes du disque
        is_complete : len(present_seasons) == total_seasons
    """

    title: str
    tmdb_id: str
    total_seasons: int = 0
    present_seasons: list[int] = field(default_factory=list)
    missing_seasons: list[int] = field(default_factory=list)
    is_complete: bool = False
