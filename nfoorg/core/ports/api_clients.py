"""
Interface port pour le service de metadonnees.

Le service de metadonnees (TMDB) fournit les pays de production utilises
pour affiner la classification et le nombre de saisons utilise par le
suivi de completude.
"""

from abc import ABC, abstractmethod


class IMetadataService(ABC):
    """
    Interface du service de metadonnees externe.

    Toutes les methodes levent ServiceError en cas d'echec (cle absente,
    reponse non 2xx, erreur de transport).
    """

    @abstractmethod
    def production_countries(self, tmdb_id: str, is_series: bool) -> list[str]:
        """
        Recupere les pays de production d'un film ou d'une serie.

        Args :
            tmdb_id : Identifiant TMDB
            is_series : True pour l'endpoint /tv, False pour /movie

        Retourne :
            Noms des pays, dans l'ordre retourne par l'API
        """
        ...

    @abstractmethod
    def season_count(self, tmdb_id: str) -> int:
        """Recupere le nombre total de saisons d'une serie."""
        ...

    @abstractmethod
    def original_language(self, tmdb_id: str, is_series: bool) -> str:
        """Recupere la langue originale (code ISO 639-1)."""
        ...

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """True si le service est configure (cle API presente)."""
        ...
