"""
Hierarchie d'exceptions de NfoOrg.

Chaque etape du traitement d'un titre leve sa propre exception, ce qui permet
a l'orchestration de savoir quelle etape a echoue sans interrompre le lot :

- ParseError : fichier NFO illisible ou malforme
- ClassificationError : aucune information de pays exploitable
- PlacementError : echec d'entree/sortie pendant un deplacement ou une copie
- ServiceError : API TMDB injoignable ou reponse non 2xx
- StorageError : echec d'ecriture ou de lecture du catalogue
- ScraperError : echec de l'execution de tinyMediaManager
- ConfigurationError : configuration inutilisable
"""

from pathlib import Path
from typing import Optional, Union


class NfoOrgError(Exception):
    """Exception de base pour toutes les erreurs NfoOrg."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convertit l'exception en dictionnaire (affichage, logs structures)."""
        result = {"error": self.__class__.__name__, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result


class ParseError(NfoOrgError):
    """Levee quand un fichier NFO est illisible, malforme ou d'un type inconnu."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Impossible de lire le fichier NFO: {path}", reason)


class ClassificationError(NfoOrgError):
    """Levee quand aucune categorie ne peut etre determinee pour un titre."""


class PlacementError(NfoOrgError):
    """
    Levee quand le deplacement d'un repertoire media echoue.

    Un repertoire partiellement copie n'est jamais restaure : une nouvelle
    execution detecte les saisons deja presentes et reprend proprement.
    """

    def __init__(
        self,
        source: Union[str, Path],
        destination: Union[str, Path],
        reason: Optional[str] = None,
    ) -> None:
        self.source = Path(source)
        self.destination = Path(destination)
        super().__init__(
            f"Deplacement echoue: {source} -> {destination}", reason
        )


class ServiceError(NfoOrgError):
    """Levee quand le service de metadonnees (TMDB) echoue."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class StorageError(NfoOrgError):
    """Levee quand une operation sur le catalogue echoue."""


class ScraperError(NfoOrgError):
    """Levee quand le processus de scraping ne peut pas etre execute."""


class ConfigurationError(NfoOrgError):
    """Levee quand la configuration est inutilisable."""
