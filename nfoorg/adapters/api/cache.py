"""
Cache persistant des reponses TMDB.

Le cache utilise diskcache pour la persistance sur disque, ce qui permet
de conserver les details entre deux executions (les saisons d'une serie
sont interrogees a chaque placement).
"""

from collections.abc import Generator
from pathlib import Path
from typing import Any, Optional, Union

from diskcache import Cache


class MetadataCache:
    """
    Cache avec TTL pour les appels au service de metadonnees.

    Attributes:
        DETAILS_TTL: Duree de vie des details (7 jours)

    Example:
        cache = MetadataCache(cache_dir="~/.nfoorg/cache")
        cache.set_details("tmdb:tv:1399", payload)
        data = cache.get("tmdb:tv:1399")
    """

    DETAILS_TTL = 7 * 24 * 60 * 60  # 7 jours en secondes

    def __init__(self, cache_dir: Union[str, Path] = ".cache/api") -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    def get(self, key: str) -> Optional[Any]:
        """Recupere une valeur du cache (None si absente ou expiree)."""
        return self._cache.get(key)

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur avec un TTL en secondes."""
        self._cache.set(key, value, expire=ttl)

    def set_details(self, key: str, value: Any) -> None:
        """Stocke les details d'un media (TTL de 7 jours)."""
        self.set(key, value, self.DETAILS_TTL)

    def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        self._cache.clear()

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()


def init_metadata_cache(cache_dir: Union[str, Path]) -> Generator[MetadataCache, None, None]:
    """Ressource dependency-injector : ouvre le cache et le ferme a l'arret."""
    cache = MetadataCache(cache_dir)
    try:
        yield cache
    finally:
        cache.close()
