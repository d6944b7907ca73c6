"""
Client TMDB pour les pays de production et le nombre de saisons.

Implemente l'interface IMetadataService pour TMDB (The Movie Database).
Les details d'un film ou d'une serie sont recuperes une seule fois
(langue zh-CN) puis mis en cache : pays, langue originale et nombre
de saisons sont extraits du meme document.

Usage:
    cache = MetadataCache()
    client = TMDBMetadataService(api_key="your_key", cache=cache)
    countries = client.production_countries("1399", is_series=True)
    client.close()
"""

from collections.abc import Generator
from typing import Any, Optional

import httpx
from loguru import logger

from nfoorg.adapters.api.cache import MetadataCache
from nfoorg.adapters.api.retry import RateLimitError, request_with_retry
from nfoorg.core.exceptions import ServiceError
from nfoorg.core.ports.api_clients import IMetadataService


class TMDBMetadataService(IMetadataService):
    """
    Client API TMDB synchrone.

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
        TMDB_ORG_BASE_URL: Domaine alternatif (api.tmdb.org)
        LANGUAGE: Langue demandee pour les noms de pays

    Example:
        client = TMDBMetadataService(api_key="xxx", cache=MetadataCache())
        client.season_count("1399")
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"
    TMDB_ORG_BASE_URL = "https://api.tmdb.org/3"
    LANGUAGE = "zh-CN"

    def __init__(
        self,
        api_key: str,
        use_tmdb_org: bool = False,
        cache: Optional[MetadataCache] = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB v3 (vide = service desactive)
            use_tmdb_org: Utiliser api.tmdb.org au lieu de api.themoviedb.org
            cache: Cache persistant optionnel des details
            timeout: Timeout HTTP en secondes
        """
        self._api_key = api_key or ""
        self._base_url = self.TMDB_ORG_BASE_URL if use_tmdb_org else self.TMDB_BASE_URL
        self._cache = cache
        self._timeout = timeout
        self._client: Optional[httpx.Client] = None

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.Client:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self._base_url,
                headers={"Accept": "application/json"},
                params={"api_key": self._api_key},
                timeout=self._timeout,
            )
        return self._client

    def _details(self, tmdb_id: str, is_series: bool) -> dict[str, Any]:
        """
        Recupere le document de details (cache-first).

        Raises:
            ServiceError: Cle absente, reponse non 2xx ou erreur de transport.
        """
        if not self.enabled:
            raise ServiceError("Cle API TMDB non configuree")

        kind = "tv" if is_series else "movie"
        cache_key = f"tmdb:{kind}:{tmdb_id}"
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return cached

        try:
            response = request_with_retry(
                self._get_client(),
                "GET",
                f"/{kind}/{tmdb_id}",
                params={"language": self.LANGUAGE},
            )
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ServiceError(
                f"TMDB a repondu {status} pour {kind}/{tmdb_id}", status_code=status
            ) from e
        except RateLimitError as e:
            raise ServiceError(
                f"TMDB limite les requetes pour {kind}/{tmdb_id}", status_code=429
            ) from e
        except httpx.HTTPError as e:
            raise ServiceError(f"TMDB injoignable pour {kind}/{tmdb_id}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ServiceError(f"Reponse TMDB invalide pour {kind}/{tmdb_id}") from e

        logger.debug("Details TMDB recuperes", kind=kind, tmdb_id=tmdb_id)
        if self._cache is not None:
            self._cache.set_details(cache_key, data)
        return data

    def production_countries(self, tmdb_id: str, is_series: bool) -> list[str]:
        data = self._details(tmdb_id, is_series)
        return [
            country["name"]
            for country in data.get("production_countries") or []
            if country.get("name")
        ]

    def season_count(self, tmdb_id: str) -> int:
        data = self._details(tmdb_id, is_series=True)
        return int(data.get("number_of_seasons") or 0)

    def original_language(self, tmdb_id: str, is_series: bool) -> str:
        data = self._details(tmdb_id, is_series)
        return data.get("original_language") or ""

    def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
        self._client = None


def init_tmdb_client(
    api_key: Optional[str],
    use_tmdb_org: bool = False,
    cache: Optional[MetadataCache] = None,
) -> Generator[TMDBMetadataService, None, None]:
    """Ressource dependency-injector : ferme le client HTTP a l'arret."""
    client = TMDBMetadataService(api_key=api_key, use_tmdb_org=use_tmdb_org, cache=cache)
    try:
        yield client
    finally:
        client.close()
