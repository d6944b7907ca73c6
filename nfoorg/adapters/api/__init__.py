"""
Client du service de metadonnees externe (TMDB).

Infrastructure partagee:
- MetadataCache: Cache persistant des details (7 jours)
- RateLimitError / with_retry: backoff exponentiel sur les erreurs 429

Le client implemente IMetadataService defini dans core/ports/api_clients.py.
"""

from nfoorg.adapters.api.cache import MetadataCache
from nfoorg.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from nfoorg.adapters.api.tmdb_client import TMDBMetadataService

__all__ = [
    "MetadataCache",
    "RateLimitError",
    "request_with_retry",
    "with_retry",
    "TMDBMetadataService",
]
