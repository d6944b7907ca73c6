"""
Ports (interfaces abstraites) de la couche domaine.

Exports :
- ICatalogRepository, CatalogFilter, MissingFilter : persistance du catalogue
- IMetadataService : service de metadonnees (TMDB)
- IMetadataReader : lecture des fichiers NFO
"""

from nfoorg.core.ports.api_clients import IMetadataService
from nfoorg.core.ports.parser import IMetadataReader
from nfoorg.core.ports.repositories import (
    CatalogFilter,
    ICatalogRepository,
    MissingFilter,
)

__all__ = [
    "CatalogFilter",
    "ICatalogRepository",
    "IMetadataReader",
    "IMetadataService",
    "MissingFilter",
]
