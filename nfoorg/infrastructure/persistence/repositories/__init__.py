"""
Implementations SQLModel des repositories.

Le repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit le handle Database via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from nfoorg.infrastructure.persistence.repositories.catalog_repository import (
    SQLModelCatalogRepository,
)

__all__ = [
    "SQLModelCatalogRepository",
]
