"""
Module de persistance SQLite pour NfoOrg.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Handle Database (ouverture paresseuse, schema, migrations)
- models.py : Modeles SQLModel representant les tables de la base de donnees
- repositories/ : Implementation du port ICatalogRepository

Usage:
    from nfoorg.infrastructure.persistence import Database
    from nfoorg.infrastructure.persistence.repositories import SQLModelCatalogRepository

    repository = SQLModelCatalogRepository(Database("sqlite:///catalog.db"))
"""

from nfoorg.infrastructure.persistence.database import Database, init_database
from nfoorg.infrastructure.persistence.models import (
    MediaRecordModel,
    MissingEpisodeModel,
    MissingSeasonModel,
)

__all__ = [
    "Database",
    "init_database",
    "MediaRecordModel",
    "MissingEpisodeModel",
    "MissingSeasonModel",
]
