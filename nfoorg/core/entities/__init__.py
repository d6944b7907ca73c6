"""
Entites metier du catalogue.

Exports:
- CatalogRecord: Titre classe dans la videotheque
- MissingSeason / MissingEpisode: Trous detectes pour une serie
- MissingStatus / MissingKind: Statut et type d'element manquant
- CompletenessReport: Bilan de completude d'une serie
"""

from nfoorg.core.entities.catalog import (
    CatalogRecord,
    CompletenessReport,
    MissingEpisode,
    MissingKind,
    MissingSeason,
    MissingStatus,
)

__all__ = [
    "CatalogRecord",
    "CompletenessReport",
    "MissingEpisode",
    "MissingKind",
    "MissingSeason",
    "MissingStatus",
]
