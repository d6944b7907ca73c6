"""
Suivi de completude des series.

Compare le nombre de saisons connu de TMDB aux repertoires de saison
presents dans la videotheque, enregistre les saisons manquantes et
met a jour le drapeau is_complete du titre.
"""

from dataclasses import replace
from pathlib import Path
from typing import Optional

from loguru import logger

from nfoorg.core.entities import CatalogRecord, CompletenessReport, MissingSeason
from nfoorg.core.exceptions import ServiceError
from nfoorg.core.ports.api_clients import IMetadataService
from nfoorg.core.ports.repositories import ICatalogRepository
from nfoorg.services.seasons import seasons_in_directory


def compare_seasons(title: str, tmdb_id: str, total: int, present: list[int]) -> CompletenessReport:
    """Construit le bilan a partir du total connu et des saisons presentes."""
    present_set = set(present)
    missing = [season for season in range(1, total + 1) if season not in present_set]
    return CompletenessReport(
        title=title,
        tmdb_id=tmdb_id,
        total_seasons=total,
        present_seasons=sorted(present_set),
        missing_seasons=missing,
        is_complete=len(present_set) == total,
    )


class CompletenessTracker:
    """
    Detection des saisons manquantes d'une serie.

    Example:
        tracker = CompletenessTracker(repository, tmdb)
        report = tracker.detect_missing(record)
    """

    def __init__(
        self, repository: ICatalogRepository, metadata_service: IMetadataService
    ) -> None:
        self._repository = repository
        self._metadata = metadata_service

    def detect_missing(self, record: CatalogRecord) -> CompletenessReport:
        """
        Enregistre les saisons manquantes du titre et met a jour is_complete.

        Un titre sans ID TMDB n'est pas analyse (bilan vide, aucune ecriture).
        Relancer la detection sur un disque inchange ne cree aucun doublon.

        Args:
            record: Enregistrement persiste (target_path = repertoire de la serie)

        Returns:
            Bilan de completude.

        Raises:
            ServiceError: Si TMDB ne peut pas fournir le nombre de saisons.
            StorageError: Si le catalogue ne peut pas etre mis a jour.
        """
        if not record.tmdb_id:
            logger.debug("Titre sans ID TMDB, completude non verifiee", title=record.title)
            return CompletenessReport(title=record.title, tmdb_id="")

        total = self._metadata.season_count(record.tmdb_id)
        present = seasons_in_directory(Path(record.target_path))
        report = compare_seasons(record.title, record.tmdb_id, total, present)

        for season in report.missing_seasons:
            self._repository.upsert_missing_season(
                MissingSeason(
                    media_id=record.id,
                    title=record.title,
                    original_title=record.original_title,
                    tmdb_id=record.tmdb_id,
                    season=season,
                )
            )

        self._repository.upsert_catalog(replace(record, is_complete=report.is_complete))
        logger.info(
            "Completude verifiee",
            title=record.title,
            total=total,
            present=report.present_seasons,
            missing=report.missing_seasons,
            complete=report.is_complete,
        )
        return report

    def report_status(
        self, title: str, tmdb_id: str, destination_path: Path
    ) -> Optional[CompletenessReport]:
        """
        Bilan de completude en lecture seule.

        Returns:
            Bilan, ou None si le titre n'a pas d'ID TMDB ou si TMDB echoue
            (echec journalise en avertissement).
        """
        if not tmdb_id:
            return None

        try:
            total = self._metadata.season_count(tmdb_id)
        except ServiceError as e:
            logger.warning("Bilan de saisons indisponible", title=title, error=e.message)
            return None

        report = compare_seasons(title, tmdb_id, total, seasons_in_directory(Path(destination_path)))
        if report.is_complete:
            logger.info(f"{title}: {total} saison(s), serie complete")
        else:
            logger.info(
                f"{title}: {len(report.present_seasons)}/{total} saison(s)",
                missing=report.missing_seasons,
            )
        return report
