"""
Implementation SQLModel du repository du catalogue.

Implemente l'interface ICatalogRepository pour la persistance des titres
et des saisons/episodes manquants dans la base SQLite via SQLModel.

Chaque upsert est une sequence lecture-puis-ecriture sans transaction
englobante : le verrou d'instance unique du processus garantit qu'il n'y a
jamais de second ecrivain.
"""

from datetime import datetime
from typing import Optional, Union

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from nfoorg.core.entities import (
    CatalogRecord,
    MissingEpisode,
    MissingKind,
    MissingSeason,
    MissingStatus,
)
from nfoorg.core.exceptions import StorageError
from nfoorg.core.ports.repositories import (
    CatalogFilter,
    ICatalogRepository,
    MissingFilter,
)
from nfoorg.core.value_objects import is_series_category
from nfoorg.infrastructure.persistence.database import Database
from nfoorg.infrastructure.persistence.models import (
    MediaRecordModel,
    MissingEpisodeModel,
    MissingSeasonModel,
)

# Champs mis a jour lors d'un upsert (hors identite, version et dates)
_MUTABLE_FIELDS = (
    "file_name",
    "original_title",
    "country",
    "genres",
    "actors",
    "category",
    "source_path",
    "target_path",
    "runtime",
    "plot",
    "imdb_id",
    "tmdb_id",
    "episode",
    "director",
    "writer",
    "rating",
    "resolution",
    "is_complete",
)

_TEXT_FIELDS = (
    "file_name",
    "title",
    "original_title",
    "year",
    "country",
    "genres",
    "actors",
    "category",
    "source_path",
    "target_path",
    "runtime",
    "plot",
    "imdb_id",
    "tmdb_id",
    "season",
    "episode",
    "director",
    "writer",
    "rating",
    "resolution",
)


def _missing_model_for(kind: MissingKind):
    return MissingSeasonModel if MissingKind(kind) is MissingKind.SEASON else MissingEpisodeModel


class SQLModelCatalogRepository(ICatalogRepository):
    """
    Repository SQLModel du catalogue.

    Le Database est ouvert paresseusement lors de la premiere operation.
    Toute erreur SQLAlchemy est convertie en StorageError.
    """

    def __init__(self, database: Database) -> None:
        """
        Initialise le repository.

        Args :
            database : Handle du catalogue (ouvert au premier usage)
        """
        self._database = database

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def _to_entity(self, model: MediaRecordModel) -> CatalogRecord:
        """Convertit un modele DB en entite, avec les valeurs par defaut pour NULL."""
        values = {name: getattr(model, name) or "" for name in _TEXT_FIELDS}
        return CatalogRecord(
            id=model.id,
            processed_at=model.processed_at,
            updated_at=model.updated_at,
            version=model.version if model.version is not None else 1,
            is_complete=bool(model.is_complete),
            **values,
        )

    def _season_to_entity(self, model: MissingSeasonModel) -> MissingSeason:
        return MissingSeason(
            id=model.id,
            media_id=model.media_id,
            title=model.title or "",
            original_title=model.original_title or "",
            tmdb_id=model.tmdb_id or "",
            season=model.season or 0,
            detected_at=model.detected_at,
            updated_at=model.updated_at,
            status=model.status or MissingStatus.MISSING.value,
        )

    def _episode_to_entity(self, model: MissingEpisodeModel) -> MissingEpisode:
        return MissingEpisode(
            id=model.id,
            media_id=model.media_id,
            title=model.title or "",
            original_title=model.original_title or "",
            tmdb_id=model.tmdb_id or "",
            season=model.season or 0,
            episode=model.episode or 0,
            detected_at=model.detected_at,
            updated_at=model.updated_at,
            status=model.status or MissingStatus.MISSING.value,
        )

    def _missing_to_entity(self, model) -> Union[MissingSeason, MissingEpisode]:
        if isinstance(model, MissingEpisodeModel):
            return self._episode_to_entity(model)
        return self._season_to_entity(model)

    # ------------------------------------------------------------------
    # Catalogue
    # ------------------------------------------------------------------

    def _find_by_natural_key(
        self, session: Session, record: CatalogRecord
    ) -> Optional[MediaRecordModel]:
        statement = select(MediaRecordModel).where(
            MediaRecordModel.title == record.title,
            MediaRecordModel.year == record.year,
        )
        if is_series_category(record.category):
            statement = statement.where(MediaRecordModel.season == record.season)
        return session.exec(statement.order_by(MediaRecordModel.id)).first()

    def upsert_catalog(self, record: CatalogRecord) -> CatalogRecord:
        """
        Insere ou met a jour un titre selon sa cle naturelle.

        Cle : (title, year) pour un film, (title, year, season) pour une serie.
        Une mise a jour incremente toujours la version, meme sans changement.
        """
        now = datetime.now()
        try:
            with self._database.session() as session:
                existing = self._find_by_natural_key(session, record)
                if existing is None:
                    model = MediaRecordModel(
                        title=record.title,
                        year=record.year,
                        season=record.season,
                        processed_at=record.processed_at or now,
                        updated_at=now,
                        version=1,
                        **{name: getattr(record, name) for name in _MUTABLE_FIELDS},
                    )
                    session.add(model)
                    session.commit()
                    session.refresh(model)
                    logger.debug("Titre insere", title=record.title, year=record.year)
                    return self._to_entity(model)

                for name in _MUTABLE_FIELDS:
                    setattr(existing, name, getattr(record, name))
                existing.version = (existing.version or 1) + 1
                existing.updated_at = now
                session.add(existing)
                session.commit()
                session.refresh(existing)
                logger.debug(
                    "Titre mis a jour",
                    title=record.title,
                    year=record.year,
                    version=existing.version,
                )
                return self._to_entity(existing)
        except SQLAlchemyError as e:
            raise StorageError(f"Enregistrement de '{record.title}' impossible: {e}") from e

    def find_series_record(self, title: str, year: str) -> Optional[CatalogRecord]:
        """Premier enregistrement de serie (categorie '*Show') pour (titre, annee)."""
        try:
            with self._database.session() as session:
                statement = (
                    select(MediaRecordModel)
                    .where(
                        MediaRecordModel.title == title,
                        MediaRecordModel.year == year,
                        MediaRecordModel.category.contains("Show"),
                    )
                    .order_by(MediaRecordModel.id)
                )
                model = session.exec(statement).first()
                return self._to_entity(model) if model else None
        except SQLAlchemyError as e:
            raise StorageError(f"Recherche de '{title}' impossible: {e}") from e

    def query_catalog(
        self, catalog_filter: Optional[CatalogFilter] = None
    ) -> list[CatalogRecord]:
        """Liste les titres correspondant au filtre (conjonction des champs renseignes)."""
        catalog_filter = catalog_filter or CatalogFilter()
        statement = select(MediaRecordModel)
        if catalog_filter.title is not None:
            statement = statement.where(MediaRecordModel.title.contains(catalog_filter.title))
        if catalog_filter.category is not None:
            statement = statement.where(
                MediaRecordModel.category.contains(catalog_filter.category)
            )
        if catalog_filter.is_complete is not None:
            if catalog_filter.is_complete:
                statement = statement.where(MediaRecordModel.is_complete == True)  # noqa: E712
            else:
                # NULL vaut False pour les lignes anterieures a la colonne
                statement = statement.where(
                    (MediaRecordModel.is_complete == False)  # noqa: E712
                    | (MediaRecordModel.is_complete.is_(None))
                )
        if catalog_filter.tmdb_id is not None:
            statement = statement.where(MediaRecordModel.tmdb_id == catalog_filter.tmdb_id)
        if catalog_filter.season is not None:
            statement = statement.where(MediaRecordModel.season == catalog_filter.season)

        try:
            with self._database.session() as session:
                models = session.exec(statement.order_by(MediaRecordModel.id)).all()
                return [self._to_entity(model) for model in models]
        except SQLAlchemyError as e:
            raise StorageError(f"Lecture du catalogue impossible: {e}") from e

    # ------------------------------------------------------------------
    # Saisons / episodes manquants
    # ------------------------------------------------------------------

    def upsert_missing_season(self, item: MissingSeason) -> MissingSeason:
        """Insere la saison manquante sauf si une ligne 'missing' existe deja."""
        try:
            with self._database.session() as session:
                statement = select(MissingSeasonModel).where(
                    MissingSeasonModel.title == item.title,
                    MissingSeasonModel.tmdb_id == item.tmdb_id,
                    MissingSeasonModel.season == item.season,
                    MissingSeasonModel.status == MissingStatus.MISSING.value,
                )
                existing = session.exec(statement).first()
                if existing is not None:
                    return self._season_to_entity(existing)

                now = datetime.now()
                model = MissingSeasonModel(
                    media_id=item.media_id,
                    title=item.title,
                    original_title=item.original_title,
                    tmdb_id=item.tmdb_id,
                    season=item.season,
                    detected_at=item.detected_at or now,
                    updated_at=now,
                    status=MissingStatus.MISSING.value,
                )
                session.add(model)
                session.commit()
                session.refresh(model)
                logger.info("Saison manquante enregistree", title=item.title, season=item.season)
                return self._season_to_entity(model)
        except SQLAlchemyError as e:
            raise StorageError(
                f"Enregistrement de la saison manquante {item.season} impossible: {e}"
            ) from e

    def upsert_missing_episode(self, item: MissingEpisode) -> MissingEpisode:
        """Insere l'episode manquant sauf si une ligne 'missing' existe deja."""
        try:
            with self._database.session() as session:
                statement = select(MissingEpisodeModel).where(
                    MissingEpisodeModel.title == item.title,
                    MissingEpisodeModel.tmdb_id == item.tmdb_id,
                    MissingEpisodeModel.season == item.season,
                    MissingEpisodeModel.episode == item.episode,
                    MissingEpisodeModel.status == MissingStatus.MISSING.value,
                )
                existing = session.exec(statement).first()
                if existing is not None:
                    return self._episode_to_entity(existing)

                now = datetime.now()
                model = MissingEpisodeModel(
                    media_id=item.media_id,
                    title=item.title,
                    original_title=item.original_title,
                    tmdb_id=item.tmdb_id,
                    season=item.season,
                    episode=item.episode,
                    detected_at=item.detected_at or now,
                    updated_at=now,
                    status=MissingStatus.MISSING.value,
                )
                session.add(model)
                session.commit()
                session.refresh(model)
                return self._episode_to_entity(model)
        except SQLAlchemyError as e:
            raise StorageError(
                f"Enregistrement de l'episode manquant S{item.season}E{item.episode} impossible: {e}"
            ) from e

    def update_status(self, kind: MissingKind, item_id: int, status: str) -> None:
        """
        Modifie le statut d'une saison/d'un episode manquant.

        Raises:
            StorageError: Si l'element n'existe pas ou si l'ecriture echoue.
        """
        model_cls = _missing_model_for(kind)
        try:
            with self._database.session() as session:
                model = session.get(model_cls, item_id)
                if model is None:
                    raise StorageError(f"Element manquant introuvable: {kind} #{item_id}")
                model.status = status
                model.updated_at = datetime.now()
                session.add(model)
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Mise a jour du statut impossible: {e}") from e

    def query_missing(
        self, kind: MissingKind, missing_filter: Optional[MissingFilter] = None
    ) -> list[Union[MissingSeason, MissingEpisode]]:
        """Liste les saisons ou episodes manquants correspondant au filtre."""
        missing_filter = missing_filter or MissingFilter()
        model_cls = _missing_model_for(kind)
        statement = select(model_cls)
        if missing_filter.title is not None:
            statement = statement.where(model_cls.title.contains(missing_filter.title))
        if missing_filter.tmdb_id is not None:
            statement = statement.where(model_cls.tmdb_id == missing_filter.tmdb_id)
        if missing_filter.season is not None:
            statement = statement.where(model_cls.season == missing_filter.season)
        if missing_filter.status is not None:
            statement = statement.where(model_cls.status == missing_filter.status)

        try:
            with self._database.session() as session:
                models = session.exec(statement.order_by(model_cls.id)).all()
                return [self._missing_to_entity(model) for model in models]
        except SQLAlchemyError as e:
            raise StorageError(f"Lecture des elements manquants impossible: {e}") from e
