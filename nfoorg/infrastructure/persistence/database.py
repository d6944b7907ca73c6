"""
Acces a la base de donnees SQLite du catalogue.

Ce module fournit :
- Database : engine ouvert paresseusement au premier usage, une seule
  connexion partagee (StaticPool) pour serialiser les ecritures
- Creation et mise a niveau idempotentes du schema
- init_database : ressource dependency-injector (ouverture / fermeture)

La base de donnees est configuree via NFOORG_DATABASE_URL.
"""

from collections.abc import Generator, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from loguru import logger
from sqlalchemy import Engine, inspect, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from nfoorg.core.exceptions import StorageError


class Database:
    """
    Handle du catalogue.

    L'engine n'est cree qu'au premier acces ; le schema est alors cree
    (create_all) puis complete des colonnes manquantes. Plusieurs demarrages
    successifs sur la meme base ne doivent jamais echouer.

    Utilisation:
        database = Database("sqlite:///catalog.db")
        with database.session() as session:
            ...
        database.close()
    """

    def __init__(self, url: str) -> None:
        self._url = url
        self._engine: Optional[Engine] = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def engine(self) -> Engine:
        """Retourne l'engine, en l'ouvrant et en initialisant le schema si necessaire."""
        if self._engine is None:
            self._engine = self._open()
        return self._engine

    def _open(self) -> Engine:
        url = self._url
        kwargs: dict = {"echo": False}
        if url.startswith("sqlite"):
            if url.startswith("sqlite:///") and ":memory:" not in url:
                db_path = Path(url.replace("sqlite:///", "", 1)).expanduser()
                db_path.parent.mkdir(exist_ok=True, parents=True)
                url = f"sqlite:///{db_path}"
            kwargs["connect_args"] = {"check_same_thread": False}
            kwargs["poolclass"] = StaticPool

        try:
            engine = create_engine(url, **kwargs)
            # Import des modeles pour enregistrer leurs metadonnees
            from nfoorg.infrastructure.persistence import models  # noqa: F401

            SQLModel.metadata.create_all(engine)
            _run_migrations(engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Ouverture du catalogue impossible: {e}") from e

        logger.debug("Catalogue ouvert", url=url)
        return engine

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session SQLModel sur l'engine partage."""
        with Session(self.engine) as session:
            yield session

    def close(self) -> None:
        """Ferme l'engine s'il a ete ouvert."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


def _run_migrations(engine: Engine) -> None:
    """
    Ajoute les colonnes manquantes dans les tables existantes.

    SQLModel.metadata.create_all() ne modifie pas les tables existantes :
    chaque colonne declaree dans les modeles et absente de la table est
    ajoutee (nullable). Une colonne deja existante n'est pas une erreur.
    """
    inspector = inspect(engine)
    for table in SQLModel.metadata.sorted_tables:
        if not inspector.has_table(table.name):
            continue
        existing = {column["name"] for column in inspector.get_columns(table.name)}
        for column in table.columns:
            if column.name in existing:
                continue
            column_type = column.type.compile(dialect=engine.dialect)
            statement = f"ALTER TABLE {table.name} ADD COLUMN {column.name} {column_type}"
            try:
                with engine.begin() as conn:
                    conn.execute(text(statement))
                logger.info("Colonne ajoutee", table=table.name, column=column.name)
            except OperationalError as e:
                if "duplicate column" not in str(e).lower():
                    raise


def init_database(url: str) -> Generator[Database, None, None]:
    """
    Ressource dependency-injector : fournit le Database et le ferme a l'arret.

    L'ouverture reelle reste paresseuse (premier usage du repository).
    """
    database = Database(url)
    try:
        yield database
    finally:
        database.close()
