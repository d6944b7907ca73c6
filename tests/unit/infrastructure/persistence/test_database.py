"""
Tests unitaires pour l'ouverture du catalogue et la mise a niveau du schema.
"""

from pathlib import Path

from sqlalchemy import create_engine, inspect, text

from nfoorg.infrastructure.persistence.database import Database, init_database
from nfoorg.infrastructure.persistence.repositories import SQLModelCatalogRepository


class TestDatabase:
    """Tests de Database."""

    def test_engine_is_lazy(self, tmp_path: Path):
        db_file = tmp_path / "data" / "catalog.db"
        database = Database(f"sqlite:///{db_file}")

        assert not db_file.exists()
        database.engine
        assert db_file.exists()
        database.close()

    def test_creates_tables(self, database):
        tables = set(inspect(database.engine).get_table_names())
        assert {"media_records", "missing_seasons", "missing_episodes"} <= tables

    def test_reopen_is_idempotent(self, tmp_path: Path):
        url = f"sqlite:///{tmp_path / 'catalog.db'}"
        for _ in range(3):
            database = Database(url)
            database.engine
            database.close()

    def test_adds_missing_columns_to_existing_table(self, tmp_path: Path):
        """Une base anterieure (sans version / is_complete) est completee."""
        db_file = tmp_path / "old.db"
        legacy = create_engine(f"sqlite:///{db_file}")
        with legacy.begin() as conn:
            conn.execute(
                text(
                    "CREATE TABLE media_records ("
                    "id INTEGER PRIMARY KEY, title VARCHAR, year VARCHAR, "
                    "category VARCHAR, season VARCHAR)"
                )
            )
            conn.execute(
                text(
                    "INSERT INTO media_records (title, year, category, season) "
                    "VALUES ('无间道', '2002', 'CnMovie', '')"
                )
            )
        legacy.dispose()

        database = Database(f"sqlite:///{db_file}")
        columns = {c["name"] for c in inspect(database.engine).get_columns("media_records")}
        database.close()

        assert {"version", "is_complete", "resolution", "updated_at"} <= columns

        # Second demarrage : aucune colonne a ajouter, aucune erreur
        database = Database(f"sqlite:///{db_file}")
        database.engine
        database.close()

    def test_legacy_rows_get_defaults(self, tmp_path: Path):
        db_file = tmp_path / "old.db"
        legacy = create_engine(f"sqlite:///{db_file}")
        with legacy.begin() as conn:
            conn.execute(
                text("CREATE TABLE media_records (id INTEGER PRIMARY KEY, title VARCHAR, year VARCHAR)")
            )
            conn.execute(text("INSERT INTO media_records (title, year) VALUES ('英雄', '2002')"))
        legacy.dispose()

        database = Database(f"sqlite:///{db_file}")
        [record] = SQLModelCatalogRepository(database).query_catalog()
        database.close()

        assert record.title == "英雄"
        assert record.version == 1
        assert record.is_complete is False
        assert record.category == ""


class TestInitDatabase:
    def test_resource_closes_database(self, tmp_path: Path):
        resource = init_database(f"sqlite:///{tmp_path / 'catalog.db'}")
        database = next(resource)
        database.engine

        resource.close()

        assert database._engine is None
