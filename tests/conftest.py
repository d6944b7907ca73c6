"""
Fixtures pytest partagees pour les tests NfoOrg.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Catalogue SQLite en memoire et son repository
- Ecriture de fichiers NFO et de repertoires media de test
"""

from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence
from unittest.mock import MagicMock
from xml.sax.saxutils import escape

import pytest

from nfoorg.config import Settings
from nfoorg.core.ports.api_clients import IMetadataService
from nfoorg.infrastructure.persistence.database import Database
from nfoorg.infrastructure.persistence.repositories import SQLModelCatalogRepository


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour creer une structure de repertoires
    isolee pour chaque test.
    """
    cloud_dir = tmp_path / "Cloud"
    temp_dir = tmp_path / "temp"
    cloud_dir.mkdir()
    (temp_dir / "Movie").mkdir(parents=True)
    (temp_dir / "TvShow").mkdir(parents=True)

    return Settings(
        cloud_dir=cloud_dir,
        tmm_dir=tmp_path / "tmm",
        temp_dirs=[temp_dir],
        database_url=f"sqlite:///{tmp_path}/catalog.db",
        tmdb_api_key=None,
        cache_dir=tmp_path / "cache",
        report_dir=tmp_path / "reports",
        lock_file=tmp_path / "nfoorg.lock",
        log_file=tmp_path / "test.log",
        wait_time_after_scan=0,
        wait_time_after_nfo_edit=0,
    )


@pytest.fixture
def database() -> Iterator[Database]:
    """Catalogue SQLite en memoire (une base par test)."""
    db = Database("sqlite:///:memory:")
    yield db
    db.close()


@pytest.fixture
def repository(database: Database) -> SQLModelCatalogRepository:
    """Repository du catalogue sur la base en memoire."""
    return SQLModelCatalogRepository(database)


@pytest.fixture
def mock_metadata_service() -> MagicMock:
    """
    Mock de IMetadataService.

    Active par defaut ; configurer season_count / production_countries
    dans chaque test.
    """
    mock = MagicMock(spec=IMetadataService)
    mock.enabled = True
    mock.production_countries.return_value = []
    mock.season_count.return_value = 0
    return mock


def build_nfo(
    root: str = "movie",
    title: str = "",
    original_title: str = "",
    year: str = "",
    countries: Sequence[str] = (),
    genres: Sequence[str] = (),
    actors: Sequence[tuple[str, str]] = (),
    tmdb_id: str = "",
    imdb_id: str = "",
    plot: str = "",
    season: str = "",
) -> str:
    """Construit le contenu XML d'un NFO (format tinyMediaManager)."""
    lines = ['<?xml version="1.0" encoding="UTF-8" standalone="yes" ?>', f"<{root}>"]
    if title:
        lines.append(f"  <title>{escape(title)}</title>")
    if original_title:
        lines.append(f"  <originaltitle>{escape(original_title)}</originaltitle>")
    if year:
        lines.append(f"  <year>{year}</year>")
    if plot:
        lines.append(f"  <plot>{escape(plot)}</plot>")
    if imdb_id:
        lines.append(f"  <id>{imdb_id}</id>")
    if tmdb_id:
        lines.append(f"  <tmdbid>{tmdb_id}</tmdbid>")
    if season:
        lines.append(f"  <season>{season}</season>")
    for country in countries:
        lines.append(f"  <country>{escape(country)}</country>")
    for genre in genres:
        lines.append(f"  <genre>{escape(genre)}</genre>")
    for name, role in actors:
        lines.append("  <actor>")
        lines.append(f"    <name>{escape(name)}</name>")
        lines.append(f"    <role>{escape(role)}</role>")
        lines.append("  </actor>")
    lines.append(f"</{root}>")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_nfo() -> Callable[..., Path]:
    """
    Fabrique de fichiers NFO.

    Usage:
        nfo = write_nfo(tmp_path / "Film", "film.nfo", title="无间道", year="2002")
    """

    def _write(directory: Path, name: str = "movie.nfo", **fields) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(build_nfo(**fields), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_media_dir() -> Callable[..., Path]:
    """
    Fabrique de repertoires media.

    Usage:
        show = make_media_dir(tmp_path / "Show", seasons=["Season 1"])
    """

    def _make(directory: Path, seasons: Optional[Sequence[str]] = None, video: str = "video.mkv") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        if seasons:
            for season in seasons:
                (directory / season).mkdir(parents=True, exist_ok=True)
                (directory / season / f"{season}.E01.mkv").write_bytes(b"\x00")
        else:
            (directory / video).write_bytes(b"\x00")
        return directory

    return _make
