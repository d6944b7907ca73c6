"""
Modeles SQLModel pour la base de donnees NfoOrg.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- media_records: Titres classes (films, series, une ligne par saison)
- missing_seasons: Saisons absentes du disque
- missing_episodes: Episodes absents du disque

Toutes les colonnes hors cle primaire sont nullables : les colonnes ajoutees
par migration sur une base existante valent NULL pour les anciennes lignes,
et le repository applique les valeurs par defaut a la lecture.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Index, SQLModel


class MediaRecordModel(SQLModel, table=True):
    """
    Modele representant un titre du catalogue.

    Cle naturelle : (title, year) pour un film, (title, year, season)
    pour une serie. Les listes (pays, genres, acteurs) sont jointes par ", ".
    """

    __tablename__ = "media_records"
    __table_args__ = (
        Index("ix_media_records_title_year_season", "title", "year", "season"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    file_name: Optional[str] = None
    title: Optional[str] = Field(default=None, index=True)
    original_title: Optional[str] = None
    year: Optional[str] = None
    country: Optional[str] = None
    genres: Optional[str] = None
    actors: Optional[str] = None
    category: Optional[str] = None
    source_path: Optional[str] = None
    target_path: Optional[str] = None
    processed_at: Optional[datetime] = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = Field(default_factory=datetime.now)
    runtime: Optional[str] = None
    plot: Optional[str] = None
    imdb_id: Optional[str] = None
    tmdb_id: Optional[str] = Field(default=None, index=True)
    season: Optional[str] = None
    episode: Optional[str] = None
    director: Optional[str] = None
    writer: Optional[str] = None
    rating: Optional[str] = None
    resolution: Optional[str] = None
    version: Optional[int] = None
    is_complete: Optional[bool] = None


class MissingSeasonModel(SQLModel, table=True):
    """
    Modele representant une saison manquante.

    media_id est une reference faible (pas de cle etrangere) vers
    media_records.id.
    """

    __tablename__ = "missing_seasons"
    __table_args__ = (
        Index("ix_missing_seasons_key", "title", "tmdb_id", "season", "status"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    media_id: Optional[int] = Field(default=None, index=True)
    title: Optional[str] = None
    original_title: Optional[str] = None
    tmdb_id: Optional[str] = None
    season: Optional[int] = None
    detected_at: Optional[datetime] = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = Field(default_factory=datetime.now)
    status: Optional[str] = "missing"


class MissingEpisodeModel(SQLModel, table=True):
    """Modele representant un episode manquant."""

    __tablename__ = "missing_episodes"
    __table_args__ = (
        Index(
            "ix_missing_episodes_key", "title", "tmdb_id", "season", "episode", "status"
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    media_id: Optional[int] = Field(default=None, index=True)
    title: Optional[str] = None
    original_title: Optional[str] = None
    tmdb_id: Optional[str] = None
    season: Optional[int] = None
    episode: Optional[int] = None
    detected_at: Optional[datetime] = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = Field(default_factory=datetime.now)
    status: Optional[str] = "missing"
