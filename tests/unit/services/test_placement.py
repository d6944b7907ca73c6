"""
Tests unitaires pour le moteur de placement / fusion.

Verifie que rien n'est jamais ecrase a destination et que la fusion
n'apporte que les saisons nouvelles.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from nfoorg.adapters.file_system import FileSystemAdapter
from nfoorg.core.exceptions import PlacementError
from nfoorg.core.value_objects import Category
from nfoorg.services.placement import (
    SKIP_DUPLICATE,
    SKIP_NO_NEW_SEASONS,
    SKIP_PROJECT_DIRECTORY,
    PlacementOutcome,
    PlacementService,
)


@pytest.fixture
def placement() -> PlacementService:
    return PlacementService(FileSystemAdapter())


@pytest.fixture
def library(tmp_path: Path) -> Path:
    root = tmp_path / "Cloud"
    root.mkdir()
    return root


class TestDestination:
    """Tests du calcul de destination."""

    def test_destination_for(self, tmp_path: Path):
        """Destination = racine / categorie / nom de la source."""
        result = PlacementService.destination_for(
            tmp_path / "src" / "无间道 (2002)", tmp_path / "Cloud", Category.CN_MOVIE
        )
        assert result == tmp_path / "Cloud" / "CnMovie" / "无间道 (2002)"

    def test_destination_for_accepts_raw_tag(self, tmp_path: Path):
        """Le tag brut de categorie est accepte."""
        result = PlacementService.destination_for(tmp_path / "a", tmp_path, "Jp&KrShow")
        assert result == tmp_path / "Jp&KrShow" / "a"


class TestMove:
    """Tests du deplacement en bloc."""

    def test_moves_when_destination_absent(self, placement, library, tmp_path, make_media_dir):
        """Destination absente -> MOVED, la source disparait."""
        source = make_media_dir(tmp_path / "incoming" / "无间道")
        (source / "movie.nfo").write_text("<movie/>", encoding="utf-8")

        result = placement.place_media(source, library, Category.CN_MOVIE, False)

        destination = library / "CnMovie" / "无间道"
        assert result.outcome is PlacementOutcome.MOVED
        assert result.placed
        assert result.destination == destination
        assert not source.exists()
        assert (destination / "video.mkv").exists()
        assert (destination / "movie.nfo").exists()

    def test_series_moved_whole_when_absent(self, placement, library, tmp_path, make_media_dir):
        """Une serie absente de la videotheque est deplacee en bloc."""
        source = make_media_dir(tmp_path / "incoming" / "庆余年", seasons=["Season 1", "Season 2"])

        result = placement.place_media(source, library, Category.CN_SHOW, True)

        assert result.outcome is PlacementOutcome.MOVED
        assert sorted(p.name for p in (library / "CnShow" / "庆余年").iterdir()) == [
            "Season 1",
            "Season 2",
        ]

    def test_move_failure_raises(self, library, tmp_path, make_media_dir):
        """Un echec d'entree/sortie pendant le deplacement leve PlacementError."""
        source = make_media_dir(tmp_path / "incoming" / "Film")
        file_system = FileSystemAdapter()
        file_system.move_directory = MagicMock(side_effect=OSError("disque plein"))

        with pytest.raises(PlacementError) as exc_info:
            PlacementService(file_system).place_media(source, library, Category.EN_MOVIE, False)

        assert exc_info.value.details == "disque plein"
        assert source.exists()


class TestSkip:
    """Tests des cas ou rien n'est deplace."""

    def test_movie_duplicate_is_skipped(self, placement, library, tmp_path, make_media_dir):
        """Film deja present -> SKIPPED(duplicate), rien ne bouge."""
        existing = make_media_dir(library / "EnMovie" / "Heat", video="old.mkv")
        source = make_media_dir(tmp_path / "incoming" / "Heat", video="new.mkv")

        result = placement.place_media(source, library, Category.EN_MOVIE, False)

        assert result.outcome is PlacementOutcome.SKIPPED
        assert result.reason == SKIP_DUPLICATE
        assert not result.placed
        assert (source / "new.mkv").exists()
        assert sorted(p.name for p in existing.iterdir()) == ["old.mkv"]

    def test_no_new_seasons_is_skipped(self, placement, library, tmp_path, make_media_dir):
        """Serie sans saison nouvelle -> SKIPPED(no new seasons)."""
        make_media_dir(library / "CnShow" / "庆余年", seasons=["Season 1", "Season 2"])
        source = make_media_dir(tmp_path / "incoming" / "庆余年", seasons=["Season 2"])

        result = placement.place_media(source, library, Category.CN_SHOW, True)

        assert result.outcome is PlacementOutcome.SKIPPED
        assert result.reason == SKIP_NO_NEW_SEASONS
        assert source.exists()

    def test_project_directory_is_never_moved(self, placement, library, tmp_path, make_media_dir):
        """Un repertoire de projet logiciel n'est jamais deplace."""
        source = make_media_dir(tmp_path / "incoming" / "tool")
        (source / "go.mod").write_text("module tool\n")

        result = placement.place_media(source, library, Category.EN_MOVIE, False)

        assert result.outcome is PlacementOutcome.SKIPPED
        assert result.reason == SKIP_PROJECT_DIRECTORY
        assert (source / "video.mkv").exists()
        assert not (library / "EnMovie").exists()


class TestMerge:
    """Tests de la fusion saison par saison."""

    def test_merge_adds_only_new_seasons(self, placement, library, tmp_path, make_media_dir):
        """Saison 1 a destination, saisons 1+2 a la source -> MERGED([2])."""
        destination = make_media_dir(library / "CnShow" / "Show", seasons=["Season 1"])
        original = (destination / "Season 1" / "Season 1.E01.mkv")
        original.write_bytes(b"original")
        source = make_media_dir(tmp_path / "incoming" / "Show", seasons=["Season 1", "Season 2"])
        (source / "Season 1" / "Season 1.E01.mkv").write_bytes(b"incoming")

        result = placement.place_media(source, library, Category.CN_SHOW, True)

        assert result.outcome is PlacementOutcome.MERGED
        assert result.seasons_added == [2]
        assert result.skipped_entries == ["Season 1"]
        assert not result.failed_entries
        assert (destination / "Season 2" / "Season 2.E01.mkv").exists()
        # La saison existante n'est jamais ecrasee
        assert original.read_bytes() == b"original"
        assert not source.exists()

    def test_merge_moves_new_top_level_files(self, placement, library, tmp_path, make_media_dir):
        """Les fichiers absents a destination (NFO, posters) sont fusionnes."""
        destination = make_media_dir(library / "DmShow" / "Anime", seasons=["S01"])
        source = make_media_dir(tmp_path / "incoming" / "Anime", seasons=["S02"])
        (source / "poster.jpg").write_bytes(b"img")

        result = placement.place_media(source, library, Category.ANIME_SHOW, True)

        assert result.outcome is PlacementOutcome.MERGED
        assert result.seasons_added == [2]
        assert (destination / "poster.jpg").exists()
        assert (destination / "S02").is_dir()

    def test_merge_single_season_source(self, placement, library, tmp_path, make_media_dir):
        """Une source sans sous-repertoire dont le nom encode la saison est fusionnee."""
        make_media_dir(library / "EnShow" / "Show S02", seasons=["Season 1"])
        source = make_media_dir(tmp_path / "incoming" / "Show S02", video="Show.S02E01.mkv")

        assert placement.new_seasons(source, library / "EnShow" / "Show S02") == [2]

    def test_failed_entry_keeps_source(self, library, tmp_path, make_media_dir):
        """Si une entree echoue, la source est conservee et l'echec rapporte."""
        make_media_dir(library / "CnShow" / "Show", seasons=["Season 1"])
        source = make_media_dir(tmp_path / "incoming" / "Show", seasons=["Season 2"])

        file_system = FileSystemAdapter()
        file_system.move_directory = MagicMock(side_effect=OSError("lecture seule"))
        file_system.remove_tree = MagicMock(return_value=True)

        result = PlacementService(file_system).place_media(source, library, Category.CN_SHOW, True)

        assert result.outcome is PlacementOutcome.MERGED
        assert result.failed_entries == {"Season 2": "lecture seule"}
        file_system.remove_tree.assert_not_called()
        assert source.exists()

    def test_file_named_like_new_season_is_not_overwritten(
        self, placement, library, tmp_path, make_media_dir
    ):
        """Un fichier 'Season 2' a destination bloque la saison 2 ; la source est conservee."""
        destination = make_media_dir(library / "CnShow" / "Show", seasons=["Season 1"])
        (destination / "Season 2").write_text("notes", encoding="utf-8")
        source = make_media_dir(tmp_path / "incoming" / "Show", seasons=["Season 2"])

        result = placement.place_media(source, library, Category.CN_SHOW, True)

        assert result.outcome is PlacementOutcome.MERGED
        assert result.seasons_added == [2]
        assert list(result.failed_entries) == ["Season 2"]
        assert (destination / "Season 2").read_text(encoding="utf-8") == "notes"
        assert (source / "Season 2" / "Season 2.E01.mkv").exists()

    def test_rerun_after_merge_finds_nothing_new(self, placement, library, tmp_path, make_media_dir):
        """Apres une fusion, la meme source ne produit plus de saison nouvelle."""
        make_media_dir(library / "CnShow" / "Show", seasons=["Season 1"])
        first = make_media_dir(tmp_path / "a" / "Show", seasons=["Season 2"])
        placement.place_media(first, library, Category.CN_SHOW, True)

        again = make_media_dir(tmp_path / "b" / "Show", seasons=["Season 2"])
        result = placement.place_media(again, library, Category.CN_SHOW, True)

        assert result.outcome is PlacementOutcome.SKIPPED
        assert result.reason == SKIP_NO_NEW_SEASONS
