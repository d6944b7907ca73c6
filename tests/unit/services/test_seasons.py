"""
Tests unitaires pour la detection des numeros de saison.
"""

from pathlib import Path

import pytest

from nfoorg.services.seasons import season_number, seasons_in_directory, seasons_in_source


class TestSeasonNumber:
    """Tests de season_number (regles ordonnees)."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Season 1", 1),
            ("season02", 2),
            ("SEASON  10", 10),
            ("第3季", 3),
            ("S01", 1),
            ("s4", 4),
            ("Show.S05.1080p", 5),
        ],
    )
    def test_recognized_markers(self, name, expected):
        """Les conventions usuelles sont reconnues."""
        assert season_number(name) == expected

    @pytest.mark.parametrize("name", ["Extras", "Featurettes", "", "1080p"])
    def test_no_marker(self, name):
        """Sans marqueur, le resultat est None."""
        assert season_number(name) is None

    def test_season_zero_is_none(self):
        """La saison 0 (specials) n'est pas une saison."""
        assert season_number("Season 0") is None
        assert season_number("S00") is None

    def test_season_rule_before_s_rule(self):
        """'Season 2' est lu par la premiere regle, pas par S(\\d+)."""
        assert season_number("Season 2 S09") == 2


class TestSeasonsInDirectory:
    """Tests de l'enumeration des saisons d'un repertoire."""

    def test_lists_sorted_unique_seasons(self, tmp_path: Path):
        """Les saisons sont triees et dedoublonnees."""
        for name in ["Season 2", "S01", "Season 1", "Extras"]:
            (tmp_path / name).mkdir()
        (tmp_path / "Season 3.nfo").write_text("")

        assert seasons_in_directory(tmp_path) == [1, 2]

    def test_missing_directory(self, tmp_path: Path):
        """Un repertoire absent ne contient aucune saison."""
        assert seasons_in_directory(tmp_path / "absent") == []

    def test_source_falls_back_to_own_name(self, tmp_path: Path):
        """Une source sans sous-repertoire de saison utilise son propre nom."""
        source = tmp_path / "Show S02"
        source.mkdir()
        (source / "episode.mkv").write_bytes(b"")

        assert seasons_in_source(source) == [2]

    def test_source_with_subdirectories(self, tmp_path: Path):
        """Les sous-repertoires de saison priment sur le nom de la source."""
        source = tmp_path / "Show S09"
        (source / "Season 1").mkdir(parents=True)

        assert seasons_in_source(source) == [1]
