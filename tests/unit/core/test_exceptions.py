"""
Tests unitaires pour la hierarchie d'exceptions.
"""

from pathlib import Path

import pytest

from nfoorg.core.exceptions import (
    ClassificationError,
    ConfigurationError,
    NfoOrgError,
    ParseError,
    PlacementError,
    ScraperError,
    ServiceError,
    StorageError,
)


class TestExceptions:
    @pytest.mark.parametrize(
        "error",
        [
            ParseError("a.nfo"),
            ClassificationError("no country information"),
            PlacementError("/src", "/dst"),
            ServiceError("TMDB"),
            StorageError("db"),
            ScraperError("tmm"),
            ConfigurationError("conf"),
        ],
    )
    def test_hierarchy(self, error):
        assert isinstance(error, NfoOrgError)

    def test_parse_error(self):
        error = ParseError("dir/movie.nfo", "XML malforme")
        assert error.path == Path("dir/movie.nfo")
        assert error.reason == "XML malforme"
        assert "dir/movie.nfo" in str(error)

    def test_placement_error(self):
        error = PlacementError("/src/A", "/Cloud/CnMovie/A", "disque plein")
        assert error.source == Path("/src/A")
        assert error.destination == Path("/Cloud/CnMovie/A")
        assert error.details == "disque plein"

    def test_service_error_status(self):
        assert ServiceError("x", status_code=404).status_code == 404
        assert ServiceError("x").status_code is None

    def test_to_dict(self):
        assert StorageError("lecture", "verrou").to_dict() == {
            "error": "StorageError",
            "message": "lecture",
            "details": "verrou",
        }
        assert ScraperError("x").to_dict() == {"error": "ScraperError", "message": "x"}
