"""
Tests unitaires pour la classification des titres.

Verifie l'ordre de priorite des regles (genres avant pays) et la regle
du premier pays liste.
"""

import pytest

from nfoorg.core.exceptions import ClassificationError
from nfoorg.core.value_objects import Category
from nfoorg.services.locale_classifier import classify


class TestGenreRules:
    """Tests des regles basees sur les genres."""

    @pytest.mark.parametrize("genre", ["纪录片", "Documentary", "historical DOCUMENTARY"])
    @pytest.mark.parametrize("is_series", [True, False])
    def test_documentary_wins_over_country(self, genre, is_series):
        """Un genre documentaire donne toujours JlShow, quel que soit le pays."""
        result = classify(["日本"], is_series, ["剧情", genre])
        assert result is Category.DOCUMENTARY
        assert result.value == "JlShow"

    def test_documentary_without_country(self):
        """Le documentaire est classe meme sans pays."""
        assert classify([], False, ["纪录片"]) is Category.DOCUMENTARY

    def test_documentary_before_variety_and_anime(self):
        """Le documentaire passe avant la variete et l'animation."""
        assert classify(["中国"], True, ["动画", "真人秀", "纪录片"]) is Category.DOCUMENTARY

    @pytest.mark.parametrize(
        "genre", ["综艺节目", "Reality", "脱口秀", "Talk Show", "game-show", "竞赛节目", "选秀节目"]
    )
    def test_variety_genres(self, genre):
        """Les formats variete / tele-realite / talk-show donnent XSShow."""
        assert classify(["美国"], False, [genre]) is Category.VARIETY

    def test_variety_before_anime(self):
        """La variete passe avant l'animation."""
        assert classify(["日本"], True, ["动画", "综艺节目"]) is Category.VARIETY

    def test_anime_series(self):
        """Animation + serie -> DmShow."""
        assert classify(["日本"], True, ["动画"]) is Category.ANIME_SHOW

    def test_anime_movie(self):
        """Animation + film -> DmMovie."""
        assert classify(["美国"], False, ["Animation"]) is Category.ANIME_MOVIE

    def test_anime_keyword_dongman(self):
        """Le genre 动漫 est reconnu comme animation."""
        assert classify(["中国"], False, ["动漫"]) is Category.ANIME_MOVIE


class TestCountryRules:
    """Tests des regles basees sur le premier pays liste."""

    def test_first_country_wins(self):
        """["Germany", "Japan"] serie -> EnShow (le premier pays decide)."""
        assert classify(["Germany", "Japan"], True, []) is Category.EN_SHOW

    def test_infernal_affairs_is_cn_movie(self):
        """无间道 (中国香港, 犯罪/剧情) -> CnMovie."""
        assert classify(["中国香港"], False, ["犯罪", "剧情"]) is Category.CN_MOVIE

    def test_japan_listed_first(self):
        """["日本", "中国"] serie -> Jp&KrShow."""
        result = classify(["日本", "中国"], True, [])
        assert result is Category.JPKR_SHOW
        assert result.value == "Jp&KrShow"

    def test_china_listed_first(self):
        """["中国", "日本"] serie -> CnShow."""
        assert classify(["中国", "日本"], True, []) is Category.CN_SHOW

    @pytest.mark.parametrize("country", ["韩国", "South Korea", "JAPAN", "大韩民国"])
    def test_jpkr_movie(self, country):
        """Japon / Coree -> Jp&KrMovie."""
        assert classify([country], False, []) is Category.JPKR_MOVIE

    @pytest.mark.parametrize("country", ["中国台湾", "Hong Kong", "Taiwan", "中国大陆", "China"])
    def test_cn_variants(self, country):
        """Chine continentale, Hong Kong, Taiwan -> CnMovie."""
        assert classify([country], False, []) is Category.CN_MOVIE

    def test_other_country_is_en(self):
        """Tout autre pays -> EnMovie / EnShow."""
        assert classify(["United States of America"], False, ["动作"]) is Category.EN_MOVIE
        assert classify(["法国"], True, []) is Category.EN_SHOW

    def test_empty_countries_raises(self):
        """Sans pays et sans genre determinant, la classification echoue."""
        with pytest.raises(ClassificationError, match="no country information"):
            classify([], False, [])

    def test_empty_countries_with_plain_genres_raises(self):
        """Des genres non determinants ne suffisent pas sans pays."""
        with pytest.raises(ClassificationError):
            classify([], True, ["剧情", "爱情"])

    def test_deterministic(self):
        """Memes entrees -> meme categorie."""
        first = classify(["Germany", "Japan"], False, ["剧情"])
        second = classify(["Germany", "Japan"], False, ["剧情"])
        assert first is second is Category.EN_MOVIE


class TestCategory:
    """Tests de l'enumeration des categories."""

    def test_series_tags(self):
        """Les tags contenant 'Show' sont des categories de series."""
        assert Category.CN_SHOW.is_series_tag
        assert Category.DOCUMENTARY.is_series_tag
        assert Category.VARIETY.is_series_tag
        assert not Category.EN_MOVIE.is_series_tag
        assert not Category.ANIME_MOVIE.is_series_tag
