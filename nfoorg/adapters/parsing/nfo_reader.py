"""
Lecteur de fichiers NFO (format Kodi / tinyMediaManager).

Ce module fournit NfoReader qui implemente IMetadataReader : le document
XML doit avoir pour racine <movie> ou <tvshow>, cette derniere designant
une serie.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from loguru import logger

from nfoorg.core.exceptions import ParseError
from nfoorg.core.ports.parser import IMetadataReader
from nfoorg.core.value_objects import Actor, NfoRecord

SUPPORTED_ROOTS = ("movie", "tvshow")


def _text(element: Optional[ET.Element]) -> str:
    if element is None or element.text is None:
        return ""
    return element.text.strip()


def _child_text(root: ET.Element, tag: str) -> str:
    return _text(root.find(tag))


def _all_texts(root: ET.Element, tag: str) -> tuple[str, ...]:
    values = (_text(element) for element in root.findall(tag))
    return tuple(value for value in values if value)


class NfoReader(IMetadataReader):
    """
    Lecteur de NFO base sur xml.etree.ElementTree.

    Seuls les enfants directs de la racine sont lus : les balises
    imbriquees (ex: <name> d'un <actor>) ne sont pas confondues avec
    les champs du titre.
    """

    def parse(self, path: Path) -> NfoRecord:
        """
        Lit un fichier NFO.

        Args:
            path: Chemin du fichier .nfo

        Returns:
            NfoRecord structure

        Raises:
            ParseError: Fichier illisible, XML malforme ou racine inconnue.
        """
        path = Path(path)
        try:
            tree = ET.parse(path)
        except OSError as e:
            raise ParseError(path, f"fichier illisible: {e}") from e
        except ET.ParseError as e:
            raise ParseError(path, f"XML malforme: {e}") from e

        root = tree.getroot()
        if root.tag not in SUPPORTED_ROOTS:
            raise ParseError(path, f"type de NFO non supporte: {root.tag}")

        actors = tuple(
            Actor(name=_child_text(element, "name"), role=_child_text(element, "role"))
            for element in root.findall("actor")
            if _child_text(element, "name")
        )

        record = NfoRecord(
            title=_child_text(root, "title"),
            original_title=_child_text(root, "originaltitle"),
            year=_child_text(root, "year"),
            countries=_all_texts(root, "country"),
            genres=_all_texts(root, "genre"),
            actors=actors,
            runtime=_child_text(root, "runtime"),
            plot=_child_text(root, "plot"),
            imdb_id=_child_text(root, "id") or _child_text(root, "imdbid"),
            tmdb_id=_child_text(root, "tmdbid"),
            season=_child_text(root, "season"),
            episode=_child_text(root, "episode"),
            director=_child_text(root, "director"),
            writer=_child_text(root, "writer"),
            rating=_child_text(root, "rating"),
            is_series=root.tag == "tvshow",
        )
        logger.debug("NFO lu", path=str(path), title=record.title, series=record.is_series)
        return record
