"""
Interface port pour la lecture des fichiers NFO.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from nfoorg.core.value_objects import NfoRecord


class IMetadataReader(ABC):
    """
    Interface du lecteur de fichiers NFO.

    Les implementations levent ParseError si le fichier est illisible,
    malforme ou si sa racine n'est ni <movie> ni <tvshow>.
    """

    @abstractmethod
    def parse(self, path: Path) -> NfoRecord:
        """
        Lit un fichier NFO.

        Args :
            path : Chemin du fichier .nfo

        Retourne :
            NfoRecord structure
        """
        ...
