"""
Recherche des fichiers NFO a traiter.

Un seul NFO est retenu par repertoire media. Les repertoires de projets
logiciels sont ignores avec tout leur contenu, les repertoires sans
fichier media ne fournissent aucun NFO.
"""

from pathlib import Path

from loguru import logger

from nfoorg.adapters.file_system import FileSystemAdapter
from nfoorg.utils.constants import DISCOVERY_PROJECT_MARKERS


def select_nfo(candidates: list[Path]) -> Path:
    """
    Choisit le NFO d'un repertoire.

    Prefere le premier fichier sans parentheses dans son nom (les copies
    "film (1).nfo" sont ecartees), sinon le premier de la liste.
    """
    for candidate in candidates:
        if "(" not in candidate.name or ")" not in candidate.name:
            return candidate
    return candidates[0]


class NfoDiscovery:
    """Parcours d'une arborescence a la recherche des NFO."""

    def __init__(self, file_system: FileSystemAdapter) -> None:
        self._fs = file_system

    def _is_project(self, directory: Path) -> bool:
        if self._fs.is_project_directory(directory, DISCOVERY_PROJECT_MARKERS):
            logger.debug("Repertoire de projet ignore", path=str(directory))
            return True
        return False

    def _media_directories(self, root: Path):
        for directory in self._fs.iter_directories(root, prune=self._is_project):
            if directory != root and not self._fs.has_media_files(directory):
                logger.debug("Repertoire sans fichier media ignore", path=str(directory))
                continue
            yield directory

    def find_nfo_files(self, root: Path) -> list[Path]:
        """
        Liste les NFO a traiter sous root (un par repertoire, ordre du parcours).

        Args:
            root: Repertoire de depart

        Returns:
            Chemins des NFO retenus.
        """
        root = Path(root)
        if not root.is_dir():
            logger.warning("Repertoire introuvable", path=str(root))
            return []

        selected: list[Path] = []
        for directory in self._media_directories(root):
            candidates = self._fs.list_nfo_files(directory)
            if not candidates:
                continue
            chosen = select_nfo(candidates)
            if len(candidates) > 1:
                logger.info(
                    f"{len(candidates)} fichiers NFO dans le repertoire, un seul retenu",
                    directory=str(directory),
                    selected=chosen.name,
                    skipped=[c.name for c in candidates if c != chosen],
                )
            selected.append(chosen)

        logger.info(f"{len(selected)} fichier(s) NFO trouve(s)", root=str(root))
        return selected

    def ambiguous_directories(self, root: Path) -> list[tuple[Path, int]]:
        """
        Repertoires media contenant plusieurs NFO (a trier manuellement).

        Chaque repertoire trouve est journalise en erreur ; ses NFO seront
        ignores par le traitement.
        """
        root = Path(root)
        if not root.is_dir():
            return []

        ambiguous = []
        for directory in self._media_directories(root):
            count = self._fs.count_nfo_files(directory)
            if count > 1:
                logger.error(
                    f"{count} fichiers NFO dans le meme repertoire, repertoire ignore",
                    directory=str(directory),
                )
                ambiguous.append((directory, count))
        return ambiguous
