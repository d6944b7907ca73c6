"""
Adaptateur pour les operations sur le systeme de fichiers.

Fournit le deplacement de repertoires media (rename atomique sur le meme
filesystem, copie puis suppression entre filesystems), ainsi que les
verifications utilisees par la recherche de NFO et le placement :
presence de fichiers media, repertoires de projets logiciels, comptage
des NFO.
"""

import errno
import os
import shutil
from pathlib import Path
from typing import Callable, Iterator, Optional

from loguru import logger

from nfoorg.utils.constants import MEDIA_EXTENSIONS, NFO_EXTENSION, PROJECT_MARKER_FILES


class FileSystemAdapter:
    """
    Operations reelles sur le systeme de fichiers.

    Les methodes de deplacement levent OSError : c'est au service appelant
    de decider si l'erreur est fatale pour le titre.
    """

    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        return path.exists()

    def move_directory(self, source: Path, destination: Path) -> None:
        """
        Deplace un repertoire (ou un fichier) vers sa destination.

        Tente d'abord un rename (atomique sur le meme filesystem). En cas
        d'erreur EXDEV (deplacement entre peripheriques), copie recursivement
        en conservant les permissions puis supprime la source.

        Args:
            source: Repertoire ou fichier source
            destination: Chemin cible (ne doit pas exister)

        Raises:
            FileNotFoundError: Si la source n'existe pas
            OSError: Pour toute autre erreur d'entree/sortie
        """
        if not source.exists():
            raise FileNotFoundError(errno.ENOENT, "Source introuvable", str(source))

        destination.parent.mkdir(parents=True, exist_ok=True)
        try:
            os.rename(source, destination)
            return
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise

        logger.info(
            "Deplacement entre peripheriques, copie puis suppression",
            source=str(source),
            destination=str(destination),
        )
        if source.is_dir():
            # copy2 conserve permissions et dates ; shutil.Error si un fichier echoue
            shutil.copytree(source, destination, copy_function=shutil.copy2)
            shutil.rmtree(source)
        else:
            shutil.copy2(source, destination)
            source.unlink()

    def remove_tree(self, path: Path) -> bool:
        """
        Supprime un repertoire et son contenu restant.

        Returns:
            True si la suppression a reussi, False sinon (erreur journalisee).
        """
        try:
            shutil.rmtree(path)
            return True
        except OSError as e:
            logger.warning("Suppression du repertoire impossible", path=str(path), error=str(e))
            return False

    def has_media_files(self, directory: Path) -> bool:
        """Verifie si le repertoire contient (recursivement) un fichier media."""
        try:
            for root, _dirs, files in os.walk(directory):
                for name in files:
                    if Path(name).suffix.lower() in MEDIA_EXTENSIONS:
                        return True
        except OSError:
            return False
        return False

    def is_project_directory(self, directory: Path, markers=PROJECT_MARKER_FILES) -> bool:
        """
        Verifie si le repertoire est un projet logiciel (go.mod, .git, ...).

        Ces repertoires ne sont jamais classes ni deplaces, qu'ils
        contiennent des fichiers media ou non.
        """
        return any((directory / marker).exists() for marker in markers)

    def list_nfo_files(self, directory: Path) -> list[Path]:
        """Liste les fichiers .nfo directement contenus dans le repertoire (tries)."""
        try:
            return sorted(
                entry
                for entry in directory.iterdir()
                if entry.is_file() and entry.suffix.lower() == NFO_EXTENSION
            )
        except OSError:
            return []

    def count_nfo_files(self, directory: Path) -> int:
        """Compte les fichiers .nfo directement contenus dans le repertoire."""
        return len(self.list_nfo_files(directory))

    def iter_directories(
        self, root: Path, prune: Optional[Callable[[Path], bool]] = None
    ) -> Iterator[Path]:
        """
        Parcourt root et ses sous-repertoires (recursif, ordre alphabetique).

        Args:
            root: Repertoire de depart (toujours retourne en premier)
            prune: Predicat optionnel ; un sous-repertoire pour lequel il
                retourne True n'est ni retourne ni parcouru

        Les erreurs d'acces sont journalisees et ignorees.
        """
        def _on_error(error: OSError) -> None:
            logger.debug("Acces impossible", path=str(error.filename), error=str(error))

        for current, dirs, _files in os.walk(root, onerror=_on_error):
            current_path = Path(current)
            if prune is not None:
                dirs[:] = [name for name in dirs if not prune(current_path / name)]
            dirs.sort()
            yield current_path
