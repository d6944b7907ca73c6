"""
Lancement de tinyMediaManager en ligne de commande.

tinyMediaManager met a jour les sources, scrape les nouveaux titres et
renomme les fichiers (options -u -n -r). Le repertoire de travail du
processus est le premier repertoire temporaire configure.
"""

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from loguru import logger

from nfoorg.core.exceptions import ScraperError

SCRAPE_ARGS = ("-u", "-n", "-r")
LINUX_EXECUTABLE = "tinyMediaManager"
DEFAULT_EXECUTABLE = "tinymediamanager"


def locate_executable(tmm_dir: Path) -> Path:
    """
    Determine le chemin de l'executable tinyMediaManager.

    - Bundle macOS (.app) : executable en minuscules dans le repertoire
    - Windows (Program Files) : tinymediamanager.exe
    - Linux : tinyMediaManager s'il existe, sinon tinymediamanager
    """
    tmm_dir = Path(tmm_dir)
    if ".app" in str(tmm_dir):
        return tmm_dir / DEFAULT_EXECUTABLE

    executable = DEFAULT_EXECUTABLE
    if "Program Files" in str(tmm_dir):
        executable += ".exe"

    linux_path = tmm_dir / LINUX_EXECUTABLE
    if linux_path.exists():
        return linux_path
    return tmm_dir / executable


class ScraperRunner:
    """
    Execute les scrapes films / series de tinyMediaManager.

    Example:
        runner = ScraperRunner(Path("/opt/tinyMediaManager"), [Path("/data/tmp")])
        runner.scrape_all()
    """

    def __init__(self, tmm_dir: Path, temp_dirs: Sequence[Path]) -> None:
        """
        Args:
            tmm_dir: Repertoire d'installation de tinyMediaManager
            temp_dirs: Repertoires temporaires valides (le premier sert de cwd)
        """
        self._tmm_dir = Path(tmm_dir)
        self._temp_dirs = [Path(d) for d in temp_dirs]

    @property
    def executable(self) -> Path:
        return locate_executable(self._tmm_dir)

    def _working_dir(self) -> Path:
        if not self._temp_dirs:
            raise ScraperError("Aucun repertoire temporaire valide")
        return self._temp_dirs[0]

    def _run(self, mode: str, label: str) -> None:
        executable = self.executable
        if not executable.exists():
            raise ScraperError(
                f"Executable tinyMediaManager introuvable: {executable}",
                "Verifier le parametre tmm_dir",
            )
        cwd = self._working_dir()

        logger.info(f"Debut du scraping des {label}", mode=mode, cwd=str(cwd))
        try:
            completed = subprocess.run(
                [str(executable), mode, *SCRAPE_ARGS],
                cwd=cwd,
                check=False,
            )
        except OSError as e:
            raise ScraperError(f"Lancement de tinyMediaManager impossible: {e}") from e

        if completed.returncode != 0:
            raise ScraperError(
                f"Scraping des {label} en echec (code {completed.returncode})"
            )
        logger.info(f"Scraping des {label} termine", mode=mode)

    def scrape_movies(self) -> None:
        """Scrape les films (mode 'movie')."""
        self._run("movie", "films")

    def scrape_tv_shows(self) -> None:
        """Scrape les series (mode 'tvshow')."""
        self._run("tvshow", "series")

    def scrape_all(self) -> None:
        """Scrape les films puis les series ; s'arrete a la premiere erreur."""
        self.scrape_movies()
        self.scrape_tv_shows()

    def scrape(self, target: Optional[str] = "all") -> None:
        """
        Scrape selon la cible : 'movies', 'tv' ou 'all'.

        Raises:
            ScraperError: Cible inconnue ou echec du processus.
        """
        actions = {
            "movies": self.scrape_movies,
            "tv": self.scrape_tv_shows,
            "all": self.scrape_all,
        }
        action = actions.get(target or "all")
        if action is None:
            raise ScraperError(f"Cible de scraping inconnue: {target}")
        action()
