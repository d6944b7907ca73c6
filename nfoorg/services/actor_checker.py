"""
Controle des noms d'acteurs d'un fichier NFO.

Les acteurs dont le nom ne contient aucun ideogramme chinois sont ajoutes
au rapport du jour (actor_report_AAAAMMJJ.txt) dans le repertoire des
rapports, pour correction manuelle dans tinyMediaManager.
"""

from datetime import datetime
from pathlib import Path

from loguru import logger

from nfoorg.core.ports.parser import IMetadataReader
from nfoorg.core.value_objects import Actor
from nfoorg.utils.helpers import contains_chinese

ISSUE_NOT_CHINESE = "nom non chinois"


def report_path_for(report_dir: Path, when: datetime) -> Path:
    """Chemin du rapport du jour."""
    return Path(report_dir) / f"actor_report_{when:%Y%m%d}.txt"


class ActorChecker:
    """
    Detecte les noms d'acteurs non chinois et alimente le rapport quotidien.

    Le rapport est ouvert en ajout : plusieurs executions le meme jour
    ecrivent des sections successives.
    """

    def __init__(self, reader: IMetadataReader, report_dir: Path) -> None:
        self._reader = reader
        self._report_dir = Path(report_dir)

    def check(self, nfo_path: Path) -> list[Actor]:
        """
        Controle les acteurs d'un NFO.

        Returns:
            Acteurs dont le nom n'est pas chinois (vide si tout est correct).

        Raises:
            ParseError: Si le NFO est illisible.
        """
        record = self._reader.parse(nfo_path)
        offenders = [actor for actor in record.actors if not contains_chinese(actor.name)]
        if not offenders:
            logger.debug("Tous les acteurs ont un nom chinois", path=str(nfo_path))
            return offenders

        report = self._write_report(Path(nfo_path), offenders)
        logger.info(
            "Acteurs au nom non chinois",
            path=str(nfo_path),
            count=len(offenders),
            report=str(report),
        )
        return offenders

    def _write_report(self, nfo_path: Path, offenders: list[Actor]) -> Path:
        now = datetime.now()
        self._report_dir.mkdir(parents=True, exist_ok=True)
        report = report_path_for(self._report_dir, now)

        lines = [
            "",
            "",
            "-------------------- Nouvelle verification --------------------",
            f"Date: {now:%Y-%m-%d %H:%M:%S}",
            f"Fichier: {nfo_path}",
            "Acteurs au nom non chinois:",
            f"{'Acteur':<30} {'Role':<30} {'Probleme':<20}",
            f"{'--------':<30} {'--------':<30} {'--------':<20}",
        ]
        lines.extend(
            f"{actor.name:<30} {actor.role:<30} {ISSUE_NOT_CHINESE:<20}" for actor in offenders
        )

        with report.open("a", encoding="utf-8") as handle:
            handle.write("\n".join(lines) + "\n")
        return report
