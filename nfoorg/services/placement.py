"""
Service de placement des repertoires media dans la videotheque.

Decide, pour un repertoire source, s'il peut etre deplace en bloc ou s'il
doit etre fusionne saison par saison dans une destination existante :

    Initial -> destination absente           -> Move  -> MOVED
            -> destination presente, film    -> SKIPPED("duplicate")
            -> destination presente, serie   -> saisons nouvelles ?
                   aucune                    -> SKIPPED("no new seasons")
                   au moins une              -> Merging -> MERGED(saisons)

Rien n'est jamais ecrase a destination. Une fusion partielle est un etat
final accepte : une nouvelle execution ne trouve plus de saison nouvelle.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from loguru import logger

from nfoorg.adapters.file_system import FileSystemAdapter
from nfoorg.core.exceptions import PlacementError
from nfoorg.core.value_objects import Category
from nfoorg.services.seasons import season_number, seasons_in_directory, seasons_in_source

SKIP_DUPLICATE = "duplicate"
SKIP_NO_NEW_SEASONS = "no new seasons"
SKIP_PROJECT_DIRECTORY = "project directory"


class PlacementOutcome(Enum):
    """Issue d'une operation de placement."""

    MOVED = "moved"
    MERGED = "merged"
    SKIPPED = "skipped"


@dataclass
class PlacementResult:
    """
    Resultat d'un placement.

    Attributs:
        outcome: MOVED, MERGED ou SKIPPED
        destination: Repertoire de destination calcule
        seasons_added: Saisons apportees par une fusion
        reason: Raison du SKIPPED
        skipped_entries: Entrees laissees a la source (deja presentes)
        failed_entries: Entrees dont le deplacement a echoue (avec l'erreur)
    """

    outcome: PlacementOutcome
    destination: Path
    seasons_added: list[int] = field(default_factory=list)
    reason: Optional[str] = None
    skipped_entries: list[str] = field(default_factory=list)
    failed_entries: dict[str, str] = field(default_factory=dict)

    @property
    def placed(self) -> bool:
        """True si du contenu a ete deplace (MOVED ou MERGED)."""
        return self.outcome in (PlacementOutcome.MOVED, PlacementOutcome.MERGED)


class PlacementService:
    """
    Moteur de deplacement / fusion des repertoires media.

    Utilisation:
        placement = PlacementService(FileSystemAdapter())
        result = placement.place_media(source, cloud_dir, Category.CN_SHOW, True)
        if result.outcome is PlacementOutcome.MERGED:
            print(f"Saisons ajoutees: {result.seasons_added}")
    """

    def __init__(self, file_system: FileSystemAdapter) -> None:
        self._fs = file_system

    @staticmethod
    def destination_for(source_dir: Path, destination_root: Path, category: Category) -> Path:
        """Chemin de destination : <racine>/<categorie>/<nom du repertoire source>."""
        return Path(destination_root) / Category(category).value / Path(source_dir).name

    def place_media(
        self,
        source_dir: Path,
        destination_root: Path,
        category: Category,
        is_series: bool,
    ) -> PlacementResult:
        """
        Deplace ou fusionne un repertoire media vers sa categorie.

        Args:
            source_dir: Repertoire du titre (celui qui contient le NFO)
            destination_root: Racine de la videotheque
            category: Categorie de destination
            is_series: True pour une serie (seules les series fusionnent)

        Returns:
            PlacementResult decrivant l'operation effectuee.

        Raises:
            PlacementError: Si le deplacement en bloc echoue, ou si les
                repertoires ne peuvent pas etre lus pour comparer les saisons.
        """
        source_dir = Path(source_dir)
        destination = self.destination_for(source_dir, destination_root, category)

        if self._fs.is_project_directory(source_dir):
            logger.info("Repertoire de projet ignore", path=str(source_dir))
            return PlacementResult(
                outcome=PlacementOutcome.SKIPPED,
                destination=destination,
                reason=SKIP_PROJECT_DIRECTORY,
            )

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PlacementError(source_dir, destination, str(e)) from e

        if not self._fs.exists(destination):
            return self._move(source_dir, destination)

        if not is_series:
            logger.warning(
                "Destination deja presente, film ignore", destination=str(destination)
            )
            return PlacementResult(
                outcome=PlacementOutcome.SKIPPED,
                destination=destination,
                reason=SKIP_DUPLICATE,
            )

        try:
            new_seasons = self.new_seasons(source_dir, destination)
        except OSError as e:
            raise PlacementError(source_dir, destination, str(e)) from e

        if not new_seasons:
            logger.warning(
                "Destination deja presente sans nouvelle saison",
                destination=str(destination),
            )
            return PlacementResult(
                outcome=PlacementOutcome.SKIPPED,
                destination=destination,
                reason=SKIP_NO_NEW_SEASONS,
            )

        logger.info(
            "Nouvelles saisons detectees, fusion dans la destination",
            seasons=new_seasons,
            destination=str(destination),
        )
        return self._merge(source_dir, destination, new_seasons)

    def new_seasons(self, source_dir: Path, destination: Path) -> list[int]:
        """Saisons presentes a la source et absentes de la destination (triees)."""
        existing = set(seasons_in_directory(destination))
        incoming = seasons_in_source(source_dir)
        return sorted(season for season in set(incoming) if season not in existing)

    def _move(self, source_dir: Path, destination: Path) -> PlacementResult:
        try:
            self._fs.move_directory(source_dir, destination)
        except OSError as e:
            raise PlacementError(source_dir, destination, str(e)) from e

        logger.info("Repertoire deplace", source=str(source_dir), destination=str(destination))
        return PlacementResult(outcome=PlacementOutcome.MOVED, destination=destination)

    def _merge(
        self, source_dir: Path, destination: Path, new_seasons: list[int]
    ) -> PlacementResult:
        result = PlacementResult(
            outcome=PlacementOutcome.MERGED,
            destination=destination,
            seasons_added=list(new_seasons),
        )

        try:
            entries = sorted(source_dir.iterdir())
        except OSError as e:
            raise PlacementError(source_dir, destination, str(e)) from e

        for entry in entries:
            target = destination / entry.name

            if not target.exists():
                self._move_entry(entry, target, result)
                continue

            number = season_number(entry.name)
            if number is not None and number in new_seasons:
                # Saison nouvelle masquee par un fichier homonyme a destination
                logger.error(
                    "Fichier homonyme d'une saison a destination, saison non fusionnee",
                    entry=entry.name,
                    destination=str(target),
                )
                result.failed_entries[entry.name] = "fichier homonyme a destination"
            else:
                logger.warning(
                    "Entree deja presente a destination, ignoree",
                    entry=entry.name,
                    season=number,
                )
                result.skipped_entries.append(entry.name)

        self._cleanup_source(source_dir, destination, result)
        return result

    def _move_entry(self, entry: Path, target: Path, result: PlacementResult) -> None:
        try:
            self._fs.move_directory(entry, target)
        except OSError as e:
            logger.error("Deplacement de l'entree echoue", entry=str(entry), error=str(e))
            result.failed_entries[entry.name] = str(e)
            return
        logger.info("Entree fusionnee dans la destination", entry=entry.name)

    def _cleanup_source(self, source_dir: Path, destination: Path, result: PlacementResult) -> None:
        """
        Supprime la source apres fusion.

        Les entrees restantes ont toutes un homologue a destination ; la
        source est conservee si un deplacement a echoue.
        """
        if result.failed_entries:
            logger.warning(
                "Source conservee apres echecs de fusion",
                source=str(source_dir),
                failed=list(result.failed_entries),
            )
            return

        if self._fs.remove_tree(source_dir):
            logger.info("Repertoire source supprime", source=str(source_dir))
