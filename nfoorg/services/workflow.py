"""
Orchestration du traitement des fichiers NFO.

Pour chaque NFO, dans l'ordre :

    genres -> acteurs -> (attente) -> lecture -> NFO resolu ?
    -> pays (TMDB) -> classification -> gardes (projet, titre/genres chinois)
    -> placement -> catalogue -> saisons manquantes -> bilan

Les titres sont traites un par un. Toute erreur est contenue au niveau du
titre : elle est journalisee (une ligne nommant le fichier et l'etape) et
retournee dans un TitleOutcome, le lot continue avec le titre suivant.
"""

import time
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence

from loguru import logger

from nfoorg.adapters.file_system import FileSystemAdapter
from nfoorg.adapters.scraper import ScraperRunner
from nfoorg.core.entities import CatalogRecord, CompletenessReport
from nfoorg.core.exceptions import (
    ClassificationError,
    NfoOrgError,
    ParseError,
    PlacementError,
    ServiceError,
    StorageError,
)
from nfoorg.core.ports.api_clients import IMetadataService
from nfoorg.core.ports.parser import IMetadataReader
from nfoorg.core.ports.repositories import ICatalogRepository
from nfoorg.core.value_objects import Category, NfoRecord
from nfoorg.services.actor_checker import ActorChecker
from nfoorg.services.completeness import CompletenessTracker
from nfoorg.services.discovery import NfoDiscovery
from nfoorg.services.genre_normalizer import GenreNormalizer
from nfoorg.services.locale_classifier import classify
from nfoorg.services.placement import PlacementResult, PlacementService
from nfoorg.utils.constants import SCRAPE_SUBDIRS
from nfoorg.utils.helpers import contains_chinese, extract_resolution, join_list


class TitleStatus(str, Enum):
    """Issue du traitement d'un titre."""

    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILED = "failed"


class Step(str, Enum):
    """Etapes du traitement d'un titre."""

    DISCOVERY = "discovery"
    GENRES = "genres"
    ACTORS = "actors"
    PARSE = "parse"
    COUNTRIES = "countries"
    CLASSIFY = "classify"
    GUARDS = "guards"
    PLACEMENT = "placement"
    STORAGE = "storage"
    COMPLETENESS = "completeness"


@dataclass
class TitleOutcome:
    """
    Resultat structure du traitement d'un NFO.

    Attributs:
        nfo_path: Fichier traite
        status: PROCESSED, SKIPPED ou FAILED
        step: Etape ayant arrete le traitement (ou ayant echoue sans
            bloquer, ex: completude)
        message: Raison lisible
        title: Titre lu dans le NFO
        category: Categorie determinee
        placement: Resultat du placement
        record: Enregistrement persiste
        completeness: Bilan de completude (series avec ID TMDB)
    """

    nfo_path: Path
    status: TitleStatus
    step: Optional[Step] = None
    message: str = ""
    title: str = ""
    category: Optional[Category] = None
    placement: Optional[PlacementResult] = None
    record: Optional[CatalogRecord] = None
    completeness: Optional[CompletenessReport] = None

    @property
    def succeeded(self) -> bool:
        return self.status is TitleStatus.PROCESSED


class WorkflowService:
    """
    Enchaine les etapes de traitement d'un NFO.

    Toutes les dependances sont injectees (voir container.py) ; les durees
    d'attente viennent de la configuration.
    """

    def __init__(
        self,
        reader: IMetadataReader,
        genre_normalizer: GenreNormalizer,
        actor_checker: ActorChecker,
        placement: PlacementService,
        repository: ICatalogRepository,
        metadata_service: IMetadataService,
        completeness: CompletenessTracker,
        discovery: NfoDiscovery,
        file_system: FileSystemAdapter,
        library_root: Path,
        temp_dirs: Sequence[Path] = (),
        scraper: Optional[ScraperRunner] = None,
        wait_after_edit: float = 0,
        wait_after_scan: float = 0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._reader = reader
        self._genres = genre_normalizer
        self._actors = actor_checker
        self._placement = placement
        self._repository = repository
        self._metadata = metadata_service
        self._completeness = completeness
        self._discovery = discovery
        self._fs = file_system
        self._library_root = Path(library_root)
        self._temp_dirs = [Path(d) for d in temp_dirs]
        self._scraper = scraper
        self._wait_after_edit = wait_after_edit
        self._wait_after_scan = wait_after_scan
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Points d'entree
    # ------------------------------------------------------------------

    def process_nfo(self, nfo_path: Path) -> TitleOutcome:
        """
        Traite un fichier NFO de bout en bout.

        Ne leve jamais d'erreur metier : le resultat decrit l'issue.
        """
        nfo_path = Path(nfo_path)
        logger.info("Traitement du NFO", path=str(nfo_path))

        if not nfo_path.is_file():
            return self._failed(nfo_path, Step.PARSE, "fichier NFO introuvable")

        nfo_count = self._fs.count_nfo_files(nfo_path.parent)
        if nfo_count > 1:
            return self._skipped(
                nfo_path,
                Step.DISCOVERY,
                f"{nfo_count} fichiers NFO dans le repertoire, choisir le bon manuellement",
            )

        try:
            self._genres.normalize(nfo_path)
        except (ParseError, OSError, ValueError) as e:
            return self._failed(nfo_path, Step.GENRES, _describe(e))

        try:
            offenders = self._actors.check(nfo_path)
        except (ParseError, OSError, ValueError) as e:
            return self._failed(nfo_path, Step.ACTORS, _describe(e))
        if offenders:
            logger.info(f"{len(offenders)} acteur(s) au nom non chinois", path=str(nfo_path))

        if self._wait_after_edit > 0:
            logger.info(f"NFO modifie, attente de {self._wait_after_edit}s avant le deplacement")
            self._sleep(self._wait_after_edit)

        try:
            return self.classify_and_place(nfo_path)
        except (NfoOrgError, OSError, ValueError) as e:
            return self._failed(nfo_path, Step.PLACEMENT, _describe(e))

    def process_directory(self, root: Path) -> list[TitleOutcome]:
        """Traite tous les NFO trouves sous root, un titre a la fois."""
        root = Path(root)
        self._discovery.ambiguous_directories(root)
        nfo_files = self._discovery.find_nfo_files(root)
        return self._process_all(nfo_files)

    def process_scrape(self, target: str = "all") -> list[TitleOutcome]:
        """
        Lance tinyMediaManager puis traite les NFO produits.

        Seuls les sous-repertoires Movie / TvShow des repertoires temporaires
        correspondant a la cible sont parcourus.

        Raises:
            ScraperError: Si le scraping echoue (aucun NFO n'est alors traite).
        """
        if self._scraper is None:
            raise NfoOrgError("Scraper non configure")
        self._scraper.scrape(target)

        if self._wait_after_scan > 0:
            logger.info(f"Scraping termine, attente de {self._wait_after_scan}s")
            self._sleep(self._wait_after_scan)

        scan_dirs = [
            temp_dir / subdir
            for temp_dir in self._temp_dirs
            for subdir in SCRAPE_SUBDIRS.get(target, ())
        ]
        for scan_dir in scan_dirs:
            self._discovery.ambiguous_directories(scan_dir)

        nfo_files: list[Path] = []
        for scan_dir in scan_dirs:
            nfo_files.extend(self._discovery.find_nfo_files(scan_dir))
        return self._process_all(nfo_files)

    def _process_all(self, nfo_files: list[Path]) -> list[TitleOutcome]:
        outcomes = []
        total = len(nfo_files)
        for index, nfo_file in enumerate(nfo_files, start=1):
            logger.info(f"NFO {index}/{total}", path=str(nfo_file))
            outcomes.append(self.process_nfo(nfo_file))
        logger.info(
            "Lot termine",
            total=total,
            processed=sum(1 for o in outcomes if o.status is TitleStatus.PROCESSED),
            skipped=sum(1 for o in outcomes if o.status is TitleStatus.SKIPPED),
            failed=sum(1 for o in outcomes if o.status is TitleStatus.FAILED),
        )
        return outcomes

    # ------------------------------------------------------------------
    # Classification et placement
    # ------------------------------------------------------------------

    def classify_and_place(self, nfo_path: Path) -> TitleOutcome:
        """
        Classe le titre, le place dans la videotheque puis met a jour le catalogue.

        Les NFO genres/acteurs ne sont pas modifies ici.
        """
        nfo_path = Path(nfo_path)
        media_dir = nfo_path.parent

        try:
            nfo = self._reader.parse(nfo_path)
        except ParseError as e:
            return self._failed(nfo_path, Step.PARSE, _describe(e))

        title = nfo.title
        if not nfo.is_resolved():
            return self._skipped(
                nfo_path, Step.PARSE, "NFO incomplet (scraping non abouti)", title
            )

        countries = self.refine_countries(nfo)
        if not countries:
            return self._skipped(nfo_path, Step.COUNTRIES, "aucune information de pays", title)

        try:
            category = classify(countries, nfo.is_series, nfo.genres)
        except ClassificationError as e:
            return self._skipped(nfo_path, Step.CLASSIFY, e.message, title)

        if self._fs.is_project_directory(media_dir):
            return self._skipped(nfo_path, Step.GUARDS, "repertoire de projet", title, category)

        if not contains_chinese(title):
            return self._skipped(
                nfo_path, Step.GUARDS, f"titre '{title}' non chinois", title, category
            )
        for genre in nfo.genres:
            if not contains_chinese(genre):
                return self._skipped(
                    nfo_path, Step.GUARDS, f"genre '{genre}' non chinois", title, category
                )

        destination = PlacementService.destination_for(media_dir, self._library_root, category)
        record = self._build_record(nfo, nfo_path, countries, category, destination)

        try:
            placement = self._placement.place_media(
                media_dir, self._library_root, category, nfo.is_series
            )
        except PlacementError as e:
            return self._failed(nfo_path, Step.PLACEMENT, _describe(e), title, category)

        if not placement.placed:
            outcome = self._skipped(
                nfo_path, Step.PLACEMENT, placement.reason or "", title, category
            )
            outcome.placement = placement
            return outcome

        try:
            stored = self._repository.upsert_catalog(record)
        except StorageError as e:
            outcome = self._failed(nfo_path, Step.STORAGE, e.message, title, category)
            outcome.placement = placement
            return outcome

        outcome = TitleOutcome(
            nfo_path=nfo_path,
            status=TitleStatus.PROCESSED,
            title=title,
            category=category,
            placement=placement,
            record=stored,
        )

        if nfo.is_series and nfo.tmdb_id and self._metadata.enabled:
            self._track_completeness(outcome, stored, nfo, destination)

        logger.info(
            "Titre traite",
            title=title,
            category=category.value,
            outcome=placement.outcome.value,
            destination=str(destination),
        )
        return outcome

    def refine_countries(self, nfo: NfoRecord) -> list[str]:
        """
        Pays de production a utiliser pour la classification.

        Ceux de TMDB si le titre a un ID TMDB et que le service est configure,
        sinon (echec TMDB ou liste vide) ceux du NFO.
        """
        countries = list(nfo.countries)
        if not nfo.tmdb_id or not self._metadata.enabled:
            return countries

        try:
            tmdb_countries = self._metadata.production_countries(nfo.tmdb_id, nfo.is_series)
        except ServiceError as e:
            logger.warning(
                "Pays TMDB indisponibles, pays du NFO conserves",
                title=nfo.title,
                error=e.message,
            )
            return countries

        if not tmdb_countries:
            logger.debug("Aucun pays TMDB, pays du NFO conserves", title=nfo.title)
            return countries

        logger.info("Pays de production TMDB", title=nfo.title, countries=tmdb_countries)
        return tmdb_countries

    def _build_record(
        self,
        nfo: NfoRecord,
        nfo_path: Path,
        countries: list[str],
        category: Category,
        destination: Path,
    ) -> CatalogRecord:
        """
        Prepare l'enregistrement du catalogue.

        Une serie deja cataloguee (meme titre et annee) reutilise son
        enregistrement : les champs descriptifs sont mis a jour, la saison
        d'origine est conservee.
        """
        fields = dict(
            file_name=nfo_path.name,
            original_title=nfo.original_title,
            year=nfo.year,
            country=join_list(countries),
            genres=join_list(nfo.genres),
            actors=join_list(nfo.actor_names),
            category=category.value,
            target_path=str(destination),
            runtime=nfo.runtime,
            plot=nfo.plot,
            imdb_id=nfo.imdb_id,
            tmdb_id=nfo.tmdb_id,
            director=nfo.director,
            writer=nfo.writer,
            rating=nfo.rating,
            resolution=extract_resolution(nfo_path.name),
        )

        if nfo.is_series:
            try:
                existing = self._repository.find_series_record(nfo.title, nfo.year)
            except StorageError as e:
                logger.error("Recherche de la serie existante echouee", title=nfo.title, error=e.message)
                existing = None
            if existing is not None:
                logger.debug("Serie deja cataloguee, mise a jour", title=nfo.title, id=existing.id)
                return replace(existing, **fields)

        return CatalogRecord(
            title=nfo.title,
            source_path=str(nfo_path.parent),
            season=nfo.season,
            episode=nfo.episode,
            **fields,
        )

    def _track_completeness(
        self,
        outcome: TitleOutcome,
        record: CatalogRecord,
        nfo: NfoRecord,
        destination: Path,
    ) -> None:
        """Detection des saisons manquantes puis bilan ; les echecs ne bloquent pas le titre."""
        try:
            outcome.completeness = self._completeness.detect_missing(record)
        except (ServiceError, StorageError, OSError) as e:
            outcome.step = Step.COMPLETENESS
            outcome.message = _describe(e)
            logger.error(
                "Detection des saisons manquantes echouee",
                title=nfo.title,
                step=Step.COMPLETENESS.value,
                error=outcome.message,
            )

        try:
            report = self._completeness.report_status(nfo.title, nfo.tmdb_id, destination)
        except OSError as e:
            outcome.step = Step.COMPLETENESS
            outcome.message = _describe(e)
            logger.error(
                "Bilan des saisons echoue",
                title=nfo.title,
                step=Step.COMPLETENESS.value,
                error=outcome.message,
            )
            return
        if outcome.completeness is None and report is not None:
            outcome.completeness = report

    # ------------------------------------------------------------------
    # Resultats
    # ------------------------------------------------------------------

    def _skipped(
        self,
        nfo_path: Path,
        step: Step,
        message: str,
        title: str = "",
        category: Optional[Category] = None,
    ) -> TitleOutcome:
        logger.info(f"Titre ignore: {message}", path=str(nfo_path), step=step.value)
        return TitleOutcome(
            nfo_path=nfo_path,
            status=TitleStatus.SKIPPED,
            step=step,
            message=message,
            title=title,
            category=category,
        )

    def _failed(
        self,
        nfo_path: Path,
        step: Step,
        message: str,
        title: str = "",
        category: Optional[Category] = None,
    ) -> TitleOutcome:
        logger.error(f"Echec du traitement: {message}", path=str(nfo_path), step=step.value)
        return TitleOutcome(
            nfo_path=nfo_path,
            status=TitleStatus.FAILED,
            step=step,
            message=message,
            title=title,
            category=category,
        )


def _describe(error: Exception) -> str:
    """Message lisible d'une erreur (avec les details NfoOrgError)."""
    if isinstance(error, NfoOrgError):
        return f"{error.message} ({error.details})" if error.details else error.message
    return str(error)
