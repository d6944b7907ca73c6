"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : la
configuration est chargee une seule fois puis transmise explicitement
a chaque composant.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import init_metadata_cache
from .adapters.api.tmdb_client import init_tmdb_client
from .adapters.file_system import FileSystemAdapter
from .adapters.instance_lock import InstanceLock
from .adapters.parsing.nfo_reader import NfoReader
from .adapters.scraper.tmm_runner import ScraperRunner
from .config import load_settings
from .infrastructure.persistence.database import init_database
from .infrastructure.persistence.repositories import SQLModelCatalogRepository
from .services.actor_checker import ActorChecker
from .services.completeness import CompletenessTracker
from .services.discovery import NfoDiscovery
from .services.genre_normalizer import GenreNormalizer
from .services.placement import PlacementService
from .services.workflow import WorkflowService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Ouvre le handle du catalogue
        workflow = container.workflow_service()
        ...
        container.shutdown_resources()  # Catalogue, cache et client HTTP
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(load_settings)

    # Catalogue - Resource ouverte au demarrage, fermee a l'arret
    database = providers.Resource(
        init_database,
        url=config.provided.database_url,
    )

    catalog_repository = providers.Singleton(
        SQLModelCatalogRepository,
        database=database,
    )

    instance_lock = providers.Singleton(
        InstanceLock,
        lock_file=config.provided.lock_file,
    )

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)
    nfo_reader = providers.Singleton(NfoReader)

    # Cache disque et client HTTP fermes par shutdown_resources()
    metadata_cache = providers.Resource(
        init_metadata_cache,
        cache_dir=config.provided.cache_dir,
    )

    # Si la cle est absente, le client est cree mais desactive (enabled=False)
    tmdb_client = providers.Resource(
        init_tmdb_client,
        api_key=config.provided.tmdb_api_key,
        use_tmdb_org=config.provided.use_tmdb_org,
        cache=metadata_cache,
    )

    scraper = providers.Singleton(
        ScraperRunner,
        tmm_dir=config.provided.tmm_dir,
        temp_dirs=config.provided.valid_temp_dirs,
    )

    # Services
    genre_normalizer = providers.Singleton(GenreNormalizer, reader=nfo_reader)
    actor_checker = providers.Singleton(
        ActorChecker,
        reader=nfo_reader,
        report_dir=config.provided.report_dir,
    )
    placement_service = providers.Singleton(PlacementService, file_system=file_system)
    discovery = providers.Singleton(NfoDiscovery, file_system=file_system)
    completeness_tracker = providers.Singleton(
        CompletenessTracker,
        repository=catalog_repository,
        metadata_service=tmdb_client,
    )

    workflow_service = providers.Singleton(
        WorkflowService,
        reader=nfo_reader,
        genre_normalizer=genre_normalizer,
        actor_checker=actor_checker,
        placement=placement_service,
        repository=catalog_repository,
        metadata_service=tmdb_client,
        completeness=completeness_tracker,
        discovery=discovery,
        file_system=file_system,
        library_root=config.provided.cloud_dir,
        temp_dirs=config.provided.valid_temp_dirs,
        scraper=scraper,
        wait_after_edit=config.provided.wait_time_after_nfo_edit,
        wait_after_scan=config.provided.wait_time_after_scan,
    )
