"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web :
configuration, source d'enregistrements (Firestore ou SQLite selon
record_source), hebergeur d'images et services applicatifs.
"""

from dependency_injector import containers, providers

from .adapters.api.cloudinary_client import CloudinaryMediaHost
from .adapters.firestore.repository import FirestoreAnimeRepository
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import SQLModelAnimeRepository
from .services.admin_auth import AdminAuthService
from .services.catalog import CatalogService


def _select_repository(settings: Settings, firestore, sqlite):
    """Retourne la source d'enregistrements configuree (providers delegues)."""
    if settings.record_source == "firestore":
        return firestore()
    return sqlite()


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Si record_source=sqlite
        catalog = container.catalog_service()
        entries = await catalog.list_entries()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database locale - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Sources d'enregistrements
    # Firestore - Singleton pour partager le client HTTP
    firestore_repository = providers.Singleton(
        FirestoreAnimeRepository,
        project_id=config.provided.firestore_project_id,
        api_key=config.provided.firestore_api_key,
        database=config.provided.firestore_database,
        collection=config.provided.firestore_collection,
        timeout=config.provided.http_timeout,
        max_attempts=config.provided.http_max_attempts,
    )
    # SQLite - Factory pour nouvelle instance avec session fraiche
    sqlite_repository = providers.Factory(
        SQLModelAnimeRepository,
        session=session,
    )
    anime_repository = providers.Callable(
        _select_repository,
        settings=config,
        firestore=firestore_repository.provider,
        sqlite=sqlite_repository.provider,
    )

    # Hebergeur d'images - Singleton pour partager le client HTTP
    media_host = providers.Singleton(
        CloudinaryMediaHost,
        cloud_name=config.provided.cloudinary_cloud_name,
        upload_preset=config.provided.cloudinary_upload_preset,
        folder=config.provided.cloudinary_folder,
        timeout=config.provided.http_timeout,
        max_attempts=config.provided.http_max_attempts,
    )

    # Services
    catalog_service = providers.Factory(
        CatalogService,
        repository=anime_repository,
        media_host=media_host,
    )
    admin_auth_service = providers.Singleton(
        AdminAuthService,
        password=config.provided.admin_password,
        secret_key=config.provided.secret_key,
        algorithm=config.provided.jwt_algorithm,
        expire_minutes=config.provided.admin_token_expire_minutes,
    )
