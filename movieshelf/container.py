"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI.
Le backend (local ou firebase) est choisi par la configuration :
les providers auth_provider et document_store selectionnent
l'implementation concrete du port correspondant.
"""

from dependency_injector import containers, providers

from .adapters.firebase.auth_client import FirebaseAuthClient
from .adapters.firebase.firestore_client import FirestoreDocumentStore
from .adapters.images.cache import ImageCache
from .adapters.images.http_image_loader import HttpImageLoader
from .adapters.local.auth_provider import LocalAuthProvider
from .adapters.local.document_store import SQLiteDocumentStore
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.session_store import SessionStore
from .services.auth_service import AuthService
from .services.list_store import MovieListStore
from .services.movie_gateway import MovieGateway


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Backend local uniquement
        store = container.list_store()
        await store.refresh_catalog()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Base SQLite du backend local
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )
    database = providers.Resource(init_db, engine=engine)

    # Session authentifiee partagee par les deux backends
    session_store = providers.Singleton(
        SessionStore,
        path=config.provided.session_file,
    )

    # Backend Firebase (API REST)
    firebase_auth = providers.Singleton(
        FirebaseAuthClient,
        api_key=config.provided.firebase_api_key,
        session_store=session_store,
        timeout=config.provided.request_timeout,
        max_attempts=config.provided.max_retries,
    )
    firestore = providers.Singleton(
        FirestoreDocumentStore,
        project_id=config.provided.firebase_project_id,
        auth=firebase_auth,
        timeout=config.provided.request_timeout,
        max_attempts=config.provided.max_retries,
    )

    # Backend local (SQLite)
    local_auth = providers.Singleton(
        LocalAuthProvider,
        engine=engine,
        session_store=session_store,
    )
    sqlite_store = providers.Singleton(SQLiteDocumentStore, engine=engine)

    # Ports - implementation choisie par config.backend
    auth_provider = providers.Selector(
        config.provided.backend,
        local=local_auth,
        firebase=firebase_auth,
    )
    document_store = providers.Selector(
        config.provided.backend,
        local=sqlite_store,
        firebase=firestore,
    )

    # Services
    movie_gateway = providers.Factory(
        MovieGateway,
        document_store=document_store,
        auth=auth_provider,
        catalog_collection=config.provided.catalog_collection,
        favorites_collection=config.provided.favorites_collection,
    )
    # Factory : un store par ecran (ferme a la sortie de l'ecran)
    list_store = providers.Factory(MovieListStore, gateway=movie_gateway)
    auth_service = providers.Factory(AuthService, provider=auth_provider)

    # Affiches - Singleton pour partager le cache
    image_cache = providers.Singleton(
        ImageCache,
        cache_dir=config.provided.image_cache_dir,
    )
    image_loader = providers.Singleton(
        HttpImageLoader,
        cache=image_cache,
        timeout=config.provided.request_timeout,
    )
