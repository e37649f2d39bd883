"""
Gateway des films : facade entre le domaine et la base documentaire.

Traduit les operations du catalogue et des favoris en appels sur
IDocumentStore, en filtrant toujours par le proprietaire courant fourni
par IAuthProvider.

Regles:
- Sans proprietaire resolu, toute operation echoue en UNAUTHENTICATED
  et la base n'est jamais appelee
- La creation et le remplacement tamponnent le proprietaire courant
  (une valeur fournie par l'appelant est ecrasee)
- Le remplacement et la suppression exigent un id non vide
- Les erreurs du backend deviennent des echecs BACKEND_ERROR
"""

from typing import Awaitable, Callable, Optional, TypeVar

from loguru import logger

from movieshelf.core.entities.movie import Movie
from movieshelf.core.ports.auth import IAuthProvider
from movieshelf.core.ports.document_store import DocumentStoreError, IDocumentStore
from movieshelf.core.value_objects.results import FailureReason, GatewayResult

T = TypeVar("T")

CATALOG_COLLECTION = "movies"
FAVORITES_COLLECTION = "favorites"


class MovieGateway:
    """
    Facade des operations sur le catalogue et les favoris.

    Les poignees du backend (auth et base documentaire) sont injectees
    a la construction, ce qui permet de les remplacer par des fakes.

    Example:
        gateway = MovieGateway(document_store=store, auth=auth)
        result = await gateway.create_catalog_entry(Movie(title="Alien", ...))
        if result.ok:
            print(result.value.id)
    """

    def __init__(
        self,
        document_store: IDocumentStore,
        auth: IAuthProvider,
        catalog_collection: str = CATALOG_COLLECTION,
        favorites_collection: str = FAVORITES_COLLECTION,
    ) -> None:
        """
        Initialise le gateway.

        Args:
            document_store: Base documentaire distante
            auth: Fournisseur d'authentification (proprietaire courant)
            catalog_collection: Nom de la collection du catalogue
            favorites_collection: Nom de la collection des favoris
        """
        self._store = document_store
        self._auth = auth
        self._catalog = catalog_collection
        self._favorites = favorites_collection

    # ------------------------------------------------------------------
    # Catalogue
    # ------------------------------------------------------------------

    async def list_catalog(self) -> GatewayResult[list[Movie]]:
        """Liste les films du catalogue du proprietaire courant."""
        return await self._list(self._catalog)

    async def create_catalog_entry(self, movie: Movie) -> GatewayResult[Movie]:
        """Cree une fiche dans le catalogue et retourne la fiche persistee."""
        return await self._create(self._catalog, movie)

    async def replace_catalog_entry(self, movie: Movie) -> GatewayResult[Movie]:
        """Remplace integralement la fiche movie.id du catalogue."""
        return await self._replace(self._catalog, movie)

    async def delete_catalog_entry(self, movie: Movie) -> GatewayResult[Movie]:
        """Supprime la fiche movie.id du catalogue."""
        return await self._delete(self._catalog, movie)

    # ------------------------------------------------------------------
    # Favoris
    # ------------------------------------------------------------------

    async def list_favorites(self) -> GatewayResult[list[Movie]]:
        """Liste les favoris du proprietaire courant."""
        return await self._list(self._favorites)

    async def add_favorite(self, movie: Movie) -> GatewayResult[Movie]:
        """
        Copie un film dans les favoris.

        La copie recoit son propre id : une modification ulterieure de la
        fiche du catalogue n'est pas repercutee sur le favori.
        """
        return await self._create(self._favorites, movie)

    async def replace_favorite_entry(self, movie: Movie) -> GatewayResult[Movie]:
        """Remplace integralement le favori movie.id."""
        return await self._replace(self._favorites, movie)

    async def delete_favorite(self, movie: Movie) -> GatewayResult[Movie]:
        """Supprime le favori movie.id."""
        return await self._delete(self._favorites, movie)

    # ------------------------------------------------------------------
    # Implementation commune aux deux collections
    # ------------------------------------------------------------------

    def _owner_id(self) -> Optional[str]:
        """Retourne l'uid du proprietaire courant, None si non authentifie."""
        return self._auth.current_owner_id() or None

    async def _list(self, collection: str) -> GatewayResult[list[Movie]]:
        owner_id = self._owner_id()
        if owner_id is None:
            return self._unauthenticated("list", collection)

        async def run() -> list[Movie]:
            documents = await self._store.list_by_owner(collection, owner_id)
            return [Movie.from_document(doc.id, doc.data) for doc in documents]

        return await self._call("list", collection, run)

    async def _create(self, collection: str, movie: Movie) -> GatewayResult[Movie]:
        owner_id = self._owner_id()
        if owner_id is None:
            return self._unauthenticated("create", collection)

        owned = movie.copy_with(id="", owner_id=owner_id)

        async def run() -> Movie:
            new_id = await self._store.insert(collection, owned.to_document())
            return owned.copy_with(id=new_id)

        return await self._call("create", collection, run)

    async def _replace(self, collection: str, movie: Movie) -> GatewayResult[Movie]:
        owner_id = self._owner_id()
        if owner_id is None:
            return self._unauthenticated("replace", collection)
        if not movie.id:
            return GatewayResult.fail(FailureReason.MISSING_ID)

        owned = movie.copy_with(owner_id=owner_id)

        async def run() -> Movie:
            await self._store.replace(collection, owned.id, owned.to_document())
            return owned

        return await self._call("replace", collection, run)

    async def _delete(self, collection: str, movie: Movie) -> GatewayResult[Movie]:
        owner_id = self._owner_id()
        if owner_id is None:
            return self._unauthenticated("delete", collection)
        if not movie.id:
            return GatewayResult.fail(FailureReason.MISSING_ID)

        async def run() -> Movie:
            await self._store.delete(collection, movie.id)
            return movie

        return await self._call("delete", collection, run)

    async def _call(
        self,
        operation: str,
        collection: str,
        run: Callable[[], Awaitable[T]],
    ) -> GatewayResult[T]:
        """Execute un appel a la base et convertit les erreurs en echec type."""
        try:
            value = await run()
        except DocumentStoreError as e:
            logger.warning(
                "Echec backend",
                operation=operation,
                collection=collection,
                error=str(e),
            )
            return GatewayResult.fail(FailureReason.BACKEND_ERROR, str(e))
        logger.debug("Operation reussie", operation=operation, collection=collection)
        return GatewayResult.success(value)

    def _unauthenticated(self, operation: str, collection: str) -> GatewayResult:
        logger.debug(
            "Operation ignoree : aucun utilisateur connecte",
            operation=operation,
            collection=collection,
        )
        return GatewayResult.fail(FailureReason.UNAUTHENTICATED)
