"""
Store observable des listes de films.

Conserve en memoire les dernieres listes recuperees (catalogue et favoris)
et notifie les observateurs a chaque livraison. Chaque rafraichissement
remplace la liste en entier, sans fusion avec la valeur precedente.

Livraison:
- Les observateurs sont notifies sur le thread de la boucle asyncio
  proprietaire (post_value marshale les livraisons venant d'autres threads)
- Une reponse plus ancienne qu'un rafraichissement deja emis est ignoree
- Apres close(), les livraisons tardives sont ignorees
"""

import asyncio
import threading
from typing import Callable, Generic, Optional, TypeVar

from loguru import logger

from movieshelf.core.entities.movie import Movie
from movieshelf.core.value_objects.results import GatewayResult
from movieshelf.services.movie_gateway import MovieGateway

T = TypeVar("T")

Observer = Callable[[T], None]


class ObservableValue(Generic[T]):
    """
    Valeur observable, equivalent minimal d'un LiveData.

    Attributes:
        value: Derniere valeur livree

    Example:
        movies = ObservableValue([])
        unsubscribe = movies.observe(lambda items: print(len(items)))
        movies.set_value([movie])   # affiche 1
        unsubscribe()
    """

    def __init__(
        self,
        initial: T,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        """
        Initialise la valeur observable.

        Args:
            initial: Valeur initiale
            loop: Boucle proprietaire pour post_value (liee au premier appel sinon)
        """
        self._value = initial
        self._observers: list[Observer[T]] = []
        self._loop = loop

    @property
    def value(self) -> T:
        """Retourne la derniere valeur livree."""
        return self._value

    def observe(self, observer: Observer[T]) -> Callable[[], None]:
        """
        Abonne un observateur.

        Returns:
            Fonction de desabonnement
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @property
    def observer_count(self) -> int:
        """Nombre d'observateurs abonnes."""
        return len(self._observers)

    def set_value(self, value: T) -> None:
        """
        Livre une valeur et notifie les observateurs immediatement.

        Doit etre appele depuis le thread proprietaire.
        """
        self._value = value
        for observer in list(self._observers):
            try:
                observer(value)
            except Exception:
                logger.exception("Observateur en erreur")

    def post_value(self, value: T) -> None:
        """
        Livre une valeur depuis n'importe quel thread.

        Si l'appel vient d'un autre thread que celui de la boucle proprietaire,
        la livraison est planifiee sur cette boucle.
        """
        loop = self._loop
        if loop is None or loop.is_closed():
            self.set_value(value)
            return
        if _running_loop() is loop:
            self.set_value(value)
        else:
            loop.call_soon_threadsafe(self.set_value, value)

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Lie la valeur a une boucle proprietaire."""
        self._loop = loop


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class MovieListStore:
    """
    Store des deux listes observables du proprietaire courant.

    Attributes:
        catalog: Films du catalogue (derniere liste recuperee)
        favorites: Favoris (derniere liste recuperee)
        last_failure: Dernier echec de rafraichissement ou de mutation

    Example:
        store = MovieListStore(gateway)
        store.catalog.observe(adapter.update_list)
        await store.refresh_catalog()
    """

    def __init__(self, gateway: MovieGateway) -> None:
        """
        Initialise le store.

        Args:
            gateway: Gateway utilise pour les lectures et ecritures
        """
        self._gateway = gateway
        self.catalog: ObservableValue[list[Movie]] = ObservableValue([])
        self.favorites: ObservableValue[list[Movie]] = ObservableValue([])
        self.last_failure: ObservableValue[Optional[GatewayResult]] = ObservableValue(None)
        self._generations = {"catalog": 0, "favorites": 0}
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        """Indique si le store a ete ferme."""
        return self._closed

    def close(self) -> None:
        """Ferme le store : les livraisons en vol seront ignorees."""
        self._closed = True

    # ------------------------------------------------------------------
    # Rafraichissements
    # ------------------------------------------------------------------

    async def refresh_catalog(self) -> GatewayResult[list[Movie]]:
        """Recharge le catalogue et remplace la liste observee."""
        return await self._refresh("catalog", self.catalog, self._gateway.list_catalog)

    async def refresh_favorites(self) -> GatewayResult[list[Movie]]:
        """Recharge les favoris et remplace la liste observee."""
        return await self._refresh(
            "favorites", self.favorites, self._gateway.list_favorites
        )

    async def _refresh(self, name, target, fetch) -> GatewayResult[list[Movie]]:
        self._bind_current_loop()
        generation = self._next_generation(name)

        result = await fetch()

        if self._closed:
            logger.debug("Livraison ignoree : store ferme", collection=name)
            return result
        # Une reponse plus ancienne que le dernier rafraichissement est ignoree,
        # succes comme echec
        if generation != self._generations[name]:
            logger.debug("Livraison perimee ignoree", collection=name, ok=result.ok)
            return result
        if not result.ok:
            self.last_failure.post_value(result)
            return result

        target.post_value(list(result.value))
        return result

    def _next_generation(self, name: str) -> int:
        with self._lock:
            self._generations[name] += 1
            return self._generations[name]

    def _bind_current_loop(self) -> None:
        loop = _running_loop()
        if loop is None:
            return
        for observable in (self.catalog, self.favorites, self.last_failure):
            observable.bind_loop(loop)

    # ------------------------------------------------------------------
    # Mutations suivies d'un rafraichissement
    # ------------------------------------------------------------------

    async def add_movie(self, movie: Movie) -> GatewayResult[Movie]:
        """Cree une fiche puis recharge le catalogue."""
        result = await self._gateway.create_catalog_entry(movie)
        return await self._after_mutation(result, self.refresh_catalog)

    async def update_movie(self, movie: Movie) -> GatewayResult[Movie]:
        """Remplace une fiche puis recharge le catalogue."""
        result = await self._gateway.replace_catalog_entry(movie)
        return await self._after_mutation(result, self.refresh_catalog)

    async def delete_movie(self, movie: Movie) -> GatewayResult[Movie]:
        """Supprime une fiche puis recharge le catalogue."""
        result = await self._gateway.delete_catalog_entry(movie)
        return await self._after_mutation(result, self.refresh_catalog)

    async def add_favorite(self, movie: Movie) -> GatewayResult[Movie]:
        """Copie un film dans les favoris puis recharge les favoris."""
        result = await self._gateway.add_favorite(movie)
        return await self._after_mutation(result, self.refresh_favorites)

    async def update_favorite(self, movie: Movie) -> GatewayResult[Movie]:
        """Remplace un favori puis recharge les favoris."""
        result = await self._gateway.replace_favorite_entry(movie)
        return await self._after_mutation(result, self.refresh_favorites)

    async def delete_favorite(self, movie: Movie) -> GatewayResult[Movie]:
        """Supprime un favori puis recharge les favoris."""
        result = await self._gateway.delete_favorite(movie)
        return await self._after_mutation(result, self.refresh_favorites)

    async def _after_mutation(self, result: GatewayResult, refresh) -> GatewayResult:
        if not result.ok:
            if not self._closed:
                self.last_failure.post_value(result)
            return result
        if not self._closed:
            await refresh()
        return result
