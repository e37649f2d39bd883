"""
Controleurs d'ecran (sans interface graphique).

Chaque controleur porte l'etat affichable d'un ecran (message d'erreur,
indicateur de liste vide, libelles) et orchestre les appels au store ou
au service d'authentification. La vue (CLI, tests) lit cet etat et
delegue la navigation a un Navigator.

Ecrans:
- LoginController / RegisterController : authentification
- CatalogScreen : catalogue avec recherche locale
- FavoritesScreen : liste des favoris
- DetailsController : detail d'un film, ajout aux favoris
- AddEditController : formulaire d'ajout ou de modification
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from loguru import logger

from movieshelf.core.entities.movie import Movie
from movieshelf.core.ports.image_loader import IImageLoader
from movieshelf.core.value_objects.auth import AuthResult
from movieshelf.core.value_objects.results import GatewayResult
from movieshelf.presentation.movie_adapter import ImageSlot, MovieListAdapter, filter_movies
from movieshelf.services.auth_service import AuthService
from movieshelf.services.list_store import MovieListStore, ObservableValue

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"
DESCRIPTION_REQUIRED_MESSAGE = "Please enter a description"


class ListSource(str, Enum):
    """Liste d'origine d'un film ouvert en detail ou en modification."""

    CATALOG = "catalog"
    FAVORITES = "favorites"


class Navigator(Protocol):
    """Navigation entre ecrans, fournie par la vue."""

    def open_login(self) -> None: ...

    def open_register(self) -> None: ...

    def open_catalog(self) -> None: ...

    def open_favorites(self) -> None: ...

    def open_add(self) -> None: ...

    def open_details(self, movie: Movie, source: ListSource = ListSource.CATALOG) -> None: ...

    def open_edit(self, movie: Movie, source: ListSource = ListSource.CATALOG) -> None: ...

    def close(self) -> None: ...


# ============================================================================
# Authentification
# ============================================================================


class LoginController:
    """Ecran de connexion."""

    def __init__(self, auth_service: AuthService, navigator: Navigator) -> None:
        self._auth = auth_service
        self._navigator = navigator
        self.error_text = ""
        self.error_visible = False

    async def submit(self, email: str, password: str) -> AuthResult:
        """Connecte l'utilisateur et ouvre le catalogue en cas de succes."""
        result = await self._auth.login(email.strip(), password)
        if result.success:
            self.error_visible = False
            self._navigator.open_catalog()
        else:
            self.error_text = result.error_message or ""
            self.error_visible = True
        return result

    def go_to_register(self) -> None:
        self._navigator.open_register()


class RegisterController:
    """
    Ecran d'inscription.

    Un mot de passe trop court est refuse localement : le service
    d'authentification n'est pas appele.
    """

    def __init__(self, auth_service: AuthService, navigator: Navigator) -> None:
        self._auth = auth_service
        self._navigator = navigator
        self.error_text = ""
        self.error_visible = False

    async def submit(self, email: str, password: str) -> AuthResult:
        """Valide le mot de passe puis cree le compte."""
        error = AuthService.validate_password(password)
        if error is not None:
            self.error_text = error
            self.error_visible = True
            return AuthResult(success=False, error_message=error)

        self.error_visible = False
        result = await self._auth.register(email.strip(), password)
        if result.success:
            self._navigator.open_login()
        else:
            self.error_text = result.error_message or ""
            self.error_visible = True
        return result

    def cancel(self) -> None:
        self._navigator.close()


# ============================================================================
# Listes
# ============================================================================


class _MovieListScreen(ABC):
    """Base commune des ecrans de liste : adaptateur lie a une liste du store."""

    source: ListSource

    def __init__(
        self,
        store: MovieListStore,
        navigator: Navigator,
        observed: ObservableValue[list[Movie]],
        image_loader: Optional[IImageLoader] = None,
    ) -> None:
        self._store = store
        self._navigator = navigator
        self._movies: list[Movie] = []
        self._tasks: set[asyncio.Task] = set()
        self.empty_visible = False
        self.adapter = MovieListAdapter(
            [],
            on_edit=self._on_edit,
            on_delete=self._on_delete,
            image_loader=image_loader,
        )
        self._unsubscribe = observed.observe(self._on_movies)
        self._on_movies(observed.value)

    @property
    def movies(self) -> list[Movie]:
        """Derniere liste recue du store (non filtree)."""
        return list(self._movies)

    def _on_movies(self, movies: list[Movie]) -> None:
        self._movies = list(movies)
        self._render(self._visible(self._movies))

    def _visible(self, movies: list[Movie]) -> list[Movie]:
        return movies

    def _render(self, movies: list[Movie]) -> None:
        self.adapter.update_list(movies)
        self.empty_visible = not movies

    def _on_edit(self, movie: Movie) -> None:
        self._navigator.open_details(movie, self.source)

    def _on_delete(self, movie: Movie) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Suppression ignoree : aucune boucle active", movie_id=movie.id)
            return
        task = loop.create_task(self.delete(movie))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @abstractmethod
    async def on_resume(self) -> GatewayResult[list[Movie]]:
        """Recharge la liste a chaque retour sur l'ecran."""
        ...

    @abstractmethod
    async def delete(self, movie: Movie) -> GatewayResult[Movie]:
        """Supprime le film de la liste affichee."""
        ...

    def close(self) -> None:
        """Detache l'ecran du store."""
        self._unsubscribe()


class CatalogScreen(_MovieListScreen):
    """
    Ecran principal : catalogue de l'utilisateur avec recherche locale.

    La recherche filtre la derniere liste recue sans appel au backend.
    Une nouvelle livraison du store reapplique la requete courante.
    """

    source = ListSource.CATALOG

    def __init__(
        self,
        store: MovieListStore,
        navigator: Navigator,
        image_loader: Optional[IImageLoader] = None,
    ) -> None:
        self.query = ""
        super().__init__(store, navigator, store.catalog, image_loader)

    def _visible(self, movies: list[Movie]) -> list[Movie]:
        return filter_movies(movies, self.query)

    async def on_resume(self) -> GatewayResult[list[Movie]]:
        """Recharge le catalogue a chaque retour sur l'ecran."""
        return await self._store.refresh_catalog()

    def search(self, query: str) -> list[Movie]:
        """Filtre la liste affichee et met a jour l'indicateur de liste vide."""
        self.query = query
        filtered = filter_movies(self._movies, query)
        self._render(filtered)
        return filtered

    async def delete(self, movie: Movie) -> GatewayResult[Movie]:
        return await self._store.delete_movie(movie)

    def open_add(self) -> None:
        self._navigator.open_add()

    def open_favorites(self) -> None:
        self._navigator.open_favorites()


class FavoritesScreen(_MovieListScreen):
    """Ecran des favoris."""

    source = ListSource.FAVORITES

    def __init__(
        self,
        store: MovieListStore,
        navigator: Navigator,
        image_loader: Optional[IImageLoader] = None,
    ) -> None:
        super().__init__(store, navigator, store.favorites, image_loader)

    async def on_resume(self) -> GatewayResult[list[Movie]]:
        return await self._store.refresh_favorites()

    async def delete(self, movie: Movie) -> GatewayResult[Movie]:
        return await self._store.delete_favorite(movie)

    def open_catalog(self) -> None:
        self._navigator.open_catalog()


# ============================================================================
# Detail et formulaire
# ============================================================================


class DetailsController:
    """
    Detail d'un film.

    Le film est recu par valeur, avec la liste dont il provient. Apres une
    modification, le formulaire retourne le film persiste que
    apply_edit_result() affiche.
    """

    def __init__(
        self,
        store: MovieListStore,
        navigator: Navigator,
        movie: Movie,
        image_loader: Optional[IImageLoader] = None,
        source: ListSource = ListSource.CATALOG,
    ) -> None:
        self._store = store
        self._navigator = navigator
        self._image_loader = image_loader
        self.source = source
        self.current_movie = movie
        self.poster = ImageSlot(uri=movie.image_url)
        self.message = ""

    async def load_poster(self) -> None:
        """Charge l'affiche ; un echec laisse l'emplacement vide."""
        self.poster = ImageSlot(uri=self.current_movie.image_url)
        if self._image_loader is None or not self.poster.uri:
            return
        try:
            self.poster.content = await self._image_loader.load(self.poster.uri)
        except Exception as e:
            logger.debug("Affiche non chargee", uri=self.poster.uri, error=str(e))

    async def add_to_favorites(self) -> GatewayResult[Movie]:
        """Copie le film courant dans les favoris."""
        result = await self._store.add_favorite(self.current_movie)
        self.message = "Movie added to favorites" if result.ok else result.message
        return result

    def edit(self) -> None:
        self._navigator.open_edit(self.current_movie, self.source)

    def apply_edit_result(self, movie: Optional[Movie]) -> None:
        """Affiche le film retourne par le formulaire de modification."""
        if movie is None:
            return
        self.current_movie = movie
        self.message = "Movie updated"

    def back(self) -> None:
        self._navigator.close()


@dataclass
class MovieForm:
    """Saisie brute du formulaire d'ajout/modification."""

    title: str = ""
    studio: str = ""
    description: str = ""
    image_url: str = ""
    rating: str = ""

    @classmethod
    def from_movie(cls, movie: Movie) -> "MovieForm":
        return cls(
            title=movie.title,
            studio=movie.studio,
            description=movie.description,
            image_url=movie.image_url,
            rating=str(movie.critics_rating),
        )


def parse_rating(text: str) -> float:
    """Convertit la note saisie en float, 0.0 si la saisie n'est pas un nombre."""
    try:
        return float(text.strip())
    except ValueError:
        return 0.0


class AddEditController:
    """
    Formulaire d'ajout (sans film) ou de modification (avec film).

    En modification, seule la description est modifiable ; les autres champs
    sont affiches en lecture seule. Les ecritures passent par le store, qui
    recharge la liste d'origine (catalogue ou favoris) : la liste observee
    reste la seule source de verite, et le film persiste est expose dans
    result pour l'ecran appelant.
    """

    def __init__(
        self,
        store: MovieListStore,
        navigator: Navigator,
        movie: Optional[Movie] = None,
        source: ListSource = ListSource.CATALOG,
    ) -> None:
        self._store = store
        self._navigator = navigator
        self.current_movie = movie
        self.source = source
        self.form = MovieForm.from_movie(movie) if movie else MovieForm()
        self.error_text = ""
        self.message = ""
        self.result: Optional[Movie] = None

    @property
    def is_edit_mode(self) -> bool:
        return self.current_movie is not None

    @property
    def submit_label(self) -> str:
        return "Update" if self.is_edit_mode else "Add Movie"

    @property
    def editable_fields(self) -> tuple[str, ...]:
        if self.is_edit_mode:
            return ("description",)
        return ("title", "studio", "description", "image_url", "rating")

    async def submit(self, form: Optional[MovieForm] = None) -> Optional[GatewayResult[Movie]]:
        """
        Valide et enregistre le formulaire.

        Returns:
            Le resultat du store, ou None si la validation locale a echoue
            (le message est alors dans error_text)
        """
        if form is not None:
            self.form = form
        self.error_text = ""
        if self.is_edit_mode:
            return await self._submit_edit()
        return await self._submit_add()

    async def _submit_edit(self) -> Optional[GatewayResult[Movie]]:
        description = self.form.description
        if not description.strip():
            self.error_text = DESCRIPTION_REQUIRED_MESSAGE
            return None

        updated = self.current_movie.copy_with(description=description)
        if self.source is ListSource.FAVORITES:
            result = await self._store.update_favorite(updated)
        else:
            result = await self._store.update_movie(updated)
        if not result.ok:
            self.error_text = result.message
            return result

        self.result = result.value
        self.message = "Movie updated"
        self._navigator.close()
        return result

    async def _submit_add(self) -> Optional[GatewayResult[Movie]]:
        form = self.form
        if not form.title.strip() or not form.studio.strip() or not form.image_url.strip():
            self.error_text = REQUIRED_FIELDS_MESSAGE
            return None

        movie = Movie(
            title=form.title,
            studio=form.studio,
            description=form.description,
            image_url=form.image_url,
            critics_rating=parse_rating(form.rating),
        )
        result = await self._store.add_movie(movie)
        if not result.ok:
            self.error_text = result.message
            return result

        self.result = result.value
        self.message = "Movie added"
        self._navigator.close()
        return result

    def cancel(self) -> None:
        self._navigator.close()
