"""
Utilitaires partages pour les commandes CLI de MovieShelf.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- CliNavigator : navigation enregistree par les controleurs d'ecran
- find_movie : recherche d'un film par id (ou prefixe d'id unique)
- fail : affiche une erreur et termine la commande avec le code 1
"""

from contextlib import contextmanager
from functools import wraps
from typing import NoReturn, Optional

import typer
from loguru import logger as loguru_logger
from rich.console import Console
from rich.markup import escape

from movieshelf.container import Container
from movieshelf.core.entities.movie import Movie
from movieshelf.presentation.screens import ListSource

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("movieshelf")
    try:
        yield
    finally:
        loguru_logger.enable("movieshelf")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (defaut), initialise la base SQLite du backend local.

    Les clients HTTP du backend Firebase sont fermes a la fin de la commande.

    Usage:
        @with_container()
        async def my_command(container, ...):
            store = container.list_store()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            backend = container.config().backend
            if requires_db and backend == "local":
                container.database.init()
            try:
                return await func(container, *args, **kwargs)
            finally:
                if backend == "firebase":
                    await container.firestore().close()
                    await container.firebase_auth().close()
        return wrapper
    return decorator


class CliNavigator:
    """
    Navigator de la CLI : chaque commande est un ecran, la navigation
    demandee par un controleur est seulement enregistree.

    Attributes:
        destination: Dernier ecran demande ("catalog", "details", ...)
        movie: Film passe a l'ecran demande, le cas echeant
        source: Liste d'origine du film (catalogue ou favoris)
    """

    def __init__(self) -> None:
        self.destination: Optional[str] = None
        self.movie: Optional[Movie] = None
        self.source = ListSource.CATALOG

    def _go(
        self,
        destination: str,
        movie: Optional[Movie] = None,
        source: ListSource = ListSource.CATALOG,
    ) -> None:
        self.destination = destination
        self.movie = movie
        self.source = source

    def open_login(self) -> None:
        self._go("login")

    def open_register(self) -> None:
        self._go("register")

    def open_catalog(self) -> None:
        self._go("catalog")

    def open_favorites(self) -> None:
        self._go("favorites")

    def open_add(self) -> None:
        self._go("add")

    def open_details(self, movie: Movie, source: ListSource = ListSource.CATALOG) -> None:
        self._go("details", movie, source)

    def open_edit(self, movie: Movie, source: ListSource = ListSource.CATALOG) -> None:
        self._go("edit", movie, source)

    def close(self) -> None:
        self._go("back")


def find_movie(movies: list[Movie], movie_id: str) -> Optional[Movie]:
    """
    Recherche un film par id exact, ou par prefixe d'id s'il est unique.

    Returns:
        Le film trouve, ou None si aucun (ou plusieurs) ne correspond
    """
    for movie in movies:
        if movie.id == movie_id:
            return movie
    matches = [movie for movie in movies if movie_id and movie.id.startswith(movie_id)]
    if len(matches) == 1:
        return matches[0]
    return None


def fail(message: str) -> NoReturn:
    """Affiche le message en rouge et termine la commande en erreur."""
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(code=1)
