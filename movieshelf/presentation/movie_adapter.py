"""
Adaptateur de liste : projection d'une sequence de films en lignes affichables.

L'adaptateur ne porte aucun etat propre en dehors de la derniere sequence
recue. update_list() remplace la sequence en entier et invalide toutes les
lignes (pas de diff positionnel).
"""

import asyncio
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from loguru import logger

from movieshelf.core.entities.movie import Movie
from movieshelf.core.ports.image_loader import IImageLoader

MovieHandler = Callable[[Movie], None]


def filter_movies(movies: Iterable[Movie], query: str) -> list[Movie]:
    """
    Filtre les films par sous-chaine, sans tenir compte de la casse.

    Un film est retenu si la requete apparait dans son titre, son studio
    ou sa description. Une requete vide retourne la liste complete.
    """
    movies = list(movies)
    if not query:
        return movies
    needle = query.lower()
    return [
        movie
        for movie in movies
        if needle in movie.title.lower()
        or needle in movie.studio.lower()
        or needle in movie.description.lower()
    ]


@dataclass
class ImageSlot:
    """Emplacement d'image d'une ligne, vide tant que l'affiche n'est pas chargee."""

    uri: str = ""
    content: Optional[bytes] = None

    @property
    def is_blank(self) -> bool:
        return self.content is None


@dataclass
class MovieRow:
    """
    Ligne affichee pour un film.

    Attributs :
        movie : Film projete
        title : Titre affiche
        studio : Studio affiche
        rating_text : Note de la critique sous forme de texte
        poster : Emplacement de l'affiche
    """

    movie: Movie
    title: str
    studio: str
    rating_text: str
    poster: ImageSlot = field(default_factory=ImageSlot)
    on_edit: Optional[MovieHandler] = None
    on_delete: Optional[MovieHandler] = None

    def edit(self) -> None:
        """Declenche l'action "modifier" de la ligne."""
        if self.on_edit is not None:
            self.on_edit(self.movie)

    def delete(self) -> None:
        """Declenche l'action "supprimer" de la ligne."""
        if self.on_delete is not None:
            self.on_delete(self.movie)


class MovieListAdapter:
    """
    Lie une sequence ordonnee de films a une vue en lignes.

    Attributes:
        item_count: Nombre de lignes (longueur de la sequence courante)

    Example:
        adapter = MovieListAdapter([], on_edit=open_details, on_delete=remove)
        adapter.update_list(movies)
        for position in range(adapter.item_count):
            row = adapter.bind_row(position)
    """

    def __init__(
        self,
        movies: Optional[Iterable[Movie]] = None,
        on_edit: Optional[MovieHandler] = None,
        on_delete: Optional[MovieHandler] = None,
        image_loader: Optional[IImageLoader] = None,
    ) -> None:
        """
        Initialise l'adaptateur.

        Args:
            movies: Sequence initiale
            on_edit: Action appelee avec le film quand une ligne est modifiee
            on_delete: Action appelee avec le film quand une ligne est supprimee
            image_loader: Chargeur d'affiches (optionnel)
        """
        self._movies: list[Movie] = list(movies or [])
        self._on_edit = on_edit
        self._on_delete = on_delete
        self._image_loader = image_loader
        self._listeners: list[Callable[[], None]] = []
        self._pending_loads: set[asyncio.Task] = set()

    @property
    def item_count(self) -> int:
        return len(self._movies)

    @property
    def movies(self) -> list[Movie]:
        """Retourne une copie de la sequence courante."""
        return list(self._movies)

    def get_item(self, position: int) -> Movie:
        return self._movies[position]

    def on_data_set_changed(self, listener: Callable[[], None]) -> None:
        """Abonne un listener notifie a chaque invalidation complete."""
        self._listeners.append(listener)

    def bind_row(self, position: int) -> MovieRow:
        """
        Construit la ligne affichee a la position donnee.

        Si un chargeur d'images est configure et qu'une boucle asyncio tourne,
        l'affiche est chargee en arriere-plan dans row.poster. Un echec laisse
        l'emplacement vide.
        """
        movie = self._movies[position]
        row = MovieRow(
            movie=movie,
            title=movie.title,
            studio=movie.studio,
            rating_text=str(movie.critics_rating),
            poster=ImageSlot(uri=movie.image_url),
            on_edit=self._on_edit,
            on_delete=self._on_delete,
        )
        self._schedule_poster(row)
        return row

    def rows(self) -> list[MovieRow]:
        """Construit toutes les lignes de la sequence courante."""
        return [self.bind_row(position) for position in range(self.item_count)]

    def trigger_edit(self, position: int) -> None:
        self.bind_row(position).edit()

    def trigger_delete(self, position: int) -> None:
        self.bind_row(position).delete()

    def update_list(self, new_list: Iterable[Movie]) -> None:
        """Remplace toute la sequence et invalide toutes les lignes."""
        self._movies.clear()
        self._movies.extend(new_list)
        self.notify_data_set_changed()

    def notify_data_set_changed(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------------
    # Affiches
    # ------------------------------------------------------------------

    async def load_poster(self, row: MovieRow) -> None:
        """Charge l'affiche de la ligne dans son emplacement."""
        if self._image_loader is None or not row.poster.uri:
            return
        try:
            content = await self._image_loader.load(row.poster.uri)
        except Exception as e:
            logger.debug("Affiche non chargee", uri=row.poster.uri, error=str(e))
            return
        if content is not None:
            row.poster.content = content

    def _schedule_poster(self, row: MovieRow) -> None:
        if self._image_loader is None or not row.poster.uri:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        task = loop.create_task(self.load_poster(row))
        self._pending_loads.add(task)
        task.add_done_callback(self._pending_loads.discard)
