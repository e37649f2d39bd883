"""
Commandes CLI du catalogue (list, add, show, edit, delete, favorite).

Chaque commande ouvre l'ecran correspondant, recharge le catalogue du
compte connecte puis agit sur le film designe par son id (ou un prefixe
d'id unique).
"""

import asyncio
from dataclasses import replace
from typing import Annotated, Optional

import typer
from rich.markup import escape

from movieshelf.adapters.cli.display import print_details, print_movie_list
from movieshelf.adapters.cli.helpers import (
    CliNavigator,
    console,
    fail,
    find_movie,
    with_container,
)
from movieshelf.core.entities.movie import Movie
from movieshelf.presentation.screens import (
    AddEditController,
    CatalogScreen,
    DetailsController,
    MovieForm,
)
from movieshelf.services.list_store import MovieListStore


async def _open_catalog(container) -> tuple[MovieListStore, CatalogScreen]:
    """Ouvre l'ecran catalogue et charge la liste du compte connecte."""
    store = container.list_store()
    screen = CatalogScreen(store, CliNavigator())
    result = await screen.on_resume()
    if not result.ok:
        screen.close()
        store.close()
        fail(result.message)
    return store, screen


def _require_movie(screen: CatalogScreen, movie_id: str) -> Movie:
    movie = find_movie(screen.movies, movie_id)
    if movie is None:
        fail(f"Movie not found: {movie_id}")
    return movie


def list_movies(
    search: Annotated[
        Optional[str],
        typer.Option("--search", "-s", help="Filtre titre/studio/description"),
    ] = None,
) -> None:
    """Affiche le catalogue du compte connecte."""
    asyncio.run(_list_async(search or ""))


@with_container()
async def _list_async(container, search: str) -> None:
    """Implementation async de la liste du catalogue."""
    store, screen = await _open_catalog(container)
    try:
        if search:
            screen.search(search)
        print_movie_list(screen.adapter, "Catalogue", screen.empty_visible)
    finally:
        screen.close()
        store.close()


def add(
    title: Annotated[str, typer.Option("--title", "-t", help="Titre")] = "",
    studio: Annotated[str, typer.Option("--studio", help="Studio")] = "",
    image_url: Annotated[str, typer.Option("--image-url", "-i", help="URL de l'affiche")] = "",
    description: Annotated[str, typer.Option("--description", "-d", help="Synopsis")] = "",
    rating: Annotated[str, typer.Option("--rating", "-r", help="Note de la critique")] = "",
) -> None:
    """Ajoute un film au catalogue."""
    form = MovieForm(
        title=title,
        studio=studio,
        description=description,
        image_url=image_url,
        rating=rating,
    )
    asyncio.run(_add_async(form))


@with_container()
async def _add_async(container, form: MovieForm) -> None:
    """Implementation async de l'ajout."""
    store = container.list_store()
    controller = AddEditController(store, CliNavigator())
    try:
        result = await controller.submit(form)
        if result is None or not result.ok:
            fail(controller.error_text)
        console.print(f"[green]{controller.message}[/green] ({controller.result.id})")
    finally:
        store.close()


def show(
    movie_id: Annotated[str, typer.Argument(help="ID du film (ou prefixe)")],
    poster: Annotated[bool, typer.Option("--poster", help="Charger l'affiche")] = False,
) -> None:
    """Affiche le detail d'un film."""
    asyncio.run(_show_async(movie_id, poster))


@with_container()
async def _show_async(container, movie_id: str, poster: bool) -> None:
    """Implementation async du detail."""
    store, screen = await _open_catalog(container)
    try:
        movie = _require_movie(screen, movie_id)
        if poster:
            loader = container.image_loader()
            details = DetailsController(store, CliNavigator(), movie, image_loader=loader)
            try:
                await details.load_poster()
            finally:
                await loader.close()
        else:
            details = DetailsController(store, CliNavigator(), movie)
        print_details(details)
    finally:
        screen.close()
        store.close()


def edit(
    movie_id: Annotated[str, typer.Argument(help="ID du film (ou prefixe)")],
    description: Annotated[
        str, typer.Option("--description", "-d", prompt=True, help="Nouvelle description")
    ],
) -> None:
    """Modifie la description d'un film (seul champ modifiable)."""
    asyncio.run(_edit_async(movie_id, description))


@with_container()
async def _edit_async(container, movie_id: str, description: str) -> None:
    """Implementation async de la modification."""
    store, screen = await _open_catalog(container)
    try:
        navigator = CliNavigator()
        details = DetailsController(store, navigator, _require_movie(screen, movie_id))
        details.edit()

        controller = AddEditController(store, navigator, navigator.movie, navigator.source)
        result = await controller.submit(replace(controller.form, description=description))
        if result is None or not result.ok:
            fail(controller.error_text)

        details.apply_edit_result(controller.result)
        console.print(f"[green]{details.message}[/green]")
        print_details(details)
    finally:
        screen.close()
        store.close()


def delete(
    movie_id: Annotated[str, typer.Argument(help="ID du film (ou prefixe)")],
) -> None:
    """Supprime un film du catalogue."""
    asyncio.run(_delete_async(movie_id))


@with_container()
async def _delete_async(container, movie_id: str) -> None:
    """Implementation async de la suppression."""
    store, screen = await _open_catalog(container)
    try:
        movie = _require_movie(screen, movie_id)
        result = await screen.delete(movie)
        if not result.ok:
            fail(result.message)
        console.print(
            f"[red]Supprime :[/red] {escape(movie.title)} "
            f"([bold]{screen.adapter.item_count}[/bold] film(s) restant(s))"
        )
    finally:
        screen.close()
        store.close()


def favorite(
    movie_id: Annotated[str, typer.Argument(help="ID du film (ou prefixe)")],
) -> None:
    """Ajoute un film aux favoris (copie de la fiche)."""
    asyncio.run(_favorite_async(movie_id))


@with_container()
async def _favorite_async(container, movie_id: str) -> None:
    """Implementation async de l'ajout aux favoris."""
    store, screen = await _open_catalog(container)
    try:
        details = DetailsController(store, CliNavigator(), _require_movie(screen, movie_id))
        result = await details.add_to_favorites()
        if not result.ok:
            fail(result.message)
        console.print(f"[green]{details.message}[/green]")
    finally:
        screen.close()
        store.close()
