"""
Commandes CLI des favoris (favorites list/edit/delete).
"""

import asyncio
from dataclasses import replace
from typing import Annotated

import typer
from rich.markup import escape

from movieshelf.adapters.cli.display import (
    EMPTY_FAVORITES_TEXT,
    print_details,
    print_movie_list,
)
from movieshelf.adapters.cli.helpers import (
    CliNavigator,
    console,
    fail,
    find_movie,
    with_container,
)
from movieshelf.presentation.screens import (
    AddEditController,
    DetailsController,
    FavoritesScreen,
)


# Application Typer pour les commandes favorites
favorites_app = typer.Typer(
    name="favorites",
    help="Commandes de gestion des favoris",
    rich_markup_mode="rich",
)


@favorites_app.command("list")
def favorites_list() -> None:
    """Affiche les favoris du compte connecte."""
    asyncio.run(_favorites_list_async())


@with_container()
async def _favorites_list_async(container) -> None:
    store = container.list_store()
    screen = FavoritesScreen(store, CliNavigator())
    try:
        result = await screen.on_resume()
        if not result.ok:
            fail(result.message)
        print_movie_list(
            screen.adapter, "Favoris", screen.empty_visible, EMPTY_FAVORITES_TEXT
        )
    finally:
        screen.close()
        store.close()


@favorites_app.command("delete")
def favorites_delete(
    favorite_id: Annotated[str, typer.Argument(help="ID du favori (ou prefixe)")],
) -> None:
    """Retire un film des favoris."""
    asyncio.run(_favorites_delete_async(favorite_id))


@with_container()
async def _favorites_delete_async(container, favorite_id: str) -> None:
    store = container.list_store()
    screen = FavoritesScreen(store, CliNavigator())
    try:
        result = await screen.on_resume()
        if not result.ok:
            fail(result.message)
        movie = find_movie(screen.movies, favorite_id)
        if movie is None:
            fail(f"Favorite not found: {favorite_id}")
        deleted = await screen.delete(movie)
        if not deleted.ok:
            fail(deleted.message)
        console.print(f"[red]Retire des favoris :[/red] {escape(movie.title)}")
    finally:
        screen.close()
        store.close()


@favorites_app.command("edit")
def favorites_edit(
    favorite_id: Annotated[str, typer.Argument(help="ID du favori (ou prefixe)")],
    description: Annotated[
        str, typer.Option("--description", "-d", prompt=True, help="Nouvelle description")
    ],
) -> None:
    """Modifie la description d'un favori, sans toucher au catalogue."""
    asyncio.run(_favorites_edit_async(favorite_id, description))


@with_container()
async def _favorites_edit_async(container, favorite_id: str, description: str) -> None:
    store = container.list_store()
    navigator = CliNavigator()
    screen = FavoritesScreen(store, navigator)
    try:
        result = await screen.on_resume()
        if not result.ok:
            fail(result.message)
        movie = find_movie(screen.adapter.movies, favorite_id)
        if movie is None:
            fail(f"Favorite not found: {favorite_id}")

        # Meme chemin que l'action modifier d'une ligne
        screen.adapter.trigger_edit(screen.adapter.movies.index(movie))
        details = DetailsController(store, navigator, navigator.movie, source=navigator.source)
        details.edit()

        controller = AddEditController(store, navigator, navigator.movie, navigator.source)
        saved = await controller.submit(replace(controller.form, description=description))
        if saved is None or not saved.ok:
            fail(controller.error_text)

        details.apply_edit_result(controller.result)
        console.print(f"[green]{details.message}[/green]")
        print_details(details)
    finally:
        screen.close()
        store.close()
