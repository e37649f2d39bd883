"""
Affichage Rich des ecrans : table de films et fiche detaillee.
"""

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from movieshelf.adapters.cli.helpers import console, suppress_loguru
from movieshelf.presentation.movie_adapter import MovieListAdapter
from movieshelf.presentation.screens import DetailsController

EMPTY_CATALOG_TEXT = "No movies found"
EMPTY_FAVORITES_TEXT = "No favorite movies yet"


def render_movie_table(adapter: MovieListAdapter, title: str) -> Table:
    """Construit la table des lignes de l'adaptateur."""
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Titre", style="bold")
    table.add_column("Studio")
    table.add_column("Note", justify="right")

    for row in adapter.rows():
        table.add_row(
            escape(row.movie.id), escape(row.title), escape(row.studio), row.rating_text
        )
    return table


def print_movie_list(
    adapter: MovieListAdapter,
    title: str,
    empty_visible: bool,
    empty_text: str = EMPTY_CATALOG_TEXT,
) -> None:
    """Affiche la liste, ou le message de liste vide."""
    with suppress_loguru():
        if empty_visible:
            console.print(f"[yellow]{empty_text}[/yellow]")
            return
        console.print(render_movie_table(adapter, title))
        console.print(f"[bold]{adapter.item_count}[/bold] film(s)")


def render_details(details: DetailsController) -> Panel:
    """Construit le panneau de detail du film courant."""
    movie = details.current_movie
    lines = [
        f"[bold]Studio :[/bold] {escape(movie.studio)}",
        f"[bold]Note :[/bold] {movie.critics_rating}",
        f"[bold]Affiche :[/bold] {escape(movie.image_url) or '-'}",
    ]
    if details.poster.content is not None:
        lines.append(f"[dim]Affiche chargee ({len(details.poster.content)} octets)[/dim]")
    lines.append("")
    lines.append(escape(movie.description) or "[dim]Pas de description[/dim]")
    return Panel(
        "\n".join(lines),
        title=f"[bold]{escape(movie.title)}[/bold]",
        subtitle=escape(movie.id),
    )


def print_details(details: DetailsController) -> None:
    """Affiche la fiche du film courant."""
    with suppress_loguru():
        console.print(render_details(details))
