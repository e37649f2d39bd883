"""
Point d'entrée CLI de MovieShelf.

Configure le logging et fournit les commandes CLI (comptes, catalogue, favoris).
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import (
    add,
    delete,
    edit,
    favorite,
    favorites_app,
    list_movies,
    login,
    logout,
    register,
    show,
    whoami,
)
from .config import Settings
from .container import Container
from .logging_config import configure_logging, verbosity_to_level

app = typer.Typer(
    name="movieshelf",
    help="Catalogue de films et favoris",
)
container = Container()


def _configure_from_settings(settings: Settings, log_level: str) -> None:
    configure_logging(
        log_level=log_level,
        log_file=settings.log_file,
        backend=settings.backend,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """MovieShelf - Catalogue de films personnel."""
    # Sans option, le niveau configure par main() reste en place
    if verbose or quiet:
        settings = get_config()
        _configure_from_settings(
            settings, verbosity_to_level(verbose, quiet, default=settings.log_level)
        )


# Comptes
app.command()(register)
app.command()(login)
app.command()(logout)
app.command()(whoami)

# Catalogue
app.command(name="list")(list_movies)
app.command()(add)
app.command()(show)
app.command()(edit)
app.command()(delete)
app.command()(favorite)

# Favoris
app.add_typer(favorites_app, name="favorites")


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration MovieShelf")
    typer.echo(f"Backend : {config.backend}")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Firebase : {'configuré' if config.firebase_enabled else 'non configuré'}")
    typer.echo(f"Collections : {config.catalog_collection}, {config.favorites_collection}")
    typer.echo(f"Session : {config.session_file}")
    typer.echo(f"Cache affiches : {config.image_cache_dir}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"MovieShelf v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    settings = container.config()
    _configure_from_settings(settings, settings.log_level)

    logger.info("Démarrage de MovieShelf", version=__version__)

    app()


if __name__ == "__main__":
    main()
