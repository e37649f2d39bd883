"""Sous-package CLI commands - re-exporte les commandes publiques."""

from movieshelf.adapters.cli.commands.auth_commands import (
    login,
    logout,
    register,
    whoami,
)
from movieshelf.adapters.cli.commands.catalog_commands import (
    add,
    delete,
    edit,
    favorite,
    list_movies,
    show,
)
from movieshelf.adapters.cli.commands.favorites_commands import (
    favorites_app,
    favorites_delete,
    favorites_list,
)

__all__ = [
    # Authentification
    "login",
    "logout",
    "register",
    "whoami",
    # Catalogue
    "add",
    "delete",
    "edit",
    "favorite",
    "list_movies",
    "show",
    # Favoris
    "favorites_app",
    "favorites_delete",
    "favorites_list",
]
