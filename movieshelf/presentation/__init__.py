"""
Couche presentation : adaptateur de liste et controleurs d'ecran.
"""

from movieshelf.presentation.movie_adapter import (
    ImageSlot,
    MovieListAdapter,
    MovieRow,
    filter_movies,
)
from movieshelf.presentation.screens import (
    AddEditController,
    CatalogScreen,
    DetailsController,
    FavoritesScreen,
    ListSource,
    LoginController,
    MovieForm,
    Navigator,
    RegisterController,
)

__all__ = [
    "AddEditController",
    "CatalogScreen",
    "DetailsController",
    "FavoritesScreen",
    "ImageSlot",
    "ListSource",
    "LoginController",
    "MovieForm",
    "MovieListAdapter",
    "MovieRow",
    "Navigator",
    "RegisterController",
    "filter_movies",
]
