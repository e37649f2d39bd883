"""
Couche application : gateway, store observable et authentification.

- MovieGateway : Operations du catalogue et des favoris sur la base documentaire
- MovieListStore : Listes observables rafraichies depuis le gateway
- AuthService : Inscription, connexion et politique de mot de passe
"""

from movieshelf.services.auth_service import AuthService
from movieshelf.services.list_store import MovieListStore, ObservableValue
from movieshelf.services.movie_gateway import MovieGateway

__all__ = [
    "AuthService",
    "MovieGateway",
    "MovieListStore",
    "ObservableValue",
]
