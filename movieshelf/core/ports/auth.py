"""
Interface port pour le service d'authentification.
"""

from abc import ABC, abstractmethod
from typing import Optional

from movieshelf.core.value_objects.auth import AuthSession


class AuthError(Exception):
    """Echec d'authentification, avec un message lisible par l'utilisateur."""


class IAuthProvider(ABC):
    """
    Interface du fournisseur d'authentification.

    Les implémentations conservent la session courante : après un
    register ou un login réussi, current_owner_id() retourne l'uid du compte.
    """

    @abstractmethod
    async def register(self, email: str, password: str) -> AuthSession:
        """
        Crée un compte et ouvre une session.

        Raises:
            AuthError: Si le backend refuse l'inscription
        """
        ...

    @abstractmethod
    async def login(self, email: str, password: str) -> AuthSession:
        """
        Ouvre une session sur un compte existant.

        Raises:
            AuthError: Si les identifiants sont refusés
        """
        ...

    @abstractmethod
    def logout(self) -> None:
        """Ferme la session courante."""
        ...

    @abstractmethod
    def current_session(self) -> Optional[AuthSession]:
        """Retourne la session courante, ou None si non authentifié."""
        ...

    def current_owner_id(self) -> Optional[str]:
        """Retourne l'uid de l'utilisateur connecté, ou None."""
        session = self.current_session()
        return session.uid if session else None
