"""
Service d'authentification.

Enveloppe le fournisseur d'authentification et convertit ses erreurs en
AuthResult (succes + message lisible). La politique de mot de passe locale
est verifiee par le controleur d'inscription avant tout appel au backend.
"""

from typing import Optional

from loguru import logger

from movieshelf.core.ports.auth import AuthError, IAuthProvider
from movieshelf.core.value_objects.auth import AuthResult

# Longueur minimale du mot de passe (le backend peut etre plus strict)
MIN_PASSWORD_LENGTH = 6
PASSWORD_TOO_SHORT_MESSAGE = (
    f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
)


class AuthService:
    """
    Service d'inscription et de connexion.

    Example:
        service = AuthService(provider)
        result = await service.login("me@example.com", "secret42")
        if not result.success:
            print(result.error_message)
    """

    def __init__(self, provider: IAuthProvider) -> None:
        self._provider = provider

    @staticmethod
    def validate_password(password: str) -> Optional[str]:
        """
        Verifie la politique de mot de passe locale.

        Returns:
            Le message d'erreur a afficher, ou None si le mot de passe est accepte
        """
        if len(password) < MIN_PASSWORD_LENGTH:
            return PASSWORD_TOO_SHORT_MESSAGE
        return None

    async def register(self, email: str, password: str) -> AuthResult:
        """Cree un compte. Les identifiants sont transmis tels quels."""
        try:
            await self._provider.register(email, password)
        except AuthError as e:
            message = str(e) or "Registration failed."
            logger.error(f"Registration error: {message}")
            return AuthResult(success=False, error_message=message)
        logger.info("Compte cree", email=email)
        return AuthResult(success=True)

    async def login(self, email: str, password: str) -> AuthResult:
        """Ouvre une session. Les identifiants sont transmis tels quels."""
        try:
            await self._provider.login(email, password)
        except AuthError as e:
            message = str(e) or "Login failed."
            logger.error(f"Login error: {message}")
            return AuthResult(success=False, error_message=message)
        logger.info("Connexion reussie", email=email)
        return AuthResult(success=True)

    def logout(self) -> None:
        """Ferme la session courante."""
        self._provider.logout()

    def current_owner_id(self) -> Optional[str]:
        """Retourne l'uid de l'utilisateur connecte, ou None."""
        return self._provider.current_owner_id()

    def current_email(self) -> Optional[str]:
        """Retourne l'email de l'utilisateur connecte, ou None."""
        session = self._provider.current_session()
        return session.email if session else None
