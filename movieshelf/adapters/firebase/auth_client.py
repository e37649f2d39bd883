"""
Client Firebase Authentication (API REST Identity Toolkit).

Implemente IAuthProvider avec les endpoints email/mot de passe :
- accounts:signUp pour l'inscription
- accounts:signInWithPassword pour la connexion

Les codes d'erreur Firebase sont traduits en messages lisibles,
identiques a ceux du SDK mobile.

Usage:
    client = FirebaseAuthClient(api_key="AIza...", session_store=SessionStore(path))
    session = await client.login("me@example.com", "secret42")
    await client.close()
"""

from typing import Optional

import httpx
from loguru import logger

from movieshelf.adapters.firebase.retry import (
    TransientBackendError,
    error_message,
    request_with_retry,
)
from movieshelf.core.ports.auth import AuthError, IAuthProvider
from movieshelf.core.value_objects.auth import AuthSession
from movieshelf.infrastructure.session_store import SessionStore

# Codes d'erreur Identity Toolkit -> messages affiches
FIREBASE_AUTH_MESSAGES = {
    "EMAIL_EXISTS": "The email address is already in use by another account.",
    "INVALID_EMAIL": "The email address is badly formatted.",
    "MISSING_EMAIL": "The email address is badly formatted.",
    "MISSING_PASSWORD": "The given password is invalid.",
    "WEAK_PASSWORD": "The given password is invalid. [ Password should be at least 6 characters ]",
    "EMAIL_NOT_FOUND": "There is no user record corresponding to this identifier. The user may have been deleted.",
    "INVALID_PASSWORD": "The password is invalid or the user does not have a password.",
    "INVALID_LOGIN_CREDENTIALS": "The supplied auth credential is incorrect, malformed or has expired.",
    "USER_DISABLED": "The user account has been disabled by an administrator.",
    "OPERATION_NOT_ALLOWED": "This operation is not allowed. Enable email/password sign-in in the Firebase console.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "We have blocked all requests from this device due to unusual activity. Try again later.",
}


def translate_auth_error(code: str) -> str:
    """
    Traduit un code d'erreur Firebase en message lisible.

    Les codes peuvent porter un detail apres le code
    (ex: "WEAK_PASSWORD : Password should be at least 6 characters").
    """
    key = code.split(" ", 1)[0].strip()
    return FIREBASE_AUTH_MESSAGES.get(key, code)


class FirebaseAuthClient(IAuthProvider):
    """
    Client d'authentification Firebase.

    Attributes:
        IDENTITY_BASE_URL: URL de base de l'API Identity Toolkit v1
        SECURE_TOKEN_URL: Endpoint de renouvellement des jetons
    """

    IDENTITY_BASE_URL = "https://identitytoolkit.googleapis.com/v1"
    SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1/token"

    def __init__(
        self,
        api_key: Optional[str],
        session_store: SessionStore,
        timeout: float = 30.0,
        max_attempts: int = 5,
    ) -> None:
        """
        Initialise le client.

        Args:
            api_key: Cle API Web du projet Firebase
            session_store: Stockage de la session courante
            timeout: Timeout des requetes en secondes
            max_attempts: Nombre maximum de tentatives sur 429/503
        """
        self._api_key = api_key
        self._sessions = session_store
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.IDENTITY_BASE_URL,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        return self._client

    async def register(self, email: str, password: str) -> AuthSession:
        return await self._authenticate("accounts:signUp", email, password)

    async def login(self, email: str, password: str) -> AuthSession:
        return await self._authenticate("accounts:signInWithPassword", email, password)

    def logout(self) -> None:
        self._sessions.clear()

    def current_session(self) -> Optional[AuthSession]:
        return self._sessions.load()

    async def _authenticate(self, endpoint: str, email: str, password: str) -> AuthSession:
        """Appelle un endpoint email/mot de passe et enregistre la session."""
        if not self._api_key:
            raise AuthError("Firebase API key is not configured.")

        payload = {"email": email, "password": password, "returnSecureToken": True}
        try:
            response = await request_with_retry(
                self._get_client(),
                "POST",
                f"/{endpoint}",
                max_attempts=self._max_attempts,
                params={"key": self._api_key},
                json=payload,
            )
        except TransientBackendError as e:
            raise AuthError(translate_auth_error("TOO_MANY_ATTEMPTS_TRY_LATER")) from e
        except httpx.HTTPError as e:
            logger.error("Erreur reseau Firebase Auth", endpoint=endpoint, error=str(e))
            raise AuthError("A network error has occurred. Check your connection.") from e

        if response.status_code != 200:
            code = error_message(response)
            logger.debug("Refus Firebase Auth", endpoint=endpoint, code=code)
            raise AuthError(translate_auth_error(code))

        data = response.json()
        session = AuthSession(
            uid=data["localId"],
            email=data.get("email", email),
            id_token=data.get("idToken", ""),
            refresh_token=data.get("refreshToken", ""),
        )
        self._sessions.save(session)
        return session

    async def refresh_id_token(self) -> Optional[AuthSession]:
        """
        Renouvelle le jeton d'acces expire a partir du refresh token.

        Returns:
            La session mise a jour, ou None si aucune session ne peut etre renouvelee
        """
        session = self._sessions.load()
        if session is None or not session.refresh_token or not self._api_key:
            return None

        try:
            response = await request_with_retry(
                self._get_client(),
                "POST",
                self.SECURE_TOKEN_URL,
                max_attempts=self._max_attempts,
                params={"key": self._api_key},
                data={"grant_type": "refresh_token", "refresh_token": session.refresh_token},
            )
        except (TransientBackendError, httpx.HTTPError) as e:
            logger.warning("Renouvellement du jeton impossible", error=str(e))
            return None

        if response.status_code != 200:
            logger.warning("Refresh token refuse", code=error_message(response))
            return None

        data = response.json()
        renewed = AuthSession(
            uid=data.get("user_id", session.uid),
            email=session.email,
            id_token=data.get("id_token", ""),
            refresh_token=data.get("refresh_token", session.refresh_token),
        )
        self._sessions.save(renewed)
        logger.debug("Jeton renouvele", uid=renewed.uid)
        return renewed

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
