"""
Fournisseur d'authentification local sur SQLite.

Les comptes sont stockes dans la table `users` avec un mot de passe hache
par werkzeug. Les messages d'erreur reprennent ceux de Firebase
Authentication pour que l'affichage soit identique entre les deux backends.
"""

import asyncio
import uuid
from functools import partial
from typing import Optional

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select
from werkzeug.security import check_password_hash, generate_password_hash

from movieshelf.core.ports.auth import AuthError, IAuthProvider
from movieshelf.core.value_objects.auth import AuthSession
from movieshelf.infrastructure.persistence.models import UserModel
from movieshelf.infrastructure.session_store import SessionStore

EMAIL_IN_USE_MESSAGE = "The email address is already in use by another account."
BAD_EMAIL_MESSAGE = "The email address is badly formatted."
BAD_CREDENTIALS_MESSAGE = "The supplied auth credential is incorrect, malformed or has expired."


class LocalAuthProvider(IAuthProvider):
    """
    Authentification locale (comptes SQLite).

    Example:
        provider = LocalAuthProvider(engine, SessionStore())
        session = await provider.register("me@example.com", "secret42")
        assert provider.current_owner_id() == session.uid
    """

    def __init__(self, engine: Engine, session_store: SessionStore) -> None:
        """
        Initialise le fournisseur.

        Args:
            engine: Engine SQLAlchemy dont les tables sont deja creees
            session_store: Stockage de la session courante
        """
        self._engine = engine
        self._sessions = session_store

    async def register(self, email: str, password: str) -> AuthSession:
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise AuthError(BAD_EMAIL_MESSAGE)
        session = await self._run(self._create_user, email, password)
        self._sessions.save(session)
        return session

    async def login(self, email: str, password: str) -> AuthSession:
        session = await self._run(self._check_credentials, email, password)
        self._sessions.save(session)
        return session

    def logout(self) -> None:
        self._sessions.clear()

    def current_session(self) -> Optional[AuthSession]:
        return self._sessions.load()

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, partial(func, *args))
        except SQLAlchemyError as e:
            logger.error("Erreur SQLite", error=str(e))
            raise AuthError(f"Local database error: {e}") from e

    def _create_user(self, email: str, password: str) -> AuthSession:
        user = UserModel(
            uid=uuid.uuid4().hex,
            email=email.lower(),
            password_hash=generate_password_hash(password),
        )
        with Session(self._engine) as db:
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise AuthError(EMAIL_IN_USE_MESSAGE) from None
            return AuthSession(uid=user.uid, email=user.email)

    def _check_credentials(self, email: str, password: str) -> AuthSession:
        with Session(self._engine) as db:
            statement = select(UserModel).where(UserModel.email == email.lower())
            user = db.exec(statement).first()
            if user is None or not check_password_hash(user.password_hash, password):
                raise AuthError(BAD_CREDENTIALS_MESSAGE)
            return AuthSession(uid=user.uid, email=user.email)
