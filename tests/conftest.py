"""
Fixtures pytest partagees pour les tests MovieShelf.

Ce module contient les fixtures communes utilisees dans les tests:
- Fakes des ports (IDocumentStore en memoire, IAuthProvider)
- Gateway et store branches sur ces fakes
- Films d'exemple
"""

from typing import Any, Optional

import pytest

from movieshelf.core.entities.movie import OWNER_FIELD, Movie
from movieshelf.core.ports.auth import AuthError, IAuthProvider
from movieshelf.core.ports.document_store import Document, DocumentStoreError, IDocumentStore
from movieshelf.core.value_objects.auth import AuthSession
from movieshelf.services.list_store import MovieListStore
from movieshelf.services.movie_gateway import MovieGateway


class InMemoryDocumentStore(IDocumentStore):
    """
    Base documentaire en memoire.

    Attributes:
        collections: {collection: {document_id: data}}
        calls: Journal des operations (nom, collection)
        fail_with: Si defini, toute operation leve cette DocumentStoreError
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_with: Optional[DocumentStoreError] = None
        self._counter = 0

    def _check(self, operation: str, collection: str) -> dict[str, dict[str, Any]]:
        self.calls.append((operation, collection))
        if self.fail_with is not None:
            raise self.fail_with
        return self.collections.setdefault(collection, {})

    async def list_by_owner(self, collection: str, owner_id: str) -> list[Document]:
        docs = self._check("list", collection)
        return [
            Document(id=doc_id, data=dict(data))
            for doc_id, data in docs.items()
            if data.get(OWNER_FIELD) == owner_id
        ]

    async def insert(self, collection: str, data: dict[str, Any]) -> str:
        docs = self._check("insert", collection)
        self._counter += 1
        doc_id = f"doc{self._counter}"
        docs[doc_id] = dict(data)
        return doc_id

    async def replace(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        docs = self._check("replace", collection)
        docs[document_id] = dict(data)

    async def delete(self, collection: str, document_id: str) -> None:
        docs = self._check("delete", collection)
        docs.pop(document_id, None)


class FakeAuthProvider(IAuthProvider):
    """
    Fournisseur d'authentification en memoire.

    Attributes:
        accounts: {email: (uid, password)}
        session: Session courante (None si deconnecte)
        calls: Nombre d'appels a register/login
    """

    def __init__(self, uid: Optional[str] = None) -> None:
        self.accounts: dict[str, tuple[str, str]] = {}
        self.session: Optional[AuthSession] = (
            AuthSession(uid=uid, email=f"{uid}@example.com") if uid else None
        )
        self.calls = 0

    async def register(self, email: str, password: str) -> AuthSession:
        self.calls += 1
        if email in self.accounts:
            raise AuthError("The email address is already in use by another account.")
        uid = f"uid-{len(self.accounts) + 1}"
        self.accounts[email] = (uid, password)
        self.session = AuthSession(uid=uid, email=email)
        return self.session

    async def login(self, email: str, password: str) -> AuthSession:
        self.calls += 1
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise AuthError("The supplied auth credential is incorrect, malformed or has expired.")
        self.session = AuthSession(uid=account[0], email=email)
        return self.session

    def logout(self) -> None:
        self.session = None

    def current_session(self) -> Optional[AuthSession]:
        return self.session


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    """Base documentaire en memoire, vide."""
    return InMemoryDocumentStore()


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    """Fournisseur d'authentification avec l'utilisateur "alice" connecte."""
    return FakeAuthProvider(uid="alice")


@pytest.fixture
def gateway(document_store: InMemoryDocumentStore, auth_provider: FakeAuthProvider) -> MovieGateway:
    """Gateway branche sur les fakes."""
    return MovieGateway(document_store=document_store, auth=auth_provider)


@pytest.fixture
def list_store(gateway: MovieGateway) -> MovieListStore:
    """Store des listes branche sur le gateway de test."""
    return MovieListStore(gateway)


@pytest.fixture
def alien() -> Movie:
    """Film non persiste (id vide)."""
    return Movie(
        title="Alien",
        studio="20th Century Fox",
        description="In space no one can hear you scream.",
        image_url="https://example.com/alien.jpg",
        critics_rating=8.5,
    )


@pytest.fixture
def heat() -> Movie:
    """Second film non persiste."""
    return Movie(
        title="Heat",
        studio="Warner Bros.",
        description="A group of professional bank robbers.",
        image_url="https://example.com/heat.jpg",
        critics_rating=8.3,
    )
