"""
Interface port pour la base documentaire.

Contrat minimal attendu du stockage distant : des collections nommées dont
les documents sont indexés par une clé opaque attribuée par le backend.
Les implémentations (adaptateurs) fournissent Firestore (REST) et SQLite.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class DocumentStoreError(Exception):
    """
    Erreur remontée par la base documentaire (réseau, permission, etc.).

    Attributes:
        status_code: Code HTTP d'origine si disponible
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class Document:
    """
    Document stocké dans une collection.

    Attributs :
        id : Clé opaque attribuée par le backend
        data : Champs du document
    """

    id: str
    data: dict[str, Any] = field(default_factory=dict)


class IDocumentStore(ABC):
    """
    Interface de la base documentaire.

    Toutes les opérations sont asynchrones et lèvent DocumentStoreError
    en cas d'échec.
    """

    @abstractmethod
    async def list_by_owner(self, collection: str, owner_id: str) -> list[Document]:
        """Liste les documents de la collection dont le propriétaire est owner_id."""
        ...

    @abstractmethod
    async def insert(self, collection: str, data: dict[str, Any]) -> str:
        """Insère un nouveau document et retourne la clé attribuée."""
        ...

    @abstractmethod
    async def replace(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """Remplace intégralement le document document_id."""
        ...

    @abstractmethod
    async def delete(self, collection: str, document_id: str) -> None:
        """Supprime le document document_id. Sans effet s'il n'existe pas."""
        ...
