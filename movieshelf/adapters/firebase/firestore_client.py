"""
Client Cloud Firestore (API REST v1).

Implemente IDocumentStore :
- list_by_owner : documents:runQuery avec un filtre EQUAL sur le champ proprietaire
- insert : POST sur la collection (cle generee par Firestore)
- replace : PATCH sans updateMask (remplacement complet, creation si absent)
- delete : DELETE du document (sans effet s'il n'existe pas)

Les requetes portent le jeton de la session Firebase ; un 401 declenche
un renouvellement du jeton puis une seconde tentative.

Usage:
    store = FirestoreDocumentStore(project_id="my-project", auth=auth_client)
    documents = await store.list_by_owner("movies", "uid123")
    await store.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from movieshelf.adapters.firebase.auth_client import FirebaseAuthClient
from movieshelf.adapters.firebase.retry import (
    TransientBackendError,
    error_message,
    request_with_retry,
)
from movieshelf.adapters.firebase.values import (
    decode_fields,
    document_id_from_name,
    encode_fields,
    encode_value,
)
from movieshelf.core.entities.movie import OWNER_FIELD
from movieshelf.core.ports.document_store import Document, DocumentStoreError, IDocumentStore


class FirestoreDocumentStore(IDocumentStore):
    """
    Base documentaire Cloud Firestore.

    Attributes:
        FIRESTORE_BASE_URL: URL de base de l'API Firestore v1
    """

    FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"

    def __init__(
        self,
        project_id: Optional[str],
        auth: FirebaseAuthClient,
        owner_field: str = OWNER_FIELD,
        timeout: float = 30.0,
        max_attempts: int = 5,
    ) -> None:
        """
        Initialise le client.

        Args:
            project_id: Identifiant du projet Firebase
            auth: Client d'authentification fournissant le jeton d'acces
            owner_field: Champ filtre par list_by_owner
            timeout: Timeout des requetes en secondes
            max_attempts: Nombre maximum de tentatives sur 429/503
        """
        self._project_id = project_id
        self._auth = auth
        self._owner_field = owner_field
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def documents_url(self) -> str:
        """URL racine des documents de la base (default)."""
        return (
            f"{self.FIRESTORE_BASE_URL}/projects/{self._project_id}"
            "/databases/(default)/documents"
        )

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        return self._client

    # ------------------------------------------------------------------
    # IDocumentStore
    # ------------------------------------------------------------------

    async def list_by_owner(self, collection: str, owner_id: str) -> list[Document]:
        query = {
            "structuredQuery": {
                "from": [{"collectionId": collection}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": self._owner_field},
                        "op": "EQUAL",
                        "value": encode_value(owner_id),
                    }
                },
            }
        }
        response = await self._request("POST", f"{self.documents_url}:runQuery", json=query)
        self._raise_for_error(response, "list", collection)

        documents = []
        for item in response.json():
            raw = item.get("document")
            if raw is None:
                # Element sans document : seulement readTime (resultat vide)
                continue
            documents.append(
                Document(
                    id=document_id_from_name(raw["name"]),
                    data=decode_fields(raw.get("fields", {})),
                )
            )
        logger.debug("Documents recuperes", collection=collection, count=len(documents))
        return documents

    async def insert(self, collection: str, data: dict[str, Any]) -> str:
        response = await self._request(
            "POST",
            f"{self.documents_url}/{collection}",
            json={"fields": encode_fields(data)},
        )
        self._raise_for_error(response, "insert", collection)
        return document_id_from_name(response.json()["name"])

    async def replace(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        response = await self._request(
            "PATCH",
            f"{self.documents_url}/{collection}/{document_id}",
            json={"fields": encode_fields(data)},
        )
        self._raise_for_error(response, "replace", collection)

    async def delete(self, collection: str, document_id: str) -> None:
        response = await self._request(
            "DELETE", f"{self.documents_url}/{collection}/{document_id}"
        )
        if response.status_code == 404:
            return
        self._raise_for_error(response, "delete", collection)

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Execute une requete authentifiee, avec un renouvellement du jeton sur 401."""
        if not self._project_id:
            raise DocumentStoreError("Firebase project id is not configured.")

        session = self._auth.current_session()
        token = session.id_token if session else ""
        response = await self._send(method, url, token, **kwargs)

        if response.status_code == 401:
            renewed = await self._auth.refresh_id_token()
            if renewed is not None:
                response = await self._send(method, url, renewed.id_token, **kwargs)
        return response

    async def _send(self, method: str, url: str, token: str, **kwargs) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            return await request_with_retry(
                self._get_client(),
                method,
                url,
                max_attempts=self._max_attempts,
                headers=headers,
                **kwargs,
            )
        except TransientBackendError as e:
            raise DocumentStoreError(str(e), status_code=e.status_code) from e
        except httpx.HTTPError as e:
            logger.error("Erreur reseau Firestore", url=url, error=str(e))
            raise DocumentStoreError(f"Network error: {e}") from e

    @staticmethod
    def _raise_for_error(response: httpx.Response, operation: str, collection: str) -> None:
        if response.is_success:
            return
        message = error_message(response)
        logger.debug(
            "Refus Firestore",
            operation=operation,
            collection=collection,
            status=response.status_code,
        )
        raise DocumentStoreError(message, status_code=response.status_code)

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
