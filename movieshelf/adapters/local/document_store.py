"""
Base documentaire locale sur SQLite.

Implemente IDocumentStore avec la table `documents` (SQLModel). Les
operations SQL sont synchrones et executees via run_in_executor pour ne
pas bloquer la boucle asyncio.
"""

import asyncio
import json
import uuid
from datetime import datetime, timezone
from functools import partial
from typing import Any

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from movieshelf.core.entities.movie import OWNER_FIELD
from movieshelf.core.ports.document_store import Document, DocumentStoreError, IDocumentStore
from movieshelf.infrastructure.persistence.models import DocumentModel


class SQLiteDocumentStore(IDocumentStore):
    """
    Base documentaire SQLite.

    Les cles sont des UUID hexadecimaux (20 caracteres, comme les cles
    auto-generees de Firestore).

    Example:
        engine = create_db_engine("sqlite:///movieshelf.db")
        init_db(engine)
        store = SQLiteDocumentStore(engine)
        doc_id = await store.insert("movies", {"title": "Alien", "uid": "u1"})
    """

    def __init__(self, engine: Engine) -> None:
        """
        Initialise la base documentaire.

        Args:
            engine: Engine SQLAlchemy dont les tables sont deja creees
        """
        self._engine = engine

    async def list_by_owner(self, collection: str, owner_id: str) -> list[Document]:
        return await self._run(self._list_by_owner, collection, owner_id)

    async def insert(self, collection: str, data: dict[str, Any]) -> str:
        return await self._run(self._insert, collection, data)

    async def replace(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        await self._run(self._replace, collection, document_id, data)

    async def delete(self, collection: str, document_id: str) -> None:
        await self._run(self._delete, collection, document_id)

    async def _run(self, func, *args):
        """Execute une operation synchrone dans l'executor par defaut."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, partial(func, *args))
        except SQLAlchemyError as e:
            logger.error("Erreur SQLite", error=str(e))
            raise DocumentStoreError(f"Local database error: {e}") from e

    # ------------------------------------------------------------------
    # Operations synchrones
    # ------------------------------------------------------------------

    def _list_by_owner(self, collection: str, owner_id: str) -> list[Document]:
        with Session(self._engine) as session:
            statement = (
                select(DocumentModel)
                .where(DocumentModel.collection == collection)
                .where(DocumentModel.owner_id == owner_id)
                .order_by(DocumentModel.created_at)
            )
            models = session.exec(statement).all()
            return [Document(id=model.id, data=model.data) for model in models]

    def _insert(self, collection: str, data: dict[str, Any]) -> str:
        document_id = uuid.uuid4().hex[:20]
        model = DocumentModel(
            id=document_id,
            collection=collection,
            owner_id=str(data.get(OWNER_FIELD) or ""),
        )
        model.data_json = json.dumps(data)
        with Session(self._engine) as session:
            session.add(model)
            session.commit()
        logger.debug("Document insere", collection=collection, document_id=document_id)
        return document_id

    def _replace(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        with Session(self._engine) as session:
            model = self._get(session, collection, document_id)
            if model is None:
                # Meme semantique que Firestore : un set cree le document absent
                model = DocumentModel(id=document_id, collection=collection)
            model.owner_id = str(data.get(OWNER_FIELD) or "")
            model.data_json = json.dumps(data)
            model.updated_at = datetime.now(timezone.utc)
            session.add(model)
            session.commit()

    def _delete(self, collection: str, document_id: str) -> None:
        with Session(self._engine) as session:
            model = self._get(session, collection, document_id)
            if model is None:
                return
            session.delete(model)
            session.commit()

    @staticmethod
    def _get(session: Session, collection: str, document_id: str) -> DocumentModel | None:
        statement = (
            select(DocumentModel)
            .where(DocumentModel.collection == collection)
            .where(DocumentModel.id == document_id)
        )
        return session.exec(statement).first()
