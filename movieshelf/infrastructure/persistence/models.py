"""
Modeles SQLModel du backend local.

Tables:
- documents: Documents des collections (catalogue, favoris), champs en JSON
- users: Comptes avec mot de passe hache

Le proprietaire est recopie dans une colonne indexee pour le filtrage,
le document complet restant dans data_json.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Field, Index, SQLModel


def utc_now() -> datetime:
    """Horodatage UTC avec fuseau (les colonnes datetime refusent les valeurs naives)."""
    return datetime.now(timezone.utc)


class DocumentModel(SQLModel, table=True):
    """Document d'une collection."""

    __tablename__ = "documents"
    __table_args__ = (Index("ix_documents_collection_owner", "collection", "owner_id"),)

    id: str = Field(primary_key=True)
    collection: str = Field(primary_key=True)
    owner_id: str = Field(default="")
    data_json: str = Field(default="{}")
    created_at: datetime | None = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default_factory=utc_now)

    @property
    def data(self) -> dict[str, Any]:
        """Retourne les champs deserialises."""
        return json.loads(self.data_json) if self.data_json else {}


class UserModel(SQLModel, table=True):
    """Compte utilisateur du backend local."""

    __tablename__ = "users"

    uid: str = Field(primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    created_at: datetime | None = Field(default_factory=utc_now)
