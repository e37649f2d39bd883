"""
Module de persistance SQLite du backend local.

- database.py : Creation de l'engine SQLite et initialisation des tables
- models.py : Modeles SQLModel (documents, users)

Usage:
    from movieshelf.infrastructure.persistence import create_db_engine, init_db
    engine = create_db_engine("sqlite:///movieshelf.db")
    init_db(engine)
"""

from movieshelf.infrastructure.persistence.database import create_db_engine, init_db
from movieshelf.infrastructure.persistence.models import DocumentModel, UserModel

__all__ = [
    "DocumentModel",
    "UserModel",
    "create_db_engine",
    "init_db",
]
