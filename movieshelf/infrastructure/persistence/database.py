"""
Configuration de la base de donnees SQLite du backend local.

Ce module fournit :
- Creation de l'engine SQLite avec configuration multi-thread
- Fonction d'initialisation des tables

L'URL est configuree via MOVIESHELF_DATABASE_URL (defaut: sqlite:///movieshelf.db).
"""

from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine


def create_db_engine(database_url: str) -> Engine:
    """
    Cree l'engine SQLAlchemy pour l'URL donnee.

    Cree le repertoire parent si l'URL designe un fichier SQLite. Une base
    en memoire partage une connexion unique entre les threads.
    """
    if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
        db_path = Path(database_url.replace("sqlite:///", ""))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    if ":memory:" in database_url:
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


def init_db(engine: Engine) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Importe les modeles pour enregistrer leurs metadonnees dans
    SQLModel.metadata, puis cree les tables si elles n'existent pas.
    """
    # L'import est fait ici pour eviter les imports circulaires
    from movieshelf.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
