"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe MOVIESHELF_,
et peut optionnellement être fournie via un fichier .env.

Deux backends sont disponibles :
- local : base SQLite (documents + comptes), aucune clé requise
- firebase : Firebase Authentication + Cloud Firestore via leurs API REST
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de movieshelf/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MOVIESHELF_.
    Exemple : MOVIESHELF_BACKEND=firebase

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVIESHELF_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Backend
    backend: Literal["local", "firebase"] = Field(default="local")

    # Base locale
    database_url: str = Field(default="sqlite:///movieshelf.db")

    # Firebase (requis uniquement pour backend=firebase)
    firebase_api_key: Optional[str] = Field(default=None)
    firebase_project_id: Optional[str] = Field(default=None)

    # Collections
    catalog_collection: str = Field(default="movies")
    favorites_collection: str = Field(default="favorites")

    # Session et cache
    session_file: Path = Field(default=Path("~/.movieshelf/session.json"))
    image_cache_dir: Path = Field(default=Path("~/.movieshelf/cache/images"))

    # Réseau
    request_timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=5, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="WARNING")
    log_file: Path = Field(default=Path("logs/movieshelf.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("session_file", "image_cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def firebase_enabled(self) -> bool:
        """Vérifie si Firebase est configuré (clé API et projet)."""
        return bool(self.firebase_api_key and self.firebase_project_id)
