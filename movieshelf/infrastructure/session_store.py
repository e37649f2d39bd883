"""
Persistance de la session authentifiee dans un fichier JSON.

La CLI execute chaque commande dans un processus distinct : la session
ouverte par `login` est relue par les commandes suivantes jusqu'au `logout`.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from loguru import logger

from movieshelf.core.value_objects.auth import AuthSession


class SessionStore:
    """
    Stockage de la session courante.

    Sans chemin, la session n'est conservee qu'en memoire.

    Example:
        store = SessionStore(Path("~/.movieshelf/session.json").expanduser())
        store.save(AuthSession(uid="abc", email="me@example.com"))
        session = store.load()
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._session: Optional[AuthSession] = None
        self._loaded = False

    def load(self) -> Optional[AuthSession]:
        """Retourne la session courante, relue depuis le fichier au premier appel."""
        if not self._loaded:
            self._session = self._read()
            self._loaded = True
        return self._session

    def save(self, session: AuthSession) -> None:
        """Enregistre la session courante."""
        self._session = session
        self._loaded = True
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(asdict(session)), encoding="utf-8")

    def clear(self) -> None:
        """Supprime la session courante."""
        self._session = None
        self._loaded = True
        if self._path is not None and self._path.exists():
            self._path.unlink()

    def _read(self) -> Optional[AuthSession]:
        if self._path is None or not self._path.exists():
            return None
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
            return AuthSession(**payload)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Fichier de session illisible", path=str(self._path), error=str(e))
            return None
