"""
Interface port pour le chargement des images (affiches).
"""

from abc import ABC, abstractmethod
from typing import Optional


class IImageLoader(ABC):
    """
    Charge une image distante, avec une politique de cache propre à l'implémentation.

    Un échec ne lève pas d'exception : l'appelant laisse simplement
    l'emplacement de l'image vide.
    """

    @abstractmethod
    async def load(self, uri: str) -> Optional[bytes]:
        """Retourne le contenu de l'image, ou None si indisponible."""
        ...
