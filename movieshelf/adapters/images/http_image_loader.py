"""
Chargeur d'affiches HTTP.

Implemente IImageLoader : cache d'abord, puis telechargement via httpx.
Tout echec (URI invalide, reseau, statut HTTP, contenu non image) retourne
None ; l'emplacement de l'affiche reste alors vide. Pas de retry.
"""

from typing import Optional

import httpx
from loguru import logger

from movieshelf.adapters.images.cache import ImageCache
from movieshelf.core.ports.image_loader import IImageLoader


class HttpImageLoader(IImageLoader):
    """
    Chargeur d'images avec cache disque.

    Example:
        loader = HttpImageLoader(cache=ImageCache(".cache/images"))
        content = await loader.load("https://example.com/alien.jpg")
        await loader.close()
    """

    def __init__(self, cache: Optional[ImageCache] = None, timeout: float = 30.0) -> None:
        """
        Initialise le chargeur.

        Args:
            cache: Cache des images (optionnel)
            timeout: Timeout des telechargements en secondes
        """
        self._cache = cache
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client

    async def load(self, uri: str) -> Optional[bytes]:
        if not uri.startswith(("http://", "https://")):
            logger.debug("URI d'affiche ignoree", uri=uri)
            return None

        # CACHE-FIRST
        if self._cache is not None:
            cached = await self._cache.get(uri)
            if cached is not None:
                return cached

        try:
            response = await self._get_client().get(uri)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug("Affiche indisponible", uri=uri, error=str(e))
            return None

        content_type = response.headers.get("Content-Type", "")
        if content_type and not content_type.startswith("image/"):
            logger.debug("Contenu non image", uri=uri, content_type=content_type)
            return None

        content = response.content
        if self._cache is not None:
            await self._cache.set(uri, content)
        return content

    async def close(self) -> None:
        """Ferme le client HTTP et le cache."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        if self._cache is not None:
            self._cache.close()
