"""
Cache persistant des affiches.

Le cache utilise diskcache pour la persistence sur disque, ce qui permet
de conserver les images entre deux lancements de l'application.

TTL par defaut (IMAGE_TTL): 7 jours - une affiche change rarement.
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Optional

from diskcache import Cache


class ImageCache:
    """
    Cache asynchrone d'images indexe par URI.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Example:
        cache = ImageCache(cache_dir=Path(".cache/images"))
        await cache.set("https://example.com/alien.jpg", content)
        data = await cache.get("https://example.com/alien.jpg")
    """

    IMAGE_TTL = 7 * 24 * 60 * 60  # 7 jours en secondes

    def __init__(self, cache_dir: Path | str = ".cache/images") -> None:
        """
        Initialise le cache avec un repertoire de stockage.

        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    async def get(self, uri: str) -> Optional[bytes]:
        """Recupere une image du cache, None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, uri)

    async def set(self, uri: str, content: bytes, ttl: Optional[int] = None) -> None:
        """Stocke une image avec un TTL (IMAGE_TTL par defaut)."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, uri, content, expire=ttl or self.IMAGE_TTL)
        )

    async def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
