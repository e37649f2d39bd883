"""
Chargement des affiches : client HTTP et cache disque.
"""

from movieshelf.adapters.images.cache import ImageCache
from movieshelf.adapters.images.http_image_loader import HttpImageLoader

__all__ = [
    "HttpImageLoader",
    "ImageCache",
]
