"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

- IDocumentStore : Base documentaire (collections filtrables par propriétaire)
- IAuthProvider : Inscription, connexion et session courante
- IImageLoader : Chargement asynchrone des affiches
"""

from movieshelf.core.ports.auth import AuthError, IAuthProvider
from movieshelf.core.ports.document_store import (
    Document,
    DocumentStoreError,
    IDocumentStore,
)
from movieshelf.core.ports.image_loader import IImageLoader

__all__ = [
    # Authentification
    "AuthError",
    "IAuthProvider",
    # Base documentaire
    "Document",
    "DocumentStoreError",
    "IDocumentStore",
    # Images
    "IImageLoader",
]
