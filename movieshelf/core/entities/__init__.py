"""
Entités métier représentant les concepts du domaine.

Exports:
- Movie: Fiche de film du catalogue (ou copie dans les favoris)
- OWNER_FIELD: Nom du champ propriétaire dans les documents stockés
"""

from movieshelf.core.entities.movie import OWNER_FIELD, Movie

__all__ = [
    "Movie",
    "OWNER_FIELD",
]
