"""
Entité film.

Représente une fiche du catalogue personnel. La même forme est utilisée
pour la collection des favoris : ajouter un favori copie la fiche dans la
seconde collection, il n'y a pas de référence vers l'original.
"""

from dataclasses import dataclass, replace
from typing import Any, Mapping

# Nom du champ propriétaire dans les documents (compatible avec les
# documents déjà créés par le client mobile)
OWNER_FIELD = "uid"


@dataclass(frozen=True)
class Movie:
    """
    Fiche de film d'un utilisateur.

    Objet valeur sans comportement : égalité et copie structurelles.
    Une instance construite côté client a un id vide tant que le backend
    ne l'a pas persistée.

    Attributs :
        id : Identifiant du document (vide avant création)
        title : Titre du film
        studio : Studio ou société de production
        description : Synopsis libre
        image_url : URI de l'affiche
        critics_rating : Note de la critique
        owner_id : Identifiant de l'utilisateur propriétaire
    """

    id: str = ""
    title: str = ""
    studio: str = ""
    description: str = ""
    image_url: str = ""
    critics_rating: float = 0.0
    owner_id: str = ""

    @property
    def is_persisted(self) -> bool:
        """Vérifie si le film a reçu un id du backend."""
        return bool(self.id)

    def copy_with(self, **changes: Any) -> "Movie":
        """
        Retourne une copie avec certains champs remplacés.

        Exemple:
            edited = movie.copy_with(description="Nouveau synopsis")
        """
        return replace(self, **changes)

    def to_document(self) -> dict[str, Any]:
        """
        Convertit le film en champs de document.

        L'id n'est pas inclus : c'est la clé du document qui fait foi.
        """
        return {
            "title": self.title,
            "studio": self.studio,
            "description": self.description,
            "imageUrl": self.image_url,
            "criticsRating": float(self.critics_rating),
            OWNER_FIELD: self.owner_id,
        }

    @classmethod
    def from_document(cls, document_id: str, data: Mapping[str, Any]) -> "Movie":
        """
        Construit un film depuis un document stocké.

        Les champs inconnus sont ignorés, les champs absents prennent
        leur valeur par défaut.

        Args:
            document_id: Clé du document dans sa collection
            data: Champs du document

        Returns:
            Le Movie correspondant, avec id = document_id
        """
        return cls(
            id=document_id,
            title=str(data.get("title") or ""),
            studio=str(data.get("studio") or ""),
            description=str(data.get("description") or ""),
            image_url=str(data.get("imageUrl") or ""),
            critics_rating=_to_rating(data.get("criticsRating")),
            owner_id=str(data.get(OWNER_FIELD) or ""),
        )


def _to_rating(value: Any) -> float:
    """Convertit une note stockée (float, int ou texte) en float, 0.0 sinon."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
