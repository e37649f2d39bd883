"""
Tests unitaires de l'entite Movie.

Verifie:
- Egalite et copie structurelles
- Conversion vers/depuis les champs de document
- Tolerance aux notes mal typees
"""

import pytest

from movieshelf.core.entities.movie import OWNER_FIELD, Movie


class TestMovieValue:
    """Tests de la semantique valeur."""

    def test_default_movie_is_not_persisted(self) -> None:
        """Un film construit cote client n'a pas d'id."""
        movie = Movie(title="Alien")
        assert movie.id == ""
        assert movie.is_persisted is False

    def test_structural_equality(self) -> None:
        """Deux films avec les memes champs sont egaux."""
        assert Movie(id="a", title="Alien") == Movie(id="a", title="Alien")
        assert Movie(id="a", title="Alien") != Movie(id="b", title="Alien")

    def test_copy_with_leaves_original_untouched(self, alien: Movie) -> None:
        """copy_with retourne une nouvelle instance."""
        edited = alien.copy_with(description="Nouveau synopsis")
        assert edited.description == "Nouveau synopsis"
        assert alien.description == "In space no one can hear you scream."
        assert edited.title == alien.title

    def test_movie_is_immutable(self, alien: Movie) -> None:
        """Les champs ne peuvent pas etre modifies en place."""
        with pytest.raises(AttributeError):
            alien.title = "Aliens"  # type: ignore[misc]


class TestMovieDocument:
    """Tests de conversion en document."""

    def test_to_document_uses_stored_field_names(self, alien: Movie) -> None:
        """Les cles suivent le format des documents existants, sans id."""
        document = alien.copy_with(id="x", owner_id="alice").to_document()

        assert document == {
            "title": "Alien",
            "studio": "20th Century Fox",
            "description": "In space no one can hear you scream.",
            "imageUrl": "https://example.com/alien.jpg",
            "criticsRating": 8.5,
            OWNER_FIELD: "alice",
        }

    def test_from_document_sets_id_from_key(self) -> None:
        """L'id vient de la cle du document."""
        movie = Movie.from_document(
            "doc42",
            {"title": "Heat", "studio": "Warner", "criticsRating": 8.3, "uid": "bob"},
        )
        assert movie.id == "doc42"
        assert movie.title == "Heat"
        assert movie.owner_id == "bob"
        assert movie.critics_rating == 8.3
        assert movie.description == ""

    def test_from_document_ignores_unknown_fields(self) -> None:
        """Les champs inconnus sont ignores."""
        movie = Movie.from_document("d", {"title": "Heat", "year": 1995})
        assert movie == Movie(id="d", title="Heat")

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (7, 7.0),
            ("6.5", 6.5),
            ("abc", 0.0),
            (None, 0.0),
            (True, 0.0),
        ],
    )
    def test_from_document_rating_coercion(self, raw, expected) -> None:
        """Les notes stockees en entier ou en texte sont converties."""
        movie = Movie.from_document("d", {"criticsRating": raw})
        assert movie.critics_rating == expected
