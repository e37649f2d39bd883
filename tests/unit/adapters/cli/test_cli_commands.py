"""
Tests des commandes CLI sur le backend local.

Chaque test utilise une base SQLite et un fichier de session dans tmp_path
(variables d'environnement MOVIESHELF_*), puis enchaine les commandes comme
un utilisateur.
"""

import re
from pathlib import Path

import pytest
from typer.testing import CliRunner

from movieshelf.adapters.cli.helpers import CliNavigator, find_movie
from movieshelf.core.entities.movie import Movie
from movieshelf.main import app
from movieshelf.presentation.screens import ListSource

runner = CliRunner()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def local_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Configure le backend local dans un repertoire temporaire."""
    monkeypatch.setenv("MOVIESHELF_BACKEND", "local")
    monkeypatch.setenv("MOVIESHELF_DATABASE_URL", f"sqlite:///{tmp_path / 'movieshelf.db'}")
    monkeypatch.setenv("MOVIESHELF_SESSION_FILE", str(tmp_path / "session.json"))
    monkeypatch.setenv("MOVIESHELF_IMAGE_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("MOVIESHELF_LOG_FILE", str(tmp_path / "logs" / "movieshelf.log"))
    return tmp_path


def _register(email: str = "me@example.com", password: str = "secret42"):
    return runner.invoke(app, ["register", email, "--password", password])


def _add(title: str, studio: str = "Fox", description: str = "") -> str:
    """Ajoute un film et retourne son id."""
    result = runner.invoke(
        app,
        [
            "add",
            "--title", title,
            "--studio", studio,
            "--image-url", f"https://example.com/{title.lower()}.jpg",
            "--description", description,
            "--rating", "8.5",
        ],
    )
    assert result.exit_code == 0, result.output
    match = re.search(r"\(([0-9a-f]{20})\)", result.output)
    assert match, result.output
    return match.group(1)


# ============================================================================
# Comptes
# ============================================================================


class TestAccountCommands:
    """Tests de register, login, logout et whoami."""

    def test_register_and_whoami(self) -> None:
        result = _register()
        assert result.exit_code == 0
        assert "me@example.com" in result.output

        whoami = runner.invoke(app, ["whoami"])
        assert whoami.exit_code == 0
        assert "me@example.com" in whoami.output

    def test_register_short_password(self) -> None:
        """Un mot de passe trop court est refuse avec le message attendu."""
        result = _register(password="12345")

        assert result.exit_code == 1
        assert "Password must be at least 6 characters." in result.output

    def test_register_duplicate_email(self) -> None:
        _register()
        result = _register()

        assert result.exit_code == 1
        assert "already in use" in result.output

    def test_logout_then_login(self) -> None:
        _register()
        assert runner.invoke(app, ["logout"]).exit_code == 0
        assert runner.invoke(app, ["whoami"]).exit_code == 1

        result = runner.invoke(app, ["login", "me@example.com", "--password", "secret42"])

        assert result.exit_code == 0
        assert runner.invoke(app, ["whoami"]).exit_code == 0

    def test_login_bad_password(self) -> None:
        _register()
        runner.invoke(app, ["logout"])

        result = runner.invoke(app, ["login", "me@example.com", "--password", "wrong-pass"])

        assert result.exit_code == 1
        assert "incorrect" in result.output


# ============================================================================
# Catalogue
# ============================================================================


class TestCatalogCommands:
    """Tests des commandes du catalogue."""

    def test_list_requires_login(self) -> None:
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "You must be logged in." in result.output

    def test_empty_catalog(self) -> None:
        _register()

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No movies found" in result.output

    def test_add_list_and_search(self) -> None:
        _register()
        _add("Alien", studio="Fox")
        _add("Heat", studio="Warner")

        listing = runner.invoke(app, ["list"])
        assert "Alien" in listing.output and "Heat" in listing.output

        search = runner.invoke(app, ["list", "--search", "warner"])
        assert "Heat" in search.output
        assert "Alien" not in search.output

        nothing = runner.invoke(app, ["list", "--search", "zzz"])
        assert "No movies found" in nothing.output

    def test_add_missing_fields(self) -> None:
        _register()

        result = runner.invoke(app, ["add", "--title", "Alien"])

        assert result.exit_code == 1
        assert "Please fill in all required fields" in result.output

    def test_show_and_edit(self) -> None:
        _register()
        movie_id = _add("Alien", description="Old synopsis")

        shown = runner.invoke(app, ["show", movie_id[:8]])
        assert shown.exit_code == 0
        assert "Old synopsis" in shown.output

        edited = runner.invoke(app, ["edit", movie_id, "--description", "New synopsis"])
        assert edited.exit_code == 0, edited.output
        assert "Movie updated" in edited.output

        shown = runner.invoke(app, ["show", movie_id])
        assert "New synopsis" in shown.output

    def test_edit_requires_description(self) -> None:
        _register()
        movie_id = _add("Alien")

        result = runner.invoke(app, ["edit", movie_id, "--description", "  "])

        assert result.exit_code == 1
        assert "Please enter a description" in result.output

    def test_delete(self) -> None:
        _register()
        movie_id = _add("Alien")

        result = runner.invoke(app, ["delete", movie_id])

        assert result.exit_code == 0
        assert "No movies found" in runner.invoke(app, ["list"]).output

    def test_unknown_movie(self) -> None:
        _register()

        result = runner.invoke(app, ["show", "doesnotexist"])

        assert result.exit_code == 1
        assert "Movie not found" in result.output

    def test_accounts_are_isolated(self) -> None:
        _register("a@example.com")
        _add("Alien")
        _register("b@example.com")

        result = runner.invoke(app, ["list"])

        assert "No movies found" in result.output


# ============================================================================
# Favoris
# ============================================================================


class TestFavoritesCommands:
    """Tests des commandes favorite et favorites."""

    def test_favorite_list_and_delete(self) -> None:
        _register()
        movie_id = _add("Alien")

        added = runner.invoke(app, ["favorite", movie_id])
        assert added.exit_code == 0
        assert "Movie added to favorites" in added.output

        listing = runner.invoke(app, ["favorites", "list"])
        assert "Alien" in listing.output
        favorite_id = re.search(r"([0-9a-f]{20})\W+Alien", listing.output)

        # Le favori est une copie : supprimer le film ne supprime pas le favori
        runner.invoke(app, ["delete", movie_id])
        assert "Alien" in runner.invoke(app, ["favorites", "list"]).output

        assert favorite_id is not None
        removed = runner.invoke(app, ["favorites", "delete", favorite_id.group(1)])
        assert removed.exit_code == 0, removed.output
        assert "No favorite movies yet" in runner.invoke(app, ["favorites", "list"]).output

    def test_favorites_edit_leaves_catalog_untouched(self) -> None:
        """Modifier un favori met a jour le favori, pas le catalogue."""
        _register()
        movie_id = _add("Alien", description="Original synopsis")
        runner.invoke(app, ["favorite", movie_id])
        listing = runner.invoke(app, ["favorites", "list"])
        favorite_id = re.search(r"([0-9a-f]{20})\W+Alien", listing.output).group(1)

        edited = runner.invoke(
            app, ["favorites", "edit", favorite_id, "--description", "Edited synopsis"]
        )

        assert edited.exit_code == 0, edited.output
        assert "Movie updated" in edited.output
        assert "Edited synopsis" in edited.output
        catalog = runner.invoke(app, ["list"]).output
        assert favorite_id not in catalog
        shown = runner.invoke(app, ["show", movie_id]).output
        assert "Original synopsis" in shown
        assert "Edited synopsis" not in shown


# ============================================================================
# Divers
# ============================================================================


class TestMiscCommands:
    """Tests de info, version et des utilitaires."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "MovieShelf v" in result.output

    def test_info_shows_backend(self) -> None:
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "Backend : local" in result.output

    def test_find_movie_by_prefix(self) -> None:
        movies = [Movie(id="abc123"), Movie(id="abd456")]
        assert find_movie(movies, "abc") == movies[0]
        assert find_movie(movies, "ab") is None
        assert find_movie(movies, "abd456") == movies[1]

    def test_cli_navigator_records_destination(self) -> None:
        navigator = CliNavigator()
        navigator.open_edit(Movie(id="x"))
        assert navigator.destination == "edit"
        assert navigator.movie == Movie(id="x")

    def test_cli_navigator_records_source(self) -> None:
        navigator = CliNavigator()
        navigator.open_details(Movie(id="x"), ListSource.FAVORITES)
        assert navigator.source is ListSource.FAVORITES
        navigator.open_add()
        assert navigator.source is ListSource.CATALOG
