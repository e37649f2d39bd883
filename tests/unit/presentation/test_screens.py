"""
Tests unitaires des controleurs d'ecran.

Verifie:
- Connexion / inscription : messages d'erreur et navigation
- Catalogue : recherche locale, indicateur de liste vide, suppression
- Detail : ajout aux favoris, prise en compte d'une modification
- Formulaire : validation, ajout, modification de la description seule
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from movieshelf.core.entities.movie import Movie
from movieshelf.core.ports.image_loader import IImageLoader
from movieshelf.presentation.screens import (
    DESCRIPTION_REQUIRED_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    AddEditController,
    CatalogScreen,
    DetailsController,
    FavoritesScreen,
    ListSource,
    LoginController,
    MovieForm,
    Navigator,
    RegisterController,
    _MovieListScreen,
    parse_rating,
)
from movieshelf.services.auth_service import PASSWORD_TOO_SHORT_MESSAGE, AuthService


@pytest.fixture
def navigator() -> MagicMock:
    return MagicMock(spec=Navigator)


@pytest.fixture
def auth_service(auth_provider) -> AuthService:
    return AuthService(auth_provider)


# ============================================================================
# Authentification
# ============================================================================


class TestRegisterController:
    """Tests de l'ecran d'inscription."""

    @pytest.mark.asyncio
    async def test_short_password_shows_message_without_backend_call(
        self, auth_service, auth_provider, navigator
    ) -> None:
        """Un mot de passe trop court affiche le message et n'appelle pas le backend."""
        controller = RegisterController(auth_service, navigator)

        result = await controller.submit("me@example.com", "12345")

        assert result.success is False
        assert controller.error_text == "Password must be at least 6 characters."
        assert controller.error_text == PASSWORD_TOO_SHORT_MESSAGE
        assert controller.error_visible is True
        assert auth_provider.calls == 0
        navigator.open_login.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_opens_login(self, auth_service, auth_provider, navigator) -> None:
        controller = RegisterController(auth_service, navigator)

        result = await controller.submit("  me@example.com ", "secret42")

        assert result.success is True
        assert "me@example.com" in auth_provider.accounts
        navigator.open_login.assert_called_once()

    @pytest.mark.asyncio
    async def test_backend_refusal_shows_message(self, auth_service, navigator) -> None:
        controller = RegisterController(auth_service, navigator)
        await controller.submit("me@example.com", "secret42")

        await controller.submit("me@example.com", "secret42")

        assert controller.error_visible is True
        assert "already in use" in controller.error_text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["abcdef", "  secret  "])
    async def test_valid_password_reaches_provider_unchanged(
        self, auth_service, auth_provider, navigator, password: str
    ) -> None:
        """Un mot de passe d'au moins 6 caracteres est transmis tel quel, espaces compris."""
        controller = RegisterController(auth_service, navigator)

        result = await controller.submit("me@example.com", password)

        assert result.success is True
        assert auth_provider.calls == 1
        assert auth_provider.accounts["me@example.com"][1] == password


class TestLoginController:
    """Tests de l'ecran de connexion."""

    @pytest.mark.asyncio
    async def test_success_opens_catalog(self, auth_service, auth_provider, navigator) -> None:
        auth_provider.accounts["me@example.com"] = ("uid-me", "secret42")
        controller = LoginController(auth_service, navigator)

        result = await controller.submit("me@example.com ", "secret42")

        assert result.success is True
        assert auth_provider.current_owner_id() == "uid-me"
        navigator.open_catalog.assert_called_once()

    @pytest.mark.asyncio
    async def test_failure_shows_error(self, auth_service, navigator) -> None:
        controller = LoginController(auth_service, navigator)

        await controller.submit("me@example.com", "wrong-pass")

        assert controller.error_visible is True
        assert controller.error_text
        navigator.open_catalog.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["abcdef", "  secret  "])
    async def test_password_reaches_provider_unchanged(
        self, auth_service, auth_provider, navigator, password: str
    ) -> None:
        """Le mot de passe saisi n'est ni tronque ni nettoye avant la connexion."""
        auth_provider.accounts["me@example.com"] = ("uid-me", password)
        controller = LoginController(auth_service, navigator)

        result = await controller.submit("me@example.com", password)

        assert result.success is True
        assert auth_provider.calls == 1
        assert auth_provider.accounts["me@example.com"][1] == password

    def test_go_to_register(self, auth_service, navigator) -> None:
        LoginController(auth_service, navigator).go_to_register()
        navigator.open_register.assert_called_once()


# ============================================================================
# Listes
# ============================================================================


class TestCatalogScreen:
    """Tests de l'ecran catalogue."""

    @pytest.mark.asyncio
    async def test_on_resume_renders_catalog(self, list_store, gateway, navigator, alien, heat) -> None:
        await gateway.create_catalog_entry(alien)
        await gateway.create_catalog_entry(heat)
        screen = CatalogScreen(list_store, navigator)
        assert screen.empty_visible is True

        await screen.on_resume()

        assert screen.adapter.item_count == 2
        assert screen.empty_visible is False

    @pytest.mark.asyncio
    async def test_search_filters_without_backend_call(
        self, list_store, gateway, document_store, navigator, alien, heat
    ) -> None:
        """La recherche filtre la derniere liste recue sans appeler la base."""
        await gateway.create_catalog_entry(alien)
        await gateway.create_catalog_entry(heat)
        screen = CatalogScreen(list_store, navigator)
        await screen.on_resume()
        calls_before = len(document_store.calls)

        filtered = screen.search("warner")

        assert [m.title for m in filtered] == ["Heat"]
        assert screen.adapter.item_count == 1
        assert len(document_store.calls) == calls_before

    @pytest.mark.asyncio
    async def test_search_without_match_shows_empty(self, list_store, gateway, navigator, alien) -> None:
        await gateway.create_catalog_entry(alien)
        screen = CatalogScreen(list_store, navigator)
        await screen.on_resume()

        screen.search("nothing")

        assert screen.empty_visible is True

    @pytest.mark.asyncio
    async def test_new_delivery_keeps_current_query(self, list_store, navigator, alien, heat) -> None:
        """Une nouvelle livraison reapplique la requete courante."""
        screen = CatalogScreen(list_store, navigator)
        screen.search("heat")

        await list_store.add_movie(alien)
        await list_store.add_movie(heat)

        assert [m.title for m in screen.adapter.movies] == ["Heat"]
        assert len(screen.movies) == 2

    @pytest.mark.asyncio
    async def test_row_delete_removes_movie(self, list_store, navigator, alien) -> None:
        """L'action supprimer d'une ligne supprime le film et recharge la liste."""
        await list_store.add_movie(alien)
        screen = CatalogScreen(list_store, navigator)

        screen.adapter.trigger_delete(0)
        for _ in range(5):
            await asyncio.sleep(0)

        assert screen.adapter.item_count == 0
        assert screen.empty_visible is True

    @pytest.mark.asyncio
    async def test_row_edit_opens_details(self, list_store, navigator, alien) -> None:
        created = (await list_store.add_movie(alien)).value
        screen = CatalogScreen(list_store, navigator)

        screen.adapter.trigger_edit(0)

        navigator.open_details.assert_called_once_with(created, ListSource.CATALOG)

    def test_close_unsubscribes(self, list_store, navigator) -> None:
        screen = CatalogScreen(list_store, navigator)
        assert list_store.catalog.observer_count == 1

        screen.close()

        assert list_store.catalog.observer_count == 0

    def test_navigation(self, list_store, navigator) -> None:
        screen = CatalogScreen(list_store, navigator)
        screen.open_add()
        screen.open_favorites()
        navigator.open_add.assert_called_once()
        navigator.open_favorites.assert_called_once()


class TestFavoritesScreen:
    """Tests de l'ecran des favoris."""

    @pytest.mark.asyncio
    async def test_lists_and_deletes_favorites(self, list_store, navigator, alien) -> None:
        await list_store.add_favorite(alien)
        screen = FavoritesScreen(list_store, navigator)
        await screen.on_resume()
        assert screen.adapter.item_count == 1

        await screen.delete(screen.movies[0])

        assert screen.adapter.item_count == 0
        assert screen.empty_visible is True

    @pytest.mark.asyncio
    async def test_row_edit_opens_details_from_favorites(self, list_store, navigator, alien) -> None:
        favorite = (await list_store.add_favorite(alien)).value
        screen = FavoritesScreen(list_store, navigator)

        screen.adapter.trigger_edit(0)

        navigator.open_details.assert_called_once_with(favorite, ListSource.FAVORITES)


class TestListScreenBase:
    """Tests de la base commune des ecrans de liste."""

    def test_base_is_abstract(self, list_store, navigator) -> None:
        with pytest.raises(TypeError):
            _MovieListScreen(list_store, navigator, list_store.catalog)


# ============================================================================
# Detail et formulaire
# ============================================================================


class TestDetailsController:
    """Tests de l'ecran de detail."""

    @pytest.mark.asyncio
    async def test_add_to_favorites(self, list_store, navigator, alien) -> None:
        created = (await list_store.add_movie(alien)).value
        details = DetailsController(list_store, navigator, created)

        result = await details.add_to_favorites()

        assert result.ok
        assert details.message == "Movie added to favorites"
        assert [m.title for m in list_store.favorites.value] == ["Alien"]

    def test_edit_opens_form_with_movie(self, list_store, navigator, alien) -> None:
        details = DetailsController(list_store, navigator, alien.copy_with(id="x"))
        details.edit()
        navigator.open_edit.assert_called_once_with(alien.copy_with(id="x"), ListSource.CATALOG)

    def test_apply_edit_result_updates_display(self, list_store, navigator, alien) -> None:
        details = DetailsController(list_store, navigator, alien)
        edited = alien.copy_with(description="Edited")

        details.apply_edit_result(edited)

        assert details.current_movie == edited
        assert details.message == "Movie updated"

    def test_edit_keeps_source_list(self, list_store, navigator, alien) -> None:
        favorite = alien.copy_with(id="f1")
        details = DetailsController(list_store, navigator, favorite, source=ListSource.FAVORITES)

        details.edit()

        navigator.open_edit.assert_called_once_with(favorite, ListSource.FAVORITES)

    @pytest.mark.asyncio
    async def test_load_poster(self, list_store, navigator, alien) -> None:
        loader = AsyncMock(spec=IImageLoader)
        loader.load.return_value = b"png"
        details = DetailsController(list_store, navigator, alien, image_loader=loader)

        await details.load_poster()

        assert details.poster.content == b"png"

    @pytest.mark.asyncio
    async def test_load_poster_failure_leaves_blank_slot(self, list_store, navigator, alien) -> None:
        """Une erreur du chargeur laisse l'affiche vide sans remonter."""
        loader = AsyncMock(spec=IImageLoader)
        loader.load.side_effect = RuntimeError("network down")
        details = DetailsController(list_store, navigator, alien, image_loader=loader)

        await details.load_poster()

        assert details.poster.is_blank

    def test_apply_edit_result_without_movie_is_noop(self, list_store, navigator, alien) -> None:
        details = DetailsController(list_store, navigator, alien)
        details.apply_edit_result(None)
        assert details.current_movie == alien
        assert details.message == ""


class TestAddEditController:
    """Tests du formulaire d'ajout/modification."""

    def test_modes(self, list_store, navigator, alien) -> None:
        add = AddEditController(list_store, navigator)
        edit = AddEditController(list_store, navigator, alien.copy_with(id="x"))

        assert add.submit_label == "Add Movie"
        assert edit.submit_label == "Update"
        assert edit.editable_fields == ("description",)
        assert edit.form.title == "Alien"

    @pytest.mark.asyncio
    async def test_add_requires_title_studio_image(self, list_store, document_store, navigator) -> None:
        controller = AddEditController(list_store, navigator)

        result = await controller.submit(MovieForm(title="Alien", studio="  ", image_url="x"))

        assert result is None
        assert controller.error_text == REQUIRED_FIELDS_MESSAGE
        assert document_store.calls == []

    @pytest.mark.asyncio
    async def test_add_creates_movie_and_closes(self, list_store, navigator) -> None:
        controller = AddEditController(list_store, navigator)

        result = await controller.submit(
            MovieForm(title="Alien", studio="Fox", image_url="https://x/a.jpg", rating="8.5")
        )

        assert result.ok
        assert controller.result.critics_rating == 8.5
        assert controller.message == "Movie added"
        assert list_store.catalog.value == [controller.result]
        navigator.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_edit_changes_description_only(self, list_store, navigator, alien) -> None:
        """En modification, seule la description saisie est enregistree."""
        created = (await list_store.add_movie(alien)).value
        controller = AddEditController(list_store, navigator, created)
        form = MovieForm.from_movie(created)
        form.description = "New synopsis"
        form.title = "Ignored"

        result = await controller.submit(form)

        assert result.ok
        assert controller.result == created.copy_with(description="New synopsis")
        assert list_store.catalog.value == [controller.result]
        assert controller.message == "Movie updated"

    @pytest.mark.asyncio
    async def test_edit_favorite_updates_favorites_only(
        self, list_store, document_store, navigator, alien
    ) -> None:
        """La modification d'un favori ecrit dans les favoris, jamais dans le catalogue."""
        favorite = (await list_store.add_favorite(alien)).value
        controller = AddEditController(list_store, navigator, favorite, ListSource.FAVORITES)

        result = await controller.submit(MovieForm(description="edited"))

        assert result.ok
        assert controller.result == favorite.copy_with(description="edited")
        assert list_store.favorites.value == [controller.result]
        assert list_store.catalog.value == []
        assert document_store.collections.get("movies", {}) == {}
        assert document_store.collections["favorites"][favorite.id]["description"] == "edited"

    @pytest.mark.asyncio
    async def test_edit_requires_description(self, list_store, navigator, alien) -> None:
        controller = AddEditController(list_store, navigator, alien.copy_with(id="x"))

        result = await controller.submit(MovieForm(description="   "))

        assert result is None
        assert controller.error_text == DESCRIPTION_REQUIRED_MESSAGE

    @pytest.mark.parametrize("text,expected", [("8.5", 8.5), (" 7 ", 7.0), ("", 0.0), ("abc", 0.0)])
    def test_parse_rating(self, text: str, expected: float) -> None:
        assert parse_rating(text) == expected


class TestBackNavigation:
    """Tests des retours a l'ecran precedent."""

    def test_register_cancel(self, auth_service, navigator) -> None:
        RegisterController(auth_service, navigator).cancel()
        navigator.close.assert_called_once()

    def test_details_back(self, list_store, navigator, alien) -> None:
        DetailsController(list_store, navigator, alien).back()
        navigator.close.assert_called_once()

    def test_form_cancel_does_not_save(self, list_store, document_store, navigator) -> None:
        AddEditController(list_store, navigator).cancel()
        navigator.close.assert_called_once()
        assert document_store.calls == []

    def test_favorites_open_catalog(self, list_store, navigator) -> None:
        FavoritesScreen(list_store, navigator).open_catalog()
        navigator.open_catalog.assert_called_once()
