"""
Commandes CLI d'authentification (register, login, logout, whoami).
"""

import asyncio
from typing import Annotated

import typer

from movieshelf.adapters.cli.helpers import CliNavigator, console, fail, with_container
from movieshelf.presentation.screens import LoginController, RegisterController


def register(
    email: Annotated[str, typer.Argument(help="Adresse email du compte")],
    password: Annotated[
        str,
        typer.Option(
            "--password", "-p",
            prompt=True, hide_input=True, confirmation_prompt=True,
            help="Mot de passe (6 caracteres minimum)",
        ),
    ],
) -> None:
    """Cree un compte."""
    asyncio.run(_register_async(email, password))


@with_container()
async def _register_async(container, email: str, password: str) -> None:
    """Implementation async de l'inscription."""
    controller = RegisterController(container.auth_service(), CliNavigator())
    result = await controller.submit(email, password)
    if not result.success:
        fail(controller.error_text)
    console.print(f"[green]Compte cree :[/green] {email.strip()}")


def login(
    email: Annotated[str, typer.Argument(help="Adresse email du compte")],
    password: Annotated[
        str,
        typer.Option("--password", "-p", prompt=True, hide_input=True, help="Mot de passe"),
    ],
) -> None:
    """Ouvre une session."""
    asyncio.run(_login_async(email, password))


@with_container()
async def _login_async(container, email: str, password: str) -> None:
    """Implementation async de la connexion."""
    controller = LoginController(container.auth_service(), CliNavigator())
    result = await controller.submit(email, password)
    if not result.success:
        fail(controller.error_text)
    console.print(f"[green]Connecte :[/green] {email.strip()}")


def logout() -> None:
    """Ferme la session courante."""
    asyncio.run(_logout_async())


@with_container(requires_db=False)
async def _logout_async(container) -> None:
    container.auth_service().logout()
    console.print("Session fermee.")


def whoami() -> None:
    """Affiche le compte connecte."""
    asyncio.run(_whoami_async())


@with_container(requires_db=False)
async def _whoami_async(container) -> None:
    service = container.auth_service()
    if service.current_owner_id() is None:
        fail("Not logged in.")
    console.print(f"{service.current_email()} [dim]({service.current_owner_id()})[/dim]")
