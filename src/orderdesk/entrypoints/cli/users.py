"""ORDERDESK user commands."""

from __future__ import annotations

import click
import click_extra as clickx

from orderdesk.service_layer import commands

from .helpers import success
from .helpers.dispatch import dispatch


@click.group(cls=clickx.ExtraGroup)
def user() -> None:
    """Manage users."""


@user.command()
@click.argument("name")
@click.argument("email")
def register(name: str, email: str) -> None:
    """Register a user and print the new user id."""
    user_id = dispatch(commands.RegisterUser(name=name, email=email))
    success(f"Registered user {user_id}")
    click.echo(user_id)


@user.command()
@click.argument("user_id")
@click.argument("name")
def rename(user_id: str, name: str) -> None:
    """Change a user's display name."""
    dispatch(commands.RenameUser(user_id=user_id, name=name))
    success(f"Renamed user {user_id}")


@user.command("change-email")
@click.argument("user_id")
@click.argument("email")
def change_email(user_id: str, email: str) -> None:
    """Change a user's email address."""
    dispatch(commands.ChangeUserEmail(user_id=user_id, email=email))
    success(f"Changed email of user {user_id}")


@user.command()
@click.argument("user_id")
def deactivate(user_id: str) -> None:
    """Deactivate a user; deactivated users cannot place orders."""
    dispatch(commands.DeactivateUser(user_id=user_id))
    success(f"Deactivated user {user_id}")
