"""CLI commands for the local user directory."""

from __future__ import annotations

import click

from jobcard.domain.exceptions import DomainException
from jobcard.domain.model.user import Role, User
from jobcard.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--id", "user_id", required=True, help="User ID.")
@click.option("--name", required=True, help="Display name.")
@click.option(
    "--role",
    required=True,
    type=click.Choice([r.value for r in Role]),
    help="Role in the shop.",
)
@click.option("--email", default=None, help="Contact e-mail.")
@click.pass_obj
def user_add(container: Container, user_id: str, name: str, role: str, email: str | None) -> None:
    """Register a user so jobs can reference them."""
    try:
        container.user_directory().save(
            User(id=user_id, name=name, role=Role.parse(role), email=email)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"User '{user_id}' ({role}) saved.")


@click.command("list")
@click.pass_obj
def user_list(container: Container) -> None:
    """List known users."""
    users = container.user_directory().list_all()
    if not users:
        click.echo("No users found.")
        return
    click.echo(f"{'ID':<12} {'Name':<20} {'Role':<10}")
    click.echo("-" * 44)
    for u in users:
        click.echo(f"{u.id:<12} {u.name:<20} {u.role.value:<10}")
