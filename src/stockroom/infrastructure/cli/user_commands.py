"""CLI commands for accounts and sessions."""

from __future__ import annotations

import click

from stockroom.application.login import LoginHandler
from stockroom.application.logout import LogoutHandler
from stockroom.application.manage_users import (
    DeleteUserHandler,
    ListUsersHandler,
    UpdateUserHandler,
)
from stockroom.application.register_user import RegisterUserHandler
from stockroom.infrastructure.bootstrap import Services
from stockroom.infrastructure.cli.context import pass_services, run


@click.command("register")
@click.option("--username", required=True, help="New username.")
@click.password_option("--password", help="New password.")
@pass_services
def user_register(services: Services, username: str, password: str) -> None:
    """Create a new account."""
    handler = RegisterUserHandler(users=services.users, hasher=services.hasher)
    user = run(services, lambda: handler.handle(username, password))
    click.echo(f"Registered user '{user.username}'. Please log in.")


@click.command("login")
@click.option("--username", required=True, help="Username.")
@click.option("--password", prompt=True, hide_input=True, help="Password.")
@pass_services
def user_login(services: Services, username: str, password: str) -> None:
    """Log in and remember the session."""
    handler = LoginHandler(gate=services.gate, sessions=services.sessions)
    user = run(services, lambda: handler.handle(username, password))
    role = "admin" if user.is_admin else "user"
    click.echo(f"Logged in as {user.username} ({role}).")


@click.command("logout")
@pass_services
def user_logout(services: Services) -> None:
    """Log out, returning everything in the basket to stock."""
    handler = LogoutHandler(coordinator=services.coordinator, sessions=services.sessions)
    report = run(services, handler.handle)
    click.echo(f"Logged out. {report.units} units from {report.items} basket items returned to stock.")


@click.command("whoami")
@pass_services
def user_whoami(services: Services) -> None:
    """Show the logged-in user."""
    session = services.sessions.load()
    user = run(services, lambda: services.gate.current_user(session))
    click.echo(user.username if user is not None else "Not logged in.")


@click.command("list")
@pass_services
def user_list(services: Services) -> None:
    """List all accounts (admin only)."""
    handler = ListUsersHandler(users=services.users, gate=services.gate)
    session = services.sessions.load()
    users = run(services, lambda: handler.handle(session))

    click.echo(f"{'ID':<18} {'Username':<20} {'Admin':>6}")
    click.echo("-" * 46)
    for u in users:
        click.echo(f"{u.id:<18} {u.username:<20} {'yes' if u.is_admin else 'no':>6}")


@click.command("update")
@click.option("--id", "user_id", required=True, help="User ID.")
@click.option("--admin", "is_admin", required=True, type=bool, help="true to grant admin rights, false to revoke.")
@pass_services
def user_update(services: Services, user_id: str, is_admin: bool) -> None:
    """Change a user's admin flag (admin only)."""
    handler = UpdateUserHandler(users=services.users, gate=services.gate)
    session = services.sessions.load()
    user = run(services, lambda: handler.handle(session, user_id, is_admin))
    click.echo(f"User '{user.username}' admin={'yes' if user.is_admin else 'no'}.")


@click.command("delete")
@click.option("--id", "user_id", required=True, help="User ID.")
@pass_services
def user_delete(services: Services, user_id: str) -> None:
    """Delete an account (admin only)."""
    handler = DeleteUserHandler(users=services.users, gate=services.gate)
    session = services.sessions.load()
    run(services, lambda: handler.handle(session, user_id))
    click.echo(f"User {user_id} deleted.")
