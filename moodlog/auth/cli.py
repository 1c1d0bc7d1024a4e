"""CLI commands for user management."""

from __future__ import annotations

import click
from flask.cli import with_appcontext
from sqlalchemy import func, select

from moodlog.auth import services
from moodlog.auth.models import User
from moodlog.extensions import db
from moodlog.journal.models import JournalEntry


@click.group("user")
def user_cli():
    """User management commands."""


def register_commands(app):
    """Register CLI commands with the application."""
    app.cli.add_command(user_cli)

    user_cli.add_command(list_users)
    user_cli.add_command(create_user)


@click.command("list")
@click.option(
    "--entries",
    is_flag=True,
    help="Show how many journal entries each user has written",
)
@with_appcontext
def list_users(entries: bool) -> None:
    """List all users in the system."""
    users = db.session.scalars(select(User).order_by(User.id)).all()

    if not users:
        click.echo("No users found")
        return

    counts: dict[int, int] = {}
    if entries:
        rows = db.session.execute(select(JournalEntry.uid, func.count(JournalEntry.id)).group_by(JournalEntry.uid))
        counts = {uid: count for uid, count in rows}

    headers = ["ID", "Username"]
    if entries:
        headers.append("Entries")

    rows_out = []
    for user in users:
        row = [str(user.id), user.username]
        if entries:
            row.append(str(counts.get(user.id, 0)))
        rows_out.append(row)

    widths = [max(len(h), *(len(r[i]) for r in rows_out)) for i, h in enumerate(headers)]
    click.echo("  ".join(h.ljust(w) for h, w in zip(headers, widths)))
    click.echo("  ".join("-" * w for w in widths))
    for row in rows_out:
        click.echo("  ".join(c.ljust(w) for c, w in zip(row, widths)))


@click.command("create")
@click.option("--username", prompt="Username", help="Username for the new account")
@click.option(
    "--password",
    prompt="Password",
    hide_input=True,
    confirmation_prompt=True,
    help="Password for the new account",
)
@with_appcontext
def create_user(username: str, password: str) -> None:
    """Create a user account."""
    try:
        user = services.register_user(username, password)
    except services.UsernameTakenError as e:
        click.echo(f"Error: {e.message}")
        return
    except ValueError as e:
        click.echo(f"Error: {e}")
        return

    click.echo(f"Created user {user.username} with ID {user.id}")
