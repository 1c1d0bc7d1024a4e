"""Database configuration and utilities for Moodlog.

This module provides a centralized way to manage the database connection,
initialization, and query execution for the application. All handlers reach
the relational store through the helpers defined here.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional, Sequence, Union

import click
from flask import Flask
from flask.cli import with_appcontext
from sqlalchemy import event
from sqlalchemy.engine import ExceptionContext, Result, RowMapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import Executable

from .extensions import db

# Configure logger
logger = logging.getLogger(__name__)

__all__ = [
    "db",
    "init_database",
    "fetch_all",
    "execute",
    "create_tables",
    "drop_tables",
    "register_commands",
]


def _get_database_uri_from_env() -> str | None:
    """Get database URI from environment variable."""
    db_url = os.environ.get("DATABASE_URL")
    if not db_url:
        return None

    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql+pg8000://", 1)
    elif db_url.startswith("postgresql://") and "+" not in db_url.split("://", 1)[0]:
        db_url = db_url.replace("postgresql://", "postgresql+pg8000://", 1)

    return db_url


def _get_database_uri_fallback() -> str:
    """Get fallback SQLite database URI."""
    instance_path = os.path.join(os.path.dirname(__file__), "..", "instance")
    os.makedirs(instance_path, exist_ok=True)
    db_path = os.path.join(instance_path, f"moodlog-{os.getenv('FLASK_ENV', 'development')}.db")
    return f"sqlite:///{db_path}"


def _get_database_uri(app: Flask) -> str:
    """Get the database URI with proper fallback logic.

    Priority order:
    1. SQLALCHEMY_DATABASE_URI from app config
    2. DATABASE_URL environment variable (rewritten to the pg8000 driver)
    3. SQLite database file in instance directory
    """
    db_url = app.config.get("SQLALCHEMY_DATABASE_URI")
    if db_url:
        return str(db_url)

    return _get_database_uri_from_env() or _get_database_uri_fallback()


def _log_connection_error(context: ExceptionContext) -> None:
    """Log errors raised by the engine, including dropped connections."""
    if context.is_disconnect:
        logger.error(f"Database connection lost: {context.original_exception}")
    else:
        logger.error(f"Database error: {context.original_exception}")


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """SQLite leaves foreign keys unenforced unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_database(app: Flask) -> None:
    """Initialize the database with the Flask app.

    Binds SQLAlchemy to the application, sets up connection pooling for
    server databases, creates missing tables and starts logging engine errors.
    A failure here is fatal to startup.
    """
    if "sqlalchemy" in app.extensions:
        return

    try:
        db_uri = _get_database_uri(app)
        app.config["SQLALCHEMY_DATABASE_URI"] = db_uri
        app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

        if not db_uri.startswith("sqlite"):
            app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
                "pool_pre_ping": True,
                "pool_recycle": 300,
                "pool_size": 5,
                "max_overflow": 10,
            }
        else:
            app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {}

        db.init_app(app)

        with app.app_context():
            # Register models before creating tables
            from .auth import models as _auth_models  # noqa: F401
            from .journal import models as _journal_models  # noqa: F401
            from .lookups import models as _lookup_models  # noqa: F401

            event.listen(db.engine, "handle_error", _log_connection_error)
            if db_uri.startswith("sqlite"):
                event.listen(db.engine, "connect", _enable_sqlite_foreign_keys)
            db.create_all()
        logger.info(f"Database initialized successfully with URI: {db_uri}")

    except Exception as e:
        logger.error("Failed to initialize database: %s", e)
        raise RuntimeError(f"Failed to initialize database: {e}") from e


def fetch_all(statement: Executable, params: Optional[Mapping[str, Any]] = None) -> list[RowMapping]:
    """Run a query and return every resulting row as a mapping.

    Args:
        statement: A SQLAlchemy ``select`` or ``text`` construct
        params: Values for the statement's bind parameters

    Returns:
        The rows in the order the database returned them

    Raises:
        SQLAlchemyError: If the query fails; the session is rolled back first
    """
    try:
        result = db.session.execute(statement, params or {})
        return list(result.mappings().all())
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Query failed: {e}")
        raise


def execute(
    statement: Executable,
    params: Optional[Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]] = None,
) -> Result[Any]:
    """Run a write statement and commit it.

    A list of parameter mappings runs the statement once per mapping in the
    same transaction.

    Returns:
        The statement result; ``inserted_primary_key`` is available for a
        single-row insert

    Raises:
        SQLAlchemyError: If the statement fails; the session is rolled back first
    """
    try:
        result = db.session.execute(statement, params or {})
        db.session.commit()
        return result
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Statement failed: {e}")
        raise


def create_tables() -> None:
    """Create all database tables if they don't exist."""
    db.create_all()


def drop_tables() -> None:
    """Drop all database tables."""
    db.drop_all()


@click.command("init-db")
@with_appcontext
def init_db_command() -> None:
    """Create all database tables."""
    create_tables()
    click.echo("Initialized the database.")


@click.command("drop-db")
@click.confirmation_option(prompt="This will delete every user and journal entry. Continue?")
@with_appcontext
def drop_db_command() -> None:
    """Drop all database tables."""
    drop_tables()
    click.echo("Dropped all tables.")


def register_commands(app: Flask) -> None:
    """Register database CLI commands with the application."""
    app.cli.add_command(init_db_command)
    app.cli.add_command(drop_db_command)
