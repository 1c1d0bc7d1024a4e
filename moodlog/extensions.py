"""Application Flask extensions.

This module initializes and configures all Flask extensions used in the application.
"""

import logging
from typing import Any, Optional

from flask import Flask, flash, redirect, request, url_for
from flask.wrappers import Response
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFError, CSRFProtect

logger = logging.getLogger(__name__)

# Development fallback secret key (only used when SECRET_KEY is not configured)
_DEV_FALLBACK_SECRET = "dev-key-change-in-production"  # nosec B105

# Initialize SQLAlchemy
db = SQLAlchemy()

# Initialize LoginManager for session-based authentication
login_manager = LoginManager()
login_manager.login_view = "auth.login"
login_manager.login_message = "Please log in to see your journal."

# Initialize CSRF protection (enabled or disabled by WTF_CSRF_ENABLED)
csrf = CSRFProtect()


def _log_session_config(app: Flask) -> None:
    """Log session configuration for debugging."""
    app.logger.info("Session backend: signed-cookies (Flask default)")
    app.logger.info("  Cookie secure: %s", app.config.get("SESSION_COOKIE_SECURE", False))
    app.logger.info("  Cookie httponly: %s", app.config.get("SESSION_COOKIE_HTTPONLY", True))
    app.logger.info("  Session lifetime: %s seconds", app.config.get("PERMANENT_SESSION_LIFETIME", 3600))


def _configure_csrf_handlers(app: Flask) -> None:
    """Configure the CSRF error handler."""
    if not app.config.get("WTF_CSRF_ENABLED", True):
        return

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e: CSRFError) -> Response:
        app.logger.warning(f"CSRF error: {e} - Path: {request.path}")
        flash("Your form expired. Please try again.", "error")
        return redirect(url_for("auth.login"))


def init_app(app: Flask) -> None:
    """Initialize all extensions with the Flask application.

    SQLAlchemy is bound separately by ``moodlog.database.init_database``.
    """
    login_manager.init_app(app)

    if not app.config.get("SECRET_KEY"):
        app.logger.warning("Using fallback secret key - ensure SECRET_KEY is set in production")
        app.config["SECRET_KEY"] = _DEV_FALLBACK_SECRET

    _log_session_config(app)

    csrf.init_app(app)
    _configure_csrf_handlers(app)


@login_manager.user_loader
def load_user(user_id: str) -> Optional[Any]:
    """Load a user from the database for the current session."""
    # Lazy import to avoid circular imports
    from moodlog.auth.models import User

    if not user_id or not user_id.isdigit():
        return None

    return db.session.get(User, int(user_id))
