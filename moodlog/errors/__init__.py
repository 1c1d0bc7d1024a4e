"""Error handling and custom error pages for the application."""

from __future__ import annotations

from flask import Blueprint, Flask, current_app, render_template, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from moodlog.extensions import db
from moodlog.utils.messages import FlashMessages

# Initialize Blueprint
bp = Blueprint("errors", __name__)


def init_app(app: Flask) -> None:
    """Initialize error handlers with the Flask application."""
    app.register_blueprint(bp)


def _render_error(message: str, error: str, status_code: int) -> tuple[str, int]:
    """Render the generic error page with the given status."""
    page = render_template(
        "errors/error.html",
        title=message,
        message=message,
        error=error,
        status_code=status_code,
    )
    return page, status_code


@bp.app_errorhandler(404)
def not_found_error(error: HTTPException) -> tuple[str, int]:
    """Handle 404 Not Found errors."""
    return _render_error(FlashMessages.NOT_FOUND, FlashMessages.NOT_FOUND_DETAIL, 404)


@bp.app_errorhandler(405)
def method_not_allowed_error(error: HTTPException) -> tuple[str, int] | tuple[str, int, dict[str, str]]:
    """Answer a GET to a POST-only path as a missing page."""
    if request.method in ("GET", "HEAD"):
        return _render_error(FlashMessages.NOT_FOUND, FlashMessages.NOT_FOUND_DETAIL, 404)

    page, status_code = _render_error(error.name, error.description or "HTTP error occurred", 405)
    return page, status_code, {"Allow": ", ".join(getattr(error, "valid_methods", None) or [])}


@bp.app_errorhandler(SQLAlchemyError)
def database_error(error: SQLAlchemyError) -> tuple[str, int]:
    """Handle failed queries and lost connections."""
    current_app.logger.error(f"Database error: {error}", exc_info=True)
    db.session.rollback()
    return _render_error(FlashMessages.SERVER_ERROR, "The journal store is unavailable right now.", 500)


@bp.app_errorhandler(HTTPException)
def handle_http_exception(error: HTTPException) -> tuple[str, int]:
    """Handle HTTP exceptions."""
    status_code = error.code if error.code is not None else 500
    return _render_error(error.name, error.description or "HTTP error occurred", status_code)


@bp.app_errorhandler(Exception)
def handle_exception(error: Exception) -> tuple[str, int]:
    """Handle all unhandled exceptions."""
    current_app.logger.error(f"Unhandled exception: {str(error)}", exc_info=True)
    return _render_error(FlashMessages.SERVER_ERROR, "An unexpected error occurred", 500)
