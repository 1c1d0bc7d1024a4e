"""Authentication package initialization."""

import logging
from typing import TYPE_CHECKING

from flask import Blueprint

if TYPE_CHECKING:
    from flask import Flask

# Initialize Blueprint
bp = Blueprint("auth", __name__)

# Configure logger
logger = logging.getLogger(__name__)


def init_app(app: "Flask") -> None:
    """Initialize the auth blueprint with the Flask app.

    Args:
        app: The Flask application instance
    """
    # Import routes after blueprint creation to avoid circular imports
    from . import cli
    from . import routes  # noqa: F401

    app.register_blueprint(bp)

    cli.register_commands(app)
