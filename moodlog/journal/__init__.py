"""Journal package initialization."""

from flask import Blueprint

# Initialize Blueprint
bp = Blueprint("journal", __name__)

# Import routes to register them with the blueprint
from . import routes  # noqa: E402, F401
