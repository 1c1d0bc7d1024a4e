import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, Response
from flask_cors import CORS

from config import Config, get_config

# Load environment variables from .env file
load_dotenv()

# Initialize logger
logger = logging.getLogger(__name__)

__all__ = ["create_app"]


def create_app(config: Optional[Config] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Configuration object to use. Defaults to the one selected by
                the FLASK_ENV environment variable.
    Returns:
        Flask: The configured Flask application instance.
    """
    config = config or get_config()

    app = Flask(__name__)
    app.config.from_object(config)

    _configure_logging(app)
    _configure_response_headers(app)
    _initialize_components(app)
    _initialize_cli(app)

    return app


def _configure_logging(app: Flask) -> None:
    """Configure application logging."""
    log_level = logging.DEBUG if app.debug else logging.INFO
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logger.setLevel(log_level)
    app.logger.setLevel(log_level)

    logger.debug("Application configuration:")
    logger.debug(f"- DEBUG: {app.debug}")
    logger.debug(f"- TESTING: {app.testing}")
    logger.debug(f"- DATABASE_URI: {app.config.get('SQLALCHEMY_DATABASE_URI', 'Not set')}")


def _configure_response_headers(app: Flask) -> None:
    """Add security headers to every response."""

    @app.after_request
    def add_security_headers(response: Response) -> Response:
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["X-Frame-Options"] = "DENY"
        if response.mimetype == "text/html":
            response.headers["Cache-Control"] = "no-cache, max-age=0, must-revalidate"
        return response


def _initialize_components(app: Flask) -> None:
    """Initialize core application components."""
    from .database import init_database
    from .extensions import init_app as init_extensions

    init_extensions(app)
    init_database(app)

    _register_blueprints(app)

    from .errors import init_app as init_errors

    init_errors(app)
    logger.debug("Registered error handlers")

    _configure_cors(app)
    _log_registered_routes(app)


def _initialize_cli(app: Flask) -> None:
    """Initialize CLI commands."""
    from .database import register_commands as register_database_commands

    register_database_commands(app)
    logger.debug("Initialized CLI commands")


def _register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from .main import bp as main_bp

    app.register_blueprint(main_bp)
    logger.debug(f"Registered blueprint: {main_bp.name}")

    # Auth also registers its CLI commands
    from .auth import init_app as init_auth

    init_auth(app)
    logger.debug("Registered blueprint: auth")

    from .journal import bp as journal_bp
    from .lookups import bp as lookups_bp

    for bp in (journal_bp, lookups_bp):
        app.register_blueprint(bp)
        logger.debug(f"Registered blueprint: {bp.name}")


def _configure_cors(app: Flask) -> None:
    """Configure CORS settings."""
    cors_origins = app.config.get("CORS_ORIGINS", "*").split(",")
    CORS(
        app,
        resources={
            r"/*": {
                "origins": cors_origins,
                "methods": ["GET", "POST", "OPTIONS"],
                "supports_credentials": False,
            }
        },
    )


def _log_registered_routes(app: Flask) -> None:
    """Log all registered routes for debugging."""
    for rule in sorted(app.url_map.iter_rules(), key=lambda r: r.rule):
        methods = ",".join(sorted(rule.methods - {"HEAD", "OPTIONS"}))
        logger.debug(f"Route {rule.rule} [{methods}] -> {rule.endpoint}")
