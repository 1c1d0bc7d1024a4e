"""WSGI entry point for local development and production WSGI servers.

This module provides a standard WSGI application that can be used with
the Flask development server or a production WSGI server such as Gunicorn.
"""

import os
import sys

# Load environment variables before importing app
from dotenv import load_dotenv

load_dotenv()  # Loads .env file

# Ensure FLASK_ENV is set
if "FLASK_ENV" not in os.environ:
    os.environ["FLASK_ENV"] = "development"
    print(f"FLASK_ENV not set, defaulting to: {os.environ['FLASK_ENV']}", file=sys.stderr)

# Import app after environment is set
from moodlog import create_app  # noqa: E402

# Create the application instance
app = create_app()
application = app  # This maintains WSGI compatibility


if __name__ == "__main__":
    # Local development server
    application.run(
        host=app.config["HOST"],
        port=app.config["PORT"],
        debug=os.environ.get("FLASK_ENV") == "development",
    )
