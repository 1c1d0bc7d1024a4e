"""Main blueprint routes."""

from flask import render_template

from . import bp


@bp.route("/")
def index():
    """Landing page."""
    return render_template("index.html", title="Moodlog")
