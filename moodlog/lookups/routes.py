"""Lookup blueprint routes."""

from flask import current_app, render_template, request
from flask_login import login_required

from moodlog.services import GeocodingService, NutritionService
from moodlog.utils.messages import FlashMessages

from . import bp
from .exceptions import LookupServiceError

LOOKUP_KINDS = ("food", "location")


@bp.route("/lookup")
@login_required
def lookup():
    """Search foods or locations.

    Upstream failures are logged and the page renders without results.
    """
    kind = request.args.get("kind", "food")
    if kind not in LOOKUP_KINDS:
        kind = "food"
    query = request.args.get("q", "").strip()

    results: list = []
    notice = None
    if query:
        try:
            if kind == "food":
                results = NutritionService().search_foods(query)
            else:
                results = GeocodingService().search_locations(query)
        except LookupServiceError as e:
            current_app.logger.warning(f"{e.service} lookup for '{query}' failed: {e.message}")
            notice = FlashMessages.LOOKUP_UNAVAILABLE

    return render_template(
        "lookups/show.html",
        title="Lookup",
        kind=kind,
        query=query,
        results=results,
        notice=notice,
    )
