"""Google Geocoding service.

Turns free-text addresses into stored ``Location`` rows. Results are saved
under the normalized search text and later searches for the same text are
answered from the database.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import requests
from flask import current_app
from sqlalchemy import insert, select

from moodlog.database import execute
from moodlog.extensions import db
from moodlog.lookups.exceptions import LookupNotConfiguredError, LookupServiceError
from moodlog.lookups.models import Location

logger = logging.getLogger(__name__)

GEOCODE_API_URL = "https://maps.googleapis.com/maps/api/geocode/json"
SERVICE_NAME = "Google Geocoding"

# Statuses that mean "the call worked", with or without matches
_OK_STATUSES = {"OK", "ZERO_RESULTS"}


def normalize_query(query: str) -> str:
    """Normalize search text so equivalent searches share stored results."""
    return " ".join(query.split()).lower()


def location_values(result: Dict[str, Any], search_query: str) -> Dict[str, Any]:
    """Column values for the ``locations`` row stored for one geocoding API result."""
    coordinates = result["geometry"]["location"]
    components = result.get("address_components") or []
    return {
        "search_query": search_query,
        "formatted_query": result["formatted_address"],
        "latitude": float(coordinates["lat"]),
        "longitude": float(coordinates["lng"]),
        "short_name": components[0]["short_name"] if components else None,
    }


class GeocodingService:
    """Service for Google Geocoding API interactions."""

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[int] = None):
        self.api_key = api_key or self._get_setting("GEOCODE_API_KEY")
        self.timeout = timeout or int(self._get_setting("LOOKUP_TIMEOUT") or 10)
        if not self.api_key:
            logger.warning("Geocoding API key not configured - location search will not work")

    def _get_setting(self, name: str) -> Optional[str]:
        """Get a setting from Flask configuration or the environment."""
        try:
            value = current_app.config.get(name)
            if value:
                return value
        except RuntimeError:
            pass
        return os.getenv(name)

    def _make_request(self, query: str) -> Dict[str, Any]:
        try:
            logger.debug(f"Geocoding '{query}'")
            response = requests.get(
                GEOCODE_API_URL,
                params={"address": query, "key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"Geocoding request failed: {status_code} - {e}")
            raise LookupServiceError(f"Location search failed: {e}", SERVICE_NAME, status_code) from e
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Geocoding API error: {e}")
            raise LookupServiceError(f"Location search failed: {e}", SERVICE_NAME) from e

        status = data.get("status")
        if status not in _OK_STATUSES:
            message = data.get("error_message") or status
            logger.error(f"Geocoding API returned {status}: {message}")
            raise LookupServiceError(f"Location search failed: {message}", SERVICE_NAME)

        return data

    def get_saved_locations(self, query: str) -> List[Location]:
        """Return locations previously stored for ``query``."""
        statement = select(Location).where(Location.search_query == normalize_query(query)).order_by(Location.id)
        return list(db.session.scalars(statement).all())

    def search_locations(self, query: str) -> List[Location]:
        """Find locations matching ``query``.

        Returns:
            Matching locations, possibly none

        Raises:
            LookupNotConfiguredError: If no API key is configured
            LookupServiceError: If the upstream call fails or returns an unexpected payload
        """
        saved = self.get_saved_locations(query)
        if saved:
            logger.debug(f"Serving '{query}' from saved locations")
            return saved

        if not self.api_key:
            raise LookupNotConfiguredError(SERVICE_NAME)

        data = self._make_request(query)
        search_query = normalize_query(query)
        try:
            rows = [location_values(result, search_query) for result in data.get("results", [])]
        except (KeyError, TypeError, ValueError, IndexError) as e:
            logger.error(f"Unexpected geocoding payload: {e}")
            raise LookupServiceError("Location search returned an unexpected response", SERVICE_NAME) from e

        if not rows:
            return []

        execute(insert(Location.__table__), rows)
        return self.get_saved_locations(query)
