"""Nutritionix food search service.

Looks up foods by free text and reduces each hit to its item and brand name.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from flask import current_app

from moodlog.lookups.exceptions import LookupNotConfiguredError, LookupServiceError

logger = logging.getLogger(__name__)

NUTRITIONIX_SEARCH_URL = "https://api.nutritionix.com/v1_1/search"
SERVICE_NAME = "Nutritionix"


@dataclass
class Food:
    """A food item returned by a search."""

    name: str
    brand: Optional[str]

    @classmethod
    def from_hit(cls, hit: Dict[str, Any]) -> "Food":
        fields = hit["fields"]
        return cls(name=fields["item_name"], brand=fields.get("brand_name"))


class NutritionService:
    """Service for Nutritionix API interactions."""

    def __init__(self, app_id: Optional[str] = None, api_key: Optional[str] = None, timeout: Optional[int] = None):
        self.app_id = app_id or self._get_setting("NUTRITIONIX_APP_ID")
        self.api_key = api_key or self._get_setting("NUTRITIONIX_API_KEY")
        self.timeout = timeout or int(self._get_setting("LOOKUP_TIMEOUT") or 10)
        if not self.is_configured:
            logger.warning("Nutritionix app id or API key not configured - food search will not work")

    @property
    def is_configured(self) -> bool:
        """Whether both Nutritionix credentials are set."""
        return bool(self.app_id and self.api_key)

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
        url = f"{NUTRITIONIX_SEARCH_URL}/{quote(query, safe='')}"
        params = {"appId": self.app_id, "appKey": self.api_key}

        try:
            logger.debug(f"Searching Nutritionix for '{query}'")
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"Nutritionix request failed: {status_code} - {e}")
            raise LookupServiceError(f"Food search failed: {e}", SERVICE_NAME, status_code) from e
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Nutritionix API error: {e}")
            raise LookupServiceError(f"Food search failed: {e}", SERVICE_NAME) from e

    def search_foods(self, query: str) -> List[Food]:
        """Search foods matching ``query``.

        Returns:
            Matching foods, possibly none

        Raises:
            LookupNotConfiguredError: If the app id or API key is not configured
            LookupServiceError: If the upstream call fails or returns an unexpected payload
        """
        if not self.is_configured:
            raise LookupNotConfiguredError(SERVICE_NAME)

        data = self._make_request(query)
        try:
            return [Food.from_hit(hit) for hit in data.get("hits", [])]
        except (KeyError, TypeError) as e:
            logger.error(f"Unexpected Nutritionix payload: {e}")
            raise LookupServiceError("Food search returned an unexpected response", SERVICE_NAME) from e
