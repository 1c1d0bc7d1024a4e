"""Tests for the Nutritionix food search service."""

from unittest.mock import Mock, patch

import pytest
import requests

from moodlog.lookups.exceptions import LookupNotConfiguredError, LookupServiceError
from moodlog.services.nutrition_service import NUTRITIONIX_SEARCH_URL, Food, NutritionService


def _response(payload=None, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Client Error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def service():
    return NutritionService(app_id="app-id", api_key="app-key", timeout=5)


class TestSearchFoods:
    """Test food searches."""

    @patch("moodlog.services.nutrition_service.requests.get")
    def test_search_returns_foods(self, mock_get, service) -> None:
        mock_get.return_value = _response(
            {
                "total_hits": 2,
                "hits": [
                    {"fields": {"item_name": "Cheddar Cheese", "brand_name": "Tillamook"}},
                    {"fields": {"item_name": "Cheese, swiss"}},
                ],
            }
        )

        foods = service.search_foods("cheese")

        assert foods == [Food("Cheddar Cheese", "Tillamook"), Food("Cheese, swiss", None)]
        mock_get.assert_called_once_with(
            f"{NUTRITIONIX_SEARCH_URL}/cheese",
            params={"appId": "app-id", "appKey": "app-key"},
            timeout=5,
        )

    @patch("moodlog.services.nutrition_service.requests.get")
    def test_query_is_url_encoded(self, mock_get, service) -> None:
        mock_get.return_value = _response({"hits": []})

        service.search_foods("mac & cheese")

        assert mock_get.call_args.args[0] == f"{NUTRITIONIX_SEARCH_URL}/mac%20%26%20cheese"

    @patch("moodlog.services.nutrition_service.requests.get")
    def test_no_hits(self, mock_get, service) -> None:
        mock_get.return_value = _response({"total_hits": 0, "hits": []})

        assert service.search_foods("zzzz") == []

    @patch("moodlog.services.nutrition_service.requests.get")
    def test_http_error(self, mock_get, service) -> None:
        mock_get.return_value = _response({"error": "denied"}, status_code=401)

        with pytest.raises(LookupServiceError) as exc_info:
            service.search_foods("cheese")

        assert exc_info.value.status_code == 401
        assert exc_info.value.service == "Nutritionix"

    @patch("moodlog.services.nutrition_service.requests.get")
    def test_connection_error(self, mock_get, service) -> None:
        mock_get.side_effect = requests.exceptions.ConnectionError("no route to host")

        with pytest.raises(LookupServiceError, match="Food search failed"):
            service.search_foods("cheese")

    @patch("moodlog.services.nutrition_service.requests.get")
    def test_unexpected_payload(self, mock_get, service) -> None:
        mock_get.return_value = _response({"hits": [{"_id": "no fields"}]})

        with pytest.raises(LookupServiceError, match="unexpected response"):
            service.search_foods("cheese")

    @patch("moodlog.services.nutrition_service.requests.get")
    def test_missing_api_key(self, mock_get, monkeypatch) -> None:
        monkeypatch.delenv("NUTRITIONIX_API_KEY", raising=False)

        with pytest.raises(LookupNotConfiguredError):
            NutritionService(app_id="app-id").search_foods("cheese")

        mock_get.assert_not_called()

    @patch("moodlog.services.nutrition_service.requests.get")
    def test_missing_app_id(self, mock_get, monkeypatch) -> None:
        monkeypatch.delenv("NUTRITIONIX_APP_ID", raising=False)
        service = NutritionService(api_key="app-key")

        assert service.is_configured is False
        with pytest.raises(LookupNotConfiguredError, match="Nutritionix credentials are not configured"):
            service.search_foods("cheese")

        mock_get.assert_not_called()


def test_settings_come_from_app_config(app) -> None:
    app.config.update(NUTRITIONIX_APP_ID="config-id", NUTRITIONIX_API_KEY="config-key", LOOKUP_TIMEOUT=3)

    with app.app_context():
        service = NutritionService()

    assert service.app_id == "config-id"
    assert service.api_key == "config-key"
    assert service.timeout == 3
