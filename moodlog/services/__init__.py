"""Clients for third-party APIs."""

from .geocoding_service import GeocodingService
from .nutrition_service import Food, NutritionService

__all__ = ["Food", "GeocodingService", "NutritionService"]
