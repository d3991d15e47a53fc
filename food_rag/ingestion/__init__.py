"""Ingestion package exports."""

from .dataset import FoodItem, load_food_items
from .router import router
from .service import IngestionService, IngestionSummary

__all__ = ["router", "FoodItem", "IngestionService", "IngestionSummary", "load_food_items"]
