"""Loading of the static food dataset."""
from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from .exceptions import DatasetNotFoundError, IngestionError


class FoodItem(BaseModel):
    """One entry of the food dataset."""

    id: str
    text: str = Field(min_length=1)
    region: str | None = None
    type: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> str:
        return str(value)

    def document_text(self) -> str:
        """Text that gets embedded; origin and category help retrieval."""

        details = [part for part in (self.type, self.region) if part]
        if not details:
            return self.text
        return f"{self.text} ({', '.join(details)})"


_FOOD_LIST = TypeAdapter(list[FoodItem])


def load_food_items(path: Path) -> list[FoodItem]:
    """Read and validate the dataset; ids must be unique."""

    if not path.exists():
        raise DatasetNotFoundError(f"Food dataset not found at {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        items = _FOOD_LIST.validate_python(raw)
    except (OSError, ValueError, ValidationError) as exc:
        raise IngestionError(f"Food dataset at {path} is invalid: {exc}", cause=exc) from exc
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise IngestionError(f"Duplicate food id '{item.id}' in {path}")
        seen.add(item.id)
    return items


__all__ = ["FoodItem", "load_food_items"]
