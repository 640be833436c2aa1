"""Domain models for the food catalog."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from macro_journal.domain.nutrients import NutrientVector


class ServingUnit(StrEnum):
    """Units a catalog serving can be defined in."""

    GRAMS = "g"
    DECILITERS = "dl"
    PIECES = "pcs"
    PORTION = "portion"
    RECIPE_SERVING = "recipe serving"


@dataclass(frozen=True)
class CatalogItem:
    """A food item whose nutrients are given per serving_qty serving_unit."""

    id: UUID
    user_id: UUID
    name: str
    serving_qty: float
    serving_unit: ServingUnit
    nutrients: NutrientVector
    comment: str | None = None
    created_at: datetime | None = None

    @property
    def serving_label(self) -> str:
        """Human readable serving, e.g. '100 g'."""
        qty = f"{self.serving_qty:g}"
        return f"{qty} {self.serving_unit.value}"
