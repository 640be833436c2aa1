"""Models for AI nutrient estimation results."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from macro_journal.domain.catalog import ServingUnit


class NutrientEstimate(BaseModel):
    """Structured output for a single food's nutrients per serving."""

    protein: float | None = Field(default=None, ge=0.0)
    fat: float | None = Field(default=None, ge=0.0)
    carbs: float | None = Field(default=None, ge=0.0)
    fibers: float | None = Field(default=None, ge=0.0)
    sugar: float | None = Field(default=None, ge=0.0)
    mufa: float | None = Field(default=None, ge=0.0)
    pufa: float | None = Field(default=None, ge=0.0)
    sfa: float | None = Field(default=None, ge=0.0)
    glycemic_load: float | None = Field(default=None, ge=0.0)
    omega3: float | None = Field(default=None, ge=0.0)
    omega6: float | None = Field(default=None, ge=0.0)


class IngredientSuggestion(BaseModel):
    """Single ingredient proposed by a recipe decomposition."""

    name: str = Field(min_length=1)
    quantity: float = Field(gt=0.0)
    unit: ServingUnit
    food_item_id: UUID | None = None
    multiplier: float | None = Field(default=None, gt=0.0)


class RecipeDecomposition(BaseModel):
    """Structured output for a recipe decomposition."""

    ingredients: list[dict[str, Any]]
