"""Domain models for recipe synthesis working sets."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID, uuid4

from macro_journal.domain.catalog import CatalogItem, ServingUnit
from macro_journal.domain.errors import NotFoundError


class IngredientStatus(StrEnum):
    """Resolution state of a recipe ingredient."""

    IDLE = "idle"
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"


@dataclass
class RecipeIngredient:
    """An ingredient in a recipe draft.

    Ingredients referencing an existing catalog item start out ``done``;
    new ones start ``idle`` and receive a catalog item once resolved.
    """

    name: str
    quantity: float
    unit: ServingUnit
    multiplier: float = 1.0
    food_item: CatalogItem | None = None
    status: IngredientStatus = IngredientStatus.IDLE
    error: str | None = None
    id: UUID = field(default_factory=uuid4)

    @property
    def needs_resolution(self) -> bool:
        """Return True when the ingredient still needs an AI lookup."""
        return self.status in {IngredientStatus.IDLE, IngredientStatus.ERROR}


@dataclass
class RecipeDraft:
    """In-memory working set for an AI-assisted recipe."""

    user_id: UUID
    name: str
    ingredients: list[RecipeIngredient] = field(default_factory=list)
    context: str | None = None
    id: UUID = field(default_factory=uuid4)

    @property
    def can_create_recipe(self) -> bool:
        """Return True when every ingredient is resolved."""
        return bool(self.ingredients) and all(
            ingredient.status is IngredientStatus.DONE
            for ingredient in self.ingredients
        )

    def pending(self) -> list[RecipeIngredient]:
        """Return ingredients that are idle or failed."""
        return [item for item in self.ingredients if item.needs_resolution]

    def failed(self) -> list[RecipeIngredient]:
        """Return ingredients whose resolution failed."""
        return [
            item for item in self.ingredients if item.status is IngredientStatus.ERROR
        ]

    def get(self, ingredient_id: UUID) -> RecipeIngredient:
        """Return an ingredient by id."""
        for ingredient in self.ingredients:
            if ingredient.id == ingredient_id:
                return ingredient
        raise NotFoundError(f"Ingredient {ingredient_id} not found")

    def remove(self, ingredient_id: UUID) -> RecipeIngredient:
        """Drop an ingredient from the working set."""
        ingredient = self.get(ingredient_id)
        self.ingredients.remove(ingredient)
        return ingredient
