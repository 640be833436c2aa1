"""Recipe synthesis from log selections or AI ingredient lists."""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from macro_journal.domain.catalog import CatalogItem, ServingUnit
from macro_journal.domain.errors import RecipeNotReadyError, ValidationError
from macro_journal.domain.food_log import LogEntry
from macro_journal.domain.nutrients import NutrientVector
from macro_journal.domain.recipes import (
    IngredientStatus,
    RecipeDraft,
    RecipeIngredient,
)
from macro_journal.services.aggregation import Portion, aggregate
from macro_journal.services.catalog import CatalogService
from macro_journal.services.estimation import NutrientEstimationService

RECIPE_UNITS = {ServingUnit.RECIPE_SERVING, ServingUnit.PORTION}

_logger = logging.getLogger(__name__)


@dataclass
class RecipeService:
    """Builds catalog items out of several portions."""

    catalog_service: CatalogService
    estimation_service: NutrientEstimationService

    def create_from_log_entries(
        self,
        user_id: UUID,
        name: str,
        entries: list[LogEntry],
        serving_unit: ServingUnit = ServingUnit.RECIPE_SERVING,
    ) -> CatalogItem:
        """Sum selected log entries into a new catalog item."""
        resolved = [entry for entry in entries if entry.food_item is not None]
        if not resolved:
            raise ValidationError("None of the selected entries can be resolved")
        totals = aggregate(resolved)
        return self._persist(
            user_id, name, totals.nutrients, build_recipe_comment(resolved), serving_unit
        )

    async def plan_recipe(
        self, user_id: UUID, recipe_name: str, context: str | None = None
    ) -> RecipeDraft:
        """Ask the AI collaborator for ingredients and build a working set."""
        name = recipe_name.strip()
        if not name:
            raise ValidationError("Recipe name must not be empty")
        catalog = self.catalog_service.list_for_context(user_id)
        known = {item.id: item for item in catalog}
        suggestions = await self.estimation_service.decompose(name, catalog, context)
        ingredients: list[RecipeIngredient] = []
        for suggestion in suggestions:
            item = known.get(suggestion.food_item_id) if suggestion.food_item_id else None
            if item is not None and suggestion.multiplier is not None:
                ingredients.append(
                    RecipeIngredient(
                        name=item.name,
                        quantity=suggestion.quantity,
                        unit=suggestion.unit,
                        multiplier=suggestion.multiplier,
                        food_item=item,
                        status=IngredientStatus.DONE,
                    )
                )
            else:
                ingredients.append(
                    RecipeIngredient(
                        name=suggestion.name,
                        quantity=suggestion.quantity,
                        unit=suggestion.unit,
                    )
                )
        return RecipeDraft(
            user_id=user_id, name=name, ingredients=ingredients, context=context
        )

    async def resolve_ingredients(self, user_id: UUID, draft: RecipeDraft) -> RecipeDraft:
        """Resolve every idle or failed ingredient concurrently."""
        await self._resolve_batch(user_id, draft, draft.pending())
        return draft

    async def retry_ingredient(
        self, user_id: UUID, draft: RecipeDraft, ingredient_id: UUID
    ) -> RecipeDraft:
        """Resolve a single ingredient again, leaving the others untouched."""
        ingredient = draft.get(ingredient_id)
        if ingredient.needs_resolution:
            await self._resolve_batch(user_id, draft, [ingredient])
        return draft

    def remove_ingredient(self, draft: RecipeDraft, ingredient_id: UUID) -> RecipeDraft:
        """Drop an ingredient; nothing has been summed or persisted yet."""
        draft.remove(ingredient_id)
        return draft

    def finalize(
        self,
        user_id: UUID,
        draft: RecipeDraft,
        serving_unit: ServingUnit = ServingUnit.RECIPE_SERVING,
    ) -> CatalogItem:
        """Persist the recipe once every ingredient is resolved."""
        if not draft.can_create_recipe:
            outstanding = [
                item.name
                for item in draft.ingredients
                if item.status is not IngredientStatus.DONE
            ]
            raise RecipeNotReadyError(
                f"Unresolved ingredients: {', '.join(outstanding) or 'none listed'}"
            )
        totals = aggregate(draft.ingredients)
        return self._persist(
            user_id,
            draft.name,
            totals.nutrients,
            build_recipe_comment(draft.ingredients),
            serving_unit,
        )

    async def _resolve_batch(
        self, user_id: UUID, draft: RecipeDraft, ingredients: list[RecipeIngredient]
    ) -> None:
        for ingredient in ingredients:
            ingredient.status = IngredientStatus.PROCESSING
            ingredient.error = None
        outcomes = await asyncio.gather(
            *(
                self._resolve_one(user_id, ingredient, draft.context)
                for ingredient in ingredients
            ),
            return_exceptions=True,
        )
        for ingredient, outcome in zip(ingredients, outcomes, strict=True):
            if isinstance(outcome, CatalogItem):
                ingredient.food_item = outcome
                ingredient.multiplier = 1.0
                ingredient.status = IngredientStatus.DONE
            elif isinstance(outcome, Exception):
                _logger.warning(
                    "Ingredient %r of %r failed: %s", ingredient.name, draft.name, outcome
                )
                ingredient.status = IngredientStatus.ERROR
                ingredient.error = str(outcome) or type(outcome).__name__
            else:
                raise outcome

    async def _resolve_one(
        self, user_id: UUID, ingredient: RecipeIngredient, context: str | None
    ) -> CatalogItem:
        nutrients = await self.estimation_service.resolve(
            ingredient.name, ingredient.quantity, ingredient.unit, context
        )
        return self.catalog_service.create_item(
            user_id,
            {
                "name": ingredient.name,
                "serving_qty": ingredient.quantity,
                "serving_unit": ingredient.unit.value,
                "comment": "AI estimate",
                **nutrients.as_dict(),
            },
        )

    def _persist(
        self,
        user_id: UUID,
        name: str,
        nutrients: NutrientVector,
        comment: str,
        serving_unit: ServingUnit,
    ) -> CatalogItem:
        if serving_unit not in RECIPE_UNITS:
            raise ValidationError(f"Recipes cannot be served in {serving_unit.value!r}")
        return self.catalog_service.create_item(
            user_id,
            {
                "name": name,
                "serving_qty": 1,
                "serving_unit": serving_unit.value,
                "comment": comment,
                **nutrients.as_dict(),
            },
        )


def build_recipe_comment(portions: Iterable[Portion]) -> str:
    """Describe the constituents of a recipe, one line each."""
    lines = ["Recipe of:"]
    for portion in portions:
        item = portion.food_item
        if item is None:
            continue
        lines.append(f"- {item.name} ({item.serving_label}) x {portion.multiplier:g}")
    return "\n".join(lines)
