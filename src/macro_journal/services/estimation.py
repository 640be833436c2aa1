"""Nutrient estimation and recipe decomposition using LLMs."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from macro_journal.domain.catalog import CatalogItem, ServingUnit
from macro_journal.domain.errors import ResolutionError
from macro_journal.domain.estimation import (
    IngredientSuggestion,
    NutrientEstimate,
    RecipeDecomposition,
)
from macro_journal.domain.nutrients import NUTRIENT_FIELDS, NutrientVector

_logger = logging.getLogger(__name__)

_NULLABLE_AMOUNT = {"anyOf": [{"type": "number", "minimum": 0.0}, {"type": "null"}]}

NUTRIENT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {nutrient.value: _NULLABLE_AMOUNT for nutrient in NUTRIENT_FIELDS},
    "required": [nutrient.value for nutrient in NUTRIENT_FIELDS],
    "additionalProperties": False,
}

INGREDIENTS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "number", "minimum": 0.0},
                    "unit": {
                        "type": "string",
                        "enum": [unit.value for unit in ServingUnit],
                    },
                    "food_item_id": {"anyOf": [{"type": "string"}, {"type": "null"}]},
                    "multiplier": {
                        "anyOf": [{"type": "number", "minimum": 0.0}, {"type": "null"}]
                    },
                },
                "required": ["name", "quantity", "unit", "food_item_id", "multiplier"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["ingredients"],
    "additionalProperties": False,
}


class NutrientClient(Protocol):
    """Interface for LLM structured completions."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured output matching schema."""


@dataclass
class NutrientEstimationService:
    """Service that prepares estimation prompts and validates results."""

    client: NutrientClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def resolve(
        self,
        name: str,
        serving_qty: float,
        serving_unit: ServingUnit | str,
        context: str | None = None,
    ) -> NutrientVector:
        """Estimate the nutrients of one serving of a food."""
        unit = str(serving_unit)
        prompt = (
            f'Estimate the nutrient content of {serving_qty:g} {unit} of "{name}". '
            "Return grams of protein, fat, net carbohydrates excluding fiber "
            "(carbs), fibers, sugar, monounsaturated fat (mufa), polyunsaturated "
            "fat (pufa), saturated fat (sfa), omega3 and omega6, plus the "
            "glycemic_load of the serving. Use null for values you cannot "
            "estimate."
        )
        if context:
            prompt += f"\nAdditional context: {context}"
        raw = await self._complete("nutrient_estimate", NUTRIENT_SCHEMA, prompt)
        try:
            estimate = NutrientEstimate.model_validate(raw)
        except PydanticValidationError as exc:
            raise ResolutionError(f"Malformed nutrient estimate for {name!r}") from exc
        vector = NutrientVector(**estimate.model_dump())
        if all(value is None for value in vector.as_dict().values()):
            raise ResolutionError(f"No nutrient values returned for {name!r}")
        return vector

    async def decompose(
        self,
        recipe_name: str,
        catalog: list[CatalogItem],
        context: str | None = None,
    ) -> list[IngredientSuggestion]:
        """Split a recipe into ingredients, matching existing catalog items."""
        known = {item.id: item for item in catalog}
        catalog_lines = "\n".join(
            f"- {item.id}: {item.name} (serving {item.serving_label})"
            for item in catalog
        )
        prompt = (
            f'List the ingredients of one batch of "{recipe_name}". '
            "When an ingredient matches a catalog item below, set food_item_id "
            "to its id and multiplier to the number of catalog servings used. "
            "Otherwise set both to null. Always give quantity and unit "
            "(g, dl, pcs or portion).\n"
            f"Catalog:\n{catalog_lines or '- (empty)'}"
        )
        if context:
            prompt += f"\nAdditional context: {context}"
        raw = await self._complete("recipe_ingredients", INGREDIENTS_SCHEMA, prompt)
        try:
            decomposition = RecipeDecomposition.model_validate(raw)
        except PydanticValidationError as exc:
            raise ResolutionError(
                f"Malformed ingredient list for {recipe_name!r}"
            ) from exc

        suggestions: list[IngredientSuggestion] = []
        for entry in decomposition.ingredients:
            try:
                suggestion = IngredientSuggestion.model_validate(entry)
            except PydanticValidationError:
                _logger.warning("Dropping malformed ingredient: %r", entry)
                continue
            if suggestion.food_item_id is not None and (
                suggestion.food_item_id not in known or suggestion.multiplier is None
            ):
                suggestion = suggestion.model_copy(
                    update={"food_item_id": None, "multiplier": None}
                )
            suggestions.append(suggestion)
        if not suggestions:
            raise ResolutionError(f"No usable ingredients for {recipe_name!r}")
        return suggestions

    async def _complete(
        self, schema_name: str, schema: dict[str, object], prompt: str
    ) -> dict[str, object]:
        try:
            return await self.client.complete(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema_name=schema_name,
                schema=schema,
                prompt=prompt,
            )
        except Exception as exc:
            _logger.warning("Estimation %s failed: %s", schema_name, exc)
            raise ResolutionError(f"Estimation request failed: {exc}") from exc
