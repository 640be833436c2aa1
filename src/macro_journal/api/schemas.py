"""Request models and response shaping for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from macro_journal.domain.catalog import CatalogItem, ServingUnit
from macro_journal.domain.food_log import LogEntry
from macro_journal.domain.recipes import RecipeDraft, RecipeIngredient
from macro_journal.domain.stats import DailyTotals, DaySummary
from macro_journal.domain.targets import NutritionTarget, TargetEvaluation
from macro_journal.services.aggregation import contribution
from macro_journal.services.energy import calculate_kcal


class FoodEstimateRequest(BaseModel):
    """Request to estimate nutrients for a food that is not yet stored."""

    name: str = Field(min_length=1)
    serving_qty: float = Field(gt=0.0)
    serving_unit: ServingUnit
    context: str | None = None


class LogCreateRequest(BaseModel):
    """Request to log a catalog item."""

    food_item_id: UUID
    multiplier: float | str = 1.0
    logged_at: datetime | None = None


class LogUpdateRequest(BaseModel):
    """Inline edit of a log entry."""

    multiplier: float | str | None = None
    logged_at: datetime | None = None


class SelectionRequest(BaseModel):
    """A set of log entries picked by the user."""

    entry_ids: list[UUID] = Field(min_length=1)


class TargetRequest(BaseModel):
    """Target definition; an existing target for the same pair is replaced."""

    nutrient_1: str
    nutrient_2: str | None = None
    min_value: float | None = None
    max_value: float | None = None


class TimezoneRequest(BaseModel):
    """IANA timezone name."""

    timezone: str


class RecipeFromLogsRequest(BaseModel):
    """Request to sum log entries into a recipe."""

    name: str = Field(min_length=1)
    entry_ids: list[UUID] = Field(min_length=1)
    serving_unit: ServingUnit = ServingUnit.RECIPE_SERVING


class RecipePlanRequest(BaseModel):
    """Request to decompose a recipe name into ingredients."""

    name: str = Field(min_length=1)
    context: str | None = None


class RecipeFinalizeRequest(BaseModel):
    """Options for persisting a resolved recipe draft."""

    serving_unit: ServingUnit = ServingUnit.RECIPE_SERVING


def item_payload(item: CatalogItem) -> dict[str, object]:
    """Serialize a catalog item with its derived kcal."""
    return {
        "id": str(item.id),
        "name": item.name,
        "serving_qty": item.serving_qty,
        "serving_unit": item.serving_unit.value,
        "serving_label": item.serving_label,
        "comment": item.comment,
        "nutrients": item.nutrients.as_dict(),
        "kcal": calculate_kcal(item.nutrients),
        "created_at": item.created_at.isoformat() if item.created_at else None,
    }


def entry_payload(entry: LogEntry) -> dict[str, object]:
    """Serialize a log entry and its current contribution."""
    nutrients = contribution(entry)
    return {
        "id": str(entry.id),
        "food_item_id": str(entry.food_item_id),
        "multiplier": entry.multiplier,
        "logged_at": entry.logged_at.isoformat(),
        "food_item": item_payload(entry.food_item) if entry.food_item else None,
        "nutrients": nutrients.rounded().as_dict() if nutrients else None,
        "kcal": calculate_kcal(nutrients) if nutrients else None,
    }


def target_payload(target: NutritionTarget) -> dict[str, object]:
    """Serialize a target definition."""
    return {
        "id": str(target.id),
        "nutrient_1": target.nutrient_1,
        "nutrient_2": target.nutrient_2,
        "min_value": target.min_value,
        "max_value": target.max_value,
    }


def evaluation_payload(evaluation: TargetEvaluation) -> dict[str, object]:
    """Serialize a target evaluation for a progress bar."""
    actual = evaluation.actual_value
    return {
        "target": target_payload(evaluation.target),
        "actual_value": round(actual, 1) if actual is not None else None,
        "error": evaluation.error.value if evaluation.error else None,
        "detail": evaluation.detail,
        "status": evaluation.status.value,
        "display_min": evaluation.display_range.display_min,
        "display_max": evaluation.display_range.display_max,
        "zones": [
            {"start": zone.start, "end": zone.end, "kind": zone.kind.value}
            for zone in evaluation.zones
        ],
    }


def summary_payload(summary: DaySummary) -> dict[str, object]:
    """Serialize totals, kcal and target progress."""
    return {
        "day": summary.day.isoformat() if summary.day else None,
        "count": summary.totals.count,
        "kcal": summary.kcal,
        "totals": summary.display_totals.as_dict(),
        "targets": [evaluation_payload(item) for item in summary.targets],
        "entries": [entry_payload(entry) for entry in summary.entries],
    }


def daily_payload(daily: DailyTotals) -> dict[str, object]:
    """Serialize one row of a multi-day report."""
    return {
        "day": daily.day.isoformat(),
        "count": daily.totals.count,
        "kcal": daily.kcal,
        "totals": daily.totals.display().as_dict(),
    }


def ingredient_payload(ingredient: RecipeIngredient) -> dict[str, object]:
    """Serialize a draft ingredient and its resolution state."""
    return {
        "id": str(ingredient.id),
        "name": ingredient.name,
        "quantity": ingredient.quantity,
        "unit": ingredient.unit.value,
        "multiplier": ingredient.multiplier,
        "status": ingredient.status.value,
        "error": ingredient.error,
        "food_item": item_payload(ingredient.food_item)
        if ingredient.food_item
        else None,
    }


def draft_payload(draft: RecipeDraft) -> dict[str, object]:
    """Serialize a recipe draft."""
    return {
        "id": str(draft.id),
        "name": draft.name,
        "context": draft.context,
        "can_create_recipe": draft.can_create_recipe,
        "ingredients": [ingredient_payload(item) for item in draft.ingredients],
    }
