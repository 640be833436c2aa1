"""Nutrition target evaluation and progress range normalization."""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol
from uuid import UUID

from macro_journal.domain.errors import NotFoundError, ValidationError
from macro_journal.domain.nutrients import Nutrient, NutrientVector
from macro_journal.domain.targets import (
    DisplayRange,
    EvaluationError,
    NutritionTarget,
    TargetEvaluation,
    TargetStatus,
    Zone,
    ZoneKind,
)
from macro_journal.services.energy import (
    KCAL_PER_GRAM,
    calculate_kcal,
    kcal_contribution,
    raw_kcal,
)

MIN_DISPLAY_MAX = 10.0
DEFAULT_DISPLAY_MAX = 100.0
ACTUAL_PADDING = 1.05
ABSOLUTE_MAX_HEADROOM = 1.2
ABSOLUTE_MIN_HEADROOM = 2.0

_logger = logging.getLogger(__name__)


class RelativeBasis(StrEnum):
    """How numerator and denominator of a relative target are measured."""

    KCAL_SHARE = "kcal_share"
    GRAM_SHARE = "gram_share"
    GRAM_RATIO = "gram_ratio"


@dataclass(frozen=True)
class RelativeRule:
    """Conversion and display policy for one supported nutrient pair."""

    basis: RelativeBasis
    default_display_max: float = DEFAULT_DISPLAY_MAX
    max_headroom: float = ABSOLUTE_MAX_HEADROOM
    seed_from_max: bool = False


_KCAL_SHARE = RelativeRule(RelativeBasis.KCAL_SHARE)
_GRAM_SHARE = RelativeRule(RelativeBasis.GRAM_SHARE)

# Ratios are stored as percentages: an omega6:omega3 ratio of 4:1 is 400.
RELATIVE_RULES: dict[tuple[Nutrient, Nutrient], RelativeRule] = {
    **{(nutrient, Nutrient.CALORIES): _KCAL_SHARE for nutrient in KCAL_PER_GRAM},
    (Nutrient.MUFA, Nutrient.FAT): _GRAM_SHARE,
    (Nutrient.PUFA, Nutrient.FAT): _GRAM_SHARE,
    (Nutrient.SFA, Nutrient.FAT): _GRAM_SHARE,
    (Nutrient.OMEGA6, Nutrient.OMEGA3): RelativeRule(
        RelativeBasis.GRAM_RATIO,
        default_display_max=10000.0,
        max_headroom=2.0,
        seed_from_max=True,
    ),
    (Nutrient.PUFA, Nutrient.SFA): RelativeRule(RelativeBasis.GRAM_RATIO),
}


class TargetRepository(Protocol):
    """Persistence interface for nutrition targets."""

    def list_targets(self, user_id: UUID) -> list[NutritionTarget]:
        """Return all targets for a user."""

    def get_target(self, target_id: UUID) -> NutritionTarget | None:
        """Return a target by id, if present."""

    def find_target(
        self, user_id: UUID, nutrient_1: str, nutrient_2: str | None
    ) -> NutritionTarget | None:
        """Return the user's target for a nutrient pair, if present."""

    def create_target(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NutritionTarget:
        """Create a target and return it."""

    def update_target(
        self, target_id: UUID, payload: dict[str, object]
    ) -> NutritionTarget:
        """Update a target and return it."""

    def delete_target(self, target_id: UUID) -> None:
        """Delete a target."""


@dataclass
class TargetService:
    """Application service for managing targets."""

    repository: TargetRepository

    def list_targets(self, user_id: UUID) -> list[NutritionTarget]:
        """Return the user's targets."""
        return self.repository.list_targets(user_id)

    def save_target(self, user_id: UUID, payload: dict[str, object]) -> NutritionTarget:
        """Create a target, or update the one defined for the same pair."""
        cleaned = validate_target_payload(payload)
        existing = self.repository.find_target(
            user_id, str(cleaned["nutrient_1"]), cleaned["nutrient_2"]
        )
        if existing is not None:
            return self.repository.update_target(existing.id, cleaned)
        return self.repository.create_target(user_id, cleaned)

    def delete_target(self, user_id: UUID, target_id: UUID) -> None:
        """Delete one of the user's targets."""
        target = self.repository.get_target(target_id)
        if target is None or target.user_id != user_id:
            raise NotFoundError(f"Target {target_id} not found")
        self.repository.delete_target(target_id)


def validate_target_payload(payload: dict[str, object]) -> dict[str, object]:
    """Normalize a target definition, raising ValidationError when invalid."""
    nutrient_1 = Nutrient.parse(payload.get("nutrient_1"))
    raw_nutrient_2 = payload.get("nutrient_2")
    nutrient_2 = None if raw_nutrient_2 in (None, "") else Nutrient.parse(raw_nutrient_2)
    if nutrient_1 == nutrient_2:
        raise ValidationError("A relative target needs two different nutrients")
    min_value = _optional_bound("min_value", payload.get("min_value"))
    max_value = _optional_bound("max_value", payload.get("max_value"))
    if min_value is not None and max_value is not None and min_value > max_value:
        raise ValidationError("min_value must not exceed max_value")
    return {
        "nutrient_1": nutrient_1.value,
        "nutrient_2": nutrient_2.value if nutrient_2 else None,
        "min_value": min_value,
        "max_value": max_value,
    }


def evaluate_targets(
    targets: Iterable[NutritionTarget], totals: NutrientVector
) -> list[TargetEvaluation]:
    """Evaluate every target; failures are reported per target."""
    return [evaluate_target(target, totals) for target in targets]


def evaluate_target(target: NutritionTarget, totals: NutrientVector) -> TargetEvaluation:
    """Compute the actual value, status and display data for one target."""
    actual, error, detail = actual_value(target, totals)
    if error is not None:
        _logger.info(
            "Target %s/%s not evaluated: %s",
            target.nutrient_1,
            target.nutrient_2,
            error.value,
        )
    value_range = display_range(target, actual)
    return TargetEvaluation(
        target=target,
        actual_value=actual,
        error=error,
        detail=detail,
        status=classify(actual, target.min_value, target.max_value),
        display_range=value_range,
        zones=build_zones(target.min_value, target.max_value, value_range),
    )


def actual_value(
    target: NutritionTarget, totals: NutrientVector
) -> tuple[float | None, EvaluationError | None, str | None]:
    """Return the value to compare against the target's bounds.

    Relative targets are percentages of nutrient_1 over nutrient_2.
    """
    try:
        nutrient_1 = Nutrient.parse(target.nutrient_1)
        nutrient_2 = (
            Nutrient.parse(target.nutrient_2) if target.nutrient_2 is not None else None
        )
    except ValidationError as exc:
        return None, EvaluationError.UNKNOWN_NUTRIENT, str(exc)

    if nutrient_2 is None:
        if nutrient_1 is Nutrient.CALORIES:
            return float(calculate_kcal(totals)), None, None
        return totals.amount(nutrient_1), None, None

    rule = RELATIVE_RULES.get((nutrient_1, nutrient_2))
    if rule is None:
        return (
            None,
            EvaluationError.UNSUPPORTED_COMBINATION,
            f"Unsupported relative target {nutrient_1.value}/{nutrient_2.value}",
        )
    if rule.basis is RelativeBasis.KCAL_SHARE:
        numerator = kcal_contribution(totals, nutrient_1)
        denominator = raw_kcal(totals)
    else:
        numerator = totals.amount(nutrient_1)
        denominator = totals.amount(nutrient_2)
    if denominator <= 0:
        return (
            None,
            EvaluationError.ZERO_DENOMINATOR,
            f"Total {nutrient_2.value} is zero",
        )
    return numerator / denominator * 100.0, None, None


def display_range(target: NutritionTarget, actual: float | None) -> DisplayRange:
    """Return a 0..display_max scale covering the bounds and the actual value."""
    if target.is_relative:
        seed = _relative_seed(target)
    else:
        seed = _absolute_seed(target.min_value, target.max_value)
    padded = (actual or 0.0) * ACTUAL_PADDING
    display_max = max(seed, padded, MIN_DISPLAY_MAX)
    return DisplayRange(display_min=0.0, display_max=pretty_round_up(display_max))


def pretty_round_up(value: float) -> float:
    """Round up to a step that suits the magnitude of value."""
    if value < 30:
        step = 1
    elif value < 300:
        step = 10
    elif value < 3500:
        step = 100
    else:
        step = 1000
    # Guard against float noise such as 25 * 1.2 == 30.000000000000004.
    return float(math.ceil(round(value / step, 9)) * step)


def classify(
    actual: float | None, min_value: float | None, max_value: float | None
) -> TargetStatus:
    """Place an actual value relative to inclusive bounds."""
    if actual is None:
        return TargetStatus.UNAVAILABLE
    if min_value is None and max_value is None:
        return TargetStatus.NO_BOUNDS
    if min_value is not None and actual < min_value:
        return TargetStatus.BELOW_MIN
    if max_value is not None and actual > max_value:
        return TargetStatus.ABOVE_MAX
    return TargetStatus.IN_RANGE


def build_zones(
    min_value: float | None, max_value: float | None, value_range: DisplayRange
) -> list[Zone]:
    """Split the display range into in-range and out-of-range segments."""
    end = value_range.display_max

    def clamp(value: float) -> float:
        return min(max(value, value_range.display_min), end)

    start = value_range.display_min
    if min_value is not None and max_value is not None:
        return [
            Zone(start, clamp(min_value), ZoneKind.OUT_OF_RANGE),
            Zone(clamp(min_value), clamp(max_value), ZoneKind.IN_RANGE),
            Zone(clamp(max_value), end, ZoneKind.OUT_OF_RANGE),
        ]
    if min_value is not None:
        return [
            Zone(start, clamp(min_value), ZoneKind.OUT_OF_RANGE),
            Zone(clamp(min_value), end, ZoneKind.IN_RANGE),
        ]
    if max_value is not None:
        return [
            Zone(start, clamp(max_value), ZoneKind.IN_RANGE),
            Zone(clamp(max_value), end, ZoneKind.OUT_OF_RANGE),
        ]
    return [Zone(start, end, ZoneKind.NEUTRAL)]


def _absolute_seed(min_value: float | None, max_value: float | None) -> float:
    if max_value is not None:
        seed = max_value * ABSOLUTE_MAX_HEADROOM
    elif min_value is not None:
        seed = min_value * ABSOLUTE_MIN_HEADROOM
    else:
        seed = DEFAULT_DISPLAY_MAX
    return max(seed, MIN_DISPLAY_MAX)


def _relative_seed(target: NutritionTarget) -> float:
    rule = _rule_for(target) or _GRAM_SHARE
    max_value = target.max_value
    if max_value is None:
        return rule.default_display_max
    if rule.seed_from_max:
        return max_value * rule.max_headroom
    return max(rule.default_display_max, max_value * rule.max_headroom)


def _rule_for(target: NutritionTarget) -> RelativeRule | None:
    try:
        pair = (Nutrient.parse(target.nutrient_1), Nutrient.parse(target.nutrient_2))
    except ValidationError:
        return None
    return RELATIVE_RULES.get(pair)


def _optional_bound(name: str, value: object) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {name}: {value!r}")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid {name}: {value!r}") from exc
    if not math.isfinite(number) or number < 0:
        raise ValidationError(f"{name} must be a non-negative number")
    return number
