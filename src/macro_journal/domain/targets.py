"""Domain models for nutrition targets and their evaluation."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


@dataclass(frozen=True)
class NutritionTarget:
    """A bound on one nutrient, or on a ratio of two when nutrient_2 is set."""

    id: UUID
    user_id: UUID
    nutrient_1: str
    nutrient_2: str | None
    min_value: float | None
    max_value: float | None

    @property
    def is_relative(self) -> bool:
        """Return True when the target bounds a ratio or percentage."""
        return self.nutrient_2 is not None


class EvaluationError(StrEnum):
    """Reasons a target has no actual value."""

    UNKNOWN_NUTRIENT = "unknown_nutrient"
    UNSUPPORTED_COMBINATION = "unsupported_combination"
    ZERO_DENOMINATOR = "zero_denominator"


class TargetStatus(StrEnum):
    """Where an actual value falls relative to the bounds."""

    BELOW_MIN = "below_min"
    IN_RANGE = "in_range"
    ABOVE_MAX = "above_max"
    NO_BOUNDS = "no_bounds"
    UNAVAILABLE = "unavailable"


class ZoneKind(StrEnum):
    """Rendering class of a progress bar segment."""

    IN_RANGE = "in_range"
    OUT_OF_RANGE = "out_of_range"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class DisplayRange:
    """Scale a target's progress is drawn on."""

    display_min: float
    display_max: float


@dataclass(frozen=True)
class Zone:
    """Segment of the display range."""

    start: float
    end: float
    kind: ZoneKind


@dataclass(frozen=True)
class TargetEvaluation:
    """Outcome of evaluating one target against totals."""

    target: NutritionTarget
    actual_value: float | None
    error: EvaluationError | None
    detail: str | None
    status: TargetStatus
    display_range: DisplayRange
    zones: list[Zone]
