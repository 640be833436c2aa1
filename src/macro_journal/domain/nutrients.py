"""Nutrient keys and the nutrient vector value type."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum

from macro_journal.domain.errors import ValidationError


class Nutrient(StrEnum):
    """Closed set of nutrient keys, including derived calories."""

    PROTEIN = "protein"
    FAT = "fat"
    CARBS = "carbs"
    FIBERS = "fibers"
    SUGAR = "sugar"
    MUFA = "mufa"
    PUFA = "pufa"
    SFA = "sfa"
    GLYCEMIC_LOAD = "glycemic_load"
    OMEGA3 = "omega3"
    OMEGA6 = "omega6"
    CALORIES = "calories"

    @property
    def is_derived(self) -> bool:
        """Return True for values computed from other nutrients."""
        return self is Nutrient.CALORIES

    @classmethod
    def parse(cls, value: object) -> "Nutrient":
        """Convert a raw key into a nutrient, rejecting unknown names."""
        if isinstance(value, Nutrient):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown nutrient: {value!r}") from exc


NUTRIENT_FIELDS: tuple[Nutrient, ...] = tuple(
    nutrient for nutrient in Nutrient if not nutrient.is_derived
)


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round half away from zero, unlike the banker's rounding of round()."""
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class NutrientVector:
    """Nutrient amounts for one serving; absent fields count as zero."""

    protein: float | None = None
    fat: float | None = None
    carbs: float | None = None
    fibers: float | None = None
    sugar: float | None = None
    mufa: float | None = None
    pufa: float | None = None
    sfa: float | None = None
    glycemic_load: float | None = None
    omega3: float | None = None
    omega6: float | None = None

    @classmethod
    def zero(cls) -> "NutrientVector":
        """Return a vector with every field set to 0."""
        return cls(**{nutrient.value: 0.0 for nutrient in NUTRIENT_FIELDS})

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "NutrientVector":
        """Build a vector from a mapping, ignoring unrelated keys."""
        values: dict[str, float | None] = {}
        for nutrient in NUTRIENT_FIELDS:
            values[nutrient.value] = parse_amount(nutrient, data.get(nutrient.value))
        return cls(**values)

    def value(self, nutrient: Nutrient) -> float | None:
        """Return the stored value, or None when absent."""
        if nutrient.is_derived:
            raise ValidationError(f"{nutrient.value} is derived, not stored")
        return getattr(self, nutrient.value)

    def amount(self, nutrient: Nutrient) -> float:
        """Return the stored value, treating absent as 0."""
        return self.value(nutrient) or 0.0

    def scaled(self, factor: float) -> "NutrientVector":
        """Return every field multiplied by factor."""
        return NutrientVector(
            **{
                nutrient.value: self.amount(nutrient) * factor
                for nutrient in NUTRIENT_FIELDS
            }
        )

    def rounded(self, decimals: int = 1) -> "NutrientVector":
        """Return a copy rounded for display."""
        values = {}
        for item in fields(self):
            raw = getattr(self, item.name)
            values[item.name] = None if raw is None else round_half_up(raw, decimals)
        return replace(self, **values)

    def as_dict(self) -> dict[str, float | None]:
        """Return the vector keyed by nutrient name."""
        return {nutrient.value: self.value(nutrient) for nutrient in NUTRIENT_FIELDS}

    def __add__(self, other: "NutrientVector") -> "NutrientVector":
        if not isinstance(other, NutrientVector):
            return NotImplemented
        values: dict[str, float | None] = {}
        for nutrient in NUTRIENT_FIELDS:
            left = self.value(nutrient)
            right = other.value(nutrient)
            if left is None and right is None:
                values[nutrient.value] = None
            else:
                values[nutrient.value] = (left or 0.0) + (right or 0.0)
        return NutrientVector(**values)


def parse_amount(nutrient: Nutrient, raw: object) -> float | None:
    """Return a non-negative amount, None for blank input."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid value for {nutrient.value}: {raw!r}")
    if isinstance(raw, int | float):
        amount = float(raw)
    elif isinstance(raw, str):
        try:
            amount = float(raw)
        except ValueError as exc:
            raise ValidationError(
                f"Invalid value for {nutrient.value}: {raw!r}"
            ) from exc
    else:
        raise ValidationError(f"Invalid value for {nutrient.value}: {raw!r}")
    if not math.isfinite(amount) or amount < 0:
        raise ValidationError(f"{nutrient.value} must be a non-negative number")
    return amount
