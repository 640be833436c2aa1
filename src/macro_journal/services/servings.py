"""Serving multiplier validation and scaling."""

import math

from macro_journal.domain.errors import ValidationError
from macro_journal.domain.nutrients import NutrientVector


def parse_multiplier(value: object) -> float:
    """Return a finite positive multiplier or raise ValidationError."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"Invalid multiplier: {value!r}")
    if isinstance(value, int | float):
        multiplier = float(value)
    elif isinstance(value, str):
        try:
            multiplier = float(value.strip().replace(",", "."))
        except ValueError as exc:
            raise ValidationError(f"Invalid multiplier: {value!r}") from exc
    else:
        raise ValidationError(f"Invalid multiplier: {value!r}")
    if not math.isfinite(multiplier) or multiplier <= 0:
        raise ValidationError("Multiplier must be a positive number")
    return multiplier


def portion_nutrients(nutrients: NutrientVector, multiplier: object) -> NutrientVector:
    """Scale a per-serving vector by a serving multiplier.

    A multiplier of 0.5 means half of the item's defined serving, whatever
    its unit.
    """
    return nutrients.scaled(parse_multiplier(multiplier))
