"""Energy derivation from macronutrients.

Uses thermic-effect adjusted factors instead of the 4/4/9 Atwater values:
protein 3 kcal/g, net carbs 3.7 kcal/g, fibers 2 kcal/g and fat 9 kcal/g.
Carbs are stored as net carbs, but fibers are subtracted again (floored at 0)
in case a source reported gross carbohydrate.
"""

from macro_journal.domain.errors import ValidationError
from macro_journal.domain.nutrients import Nutrient, NutrientVector, round_half_up

KCAL_PER_GRAM: dict[Nutrient, float] = {
    Nutrient.PROTEIN: 3.0,
    Nutrient.CARBS: 3.7,
    Nutrient.FIBERS: 2.0,
    Nutrient.FAT: 9.0,
}


def net_carbs(nutrients: NutrientVector) -> float:
    """Return carbs minus fibers, never below zero."""
    return max(
        0.0, nutrients.amount(Nutrient.CARBS) - nutrients.amount(Nutrient.FIBERS)
    )


def kcal_contribution(nutrients: NutrientVector, nutrient: Nutrient) -> float:
    """Return the energy supplied by one energy-bearing nutrient."""
    if nutrient not in KCAL_PER_GRAM:
        raise ValidationError(f"{nutrient.value} does not contribute energy")
    if nutrient is Nutrient.CARBS:
        grams = net_carbs(nutrients)
    else:
        grams = nutrients.amount(nutrient)
    return grams * KCAL_PER_GRAM[nutrient]


def raw_kcal(nutrients: NutrientVector) -> float:
    """Return unrounded energy for use in further calculations."""
    return sum(kcal_contribution(nutrients, nutrient) for nutrient in KCAL_PER_GRAM)


def calculate_kcal(nutrients: NutrientVector) -> int:
    """Return energy in kcal rounded half-up to an integer."""
    return int(round_half_up(raw_kcal(nutrients)))
