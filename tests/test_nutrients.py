"""Tests for the nutrient vector."""

import math

import pytest

from macro_journal.domain.errors import ValidationError
from macro_journal.domain.nutrients import (
    Nutrient,
    NutrientVector,
    parse_amount,
    round_half_up,
)


def test_addition_keeps_fields_absent_on_both_sides() -> None:
    total = NutrientVector(protein=1.5) + NutrientVector(protein=2.0, fat=1.0)

    assert total.protein == pytest.approx(3.5)
    assert total.fat == pytest.approx(1.0)
    assert total.sugar is None


def test_scaling_fills_absent_fields_with_zero() -> None:
    scaled = NutrientVector(protein=4).scaled(0.5)

    assert scaled.protein == pytest.approx(2.0)
    assert scaled.omega3 == 0.0


def test_from_mapping_accepts_numeric_strings_and_blanks() -> None:
    vector = NutrientVector.from_mapping(
        {"protein": "12.5", "fat": "", "name": "ignored", "omega6": 3}
    )

    assert vector.protein == pytest.approx(12.5)
    assert vector.fat is None
    assert vector.omega6 == pytest.approx(3.0)


@pytest.mark.parametrize("raw", [-1, "abc", math.inf, True, [1]])
def test_parse_amount_rejects_invalid_input(raw: object) -> None:
    with pytest.raises(ValidationError):
        parse_amount(Nutrient.PROTEIN, raw)


def test_calories_are_not_stored() -> None:
    with pytest.raises(ValidationError):
        NutrientVector().value(Nutrient.CALORIES)


def test_unknown_nutrient_key_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Nutrient.parse("vitamin_c")

    assert Nutrient.parse(" Omega3 ") is Nutrient.OMEGA3


def test_round_half_up() -> None:
    assert round_half_up(0.5) == 1.0
    assert round_half_up(2.5) == 3.0
    assert round_half_up(1.25, 1) == 1.3


def test_rounded_vector_preserves_absent_fields() -> None:
    rounded = NutrientVector(protein=1.04, fat=None).rounded(1)

    assert rounded.protein == 1.0
    assert rounded.fat is None
