import pytest

from nutrivision.domain.nutrition.sanitize import (
    MAX_CALORIES,
    MAX_MACRO_GRAMS,
    clamp,
    sanitize_record,
)
from nutrivision.models.nutrition import UNDETERMINED, NutritionRecord, coerce_macro

from tests.builders import make_food_entry


def test_clamp_bounds():
    assert clamp(-5, 100) == 0
    assert clamp(50, 100) == 50
    assert clamp(150, 100) == 100


def test_sanitize_clamps_out_of_range_values():
    record = NutritionRecord(calories=25000, protein=1500, carbs=999, fat=2000)

    clean = sanitize_record(record)

    assert clean.calories == MAX_CALORIES
    assert clean.protein == MAX_MACRO_GRAMS
    assert clean.carbs == 999
    assert clean.fat == MAX_MACRO_GRAMS


def test_sanitize_uses_configurable_bounds():
    record = NutritionRecord(calories=900, protein=90)

    clean = sanitize_record(record, max_calories=800, max_macro_grams=50)

    assert clean.calories == 800
    assert clean.protein == 50


def test_sanitize_keeps_entry_identity_and_trims_text():
    entry = make_food_entry(id="entry-9", description="  Суп  ", notes="  вкусно ", calories=20000)

    clean = sanitize_record(entry)

    assert clean.id == "entry-9"
    assert clean.user_id == entry.user_id
    assert clean.description == "Суп"
    assert clean.notes == "вкусно"
    assert clean.calories == MAX_CALORIES


def test_sanitize_blank_description():
    record = NutritionRecord().model_copy(update={"description": "   "})

    assert sanitize_record(record).description == UNDETERMINED


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 0),
        (True, 0),
        (-10, 0),
        (12, 12),
        (12.5, 13),
        (12.4, 12),
        ("7.5", 8),
        ("abc", 0),
        (float("nan"), 0),
        (float("inf"), 0),
        ([1], 0),
    ],
)
def test_coerce_macro(value, expected):
    assert coerce_macro(value) == expected


def test_record_normalizes_stored_ingredient_string():
    record = NutritionRecord(ingredients="рис, курица, , лук")

    assert record.ingredients == ["рис", "курица", "лук"]
