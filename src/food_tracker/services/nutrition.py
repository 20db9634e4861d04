"""Nutrition computation for a quantity of a canonical food."""

from food_tracker.domain.foods import (
    CALCIUM_ID,
    CARBOHYDRATE_ID,
    ENERGY_ID,
    FAT_ID,
    FIBER_ID,
    IRON_ID,
    PROTEIN_ID,
    CanonicalFood,
    ComputedNutrition,
    QuantitySpec,
    Unit,
)
from food_tracker.services.countability import is_counted

REFERENCE_AMOUNT = 100.0


def compute_multiplier(food: CanonicalFood, quantity: float, unit: Unit) -> float:
    """Return the factor applied to the food's reference-serving values.

    Counted foods logged by piece are stored per piece, so the quantity is the
    multiplier. Everything else is stored per 100 units, including counted
    foods logged in grams.
    """
    if unit == Unit.PIECE and is_counted(food.display_name):
        return quantity
    return quantity / REFERENCE_AMOUNT


def compute_nutrition(
    food: CanonicalFood,
    quantity: float,
    unit: Unit,
    *,
    include_micronutrients: bool = False,
) -> ComputedNutrition:
    """Compute macro totals, and optionally fiber/calcium/iron."""
    multiplier = compute_multiplier(food, quantity, unit)
    nutrition = ComputedNutrition(
        calories=food.nutrient_value(ENERGY_ID) * multiplier,
        protein=food.nutrient_value(PROTEIN_ID) * multiplier,
        carbs=food.nutrient_value(CARBOHYDRATE_ID) * multiplier,
        fat=food.nutrient_value(FAT_ID) * multiplier,
    )
    if not include_micronutrients:
        return nutrition
    return ComputedNutrition(
        calories=nutrition.calories,
        protein=nutrition.protein,
        carbs=nutrition.carbs,
        fat=nutrition.fat,
        fiber=food.nutrient_value(FIBER_ID) * multiplier,
        calcium=food.nutrient_value(CALCIUM_ID) * multiplier,
        iron=food.nutrient_value(IRON_ID) * multiplier,
    )


def unit_advice(food: CanonicalFood, unit: Unit) -> str | None:
    """Suggest logging by piece when a counted food is measured in grams."""
    if unit == Unit.GRAM and is_counted(food.display_name):
        return (
            f"{food.display_name} is typically counted by piece rather than "
            'weighed. Switch to "piece" for more accurate tracking.'
        )
    return None


def default_quantity(food: CanonicalFood) -> QuantitySpec:
    """Return the quantity a freshly selected food starts with."""
    if is_counted(food.display_name):
        return QuantitySpec(quantity=1, unit=Unit.PIECE)
    return QuantitySpec(quantity=REFERENCE_AMOUNT, unit=Unit.GRAM)
