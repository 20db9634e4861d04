"""Domain models for the food log."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from food_tracker.domain.foods import Unit


class MealType(str, Enum):
    """Meal a log entry belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class NewFoodLogEntry:
    """Log entry ready to be handed to storage."""

    user_id: int
    food_name: str
    quantity: float
    unit: Unit
    calories: float
    protein: float
    carbs: float
    fat: float
    meal_type: MealType
    date: date
    fdc_id: str | None


@dataclass(frozen=True)
class FoodLogEntry:
    """Stored food log entry."""

    id: int
    user_id: int
    food_name: str
    quantity: float
    unit: Unit
    calories: float
    protein: float
    carbs: float
    fat: float
    meal_type: MealType
    date: date
    fdc_id: str | None
