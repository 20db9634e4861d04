"""Domain models for daily summaries."""

from dataclasses import dataclass
from datetime import date

from food_tracker.domain.log import FoodLogEntry, MealType

DEFAULT_WATER_GOAL_ML = 2000


@dataclass(frozen=True)
class NutritionGoal:
    """Daily nutrition goals for a user."""

    calorie_goal: float
    protein_goal: float
    carbs_goal: float
    fat_goal: float
    water_goal: float | None = None


@dataclass(frozen=True)
class WaterIntake:
    """Water consumed on a day."""

    date: date
    amount_ml: float
    goal_ml: float = DEFAULT_WATER_GOAL_ML


@dataclass(frozen=True)
class MacroTotals:
    """Summed macros."""

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class GoalProgress:
    """Percent of each goal reached, capped at 100."""

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class MealGroup:
    """Entries and calories for one meal."""

    meal_type: MealType
    calories: float
    items: list[FoodLogEntry]


@dataclass(frozen=True)
class DailySummary:
    """Totals, meals and goal progress for a day."""

    date: date
    totals: MacroTotals
    meals: list[MealGroup]
    goal: NutritionGoal | None
    progress: GoalProgress
    water_ml: float
    water_goal_ml: float
    water_progress: float
