"""Daily totals against nutrition and water goals."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from food_tracker.domain.log import FoodLogEntry, MealType
from food_tracker.domain.summary import (
    DEFAULT_WATER_GOAL_ML,
    DailySummary,
    GoalProgress,
    MacroTotals,
    MealGroup,
    NutritionGoal,
    WaterIntake,
)
from food_tracker.services.food_log import FoodLogRepository

MAX_PROGRESS = 100.0


class GoalRepository(Protocol):
    """Read interface for nutrition goals."""

    def get_goal(self, user_id: int) -> NutritionGoal | None:
        """Return the user's goals, if set."""


class WaterIntakeRepository(Protocol):
    """Read interface for water intake."""

    def get_intake(self, user_id: int, day: date) -> WaterIntake | None:
        """Return water intake for a day, if recorded."""


@dataclass
class SummaryService:
    """Build daily summaries from stored entries."""

    food_log_repository: FoodLogRepository
    goal_repository: GoalRepository
    water_repository: WaterIntakeRepository

    def daily_summary(self, user_id: int, day: date) -> DailySummary:
        """Return totals, meals and goal progress for a day."""
        entries = self.food_log_repository.list_entries(user_id, day)
        goal = self.goal_repository.get_goal(user_id)
        water = self.water_repository.get_intake(user_id, day)
        totals = _sum_entries(entries)
        water_ml = water.amount_ml if water else 0.0
        water_goal_ml = _water_goal(goal, water)
        return DailySummary(
            date=day,
            totals=totals,
            meals=_group_by_meal(entries),
            goal=goal,
            progress=_progress(totals, goal),
            water_ml=water_ml,
            water_goal_ml=water_goal_ml,
            water_progress=float(round(_percent(water_ml, water_goal_ml))),
        )


def _sum_entries(entries: list[FoodLogEntry]) -> MacroTotals:
    return MacroTotals(
        calories=sum(entry.calories for entry in entries),
        protein=sum(entry.protein for entry in entries),
        carbs=sum(entry.carbs for entry in entries),
        fat=sum(entry.fat for entry in entries),
    )


def _group_by_meal(entries: list[FoodLogEntry]) -> list[MealGroup]:
    groups = []
    for meal_type in MealType:
        items = [entry for entry in entries if entry.meal_type == meal_type]
        groups.append(
            MealGroup(
                meal_type=meal_type,
                calories=sum(item.calories for item in items),
                items=items,
            )
        )
    return groups


def _progress(totals: MacroTotals, goal: NutritionGoal | None) -> GoalProgress:
    if goal is None:
        return GoalProgress(calories=0.0, protein=0.0, carbs=0.0, fat=0.0)
    return GoalProgress(
        calories=_percent(totals.calories, goal.calorie_goal),
        protein=_percent(totals.protein, goal.protein_goal),
        carbs=_percent(totals.carbs, goal.carbs_goal),
        fat=_percent(totals.fat, goal.fat_goal),
    )


def _water_goal(goal: NutritionGoal | None, water: WaterIntake | None) -> float:
    if water and water.goal_ml > 0:
        return water.goal_ml
    if goal and goal.water_goal:
        return goal.water_goal
    return float(DEFAULT_WATER_GOAL_ML)


def _percent(value: float, target: float) -> float:
    if target <= 0:
        return 0.0
    return min(MAX_PROGRESS, value / target * 100)
