"""Commit computed food entries to the food log."""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from food_tracker.domain.errors import InvalidQuantityError, NoFoodSelectedError
from food_tracker.domain.foods import CanonicalFood, Unit
from food_tracker.domain.log import FoodLogEntry, MealType, NewFoodLogEntry
from food_tracker.services.nutrition import compute_nutrition, unit_advice

_logger = logging.getLogger(__name__)


class FoodLogRepository(Protocol):
    """Persistence interface for food log entries."""

    def create_entry(self, entry: NewFoodLogEntry) -> FoodLogEntry:
        """Store a new entry and return it with its id."""

    def list_entries(self, user_id: int, day: date) -> list[FoodLogEntry]:
        """Return a user's entries for a day."""


@dataclass(frozen=True)
class CommitResult:
    """Stored entry plus the unit advice shown to the user, if any."""

    entry: FoodLogEntry
    advice: str | None


@dataclass
class FoodLogService:
    """Validate user input, compute nutrition and store the log entry."""

    repository: FoodLogRepository

    def commit(  # noqa: PLR0913
        self,
        food: CanonicalFood | None,
        quantity: object,
        unit: Unit,
        meal_type: MealType,
        day: date,
        user_id: int,
    ) -> CommitResult:
        """Compute nutrition for the selection and hand it to storage."""
        if food is None:
            raise NoFoodSelectedError()
        amount = parse_quantity(quantity)
        nutrition = compute_nutrition(food, amount, unit)
        entry = self.repository.create_entry(
            NewFoodLogEntry(
                user_id=user_id,
                food_name=food.display_name,
                quantity=amount,
                unit=unit,
                calories=nutrition.calories,
                protein=nutrition.protein,
                carbs=nutrition.carbs,
                fat=nutrition.fat,
                meal_type=meal_type,
                date=day,
                fdc_id=food.id,
            )
        )
        _logger.info(
            "Food logged: user_id=%s food_id=%s quantity=%s unit=%s",
            user_id,
            food.id,
            amount,
            unit.value,
        )
        return CommitResult(entry=entry, advice=unit_advice(food, unit))


def parse_quantity(value: object) -> float:
    """Return the quantity as a float, rejecting non-numeric or negative input."""
    if isinstance(value, bool):
        raise InvalidQuantityError()
    if isinstance(value, int | float):
        amount = float(value)
    elif isinstance(value, str):
        try:
            amount = float(value.strip())
        except ValueError as exc:
            raise InvalidQuantityError() from exc
    else:
        raise InvalidQuantityError()
    if not math.isfinite(amount) or amount < 0:
        raise InvalidQuantityError()
    return amount
