"""Supabase repository for food log entries."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from food_tracker.domain.foods import Unit
from food_tracker.domain.log import FoodLogEntry, MealType, NewFoodLogEntry
from food_tracker.services.food_log import FoodLogRepository


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for the food log."""

    client: Client

    def create_entry(self, entry: NewFoodLogEntry) -> FoodLogEntry:
        """Insert a food log row and return it."""
        response = (
            self.client.table("food_items")
            .insert(
                {
                    "user_id": entry.user_id,
                    "food_name": entry.food_name,
                    "quantity": entry.quantity,
                    "unit": entry.unit.value,
                    "calories": entry.calories,
                    "protein": entry.protein,
                    "carbs": entry.carbs,
                    "fat": entry.fat,
                    "meal_type": entry.meal_type.value,
                    "date": entry.date.isoformat(),
                    "fdc_id": entry.fdc_id,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food log entry")
        return _parse_entry(response.data[0])

    def list_entries(self, user_id: int, day: date) -> list[FoodLogEntry]:
        """Return a user's entries for a day."""
        response = (
            self.client.table("food_items")
            .select("*")
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .order("id")
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]


def _parse_entry(row: dict[str, object]) -> FoodLogEntry:
    """Parse a food log row into a domain model."""
    return FoodLogEntry(
        id=int(row["id"]),
        user_id=int(row.get("user_id", 0)),
        food_name=str(row.get("food_name", "")),
        quantity=float(row.get("quantity", 0.0)),
        unit=Unit(row.get("unit", Unit.GRAM.value)),
        calories=float(row.get("calories", 0.0)),
        protein=float(row.get("protein", 0.0)),
        carbs=float(row.get("carbs", 0.0)),
        fat=float(row.get("fat", 0.0)),
        meal_type=MealType(row.get("meal_type", MealType.SNACK.value)),
        date=date.fromisoformat(str(row["date"])),
        fdc_id=row.get("fdc_id"),
    )
