"""Supabase repository for water intake."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from food_tracker.domain.summary import DEFAULT_WATER_GOAL_ML, WaterIntake
from food_tracker.services.summary import WaterIntakeRepository


@dataclass
class SupabaseWaterIntakeRepository(WaterIntakeRepository):
    """Supabase implementation for water intake."""

    client: Client

    def get_intake(self, user_id: int, day: date) -> WaterIntake | None:
        """Return the water intake row for a day."""
        response = (
            self.client.table("water_intake")
            .select("amount, goal")
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return WaterIntake(
            date=day,
            amount_ml=float(row.get("amount") or 0.0),
            goal_ml=float(row.get("goal") or DEFAULT_WATER_GOAL_ML),
        )
