"""Supabase repository for nutrition goals."""

from dataclasses import dataclass

from supabase import Client

from food_tracker.domain.summary import NutritionGoal
from food_tracker.services.summary import GoalRepository


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for user goals."""

    client: Client

    def get_goal(self, user_id: int) -> NutritionGoal | None:
        """Return the stored goals for a user."""
        response = (
            self.client.table("user_goals")
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        water_goal = row.get("water_goal")
        return NutritionGoal(
            calorie_goal=float(row.get("calorie_goal", 0.0)),
            protein_goal=float(row.get("protein_goal", 0.0)),
            carbs_goal=float(row.get("carbs_goal", 0.0)),
            fat_goal=float(row.get("fat_goal", 0.0)),
            water_goal=float(water_goal) if water_goal is not None else None,
        )
