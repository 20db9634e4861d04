"""Supabase repository for user custom foods."""

from dataclasses import dataclass

from supabase import Client

from food_tracker.services.search import CustomFoodRepository


@dataclass
class SupabaseCustomFoodRepository(CustomFoodRepository):
    """Supabase implementation for custom foods."""

    client: Client

    def list_foods(self, user_id: int) -> list[dict[str, object]]:
        """Return the user's custom foods, oldest first."""
        response = (
            self.client.table("custom_foods")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at")
            .execute()
        )
        return list(response.data or [])
