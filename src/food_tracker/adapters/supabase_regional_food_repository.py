"""Supabase repository for the regional foods table."""

import asyncio
from dataclasses import dataclass

from supabase import Client

from food_tracker.services.search import RegionalFoodSource

TABLE = "indian_foods"


@dataclass
class SupabaseRegionalFoodRepository(RegionalFoodSource):
    """Supabase-backed regional foods lookup and import target."""

    client: Client
    limit: int = 25

    async def search_foods(self, query: str) -> list[dict[str, object]]:
        """Search foods by name without blocking the event loop."""
        return await asyncio.to_thread(self._search_rows, query)

    def _search_rows(self, query: str) -> list[dict[str, object]]:
        response = (
            self.client.table(TABLE)
            .select("*")
            .ilike("food_name", f"%{query}%")
            .limit(self.limit)
            .execute()
        )
        return list(response.data or [])

    def clear_foods(self) -> None:
        """Delete every regional food row."""
        self.client.table(TABLE).delete().neq("id", 0).execute()

    def insert_foods(self, rows: list[dict[str, object]]) -> int:
        """Insert a batch of rows and return how many were stored."""
        if not rows:
            return 0
        response = self.client.table(TABLE).insert(rows).execute()
        return len(response.data or [])
