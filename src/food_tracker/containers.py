"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_tracker.adapters.fdc_client import HttpxFdcClient
from food_tracker.adapters.supabase_custom_food_repository import (
    SupabaseCustomFoodRepository,
)
from food_tracker.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from food_tracker.adapters.supabase_goal_repository import SupabaseGoalRepository
from food_tracker.adapters.supabase_regional_food_repository import (
    SupabaseRegionalFoodRepository,
)
from food_tracker.adapters.supabase_water_intake_repository import (
    SupabaseWaterIntakeRepository,
)
from food_tracker.config import Settings
from food_tracker.services.barcode import BarcodeService
from food_tracker.services.cache import InMemoryCache
from food_tracker.services.food_log import FoodLogService
from food_tracker.services.search import (
    CustomFoodRepository,
    FoodSearchService,
    LatestQueryGuard,
)
from food_tracker.services.summary import SummaryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    search_service: FoodSearchService
    search_guard: LatestQueryGuard
    custom_food_repository: CustomFoodRepository
    barcode_service: BarcodeService
    food_log_service: FoodLogService
    summary_service: SummaryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    regional_repository = SupabaseRegionalFoodRepository(
        supabase_client, limit=resolved_settings.search_page_size
    )
    custom_food_repository = SupabaseCustomFoodRepository(supabase_client)
    food_log_repository = SupabaseFoodLogRepository(supabase_client)
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    search_service = FoodSearchService(
        regional_source=regional_repository,
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        page_size=resolved_settings.search_page_size,
    )
    summary_service = SummaryService(
        food_log_repository=food_log_repository,
        goal_repository=SupabaseGoalRepository(supabase_client),
        water_repository=SupabaseWaterIntakeRepository(supabase_client),
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        search_service=search_service,
        search_guard=LatestQueryGuard(
            debounce_seconds=resolved_settings.search_debounce_seconds
        ),
        custom_food_repository=custom_food_repository,
        barcode_service=BarcodeService(fdc_client),
        food_log_service=FoodLogService(food_log_repository),
        summary_service=summary_service,
        close_resources=close_resources,
    )
