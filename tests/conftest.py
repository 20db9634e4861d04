"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date

import pytest

from food_tracker.adapters.fdc_client import FdcClient
from food_tracker.config import Settings
from food_tracker.containers import AppContainer
from food_tracker.domain.log import FoodLogEntry, NewFoodLogEntry
from food_tracker.domain.summary import NutritionGoal, WaterIntake
from food_tracker.services.barcode import BarcodeService
from food_tracker.services.cache import InMemoryCache
from food_tracker.services.food_log import FoodLogRepository, FoodLogService
from food_tracker.services.search import (
    CustomFoodRepository,
    FoodSearchService,
    LatestQueryGuard,
    RegionalFoodSource,
)
from food_tracker.services.summary import (
    GoalRepository,
    SummaryService,
    WaterIntakeRepository,
)

ROTI_ROW: dict[str, object] = {
    "id": 7,
    "food_name": "Roti",
    "food_group": "Cereals",
    "calories": 120,
    "protein": 3,
    "carbs": 20,
    "fat": 2,
    "fiber": 1.9,
    "calcium": 10,
    "iron": 0.9,
}

CHICKEN_CURRY_ROW: dict[str, object] = {
    "id": 8,
    "food_name": "Chicken curry",
    "food_group": "Meat",
    "calories": 150,
    "protein": 14,
    "carbs": 4,
    "fat": 9,
}

CHICKEN_BREAST_FDC: dict[str, object] = {
    "fdcId": 171077,
    "description": "Chicken, broilers or fryers, breast, meat only, raw",
    "dataType": "SR Legacy",
    "foodCategory": "Poultry Products",
    "foodNutrients": [
        {
            "nutrientId": 1008,
            "nutrientName": "Energy",
            "unitName": "KCAL",
            "value": 120,
        },
        {"nutrientId": 1003, "nutrientName": "Protein", "unitName": "G", "value": 22.5},
        {
            "nutrientId": 1005,
            "nutrientName": "Carbohydrate, by difference",
            "unitName": "G",
            "value": 0,
        },
        {
            "nutrientId": 1004,
            "nutrientName": "Total lipid (fat)",
            "unitName": "G",
            "value": 2.62,
        },
    ],
}

GRANOLA_BAR_FDC: dict[str, object] = {
    "fdcId": 2099999,
    "description": "Oat granola bar",
    "dataType": "Branded",
    "gtinUpc": "012345678905",
    "brandName": "Trail Co",
    "foodCategory": "Cereal Bars",
    "foodNutrients": [
        {"nutrientId": 1008, "name": "Energy", "unitName": "KCAL", "amount": 450},
        {"nutrientId": 1003, "name": "Protein", "unitName": "G", "amount": 8},
        {"nutrientId": 1005, "name": "Carbohydrate", "unitName": "G", "amount": 64},
        {"nutrientId": 1004, "name": "Fat", "unitName": "G", "amount": 18},
        {"nutrientId": 1079, "name": "Fiber", "unitName": "G", "amount": 6},
    ],
}

CUSTOM_FOODS: list[dict[str, object]] = [
    {
        "id": 1,
        "user_id": 1,
        "food_name": "Mom's chicken soup",
        "food_group": None,
        "calories": 80,
        "protein": 7,
        "carbs": 6,
        "fat": 3,
        "serving_size": 250,
        "serving_unit": "ml",
    },
    {
        "id": 2,
        "user_id": 1,
        "food_name": "Protein shake",
        "food_group": "Drinks",
        "calories": 110,
        "protein": 20,
        "carbs": 4,
        "fat": 1.5,
        "fiber": 1,
        "serving_size": 1,
        "serving_unit": "serving",
    },
]


@dataclass
class FakeRegionalSource(RegionalFoodSource):
    """Regional source returning rows whose name contains the query."""

    rows: list[dict[str, object]] = field(
        default_factory=lambda: [ROTI_ROW, CHICKEN_CURRY_ROW]
    )
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def search_foods(self, query: str) -> list[dict[str, object]]:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        needle = query.lower()
        return [row for row in self.rows if needle in str(row["food_name"]).lower()]


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {"foods": [CHICKEN_BREAST_FDC]}
    )
    barcode_products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {"012345678905": GRANOLA_BAR_FDC}
    )
    error: Exception | None = None
    search_calls: int = 0

    async def search_foods(
        self, query: str, page_size: int = 25, data_types: list[str] | None = None
    ) -> dict[str, object]:
        self.search_calls += 1
        if self.error is not None:
            raise self.error
        return self.search_payload

    async def find_by_barcode(self, code: str) -> dict[str, object] | None:
        if self.error is not None:
            raise self.error
        return self.barcode_products.get(code)


@dataclass
class InMemoryCustomFoodRepository(CustomFoodRepository):
    """In-memory custom food repository for tests."""

    foods: list[dict[str, object]] = field(default_factory=lambda: list(CUSTOM_FOODS))

    def list_foods(self, user_id: int) -> list[dict[str, object]]:
        return [food for food in self.foods if food.get("user_id") == user_id]


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log repository for tests."""

    entries: list[FoodLogEntry] = field(default_factory=list)

    def create_entry(self, entry: NewFoodLogEntry) -> FoodLogEntry:
        stored = FoodLogEntry(id=len(self.entries) + 1, **vars(entry))
        self.entries.append(stored)
        return stored

    def list_entries(self, user_id: int, day: date) -> list[FoodLogEntry]:
        return [
            entry
            for entry in self.entries
            if entry.user_id == user_id and entry.date == day
        ]

    def add(self, entry: FoodLogEntry) -> None:
        self.entries.append(replace(entry, id=len(self.entries) + 1))


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory goal repository for tests."""

    goals: dict[int, NutritionGoal] = field(default_factory=dict)

    def get_goal(self, user_id: int) -> NutritionGoal | None:
        return self.goals.get(user_id)


@dataclass
class InMemoryWaterIntakeRepository(WaterIntakeRepository):
    """In-memory water intake repository for tests."""

    intakes: dict[tuple[int, date], WaterIntake] = field(default_factory=dict)

    def get_intake(self, user_id: int, day: date) -> WaterIntake | None:
        return self.intakes.get((user_id, day))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        fdc_api_key="fdc-key",
        search_debounce_seconds=0,
    )


@pytest.fixture
def regional_source() -> FakeRegionalSource:
    return FakeRegionalSource()


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def food_log_repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def goal_repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def water_repository() -> InMemoryWaterIntakeRepository:
    return InMemoryWaterIntakeRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    regional_source: FakeRegionalSource,
    fdc_client: FakeFdcClient,
    food_log_repository: InMemoryFoodLogRepository,
    goal_repository: InMemoryGoalRepository,
    water_repository: InMemoryWaterIntakeRepository,
) -> AppContainer:
    search_service = FoodSearchService(
        regional_source=regional_source,
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        retry_attempts=0,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        search_service=search_service,
        search_guard=LatestQueryGuard(),
        custom_food_repository=InMemoryCustomFoodRepository(),
        barcode_service=BarcodeService(fdc_client),
        food_log_service=FoodLogService(food_log_repository),
        summary_service=SummaryService(
            food_log_repository=food_log_repository,
            goal_repository=goal_repository,
            water_repository=water_repository,
        ),
        close_resources=close_resources,
    )
