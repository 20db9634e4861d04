"""Pydantic models for API payloads."""

import datetime as dt

from pydantic import BaseModel, Field

from food_tracker.domain.foods import Provenance, SearchMode, Unit
from food_tracker.domain.log import MealType


class NutrientPayload(BaseModel):
    """Nutrient measurement per reference serving."""

    nutrient_id: int
    name: str
    unit_name: str
    value: float


class FoodPayload(BaseModel):
    """Canonical food as exchanged with clients."""

    id: str
    display_name: str
    nutrients: list[NutrientPayload] = Field(default_factory=list)
    source_group: str | None = None
    provenance: Provenance
    brand_name: str | None = None
    data_type: str | None = None
    counted: bool = False
    default_quantity: float | None = None
    default_unit: Unit | None = None


class SearchResponse(BaseModel):
    """Merged search candidates."""

    query: str
    mode: SearchMode
    foods: list[FoodPayload]
    notice: str | None = None
    stale: bool = False


class NutritionPayload(BaseModel):
    """Computed nutrition totals."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    calcium: float | None = None
    iron: float | None = None


class ComputeRequest(BaseModel):
    """Request to compute nutrition for a quantity of a food."""

    food: FoodPayload
    quantity: float = Field(ge=0)
    unit: Unit
    include_micronutrients: bool = False


class ComputeResponse(BaseModel):
    """Computed nutrition with the multiplier used."""

    multiplier: float
    nutrition: NutritionPayload
    advice: str | None = None


class CommitRequest(BaseModel):
    """Request to add a food to the log."""

    food: FoodPayload | None = None
    quantity: float | str | None = None
    unit: Unit = Unit.GRAM
    meal_type: MealType = MealType.BREAKFAST
    date: dt.date


class FoodLogEntryPayload(BaseModel):
    """Stored food log entry."""

    id: int
    user_id: int
    food_name: str
    quantity: float
    unit: Unit
    calories: float
    protein: float
    carbs: float
    fat: float
    meal_type: MealType
    date: dt.date
    fdc_id: str | None = None


class CommitResponse(BaseModel):
    """Result of adding a food to the log."""

    entry: FoodLogEntryPayload
    advice: str | None = None


class MealPayload(BaseModel):
    """Entries and calories for one meal."""

    meal_type: MealType
    calories: float
    items: list[FoodLogEntryPayload]


class SummaryResponse(BaseModel):
    """Daily totals against goals."""

    date: dt.date
    totals: NutritionPayload
    meals: list[MealPayload]
    progress: dict[str, float]
    water_ml: float
    water_goal_ml: float
    water_progress: float
