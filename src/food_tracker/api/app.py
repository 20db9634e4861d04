"""FastAPI application factory."""

import asyncio
import datetime as dt
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from food_tracker.api.models import (
    CommitRequest,
    CommitResponse,
    ComputeRequest,
    ComputeResponse,
    FoodLogEntryPayload,
    FoodPayload,
    MealPayload,
    NutrientPayload,
    NutritionPayload,
    SearchResponse,
    SummaryResponse,
)
from food_tracker.app_logging import configure_logging
from food_tracker.containers import AppContainer
from food_tracker.domain.errors import (
    BarcodeLookupError,
    FoodLogValidationError,
    SearchFailedError,
)
from food_tracker.domain.foods import (
    CanonicalFood,
    ComputedNutrition,
    NutrientMeasurement,
    SearchMode,
)
from food_tracker.domain.log import FoodLogEntry
from food_tracker.services.countability import is_counted
from food_tracker.services.nutrition import (
    compute_multiplier,
    compute_nutrition,
    default_quantity,
    unit_advice,
)

BARCODE_NOT_FOUND_MESSAGE = (
    "We couldn't find this product in our database. Try searching by name instead."
)
BARCODE_ERROR_MESSAGE = (
    "There was a problem processing the barcode. Please try again or search manually."
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/foods/search")
    async def search_foods(
        request: Request,
        query: str = "",
        mode: SearchMode = SearchMode.ALL,
        search_key: str | None = None,
    ) -> SearchResponse:
        """Search foods across the sources selected by ``mode``.

        Clients typing into a field pass a ``search_key``; a response for a
        query superseded by a newer one on the same key comes back ``stale``.
        """
        state_container: AppContainer = request.app.state.container
        custom_foods: list[dict[str, object]] = []
        if mode in {SearchMode.ALL, SearchMode.CUSTOM}:
            try:
                custom_foods = await asyncio.to_thread(
                    state_container.custom_food_repository.list_foods,
                    state_container.settings.default_user_id,
                )
            except Exception:
                logger.exception("Failed to load custom foods")

        async def run_search(text: str) -> list[CanonicalFood]:
            return await state_container.search_service.search(
                text, mode, custom_foods
            )

        try:
            if search_key:
                foods = await state_container.search_guard.run(
                    search_key, query, run_search
                )
                if foods is None:
                    return SearchResponse(query=query, mode=mode, foods=[], stale=True)
            else:
                foods = await run_search(query)
        except SearchFailedError as exc:
            return SearchResponse(
                query=query,
                mode=mode,
                foods=[_food_payload(food) for food in exc.partial],
                notice=str(exc),
            )
        return SearchResponse(
            query=query, mode=mode, foods=[_food_payload(food) for food in foods]
        )

    @app.get("/api/barcode/{code}")
    async def resolve_barcode(code: str, request: Request) -> FoodPayload:
        """Resolve a scanned barcode to a food."""
        state_container: AppContainer = request.app.state.container
        try:
            food = await state_container.barcode_service.resolve_barcode(code)
        except BarcodeLookupError as exc:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=BARCODE_ERROR_MESSAGE,
            ) from exc
        if food is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=BARCODE_NOT_FOUND_MESSAGE,
            )
        return _food_payload(food)

    @app.post("/api/nutrition/compute")
    async def compute(payload: ComputeRequest) -> ComputeResponse:
        """Compute nutrition for a quantity of a food."""
        food = _food_from_payload(payload.food)
        nutrition = compute_nutrition(
            food,
            payload.quantity,
            payload.unit,
            include_micronutrients=payload.include_micronutrients,
        )
        return ComputeResponse(
            multiplier=compute_multiplier(food, payload.quantity, payload.unit),
            nutrition=_nutrition_payload(nutrition),
            advice=unit_advice(food, payload.unit),
        )

    @app.post("/api/food-items", status_code=status.HTTP_201_CREATED)
    async def add_food_item(payload: CommitRequest, request: Request) -> CommitResponse:
        """Compute nutrition for the selection and add it to the log."""
        state_container: AppContainer = request.app.state.container
        food = _food_from_payload(payload.food) if payload.food else None
        try:
            result = await asyncio.to_thread(
                state_container.food_log_service.commit,
                food=food,
                quantity=payload.quantity,
                unit=payload.unit,
                meal_type=payload.meal_type,
                day=payload.date,
                user_id=state_container.settings.default_user_id,
            )
        except FoodLogValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return CommitResponse(entry=_entry_payload(result.entry), advice=result.advice)

    @app.get("/api/summary")
    async def daily_summary(request: Request, date: dt.date) -> SummaryResponse:
        """Return totals, meals and goal progress for a day."""
        state_container: AppContainer = request.app.state.container
        summary = await asyncio.to_thread(
            state_container.summary_service.daily_summary,
            state_container.settings.default_user_id,
            date,
        )
        return SummaryResponse(
            date=summary.date,
            totals=NutritionPayload(
                calories=summary.totals.calories,
                protein=summary.totals.protein,
                carbs=summary.totals.carbs,
                fat=summary.totals.fat,
            ),
            meals=[
                MealPayload(
                    meal_type=meal.meal_type,
                    calories=meal.calories,
                    items=[_entry_payload(item) for item in meal.items],
                )
                for meal in summary.meals
            ],
            progress={
                "calories": summary.progress.calories,
                "protein": summary.progress.protein,
                "carbs": summary.progress.carbs,
                "fat": summary.progress.fat,
            },
            water_ml=summary.water_ml,
            water_goal_ml=summary.water_goal_ml,
            water_progress=summary.water_progress,
        )

    return app


def _food_payload(food: CanonicalFood) -> FoodPayload:
    """Convert a canonical food into its API payload."""
    defaults = default_quantity(food)
    return FoodPayload(
        id=food.id,
        display_name=food.display_name,
        nutrients=[
            NutrientPayload(
                nutrient_id=nutrient.nutrient_id,
                name=nutrient.name,
                unit_name=nutrient.unit_name,
                value=nutrient.value,
            )
            for nutrient in food.nutrients
        ],
        source_group=food.source_group,
        provenance=food.provenance,
        brand_name=food.brand_name,
        data_type=food.data_type,
        counted=is_counted(food.display_name),
        default_quantity=defaults.quantity,
        default_unit=defaults.unit,
    )


def _food_from_payload(payload: FoodPayload) -> CanonicalFood:
    """Rebuild a canonical food from a client payload, one entry per nutrient id."""
    nutrients: dict[int, NutrientMeasurement] = {}
    for nutrient in payload.nutrients:
        nutrients.setdefault(
            nutrient.nutrient_id,
            NutrientMeasurement(
                nutrient_id=nutrient.nutrient_id,
                name=nutrient.name,
                unit_name=nutrient.unit_name,
                value=nutrient.value,
            ),
        )
    return CanonicalFood(
        id=payload.id,
        display_name=payload.display_name,
        nutrients=tuple(nutrients.values()),
        source_group=payload.source_group,
        provenance=payload.provenance,
        brand_name=payload.brand_name,
        data_type=payload.data_type,
    )


def _nutrition_payload(nutrition: ComputedNutrition) -> NutritionPayload:
    return NutritionPayload(
        calories=nutrition.calories,
        protein=nutrition.protein,
        carbs=nutrition.carbs,
        fat=nutrition.fat,
        fiber=nutrition.fiber,
        calcium=nutrition.calcium,
        iron=nutrition.iron,
    )


def _entry_payload(entry: FoodLogEntry) -> FoodLogEntryPayload:
    return FoodLogEntryPayload(
        id=entry.id,
        user_id=entry.user_id,
        food_name=entry.food_name,
        quantity=entry.quantity,
        unit=entry.unit,
        calories=entry.calories,
        protein=entry.protein,
        carbs=entry.carbs,
        fat=entry.fat,
        meal_type=entry.meal_type,
        date=entry.date,
        fdc_id=entry.fdc_id,
    )
