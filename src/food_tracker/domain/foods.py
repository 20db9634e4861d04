"""Canonical food and nutrient domain models."""

from dataclasses import dataclass
from enum import Enum

ENERGY_ID = 1008
PROTEIN_ID = 1003
CARBOHYDRATE_ID = 1005
FAT_ID = 1004
FIBER_ID = 1079
CALCIUM_ID = 1087
IRON_ID = 1089


class Provenance(str, Enum):
    """Origin of a canonical food."""

    REGIONAL = "regional"
    INTERNATIONAL = "international"
    CUSTOM = "custom"
    BARCODE = "barcode"


class SearchMode(str, Enum):
    """Which sources a free-text search consults."""

    ALL = "all"
    REGIONAL = "regional"
    INTERNATIONAL = "international"
    CUSTOM = "custom"


class Unit(str, Enum):
    """Units a user may log a quantity in."""

    GRAM = "g"
    MILLILITER = "ml"
    OUNCE = "oz"
    SERVING = "serving"
    PIECE = "piece"


@dataclass(frozen=True)
class NutrientMeasurement:
    """Amount of one nutrient per reference serving."""

    nutrient_id: int
    name: str
    unit_name: str
    value: float


@dataclass(frozen=True)
class CanonicalFood:
    """Source-agnostic food with its nutrient measurements."""

    id: str
    display_name: str
    nutrients: tuple[NutrientMeasurement, ...]
    source_group: str | None
    provenance: Provenance
    brand_name: str | None = None
    data_type: str | None = None

    def nutrient_value(self, nutrient_id: int) -> float:
        """Return the value for a nutrient id, or 0 when absent."""
        for nutrient in self.nutrients:
            if nutrient.nutrient_id == nutrient_id:
                return nutrient.value
        return 0.0

    def has_nutrient(self, nutrient_id: int) -> bool:
        return any(n.nutrient_id == nutrient_id for n in self.nutrients)


@dataclass(frozen=True)
class QuantitySpec:
    """Quantity and unit entered by the user."""

    quantity: float
    unit: Unit


@dataclass(frozen=True)
class ComputedNutrition:
    """Nutrition totals for a quantity of a food."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    calcium: float | None = None
    iron: float | None = None
