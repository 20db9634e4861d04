"""Normalize source-specific food records into canonical foods.

Regional and custom rows are flat (``food_name``, ``calories``, ``protein``,
...), while FoodData Central records carry a list of raw nutrient entries keyed
by nutrient id. Every variant ends up as a :class:`CanonicalFood` sharing the
same nutrient ids, so the computation engine never needs to know where a food
came from.
"""

from collections.abc import Callable, Mapping

from food_tracker.domain.foods import (
    CALCIUM_ID,
    CARBOHYDRATE_ID,
    ENERGY_ID,
    FAT_ID,
    FIBER_ID,
    IRON_ID,
    PROTEIN_ID,
    CanonicalFood,
    NutrientMeasurement,
    Provenance,
)

SourceRecord = Mapping[str, object]

REGIONAL_ID_PREFIX = "indian"
CUSTOM_ID_PREFIX = "custom"
CUSTOM_FOOD_GROUP = "Custom Foods"

# (row field, nutrient id, name, unit)
_MACRO_FIELDS = (
    ("calories", ENERGY_ID, "Energy", "kcal"),
    ("protein", PROTEIN_ID, "Protein", "g"),
    ("carbs", CARBOHYDRATE_ID, "Carbohydrates", "g"),
    ("fat", FAT_ID, "Total lipid (fat)", "g"),
)
_MICRO_FIELDS = (
    ("fiber", FIBER_ID, "Fiber", "g"),
    ("calcium", CALCIUM_ID, "Calcium", "mg"),
    ("iron", IRON_ID, "Iron", "mg"),
)


def normalize(record: SourceRecord, provenance: Provenance) -> CanonicalFood:
    """Normalize a record produced by the given source."""
    return _NORMALIZERS[provenance](record)


def normalize_regional(row: SourceRecord) -> CanonicalFood:
    """Normalize a regional foods table row."""
    return CanonicalFood(
        id=f"{REGIONAL_ID_PREFIX}-{row.get('id')}",
        display_name=str(row.get("food_name") or ""),
        nutrients=_flat_nutrients(row),
        source_group=_optional_str(row.get("food_group")),
        provenance=Provenance.REGIONAL,
    )


def normalize_custom(row: SourceRecord) -> CanonicalFood:
    """Normalize a user's custom food row."""
    return CanonicalFood(
        id=f"{CUSTOM_ID_PREFIX}-{row.get('id')}",
        display_name=str(row.get("food_name") or ""),
        nutrients=_flat_nutrients(row),
        source_group=_optional_str(row.get("food_group")) or CUSTOM_FOOD_GROUP,
        provenance=Provenance.CUSTOM,
    )


def normalize_international(record: SourceRecord) -> CanonicalFood:
    """Normalize a FoodData Central food record."""
    return _normalize_fdc(record, Provenance.INTERNATIONAL)


def normalize_barcode(record: SourceRecord) -> CanonicalFood:
    """Normalize a product record resolved from a barcode."""
    return _normalize_fdc(record, Provenance.BARCODE)


def _normalize_fdc(record: SourceRecord, provenance: Provenance) -> CanonicalFood:
    raw_nutrients = record.get("foodNutrients")
    if raw_nutrients is None:
        raw_nutrients = record.get("nutrients")
    return CanonicalFood(
        id=str(record.get("fdcId", "")),
        display_name=str(record.get("description") or ""),
        nutrients=_fdc_nutrients(raw_nutrients),
        source_group=_category(record.get("foodCategory")),
        provenance=provenance,
        brand_name=_optional_str(record.get("brandName") or record.get("brandOwner")),
        data_type=_optional_str(record.get("dataType")),
    )


def _flat_nutrients(row: SourceRecord) -> tuple[NutrientMeasurement, ...]:
    nutrients = [
        NutrientMeasurement(
            nutrient_id=nutrient_id,
            name=name,
            unit_name=unit,
            value=_to_float(row.get(field)) or 0.0,
        )
        for field, nutrient_id, name, unit in _MACRO_FIELDS
    ]
    for field, nutrient_id, name, unit in _MICRO_FIELDS:
        value = _to_float(row.get(field))
        if value is None:
            continue
        nutrients.append(
            NutrientMeasurement(
                nutrient_id=nutrient_id, name=name, unit_name=unit, value=value
            )
        )
    return tuple(nutrients)


def _fdc_nutrients(raw_nutrients: object) -> tuple[NutrientMeasurement, ...]:
    """Map raw FDC nutrient entries, keeping the first entry per id.

    Search results use flat entries (``nutrientId``, ``nutrientName``,
    ``unitName``, ``value``); food details nest the metadata under
    ``nutrient`` and report ``amount``.
    """
    if not isinstance(raw_nutrients, list):
        return ()
    nutrients: dict[int, NutrientMeasurement] = {}
    for entry in raw_nutrients:
        if not isinstance(entry, Mapping):
            continue
        info = entry.get("nutrient")
        info = info if isinstance(info, Mapping) else {}
        nutrient_id = _to_int(info.get("id") or entry.get("nutrientId"))
        amount = _to_float(
            entry["amount"] if entry.get("amount") is not None else entry.get("value")
        )
        if nutrient_id is None or amount is None or nutrient_id in nutrients:
            continue
        nutrients[nutrient_id] = NutrientMeasurement(
            nutrient_id=nutrient_id,
            name=str(
                info.get("name") or entry.get("name") or entry.get("nutrientName") or ""
            ),
            unit_name=str(info.get("unitName") or entry.get("unitName") or ""),
            value=amount,
        )
    return tuple(nutrients.values())


def _category(value: object) -> str | None:
    if isinstance(value, Mapping):
        return _optional_str(value.get("description"))
    return _optional_str(value)


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_float(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _to_int(value: object) -> int | None:
    number = _to_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


_NORMALIZERS: dict[Provenance, Callable[[SourceRecord], CanonicalFood]] = {
    Provenance.REGIONAL: normalize_regional,
    Provenance.INTERNATIONAL: normalize_international,
    Provenance.CUSTOM: normalize_custom,
    Provenance.BARCODE: normalize_barcode,
}
