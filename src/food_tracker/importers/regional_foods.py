"""Load the regional foods dataset (INDB export) into the regional table."""

import argparse
import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import pandas as pd

BATCH_SIZE = 100
UNKNOWN_FOOD_NAME = "Unknown Food"
EXCEL_SUFFIXES = (".xlsx", ".xls")

# export column -> table column
_NUMERIC_COLUMNS = {
    "energy_kcal": "calories",
    "protein_g": "protein",
    "carb_g": "carbs",
    "fat_g": "fat",
    "fibre_g": "fiber",
    "calcium_mg": "calcium",
    "iron_mg": "iron",
}

_logger = logging.getLogger(__name__)


class RegionalFoodStore(Protocol):
    """Write interface for the regional foods table."""

    def clear_foods(self) -> None:
        """Delete every stored regional food."""

    def insert_foods(self, rows: list[dict[str, object]]) -> int:
        """Insert rows and return how many were stored."""


def map_indb_row(row: Mapping[str, object]) -> dict[str, object]:
    """Map one export row to a regional foods table row."""
    food_code = row.get("food_code")
    mapped: dict[str, object] = {
        "food_code": str(food_code).strip() if food_code not in (None, "") else None,
        "food_name": str(row.get("food_name") or "").strip() or UNKNOWN_FOOD_NAME,
        "food_group": row.get("food_group_nin") or None,
    }
    for source, target in _NUMERIC_COLUMNS.items():
        mapped[target] = _parse_number(row.get(source))
    return mapped


@dataclass
class RegionalFoodImporter:
    """Replace the regional table contents in fixed-size batches."""

    store: RegionalFoodStore
    batch_size: int = BATCH_SIZE

    def import_rows(self, rows: Iterable[Mapping[str, object]]) -> int:
        """Clear the table, insert the mapped rows and return the count."""
        mapped = [map_indb_row(row) for row in rows]
        if not mapped:
            _logger.warning("No regional foods to import")
            return 0
        self.store.clear_foods()
        inserted = 0
        for start in range(0, len(mapped), self.batch_size):
            batch = mapped[start : start + self.batch_size]
            inserted += self.store.insert_foods(batch)
            _logger.info("Inserted %s/%s regional foods", inserted, len(mapped))
        return inserted


def read_rows(path: Path) -> list[dict[str, object]]:
    """Read the first sheet of an INDB workbook, or a CSV export of it.

    Empty workbook cells come back as None.
    """
    if path.suffix.lower() in EXCEL_SUFFIXES:
        frame = pd.read_excel(path, sheet_name=0)
    else:
        frame = pd.read_csv(
            path, dtype=str, keep_default_na=False, encoding="utf-8-sig"
        )
    frame = frame.astype(object).where(frame.notna(), None)
    return frame.to_dict("records")


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    from supabase import create_client

    from food_tracker.adapters.supabase_regional_food_repository import (
        SupabaseRegionalFoodRepository,
    )
    from food_tracker.app_logging import configure_logging
    from food_tracker.config import Settings

    parser = argparse.ArgumentParser(
        description="Import the regional foods dataset into Supabase"
    )
    parser.add_argument(
        "path", type=Path, help="INDB workbook (.xlsx) or CSV export"
    )
    parser.add_argument(
        "--dry-run", "-n", action="store_true", help="Map rows without writing"
    )
    args = parser.parse_args(argv)

    configure_logging()
    rows = read_rows(args.path)
    if args.dry_run:
        mapped = [map_indb_row(row) for row in rows]
        _logger.info("Mapped %s regional foods (dry run)", len(mapped))
        return 0

    settings = Settings()
    client = create_client(settings.supabase_url, settings.supabase_service_key)
    importer = RegionalFoodImporter(SupabaseRegionalFoodRepository(client))
    count = importer.import_rows(rows)
    _logger.info("Imported %s regional foods", count)
    return 0


def _parse_number(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value) if isinstance(value, int | float) else float(str(value))
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


if __name__ == "__main__":
    raise SystemExit(main())
