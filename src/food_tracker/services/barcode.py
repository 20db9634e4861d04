"""Resolve scanned barcodes into canonical foods."""

import logging
from dataclasses import dataclass

from food_tracker.adapters.fdc_client import FdcClient
from food_tracker.domain.errors import BarcodeLookupError
from food_tracker.domain.foods import CanonicalFood
from food_tracker.services.normalizer import normalize_barcode

_logger = logging.getLogger(__name__)


@dataclass
class BarcodeService:
    """Look up a decoded barcode in the product database."""

    fdc_client: FdcClient

    async def resolve_barcode(self, code: str) -> CanonicalFood | None:
        """Return the product for a barcode, or None when it is unknown.

        Transport failures and malformed payloads raise BarcodeLookupError so
        they stay distinguishable from a product that simply isn't listed.
        """
        cleaned = code.strip()
        if not cleaned:
            return None
        try:
            record = await self.fdc_client.find_by_barcode(cleaned)
        except Exception as exc:
            _logger.warning("Barcode lookup failed: code=%s error=%s", cleaned, exc)
            raise BarcodeLookupError(f"Barcode lookup failed for {cleaned}") from exc
        if record is None:
            _logger.info("Barcode not found: code=%s", cleaned)
            return None
        if not isinstance(record, dict) or "fdcId" not in record:
            raise BarcodeLookupError(f"Malformed product record for {cleaned}")
        return normalize_barcode(record)
