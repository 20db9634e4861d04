"""USDA FoodData Central API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

BRANDED_DATA_TYPE = "Branded"


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions."""

    async def search_foods(
        self, query: str, page_size: int = 25, data_types: list[str] | None = None
    ) -> dict[str, object]:
        """Search foods by query and return raw API data."""

    async def find_by_barcode(self, code: str) -> dict[str, object] | None:
        """Return the branded food carrying a GTIN/UPC code, if any."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def search_foods(
        self, query: str, page_size: int = 25, data_types: list[str] | None = None
    ) -> dict[str, object]:
        """Search foods by query."""
        url = f"{self.base_url}/foods/search"
        body: dict[str, object] = {"query": query, "pageSize": page_size}
        if data_types:
            body["dataType"] = data_types
        response = await self.http_client.post(
            url,
            params={"api_key": self.api_key},
            json=body,
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def find_by_barcode(self, code: str) -> dict[str, object] | None:
        """Search branded foods and return the one whose GTIN matches the code."""
        try:
            payload = await self.search_foods(
                code, page_size=10, data_types=[BRANDED_DATA_TYPE]
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == httpx.codes.NOT_FOUND:
                return None
            raise
        foods = payload.get("foods")
        if not isinstance(foods, list):
            raise ValueError("FDC search response has no foods list")
        wanted = _normalize_gtin(code)
        if not wanted:
            return None
        for food in foods:
            if _normalize_gtin(str(food.get("gtinUpc") or "")) == wanted:
                return food
        return None

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _normalize_gtin(code: str) -> str:
    """Strip whitespace and leading zeros so UPC-A and EAN-13 forms compare equal."""
    return code.strip().lstrip("0")
