"""Errors raised by the food tracker services."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from food_tracker.domain.foods import CanonicalFood


class FoodTrackerError(Exception):
    """Base class for food tracker errors."""


class SearchFailedError(FoodTrackerError):
    """Every lookup issued for a search failed.

    ``partial`` holds candidates that did not need a lookup, such as custom
    food matches, so callers can still show them next to the notice.
    """

    def __init__(
        self,
        message: str = "Search failed, please try again.",
        partial: "list[CanonicalFood] | None" = None,
    ) -> None:
        super().__init__(message)
        self.partial = partial or []


class BarcodeLookupError(FoodTrackerError):
    """Barcode lookup failed for a reason other than not found."""


class FoodLogValidationError(FoodTrackerError):
    """User input was rejected before computing nutrition."""


class NoFoodSelectedError(FoodLogValidationError):
    """A commit was attempted without a selected food."""

    def __init__(
        self, message: str = "Please search and select a food item first."
    ) -> None:
        super().__init__(message)


class InvalidQuantityError(FoodLogValidationError):
    """Quantity is non-numeric or negative."""

    def __init__(
        self, message: str = "Quantity must be a number greater than or equal to 0."
    ) -> None:
        super().__init__(message)
