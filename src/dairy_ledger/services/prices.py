"""Milk price service."""

from dataclasses import dataclass
from typing import Protocol

from dairy_ledger.domain.catalog import MilkPrices
from dairy_ledger.domain.errors import CatalogValidationError
from dairy_ledger.services.catalog import require_cost


class PriceRepository(Protocol):
    """Persistence interface for the single current-prices row."""

    def get_prices(self) -> MilkPrices | None:
        """Return the stored prices, if any."""

    def save_prices(self, prices: MilkPrices) -> MilkPrices:
        """Create or replace the current prices."""


@dataclass
class PriceService:
    """Service for current per-litre milk prices."""

    repository: PriceRepository

    def get_current_prices(self) -> MilkPrices:
        """Return current prices, creating a zero-priced row on first use."""
        prices = self.repository.get_prices()
        if prices is None:
            prices = self.repository.save_prices(
                MilkPrices(cow_price=0.0, buffalo_price=0.0)
            )
        return prices

    def update_prices(self, cow_price: object, buffalo_price: object) -> MilkPrices:
        """Replace both prices after validation."""
        try:
            cow = require_cost(cow_price)
        except CatalogValidationError as exc:
            raise CatalogValidationError("Valid cow price is required") from exc
        try:
            buffalo = require_cost(buffalo_price)
        except CatalogValidationError as exc:
            raise CatalogValidationError("Valid buffalo price is required") from exc
        return self.repository.save_prices(
            MilkPrices(cow_price=cow, buffalo_price=buffalo)
        )
