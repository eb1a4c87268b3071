"""Supabase repository for milk prices."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from dairy_ledger.domain.catalog import MilkPrices
from dairy_ledger.services.prices import PriceRepository


@dataclass
class SupabasePriceRepository(PriceRepository):
    """Supabase implementation for the single milk_prices row."""

    client: Client

    def get_prices(self) -> MilkPrices | None:
        """Return the current prices row, if any."""
        response = (
            self.client.table("milk_prices")
            .select("id, cow_price, buffalo_price")
            .order("created_at", desc=False)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_prices(response.data[0])

    def save_prices(self, prices: MilkPrices) -> MilkPrices:
        """Update the existing row or insert the first one."""
        payload = {
            "cow_price": prices.cow_price,
            "buffalo_price": prices.buffalo_price,
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        existing = (
            self.client.table("milk_prices")
            .select("id")
            .order("created_at", desc=False)
            .limit(1)
            .execute()
        )
        if existing.data:
            response = (
                self.client.table("milk_prices")
                .update(payload)
                .eq("id", existing.data[0]["id"])
                .execute()
            )
        else:
            response = self.client.table("milk_prices").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to save milk prices")
        return _parse_prices(response.data[0])


def _parse_prices(row: dict[str, object]) -> MilkPrices:
    return MilkPrices(
        cow_price=float(row.get("cow_price") or 0.0),
        buffalo_price=float(row.get("buffalo_price") or 0.0),
    )
