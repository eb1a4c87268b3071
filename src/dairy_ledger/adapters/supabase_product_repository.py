"""Supabase repository for products."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from dairy_ledger.domain.catalog import Product
from dairy_ledger.services.catalog import ProductRepository


@dataclass
class SupabaseProductRepository(ProductRepository):
    """Supabase implementation for the product catalog."""

    client: Client

    def list_products(self) -> list[Product]:
        """Return all products ordered by name."""
        response = (
            self.client.table("products")
            .select("id, name, cost")
            .order("name", desc=False)
            .execute()
        )
        return [_parse_product(row) for row in response.data or []]

    def get_product(self, product_id: UUID) -> Product | None:
        """Return a product by id."""
        response = (
            self.client.table("products")
            .select("id, name, cost")
            .eq("id", str(product_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_product(response.data[0])

    def create_product(self, name: str, cost: float) -> Product:
        """Create a product row and return it."""
        response = (
            self.client.table("products").insert({"name": name, "cost": cost}).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create product")
        return _parse_product(response.data[0])

    def update_product(
        self, product_id: UUID, payload: dict[str, object]
    ) -> Product | None:
        """Update a product row."""
        response = (
            self.client.table("products")
            .update(payload)
            .eq("id", str(product_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_product(response.data[0])

    def delete_product(self, product_id: UUID) -> bool:
        """Delete a product row."""
        response = (
            self.client.table("products").delete().eq("id", str(product_id)).execute()
        )
        return bool(response.data)


def _parse_product(row: dict[str, object]) -> Product:
    return Product(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        cost=float(row.get("cost") or 0.0),
    )
