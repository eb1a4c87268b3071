"""Supabase repository for customers."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from dairy_ledger.domain.catalog import Customer
from dairy_ledger.services.catalog import CustomerRepository

_COLUMNS = (
    "id, name, phone, address, extension_id, default_product_id, "
    "default_product_permanent"
)


@dataclass
class SupabaseCustomerRepository(CustomerRepository):
    """Supabase implementation for customers."""

    client: Client

    def list_customers(self, extension_id: UUID | None = None) -> list[Customer]:
        """Return customers, newest first."""
        query = self.client.table("customers").select(_COLUMNS)
        if extension_id is not None:
            query = query.eq("extension_id", str(extension_id))
        response = query.order("created_at", desc=True).execute()
        return [_parse_customer(row) for row in response.data or []]

    def get_customer(self, customer_id: UUID) -> Customer | None:
        """Return a customer by id."""
        response = (
            self.client.table("customers")
            .select(_COLUMNS)
            .eq("id", str(customer_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_customer(response.data[0])

    def create_customer(self, payload: dict[str, object]) -> Customer:
        """Create a customer row and return it."""
        response = (
            self.client.table("customers").insert(_to_row(payload)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create customer")
        return _parse_customer(response.data[0])

    def update_customer(
        self, customer_id: UUID, payload: dict[str, object]
    ) -> Customer | None:
        """Update a customer row."""
        response = (
            self.client.table("customers")
            .update(_to_row(payload))
            .eq("id", str(customer_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_customer(response.data[0])

    def delete_customer(self, customer_id: UUID) -> bool:
        """Delete a customer row."""
        response = (
            self.client.table("customers").delete().eq("id", str(customer_id)).execute()
        )
        return bool(response.data)

    def record_deleted_customer(
        self, customer: Customer, extension_name: str | None
    ) -> None:
        """Insert a snapshot of a deleted customer."""
        self.client.table("deleted_customers").insert(
            {
                "original_customer_id": str(customer.id),
                "name": customer.name,
                "phone": customer.phone,
                "address": customer.address,
                "extension_id": str(customer.extension_id)
                if customer.extension_id
                else None,
                "extension_name": extension_name or "Unknown",
                "deleted_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()


def _to_row(payload: dict[str, object]) -> dict[str, object]:
    return {
        key: str(value) if isinstance(value, UUID) else value
        for key, value in payload.items()
    }


def _parse_customer(row: dict[str, object]) -> Customer:
    extension_id = row.get("extension_id")
    default_product_id = row.get("default_product_id")
    return Customer(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        phone=row.get("phone"),
        address=row.get("address"),
        extension_id=UUID(str(extension_id)) if extension_id else None,
        default_product_id=UUID(str(default_product_id))
        if default_product_id
        else None,
        default_product_permanent=bool(row.get("default_product_permanent", False)),
    )
