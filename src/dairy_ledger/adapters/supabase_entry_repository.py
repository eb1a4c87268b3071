"""Supabase repository for milk entries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from dairy_ledger.domain.entries import MilkEntry, ProductLine
from dairy_ledger.services.entries import EntryRepository

_TABLE = "milk_entries"
_COLUMNS = "id, customer_id, entry_date, cow, buffalo, products"
_ENTRY_KEY = "customer_id,entry_date"


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for milk entries.

    The table carries a unique index on (customer_id, entry_date); every
    write below is a single statement against that key or the row id.
    """

    client: Client

    def insert_entry_if_absent(
        self,
        customer_id: UUID,
        entry_date: date,
        cow: float,
        buffalo: float,
        product: ProductLine | None,
    ) -> MilkEntry | None:
        """Insert an entry, returning None when the key is already taken."""
        response = (
            self.client.table(_TABLE)
            .upsert(
                {
                    "customer_id": str(customer_id),
                    "entry_date": entry_date.isoformat(),
                    "cow": cow,
                    "buffalo": buffalo,
                    "products": products_payload(product),
                },
                on_conflict=_ENTRY_KEY,
                ignore_duplicates=True,
            )
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def update_entry(
        self,
        customer_id: UUID,
        entry_date: date,
        cow: float,
        buffalo: float,
        product: ProductLine | None,
    ) -> MilkEntry | None:
        """Replace cow, buffalo and products for an existing key."""
        response = (
            self.client.table(_TABLE)
            .update(
                {
                    "cow": cow,
                    "buffalo": buffalo,
                    "products": products_payload(product),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("customer_id", str(customer_id))
            .eq("entry_date", entry_date.isoformat())
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def fill_zero_milk(
        self, entry_id: UUID, cow: float | None, buffalo: float | None
    ) -> MilkEntry | None:
        """Conditionally set cow/buffalo while both are still zero."""
        payload: dict[str, object] = {"updated_at": datetime.now(tz=UTC).isoformat()}
        if cow is not None:
            payload["cow"] = cow
        if buffalo is not None:
            payload["buffalo"] = buffalo
        response = (
            self.client.table(_TABLE)
            .update(payload)
            .eq("id", str(entry_id))
            .eq("cow", 0)
            .eq("buffalo", 0)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def get_entry(self, customer_id: UUID, entry_date: date) -> MilkEntry | None:
        """Return the entry for a customer on a day."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("customer_id", str(customer_id))
            .eq("entry_date", entry_date.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def get_latest_before(
        self, customer_id: UUID, entry_date: date
    ) -> MilkEntry | None:
        """Return the most recent entry strictly before the day."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("customer_id", str(customer_id))
            .lt("entry_date", entry_date.isoformat())
            .order("entry_date", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_customer_entries(self, customer_id: UUID) -> list[MilkEntry]:
        """Return every entry for a customer, oldest first."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("customer_id", str(customer_id))
            .order("entry_date", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_entries(self, customer_id: UUID | None = None) -> list[MilkEntry]:
        """Return entries, newest first."""
        query = self.client.table(_TABLE).select(_COLUMNS)
        if customer_id is not None:
            query = query.eq("customer_id", str(customer_id))
        response = query.order("entry_date", desc=True).execute()
        return [_parse_entry(row) for row in response.data or []]

    def list_entries_between(self, start: date, end: date) -> list[MilkEntry]:
        """Return entries in [start, end), oldest first."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .gte("entry_date", start.isoformat())
            .lt("entry_date", end.isoformat())
            .order("entry_date", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def delete_entry(self, entry_id: UUID) -> bool:
        """Delete an entry by id."""
        response = self.client.table(_TABLE).delete().eq("id", str(entry_id)).execute()
        return bool(response.data)

    def delete_entries_between(self, start: date, end: date) -> int:
        """Delete entries in [start, end)."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .gte("entry_date", start.isoformat())
            .lt("entry_date", end.isoformat())
            .execute()
        )
        return len(response.data or [])

    def delete_customer_entries(self, customer_id: UUID) -> int:
        """Delete every entry for a customer."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .eq("customer_id", str(customer_id))
            .execute()
        )
        return len(response.data or [])


def products_payload(product: ProductLine | None) -> list[dict[str, object]]:
    """Return the list-shaped products column for an optional line."""
    if product is None:
        return []
    return [
        {
            "product_id": str(product.product_id),
            "product_name": product.product_name,
            "quantity": product.quantity,
            "cost": product.cost,
        }
    ]


def parse_product_line(raw: object) -> ProductLine | None:
    """Return the first product line from a stored products list."""
    if not isinstance(raw, list) or not raw:
        return None
    first = raw[0]
    if not isinstance(first, dict) or not first.get("product_id"):
        return None
    return ProductLine(
        product_id=UUID(str(first["product_id"])),
        product_name=str(first.get("product_name") or ""),
        quantity=float(first.get("quantity") or 0.0),
        cost=float(first.get("cost") or 0.0),
    )


def _parse_entry(row: dict[str, object]) -> MilkEntry:
    return MilkEntry(
        id=UUID(str(row["id"])),
        customer_id=UUID(str(row["customer_id"])),
        entry_date=date.fromisoformat(str(row["entry_date"])[:10]),
        cow=float(row.get("cow") or 0.0),
        buffalo=float(row.get("buffalo") or 0.0),
        product=parse_product_line(row.get("products")),
    )
