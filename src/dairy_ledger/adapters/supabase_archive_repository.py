"""Supabase repository for archived milk entries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from dairy_ledger.adapters.supabase_entry_repository import (
    parse_product_line,
    products_payload,
)
from dairy_ledger.domain.entries import ArchivedEntry, MilkEntry
from dairy_ledger.services.archive import ArchiveRepository

_TABLE = "milk_entry_archive"


@dataclass
class SupabaseArchiveRepository(ArchiveRepository):
    """Supabase implementation for the entry archive."""

    client: Client

    def insert_archived_entries(self, rows: list[ArchivedEntry]) -> None:
        """Insert archived copies of entries."""
        payload = []
        for row in rows:
            entry = row.entry
            payload.append(
                {
                    "entry_id": str(entry.id),
                    "customer_id": str(entry.customer_id),
                    "extension_id": str(row.extension_id) if row.extension_id else None,
                    "entry_date": entry.entry_date.isoformat(),
                    "cow": entry.cow,
                    "buffalo": entry.buffalo,
                    "products": products_payload(entry.product),
                    "archived_month": row.archived_month,
                }
            )
        if payload:
            self.client.table(_TABLE).insert(payload).execute()

    def list_archived_entries(self, archived_month: str) -> list[ArchivedEntry]:
        """Return archived entries for a month, oldest first."""
        response = (
            self.client.table(_TABLE)
            .select(
                "entry_id, customer_id, extension_id, entry_date, cow, buffalo, "
                "products, archived_month"
            )
            .eq("archived_month", archived_month)
            .order("entry_date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def delete_customer_archive(self, customer_id: UUID) -> int:
        """Delete every archived entry for a customer."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .eq("customer_id", str(customer_id))
            .execute()
        )
        return len(response.data or [])


def _parse_row(row: dict[str, object]) -> ArchivedEntry:
    extension_id = row.get("extension_id")
    return ArchivedEntry(
        entry=MilkEntry(
            id=UUID(str(row["entry_id"])),
            customer_id=UUID(str(row["customer_id"])),
            entry_date=date.fromisoformat(str(row["entry_date"])[:10]),
            cow=float(row.get("cow") or 0.0),
            buffalo=float(row.get("buffalo") or 0.0),
            product=parse_product_line(row.get("products")),
        ),
        extension_id=UUID(str(extension_id)) if extension_id else None,
        archived_month=str(row.get("archived_month", "")),
    )
