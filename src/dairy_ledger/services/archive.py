"""Monthly archive-and-purge of milk entries."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from dairy_ledger.domain import dates
from dairy_ledger.domain.entries import ArchivedEntry
from dairy_ledger.services.catalog import CustomerRepository
from dairy_ledger.services.entries import EntryRepository

_logger = logging.getLogger(__name__)

JANUARY = 1


class ArchiveRepository(Protocol):
    """Persistence interface for archived entries."""

    def insert_archived_entries(self, rows: list[ArchivedEntry]) -> None:
        """Store archived copies of entries."""

    def list_archived_entries(self, archived_month: str) -> list[ArchivedEntry]:
        """Return archived entries for a YYYY-MM month."""

    def delete_customer_archive(self, customer_id: UUID) -> int:
        """Delete every archived entry for a customer and return the count."""


@dataclass(frozen=True)
class ArchiveResult:
    """Outcome of a monthly archive run."""

    archived_month: str
    archived: int

    def as_dict(self) -> dict[str, object]:
        """Return the result in its wire shape."""
        return {"archived_month": self.archived_month, "archived": self.archived}


@dataclass
class MonthlyArchiveService:
    """Moves the previous calendar month's entries into the archive."""

    entries: EntryRepository
    archive: ArchiveRepository
    customers: CustomerRepository

    def run(self, today: date | None = None) -> ArchiveResult:
        """Archive and purge the month before ``today``."""
        current = today or dates.today()
        end = current.replace(day=1)
        if end.month == JANUARY:
            start = end.replace(year=end.year - 1, month=12)
        else:
            start = end.replace(month=end.month - 1)
        month_key = f"{start.year}-{start.month:02d}"

        entries = self.entries.list_entries_between(start, end)
        if not entries:
            _logger.info("No entries to archive for %s", month_key)
            return ArchiveResult(archived_month=month_key, archived=0)

        extension_by_customer = {
            customer.id: customer.extension_id
            for customer in self.customers.list_customers()
        }
        rows = [
            ArchivedEntry(
                entry=entry,
                extension_id=extension_by_customer.get(entry.customer_id),
                archived_month=month_key,
            )
            for entry in entries
        ]
        self.archive.insert_archived_entries(rows)
        self.entries.delete_entries_between(start, end)
        _logger.info("Archived %s entries for %s", len(rows), month_key)
        return ArchiveResult(archived_month=month_key, archived=len(rows))

    def list_month(self, archived_month: str) -> list[ArchivedEntry]:
        """Return archived entries for a month."""
        return self.archive.list_archived_entries(archived_month)
