"""Milk entry reconciliation service."""

import logging
import math
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Protocol
from uuid import UUID

from dairy_ledger.domain.catalog import Product
from dairy_ledger.domain.dates import normalize_date
from dairy_ledger.domain.entries import EntryWriteResult, MilkEntry, ProductLine
from dairy_ledger.domain.errors import EntryNotFoundError, EntryValidationError

_logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Persistence interface for milk entries keyed by (customer, day)."""

    def insert_entry_if_absent(
        self,
        customer_id: UUID,
        entry_date: date,
        cow: float,
        buffalo: float,
        product: ProductLine | None,
    ) -> MilkEntry | None:
        """Insert an entry unless one exists for the key; None on conflict."""

    def update_entry(
        self,
        customer_id: UUID,
        entry_date: date,
        cow: float,
        buffalo: float,
        product: ProductLine | None,
    ) -> MilkEntry | None:
        """Replace cow, buffalo and product for an existing key."""

    def fill_zero_milk(
        self, entry_id: UUID, cow: float | None, buffalo: float | None
    ) -> MilkEntry | None:
        """Set the given fields only while the row still has zero cow and buffalo."""

    def get_entry(self, customer_id: UUID, entry_date: date) -> MilkEntry | None:
        """Return the entry for a customer on a day, if present."""

    def get_latest_before(
        self, customer_id: UUID, entry_date: date
    ) -> MilkEntry | None:
        """Return the most recent entry strictly before the day."""

    def list_customer_entries(self, customer_id: UUID) -> list[MilkEntry]:
        """Return every entry for a customer, oldest first."""

    def list_entries(self, customer_id: UUID | None = None) -> list[MilkEntry]:
        """Return entries, newest first, optionally for one customer."""

    def list_entries_between(self, start: date, end: date) -> list[MilkEntry]:
        """Return entries with start <= day < end, oldest first."""

    def delete_entry(self, entry_id: UUID) -> bool:
        """Delete an entry by id; False when it did not exist."""

    def delete_entries_between(self, start: date, end: date) -> int:
        """Delete entries with start <= day < end and return the count."""

    def delete_customer_entries(self, customer_id: UUID) -> int:
        """Delete every entry for a customer and return the count."""


class ProductLookup(Protocol):
    """Read access to the product catalog."""

    def get_product(self, product_id: UUID) -> Product | None:
        """Return a product by id, if present."""


@dataclass
class EntryService:
    """Single writer for milk entries, used by user saves and carry-forward."""

    repository: EntryRepository
    products: ProductLookup
    timezone: tzinfo | None = None

    def save_entry(  # noqa: PLR0913
        self,
        customer_id: object,
        entry_date: object,
        cow: object = None,
        buffalo: object = None,
        product_id: object = None,
        product_quantity: object = None,
    ) -> EntryWriteResult:
        """Create or fully replace the entry for a customer on a day."""
        customer, day = self._entry_key(customer_id, entry_date)
        cow_value = parse_amount(cow, "cow")
        buffalo_value = parse_amount(buffalo, "buffalo")
        quantity = parse_amount(product_quantity, "product_quantity")
        product = self._resolve_product(product_id, quantity)

        created = self.repository.insert_entry_if_absent(
            customer, day, cow_value, buffalo_value, product
        )
        if created is not None:
            _logger.info("Created milk entry: customer=%s date=%s", customer, day)
            return EntryWriteResult(entry=created, created=True)

        updated = self.repository.update_entry(
            customer, day, cow_value, buffalo_value, product
        )
        if updated is not None:
            _logger.info("Updated milk entry: customer=%s date=%s", customer, day)
            return EntryWriteResult(entry=updated, created=False)

        # Deleted between the two statements; the key is free again.
        created = self.repository.insert_entry_if_absent(
            customer, day, cow_value, buffalo_value, product
        )
        if created is None:
            raise RuntimeError("Failed to save milk entry")
        return EntryWriteResult(entry=created, created=True)

    def update_entry_on_date(  # noqa: PLR0913
        self,
        customer_id: object,
        entry_date: object,
        cow: object = None,
        buffalo: object = None,
        product_id: object = None,
        product_quantity: object = None,
    ) -> MilkEntry:
        """Replace an existing entry for a specific day without creating one."""
        customer, day = self._entry_key(customer_id, entry_date)
        cow_value = parse_amount(cow, "cow")
        buffalo_value = parse_amount(buffalo, "buffalo")
        quantity = parse_amount(product_quantity, "product_quantity")
        product = self._resolve_product(product_id, quantity)

        updated = self.repository.update_entry(
            customer, day, cow_value, buffalo_value, product
        )
        if updated is None:
            raise EntryNotFoundError(f"No milk entry for {customer} on {day}")
        return updated

    def list_customer_entries(self, customer_id: object) -> list[MilkEntry]:
        """Return every entry for a customer in ascending date order."""
        customer = parse_id(customer_id, "customer_id")
        return self.repository.list_customer_entries(customer)

    def list_entries(self, customer_id: object = None) -> list[MilkEntry]:
        """Return all entries, newest first, optionally filtered by customer."""
        if customer_id is None or customer_id == "":
            return self.repository.list_entries()
        return self.repository.list_entries(parse_id(customer_id, "customer_id"))

    def delete_entry(self, entry_id: object) -> None:
        """Delete an entry by id."""
        parsed = parse_id(entry_id, "entry_id")
        if not self.repository.delete_entry(parsed):
            raise EntryNotFoundError(f"Milk entry {parsed} not found")

    def _entry_key(self, customer_id: object, entry_date: object) -> tuple[UUID, date]:
        customer = parse_id(customer_id, "customer_id")
        day = normalize_date(entry_date, self.timezone)
        if day is None:
            raise EntryValidationError("Invalid date")
        return customer, day

    def _resolve_product(
        self, product_id: object, quantity: float
    ) -> ProductLine | None:
        parsed = _parse_optional_id(product_id)
        if parsed is None:
            return None
        product = self.products.get_product(parsed)
        if product is None:
            _logger.info("Product not found for entry: product_id=%s", parsed)
            return None
        return ProductLine(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            cost=round(product.cost * quantity, 2),
        )


def parse_id(value: object, field_name: str) -> UUID:
    """Parse an identifier or raise a validation error."""
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value.strip())
        except ValueError:
            pass
    raise EntryValidationError(f"Invalid {field_name}")


def parse_amount(value: object, field_name: str) -> float:
    """Parse a non-negative quantity, treating a missing value as zero."""
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise EntryValidationError(f"Invalid {field_name}")
    if not isinstance(value, int | float | str):
        raise EntryValidationError(f"Invalid {field_name}")
    try:
        amount = float(value)
    except (OverflowError, ValueError) as exc:
        raise EntryValidationError(f"Invalid {field_name}") from exc
    if not math.isfinite(amount) or amount < 0:
        raise EntryValidationError(f"{field_name} must be a non-negative number")
    return amount


def _parse_optional_id(value: object) -> UUID | None:
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return UUID(value.strip())
        except ValueError:
            return None
    return None
