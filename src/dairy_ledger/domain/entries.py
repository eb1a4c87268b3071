"""Domain models for daily milk entries."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID


@dataclass(frozen=True)
class ProductLine:
    """Product attached to an entry, with name and cost snapshotted at save time."""

    product_id: UUID
    product_name: str
    quantity: float
    cost: float


@dataclass(frozen=True)
class MilkEntry:
    """One customer's deliveries for one calendar day."""

    id: UUID
    customer_id: UUID
    entry_date: date
    cow: float
    buffalo: float
    product: ProductLine | None = None

    @property
    def has_milk(self) -> bool:
        """Return True when either cow or buffalo litres are recorded."""
        return self.cow != 0 or self.buffalo != 0


@dataclass(frozen=True)
class EntryWriteResult:
    """Outcome of saving an entry."""

    entry: MilkEntry
    created: bool


class CarryOutcome(str, Enum):
    """Per-customer result of a carry-forward evaluation."""

    SKIPPED = "skipped"
    CARRIED_CREATED = "carried_created"
    CARRIED_UPDATED = "carried_updated"


@dataclass
class CarryForwardSummary:
    """Aggregate counts for one carry-forward run."""

    run_date: date
    processed: int = 0
    carried: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0

    def record(self, outcome: CarryOutcome) -> None:
        """Count a single customer's outcome."""
        if outcome is CarryOutcome.CARRIED_CREATED:
            self.carried += 1
        elif outcome is CarryOutcome.CARRIED_UPDATED:
            self.carried += 1
            self.updated += 1
        else:
            self.skipped += 1

    def as_dict(self) -> dict[str, object]:
        """Return the summary in its wire shape."""
        return {
            "run_date": self.run_date.isoformat(),
            "processed": self.processed,
            "carried": self.carried,
            "updated": self.updated,
            "skipped": self.skipped,
            "errors": self.errors,
        }


def serialize_entry(entry: MilkEntry) -> dict[str, object]:
    """Return the wire representation of an entry.

    The product is stored and transmitted list-shaped for compatibility with
    existing clients, even though at most one line is ever present.
    """
    products = []
    if entry.product is not None:
        products.append(
            {
                "product_id": str(entry.product.product_id),
                "product_name": entry.product.product_name,
                "quantity": entry.product.quantity,
                "cost": entry.product.cost,
            }
        )
    return {
        "id": str(entry.id),
        "customer_id": str(entry.customer_id),
        "date": entry.entry_date.isoformat(),
        "cow": entry.cow,
        "buffalo": entry.buffalo,
        "products": products,
    }


@dataclass(frozen=True)
class ArchivedEntry:
    """A milk entry copied out of the live table at a month boundary."""

    entry: MilkEntry
    extension_id: UUID | None
    archived_month: str
