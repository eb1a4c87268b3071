"""Domain models for invoices and sales reports."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class InvoiceLine:
    """Charges for one delivery day."""

    day: date
    cow: float
    buffalo: float
    milk_amount: float
    product_name: str | None
    product_quantity: float
    product_amount: float

    @property
    def total(self) -> float:
        """Return the day's total charge."""
        return round(self.milk_amount + self.product_amount, 2)


@dataclass(frozen=True)
class Invoice:
    """Invoice for a customer over an inclusive date range."""

    customer_id: UUID
    customer_name: str
    start: date
    end: date
    cow_price: float
    buffalo_price: float
    lines: list[InvoiceLine]
    cow_litres: float
    buffalo_litres: float
    milk_amount: float
    product_amount: float

    @property
    def total(self) -> float:
        """Return the invoice total."""
        return round(self.milk_amount + self.product_amount, 2)


@dataclass(frozen=True)
class ProductSales:
    """Quantity and revenue for one product on one day."""

    product_name: str
    quantity: float
    amount: float


@dataclass(frozen=True)
class DailySales:
    """Sales across all customers for one day."""

    day: date
    customers_served: int
    cow_litres: float
    buffalo_litres: float
    milk_amount: float
    product_amount: float
    products: list[ProductSales] = field(default_factory=list)

    @property
    def total(self) -> float:
        """Return the day's total revenue."""
        return round(self.milk_amount + self.product_amount, 2)
