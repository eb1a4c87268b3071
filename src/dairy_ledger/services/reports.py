"""Invoices and daily sales computed from saved entries."""

from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from dairy_ledger.domain.entries import MilkEntry
from dairy_ledger.domain.errors import CatalogNotFoundError, EntryValidationError
from dairy_ledger.domain.reports import (
    DailySales,
    Invoice,
    InvoiceLine,
    ProductSales,
)
from dairy_ledger.services.catalog import CustomerRepository
from dairy_ledger.services.entries import EntryRepository
from dairy_ledger.services.prices import PriceService


@dataclass
class ReportService:
    """Read-only reporting over milk entries.

    Milk is priced at the current per-litre rates; product lines use the cost
    snapshotted on each entry.
    """

    entries: EntryRepository
    customers: CustomerRepository
    prices: PriceService

    def customer_invoice(self, customer_id: UUID, start: date, end: date) -> Invoice:
        """Return an invoice for a customer between two days, inclusive."""
        if end < start:
            raise EntryValidationError("Invoice end date precedes start date")
        customer = self.customers.get_customer(customer_id)
        if customer is None:
            raise CatalogNotFoundError("Customer not found")
        prices = self.prices.get_current_prices()
        entries = [
            entry
            for entry in self.entries.list_customer_entries(customer_id)
            if start <= entry.entry_date <= end
        ]
        lines = [
            _invoice_line(entry, prices.cow_price, prices.buffalo_price)
            for entry in entries
        ]
        cow_litres = sum(line.cow for line in lines)
        buffalo_litres = sum(line.buffalo for line in lines)
        return Invoice(
            customer_id=customer.id,
            customer_name=customer.name,
            start=start,
            end=end,
            cow_price=prices.cow_price,
            buffalo_price=prices.buffalo_price,
            lines=lines,
            cow_litres=cow_litres,
            buffalo_litres=buffalo_litres,
            milk_amount=round(sum(line.milk_amount for line in lines), 2),
            product_amount=round(sum(line.product_amount for line in lines), 2),
        )

    def daily_sales(self, day: date) -> DailySales:
        """Return sales totals across all customers for a day."""
        prices = self.prices.get_current_prices()
        entries = self.entries.list_entries_between(day, day + timedelta(days=1))
        cow_litres = sum(entry.cow for entry in entries)
        buffalo_litres = sum(entry.buffalo for entry in entries)
        by_product: dict[str, ProductSales] = {}
        for entry in entries:
            if entry.product is None:
                continue
            name = entry.product.product_name
            current = by_product.get(name, ProductSales(name, 0.0, 0.0))
            by_product[name] = ProductSales(
                product_name=name,
                quantity=current.quantity + entry.product.quantity,
                amount=round(current.amount + entry.product.cost, 2),
            )
        return DailySales(
            day=day,
            customers_served=len({entry.customer_id for entry in entries}),
            cow_litres=cow_litres,
            buffalo_litres=buffalo_litres,
            milk_amount=round(
                cow_litres * prices.cow_price + buffalo_litres * prices.buffalo_price,
                2,
            ),
            product_amount=round(
                sum(sales.amount for sales in by_product.values()), 2
            ),
            products=sorted(by_product.values(), key=lambda sales: sales.product_name),
        )


def _invoice_line(
    entry: MilkEntry, cow_price: float, buffalo_price: float
) -> InvoiceLine:
    return InvoiceLine(
        day=entry.entry_date,
        cow=entry.cow,
        buffalo=entry.buffalo,
        milk_amount=round(entry.cow * cow_price + entry.buffalo * buffalo_price, 2),
        product_name=entry.product.product_name if entry.product else None,
        product_quantity=entry.product.quantity if entry.product else 0.0,
        product_amount=entry.product.cost if entry.product else 0.0,
    )
