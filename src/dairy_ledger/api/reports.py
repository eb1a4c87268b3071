"""Invoice and sales report endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request

if TYPE_CHECKING:
    from dairy_ledger.containers import AppContainer
    from dairy_ledger.domain.reports import DailySales, Invoice

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/invoice/{customer_id}")
async def customer_invoice(
    customer_id: UUID, start: date, end: date, request: Request
) -> dict[str, object]:
    """Return a customer's invoice for an inclusive date range."""
    container: AppContainer = request.app.state.container
    invoice = container.report_service.customer_invoice(customer_id, start, end)
    return _serialize_invoice(invoice)


@router.get("/daily-sales")
async def daily_sales(day: date, request: Request) -> dict[str, object]:
    """Return sales totals for a day."""
    container: AppContainer = request.app.state.container
    return _serialize_sales(container.report_service.daily_sales(day))


def _serialize_invoice(invoice: Invoice) -> dict[str, object]:
    return {
        "customer_id": str(invoice.customer_id),
        "customer_name": invoice.customer_name,
        "start": invoice.start.isoformat(),
        "end": invoice.end.isoformat(),
        "cow_price": invoice.cow_price,
        "buffalo_price": invoice.buffalo_price,
        "lines": [
            {
                "date": line.day.isoformat(),
                "cow": line.cow,
                "buffalo": line.buffalo,
                "milk_amount": line.milk_amount,
                "product_name": line.product_name,
                "product_quantity": line.product_quantity,
                "product_amount": line.product_amount,
                "total": line.total,
            }
            for line in invoice.lines
        ],
        "cow_litres": invoice.cow_litres,
        "buffalo_litres": invoice.buffalo_litres,
        "milk_amount": invoice.milk_amount,
        "product_amount": invoice.product_amount,
        "total": invoice.total,
    }


def _serialize_sales(sales: DailySales) -> dict[str, object]:
    return {
        "date": sales.day.isoformat(),
        "customers_served": sales.customers_served,
        "cow_litres": sales.cow_litres,
        "buffalo_litres": sales.buffalo_litres,
        "milk_amount": sales.milk_amount,
        "product_amount": sales.product_amount,
        "total": sales.total,
        "products": [
            {
                "product_name": product.product_name,
                "quantity": product.quantity,
                "amount": product.amount,
            }
            for product in sales.products
        ],
    }
