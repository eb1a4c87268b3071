"""Milk entry endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse

from dairy_ledger.api.models import EntryChanges, SaveEntryRequest
from dairy_ledger.domain.entries import serialize_entry

if TYPE_CHECKING:
    from dairy_ledger.containers import AppContainer

router = APIRouter(prefix="/api/milk-entries", tags=["milk-entries"])


@router.get("")
async def list_entries(
    request: Request,
    customer_id: str | None = Query(default=None, alias="customerId"),
) -> list[dict[str, object]]:
    """Return all entries, newest first, optionally for one customer."""
    container: AppContainer = request.app.state.container
    entries = container.entry_service.list_entries(customer_id)
    return [serialize_entry(entry) for entry in entries]


@router.post("/customer/{customer_id}")
async def save_entry(
    customer_id: str, payload: SaveEntryRequest, request: Request
) -> JSONResponse:
    """Create or replace the customer's entry for a day."""
    container: AppContainer = request.app.state.container
    result = container.entry_service.save_entry(
        customer_id,
        payload.entry_date,
        cow=payload.cow,
        buffalo=payload.buffalo,
        product_id=payload.product_id,
        product_quantity=payload.product_quantity,
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK,
        content=serialize_entry(result.entry),
    )


@router.put("/customer/{customer_id}/date/{entry_date}")
async def update_entry_on_date(
    customer_id: str, entry_date: str, payload: EntryChanges, request: Request
) -> dict[str, object]:
    """Replace an existing entry for a specific date."""
    container: AppContainer = request.app.state.container
    entry = container.entry_service.update_entry_on_date(
        customer_id,
        entry_date,
        cow=payload.cow,
        buffalo=payload.buffalo,
        product_id=payload.product_id,
        product_quantity=payload.product_quantity,
    )
    return serialize_entry(entry)


@router.get("/customer/{customer_id}")
async def list_customer_entries(
    customer_id: str, request: Request
) -> list[dict[str, object]]:
    """Return every entry for a customer in ascending date order."""
    container: AppContainer = request.app.state.container
    entries = container.entry_service.list_customer_entries(customer_id)
    return [serialize_entry(entry) for entry in entries]


@router.delete("/{entry_id}")
async def delete_entry(entry_id: str, request: Request) -> dict[str, bool]:
    """Delete an entry by id."""
    container: AppContainer = request.app.state.container
    container.entry_service.delete_entry(entry_id)
    return {"success": True}
