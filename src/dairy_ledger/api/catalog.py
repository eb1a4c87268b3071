"""Extension, customer, product and price endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from dairy_ledger.api.models import (
    CustomerCreatePayload,
    CustomerUpdatePayload,
    ExtensionPayload,
    MilkPricesPayload,
    ProductPayload,
    ProductUpdatePayload,
)

if TYPE_CHECKING:
    from dairy_ledger.containers import AppContainer
    from dairy_ledger.domain.catalog import Customer, Extension, MilkPrices, Product

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/extensions")
async def list_extensions(request: Request) -> list[dict[str, object]]:
    """Return all extensions."""
    container: AppContainer = request.app.state.container
    return [
        _serialize_extension(extension)
        for extension in container.extension_service.list_extensions()
    ]


@router.post("/extensions", status_code=status.HTTP_201_CREATED)
async def create_extension(
    payload: ExtensionPayload, request: Request
) -> dict[str, object]:
    """Create an extension."""
    container: AppContainer = request.app.state.container
    extension = container.extension_service.create_extension(payload.name)
    return _serialize_extension(extension)


@router.put("/extensions/{extension_id}")
async def rename_extension(
    extension_id: UUID, payload: ExtensionPayload, request: Request
) -> dict[str, object]:
    """Rename an extension."""
    container: AppContainer = request.app.state.container
    extension = container.extension_service.rename_extension(
        extension_id, payload.name
    )
    return _serialize_extension(extension)


@router.delete("/extensions/{extension_id}")
async def delete_extension(extension_id: UUID, request: Request) -> dict[str, bool]:
    """Delete an extension with its customers and their entries."""
    container: AppContainer = request.app.state.container
    container.extension_service.delete_extension(extension_id)
    return {"success": True}


@router.get("/customers")
async def list_customers(
    request: Request, extension_id: UUID | None = None
) -> list[dict[str, object]]:
    """Return customers, optionally for one extension."""
    container: AppContainer = request.app.state.container
    customers = container.customer_service.list_customers(extension_id)
    return [_serialize_customer(customer) for customer in customers]


@router.post("/customers/extension/{extension_id}", status_code=status.HTTP_201_CREATED)
async def create_customer(
    extension_id: UUID, payload: CustomerCreatePayload, request: Request
) -> dict[str, object]:
    """Create a customer under an extension."""
    container: AppContainer = request.app.state.container
    customer = container.customer_service.create_customer(
        extension_id,
        name=payload.name,
        phone=payload.phone,
        address=payload.address,
    )
    return _serialize_customer(customer)


@router.get("/customers/extension/{extension_id}")
async def list_extension_customers(
    extension_id: UUID, request: Request
) -> list[dict[str, object]]:
    """Return the customers of an extension."""
    container: AppContainer = request.app.state.container
    customers = container.customer_service.list_customers(extension_id)
    return [_serialize_customer(customer) for customer in customers]


@router.get("/customers/{customer_id}")
async def get_customer(customer_id: UUID, request: Request) -> dict[str, object]:
    """Return a customer."""
    container: AppContainer = request.app.state.container
    return _serialize_customer(container.customer_service.get_customer(customer_id))


@router.put("/customers/{customer_id}")
async def update_customer(
    customer_id: UUID, payload: CustomerUpdatePayload, request: Request
) -> dict[str, object]:
    """Update a customer's details or default product."""
    container: AppContainer = request.app.state.container
    customer = container.customer_service.update_customer(
        customer_id, payload.model_dump(exclude_unset=True)
    )
    return _serialize_customer(customer)


@router.delete("/customers/{customer_id}")
async def delete_customer(customer_id: UUID, request: Request) -> dict[str, bool]:
    """Delete a customer and its entries."""
    container: AppContainer = request.app.state.container
    container.customer_service.delete_customer(customer_id)
    return {"success": True}


@router.get("/products")
async def list_products(request: Request) -> list[dict[str, object]]:
    """Return all products."""
    container: AppContainer = request.app.state.container
    return [
        _serialize_product(product)
        for product in container.product_service.list_products()
    ]


@router.post("/products", status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductPayload, request: Request
) -> dict[str, object]:
    """Create a product."""
    container: AppContainer = request.app.state.container
    product = container.product_service.create_product(payload.name, payload.cost)
    return _serialize_product(product)


@router.put("/products/{product_id}")
async def update_product(
    product_id: UUID, payload: ProductUpdatePayload, request: Request
) -> dict[str, object]:
    """Update a product's name or cost."""
    container: AppContainer = request.app.state.container
    product = container.product_service.update_product(
        product_id, name=payload.name, cost=payload.cost
    )
    return _serialize_product(product)


@router.delete("/products/{product_id}")
async def delete_product(product_id: UUID, request: Request) -> dict[str, bool]:
    """Delete a product."""
    container: AppContainer = request.app.state.container
    container.product_service.delete_product(product_id)
    return {"success": True}


@router.get("/milk-prices")
async def get_milk_prices(request: Request) -> dict[str, float]:
    """Return current milk prices."""
    container: AppContainer = request.app.state.container
    return _serialize_prices(container.price_service.get_current_prices())


@router.put("/milk-prices")
async def update_milk_prices(
    payload: MilkPricesPayload, request: Request
) -> dict[str, float]:
    """Replace current milk prices."""
    container: AppContainer = request.app.state.container
    prices = container.price_service.update_prices(
        payload.cow_price, payload.buffalo_price
    )
    return _serialize_prices(prices)


def _serialize_extension(extension: Extension) -> dict[str, object]:
    return {"id": str(extension.id), "name": extension.name}


def _serialize_customer(customer: Customer) -> dict[str, object]:
    return {
        "id": str(customer.id),
        "name": customer.name,
        "phone": customer.phone,
        "address": customer.address,
        "extension_id": str(customer.extension_id) if customer.extension_id else None,
        "default_product_id": str(customer.default_product_id)
        if customer.default_product_id
        else None,
        "default_product_permanent": customer.default_product_permanent,
    }


def _serialize_product(product: Product) -> dict[str, object]:
    return {"id": str(product.id), "name": product.name, "cost": product.cost}


def _serialize_prices(prices: MilkPrices) -> dict[str, float]:
    return {"cow_price": prices.cow_price, "buffalo_price": prices.buffalo_price}
