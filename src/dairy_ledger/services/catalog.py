"""Services for extensions, customers and products."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from dairy_ledger.domain.catalog import Customer, Extension, Product
from dairy_ledger.domain.errors import CatalogNotFoundError, CatalogValidationError

_logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 120
PHONE_MAX_LENGTH = 20
ADDRESS_MAX_LENGTH = 255


class ExtensionRepository(Protocol):
    """Persistence interface for delivery extensions."""

    def list_extensions(self) -> list[Extension]:
        """Return all extensions ordered by name."""

    def get_extension(self, extension_id: UUID) -> Extension | None:
        """Return an extension by id, if present."""

    def create_extension(self, name: str) -> Extension:
        """Create an extension and return it."""

    def rename_extension(self, extension_id: UUID, name: str) -> Extension | None:
        """Rename an extension; None when it does not exist."""

    def delete_extension(self, extension_id: UUID) -> bool:
        """Delete an extension; False when it did not exist."""


class CustomerRepository(Protocol):
    """Persistence interface for customers."""

    def list_customers(self, extension_id: UUID | None = None) -> list[Customer]:
        """Return customers, newest first, optionally for one extension."""

    def get_customer(self, customer_id: UUID) -> Customer | None:
        """Return a customer by id, if present."""

    def create_customer(self, payload: dict[str, object]) -> Customer:
        """Create a customer and return it."""

    def update_customer(
        self, customer_id: UUID, payload: dict[str, object]
    ) -> Customer | None:
        """Update a customer; None when it does not exist."""

    def delete_customer(self, customer_id: UUID) -> bool:
        """Delete a customer row; False when it did not exist."""

    def record_deleted_customer(
        self, customer: Customer, extension_name: str | None
    ) -> None:
        """Keep a snapshot of a customer that is being deleted."""


class ProductRepository(Protocol):
    """Persistence interface for products."""

    def list_products(self) -> list[Product]:
        """Return all products ordered by name."""

    def get_product(self, product_id: UUID) -> Product | None:
        """Return a product by id, if present."""

    def create_product(self, name: str, cost: float) -> Product:
        """Create a product and return it."""

    def update_product(
        self, product_id: UUID, payload: dict[str, object]
    ) -> Product | None:
        """Update a product; None when it does not exist."""

    def delete_product(self, product_id: UUID) -> bool:
        """Delete a product; False when it did not exist."""


class EntryCleanup(Protocol):
    """Removal of a customer's entries when the customer goes away."""

    def delete_customer_entries(self, customer_id: UUID) -> int:
        """Delete every entry for a customer and return the count."""


class ArchiveCleanup(Protocol):
    """Removal of a customer's archived entries."""

    def delete_customer_archive(self, customer_id: UUID) -> int:
        """Delete every archived entry for a customer and return the count."""


@dataclass
class ProductService:
    """Application service for the product catalog."""

    repository: ProductRepository

    def list_products(self) -> list[Product]:
        """Return all products."""
        return self.repository.list_products()

    def get_product(self, product_id: UUID) -> Product:
        """Return a product or raise when missing."""
        product = self.repository.get_product(product_id)
        if product is None:
            raise CatalogNotFoundError("Product not found")
        return product

    def create_product(self, name: object, cost: object) -> Product:
        """Create a product with a validated name and cost."""
        return self.repository.create_product(
            _require_name(name, "Product name"), require_cost(cost)
        )

    def update_product(
        self, product_id: UUID, name: object = None, cost: object = None
    ) -> Product:
        """Update a product's name and/or cost.

        Entries already saved keep the cost they were saved with.
        """
        payload: dict[str, object] = {}
        if name is not None:
            payload["name"] = _require_name(name, "Product name")
        if cost is not None:
            payload["cost"] = require_cost(cost)
        if not payload:
            return self.get_product(product_id)
        updated = self.repository.update_product(product_id, payload)
        if updated is None:
            raise CatalogNotFoundError("Product not found")
        return updated

    def delete_product(self, product_id: UUID) -> None:
        """Delete a product."""
        if not self.repository.delete_product(product_id):
            raise CatalogNotFoundError("Product not found")


@dataclass
class CustomerService:
    """Application service for customers."""

    repository: CustomerRepository
    extensions: ExtensionRepository
    products: ProductRepository
    entries: EntryCleanup
    archive: ArchiveCleanup

    def list_customers(self, extension_id: UUID | None = None) -> list[Customer]:
        """Return customers, optionally limited to one extension."""
        return self.repository.list_customers(extension_id)

    def get_customer(self, customer_id: UUID) -> Customer:
        """Return a customer or raise when missing."""
        customer = self.repository.get_customer(customer_id)
        if customer is None:
            raise CatalogNotFoundError("Customer not found")
        return customer

    def create_customer(
        self,
        extension_id: UUID,
        name: object,
        phone: object = None,
        address: object = None,
    ) -> Customer:
        """Create a customer under an extension."""
        if self.extensions.get_extension(extension_id) is None:
            raise CatalogNotFoundError("Extension not found")
        payload = {
            "name": _require_name(name, "Customer name"),
            "phone": _optional_text(phone, "Phone", PHONE_MAX_LENGTH),
            "address": _optional_text(address, "Address", ADDRESS_MAX_LENGTH),
            "extension_id": extension_id,
        }
        return self.repository.create_customer(payload)

    def update_customer(
        self, customer_id: UUID, changes: dict[str, object]
    ) -> Customer:
        """Apply the provided field changes to a customer."""
        payload: dict[str, object] = {}
        if "name" in changes:
            payload["name"] = _require_name(changes["name"], "Customer name")
        if "phone" in changes:
            payload["phone"] = _optional_text(
                changes["phone"], "Phone", PHONE_MAX_LENGTH
            )
        if "address" in changes:
            payload["address"] = _optional_text(
                changes["address"], "Address", ADDRESS_MAX_LENGTH
            )
        if changes.get("extension_id") is not None:
            extension_id = changes["extension_id"]
            if not isinstance(extension_id, UUID):
                raise CatalogValidationError("Invalid extension_id")
            if self.extensions.get_extension(extension_id) is None:
                raise CatalogNotFoundError("Extension not found")
            payload["extension_id"] = extension_id
        if "default_product_id" in changes:
            product_id = changes["default_product_id"]
            if product_id is not None and self.products.get_product(product_id) is None:
                raise CatalogNotFoundError("Product not found")
            payload["default_product_id"] = product_id
        if "default_product_permanent" in changes:
            payload["default_product_permanent"] = bool(
                changes["default_product_permanent"]
            )
        if not payload:
            return self.get_customer(customer_id)
        updated = self.repository.update_customer(customer_id, payload)
        if updated is None:
            raise CatalogNotFoundError("Customer not found")
        return updated

    def delete_customer(self, customer_id: UUID) -> None:
        """Delete a customer together with its entries and archive rows."""
        customer = self.get_customer(customer_id)
        extension = (
            self.extensions.get_extension(customer.extension_id)
            if customer.extension_id
            else None
        )
        self.repository.record_deleted_customer(
            customer, extension.name if extension else None
        )
        removed = self.entries.delete_customer_entries(customer.id)
        self.archive.delete_customer_archive(customer.id)
        self.repository.delete_customer(customer.id)
        _logger.info(
            "Deleted customer %s with %s milk entries", customer.id, removed
        )


@dataclass
class ExtensionService:
    """Application service for delivery extensions."""

    repository: ExtensionRepository
    customer_service: CustomerService

    def list_extensions(self) -> list[Extension]:
        """Return all extensions."""
        return self.repository.list_extensions()

    def create_extension(self, name: object) -> Extension:
        """Create an extension."""
        return self.repository.create_extension(_require_name(name, "Extension name"))

    def rename_extension(self, extension_id: UUID, name: object) -> Extension:
        """Rename an extension."""
        renamed = self.repository.rename_extension(
            extension_id, _require_name(name, "Extension name")
        )
        if renamed is None:
            raise CatalogNotFoundError("Extension not found")
        return renamed

    def delete_extension(self, extension_id: UUID) -> None:
        """Delete an extension and every customer on it."""
        if self.repository.get_extension(extension_id) is None:
            raise CatalogNotFoundError("Extension not found")
        for customer in self.customer_service.list_customers(extension_id):
            self.customer_service.delete_customer(customer.id)
        self.repository.delete_extension(extension_id)


def _require_name(value: object, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise CatalogValidationError(f"{label} is required")
    name = value.strip()
    if len(name) > NAME_MAX_LENGTH:
        raise CatalogValidationError(
            f"{label} must be at most {NAME_MAX_LENGTH} characters"
        )
    return name


def _optional_text(value: object, label: str, max_length: int) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise CatalogValidationError(f"Invalid {label.lower()}")
    text = value.strip()
    if len(text) > max_length:
        raise CatalogValidationError(f"{label} must be at most {max_length} characters")
    return text or None


def require_cost(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise CatalogValidationError("Valid cost is required")
    try:
        cost = float(value)
    except ValueError as exc:
        raise CatalogValidationError("Valid cost is required") from exc
    if not math.isfinite(cost) or cost < 0:
        raise CatalogValidationError("Valid cost is required")
    return cost
