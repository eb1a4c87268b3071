"""Tests for extension, customer, product and price services."""

from datetime import date
from uuid import uuid4

import pytest

from dairy_ledger.domain.catalog import MilkPrices
from dairy_ledger.domain.entries import ArchivedEntry
from dairy_ledger.domain.errors import CatalogNotFoundError, CatalogValidationError
from dairy_ledger.services.catalog import (
    CustomerService,
    ExtensionService,
    ProductService,
)
from dairy_ledger.services.prices import PriceService
from tests.conftest import (
    InMemoryArchiveRepository,
    InMemoryCustomerRepository,
    InMemoryEntryRepository,
    InMemoryExtensionRepository,
    InMemoryPriceRepository,
    InMemoryProductRepository,
)


def test_create_customer_requires_extension(customer_service: CustomerService) -> None:
    with pytest.raises(CatalogNotFoundError):
        customer_service.create_customer(uuid4(), "Asha")


def test_create_customer_trims_fields(
    customer_service: CustomerService,
    extension_repository: InMemoryExtensionRepository,
) -> None:
    north = extension_repository.create_extension("North")

    customer = customer_service.create_customer(
        north.id, "  Asha  ", phone=" 98450 ", address=""
    )

    assert customer.name == "Asha"
    assert customer.phone == "98450"
    assert customer.address is None
    assert customer.extension_id == north.id


@pytest.mark.parametrize("name", ["", "   ", None, "x" * 121])
def test_customer_name_is_validated(
    customer_service: CustomerService,
    extension_repository: InMemoryExtensionRepository,
    name: object,
) -> None:
    north = extension_repository.create_extension("North")

    with pytest.raises(CatalogValidationError):
        customer_service.create_customer(north.id, name)


def test_update_customer_default_product(
    customer_service: CustomerService,
    customer_repository: InMemoryCustomerRepository,
    product_repository: InMemoryProductRepository,
) -> None:
    customer = customer_repository.add()
    curd = product_repository.add()

    updated = customer_service.update_customer(
        customer.id,
        {"default_product_id": curd.id, "default_product_permanent": True},
    )

    assert updated.default_product_id == curd.id
    assert updated.default_product_permanent is True
    with pytest.raises(CatalogNotFoundError):
        customer_service.update_customer(customer.id, {"default_product_id": uuid4()})


def test_update_missing_customer(customer_service: CustomerService) -> None:
    with pytest.raises(CatalogNotFoundError):
        customer_service.update_customer(uuid4(), {"name": "Ravi"})


def test_delete_customer_removes_entries_and_archive(
    customer_service: CustomerService,
    customer_repository: InMemoryCustomerRepository,
    extension_repository: InMemoryExtensionRepository,
    entry_repository: InMemoryEntryRepository,
    archive_repository: InMemoryArchiveRepository,
) -> None:
    north = extension_repository.create_extension("North")
    customer = customer_repository.add(extension_id=north.id)
    other = customer_repository.add("Ravi")
    entry = entry_repository.add(customer.id, date(2024, 1, 5), cow=1)
    entry_repository.add(other.id, date(2024, 1, 5), cow=1)
    archive_repository.rows.append(ArchivedEntry(entry, north.id, "2023-12"))

    customer_service.delete_customer(customer.id)

    assert customer.id not in customer_repository.customers
    assert customer_repository.deleted == [(customer, "North")]
    assert list(entry_repository.entries) == [(other.id, date(2024, 1, 5))]
    assert archive_repository.rows == []


def test_delete_extension_cascades_to_customers(
    customer_service: CustomerService,
    customer_repository: InMemoryCustomerRepository,
    extension_repository: InMemoryExtensionRepository,
    entry_repository: InMemoryEntryRepository,
) -> None:
    north = extension_repository.create_extension("North")
    south = extension_repository.create_extension("South")
    leaving = customer_repository.add("Asha", north.id)
    staying = customer_repository.add("Ravi", south.id)
    entry_repository.add(leaving.id, date(2024, 1, 5), cow=1)
    service = ExtensionService(
        repository=extension_repository, customer_service=customer_service
    )

    service.delete_extension(north.id)

    assert list(customer_repository.customers) == [staying.id]
    assert entry_repository.entries == {}
    assert [ext.name for ext in service.list_extensions()] == ["South"]
    with pytest.raises(CatalogNotFoundError):
        service.delete_extension(north.id)


def test_rename_extension(
    customer_service: CustomerService,
    extension_repository: InMemoryExtensionRepository,
) -> None:
    service = ExtensionService(
        repository=extension_repository, customer_service=customer_service
    )
    created = service.create_extension("Nrth")

    assert service.rename_extension(created.id, "North").name == "North"
    with pytest.raises(CatalogNotFoundError):
        service.rename_extension(uuid4(), "East")


def test_product_crud(product_repository: InMemoryProductRepository) -> None:
    service = ProductService(product_repository)

    curd = service.create_product("Curd", "40")
    renamed = service.update_product(curd.id, name="Dahi")
    repriced = service.update_product(curd.id, cost=45)

    assert curd.cost == 40.0
    assert renamed.name == "Dahi"
    assert repriced.cost == 45.0
    service.delete_product(curd.id)
    with pytest.raises(CatalogNotFoundError):
        service.get_product(curd.id)


@pytest.mark.parametrize("cost", [-1, "free", None, True, float("nan")])
def test_product_cost_is_validated(
    product_repository: InMemoryProductRepository, cost: object
) -> None:
    with pytest.raises(CatalogValidationError):
        ProductService(product_repository).create_product("Curd", cost)


def test_prices_start_at_zero(price_repository: InMemoryPriceRepository) -> None:
    service = PriceService(price_repository)

    assert service.get_current_prices() == MilkPrices(0.0, 0.0)
    assert price_repository.prices == MilkPrices(0.0, 0.0)


def test_update_prices(price_repository: InMemoryPriceRepository) -> None:
    service = PriceService(price_repository)

    service.update_prices(60, "80.5")

    assert service.get_current_prices() == MilkPrices(60.0, 80.5)
    with pytest.raises(CatalogValidationError, match="buffalo"):
        service.update_prices(60, -1)
