"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from dairy_ledger.config import Settings
from dairy_ledger.containers import AppContainer
from dairy_ledger.domain.catalog import Customer, Extension, MilkPrices, Product
from dairy_ledger.domain.entries import ArchivedEntry, MilkEntry, ProductLine
from dairy_ledger.services.archive import ArchiveRepository, MonthlyArchiveService
from dairy_ledger.services.carry_forward import CarryForwardService
from dairy_ledger.services.catalog import (
    CustomerRepository,
    CustomerService,
    ExtensionRepository,
    ExtensionService,
    ProductRepository,
    ProductService,
)
from dairy_ledger.services.entries import EntryRepository, EntryService
from dairy_ledger.services.prices import PriceRepository, PriceService
from dairy_ledger.services.reports import ReportService


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry store keyed by (customer, day) for tests.

    ``fail_for`` makes every read for the listed customers raise, which lets
    tests exercise per-customer failure isolation.
    """

    entries: dict[tuple[UUID, date], MilkEntry] = field(default_factory=dict)
    fail_for: set[UUID] = field(default_factory=set)
    conditional_fills: int = 0

    def add(  # noqa: PLR0913
        self,
        customer_id: UUID,
        entry_date: date,
        cow: float = 0.0,
        buffalo: float = 0.0,
        product: ProductLine | None = None,
    ) -> MilkEntry:
        entry = MilkEntry(
            id=uuid4(),
            customer_id=customer_id,
            entry_date=entry_date,
            cow=cow,
            buffalo=buffalo,
            product=product,
        )
        self.entries[(customer_id, entry_date)] = entry
        return entry

    def insert_entry_if_absent(
        self,
        customer_id: UUID,
        entry_date: date,
        cow: float,
        buffalo: float,
        product: ProductLine | None,
    ) -> MilkEntry | None:
        self._check(customer_id)
        if (customer_id, entry_date) in self.entries:
            return None
        return self.add(customer_id, entry_date, cow, buffalo, product)

    def update_entry(
        self,
        customer_id: UUID,
        entry_date: date,
        cow: float,
        buffalo: float,
        product: ProductLine | None,
    ) -> MilkEntry | None:
        self._check(customer_id)
        existing = self.entries.get((customer_id, entry_date))
        if existing is None:
            return None
        updated = replace(existing, cow=cow, buffalo=buffalo, product=product)
        self.entries[(customer_id, entry_date)] = updated
        return updated

    def fill_zero_milk(
        self, entry_id: UUID, cow: float | None, buffalo: float | None
    ) -> MilkEntry | None:
        self.conditional_fills += 1
        for key, entry in self.entries.items():
            if entry.id != entry_id:
                continue
            if entry.cow != 0 or entry.buffalo != 0:
                return None
            updated = replace(
                entry,
                cow=entry.cow if cow is None else cow,
                buffalo=entry.buffalo if buffalo is None else buffalo,
            )
            self.entries[key] = updated
            return updated
        return None

    def get_entry(self, customer_id: UUID, entry_date: date) -> MilkEntry | None:
        self._check(customer_id)
        return self.entries.get((customer_id, entry_date))

    def get_latest_before(
        self, customer_id: UUID, entry_date: date
    ) -> MilkEntry | None:
        self._check(customer_id)
        earlier = [
            entry
            for (owner, day), entry in self.entries.items()
            if owner == customer_id and day < entry_date
        ]
        if not earlier:
            return None
        return max(earlier, key=lambda entry: entry.entry_date)

    def list_customer_entries(self, customer_id: UUID) -> list[MilkEntry]:
        return sorted(
            (e for e in self.entries.values() if e.customer_id == customer_id),
            key=lambda entry: entry.entry_date,
        )

    def list_entries(self, customer_id: UUID | None = None) -> list[MilkEntry]:
        return sorted(
            (
                e
                for e in self.entries.values()
                if customer_id is None or e.customer_id == customer_id
            ),
            key=lambda entry: entry.entry_date,
            reverse=True,
        )

    def list_entries_between(self, start: date, end: date) -> list[MilkEntry]:
        return sorted(
            (e for e in self.entries.values() if start <= e.entry_date < end),
            key=lambda entry: entry.entry_date,
        )

    def delete_entry(self, entry_id: UUID) -> bool:
        for key, entry in list(self.entries.items()):
            if entry.id == entry_id:
                del self.entries[key]
                return True
        return False

    def delete_entries_between(self, start: date, end: date) -> int:
        doomed = [key for key in self.entries if start <= key[1] < end]
        for key in doomed:
            del self.entries[key]
        return len(doomed)

    def delete_customer_entries(self, customer_id: UUID) -> int:
        doomed = [key for key in self.entries if key[0] == customer_id]
        for key in doomed:
            del self.entries[key]
        return len(doomed)

    def _check(self, customer_id: UUID) -> None:
        if customer_id in self.fail_for:
            raise RuntimeError("storage unavailable")


@dataclass
class InMemoryExtensionRepository(ExtensionRepository):
    """In-memory extension repository for tests."""

    extensions: dict[UUID, Extension] = field(default_factory=dict)

    def list_extensions(self) -> list[Extension]:
        return sorted(self.extensions.values(), key=lambda ext: ext.name)

    def get_extension(self, extension_id: UUID) -> Extension | None:
        return self.extensions.get(extension_id)

    def create_extension(self, name: str) -> Extension:
        extension = Extension(id=uuid4(), name=name)
        self.extensions[extension.id] = extension
        return extension

    def rename_extension(self, extension_id: UUID, name: str) -> Extension | None:
        if extension_id not in self.extensions:
            return None
        renamed = Extension(id=extension_id, name=name)
        self.extensions[extension_id] = renamed
        return renamed

    def delete_extension(self, extension_id: UUID) -> bool:
        return self.extensions.pop(extension_id, None) is not None


@dataclass
class InMemoryCustomerRepository(CustomerRepository):
    """In-memory customer repository for tests."""

    customers: dict[UUID, Customer] = field(default_factory=dict)
    deleted: list[tuple[Customer, str | None]] = field(default_factory=list)

    def add(self, name: str = "Asha", extension_id: UUID | None = None) -> Customer:
        customer = Customer(id=uuid4(), name=name, extension_id=extension_id)
        self.customers[customer.id] = customer
        return customer

    def list_customers(self, extension_id: UUID | None = None) -> list[Customer]:
        return [
            customer
            for customer in self.customers.values()
            if extension_id is None or customer.extension_id == extension_id
        ]

    def get_customer(self, customer_id: UUID) -> Customer | None:
        return self.customers.get(customer_id)

    def create_customer(self, payload: dict[str, object]) -> Customer:
        customer = Customer(id=uuid4(), **payload)  # type: ignore[arg-type]
        self.customers[customer.id] = customer
        return customer

    def update_customer(
        self, customer_id: UUID, payload: dict[str, object]
    ) -> Customer | None:
        existing = self.customers.get(customer_id)
        if existing is None:
            return None
        updated = replace(existing, **payload)  # type: ignore[arg-type]
        self.customers[customer_id] = updated
        return updated

    def delete_customer(self, customer_id: UUID) -> bool:
        return self.customers.pop(customer_id, None) is not None

    def record_deleted_customer(
        self, customer: Customer, extension_name: str | None
    ) -> None:
        self.deleted.append((customer, extension_name))


@dataclass
class InMemoryProductRepository(ProductRepository):
    """In-memory product repository for tests."""

    products: dict[UUID, Product] = field(default_factory=dict)

    def add(self, name: str = "Curd", cost: float = 40.0) -> Product:
        product = Product(id=uuid4(), name=name, cost=cost)
        self.products[product.id] = product
        return product

    def list_products(self) -> list[Product]:
        return sorted(self.products.values(), key=lambda product: product.name)

    def get_product(self, product_id: UUID) -> Product | None:
        return self.products.get(product_id)

    def create_product(self, name: str, cost: float) -> Product:
        return self.add(name, cost)

    def update_product(
        self, product_id: UUID, payload: dict[str, object]
    ) -> Product | None:
        existing = self.products.get(product_id)
        if existing is None:
            return None
        updated = replace(existing, **payload)  # type: ignore[arg-type]
        self.products[product_id] = updated
        return updated

    def delete_product(self, product_id: UUID) -> bool:
        return self.products.pop(product_id, None) is not None


@dataclass
class InMemoryPriceRepository(PriceRepository):
    """In-memory milk price repository for tests."""

    prices: MilkPrices | None = None

    def get_prices(self) -> MilkPrices | None:
        return self.prices

    def save_prices(self, prices: MilkPrices) -> MilkPrices:
        self.prices = prices
        return prices


@dataclass
class InMemoryArchiveRepository(ArchiveRepository):
    """In-memory archive repository for tests."""

    rows: list[ArchivedEntry] = field(default_factory=list)

    def insert_archived_entries(self, rows: list[ArchivedEntry]) -> None:
        self.rows.extend(rows)

    def list_archived_entries(self, archived_month: str) -> list[ArchivedEntry]:
        return [row for row in self.rows if row.archived_month == archived_month]

    def delete_customer_archive(self, customer_id: UUID) -> int:
        kept = [row for row in self.rows if row.entry.customer_id != customer_id]
        removed = len(self.rows) - len(kept)
        self.rows = kept
        return removed


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
        environment="local",
    )


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def customer_repository() -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository()


@pytest.fixture
def product_repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def extension_repository() -> InMemoryExtensionRepository:
    return InMemoryExtensionRepository()


@pytest.fixture
def price_repository() -> InMemoryPriceRepository:
    return InMemoryPriceRepository()


@pytest.fixture
def archive_repository() -> InMemoryArchiveRepository:
    return InMemoryArchiveRepository()


@pytest.fixture
def entry_service(
    entry_repository: InMemoryEntryRepository,
    product_repository: InMemoryProductRepository,
) -> EntryService:
    return EntryService(repository=entry_repository, products=product_repository)


@pytest.fixture
def customer_service(
    customer_repository: InMemoryCustomerRepository,
    extension_repository: InMemoryExtensionRepository,
    product_repository: InMemoryProductRepository,
    entry_repository: InMemoryEntryRepository,
    archive_repository: InMemoryArchiveRepository,
) -> CustomerService:
    return CustomerService(
        repository=customer_repository,
        extensions=extension_repository,
        products=product_repository,
        entries=entry_repository,
        archive=archive_repository,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    entry_service: EntryService,
    customer_service: CustomerService,
    entry_repository: InMemoryEntryRepository,
    customer_repository: InMemoryCustomerRepository,
    extension_repository: InMemoryExtensionRepository,
    product_repository: InMemoryProductRepository,
    price_repository: InMemoryPriceRepository,
    archive_repository: InMemoryArchiveRepository,
) -> AppContainer:
    price_service = PriceService(price_repository)
    return AppContainer(
        settings=settings,
        entry_service=entry_service,
        carry_forward_service=CarryForwardService(
            entries=entry_repository, customers=customer_repository
        ),
        archive_service=MonthlyArchiveService(
            entries=entry_repository,
            archive=archive_repository,
            customers=customer_repository,
        ),
        product_service=ProductService(product_repository),
        customer_service=customer_service,
        extension_service=ExtensionService(
            repository=extension_repository, customer_service=customer_service
        ),
        price_service=price_service,
        report_service=ReportService(
            entries=entry_repository,
            customers=customer_repository,
            prices=price_service,
        ),
    )
