"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from dairy_ledger.adapters.supabase_archive_repository import (
    SupabaseArchiveRepository,
)
from dairy_ledger.adapters.supabase_customer_repository import (
    SupabaseCustomerRepository,
)
from dairy_ledger.adapters.supabase_entry_repository import SupabaseEntryRepository
from dairy_ledger.adapters.supabase_extension_repository import (
    SupabaseExtensionRepository,
)
from dairy_ledger.adapters.supabase_price_repository import SupabasePriceRepository
from dairy_ledger.adapters.supabase_product_repository import (
    SupabaseProductRepository,
)
from dairy_ledger.config import Settings
from dairy_ledger.domain.dates import resolve_timezone
from dairy_ledger.services.archive import MonthlyArchiveService
from dairy_ledger.services.carry_forward import CarryForwardService
from dairy_ledger.services.catalog import (
    CustomerService,
    ExtensionService,
    ProductService,
)
from dairy_ledger.services.entries import EntryService
from dairy_ledger.services.prices import PriceService
from dairy_ledger.services.reports import ReportService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entry_service: EntryService
    carry_forward_service: CarryForwardService
    archive_service: MonthlyArchiveService
    product_service: ProductService
    customer_service: CustomerService
    extension_service: ExtensionService
    price_service: PriceService
    report_service: ReportService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    timezone = resolve_timezone(resolved_settings.business_timezone)
    entry_repository = SupabaseEntryRepository(supabase_client)
    archive_repository = SupabaseArchiveRepository(supabase_client)
    customer_repository = SupabaseCustomerRepository(supabase_client)
    extension_repository = SupabaseExtensionRepository(supabase_client)
    product_repository = SupabaseProductRepository(supabase_client)
    price_repository = SupabasePriceRepository(supabase_client)

    entry_service = EntryService(
        repository=entry_repository,
        products=product_repository,
        timezone=timezone,
    )
    carry_forward_service = CarryForwardService(
        entries=entry_repository,
        customers=customer_repository,
        timezone=timezone,
    )
    archive_service = MonthlyArchiveService(
        entries=entry_repository,
        archive=archive_repository,
        customers=customer_repository,
    )
    customer_service = CustomerService(
        repository=customer_repository,
        extensions=extension_repository,
        products=product_repository,
        entries=entry_repository,
        archive=archive_repository,
    )
    price_service = PriceService(price_repository)

    return AppContainer(
        settings=resolved_settings,
        entry_service=entry_service,
        carry_forward_service=carry_forward_service,
        archive_service=archive_service,
        product_service=ProductService(product_repository),
        customer_service=customer_service,
        extension_service=ExtensionService(
            repository=extension_repository,
            customer_service=customer_service,
        ),
        price_service=price_service,
        report_service=ReportService(
            entries=entry_repository,
            customers=customer_repository,
            prices=price_service,
        ),
    )
