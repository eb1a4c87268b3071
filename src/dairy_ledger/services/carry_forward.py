"""Daily carry-forward of cow and buffalo litres."""

import logging
from dataclasses import dataclass
from datetime import date, tzinfo
from uuid import UUID

from dairy_ledger.domain import dates
from dairy_ledger.domain.entries import CarryForwardSummary, CarryOutcome
from dairy_ledger.services.catalog import CustomerRepository
from dairy_ledger.services.entries import EntryRepository

_logger = logging.getLogger(__name__)


@dataclass
class CarryForwardService:
    """Copies the last known milk quantities into today's entry."""

    entries: EntryRepository
    customers: CustomerRepository
    timezone: tzinfo | None = None

    def carry_forward_customer(self, customer_id: UUID, today: date) -> CarryOutcome:
        """Apply the carry-forward rule for one customer on one day.

        Products are never carried; a carried day starts without a product
        line. Re-running for the same day is a no-op once milk is recorded.
        """
        current = self.entries.get_entry(customer_id, today)
        if current is not None and current.has_milk:
            return CarryOutcome.SKIPPED

        previous = self.entries.get_latest_before(customer_id, today)
        if previous is None:
            return CarryOutcome.SKIPPED

        if current is None:
            created = self.entries.insert_entry_if_absent(
                customer_id, today, previous.cow, previous.buffalo, None
            )
            if created is None:
                # A user save claimed the day first.
                return CarryOutcome.SKIPPED
            return CarryOutcome.CARRIED_CREATED

        cow = previous.cow if previous.cow != 0 else None
        buffalo = previous.buffalo if previous.buffalo != 0 else None
        if cow is None and buffalo is None:
            return CarryOutcome.SKIPPED
        updated = self.entries.fill_zero_milk(current.id, cow, buffalo)
        if updated is None:
            return CarryOutcome.SKIPPED
        return CarryOutcome.CARRIED_UPDATED

    def run(
        self, today: date | None = None, timezone_name: str | None = None
    ) -> CarryForwardSummary:
        """Carry forward for every customer, one at a time."""
        tz = dates.resolve_timezone(timezone_name) or self.timezone
        if today is None:
            today = dates.today(tz)
        summary = CarryForwardSummary(run_date=today)

        customers = self.customers.list_customers()
        for customer in customers:
            summary.processed += 1
            try:
                outcome = self.carry_forward_customer(customer.id, today)
            except Exception:
                _logger.exception(
                    "Carry-forward failed for customer",
                    extra={"customer_id": str(customer.id)},
                )
                summary.errors += 1
                continue
            summary.record(outcome)

        _logger.info(
            "Carry-forward run %s: processed=%s carried=%s updated=%s "
            "skipped=%s errors=%s",
            today,
            summary.processed,
            summary.carried,
            summary.updated,
            summary.skipped,
            summary.errors,
        )
        return summary
