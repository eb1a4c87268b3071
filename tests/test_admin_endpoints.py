"""Tests for admin and job endpoints."""

from dataclasses import replace
from datetime import date

from fastapi.testclient import TestClient

from dairy_ledger.api.app import create_app
from tests.conftest import InMemoryCustomerRepository, InMemoryEntryRepository

ADMIN_HEADERS = {"X-Admin-Token": "admin-token"}


def test_admin_requires_token(container) -> None:
    client = TestClient(create_app(container))

    missing = client.get("/admin/health")
    wrong = client.get("/admin/health", headers={"X-Admin-Token": "nope"})
    ok = client.get("/admin/health", headers=ADMIN_HEADERS)

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert ok.json() == {"status": "ok"}


def test_carry_forward_job_endpoint(
    container,
    entry_repository: InMemoryEntryRepository,
    customer_repository: InMemoryCustomerRepository,
) -> None:
    client = TestClient(create_app(container))
    customer = customer_repository.add()
    entry_repository.add(customer.id, date(2024, 1, 1), cow=4)

    response = client.post(
        "/admin/jobs/carry-forward",
        params={"run_date": "2024-01-05"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "summary": {
            "run_date": "2024-01-05",
            "processed": 1,
            "carried": 1,
            "updated": 0,
            "skipped": 0,
            "errors": 0,
        },
    }


def test_carry_forward_job_rejects_unknown_timezone(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/admin/jobs/carry-forward",
        params={"timezone": "Atlantis/Capital"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 400


def test_monthly_archive_endpoints(
    container,
    entry_repository: InMemoryEntryRepository,
    customer_repository: InMemoryCustomerRepository,
) -> None:
    client = TestClient(create_app(container))
    customer = customer_repository.add()
    entry_repository.add(customer.id, date(2024, 1, 20), cow=3)

    archived = client.post(
        "/admin/jobs/monthly-archive",
        params={"run_date": "2024-02-01"},
        headers=ADMIN_HEADERS,
    )
    listed = client.get("/admin/archive/2024-01", headers=ADMIN_HEADERS)
    invalid = client.get("/admin/archive/2024-13", headers=ADMIN_HEADERS)

    assert archived.json()["result"] == {"archived_month": "2024-01", "archived": 1}
    assert listed.json()["entries"][0]["cow"] == 3.0
    assert listed.json()["entries"][0]["extension_id"] is None
    assert invalid.status_code == 400
    assert entry_repository.entries == {}


def test_manual_jobs_available_outside_production(container) -> None:
    client = TestClient(create_app(container))

    carry = client.get("/test/run-daily-carry")
    reset = client.get("/test/run-monthly-reset")

    assert carry.status_code == 200
    assert carry.json()["summary"]["processed"] == 0
    assert reset.status_code == 200
    assert reset.json()["success"] is True


def test_manual_jobs_blocked_in_production(container) -> None:
    container.settings = container.settings.model_copy(
        update={"environment": "production"}
    )
    client = TestClient(create_app(container))

    response = client.get("/test/run-daily-carry")

    assert response.status_code == 403


def test_manual_jobs_can_be_enabled_in_production(container) -> None:
    container.settings = container.settings.model_copy(
        update={"environment": "production", "enable_manual_carry_forward": True}
    )
    client = TestClient(create_app(container))

    response = client.get("/test/run-daily-carry")

    assert response.status_code == 200


def test_manual_job_failure_returns_server_error(container) -> None:
    class BrokenCustomers(InMemoryCustomerRepository):
        def list_customers(self, extension_id=None):  # type: ignore[no-untyped-def]
            raise RuntimeError("customers unavailable")

    container.carry_forward_service = replace(
        container.carry_forward_service, customers=BrokenCustomers()
    )
    client = TestClient(create_app(container))

    response = client.get("/test/run-daily-carry")

    assert response.status_code == 500
    assert response.json() == {"detail": "customers unavailable"}
