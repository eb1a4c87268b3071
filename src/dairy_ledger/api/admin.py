"""Admin and job-trigger endpoints."""

from __future__ import annotations

import logging
import re
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from dairy_ledger.domain.entries import serialize_entry

if TYPE_CHECKING:
    from dairy_ledger.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])
manual_router = APIRouter(prefix="/test", tags=["manual-jobs"])

_logger = logging.getLogger(__name__)
_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


async def require_manual_jobs(request: Request) -> None:
    """Refuse manual job runs in production unless explicitly enabled."""
    container: AppContainer = request.app.state.container
    if not container.settings.manual_jobs_allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Manual run not allowed in production",
        )


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.post("/jobs/carry-forward", dependencies=[Depends(require_admin)])
async def run_carry_forward(
    request: Request,
    run_date: date | None = None,
    timezone: str | None = None,
) -> dict[str, object]:
    """Run the daily carry-forward for every customer."""
    container: AppContainer = request.app.state.container
    summary = container.carry_forward_service.run(
        today=run_date, timezone_name=timezone
    )
    return {"success": True, "summary": summary.as_dict()}


@router.post("/jobs/monthly-archive", dependencies=[Depends(require_admin)])
async def run_monthly_archive(
    request: Request, run_date: date | None = None
) -> dict[str, object]:
    """Archive and purge the previous month's entries."""
    container: AppContainer = request.app.state.container
    result = container.archive_service.run(today=run_date)
    return {"success": True, "result": result.as_dict()}


@router.get("/archive/{archived_month}", dependencies=[Depends(require_admin)])
async def list_archive(archived_month: str, request: Request) -> dict[str, object]:
    """Return archived entries for a YYYY-MM month."""
    if not _MONTH_PATTERN.match(archived_month):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid month"
        )
    container: AppContainer = request.app.state.container
    rows = container.archive_service.list_month(archived_month)
    return {
        "archived_month": archived_month,
        "entries": [
            {
                **serialize_entry(row.entry),
                "extension_id": str(row.extension_id) if row.extension_id else None,
            }
            for row in rows
        ],
    }


@manual_router.get("/run-daily-carry", dependencies=[Depends(require_manual_jobs)])
async def manual_carry_forward(request: Request) -> dict[str, object]:
    """Run the carry-forward on demand outside production."""
    container: AppContainer = request.app.state.container
    try:
        summary = container.carry_forward_service.run()
    except Exception as exc:
        _logger.exception("Manual daily carry failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    return {"success": True, "summary": summary.as_dict()}


@manual_router.get(
    "/run-monthly-reset", dependencies=[Depends(require_manual_jobs)]
)
async def manual_monthly_archive(request: Request) -> dict[str, object]:
    """Run the monthly archive on demand outside production."""
    container: AppContainer = request.app.state.container
    try:
        result = container.archive_service.run()
    except Exception as exc:
        _logger.exception("Manual monthly archive failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    return {"success": True, "result": result.as_dict()}
