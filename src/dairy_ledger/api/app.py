"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from dairy_ledger.api.admin import manual_router
from dairy_ledger.api.admin import router as admin_router
from dairy_ledger.api.catalog import router as catalog_router
from dairy_ledger.api.entries import router as entries_router
from dairy_ledger.api.reports import router as reports_router
from dairy_ledger.app_logging import configure_logging
from dairy_ledger.containers import AppContainer
from dairy_ledger.domain.errors import (
    CatalogNotFoundError,
    CatalogValidationError,
    EntryNotFoundError,
    EntryValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Dairy Ledger")
    app.state.container = container

    app.include_router(entries_router)
    app.include_router(catalog_router)
    app.include_router(reports_router)
    app.include_router(admin_router)
    app.include_router(manual_router)

    @app.exception_handler(EntryValidationError)
    @app.exception_handler(CatalogValidationError)
    async def validation_error(request: Request, exc: Exception) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )

    @app.exception_handler(EntryNotFoundError)
    @app.exception_handler(CatalogNotFoundError)
    async def not_found_error(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/health")
    async def api_health() -> dict[str, str]:
        """Health check under the API prefix."""
        return {"status": "ok"}

    return app
