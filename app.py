"""
app.py: FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the inventory store and booking service, and registers routers.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from backend.controllers.booking_controller import router as booking_router
from backend.repository.inventory_repository import InventoryRepository
from backend.services.booking_service import BookingService
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger, log_event


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    The inventory lives for the lifetime of the app object; every dependency
    is reachable from app.state.
    """
    settings = settings or get_settings()

    # --- Inventory (single in-memory occupancy store) ---
    repository = InventoryRepository(settings)

    # --- Services ---
    booking_service = BookingService(repository=repository, settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _startup(app)
        yield
        log_event(logger, "Shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.include_router(booking_router)

    app.state.repository = repository
    app.state.booking_service = booking_service

    return app


def _startup(app: FastAPI) -> None:
    repository: InventoryRepository = app.state.repository
    log_event(
        logger,
        "Startup complete",
        rooms=len(repository.list_all()),
        available=repository.count_available(),
    )


# Module-level app object for uvicorn
app = create_app()
