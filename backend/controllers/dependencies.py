"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from backend.repository.inventory_repository import InventoryRepository
from backend.services.booking_service import BookingService
from backend.utils.config import get_settings


def get_booking_service(request: Request) -> BookingService:
    service = getattr(request.app.state, "booking_service", None)
    if service is None:
        repository = getattr(request.app.state, "repository", None)
        if isinstance(repository, InventoryRepository):
            service = BookingService(repository=repository, settings=get_settings())
            request.app.state.booking_service = service
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Booking service is not initialized",
        )
    return service
