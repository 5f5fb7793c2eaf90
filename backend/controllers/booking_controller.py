"""HTTP controller layer for room inventory and bookings."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from backend.controllers.dependencies import get_booking_service
from backend.domain.models import AssignmentStrategy
from backend.repository.inventory_repository import (
    InventoryValidationError,
    RoomAlreadyOccupiedError,
    RoomNotFoundError,
)
from backend.services.booking_service import (
    BookingService,
    InsufficientAvailabilityError,
    InvalidRequestCountError,
    NoFeasibleAssignmentError,
    room_to_dict,
)
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["booking"])


class RoomRow(BaseModel):
    number: int = Field(gt=0)
    floor: int = Field(ge=1)
    position: int = Field(ge=1)
    occupied: bool


class RoomsResponse(BaseModel):
    rooms: list[RoomRow]
    available_count: int = Field(ge=0)
    occupied_count: int = Field(ge=0)


class FloorRoomRow(RoomRow):
    selected: bool


class FloorRow(BaseModel):
    floor: int = Field(ge=1)
    rooms: list[FloorRoomRow]


class FloorPlanResponse(BaseModel):
    floors: list[FloorRow]
    latest_booking: list[int]


class BookRequest(BaseModel):
    """Count range is validated by the booking service."""

    count: int


class BookResponse(BaseModel):
    booked: list[int]
    total_travel_time: int = Field(ge=0)
    strategy: AssignmentStrategy
    message: str


class RandomizeRequest(BaseModel):
    probability: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class RandomizeResponse(BaseModel):
    success: bool
    rooms: list[RoomRow]


class ResetResponse(BaseModel):
    success: bool


@router.get("/rooms", response_model=RoomsResponse, status_code=status.HTTP_200_OK)
def list_rooms(
    service: BookingService = Depends(get_booking_service),
) -> RoomsResponse:
    return RoomsResponse(**service.list_rooms())


@router.get("/floors", response_model=FloorPlanResponse, status_code=status.HTTP_200_OK)
def floor_plan(
    service: BookingService = Depends(get_booking_service),
) -> FloorPlanResponse:
    return FloorPlanResponse(**service.floor_plan())


@router.post("/book", response_model=BookResponse, status_code=status.HTTP_200_OK)
def book_rooms(
    payload: BookRequest,
    service: BookingService = Depends(get_booking_service),
) -> BookResponse:
    """Book the closest cluster of free rooms.

    Declared sync so FastAPI runs the bounded search in its threadpool.
    """
    try:
        confirmation = service.book(payload.count)
    except InvalidRequestCountError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except (InsufficientAvailabilityError, RoomAlreadyOccupiedError) as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except NoFeasibleAssignmentError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - unexpected failure
        logger.exception("Unexpected booking failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to book rooms",
        ) from exc

    assignment = confirmation.assignment
    return BookResponse(
        booked=assignment.room_numbers,
        total_travel_time=assignment.total_travel_cost,
        strategy=assignment.strategy,
        message=confirmation.message,
    )


@router.post("/reset", response_model=ResetResponse, status_code=status.HTTP_200_OK)
def reset_inventory(
    service: BookingService = Depends(get_booking_service),
) -> ResetResponse:
    service.reset()
    return ResetResponse(success=True)


@router.post("/randomize", response_model=RandomizeResponse, status_code=status.HTTP_200_OK)
def randomize_occupancy(
    payload: Optional[RandomizeRequest] = None,
    service: BookingService = Depends(get_booking_service),
) -> RandomizeResponse:
    probability = payload.probability if payload is not None else None
    try:
        snapshot = service.randomize(probability)
    except InventoryValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return RandomizeResponse(
        success=True,
        rooms=[RoomRow(**room_to_dict(room)) for room in snapshot],
    )


@router.post(
    "/rooms/{room_number}/toggle",
    response_model=RoomRow,
    status_code=status.HTTP_200_OK,
)
def toggle_room(
    room_number: int,
    service: BookingService = Depends(get_booking_service),
) -> RoomRow:
    try:
        room = service.toggle_room(room_number)
    except RoomNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return RoomRow(**room_to_dict(room))
