"""Booking workflow around the room-cluster optimizer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, NoReturn, Optional

from backend.domain.floor_plan import FLOOR_COUNT
from backend.domain.models import (
    AssignmentFailure,
    AssignmentResult,
    FailureReason,
    Room,
)
from backend.repository.inventory_repository import InventoryRepository
from backend.services.matching_service import assign_rooms
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger, log_event


logger = get_logger(__name__)


class BookingError(Exception):
    """Base booking failure carrying the optimizer's failure reason."""

    reason: FailureReason

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestCountError(BookingError):
    reason = FailureReason.INVALID_REQUEST_COUNT


class InsufficientAvailabilityError(BookingError):
    reason = FailureReason.INSUFFICIENT_AVAILABILITY


class NoFeasibleAssignmentError(BookingError):
    reason = FailureReason.NO_FEASIBLE_ASSIGNMENT


_ERROR_BY_REASON: dict[FailureReason, type[BookingError]] = {
    FailureReason.INVALID_REQUEST_COUNT: InvalidRequestCountError,
    FailureReason.INSUFFICIENT_AVAILABILITY: InsufficientAvailabilityError,
    FailureReason.NO_FEASIBLE_ASSIGNMENT: NoFeasibleAssignmentError,
}


@dataclass(frozen=True)
class BookingConfirmation:
    requested_count: int
    assignment: AssignmentResult

    @property
    def message(self) -> str:
        return (
            f"Booked {self.requested_count} rooms. "
            f"Total travel time: {self.assignment.total_travel_cost} minute(s)."
        )


def room_to_dict(room: Room) -> dict[str, Any]:
    return {
        "number": room.number,
        "floor": room.floor,
        "position": room.position,
        "occupied": room.occupied,
    }


class BookingService:
    """Coordinates inventory snapshots, optimization, and booking commits."""

    def __init__(
        self,
        repository: Optional[InventoryRepository] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or InventoryRepository(self._settings)
        self._latest_booking: tuple[int, ...] = ()

    @property
    def latest_booking(self) -> tuple[int, ...]:
        return self._latest_booking

    def book(self, count: int) -> BookingConfirmation:
        """Assign and commit the best cluster of ``count`` free rooms.

        The inventory stays locked from snapshot to commit. On failure
        nothing is mutated and the matching ``BookingError`` is raised.
        """
        with self._repository.exclusive():
            snapshot = self._repository.list_all()
            outcome = assign_rooms(snapshot, count)
            if isinstance(outcome, AssignmentFailure):
                self._raise_failure(outcome, count)
            self._repository.mark_occupied(outcome.room_numbers)
            self._latest_booking = tuple(outcome.room_numbers)

        log_event(
            logger,
            "Booking committed",
            count=count,
            rooms=outcome.room_numbers,
            travel_time=outcome.total_travel_cost,
            strategy=outcome.strategy.value,
            examined=outcome.candidates_examined,
        )
        return BookingConfirmation(requested_count=count, assignment=outcome)

    def _raise_failure(self, failure: AssignmentFailure, count: int) -> NoReturn:
        level = logging.WARNING
        if failure.reason is FailureReason.NO_FEASIBLE_ASSIGNMENT:
            level = logging.ERROR
        log_event(
            logger,
            "Booking rejected",
            level=level,
            count=count,
            reason=failure.reason.value,
        )
        raise _ERROR_BY_REASON[failure.reason](failure.message)

    def list_rooms(self) -> dict[str, Any]:
        snapshot = self._repository.list_all()
        available = sum(1 for room in snapshot if not room.occupied)
        return {
            "rooms": [room_to_dict(room) for room in snapshot],
            "available_count": available,
            "occupied_count": len(snapshot) - available,
        }

    def floor_plan(self) -> dict[str, Any]:
        """Building view, top floor first, rooms ordered away from the stairs."""
        with self._repository.exclusive():
            snapshot = self._repository.list_all()
            latest_booking = self._latest_booking
        selected = set(latest_booking)
        floors: list[dict[str, Any]] = []
        for floor in range(FLOOR_COUNT, 0, -1):
            rooms = sorted(
                (room for room in snapshot if room.floor == floor),
                key=lambda room: room.position,
            )
            floors.append(
                {
                    "floor": floor,
                    "rooms": [
                        {**room_to_dict(room), "selected": room.number in selected}
                        for room in rooms
                    ],
                }
            )
        return {"floors": floors, "latest_booking": list(latest_booking)}

    def reset(self) -> None:
        with self._repository.exclusive():
            self._repository.reset_all()
            self._latest_booking = ()

    def randomize(self, probability: Optional[float] = None) -> tuple[Room, ...]:
        resolved = (
            probability
            if probability is not None
            else self._settings.random_occupancy_probability
        )
        with self._repository.exclusive():
            snapshot = self._repository.set_random_occupancy(resolved)
            self._latest_booking = ()
        return snapshot

    def toggle_room(self, number: int) -> Room:
        room = self._repository.toggle_room(number)
        log_event(logger, "Room toggled", room=number, occupied=room.occupied)
        return room
