"""Process-scoped room inventory store.

The store is the single owner of mutable occupancy state. Every public
method takes the store lock; callers that need a read-modify-write sequence
(snapshot, optimize, commit) hold ``exclusive()`` around it so two bookings
cannot claim the same room.
"""

from __future__ import annotations

import random
from contextlib import contextmanager
from dataclasses import replace
from threading import RLock
from typing import Iterable, Iterator, Optional

from backend.domain.constraints import validate_probability
from backend.domain.floor_plan import build_inventory
from backend.domain.models import Room
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger, log_event


logger = get_logger(__name__)


class InventoryError(Exception):
    """Base inventory failure."""


class RoomNotFoundError(InventoryError):
    """Raised when a room number is not part of the hotel."""


class RoomAlreadyOccupiedError(InventoryError):
    """Raised when a commit targets a room that is already occupied."""


class InventoryValidationError(InventoryError):
    """Raised when inventory mutation inputs are invalid."""


class InventoryRepository:
    """In-memory room inventory keyed by room number."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._lock = RLock()
        self._random = random.Random(self._settings.random_occupancy_seed)
        self._rooms: dict[int, Room] = {}
        self.reset_all()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with self._lock:
            yield

    def list_all(self) -> tuple[Room, ...]:
        """Immutable snapshot of every room ordered by (floor, position)."""
        with self._lock:
            return tuple(self._rooms.values())

    def get_room(self, number: int) -> Room:
        with self._lock:
            room = self._rooms.get(number)
        if room is None:
            raise RoomNotFoundError(f"Room {number} does not exist")
        return room

    def count_available(self) -> int:
        with self._lock:
            return sum(1 for room in self._rooms.values() if not room.occupied)

    def mark_occupied(self, numbers: Iterable[int]) -> list[Room]:
        """Mark every listed room occupied, all or nothing."""
        requested = sorted(set(numbers))
        with self._lock:
            missing = [number for number in requested if number not in self._rooms]
            if missing:
                raise RoomNotFoundError(f"Unknown room numbers: {missing}")
            taken = [number for number in requested if self._rooms[number].occupied]
            if taken:
                raise RoomAlreadyOccupiedError(f"Rooms already occupied: {taken}")

            updated: list[Room] = []
            for number in requested:
                room = replace(self._rooms[number], occupied=True)
                self._rooms[number] = room
                updated.append(room)
        return updated

    def reset_all(self) -> None:
        with self._lock:
            self._rooms = {room.number: room for room in build_inventory()}
        log_event(logger, "Inventory reset", rooms=len(self._rooms))

    def set_random_occupancy(self, probability: float) -> tuple[Room, ...]:
        """Independently mark each room occupied with the given probability."""
        try:
            validate_probability(probability)
        except ValueError as exc:
            raise InventoryValidationError(str(exc)) from exc

        with self._lock:
            self._rooms = {
                number: replace(room, occupied=self._random.random() < probability)
                for number, room in self._rooms.items()
            }
            snapshot = tuple(self._rooms.values())
        log_event(
            logger,
            "Inventory randomized",
            probability=probability,
            occupied=sum(1 for room in snapshot if room.occupied),
        )
        return snapshot

    def toggle_room(self, number: int) -> Room:
        with self._lock:
            room = self.get_room(number)
            toggled = replace(room, occupied=not room.occupied)
            self._rooms[number] = toggled
        return toggled
