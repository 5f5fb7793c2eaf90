"""Domain models for room inventory and cluster assignment."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class Room:
    floor: int
    position: int
    number: int
    occupied: bool = False


class AssignmentStrategy(str, Enum):
    SAME_FLOOR = "same_floor"
    CROSS_FLOOR = "cross_floor"


class FailureReason(str, Enum):
    INVALID_REQUEST_COUNT = "InvalidRequestCount"
    INSUFFICIENT_AVAILABILITY = "InsufficientAvailability"
    NO_FEASIBLE_ASSIGNMENT = "NoFeasibleAssignment"


@dataclass(frozen=True)
class ClusterCandidate:
    """Best cluster found by one searcher and how many clusters it examined."""

    rooms: tuple[Room, ...]
    cost: int
    examined: int


@dataclass(frozen=True)
class AssignmentResult:
    rooms: tuple[Room, ...]
    total_travel_cost: int
    strategy: AssignmentStrategy
    candidates_examined: int

    @property
    def room_numbers(self) -> list[int]:
        return [room.number for room in self.rooms]


@dataclass(frozen=True)
class AssignmentFailure:
    reason: FailureReason
    message: str


AssignmentOutcome = Union[AssignmentResult, AssignmentFailure]
