"""Domain-level request validation and search bounds for room assignment."""

from __future__ import annotations


MIN_ROOMS_PER_REQUEST = 1
MAX_ROOMS_PER_REQUEST = 5

CANDIDATE_POOL_BASE = 22
CANDIDATE_POOL_PER_ROOM = 6
MAX_CROSS_FLOOR_COMBINATIONS = 35_000


def is_valid_request_count(count: object) -> bool:
    # bool is an int subclass; True must not book one room
    if isinstance(count, bool) or not isinstance(count, int):
        return False
    return MIN_ROOMS_PER_REQUEST <= count <= MAX_ROOMS_PER_REQUEST


def candidate_pool_size(free_room_count: int, count: int) -> int:
    """Size of the sorted free-room prefix searched across floors."""
    if free_room_count < 0:
        raise ValueError("free_room_count must be >= 0")
    return min(free_room_count, CANDIDATE_POOL_BASE + CANDIDATE_POOL_PER_ROOM * count)


def validate_probability(probability: float) -> None:
    if not 0.0 <= probability <= 1.0:
        raise ValueError("probability must be between 0 and 1")
