"""Static hotel floor plan and the travel-cost metric between rooms.

The stairs and lift sit at position 0 on every floor; room positions grow
with distance from them. Floors 1-9 hold ten rooms each, floor 10 holds
seven.
"""

from __future__ import annotations

from backend.domain.models import Room


FLOOR_COUNT = 10
STANDARD_ROOMS_PER_FLOOR = 10
TOP_FLOOR_ROOMS = 7
TOTAL_ROOMS = (FLOOR_COUNT - 1) * STANDARD_ROOMS_PER_FLOOR + TOP_FLOOR_ROOMS

HORIZONTAL_MINUTES_PER_ROOM = 1
VERTICAL_MINUTES_PER_FLOOR = 2


def rooms_on_floor(floor: int) -> int:
    if not 1 <= floor <= FLOOR_COUNT:
        raise ValueError(f"floor must be between 1 and {FLOOR_COUNT}, got {floor}")
    if floor == FLOOR_COUNT:
        return TOP_FLOOR_ROOMS
    return STANDARD_ROOMS_PER_FLOOR


def room_number(floor: int, position: int) -> int:
    """Map a (floor, position) pair to its room number, e.g. (3, 4) -> 304."""
    room_count = rooms_on_floor(floor)
    if not 1 <= position <= room_count:
        raise ValueError(
            f"position must be between 1 and {room_count} on floor {floor}, got {position}"
        )
    return floor * 100 + position


def build_inventory() -> list[Room]:
    """Return every room of the hotel, free, ordered by (floor, position)."""
    return [
        Room(floor=floor, position=position, number=room_number(floor, position))
        for floor in range(1, FLOOR_COUNT + 1)
        for position in range(1, rooms_on_floor(floor) + 1)
    ]


def travel_cost(a: Room, b: Room) -> int:
    """Minutes needed to walk from room ``a`` to room ``b``.

    Cross-floor moves charge ``position - 1`` for each horizontal leg, not
    ``position``; the last step to the stairs is folded into the vertical
    transition.
    """
    if a.floor == b.floor:
        return abs(a.position - b.position) * HORIZONTAL_MINUTES_PER_ROOM
    horizontal = (a.position - 1) + (b.position - 1)
    vertical = VERTICAL_MINUTES_PER_FLOOR * abs(a.floor - b.floor)
    return horizontal * HORIZONTAL_MINUTES_PER_ROOM + vertical
