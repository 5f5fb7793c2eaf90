"""Room-cluster optimizer: same-floor windows first, bounded cross-floor search second.

Everything here is pure. Functions read an immutable occupancy snapshot and
return a proposed cluster or a typed failure; committing the occupancy change
belongs to ``BookingService``.
"""

from __future__ import annotations

from collections import defaultdict
from itertools import combinations, islice
from typing import Iterable, Optional, Sequence

from backend.domain.constraints import (
    MAX_CROSS_FLOOR_COMBINATIONS,
    MAX_ROOMS_PER_REQUEST,
    MIN_ROOMS_PER_REQUEST,
    candidate_pool_size,
    is_valid_request_count,
)
from backend.domain.models import (
    AssignmentFailure,
    AssignmentOutcome,
    AssignmentResult,
    AssignmentStrategy,
    ClusterCandidate,
    FailureReason,
    Room,
)
from backend.services.cost_service import cluster_lower_bound, min_cluster_cost
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def free_rooms_of(snapshot: Iterable[Room]) -> list[Room]:
    return [room for room in snapshot if not room.occupied]


def _pick_best(clusters: Iterable[Sequence[Room]]) -> Optional[ClusterCandidate]:
    """Scan clusters in order and keep the first one with the strictly lowest cost.

    A cluster whose spanning-tree bound already reaches the best cost cannot
    replace it, so its exact cost is skipped without changing the outcome.
    """
    best_rooms: Optional[tuple[Room, ...]] = None
    best_cost = 0
    examined = 0
    for cluster in clusters:
        examined += 1
        if best_rooms is not None and cluster_lower_bound(cluster) >= best_cost:
            continue
        cost = min_cluster_cost(cluster)
        if best_rooms is None or cost < best_cost:
            best_rooms = tuple(cluster)
            best_cost = cost

    if best_rooms is None:
        return None
    return ClusterCandidate(rooms=best_rooms, cost=best_cost, examined=examined)


def _same_floor_windows(free_rooms: Sequence[Room], count: int) -> Iterable[list[Room]]:
    by_floor: dict[int, list[Room]] = defaultdict(list)
    for room in free_rooms:
        by_floor[room.floor].append(room)

    for floor in sorted(by_floor):
        floor_rooms = sorted(by_floor[floor], key=lambda room: room.position)
        for start in range(len(floor_rooms) - count + 1):
            yield floor_rooms[start : start + count]


def find_best_same_floor(free_rooms: Sequence[Room], count: int) -> Optional[ClusterCandidate]:
    """Cheapest contiguous window of ``count`` free rooms on any single floor.

    Floors are scanned bottom-up, windows left to right; returns ``None`` when
    no floor has ``count`` free rooms.
    """
    if count < 1:
        return None
    return _pick_best(_same_floor_windows(free_rooms, count))


def find_best_across_floors(
    free_rooms: Sequence[Room],
    count: int,
) -> Optional[ClusterCandidate]:
    """Cheapest ``count``-combination drawn from the lowest free rooms.

    Only the first ``22 + 6 * count`` free rooms ordered by (floor, position)
    are candidates, and enumeration stops after 35,000 combinations. The
    result is the best cluster seen within those bounds, which is not
    guaranteed to be the global optimum.
    """
    if count < 1 or len(free_rooms) < count:
        return None

    ordered = sorted(free_rooms, key=lambda room: (room.floor, room.position))
    candidates = ordered[: candidate_pool_size(len(ordered), count)]
    bounded = islice(combinations(candidates, count), MAX_CROSS_FLOOR_COMBINATIONS)
    return _pick_best(bounded)


def assign_rooms(snapshot: Iterable[Room], count: int) -> AssignmentOutcome:
    """Propose the room cluster for a booking of ``count`` rooms."""
    if not is_valid_request_count(count):
        return AssignmentFailure(
            reason=FailureReason.INVALID_REQUEST_COUNT,
            message=(
                f"Request must be between {MIN_ROOMS_PER_REQUEST} and "
                f"{MAX_ROOMS_PER_REQUEST} rooms."
            ),
        )

    free_rooms = free_rooms_of(snapshot)
    if len(free_rooms) < count:
        return AssignmentFailure(
            reason=FailureReason.INSUFFICIENT_AVAILABILITY,
            message=f"Only {len(free_rooms)} rooms available.",
        )

    strategy = AssignmentStrategy.SAME_FLOOR
    candidate = find_best_same_floor(free_rooms, count)
    if candidate is None:
        strategy = AssignmentStrategy.CROSS_FLOOR
        candidate = find_best_across_floors(free_rooms, count)
    if candidate is None:
        return AssignmentFailure(
            reason=FailureReason.NO_FEASIBLE_ASSIGNMENT,
            message="Could not find optimal combination.",
        )

    logger.debug(
        "Cluster selected | strategy=%s | rooms=%s | cost=%s | examined=%s",
        strategy.value,
        [room.number for room in candidate.rooms],
        candidate.cost,
        candidate.examined,
    )
    return AssignmentResult(
        rooms=tuple(sorted(candidate.rooms, key=lambda room: room.number)),
        total_travel_cost=candidate.cost,
        strategy=strategy,
        candidates_examined=candidate.examined,
    )
