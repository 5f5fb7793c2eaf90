"""Travel-cost evaluation for ordered paths and unordered room clusters."""

from __future__ import annotations

from itertools import pairwise, permutations
from typing import Iterable, Sequence

from backend.domain.models import Room
from backend.domain.floor_plan import travel_cost


def path_cost(rooms: Sequence[Room]) -> int:
    """Total travel cost walking the rooms in the given order."""
    return sum(travel_cost(a, b) for a, b in pairwise(rooms))


def min_cluster_cost(rooms: Iterable[Room]) -> int:
    """Exact minimum path cost over every visiting order of the cluster.

    Callers pass at most five rooms, so at most 120 orderings are scanned.
    The path does not return to its start.
    """
    members = tuple(rooms)
    # permutations(()) yields one empty ordering, so empty clusters cost 0
    return min(path_cost(order) for order in permutations(members))


def cluster_lower_bound(rooms: Sequence[Room]) -> int:
    """Minimum spanning tree weight of the cluster (Prim).

    Any visiting path is itself a spanning tree, so this never exceeds
    ``min_cluster_cost`` for the same rooms.
    """
    if len(rooms) < 2:
        return 0

    remaining = list(rooms[1:])
    distance = [travel_cost(rooms[0], room) for room in remaining]
    total = 0
    while remaining:
        nearest = min(range(len(remaining)), key=distance.__getitem__)
        total += distance.pop(nearest)
        attached = remaining.pop(nearest)
        for index, room in enumerate(remaining):
            distance[index] = min(distance[index], travel_cost(attached, room))
    return total
