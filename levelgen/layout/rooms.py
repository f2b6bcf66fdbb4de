"""Room placement: grow a connected set of lattice rooms from the spawn room.

Each new room is drawn from the unclaimed neighbours of rooms already placed,
so the room set is always 4-connected on the lattice. The corridor carver
relies on that property to terminate.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .cells import Coord2D

SPAWN_ROOM_ID = 0

# Neighbour order: -x, +x, +z, -z
_NEIGHBOUR_OFFSETS = ((-1, 0), (1, 0), (0, 1), (0, -1))


class _RoomGeometry:
    @property
    def coord(self) -> Coord2D:
        return (self.x, self.z)

    @property
    def distance(self) -> int:
        return abs(self.x) + abs(self.z)

    @property
    def is_spawn(self) -> bool:
        return self.coord == (0, 0)

    def to_dict(self):
        return {"room_id": self.room_id, "x": self.x, "z": self.z, "visited": self.visited}


@dataclass
class Room(_RoomGeometry):
    room_id: int
    x: int
    z: int
    visited: bool = False

    def freeze(self) -> "RoomSnapshot":
        return RoomSnapshot(self.room_id, self.x, self.z, self.visited)


@dataclass(frozen=True)
class RoomSnapshot(_RoomGeometry):
    """Read-only copy of a Room as it stood when generation finished."""

    room_id: int
    x: int
    z: int
    visited: bool = False


def draw_room_type(room_type_count: int, rng) -> int:
    """Type 0 is reserved for spawn-like rooms unless it is the only type."""
    if room_type_count == 1:
        return 0
    return rng.randint(1, room_type_count - 1)


def place_rooms(room_count: int, room_type_count: int, rng=None) -> Tuple[List[Room], Dict[str, int]]:
    """Place ``room_count`` rooms around a spawn room at the origin.

    Returns (rooms, stats). Rooms come back sorted by Manhattan distance from
    the origin (stable, so ties keep placement order). The spawn room is the
    first entry and is already marked visited.
    """
    if rng is None:
        rng = random
    spawn = Room(SPAWN_ROOM_ID, 0, 0, visited=True)
    rooms: List[Room] = [spawn]
    occupied = {spawn.coord}
    # dict used as an ordered set so draws stay reproducible for a given seed
    candidates: Dict[Coord2D, None] = {}
    candidate_peak = 0
    for _ in range(room_count):
        _add_candidates(rooms[-1], occupied, candidates)
        candidate_peak = max(candidate_peak, len(candidates))
        x, z = rng.choice(list(candidates))
        room_type = draw_room_type(room_type_count, rng)
        del candidates[(x, z)]
        rooms.append(Room(room_type, x, z))
        occupied.add((x, z))
    rooms.sort(key=lambda r: r.distance)
    return rooms, {"rooms_placed": room_count, "candidate_peak": candidate_peak}


def _add_candidates(room: Room, occupied, candidates: Dict[Coord2D, None]) -> None:
    for dx, dz in _NEIGHBOUR_OFFSETS:
        coord = (room.x + dx, room.z + dz)
        if coord not in occupied:
            candidates[coord] = None
