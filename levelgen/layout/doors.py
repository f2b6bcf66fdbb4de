"""Door state projection over a carved grid.

A side of a room is open when the cell directly beside the room cell is a
corridor. North is +z (row + 1), east is +x (col + 1). The grid always has a
wall border around room cells, so the four neighbours are in range.
"""
from __future__ import annotations

from typing import Iterable, List, NamedTuple

from .bounds import Bounds
from .cells import CORRIDOR, room_cell

DIRECTIONS = ("north", "east", "south", "west")

# (row, col) offsets matching DIRECTIONS
DOOR_OFFSETS = ((1, 0), (0, 1), (-1, 0), (0, -1))


class DoorState(NamedTuple):
    north: bool
    east: bool
    south: bool
    west: bool

    @property
    def open_count(self) -> int:
        return sum(1 for d in self if d)

    def as_dict(self):
        return self._asdict()


def door_state_at(grid, row: int, col: int) -> DoorState:
    return DoorState(*(grid[row + dr][col + dc] == CORRIDOR for dr, dc in DOOR_OFFSETS))


def resolve_door_states(grid, rooms: Iterable, bounds: Bounds) -> List[DoorState]:
    """Door state per room, in the order the rooms are given. Read-only."""
    states = []
    for r in rooms:
        row, col = room_cell(r.x, r.z, bounds.min_x, bounds.min_z)
        states.append(door_state_at(grid, row, col))
    return states
