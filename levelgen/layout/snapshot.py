"""Immutable per-room records handed to the instantiation layer.

The instantiation layer looks up a prefab by ``room_id``, places it at the
scaled world position and hides the door geometry for every open side.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .cells import Coord2D
from .doors import DoorState


def world_position(coordinate: Coord2D, room_width: float, room_length: float) -> Tuple[float, float, float]:
    """Lattice coordinate -> (x, y, z) world position. Length scales x, width scales z."""
    x, z = coordinate
    return (float(x) * room_length, 0.0, float(z) * room_width)


@dataclass(frozen=True)
class RoomPlacement:
    room_id: int
    coordinate: Coord2D
    open_directions: DoorState

    def world_position(self, room_width: float, room_length: float) -> Tuple[float, float, float]:
        return world_position(self.coordinate, room_width, room_length)

    def to_dict(self, room_width: float | None = None, room_length: float | None = None):
        out = {
            "room_id": self.room_id,
            "coordinate": list(self.coordinate),
            "open_directions": self.open_directions.as_dict(),
        }
        if room_width is not None and room_length is not None:
            out["world_position"] = list(self.world_position(room_width, room_length))
        return out


def build_placements(rooms: Iterable, door_states: Sequence[DoorState]) -> List[RoomPlacement]:
    rooms = list(rooms)
    if len(rooms) != len(door_states):
        raise ValueError("door_states must align with rooms")
    return [RoomPlacement(r.room_id, r.coord, state) for r, state in zip(rooms, door_states)]
