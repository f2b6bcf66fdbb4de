"""Public layout package interface.

Room placement, grid layout, corridor carving and door resolution, plus the
``generate`` entry point that runs them in order.
"""

from .bounds import Bounds, find_bounds
from .cells import CORRIDOR, WALL
from .config import LevelConfig
from .connectivity import flood_accessibility, unreachable_rooms
from .corridors import carve_corridors, path_to_spawn
from .doors import DIRECTIONS, DoorState, resolve_door_states
from .errors import ConfigurationError, InternalConsistencyError, LevelGenerationError
from .grid import build_grid
from .pipeline import GenerationResult, generate
from .rooms import Room, RoomSnapshot, place_rooms
from .snapshot import RoomPlacement, build_placements, world_position  # noqa: F401

__all__ = [
    "Bounds",
    "find_bounds",
    "CORRIDOR",
    "WALL",
    "LevelConfig",
    "flood_accessibility",
    "unreachable_rooms",
    "carve_corridors",
    "path_to_spawn",
    "DIRECTIONS",
    "DoorState",
    "resolve_door_states",
    "ConfigurationError",
    "InternalConsistencyError",
    "LevelGenerationError",
    "build_grid",
    "GenerationResult",
    "generate",
    "Room",
    "RoomSnapshot",
    "place_rooms",
    "RoomPlacement",
    "build_placements",
    "world_position",
]
