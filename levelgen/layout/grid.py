"""Doubled-resolution grid construction.

Rooms land on odd/odd cells; the even rows and columns between them stay WALL
until the corridor carver opens them.
"""
from __future__ import annotations

from typing import Dict, Iterable, List

from .bounds import Bounds
from .cells import WALL, Coord2D, Grid, cell_coordinate, room_cell
from .errors import InternalConsistencyError


def init_grid(bounds: Bounds) -> Grid:
    return [[WALL for _ in range(bounds.grid_width)] for _ in range(bounds.grid_height)]


def build_grid(rooms: Iterable, bounds: Bounds) -> Grid:
    grid = init_grid(bounds)
    for r in rooms:
        if not bounds.contains(r.x, r.z):
            raise InternalConsistencyError(f"room at {r.coord} lies outside bounds {tuple(bounds)}")
        row, col = room_cell(r.x, r.z, bounds.min_x, bounds.min_z)
        if grid[row][col] != WALL:
            raise InternalConsistencyError(f"two rooms resolve to grid cell {(row, col)}")
        grid[row][col] = r.room_id + 1
    return grid


def index_rooms(rooms: Iterable) -> Dict[Coord2D, object]:
    return {r.coord: r for r in rooms}


def room_at(rooms_by_coord: Dict[Coord2D, object], row: int, col: int, bounds: Bounds):
    """Resolve a room cell to its Room through the coordinate index.

    Cell values are type ids and repeat across rooms, so they cannot identify
    a room on their own.
    """
    coord = cell_coordinate(row, col, bounds.min_x, bounds.min_z)
    try:
        return rooms_by_coord[coord]
    except KeyError:
        raise InternalConsistencyError(f"grid cell {(row, col)} holds a room but no room has coordinate {coord}") from None


def freeze_grid(grid: Grid):
    return tuple(tuple(row) for row in grid)


def grid_to_lists(grid) -> List[List[int]]:
    return [list(row) for row in grid]
