"""Connectivity checks over a carved grid.

flood_accessibility walks open cells (corridors and rooms) by 4-adjacency.
The pipeline uses unreachable_rooms as a final invariant check after carving.
"""
from __future__ import annotations

from collections import deque
from typing import Iterable, List, Set

from .bounds import Bounds
from .cells import Cell, is_open_value, room_cell


def flood_accessibility(grid, start: Cell) -> Set[Cell]:
    height = len(grid)
    width = len(grid[0]) if height else 0
    sr, sc = start
    if not (0 <= sr < height and 0 <= sc < width) or not is_open_value(grid[sr][sc]):
        return set()
    visited = {start}
    q = deque([start])
    while q:
        cr, cc = q.popleft()
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nr, nc = cr + dr, cc + dc
            if 0 <= nr < height and 0 <= nc < width and (nr, nc) not in visited:
                if is_open_value(grid[nr][nc]):
                    visited.add((nr, nc))
                    q.append((nr, nc))
    return visited


def spawn_cell(bounds: Bounds) -> Cell:
    return room_cell(0, 0, bounds.min_x, bounds.min_z)


def unreachable_rooms(grid, rooms: Iterable, bounds: Bounds) -> List:
    """Rooms whose cell cannot be reached from the spawn cell."""
    reach = flood_accessibility(grid, spawn_cell(bounds))
    return [r for r in rooms if room_cell(r.x, r.z, bounds.min_x, bounds.min_z) not in reach]
