"""Corridor carving: connect every room back to spawn.

For each room not yet connected, a random walk hops between neighbouring room
cells (two grid cells at a time), opening the wall cell it crosses. The walk
stops once it lands on a room already connected to spawn, and every room it
passed through is then marked connected too.

Walks are not shortest paths. They may double back and reopen corridors that
already exist; only connectivity is guaranteed.
"""
from __future__ import annotations

import random
from typing import Dict, List, Optional

from .bounds import Bounds
from .cells import CORRIDOR, WALL, Grid, is_room_value, room_cell
from .errors import InternalConsistencyError
from .grid import index_rooms, room_at

# Row/col offsets to the neighbouring room cell: -z, +z, +x, -x
WALK_STEPS = ((-2, 0), (2, 0), (0, 2), (0, -2))

# Multiplier on the 2m(n-1) hitting-time bound of a lattice room graph (m <= 2n).
WALK_STEP_FACTOR = 320
MIN_WALK_STEPS = 1000


def default_walk_cap(total_rooms: int) -> int:
    return max(MIN_WALK_STEPS, WALK_STEP_FACTOR * total_rooms * total_rooms)


def carve_corridors(
    grid: Grid,
    rooms: List,
    bounds: Bounds,
    rng=None,
    *,
    max_walk_steps: Optional[int] = None,
    metrics: Optional[Dict] = None,
) -> Grid:
    """Carve corridors until every room is connected, then hand the grid back.

    Rooms are processed in list order, so nearer rooms connect first when the
    list is distance-sorted. A room marked visited by an earlier walk is
    skipped when its turn comes.
    """
    if rng is None:
        rng = random
    if max_walk_steps is None:
        max_walk_steps = default_walk_cap(len(rooms))
    rooms_by_coord = index_rooms(rooms)
    for room in rooms:
        if room.visited:
            continue
        chain, steps, carved = path_to_spawn(grid, room, rooms_by_coord, bounds, rng, max_walk_steps)
        if metrics is not None:
            metrics["walks"] += 1
            metrics["walk_steps"] += steps
            metrics["corridors_carved"] += carved
            metrics["longest_walk"] = max(metrics["longest_walk"], steps)
            metrics["rooms_connected"] += len(chain) - 1
    return grid


def path_to_spawn(grid: Grid, start, rooms_by_coord, bounds: Bounds, rng, max_walk_steps: int):
    """Walk from ``start`` until a visited room is reached.

    Returns (chain, steps, carved): the rooms walked through in first-visit
    order, the number of hops taken and the number of wall cells opened.
    """
    height = len(grid)
    width = len(grid[0])
    row, col = room_cell(start.x, start.z, bounds.min_x, bounds.min_z)
    chain = [start]
    seen = {start.coord}
    steps = 0
    carved = 0
    while True:
        if steps >= max_walk_steps:
            raise InternalConsistencyError(
                f"corridor walk from {start.coord} exceeded {max_walk_steps} steps without reaching spawn"
            )
        options = list(WALK_STEPS)
        while True:
            if not options:
                raise InternalConsistencyError(
                    f"corridor walk stuck at cell {(row, col)}: no neighbouring room in any direction"
                )
            dr, dc = rng.choice(options)
            nr, nc = row + dr, col + dc
            if not (0 <= nr < height and 0 <= nc < width) or not is_room_value(grid[nr][nc]):
                options.remove((dr, dc))
                continue
            break
        wall_r, wall_c = row + dr // 2, col + dc // 2
        if grid[wall_r][wall_c] == WALL:
            grid[wall_r][wall_c] = CORRIDOR
            carved += 1
        target = room_at(rooms_by_coord, nr, nc, bounds)
        if target.coord not in seen:
            seen.add(target.coord)
            chain.append(target)
        row, col = nr, nc
        steps += 1
        if target.visited:
            break
    for r in chain:
        r.visited = True
    return chain, steps, carved
