from typing import List, Tuple

# Grid cell values. Anything above zero is a room cell holding room_id + 1.
WALL = 0
CORRIDOR = -1

Grid = List[List[int]]
Coord2D = Tuple[int, int]
Cell = Tuple[int, int]


def room_cell(x: int, z: int, min_x: int, min_z: int) -> Cell:
    """Map a lattice coordinate to its (row, col) grid cell. Always odd/odd."""
    return 2 * (z - min_z) + 1, 2 * (x - min_x) + 1


def cell_coordinate(row: int, col: int, min_x: int, min_z: int) -> Coord2D:
    """Inverse of room_cell for room cells: (row, col) -> (x, z)."""
    return (col - 1) // 2 + min_x, (row - 1) // 2 + min_z


def is_room_value(value: int) -> bool:
    return value > 0


def is_open_value(value: int) -> bool:
    return value == CORRIDOR or value > 0


__all__ = [
    "WALL",
    "CORRIDOR",
    "Grid",
    "Coord2D",
    "Cell",
    "room_cell",
    "cell_coordinate",
    "is_room_value",
    "is_open_value",
]
