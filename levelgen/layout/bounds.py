from typing import Iterable, NamedTuple

from .errors import InternalConsistencyError


class Bounds(NamedTuple):
    min_x: int
    max_x: int
    min_z: int
    max_z: int

    @property
    def grid_height(self) -> int:
        return 2 * (self.max_z - self.min_z + 1) + 1

    @property
    def grid_width(self) -> int:
        return 2 * (self.max_x - self.min_x + 1) + 1

    def contains(self, x: int, z: int) -> bool:
        return self.min_x <= x <= self.max_x and self.min_z <= z <= self.max_z

    def to_dict(self):
        return self._asdict()


def find_bounds(rooms: Iterable) -> Bounds:
    """Axis-aligned bounding box over room coordinates."""
    xs = []
    zs = []
    for r in rooms:
        xs.append(r.x)
        zs.append(r.z)
    if not xs:
        raise InternalConsistencyError("cannot compute bounds of an empty room set")
    return Bounds(min(xs), max(xs), min(zs), max(zs))
