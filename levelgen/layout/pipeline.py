"""Pipeline orchestration for layout generation.

``generate`` runs the phases in a fixed order over a single random stream:

    place_rooms -> find_bounds -> build_grid -> carve_corridors
        -> verify_connectivity -> resolve_door_states

Each phase takes the grid it needs and hands it on, so no phase holds state
between runs. The returned GenerationResult is an immutable snapshot; the
grid inside it is a tuple of tuples.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from ..logging_utils import get_logger
from .bounds import Bounds, find_bounds
from .config import LevelConfig
from .connectivity import unreachable_rooms
from .corridors import carve_corridors
from .doors import DoorState, resolve_door_states
from .errors import InternalConsistencyError
from .grid import build_grid, freeze_grid, grid_to_lists
from .metrics import init_metrics
from .rooms import RoomSnapshot, place_rooms
from .snapshot import RoomPlacement, build_placements

log = get_logger("levelgen.layout")


@dataclass(frozen=True)
class GenerationResult:
    seed: Optional[int]
    config: LevelConfig
    rooms: Tuple[RoomSnapshot, ...]
    grid: Tuple[Tuple[int, ...], ...]
    bounds: Bounds
    door_states: Tuple[DoorState, ...]
    placements: Tuple[RoomPlacement, ...]
    metrics: Dict[str, Any]

    @property
    def width(self) -> int:
        return len(self.grid[0])

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def spawn(self) -> RoomSnapshot:
        return next(r for r in self.rooms if r.is_spawn)

    def to_dict(self, include_grid: bool = True, world: bool = False) -> Dict[str, Any]:
        scale = (self.config.room_width, self.config.room_length) if world else (None, None)
        out = {
            "seed": self.seed,
            "room_count": self.config.room_count,
            "room_type_count": self.config.room_type_count,
            "bounds": self.bounds.to_dict(),
            "width": self.width,
            "height": self.height,
            "rooms": [p.to_dict(*scale) for p in self.placements],
        }
        if include_grid:
            out["grid"] = grid_to_lists(self.grid)
        if self.metrics:
            out["metrics"] = dict(self.metrics)
        return out


def resolve_seed(seed: Optional[int]) -> int:
    # 0 is a valid deterministic seed; None means pick one
    if seed is None:
        return random.randint(1, 1_000_000)
    return seed


def generate(config: Optional[LevelConfig] = None, *, rng=None, **overrides) -> GenerationResult:
    """Generate one layout.

    ``overrides`` are applied on top of ``config`` (or the defaults). When an
    ``rng`` is injected it is used as-is and the config seed is only
    recorded; otherwise a ``random.Random`` is seeded from the config seed,
    choosing and recording a fresh seed when none is given.

    Raises ConfigurationError before any work on invalid input and
    InternalConsistencyError if a generation invariant breaks.
    """
    cfg = (config or LevelConfig()).merged(**overrides).validate()
    if rng is None:
        cfg = replace(cfg, seed=resolve_seed(cfg.seed))
        rng = random.Random(cfg.seed)

    metrics: Dict[str, Any] = init_metrics() if cfg.enable_metrics else {}
    phase_times: Dict[str, int] = {}
    start = time.perf_counter()

    def _phase(label, fn, *a, **k):
        if not cfg.enable_metrics:
            return fn(*a, **k)
        ps = time.perf_counter()
        r = fn(*a, **k)
        phase_times[label] = int((time.perf_counter() - ps) * 1000)
        log.debug(event="layout_phase", phase=label, ms=phase_times[label], seed=cfg.seed)
        return r

    try:
        rooms, place_stats = _phase("place_rooms", place_rooms, cfg.room_count, cfg.room_type_count, rng)
        bounds = _phase("find_bounds", find_bounds, rooms)
        grid = _phase("build_grid", build_grid, rooms, bounds)
        grid = _phase(
            "carve_corridors",
            carve_corridors,
            grid,
            rooms,
            bounds,
            rng,
            max_walk_steps=cfg.max_walk_steps,
            metrics=metrics if cfg.enable_metrics else None,
        )
        if cfg.verify_connectivity:
            _phase("verify_connectivity", _verify_connectivity, grid, rooms, bounds)
        door_states = _phase("resolve_doors", resolve_door_states, grid, rooms, bounds)
    except InternalConsistencyError as exc:
        log.error(event="layout_failed", seed=cfg.seed, rooms=cfg.room_count, error=str(exc))
        raise

    placements = build_placements(rooms, door_states)
    if cfg.enable_metrics:
        metrics.update(place_stats)
        metrics["grid_width"] = bounds.grid_width
        metrics["grid_height"] = bounds.grid_height
        metrics["open_doors"] = sum(s.open_count for s in door_states)
        metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
        metrics["phase_ms"] = phase_times

    log.info(
        event="layout_generated",
        seed=cfg.seed,
        rooms=len(rooms),
        width=bounds.grid_width,
        height=bounds.grid_height,
        runtime_ms=metrics.get("runtime_ms"),
    )
    return GenerationResult(
        seed=cfg.seed,
        config=cfg,
        rooms=tuple(r.freeze() for r in rooms),
        grid=freeze_grid(grid),
        bounds=bounds,
        door_states=tuple(door_states),
        placements=tuple(placements),
        metrics=metrics,
    )


def _verify_connectivity(grid, rooms, bounds) -> None:
    missing = unreachable_rooms(grid, rooms, bounds)
    if missing:
        coords = [r.coord for r in missing[:5]]
        raise InternalConsistencyError(f"{len(missing)} rooms unreachable from spawn after carving: {coords}")
