from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'rooms_placed': 0,
        'candidate_peak': 0,
        'grid_width': 0,
        'grid_height': 0,
        'walks': 0,
        'walk_steps': 0,
        'longest_walk': 0,
        'rooms_connected': 0,
        'corridors_carved': 0,
        'open_doors': 0,
        'runtime_ms': 0.0,
    }
