import time

import pytest

from levelgen.layout import generate

# Simple performance guardrail. Not a strict micro-benchmark; aims to catch large regressions.
# Adjust thresholds if CI hardware differs significantly.


@pytest.mark.performance
def test_layout_generation_large_seeds():
    seeds = [10101, 20202, 30303]
    max_seconds_per = 3.0  # generous threshold; tune as needed
    timings = []
    for s in seeds:
        start = time.perf_counter()
        result = generate(room_count=150, room_type_count=5, seed=s)
        elapsed = time.perf_counter() - start
        timings.append(elapsed)
        assert len(result.rooms) == 151
        assert elapsed < max_seconds_per, f"Seed {s} took {elapsed:.3f}s (> {max_seconds_per}s)"
    avg = sum(timings) / len(timings)
    assert avg < max_seconds_per * 0.85, f"Average generation {avg:.3f}s too high"
