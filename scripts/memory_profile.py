#!/usr/bin/env python3
"""
Memory and throughput profiling for simulator stepping.

Tracks process memory over many generations to confirm the double-buffered
simulator does not grow its footprint, and reports generations per second.
"""

import psutil
import os
import time
import json
import sys
import gc
from typing import Dict

import numpy as np

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.core import Simulator, moore, rule_table, RuleSpec


def measure_memory_mb() -> float:
    """Get current process memory usage in MB."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


def create_simulator(grid_size: int, radius: int, density: float, seed: int) -> Simulator:
    """Create a simulator on a random grid with a Moore neighborhood of the given radius."""
    mask = moore(radius)
    max_count = int(mask.sum())
    # Scale B3/S23 thresholds to the neighborhood size
    scale = max_count / 8
    birth = {round(3 * scale)}
    survival = set(range(round(2 * scale), round(3 * scale) + 1))
    spec = RuleSpec(mask, rule_table(birth, survival, max_count))

    sim = Simulator(grid_size, grid_size, spec)
    sim.set_state(np.random.default_rng(seed).random((grid_size, grid_size)) < density)
    return sim


def profile_memory_usage(cycles: int = 20, steps_per_cycle: int = 50, grid_size: int = 256,
                         radius: int = 1, density: float = 0.35, seed: int = 0) -> Dict:
    """Profile memory usage over multiple stepping cycles."""
    print(f"🔍 Profiling {cycles} cycles x {steps_per_cycle} steps on {grid_size}x{grid_size}, radius {radius}...")
    print("=" * 60)

    gc.collect()
    baseline_memory = measure_memory_mb()
    print(f"Baseline Memory:              {baseline_memory:6.1f} MB")

    sim = create_simulator(grid_size, radius, density, seed)
    setup_memory = measure_memory_mb()
    print(f"Memory After Setup:           {setup_memory:6.1f} MB")

    measurements = []
    for cycle in range(cycles):
        start_time = time.time()
        start_memory = measure_memory_mb()

        live_counts = sim.run(steps_per_cycle)

        end_memory = measure_memory_mb()
        elapsed = time.time() - start_time

        measurements.append({
            "cycle": cycle,
            "memory_mb": end_memory,
            "memory_delta_mb": end_memory - start_memory,
            "generations_per_sec": steps_per_cycle / elapsed if elapsed > 0 else float('inf'),
            "live_cells": live_counts[-1],
        })

    final_memory = measure_memory_mb()
    growth = final_memory - setup_memory
    rates = [m["generations_per_sec"] for m in measurements]

    print(f"Final Memory:                 {final_memory:6.1f} MB")
    print(f"Growth Since Setup:           {growth:6.1f} MB")
    print(f"Mean Throughput:              {sum(rates) / len(rates):6.1f} gen/s")

    return {
        "grid_size": grid_size,
        "radius": radius,
        "baseline_memory_mb": baseline_memory,
        "setup_memory_mb": setup_memory,
        "final_memory_mb": final_memory,
        "growth_mb": growth,
        "cycles": measurements,
    }


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Simulator memory profile")
    parser.add_argument("--cycles", type=int, default=20)
    parser.add_argument("--steps", type=int, default=50, help="Generations per cycle")
    parser.add_argument("--grid-size", type=int, default=256)
    parser.add_argument("--radius", type=int, default=1)
    parser.add_argument("--threshold", type=float, default=20.0, help="Allowed growth in MB")
    parser.add_argument("--output", help="Write results to this JSON file")

    args = parser.parse_args()
    results = profile_memory_usage(args.cycles, args.steps, args.grid_size, args.radius)

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(results, f, indent=2)

    if results["growth_mb"] > args.threshold:
        print(f"✗ Memory grew {results['growth_mb']:.1f}MB, above {args.threshold}MB")
        sys.exit(1)
    print("✓ Memory stable across generations")
    sys.exit(0)
