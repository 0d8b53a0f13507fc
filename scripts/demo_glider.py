#!/usr/bin/env python3
"""
Glider Demonstration Script

Runs a glider through the generic simulator under any Life-like rulestring
and logs its position every period. Under B3/S23 the glider moves (+1, +1)
every 4 generations and wraps around the torus.
"""

import sys
import os
import json
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from src.core import Simulator, spec_from_rulestring
from src.patterns import glider, live_cells


def run_glider_demo(grid_size=20, steps=40, start_x=5, start_y=5, rulestring="B3/S23"):
    """Run glider demonstration and return metrics."""
    logger.info("=== GLIDER DEMONSTRATION ===")
    logger.info(f"Grid size: {grid_size}x{grid_size}")
    logger.info(f"Rule: {rulestring}, evolution steps: {steps}")
    logger.info(f"Initial glider position: ({start_x}, {start_y})")

    sim = Simulator(grid_size, grid_size, spec_from_rulestring(rulestring))
    sim.load_pattern(glider(), start_x, start_y)

    initial_cells = sorted(live_cells(sim.get_state()))
    live_counts = [sim.live_count()]

    for step in range(steps):
        live_counts.append(sim.step())

        if (step + 1) % 4 == 0:
            cells = live_cells(sim.get_state())
            corner = (min(x for x, _ in cells), min(y for _, y in cells)) if cells else None
            logger.info(f"Generation {step + 1}: top-left={corner}, live={live_counts[-1]}")

    if grid_size <= 40:
        logger.info(f"Final grid:\n{sim}")

    results = {
        "grid_size": grid_size,
        "steps": steps,
        "rulestring": rulestring,
        "initial_cells": initial_cells,
        "final_cells": sorted(live_cells(sim.get_state())),
        "live_count_history": live_counts,
        "mass_conserved": all(count == 5 for count in live_counts),
    }

    if results["mass_conserved"]:
        logger.info("Glider mass conserved across all generations")
    else:
        logger.warning(f"Glider mass changed: min={min(live_counts)}, max={max(live_counts)}")

    return results


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Glider Demonstration")
    parser.add_argument("--grid-size", type=int, default=20, help="Grid size (square)")
    parser.add_argument("--steps", type=int, default=40, help="Evolution steps")
    parser.add_argument("--start-x", type=int, default=5, help="Glider start X position")
    parser.add_argument("--start-y", type=int, default=5, help="Glider start Y position")
    parser.add_argument("--rule", default="B3/S23", help="Life-like rulestring")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")

    args = parser.parse_args()

    try:
        results = run_glider_demo(args.grid_size, args.steps, args.start_x, args.start_y, args.rule)
    except ValueError as e:
        logger.error(f"Demonstration failed: {e}")
        sys.exit(1)

    if args.json:
        print(json.dumps(results, indent=2))
