"""Canonical Life-like test patterns.

Small boolean arrays indexed [x, y] for seeding a simulator with
load_pattern(), plus helpers for comparing grids by their live cells.
"""

import numpy as np
from typing import Set, Tuple


def glider() -> np.ndarray:
    """Create classic glider moving (+1, +1) every 4 generations under B3/S23.

    Live cells are (1, 0), (2, 1), (0, 2), (1, 2) and (2, 2).
    """
    return np.array([
        [False, False, True],
        [True, False, True],
        [False, True, True]
    ], dtype=bool)


def blinker() -> np.ndarray:
    """Create horizontal blinker pattern (3 cells along x, period 2)."""
    return np.ones((3, 1), dtype=bool)


def block() -> np.ndarray:
    """Create stable 2x2 block still life."""
    return np.ones((2, 2), dtype=bool)


def rotate_pattern(pattern: np.ndarray, clockwise_rotations: int = 1) -> np.ndarray:
    """Rotate a pattern clockwise (as drawn with y downward) by 90° turns."""
    return np.rot90(pattern.T, k=-(clockwise_rotations % 4)).T.copy()


def live_cells(state: np.ndarray) -> Set[Tuple[int, int]]:
    """Get the set of live (x, y) coordinates in an [x, y] indexed grid."""
    xs, ys = np.nonzero(state)
    return {(int(x), int(y)) for x, y in zip(xs, ys)}


def translate(cells: Set[Tuple[int, int]], dx: int, dy: int,
              width: int, height: int) -> Set[Tuple[int, int]]:
    """Shift a set of cells on a width x height torus."""
    return {((x + dx) % width, (y + dy) % height) for x, y in cells}
