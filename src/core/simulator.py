"""
Double-Buffered Cellular Automaton Simulator

Advances a fixed-size toroidal boolean grid one generation at a time using a
RuleSpec. Two grid buffers and the scratch arrays used for counting are
allocated up front; each step reads the active buffer, writes the staging
buffer, then swaps their roles.

The grid is not thread-safe. Callers that share a simulator between threads
must serialize every call themselves.
"""

import numpy as np
from typing import Optional
import logging
from .errors import OutOfRange
from .rule_spec import RuleSpec, validate_spec
from .rules import count_neighbors

logger = logging.getLogger(__name__)


class Simulator:
    """Generic 2D cellular automaton over a toroidal grid.

    Cells are addressed as (x, y) with 0 <= x < width and 0 <= y < height.
    Full grids, in and out, are arrays of shape (width, height) indexed
    [x, y]. Full-state reads and writes copy, so callers never alias the
    simulator's buffers.
    """

    def __init__(self, width: int, height: int, spec: RuleSpec):
        """Initialize an all-dead grid.

        Args:
            width: Grid width in cells
            height: Grid height in cells
            spec: Neighborhood and rule table to evolve with

        Raises:
            InvalidSpec: If the rule specification is invalid
            ValueError: If dimensions are not positive
        """
        validate_spec(spec)
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self._setup(spec, np.zeros((width, height), dtype=bool))

    @classmethod
    def from_state(cls, state, spec: RuleSpec) -> 'Simulator':
        """Create a simulator seeded from an initial state.

        Args:
            state: 2D boolean array-like indexed [x][y], shape (width, height)
            spec: Neighborhood and rule table to evolve with

        Raises:
            InvalidSpec: If the rule specification is invalid
            ValueError: If state is not a non-empty 2D grid
        """
        validate_spec(spec)
        initial = _as_grid(state)

        simulator = cls.__new__(cls)
        simulator._setup(spec, initial)
        return simulator

    def _setup(self, spec: RuleSpec, active: np.ndarray) -> None:
        self._spec = spec
        self._transition = spec.transition_table()
        self._allocate(active)

        logger.debug(f"Created {self.width}x{self.height} simulator with {spec!r}")

    def _allocate(self, active: np.ndarray) -> None:
        """Install a new active buffer, an all-dead staging buffer and scratch arrays."""
        self._buffers = [active, np.zeros_like(active)]
        self._active = 0
        self._counts = np.zeros(active.shape, dtype=np.int64)
        self._weighted = np.zeros(active.shape, dtype=np.int64)
        self._survivors = np.zeros(active.shape, dtype=bool)

    def _buffer(self, active: bool = True) -> np.ndarray:
        """Return the active buffer, or the staging buffer when active is False."""
        return self._buffers[self._active if active else 1 - self._active]

    @property
    def width(self) -> int:
        return self._buffers[0].shape[0]

    @property
    def height(self) -> int:
        return self._buffers[0].shape[1]

    @property
    def spec(self) -> RuleSpec:
        return self._spec

    @property
    def state(self) -> np.ndarray:
        """Copy of the active grid."""
        return self.get_state()

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfRange(f"Coordinates ({x}, {y}) out of bounds for {self.width}x{self.height} grid")

    def get_cell(self, x: int, y: int) -> bool:
        """Get state of individual cell.

        Args:
            x: Cell x-coordinate (0 to width-1)
            y: Cell y-coordinate (0 to height-1)

        Returns:
            Cell state (True=alive, False=dead)

        Raises:
            OutOfRange: If coordinates are out of bounds
        """
        self._check_bounds(x, y)
        return bool(self._buffer()[x, y])

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set state of individual cell.

        Raises:
            OutOfRange: If coordinates are out of bounds
        """
        self._check_bounds(x, y)
        self._buffer()[x, y] = alive

    def get_state(self) -> np.ndarray:
        """Return a copy of the active grid, shape (width, height)."""
        return self._buffer().copy()

    def set_state(self, state) -> None:
        """Replace the active grid, resizing the simulator to match.

        The staging buffer is reallocated all dead. The argument is copied.

        Args:
            state: 2D boolean array-like indexed [x][y]

        Raises:
            ValueError: If state is not a non-empty 2D grid
        """
        grid = _as_grid(state)
        self._allocate(grid)
        logger.debug(f"Replaced simulator state, now {self.width}x{self.height}")

    def clear(self) -> None:
        """Clear entire grid (set all cells to dead)."""
        self._buffer().fill(False)

    def load_pattern(self, pattern, x: int, y: int) -> None:
        """Load a pattern into the grid at specified position.

        Live pattern cells are set alive, wrapping around the grid edges.
        Dead pattern cells leave the grid untouched.

        Args:
            pattern: 2D boolean array indexed [x, y]
            x: Top-left x-coordinate for placement
            y: Top-left y-coordinate for placement
        """
        pattern = np.asarray(pattern, dtype=bool)
        xs, ys = np.nonzero(pattern)
        self._buffer()[(xs + x) % self.width, (ys + y) % self.height] = True

    def count_neighbors(self, x: int, y: int) -> int:
        """Weighted neighbor count of one cell in the active grid.

        Raises:
            OutOfRange: If coordinates are out of bounds
        """
        self._check_bounds(x, y)
        return count_neighbors(self._buffer(), self._spec.neighborhood, x, y)

    def step(self) -> int:
        """Evolve grid one generation.

        Every neighbor count is computed from the active buffer before the
        staging buffer is written, then the two buffers swap roles. Only the
        preallocated buffers are written.

        Returns:
            Number of live cells after evolution

        Note:
            Uses toroidal boundary conditions (grid wraps around edges)
        """
        old = self._buffer(active=True)
        new = self._buffer(active=False)
        counts = self._counts
        weighted = self._weighted
        counts.fill(0)

        width, height = old.shape
        rx, ry = self._spec.radius
        for (mx, my), weight in np.ndenumerate(self._spec.neighborhood):
            if weight == 0:
                continue
            np.multiply(old, weight, out=weighted)
            _add_wrapped(counts, weighted, (mx - rx) % width, (my - ry) % height)

        birth, survival = self._transition
        np.take(birth, counts, out=new, mode='clip')
        np.take(survival, counts, out=self._survivors, mode='clip')
        np.copyto(new, self._survivors, where=old)

        self._active = 1 - self._active
        return int(np.count_nonzero(new))

    def run(self, steps: int, log_interval: Optional[int] = None) -> list[int]:
        """Evolve grid multiple generations.

        Args:
            steps: Number of generations
            log_interval: If provided, only keep live counts at these intervals

        Returns:
            List of live cell counts (either all steps or at intervals)

        Raises:
            ValueError: If log_interval is less than 1
        """
        if log_interval is not None and log_interval < 1:
            raise ValueError(f"log_interval must be at least 1, got {log_interval}")

        live_counts = []

        for step_num in range(steps):
            live_count = self.step()

            if log_interval is None or step_num % log_interval == 0:
                live_counts.append(live_count)

        return live_counts

    def live_count(self) -> int:
        """Get total number of live cells."""
        return int(np.count_nonzero(self._buffer()))

    def copy(self) -> 'Simulator':
        """Create an independent simulator with the same spec and grid."""
        return Simulator.from_state(self._buffer(), self._spec)

    def __str__(self) -> str:
        """String representation showing live cells as X, one line per row y."""
        return "\n".join(
            "".join("X" if alive else "." for alive in row)
            for row in self._buffer().T
        )

    def __repr__(self) -> str:
        return f"Simulator({self.width}x{self.height}, alive={self.live_count()}, spec={self._spec!r})"


def _add_wrapped(target: np.ndarray, source: np.ndarray, sx: int, sy: int) -> None:
    """Add source shifted on the torus: target[x, y] += source[(x + sx) % W, (y + sy) % H].

    Requires 0 <= sx < W and 0 <= sy < H; the shift splits into at most four
    rectangular slice additions.
    """
    width, height = target.shape
    x_blocks = ((slice(0, width - sx), slice(sx, width)), (slice(width - sx, width), slice(0, sx)))
    y_blocks = ((slice(0, height - sy), slice(sy, height)), (slice(height - sy, height), slice(0, sy)))
    for tx, fx in x_blocks:
        for ty, fy in y_blocks:
            target[tx, ty] += source[fx, fy]


def _as_grid(state) -> np.ndarray:
    """Copy an array-like into a fresh boolean grid."""
    grid = np.array(state, dtype=bool)
    if grid.ndim != 2 or grid.size == 0:
        raise ValueError(f"State must be a non-empty 2D grid, got shape {grid.shape}")
    return grid
