"""Rule specification for generic 2D cellular automata.

A rule specification pairs a weighted neighborhood mask with a birth/survival
rule table. It is a pure data holder: construction only normalizes the inputs
into read-only integer data, structural validation is a separate step run by
the simulator before any generation is computed.
"""

import numpy as np
from typing import Sequence, Tuple
import logging
from .errors import InvalidSpec

logger = logging.getLogger(__name__)


def _integer_array(values, name: str) -> np.ndarray:
    """Convert array-like input to int64, rejecting non-integral values.

    Raises:
        InvalidSpec: If values are ragged, non-numeric or not whole numbers
    """
    try:
        array = np.array(values)
    except (TypeError, ValueError) as e:
        raise InvalidSpec(f"{name} is not made of integers: {e}") from e

    if np.issubdtype(array.dtype, np.bool_) or np.issubdtype(array.dtype, np.integer):
        return array.astype(np.int64)

    if np.issubdtype(array.dtype, np.floating):
        if not np.all(np.isfinite(array)) or not np.array_equal(array, np.round(array)):
            raise InvalidSpec(f"{name} is not made of integers: {array.tolist()}")
        return array.astype(np.int64)

    raise InvalidSpec(f"{name} is not made of integers: dtype {array.dtype}")


class RuleSpec:
    """Immutable neighborhood mask and rule table.

    Attributes:
        neighborhood: Read-only int64 array of shape (mask_width, mask_height).
            Entry [rx + dx, ry + dy] is the weight of the neighbor at offset
            (dx, dy); the centre entry is the cell itself.
        rules: Two rows of non-negative integers indexed by neighbor count.
            rules[0][k] != 0 means a dead cell with count k is born,
            rules[1][k] != 0 means a live cell with count k survives.
    """

    def __init__(self, neighborhood, rules: Sequence[Sequence[int]]):
        """Store copies of the neighborhood mask and rule table.

        Args:
            neighborhood: 2D array-like of integer weights indexed [x][y]
            rules: Sequence of rule rows (dead row, live row)

        Raises:
            InvalidSpec: If the inputs are not integer data
        """
        mask = _integer_array(neighborhood, "Neighborhood")

        try:
            rows = list(rules)
        except TypeError as e:
            raise InvalidSpec(f"Rule table is not made of integers: {e}") from e

        table = []
        for state, row in enumerate(rows):
            values = _integer_array(row, f"Rule row {state}")
            if values.ndim != 1:
                raise InvalidSpec(f"Rule row {state} is not made of integers: expected a flat sequence")
            table.append(tuple(int(value) for value in values))

        mask.setflags(write=False)
        self._neighborhood = mask
        self._rules = tuple(table)

    @property
    def neighborhood(self) -> np.ndarray:
        return self._neighborhood

    @property
    def rules(self) -> Tuple[Tuple[int, ...], ...]:
        return self._rules

    @property
    def radius(self) -> Tuple[int, int]:
        """Neighborhood radius as (rx, ry)."""
        width, height = self._neighborhood.shape
        return (width - 1) // 2, (height - 1) // 2

    @property
    def max_neighbor_count(self) -> int:
        """Largest reachable neighbor count (sum of all mask weights)."""
        return int(self._neighborhood.sum())

    def validate(self) -> None:
        """Check the structural invariants of this specification.

        Raises:
            InvalidSpec: If the mask is not 2D with odd dimensions, holds
                negative weights, or the rule table is not two rows long
                enough to cover every reachable neighbor count
        """
        mask = self._neighborhood
        if mask.ndim != 2:
            raise InvalidSpec(f"Neighborhood must be 2D, got {mask.ndim} dimensions")

        width, height = mask.shape
        if width % 2 != 1 or height % 2 != 1:
            raise InvalidSpec(f"Neighborhood dimensions must be odd, got {width}x{height}")

        if (mask < 0).any():
            raise InvalidSpec("Neighborhood weights must be non-negative")

        if len(self._rules) != 2:
            raise InvalidSpec(f"Rule table must have exactly 2 rows, got {len(self._rules)}")

        max_count = self.max_neighbor_count
        for state, row in enumerate(self._rules):
            if len(row) < max_count + 1:
                raise InvalidSpec(
                    f"Rule row {state} has {len(row)} entries, "
                    f"needs at least {max_count + 1} for neighbor counts 0..{max_count}"
                )
            if any(value < 0 for value in row):
                raise InvalidSpec(f"Rule row {state} contains negative entries")

    def transition_table(self) -> np.ndarray:
        """Boolean lookup array of shape (2, max_neighbor_count + 1).

        Row 0 gives births for dead cells, row 1 survival for live cells.
        Only meaningful for a validated specification.
        """
        size = self.max_neighbor_count + 1
        table = np.array([row[:size] for row in self._rules], dtype=np.int64) != 0
        table.setflags(write=False)
        return table

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleSpec):
            return NotImplemented
        return (self._rules == other._rules and
                self._neighborhood.shape == other._neighborhood.shape and
                np.array_equal(self._neighborhood, other._neighborhood))

    def __hash__(self) -> int:
        return hash((self._neighborhood.shape, self._neighborhood.tobytes(), self._rules))

    def __repr__(self) -> str:
        width, height = self._neighborhood.shape if self._neighborhood.ndim == 2 else (0, 0)
        return f"RuleSpec(neighborhood={width}x{height}, max_count={self.max_neighbor_count}, rules={self._rules})"


def validate_spec(spec: RuleSpec) -> None:
    """Validate a rule specification, logging the failure reason."""
    try:
        spec.validate()
    except InvalidSpec as e:
        logger.debug(f"Rejected rule specification {spec!r}: {e}")
        raise
