"""
Neighborhoods, Rule Tables and Presets

Builders for the common neighborhood masks and birth/survival rule tables,
a parser for "B3/S23" style rulestrings, and the standard Conway preset.
"""

import re
from typing import Iterable, Optional, Set, Tuple, List, TYPE_CHECKING
import numpy as np
from .errors import InvalidSpec
from .rule_spec import RuleSpec, _integer_array

if TYPE_CHECKING:
    from numpy.typing import ArrayLike


# Standard Conway rules
SURVIVAL_SET: Set[int] = {2, 3}  # Live cells survive with 2-3 neighbors
BIRTH_SET: Set[int] = {3}        # Dead cells born with exactly 3 neighbors

_BS_PATTERN = re.compile(r"^B(?P<birth>\d*)/S(?P<survival>\d*)$", re.IGNORECASE)
_SB_PATTERN = re.compile(r"^(?P<survival>\d*)/(?P<birth>\d*)$")


def moore(radius: int = 1) -> np.ndarray:
    """Square neighborhood of the given radius, centre excluded.

    Masks are indexed [rx + dx, ry + dy].

    Args:
        radius: Chebyshev radius (1 gives the classic 8-cell neighborhood)

    Returns:
        (2r+1)x(2r+1) int64 mask
    """
    if radius < 0:
        raise ValueError("Neighborhood radius must be non-negative")
    size = 2 * radius + 1
    mask = np.ones((size, size), dtype=np.int64)
    mask[radius, radius] = 0
    return mask


def von_neumann(radius: int = 1) -> np.ndarray:
    """Diamond neighborhood (Manhattan distance <= radius), centre excluded."""
    if radius < 0:
        raise ValueError("Neighborhood radius must be non-negative")
    offsets = np.arange(-radius, radius + 1)
    distance = np.abs(offsets)[:, None] + np.abs(offsets)[None, :]
    mask = (distance <= radius).astype(np.int64)
    mask[radius, radius] = 0
    return mask


def rule_table(birth: Iterable[int], survival: Iterable[int], max_count: int) -> List[List[int]]:
    """Build the two-row rule table for neighbor counts 0..max_count.

    Args:
        birth: Neighbor counts at which a dead cell becomes alive
        survival: Neighbor counts at which a live cell stays alive
        max_count: Largest reachable neighbor count

    Returns:
        [dead_row, live_row], each of length max_count + 1
    """
    birth, survival = set(birth), set(survival)
    return [
        [1 if count in birth else 0 for count in range(max_count + 1)],
        [1 if count in survival else 0 for count in range(max_count + 1)],
    ]


def parse_rulestring(rulestring: str) -> Tuple[Set[int], Set[int]]:
    """Parse a single-digit Life-like rulestring.

    Accepts "B3/S23" notation and the older "23/3" survival/birth form.

    Returns:
        (birth_set, survival_set)

    Raises:
        InvalidSpec: If the string matches neither notation
    """
    text = rulestring.strip()
    match = _BS_PATTERN.match(text) or _SB_PATTERN.match(text)
    if match is None:
        raise InvalidSpec(f"Unrecognized rulestring: {rulestring!r}")

    birth = {int(digit) for digit in match.group("birth")}
    survival = {int(digit) for digit in match.group("survival")}
    return birth, survival


def spec_from_rulestring(rulestring: str, neighborhood: Optional['ArrayLike'] = None) -> RuleSpec:
    """Create a rule specification from a rulestring.

    Args:
        rulestring: "B3/S23" or "23/3" style rule
        neighborhood: Mask to count with (default Moore radius 1)
    """
    birth, survival = parse_rulestring(rulestring)
    mask = moore() if neighborhood is None else _integer_array(neighborhood, "Neighborhood")
    max_count = int(mask.sum())

    unreachable = {count for count in birth | survival if count > max_count}
    if unreachable:
        raise InvalidSpec(f"Rule {rulestring!r} uses counts {sorted(unreachable)} above neighborhood maximum {max_count}")

    return RuleSpec(mask, rule_table(birth, survival, max_count))


def conway_spec() -> RuleSpec:
    """Create standard Conway rules (B3/S23 on the Moore neighborhood)."""
    return RuleSpec(moore(), rule_table(BIRTH_SET, SURVIVAL_SET, 8))


def count_neighbors(state: np.ndarray, neighborhood: np.ndarray, x: int, y: int) -> int:
    """Weighted neighbor count of cell (x, y) on a toroidal grid.

    Args:
        state: 2D boolean array indexed [x, y]
        neighborhood: Odd-sized weight mask indexed [rx + dx, ry + dy]
        x: Cell x-coordinate
        y: Cell y-coordinate

    Returns:
        Sum of the weights of every live cell in the neighborhood
    """
    width, height = state.shape
    mask_width, mask_height = neighborhood.shape
    rx, ry = (mask_width - 1) // 2, (mask_height - 1) // 2
    count = 0

    for dx in range(-rx, rx + 1):
        for dy in range(-ry, ry + 1):
            weight = neighborhood[dx + rx, dy + ry]
            if weight == 0:
                continue

            # Python's % is non-negative for a positive modulus
            nx = (x + dx) % width
            ny = (y + dy) % height

            if state[nx, ny]:
                count += int(weight)

    return count
