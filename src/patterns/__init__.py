"""Test patterns for seeding simulators."""

from .library import glider, blinker, block, rotate_pattern, live_cells, translate

__all__ = ['glider', 'blinker', 'block', 'rotate_pattern', 'live_cells', 'translate']
