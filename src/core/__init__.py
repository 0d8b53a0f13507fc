"""
Cellular Automaton Core

Rule specifications, presets and the double-buffered simulator.
"""

from .errors import InvalidSpec, OutOfRange
from .rule_spec import RuleSpec, validate_spec
from .rules import (
    BIRTH_SET, SURVIVAL_SET, moore, von_neumann, rule_table,
    parse_rulestring, spec_from_rulestring, conway_spec, count_neighbors
)
from .simulator import Simulator

__all__ = [
    'InvalidSpec',
    'OutOfRange',
    'RuleSpec',
    'validate_spec',
    'BIRTH_SET',
    'SURVIVAL_SET',
    'moore',
    'von_neumann',
    'rule_table',
    'parse_rulestring',
    'spec_from_rulestring',
    'conway_spec',
    'count_neighbors',
    'Simulator',
]
