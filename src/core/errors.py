"""Exceptions raised by the cellular automaton engine."""


class InvalidSpec(ValueError):
    """Rule specification violates its structural invariants.

    Raised when a simulator is constructed with an even-sized neighborhood,
    a rule table without exactly two rows, or rule rows too short to cover
    every reachable neighbor count.
    """


class OutOfRange(IndexError):
    """Cell coordinates fall outside the current grid."""
