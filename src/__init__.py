"""Generic 2D cellular automaton engine."""

__version__ = "0.1.0"
