"""Puzzle Search - generic A* search with classic puzzle definitions."""

__version__ = "0.1.0"
