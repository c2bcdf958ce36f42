"""Tabata interval-workout timer."""

__version__ = "0.1.0"
