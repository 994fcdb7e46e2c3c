"""Instant message channels, effects, view state and HTML node rendering."""

__version__ = "0.1.0"