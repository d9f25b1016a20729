"""Pairs - memory-matching game backend."""

__version__ = "0.1.0"
