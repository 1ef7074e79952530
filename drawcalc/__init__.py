"""Deterministic prize settlement for savings-lottery draws."""

__version__ = "0.1.0"
