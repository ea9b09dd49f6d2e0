"""Falling-character rain for a pygame window, with a live control panel."""

__version__ = "1.0.0"
