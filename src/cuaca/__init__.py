"""Rotating current-weather board for the Special Region of Yogyakarta."""

__version__ = "0.1.0"
