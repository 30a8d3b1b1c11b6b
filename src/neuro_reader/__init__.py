"""Adaptive document reader: presentation settings driven by a reader's visual profile."""

__version__ = "0.1.0"
