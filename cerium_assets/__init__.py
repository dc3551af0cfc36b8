"""Asset pipeline helpers for the cerium theme."""

__version__ = "0.1.0"
