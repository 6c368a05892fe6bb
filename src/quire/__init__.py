"""Quire - static category page generation from markdown posts."""

__version__ = "0.1.0"
