"""Helpers shared across the build pipeline."""
