"""Eternal Spire: incremental dungeon-crawler simulation engine."""

__version__ = "0.1.0"
