"""Utilities for creating instance identifiers from the injected RNG."""
from __future__ import annotations

from spire.core.rng import RNG


def make_instance_id(prefix: str, rng: RNG) -> str:
    """Generate an identifier using the provided RNG."""
    suffix = rng.randint(100000, 999999)
    return f"{prefix}_{suffix}"
