"""Player class definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(slots=True)
class StarterItemDef:
    """Starting weapon handed out at class selection."""

    name: str
    slot: str
    icon: str
    stats: Dict[str, int]
    weapon_type: str | None = None
    two_handed: bool = False


@dataclass(slots=True)
class ClassDef:
    """Defines base stats and the starter weapon for a class."""

    id: str
    name: str
    description: str
    icon: str
    base_stats: Dict[str, int]
    allowed_weapon_types: Tuple[str, ...]
    starting_weapon: StarterItemDef
