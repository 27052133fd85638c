"""Enemy definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EnemyDef:
    """Unscaled enemy template."""

    id: str
    name: str
    icon: str
    max_hp: int
    attack: int
    defense: int
    evasion: int
    xp_reward: int
    is_boss: bool = False
