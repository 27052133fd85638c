"""Enemy runtime models."""
from __future__ import annotations

from dataclasses import dataclass

from .stats import EnemyStats


@dataclass(slots=True)
class EnemyInstance:
    """Represents a spawned enemy ready for battle."""

    id: str
    enemy_id: str
    name: str
    icon: str
    stats: EnemyStats
    xp_reward: int
    is_boss: bool = False

    @property
    def is_alive(self) -> bool:
        return self.stats.is_alive
