"""Player profile model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .equipment import Equipment
from .stats import Stats

POTION_CAP = 5
STARTING_XP_TO_NEXT_LEVEL = 100


@dataclass(slots=True)
class Player:
    """The persistent profile stored in a save slot.

    ``current_stats`` is derived from ``base_stats``, ``equipment`` and ``level``
    and is only ever written by :func:`spire.domain.stat_model.recompute`.
    """

    name: str
    class_id: str
    base_stats: Stats
    current_stats: Stats = field(default_factory=Stats)
    level: int = 1
    xp: int = 0
    xp_to_next_level: int = STARTING_XP_TO_NEXT_LEVEL
    account_buffs: Dict[str, int] = field(default_factory=dict)
    current_hp: int = 0
    eternal_shards: int = 0
    potion_count: int = 1
    equipment: Dict[str, Equipment] = field(default_factory=dict)
    shop_inventory: List[Equipment] = field(default_factory=list)
    last_shop_refresh_level: int = 1
    shop_refresh_level: int = 1
    shop_refresh_count: int = 0
    achievement_progress: Dict[str, int] = field(default_factory=dict)
    claimed_achievements: List[str] = field(default_factory=list)
    max_floor_reached: int = 0
    total_enemies_killed: int = 0
    total_deaths: int = 0
    total_accumulated_xp: int = 0
    total_lifetime_shards: int = 0
    total_flees: int = 0

    @property
    def max_hp(self) -> int:
        return self.current_stats.max_hp

    def add_potions(self, amount: int) -> int:
        """Add potions up to the cap and return how many were actually delivered."""
        delivered = max(0, min(amount, POTION_CAP - self.potion_count))
        self.potion_count += delivered
        return delivered

    def add_shards(self, amount: int) -> None:
        self.eternal_shards += amount
        self.total_lifetime_shards += amount
