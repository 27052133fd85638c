"""Stat models for runtime entities."""
from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Dict, Mapping

# Shared iteration order for composition, rounding and serialization.
STAT_ORDER: tuple[str, ...] = (
    "strength",
    "dexterity",
    "intelligence",
    "max_hp",
    "defense",
    "crit_rate",
    "evasion",
    "block_chance",
    "lifesteal",
    "attack_speed",
    "cast_speed",
    "max_energy",
    "max_mana",
)

EVASION_CAP = 35


@dataclass(slots=True)
class Stats:
    """Full stat vector for a player. Missing sources contribute 0."""

    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0
    max_hp: int = 0
    defense: int = 0
    crit_rate: int = 0
    evasion: int = 0
    block_chance: int = 0
    lifesteal: int = 0
    attack_speed: int = 0
    cast_speed: int = 0
    max_energy: int = 0
    max_mana: int = 0

    @classmethod
    def from_mapping(cls, values: Mapping[str, int]) -> "Stats":
        unknown = set(values) - set(STAT_ORDER)
        if unknown:
            raise KeyError(f"Unknown stats: {sorted(unknown)}")
        return cls(**{name: int(values[name]) for name in STAT_ORDER if name in values})

    def copy(self) -> "Stats":
        return replace(self)

    def get(self, name: str) -> int:
        return getattr(self, name)

    def add(self, name: str, amount: int) -> None:
        setattr(self, name, getattr(self, name) + amount)

    def add_bonuses(self, bonuses: Mapping[str, int]) -> None:
        """Add a sparse bonus map, iterating in STAT_ORDER."""
        for name in STAT_ORDER:
            amount = bonuses.get(name, 0)
            if amount:
                self.add(name, amount)

    @property
    def offense(self) -> int:
        """Offensive stat used for basic attacks."""
        return max(self.strength, self.dexterity, self.intelligence)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(slots=True)
class EnemyStats:
    """Stat block carried by a spawned enemy."""

    max_hp: int
    hp: int
    attack: int
    defense: int
    evasion: int

    @property
    def is_alive(self) -> bool:
        return self.hp > 0
