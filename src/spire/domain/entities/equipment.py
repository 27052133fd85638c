"""Equipment runtime models."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping

from spire.core.types import GearSlot, Rarity

from .stats import STAT_ORDER


@dataclass(frozen=True)
class Equipment:
    """A generated, slot-bound item. Bonuses only hold non-zero integer stats.

    ``stats`` is a read-only view; items never change once generated.
    """

    name: str
    slot: GearSlot
    icon: str
    rarity: Rarity
    item_level: int
    stats: Mapping[str, int] = field(default_factory=dict)
    cost: int | None = None
    weapon_type: str | None = None
    two_handed: bool = False

    def __post_init__(self) -> None:
        unknown = set(self.stats) - set(STAT_ORDER)
        if unknown:
            raise ValueError(f"Equipment '{self.name}' has unknown stats: {sorted(unknown)}")
        ordered = {name: int(self.stats[name]) for name in STAT_ORDER if self.stats.get(name)}
        object.__setattr__(self, "stats", MappingProxyType(ordered))

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Equipment":
        return self

    def with_cost(self, cost: int) -> "Equipment":
        return replace(self, cost=cost)
