"""Item template and rarity tier definitions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from spire.core.types import GearSlot, Rarity


@dataclass(slots=True)
class ItemTemplateDef:
    """Base item that generated equipment is rolled from."""

    id: str
    name: str
    slot: GearSlot
    icon: str
    stat_pool: Tuple[str, ...]
    weapon_type: str | None = None
    two_handed: bool = False


@dataclass(slots=True)
class LootTierDef:
    """Rarity tier for drops: budget is ``budget_base + floor // budget_divisor``."""

    rarity: Rarity
    roll_below: float
    prefixes: Tuple[str, ...]
    budget_base: int
    budget_divisor: int


@dataclass(slots=True)
class ShopTierDef:
    """Rarity tier for shop stock: budget is scaled by U(min, max)."""

    rarity: Rarity
    roll_below: float
    prefixes: Tuple[str, ...]
    budget_min_mult: float
    budget_max_mult: float
