"""Post-kill loot rolls: shards, potions and randomized equipment."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from spire.core.rng import RNG
from spire.data.repositories import ItemTemplatesRepository, RaritiesRepository
from spire.domain.defs import LootTierDef
from spire.domain.entities import Equipment
from spire.services.factories import build_equipment, distribute_budget

logger = logging.getLogger(__name__)

SHARD_DROP_CHANCE = 0.8
POTION_DROP_CHANCE = 0.15
EQUIPMENT_DROP_CHANCE = 0.1
SHARD_BASE_AMOUNT = 5


@dataclass(slots=True)
class LootDrop:
    """Everything a single kill produced. Potions are not yet capped."""

    shards: int = 0
    potions: int = 0
    equipment: Equipment | None = None


class LootService:
    """Rolls loot for a kill on a given floor."""

    def __init__(
        self,
        items_repo: ItemTemplatesRepository,
        rarities_repo: RaritiesRepository,
        rng: RNG,
    ) -> None:
        self._items_repo = items_repo
        self._rarities_repo = rarities_repo
        self._rng = rng

    def generate_loot(self, floor: int) -> LootDrop:
        drop = LootDrop()
        if self._rng.random() < SHARD_DROP_CHANCE:
            drop.shards = math.floor(self._rng.random() * 10 * (1 + floor / 5)) + SHARD_BASE_AMOUNT
        if self._rng.random() < POTION_DROP_CHANCE:
            drop.potions = 1
        if self._rng.random() < EQUIPMENT_DROP_CHANCE:
            drop.equipment = self.roll_equipment(floor)
        logger.debug(
            "Loot on floor %d: shards=%d potions=%d equipment=%s",
            floor,
            drop.shards,
            drop.potions,
            drop.equipment.name if drop.equipment else None,
        )
        return drop

    def roll_equipment(self, floor: int) -> Equipment:
        """Roll one item for ``floor``: slot, template, rarity tier, prefix, then stat points."""
        slot = self._rng.choice(self._items_repo.populated_slots())
        template = self._rng.choice(self._items_repo.for_slot(slot))
        tier = self._pick_tier(self._rng.random())
        prefix = self._rng.choice(tier.prefixes)
        budget = tier.budget_base + floor // tier.budget_divisor
        stats = distribute_budget(template, budget, self._rarities_repo, self._rng)
        return build_equipment(template, prefix=prefix, rarity=tier.rarity, item_level=floor, stats=stats)

    def _pick_tier(self, roll: float) -> LootTierDef:
        tiers = self._rarities_repo.loot_tiers()
        for tier in tiers:
            if roll < tier.roll_below:
                return tier
        return tiers[-1]
