"""Shop stock generation and shard transactions."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List

from spire.core.rng import RNG
from spire.data.repositories import ItemTemplatesRepository, RaritiesRepository
from spire.domain.defs import ShopTierDef
from spire.domain.entities import POTION_CAP, Equipment, Player
from spire.domain.loadout import can_equip, equip
from spire.domain.progression import shop_milestone_due
from spire.domain.stat_model import recompute
from spire.services.factories import build_equipment, distribute_budget, round_half_up

logger = logging.getLogger(__name__)

MIN_STOCK = 3
MAX_STOCK = 5
POTION_COST = 50
REFRESH_COST = 1000
MAX_REFRESHES_PER_LEVEL = 3


@dataclass(slots=True)
class ShopEvent:
    """Base class for shop-related events."""


@dataclass(slots=True)
class PotionPurchasedEvent(ShopEvent):
    cost: int
    potion_count: int
    total_shards: int


@dataclass(slots=True)
class ItemPurchasedEvent(ShopEvent):
    item: Equipment
    cost: int
    total_shards: int


@dataclass(slots=True)
class ShopRefreshedEvent(ShopEvent):
    cost: int
    refreshes_used: int
    total_shards: int


@dataclass(slots=True)
class ShopActionFailedEvent(ShopEvent):
    reason: str
    message: str


class ShopService:
    """Generates level-scaled stock and applies purchases to the player."""

    def __init__(
        self,
        *,
        items_repo: ItemTemplatesRepository,
        rarities_repo: RaritiesRepository,
        rng: RNG,
    ) -> None:
        self._items_repo = items_repo
        self._rarities_repo = rarities_repo
        self._rng = rng

    # -----------------------
    # Stock
    # -----------------------

    def generate_inventory(self, player: Player) -> List[Equipment]:
        """Roll 3-5 items for the player's account level, each from a distinct slot."""
        slots = self._items_repo.populated_slots()
        count = min(self._rng.randint(MIN_STOCK, MAX_STOCK), len(slots))
        level = player.level
        base_budget = 1 + level // 3
        inventory: List[Equipment] = []
        for slot in self._rng.sample(slots, count):
            template = self._rng.choice(self._items_repo.for_slot(slot))
            tier = self._pick_tier(self._rng.random())
            multiplier = self._rng.uniform(tier.budget_min_mult, tier.budget_max_mult)
            budget = max(1, math.floor(base_budget * multiplier))
            prefix = self._rng.choice(tier.prefixes)
            stats = distribute_budget(template, budget, self._rarities_repo, self._rng)
            item = build_equipment(template, prefix=prefix, rarity=tier.rarity, item_level=level, stats=stats)
            inventory.append(item.with_cost(self.item_cost(item, level)))
        return inventory

    def item_cost(self, item: Equipment, level: int) -> int:
        """Price by weight-normalized stat investment, rounded to the nearest 10."""
        power = 0.0
        for stat_name, value in item.stats.items():
            power += (value / self._rarities_repo.stat_weight(stat_name)) * (5 + level)
        return round_half_up(power * 5 / 10) * 10

    def restock(self, player: Player) -> None:
        player.shop_inventory = self.generate_inventory(player)

    def apply_milestone_refresh(self, player: Player) -> int | None:
        """Restock once for each newly reached 5-level milestone and return it."""
        milestone = shop_milestone_due(player)
        if milestone is None:
            return None
        self.restock(player)
        player.last_shop_refresh_level = milestone
        logger.debug("Shop restocked for account level milestone %d", milestone)
        return milestone

    # -----------------------
    # Transactions
    # -----------------------

    def buy_potion(self, player: Player) -> List[ShopEvent]:
        if player.potion_count >= POTION_CAP:
            return [ShopActionFailedEvent(reason="potion_cap", message="You cannot carry more potions.")]
        if player.eternal_shards < POTION_COST:
            return [ShopActionFailedEvent(reason="insufficient_shards", message="Not enough Eternal Shards.")]
        player.eternal_shards -= POTION_COST
        player.potion_count += 1
        return [
            PotionPurchasedEvent(
                cost=POTION_COST,
                potion_count=player.potion_count,
                total_shards=player.eternal_shards,
            )
        ]

    def buy_item(self, player: Player, index: int) -> List[ShopEvent]:
        """Buy and immediately equip the stock item at ``index``, keeping the HP ratio."""
        if not 0 <= index < len(player.shop_inventory):
            return [ShopActionFailedEvent(reason="not_in_stock", message="Item is not available.")]
        item = player.shop_inventory[index]
        cost = item.cost or 0
        if item.cost is None or player.eternal_shards < cost:
            return [ShopActionFailedEvent(reason="insufficient_shards", message="Not enough Eternal Shards.")]
        if not can_equip(player, item):
            return [
                ShopActionFailedEvent(
                    reason="slot_blocked",
                    message="Cannot equip Off-Hand: requires a one-handed weapon.",
                )
            ]

        player.eternal_shards -= cost
        del player.shop_inventory[index]
        hp_before = player.current_hp
        max_hp_before = player.max_hp
        equip(player, item)
        recompute(player)
        max_hp_after = player.max_hp
        if max_hp_after != max_hp_before and max_hp_before > 0:
            player.current_hp = round_half_up(max_hp_after * hp_before / max_hp_before)
        player.current_hp = min(player.current_hp, max_hp_after)
        if player.current_hp <= 0:
            player.current_hp = 1
        return [ItemPurchasedEvent(item=item, cost=cost, total_shards=player.eternal_shards)]

    def refreshes_used(self, player: Player) -> int:
        """Paid refreshes spent at the current account level."""
        if player.shop_refresh_level != player.level:
            return 0
        return player.shop_refresh_count

    def refresh_shop(self, player: Player) -> List[ShopEvent]:
        used = self.refreshes_used(player)
        if used >= MAX_REFRESHES_PER_LEVEL:
            return [
                ShopActionFailedEvent(reason="refresh_limit", message="No refreshes left at this level.")
            ]
        if player.eternal_shards < REFRESH_COST:
            return [ShopActionFailedEvent(reason="insufficient_shards", message="Not enough Eternal Shards.")]
        player.eternal_shards -= REFRESH_COST
        player.shop_refresh_level = player.level
        player.shop_refresh_count = used + 1
        self.restock(player)
        return [
            ShopRefreshedEvent(
                cost=REFRESH_COST,
                refreshes_used=player.shop_refresh_count,
                total_shards=player.eternal_shards,
            )
        ]

    def _pick_tier(self, roll: float) -> ShopTierDef:
        tiers = self._rarities_repo.shop_tiers()
        for tier in tiers:
            if roll < tier.roll_below:
                return tier
        return tiers[-1]
