"""Account and run leveling rules."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

from spire.domain.entities import Player
from spire.domain.stat_model import recompute

ACCOUNT_XP_GROWTH = 1.5
ACCOUNT_LEVEL_BONUS: Dict[str, int] = {
    "max_hp": 10,
    "strength": 1,
    "dexterity": 1,
    "intelligence": 1,
    "defense": 1,
}

RUN_STARTING_XP_TO_NEXT = 50
RUN_XP_GROWTH = 1.8
RUN_LEVEL_BONUS: Dict[str, int] = {
    "max_hp": 5,
    "strength": 1,
    "dexterity": 1,
    "intelligence": 1,
}

SHOP_REFRESH_INTERVAL = 5


@dataclass(slots=True)
class LevelUpResult:
    """Levels gained and the max-HP delta caused by them."""

    levels_gained: int = 0
    max_hp_delta: int = 0


def apply_account_level_ups(player: Player) -> LevelUpResult:
    """Consume banked xp into account levels, then recompute stats."""
    old_max_hp = player.current_stats.max_hp
    gained = 0
    while player.xp >= player.xp_to_next_level:
        player.xp -= player.xp_to_next_level
        player.level += 1
        player.xp_to_next_level = math.floor(player.xp_to_next_level * ACCOUNT_XP_GROWTH)
        player.base_stats.add_bonuses(ACCOUNT_LEVEL_BONUS)
        gained += 1
    recompute(player)
    return LevelUpResult(levels_gained=gained, max_hp_delta=player.current_stats.max_hp - old_max_hp)


def apply_run_level_bonus(player: Player) -> int:
    """Grant the permanent per-run-level base stat bonus and return the new max HP."""
    player.base_stats.add_bonuses(RUN_LEVEL_BONUS)
    recompute(player)
    return player.current_stats.max_hp


def next_run_threshold(current: int) -> int:
    return math.floor(current * RUN_XP_GROWTH)


def shop_milestone_due(player: Player) -> int | None:
    """Return the 5-level milestone the shop should refresh for, if one is pending."""
    milestone = (player.level // SHOP_REFRESH_INTERVAL) * SHOP_REFRESH_INTERVAL
    if milestone >= SHOP_REFRESH_INTERVAL and milestone > player.last_shop_refresh_level:
        return milestone
    return None
