"""Stat composition: base stats + equipment + dexterity bonus + account buffs."""
from __future__ import annotations

from typing import Dict

from spire.core.types import GEAR_SLOTS
from spire.domain.entities import EVASION_CAP, Player

# Account level thresholds that grant percentage buffs.
# Kept in ascending order; every threshold the player meets applies.
ACCOUNT_BUFF_THRESHOLDS: tuple[tuple[int, Dict[str, int]], ...] = (
    (5, {"strength": 5, "dexterity": 5, "intelligence": 5}),
    (8, {"max_hp": 5, "defense": 5}),
)

DEXTERITY_PER_EVASION = 8


def calculate_account_buffs(level: int) -> Dict[str, int]:
    """Return the percentage buffs unlocked at ``level``."""
    buffs: Dict[str, int] = {}
    for threshold, stat_buffs in ACCOUNT_BUFF_THRESHOLDS:
        if level >= threshold:
            buffs.update(stat_buffs)
    return buffs


def recompute(player: Player) -> Player:
    """Rebuild ``player.current_stats`` and re-clamp current HP.

    This is the only place current stats are written. It must run after any
    change to base stats, equipment or level, and calling it twice in a row
    yields the same result.
    """
    stats = player.base_stats.copy()

    for slot in GEAR_SLOTS:
        item = player.equipment.get(slot)
        if item is not None:
            stats.add_bonuses(item.stats)

    stats.evasion += stats.dexterity // DEXTERITY_PER_EVASION

    buffs = calculate_account_buffs(player.level)
    player.account_buffs = dict(buffs)
    for stat_name, percentage in buffs.items():
        stats.add(stat_name, (stats.get(stat_name) * percentage) // 100)

    stats.evasion = max(0, min(stats.evasion, EVASION_CAP))
    player.current_stats = stats

    player.current_hp = min(player.current_hp, stats.max_hp)
    if stats.max_hp > 0 and player.current_hp <= 0:
        player.current_hp = 1
    return player
