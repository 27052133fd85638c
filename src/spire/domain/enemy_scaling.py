"""Floor-based enemy stat scaling helpers."""
from __future__ import annotations

import math

from spire.domain.defs import EnemyDef
from spire.domain.entities import EnemyStats

# Every BOSS_FLOOR_INTERVAL-th floor is a mini-boss encounter.
# Regular floors grow 10% per floor; bosses grow 25% per boss encounter
# because their base stats already outclass tier-1 templates.
BOSS_FLOOR_INTERVAL = 10
NORMAL_GROWTH_PER_FLOOR = 0.1
BOSS_GROWTH_PER_ENCOUNTER = 0.25


def is_boss_floor(floor: int) -> bool:
    return floor % BOSS_FLOOR_INTERVAL == 0


def scale_factor(floor: int) -> float:
    if is_boss_floor(floor):
        return 1 + (floor / BOSS_FLOOR_INTERVAL - 1) * BOSS_GROWTH_PER_ENCOUNTER
    return 1 + (floor - 1) * NORMAL_GROWTH_PER_FLOOR


def scale_enemy_stats(template: EnemyDef, *, floor: int) -> tuple[EnemyStats, int]:
    """Return fresh scaled stats and the scaled xp reward for ``template`` on ``floor``."""
    factor = scale_factor(floor)
    max_hp = math.floor(template.max_hp * factor)
    stats = EnemyStats(
        max_hp=max_hp,
        hp=max_hp,
        attack=math.floor(template.attack * factor),
        defense=math.floor(template.defense * factor),
        evasion=math.floor(template.evasion * factor),
    )
    return stats, math.floor(template.xp_reward * factor)
