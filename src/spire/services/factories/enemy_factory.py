"""Factory for spawning floor-scaled enemies."""
from __future__ import annotations

import logging

from spire.core.rng import RNG
from spire.data.repositories import EnemiesRepository
from spire.domain.enemy_scaling import is_boss_floor, scale_enemy_stats
from spire.domain.entities import EnemyInstance
from spire.services.errors import FactoryError

from .id_factory import make_instance_id

logger = logging.getLogger(__name__)


def generate_enemy(floor: int, enemies_repo: EnemiesRepository, rng: RNG) -> EnemyInstance:
    """Spawn the enemy for ``floor``: the mini-boss on every 10th floor, else a random tier-1 template."""
    if floor < 1:
        raise FactoryError(f"Floor must be a positive integer, got {floor}.")

    if is_boss_floor(floor):
        template = enemies_repo.boss_template()
    else:
        template = rng.choice(enemies_repo.regular_templates())

    stats, xp_reward = scale_enemy_stats(template, floor=floor)
    enemy = EnemyInstance(
        id=make_instance_id("enemy", rng),
        enemy_id=template.id,
        name=template.name,
        icon=template.icon,
        stats=stats,
        xp_reward=xp_reward,
        is_boss=template.is_boss,
    )
    logger.debug("Floor %d spawned %s (hp=%d, atk=%d)", floor, enemy.enemy_id, stats.max_hp, stats.attack)
    return enemy
