from __future__ import annotations

import pytest

from spire.core.rng import RNG
from spire.data.repositories import EnemiesRepository
from spire.domain.enemy_scaling import is_boss_floor, scale_enemy_stats, scale_factor
from spire.services.errors import FactoryError
from spire.services.factories import generate_enemy


def test_floor_one_uses_template_stats() -> None:
    slime = EnemiesRepository().get("slime")
    stats, xp = scale_enemy_stats(slime, floor=1)
    assert (stats.max_hp, stats.hp, stats.attack, stats.defense, stats.evasion) == (20, 20, 5, 2, 0)
    assert xp == 10


def test_normal_floor_scaling_is_floored() -> None:
    goblin = EnemiesRepository().get("goblin")
    stats, xp = scale_enemy_stats(goblin, floor=6)
    # factor 1.5
    assert stats.max_hp == 45
    assert stats.attack == 10
    assert stats.defense == 3
    assert stats.evasion == 7
    assert xp == 22


def test_boss_scaling_grows_per_encounter() -> None:
    boss = EnemiesRepository().get("goblin_champion")
    first, _ = scale_enemy_stats(boss, floor=10)
    third, xp = scale_enemy_stats(boss, floor=30)
    assert first.max_hp == 150
    assert third.max_hp == 225
    assert third.attack == 27
    assert xp == 150


def test_scaling_never_mutates_template() -> None:
    repo = EnemiesRepository()
    scale_enemy_stats(repo.get("bat"), floor=40)
    assert repo.get("bat").max_hp == 15


def test_scale_factor_strictly_increases_on_normal_floors() -> None:
    normal_floors = [floor for floor in range(1, 60) if not is_boss_floor(floor)]
    factors = [scale_factor(floor) for floor in normal_floors]
    assert factors == sorted(factors)
    assert len(set(factors)) == len(factors)


def test_boss_cadence() -> None:
    repo = EnemiesRepository()
    rng = RNG(99)
    for floor in (10, 20, 30):
        enemy = generate_enemy(floor, repo, rng)
        assert enemy.is_boss
        assert enemy.enemy_id == "goblin_champion"
    for floor in range(1, 40):
        if floor % 10 == 0:
            continue
        enemy = generate_enemy(floor, repo, rng)
        assert not enemy.is_boss
        assert enemy.enemy_id in {"slime", "bat", "goblin"}


def test_generated_enemies_have_fresh_stats() -> None:
    repo = EnemiesRepository()
    rng = RNG(5)
    first = generate_enemy(10, repo, rng)
    second = generate_enemy(10, repo, rng)
    first.stats.hp = 0
    assert second.stats.hp == second.stats.max_hp


def test_invalid_floor_rejected() -> None:
    with pytest.raises(FactoryError):
        generate_enemy(0, EnemiesRepository(), RNG(1))
