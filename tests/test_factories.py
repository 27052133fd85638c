from __future__ import annotations

import copy

import pytest

from spire.core.rng import RNG
from spire.data.repositories import ClassesRepository
from spire.services.errors import FactoryError
from spire.services.factories import create_player_from_class_id, make_instance_id


def test_make_instance_id_uses_prefix() -> None:
    identifier = make_instance_id("enemy", RNG(1))
    assert identifier.startswith("enemy_")


def test_warrior_starts_with_class_stats_and_sword() -> None:
    player = create_player_from_class_id("warrior", "Hero", ClassesRepository())
    assert player.name == "Hero"
    assert player.level == 1
    assert player.potion_count == 1
    assert player.current_hp == player.max_hp == 100
    assert player.current_stats.strength == 10
    assert player.current_stats.defense == 10
    sword = player.equipment["main_hand"]
    assert sword.name == "Dusty Sword"
    assert sword.stats == {"block_chance": 5}


def test_blank_name_falls_back_to_class_name() -> None:
    player = create_player_from_class_id("mage", "   ", ClassesRepository())
    assert player.name == "Mage"
    assert player.equipment["main_hand"].two_handed


def test_unknown_class_raises() -> None:
    with pytest.raises(FactoryError):
        create_player_from_class_id("bard", None, ClassesRepository())


def test_generated_equipment_stats_are_read_only() -> None:
    player = create_player_from_class_id("warrior", "Hero", ClassesRepository())
    sword = player.equipment["main_hand"]

    with pytest.raises(TypeError):
        sword.stats["block_chance"] = 50  # type: ignore[index]

    assert copy.deepcopy(player).equipment["main_hand"] == sword
    assert player.current_stats.block_chance == 15
