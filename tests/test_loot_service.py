from __future__ import annotations

from spire.core.rng import RNG
from spire.data.repositories import ItemTemplatesRepository, RaritiesRepository
from spire.domain.entities import STAT_ORDER
from spire.services.loot_service import LootService

from tests.helpers.scripted_rng import ScriptedRNG


def _service(rng: RNG) -> LootService:
    return LootService(ItemTemplatesRepository(), RaritiesRepository(), rng)


def test_scripted_kill_drops_everything() -> None:
    rolls = [
        0.5, 0.5,  # shards: hit, amount
        0.1,  # potion
        0.05,  # equipment
        0.0, 0.0,  # slot main_hand, first template
        0.95, 0.0,  # Rare, first prefix
        0.0, 0.0, 0.5, 0.5, 0.9,  # five stat points
    ]
    rng = ScriptedRNG(rolls)
    drop = _service(rng).generate_loot(5)

    assert drop.shards == 15
    assert drop.potions == 1
    item = drop.equipment
    assert item is not None
    assert item.name == "Superior Broadsword"
    assert item.rarity == "Rare"
    assert item.slot == "main_hand"
    assert item.item_level == 5
    assert item.stats == {"strength": 2, "crit_rate": 1, "block_chance": 1}
    assert rng.remaining == 0


def test_unlucky_kill_drops_nothing() -> None:
    rng = ScriptedRNG([0.9, 0.5, 0.5])
    drop = _service(rng).generate_loot(3)
    assert drop.shards == 0
    assert drop.potions == 0
    assert drop.equipment is None
    assert rng.remaining == 0


def test_common_budget_on_floor_one_spends_two_points() -> None:
    rng = ScriptedRNG([0.0, 0.0, 0.1, 0.0, 0.0, 0.0])
    item = _service(rng).roll_equipment(1)
    assert item.rarity == "Common"
    assert item.stats == {"strength": 2}


def test_generated_bonuses_are_positive_integers() -> None:
    service = _service(RNG(2024))
    for floor in range(1, 60):
        item = service.roll_equipment(floor)
        assert item.item_level == floor
        assert item.rarity in {"Common", "Uncommon", "Rare", "Epic"}
        assert list(item.stats) == [name for name in STAT_ORDER if name in item.stats]
        for value in item.stats.values():
            assert isinstance(value, int)
            assert value > 0


def test_shard_amount_grows_with_floor() -> None:
    low = _service(ScriptedRNG([0.0, 0.99, 0.9, 0.9])).generate_loot(1)
    high = _service(ScriptedRNG([0.0, 0.99, 0.9, 0.9])).generate_loot(25)
    assert low.shards == 16
    assert high.shards == 64
