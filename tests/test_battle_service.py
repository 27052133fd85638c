from __future__ import annotations

from typing import List

from spire.domain.entities import EnemyInstance, EnemyStats, Player, Stats
from spire.domain.stat_model import recompute
from spire.domain.state import RunState
from spire.services.battle_service import (
    AttackEvadedEvent,
    AttackResolvedEvent,
    BattleService,
    EnemyDefeatedEvent,
    EquipmentDroppedEvent,
    LifestealEvent,
    PlayerDefeatedEvent,
    PlayerHitEvent,
    PotionFoundEvent,
    PotionUsedEvent,
    RunLevelUpEvent,
    RunXpGainedEvent,
)
from spire.services.loot_service import LootDrop

from tests.helpers.builders import StubLootService, make_achievement_service, make_item, make_player, make_run
from tests.helpers.scripted_rng import ScriptedRNG


def _service(rolls: List[float], drops: List[LootDrop] | None = None) -> tuple[BattleService, ScriptedRNG]:
    rng = ScriptedRNG(rolls)
    return BattleService(StubLootService(drops), make_achievement_service(), rng), rng


def test_warrior_kills_slime_in_three_hits() -> None:
    player = make_player("warrior")
    run = make_run(player, "slime")
    service, rng = _service([0.99] * 5)

    first = service.attack(player, run)
    hit = first[0]
    assert isinstance(hit, AttackResolvedEvent)
    assert hit.damage == 8
    assert run.current_enemy.stats.hp == 12
    assert isinstance(first[1], PlayerHitEvent)
    assert first[1].damage == 1

    second = service.attack(player, run)
    assert second[0].damage == 8
    assert run.current_enemy.stats.hp == 4

    third = service.attack(player, run)
    assert third[0].damage == 4
    assert run.current_enemy.stats.hp == 0
    assert any(isinstance(event, EnemyDefeatedEvent) for event in third)
    assert not any(isinstance(event, PlayerHitEvent) for event in third)
    assert run.enemies_killed == 1
    assert player.total_enemies_killed == 1
    assert player.achievement_progress["quest_slay_25_slimes"] == 1
    assert run.awaiting_advance
    assert rng.remaining == 0


def test_damage_never_drops_below_one() -> None:
    player = Player(name="Weak", class_id="warrior", base_stats=Stats(strength=3, max_hp=50))
    recompute(player)
    player.current_hp = player.max_hp
    enemy = EnemyInstance(
        id="enemy_wall",
        enemy_id="slime",
        name="Wall",
        icon="w",
        stats=EnemyStats(max_hp=100, hp=100, attack=2, defense=10, evasion=0),
        xp_reward=1,
    )
    run = RunState(current_enemy=enemy, player_hp=50)
    service, _ = _service([])

    events = service.attack(player, run)

    assert events[0].damage == 1
    assert run.current_enemy.stats.hp == 99
    assert events[1].damage == 2
    assert run.player_hp == 48


def test_crit_doubles_damage() -> None:
    player = make_player("rogue")
    run = make_run(player, "slime")
    service, rng = _service([0.1, 0.99])

    events = service.attack(player, run)

    assert events[0].is_crit
    assert events[0].damage == 16
    assert run.player_hp == player.max_hp - 1
    assert rng.remaining == 0


def test_enemy_evasion_negates_attack() -> None:
    player = make_player("warrior")
    run = make_run(player, "bat")
    service, _ = _service([0.1, 0.99])

    events = service.attack(player, run)

    assert isinstance(events[0], AttackEvadedEvent)
    assert run.current_enemy.stats.hp == 15


def test_block_halves_enemy_damage() -> None:
    player = make_player("warrior")
    run = make_run(player, "goblin_champion", floor=10)
    service, _ = _service([0.99, 0.99, 0.01])

    events = service.attack(player, run)

    hit = events[-1]
    assert isinstance(hit, PlayerHitEvent)
    assert hit.blocked
    assert hit.damage == 4
    assert run.player_hp == 96


def test_lifesteal_heals_after_a_hit() -> None:
    player = make_player("mage")
    run = make_run(player, "slime")
    run.player_hp = 50
    service, _ = _service([0.99, 0.99])

    events = service.attack(player, run)

    assert isinstance(events[1], LifestealEvent)
    assert events[1].amount == 1
    assert run.player_hp == 49


def test_run_level_up_restores_hp_and_raises_base_stats() -> None:
    player = make_player("warrior")
    run = make_run(player, "slime")
    run.run_xp = 45
    run.player_hp = 40
    run.current_enemy.stats.hp = 1
    service, _ = _service([0.99])

    events = service.attack(player, run)

    assert any(isinstance(event, RunXpGainedEvent) and event.amount == 10 for event in events)
    level_ups = [event for event in events if isinstance(event, RunLevelUpEvent)]
    assert len(level_ups) == 1
    assert run.run_level == 2
    assert run.run_xp == 5
    assert run.run_xp_to_next_level == 90
    assert player.base_stats.max_hp == 105
    assert (player.base_stats.strength, player.base_stats.dexterity, player.base_stats.intelligence) == (11, 6, 4)
    assert player.max_hp == 105
    assert run.player_hp == 105
    assert run.xp_earned == 10


def test_large_xp_reward_grants_several_run_levels() -> None:
    player = make_player("warrior")
    run = make_run(player, "slime")
    run.current_enemy.xp_reward = 200
    run.current_enemy.stats.hp = 1
    service, _ = _service([0.99])

    service.attack(player, run)

    assert run.run_level == 3
    assert run.run_xp == 60
    assert run.run_xp_to_next_level == 162
    assert player.base_stats.max_hp == 110


def test_equipment_drop_pauses_combat() -> None:
    player = make_player("warrior")
    run = make_run(player, "slime")
    run.current_enemy.stats.hp = 1
    item = make_item("helmet", {"defense": 2})
    service, _ = _service([0.99], drops=[LootDrop(shards=12, potions=1, equipment=item)])

    events = service.attack(player, run)

    assert any(isinstance(event, EquipmentDroppedEvent) for event in events)
    assert any(isinstance(event, PotionFoundEvent) for event in events)
    assert run.pending_loot is item
    assert not run.awaiting_advance
    assert run.shards_earned == 12
    assert player.eternal_shards == 12
    assert player.total_lifetime_shards == 12
    assert player.potion_count == 2
    assert service.attack(player, run) == []


def test_looted_potions_are_capped() -> None:
    player = make_player("warrior")
    player.potion_count = 4
    run = make_run(player, "slime")
    run.current_enemy.stats.hp = 1
    service, _ = _service([0.99], drops=[LootDrop(potions=3)])

    service.attack(player, run)

    assert player.potion_count == 5


def test_defeat_blocks_further_combat() -> None:
    player = make_player("warrior")
    run = make_run(player, "goblin_champion", floor=10)
    run.player_hp = 1
    service, _ = _service([0.99, 0.99, 0.99])

    events = service.attack(player, run)

    assert isinstance(events[-1], PlayerDefeatedEvent)
    assert run.defeated
    assert run.player_hp == 0
    assert player.total_deaths == 1
    assert service.attack(player, run) == []
    assert service.use_potion(player, run) == []


def test_use_potion_heals_then_enemy_acts() -> None:
    player = make_player("warrior")
    run = make_run(player, "slime")
    run.player_hp = 30
    service, _ = _service([0.99])

    events = service.use_potion(player, run)

    assert isinstance(events[0], PotionUsedEvent)
    assert events[0].healed == 50
    assert player.potion_count == 0
    assert run.player_hp == 79


def test_use_potion_needs_potions_and_missing_hp() -> None:
    player = make_player("warrior")
    run = make_run(player, "slime")
    service, _ = _service([])

    assert service.use_potion(player, run) == []
    run.player_hp = 10
    player.potion_count = 0
    assert service.use_potion(player, run) == []
    assert run.player_hp == 10


def test_potion_after_kill_heals_without_enemy_turn() -> None:
    player = make_player("warrior")
    run = make_run(player, "slime")
    run.player_hp = 40
    run.current_enemy.stats.hp = 0
    service, rng = _service([])

    assert run.awaiting_advance
    assert not service.can_act(run)
    events = service.use_potion(player, run)

    assert [type(event) for event in events] == [PotionUsedEvent]
    assert run.player_hp == 90
    assert rng.remaining == 0


def test_pending_loot_blocks_potions() -> None:
    player = make_player("warrior")
    run = make_run(player, "slime")
    run.player_hp = 40
    run.current_enemy.stats.hp = 0
    run.pending_loot = make_item("helmet", {"defense": 1})
    service, _ = _service([])

    assert not service.can_recover(run)
    assert service.use_potion(player, run) == []
    assert player.potion_count == 1
