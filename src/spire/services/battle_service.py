"""Battle service resolving one Spire combat exchange at a time."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List

from spire.core.rng import RNG
from spire.domain.entities import Equipment, Player
from spire.domain.progression import apply_run_level_bonus, next_run_threshold
from spire.domain.state import RunState
from spire.services.achievement_service import AchievementService
from spire.services.loot_service import LootService

logger = logging.getLogger(__name__)

POTION_HEAL_AMOUNT = 50
CRIT_MULTIPLIER = 2


@dataclass(slots=True)
class BattleEvent:
    """Base battle event."""


@dataclass(slots=True)
class AttackEvadedEvent(BattleEvent):
    enemy_name: str


@dataclass(slots=True)
class AttackResolvedEvent(BattleEvent):
    enemy_name: str
    damage: int
    is_crit: bool
    enemy_hp: int


@dataclass(slots=True)
class LifestealEvent(BattleEvent):
    amount: int
    player_hp: int


@dataclass(slots=True)
class EnemyDefeatedEvent(BattleEvent):
    enemy_id: str
    enemy_name: str


@dataclass(slots=True)
class EquipmentDroppedEvent(BattleEvent):
    item: Equipment


@dataclass(slots=True)
class RunXpGainedEvent(BattleEvent):
    amount: int


@dataclass(slots=True)
class RunLevelUpEvent(BattleEvent):
    run_level: int
    max_hp: int


@dataclass(slots=True)
class ShardsFoundEvent(BattleEvent):
    amount: int
    total_shards: int


@dataclass(slots=True)
class PotionFoundEvent(BattleEvent):
    potion_count: int


@dataclass(slots=True)
class PlayerEvadedEvent(BattleEvent):
    enemy_name: str


@dataclass(slots=True)
class PlayerHitEvent(BattleEvent):
    enemy_name: str
    damage: int
    blocked: bool
    player_hp: int


@dataclass(slots=True)
class PlayerDefeatedEvent(BattleEvent):
    floor: int


@dataclass(slots=True)
class PotionUsedEvent(BattleEvent):
    healed: int
    potion_count: int


def roll_percent(rng: RNG, chance: int) -> bool:
    """Return True when a 0-100 roll lands under ``chance``. No draw for chance <= 0."""
    if chance <= 0:
        return False
    return rng.random() * 100 < chance


class BattleService:
    """Resolves attack exchanges and potion use against a live run.

    Both commands mutate ``player`` and ``run`` in place and return the events
    that describe what happened, in order.
    """

    def __init__(
        self,
        loot_service: LootService,
        achievement_service: AchievementService,
        rng: RNG,
    ) -> None:
        self._loot_service = loot_service
        self._achievement_service = achievement_service
        self._rng = rng

    def can_act(self, run: RunState | None) -> bool:
        """Attacks need a live enemy, no pending loot and a run that is not over."""
        if run is None or run.is_over or run.pending_loot is not None:
            return False
        return run.current_enemy.is_alive

    def can_recover(self, run: RunState | None) -> bool:
        """Potions and fleeing stay open after a kill until the floor advances."""
        return run is not None and not run.is_over and run.pending_loot is None

    # -----------------------
    # Commands
    # -----------------------

    def attack(self, player: Player, run: RunState) -> List[BattleEvent]:
        if not self.can_act(run):
            return []
        events: List[BattleEvent] = []
        self._player_turn(player, run, events)
        if not run.current_enemy.is_alive:
            self._resolve_kill(player, run, events)
            return events
        self._enemy_turn(player, run, events)
        return events

    def use_potion(self, player: Player, run: RunState) -> List[BattleEvent]:
        if not self.can_recover(run):
            return []
        if player.potion_count <= 0 or run.player_hp >= player.max_hp:
            return []
        player.potion_count -= 1
        before = run.player_hp
        run.player_hp = min(player.max_hp, run.player_hp + POTION_HEAL_AMOUNT)
        events: List[BattleEvent] = [PotionUsedEvent(healed=run.player_hp - before, potion_count=player.potion_count)]
        self._enemy_turn(player, run, events)
        return events

    # -----------------------
    # Turn phases
    # -----------------------

    def _player_turn(self, player: Player, run: RunState, events: List[BattleEvent]) -> None:
        enemy = run.current_enemy
        stats = player.current_stats
        if roll_percent(self._rng, enemy.stats.evasion):
            events.append(AttackEvadedEvent(enemy_name=enemy.name))
            return

        damage = max(1, stats.offense - enemy.stats.defense)
        is_crit = roll_percent(self._rng, stats.crit_rate)
        if is_crit:
            damage *= CRIT_MULTIPLIER
        dealt = min(math.floor(damage), enemy.stats.hp)
        enemy.stats.hp = max(0, enemy.stats.hp - dealt)
        events.append(
            AttackResolvedEvent(enemy_name=enemy.name, damage=dealt, is_crit=is_crit, enemy_hp=enemy.stats.hp)
        )

        if stats.lifesteal > 0 and dealt > 0 and run.player_hp < player.max_hp:
            heal = max(1, math.floor(dealt * stats.lifesteal / 100))
            run.player_hp = min(player.max_hp, run.player_hp + heal)
            events.append(LifestealEvent(amount=heal, player_hp=run.player_hp))

    def _resolve_kill(self, player: Player, run: RunState, events: List[BattleEvent]) -> None:
        enemy = run.current_enemy
        events.append(EnemyDefeatedEvent(enemy_id=enemy.enemy_id, enemy_name=enemy.name))
        run.enemies_killed += 1
        player.total_enemies_killed += 1

        loot = self._loot_service.generate_loot(run.floor)
        if loot.equipment is not None:
            run.pending_loot = loot.equipment
            events.append(EquipmentDroppedEvent(item=loot.equipment))

        self._achievement_service.record_kill(player, enemy.enemy_id)
        self._award_run_xp(player, run, enemy.xp_reward, events)

        if loot.shards > 0:
            player.add_shards(loot.shards)
            run.shards_earned += loot.shards
            events.append(ShardsFoundEvent(amount=loot.shards, total_shards=player.eternal_shards))
        if loot.potions > 0 and player.add_potions(loot.potions) > 0:
            events.append(PotionFoundEvent(potion_count=player.potion_count))

    def _award_run_xp(self, player: Player, run: RunState, amount: int, events: List[BattleEvent]) -> None:
        run.run_xp += amount
        run.xp_earned += amount
        events.append(RunXpGainedEvent(amount=amount))
        while run.run_xp >= run.run_xp_to_next_level:
            run.run_xp -= run.run_xp_to_next_level
            run.run_level += 1
            run.run_xp_to_next_level = next_run_threshold(run.run_xp_to_next_level)
            run.player_hp = apply_run_level_bonus(player)
            logger.debug("Run level %d reached, max hp now %d", run.run_level, run.player_hp)
            events.append(RunLevelUpEvent(run_level=run.run_level, max_hp=run.player_hp))

    def _enemy_turn(self, player: Player, run: RunState, events: List[BattleEvent]) -> None:
        enemy = run.current_enemy
        if not enemy.is_alive:
            return
        stats = player.current_stats
        if roll_percent(self._rng, stats.evasion):
            events.append(PlayerEvadedEvent(enemy_name=enemy.name))
        else:
            damage = max(1, enemy.stats.attack - stats.defense)
            blocked = roll_percent(self._rng, stats.block_chance)
            if blocked:
                damage = max(1, math.floor(damage * 0.5))
            run.player_hp = max(0, run.player_hp - damage)
            events.append(
                PlayerHitEvent(enemy_name=enemy.name, damage=damage, blocked=blocked, player_hp=run.player_hp)
            )

        if run.player_hp <= 0:
            run.defeated = True
            player.total_deaths += 1
            events.append(PlayerDefeatedEvent(floor=run.floor))
