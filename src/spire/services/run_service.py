"""Run lifecycle: entering the Spire, floor advancement, loot decisions and settlement."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List

from spire.core.rng import RNG
from spire.data.repositories import EnemiesRepository
from spire.domain.entities import Equipment, Player
from spire.domain.loadout import can_equip, equip
from spire.domain.progression import apply_account_level_ups
from spire.domain.stat_model import recompute
from spire.domain.state import FleePenalty, RunState
from spire.services.achievement_service import AchievementService
from spire.services.factories import generate_enemy
from spire.services.shop_service import ShopService

logger = logging.getLogger(__name__)

FLEE_PENALTY_RATE = 0.15


@dataclass(slots=True)
class RunEvent:
    """Base run event."""


@dataclass(slots=True)
class RunStartedEvent(RunEvent):
    enemy_name: str


@dataclass(slots=True)
class FloorAdvancedEvent(RunEvent):
    floor: int
    enemy_name: str
    is_boss: bool


@dataclass(slots=True)
class ItemEquippedEvent(RunEvent):
    item: Equipment
    max_hp_delta: int


@dataclass(slots=True)
class ItemDiscardedEvent(RunEvent):
    item: Equipment


@dataclass(slots=True)
class EquipBlockedEvent(RunEvent):
    item: Equipment


@dataclass(slots=True)
class RunFledEvent(RunEvent):
    xp_lost: int
    shards_lost: int


@dataclass(slots=True)
class RunSettlement:
    """What closing a run summary changed on the account."""

    xp_gained: int
    levels_gained: int
    level: int
    shop_milestone: int | None = None


class RunService:
    """Creates and advances runs and folds their results back into the profile."""

    def __init__(
        self,
        *,
        enemies_repo: EnemiesRepository,
        shop_service: ShopService,
        achievement_service: AchievementService,
        rng: RNG,
    ) -> None:
        self._enemies_repo = enemies_repo
        self._shop_service = shop_service
        self._achievement_service = achievement_service
        self._rng = rng

    def start_run(self, player: Player) -> tuple[RunState, List[RunEvent]]:
        enemy = generate_enemy(1, self._enemies_repo, self._rng)
        run = RunState(current_enemy=enemy, player_hp=player.max_hp)
        return run, [RunStartedEvent(enemy_name=enemy.name)]

    def advance_floor(self, player: Player, run: RunState) -> List[RunEvent]:
        next_floor = run.floor + 1
        if next_floor > player.max_floor_reached:
            player.max_floor_reached = next_floor
        self._achievement_service.record_floor(player, next_floor)
        enemy = generate_enemy(next_floor, self._enemies_repo, self._rng)
        run.floor = next_floor
        run.current_enemy = enemy
        run.pending_loot = None
        return [FloorAdvancedEvent(floor=next_floor, enemy_name=enemy.name, is_boss=enemy.is_boss)]

    def resolve_loot(self, player: Player, run: RunState, equip_item: bool) -> List[RunEvent]:
        """Equip or discard the pending drop, then advance to the next floor."""
        item = run.pending_loot
        if item is None:
            return []
        events: List[RunEvent] = []
        if not equip_item:
            events.append(ItemDiscardedEvent(item=item))
        elif not can_equip(player, item):
            events.append(EquipBlockedEvent(item=item))
        else:
            old_max_hp = player.max_hp
            equip(player, item)
            recompute(player)
            delta = player.max_hp - old_max_hp
            run.player_hp = min(run.player_hp + delta, player.max_hp)
            events.append(ItemEquippedEvent(item=item, max_hp_delta=delta))
        run.pending_loot = None
        events.extend(self.advance_floor(player, run))
        return events

    def flee(self, player: Player, run: RunState) -> List[RunEvent]:
        """Abandon the run, forfeiting 15% of its xp and of the shards it earned."""
        xp_lost = math.floor(run.xp_earned * FLEE_PENALTY_RATE)
        shards_lost = math.floor(run.shards_earned * FLEE_PENALTY_RATE)
        run.xp_earned -= xp_lost
        player.eternal_shards = max(0, player.eternal_shards - shards_lost)
        player.total_flees += 1
        run.fled = True
        run.flee_penalty = FleePenalty(xp_lost=xp_lost, shards_lost=shards_lost)
        return [RunFledEvent(xp_lost=xp_lost, shards_lost=shards_lost)]

    def settle(self, player: Player, run: RunState) -> RunSettlement:
        """Fold run xp into the account, level up, restock the shop on milestones and heal."""
        gained = run.xp_earned
        player.xp += gained
        player.total_accumulated_xp += gained
        level_up = apply_account_level_ups(player)
        if level_up.levels_gained:
            logger.debug("Account reached level %d (+%d)", player.level, level_up.levels_gained)
        milestone = self._shop_service.apply_milestone_refresh(player)
        self._achievement_service.record_level(player, player.level)
        player.current_hp = player.max_hp
        return RunSettlement(
            xp_gained=gained,
            levels_gained=level_up.levels_gained,
            level=player.level,
            shop_milestone=milestone,
        )
