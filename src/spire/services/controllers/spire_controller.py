"""UI-agnostic controller exposing the Spire command surface and state snapshots."""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Mapping, Tuple

from spire import config
from spire.core.rng import RNG
from spire.core.types import Screen
from spire.data.errors import DataLoadError
from spire.data.profile_store import JsonFileProfileStore, ProfileStore
from spire.data.repositories import (
    AchievementsRepository,
    ClassesRepository,
    EnemiesRepository,
    ItemTemplatesRepository,
    RaritiesRepository,
)
from spire.domain.entities import Player
from spire.domain.state import PROFILE_SLOT_COUNT, DeferredEvent, LogEntry, RunState, SessionContext
from spire.services.achievement_service import AchievementClaimedEvent, AchievementService, AchievementView
from spire.services.battle_service import BattleEvent, BattleService
from spire.services.combat_log import format_events
from spire.services.errors import FactoryError, SaveLoadError
from spire.services.factories import create_player_from_class_id
from spire.services.loot_service import LootService
from spire.services.run_service import RunEvent, RunService, RunSettlement
from spire.services.save_service import SaveService
from spire.services.shop_service import MAX_REFRESHES_PER_LEVEL, ShopActionFailedEvent, ShopEvent, ShopService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileSummary:
    """Menu-facing description of one occupied save slot."""

    index: int
    name: str
    class_id: str
    level: int
    max_floor_reached: int


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the session. Player and run are deep copies."""

    screen: Screen
    player: Player | None
    run: RunState | None
    logs: Tuple[LogEntry, ...]
    profiles: Tuple[ProfileSummary | None, ...]
    pending_events: Tuple[DeferredEvent, ...]


class SpireController:
    """
    Command handler for one play session.

    Every command checks its preconditions first and returns without touching
    state when they do not hold. Timed transitions are queued as
    :class:`DeferredEvent` objects; the presentation layer drains them, waits
    ``delay_ms`` and hands each one back to :meth:`fire_deferred`.
    """

    def __init__(
        self,
        *,
        classes_repo: ClassesRepository,
        enemies_repo: EnemiesRepository,
        items_repo: ItemTemplatesRepository,
        rarities_repo: RaritiesRepository,
        achievements_repo: AchievementsRepository,
        store: ProfileStore,
        rng: RNG,
        settings: Mapping[str, int] | None = None,
    ) -> None:
        self._classes_repo = classes_repo
        self._store = store
        self._settings = dict(config.DEFAULT_CONFIG)
        if settings:
            self._settings.update(settings)
        self._achievement_service = AchievementService(achievements_repo)
        self._shop_service = ShopService(items_repo=items_repo, rarities_repo=rarities_repo, rng=rng)
        loot_service = LootService(items_repo, rarities_repo, rng)
        self._battle_service = BattleService(loot_service, self._achievement_service, rng)
        self._run_service = RunService(
            enemies_repo=enemies_repo,
            shop_service=self._shop_service,
            achievement_service=self._achievement_service,
            rng=rng,
        )
        self._save_service = SaveService(classes_repo=classes_repo)
        self._session = SessionContext()

    @property
    def session(self) -> SessionContext:
        return self._session

    # -----------------------
    # State surface
    # -----------------------

    def snapshot(self) -> GameSnapshot:
        session = self._session
        return GameSnapshot(
            screen=session.screen,
            player=copy.deepcopy(session.player),
            run=copy.deepcopy(session.run),
            logs=tuple(session.logs),
            profiles=tuple(self._summarize(index, player) for index, player in enumerate(session.profiles)),
            pending_events=tuple(session.deferred),
        )

    def achievement_views(self) -> List[AchievementView]:
        player = self._session.player
        if player is None:
            return []
        return self._achievement_service.build_views(player)

    def drain_deferred(self) -> List[DeferredEvent]:
        """Hand queued timed transitions to the caller and empty the queue."""
        events = list(self._session.deferred)
        self._session.deferred.clear()
        return events

    def fire_deferred(self, event: DeferredEvent) -> None:
        session = self._session
        player, run = session.player, session.run
        if player is None or run is None or session.screen != "combat":
            return
        if event.kind == "advance_floor":
            if run.is_over or run.pending_loot is not None or run.current_enemy.is_alive:
                return
            self._log_events(self._run_service.advance_floor(player, run))
            self._save()
        elif event.kind == "show_run_summary":
            if run.defeated:
                session.screen = "run_summary"

    # -----------------------
    # Profiles
    # -----------------------

    def start_game(self) -> None:
        if self._session.screen != "start":
            return
        self._session.profiles = self._load_profiles()
        self._session.screen = "profile_select"

    def load_profile(self, index: int) -> None:
        session = self._session
        if session.screen != "profile_select" or not self._valid_index(index):
            return
        if session.profiles[index] is None:
            return
        session.active_index = index
        session.screen = "hub"

    def new_game(self, index: int) -> None:
        session = self._session
        if session.screen != "profile_select" or not self._valid_index(index):
            return
        session.active_index = index
        session.screen = "class_select"

    def delete_profile(self, index: int) -> None:
        session = self._session
        if session.screen != "profile_select" or not self._valid_index(index):
            return
        if session.profiles[index] is None:
            return
        session.profiles[index] = None
        self._save()

    def select_class(self, class_id: str, name: str | None = None) -> None:
        session = self._session
        if session.screen != "class_select" or session.active_index is None:
            return
        try:
            player = create_player_from_class_id(class_id, name, self._classes_repo)
        except FactoryError as exc:
            logger.warning("Ignoring class selection: %s", exc)
            return
        self._shop_service.restock(player)
        session.profiles[session.active_index] = player
        session.screen = "hub"
        self._save()

    def exit_to_profiles(self) -> None:
        session = self._session
        if session.screen not in ("hub", "class_select"):
            return
        session.active_index = None
        session.clear_run()
        session.screen = "profile_select"

    # -----------------------
    # Spire run
    # -----------------------

    def enter_spire(self) -> None:
        session = self._session
        player = session.player
        if session.screen != "hub" or player is None:
            return
        session.clear_run()
        run, events = self._run_service.start_run(player)
        session.run = run
        self._log_events(events)
        session.screen = "combat"

    def attack(self) -> None:
        player, run = self._combat_context()
        if player is None or run is None:
            return
        events = self._battle_service.attack(player, run)
        self._after_exchange(run, events)

    def use_potion(self) -> None:
        player, run = self._combat_context(recover=True)
        if player is None or run is None:
            return
        events = self._battle_service.use_potion(player, run)
        self._after_exchange(run, events)

    def loot_decision(self, equip: bool) -> None:
        session = self._session
        player, run = session.player, session.run
        if session.screen != "combat" or player is None or run is None:
            return
        if run.is_over or run.pending_loot is None:
            return
        self._log_events(self._run_service.resolve_loot(player, run, equip))
        self._save()

    def flee(self) -> None:
        player, run = self._combat_context(recover=True)
        if player is None or run is None:
            return
        self._log_events(self._run_service.flee(player, run))
        self._session.deferred.clear()
        self._session.screen = "run_summary"
        self._save()

    def close_summary(self) -> RunSettlement | None:
        session = self._session
        player, run = session.player, session.run
        if session.screen != "run_summary" or player is None or run is None:
            return None
        settlement = self._run_service.settle(player, run)
        session.clear_run()
        session.screen = "hub"
        self._save()
        return settlement

    # -----------------------
    # Shop
    # -----------------------

    def enter_shop(self) -> None:
        if self._session.screen == "hub" and self._session.player is not None:
            self._session.screen = "shop"

    def exit_shop(self) -> None:
        if self._session.screen == "shop":
            self._session.screen = "hub"

    def buy_potion(self) -> List[ShopEvent]:
        player = self._shop_player()
        if player is None:
            return []
        return self._apply_shop_events(self._shop_service.buy_potion(player))

    def buy_item(self, index: int) -> List[ShopEvent]:
        player = self._shop_player()
        if player is None:
            return []
        return self._apply_shop_events(self._shop_service.buy_item(player, index))

    def refresh_shop(self) -> List[ShopEvent]:
        player = self._shop_player()
        if player is None:
            return []
        return self._apply_shop_events(self._shop_service.refresh_shop(player))

    def shop_refreshes_left(self) -> int:
        player = self._session.player
        if player is None:
            return 0
        return MAX_REFRESHES_PER_LEVEL - self._shop_service.refreshes_used(player)

    # -----------------------
    # Achievements
    # -----------------------

    def enter_achievements(self) -> None:
        if self._session.screen == "hub" and self._session.player is not None:
            self._session.screen = "achievements"

    def exit_achievements(self) -> None:
        if self._session.screen == "achievements":
            self._session.screen = "hub"

    def claim_achievement(self, achievement_id: str) -> AchievementClaimedEvent | None:
        player = self._session.player
        if self._session.screen != "achievements" or player is None:
            return None
        event = self._achievement_service.claim(player, achievement_id)
        if event is not None:
            self._save()
        return event

    # -----------------------
    # Internals
    # -----------------------

    def _combat_context(self, recover: bool = False) -> tuple[Player | None, RunState | None]:
        session = self._session
        allowed = self._battle_service.can_recover if recover else self._battle_service.can_act
        if session.screen != "combat" or not allowed(session.run):
            return None, None
        return session.player, session.run

    def _after_exchange(self, run: RunState, events: List[BattleEvent]) -> None:
        if not events:
            return
        self._log_events(events)
        if run.defeated:
            self._session.deferred.append(
                DeferredEvent(kind="show_run_summary", delay_ms=self._settings["summary_delay_ms"])
            )
        elif run.awaiting_advance and not any(event.kind == "advance_floor" for event in self._session.deferred):
            self._session.deferred.append(
                DeferredEvent(kind="advance_floor", delay_ms=self._settings["auto_advance_delay_ms"])
            )
        self._save()

    def _shop_player(self) -> Player | None:
        if self._session.screen != "shop":
            return None
        return self._session.player

    def _apply_shop_events(self, events: List[ShopEvent]) -> List[ShopEvent]:
        if any(not isinstance(event, ShopActionFailedEvent) for event in events):
            self._save()
        return events

    def _log_events(self, events: Iterable[BattleEvent | RunEvent]) -> None:
        for message, color in format_events(events):
            self._session.add_log(message, color)

    def _load_profiles(self) -> List[Player | None]:
        empty: List[Player | None] = [None] * PROFILE_SLOT_COUNT
        try:
            payload = self._store.read()
            if payload is None:
                return empty
            return self._save_service.deserialize(payload)
        except (SaveLoadError, DataLoadError) as exc:
            logger.warning("Discarding unreadable profile data: %s", exc)
            return empty

    def _save(self) -> None:
        try:
            self._store.write(self._save_service.serialize(self._session.profiles))
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Failed to save profiles: %s", exc)

    @staticmethod
    def _valid_index(index: int) -> bool:
        return 0 <= index < PROFILE_SLOT_COUNT

    @staticmethod
    def _summarize(index: int, player: Player | None) -> ProfileSummary | None:
        if player is None:
            return None
        return ProfileSummary(
            index=index,
            name=player.name,
            class_id=player.class_id,
            level=player.level,
            max_floor_reached=player.max_floor_reached,
        )


def build_controller(
    store: ProfileStore | None = None,
    *,
    seed: int | None = None,
    definitions_path: Path | str | None = None,
    config_path: Path | None = None,
) -> SpireController:
    """Wire repositories, services and persistence into a ready controller."""
    enemies_repo = EnemiesRepository(base_path=definitions_path)
    return SpireController(
        classes_repo=ClassesRepository(base_path=definitions_path),
        enemies_repo=enemies_repo,
        items_repo=ItemTemplatesRepository(base_path=definitions_path),
        rarities_repo=RaritiesRepository(base_path=definitions_path),
        achievements_repo=AchievementsRepository(enemies_repo=enemies_repo, base_path=definitions_path),
        store=store if store is not None else JsonFileProfileStore(),
        rng=RNG(seed),
        settings=config.load_config(config_path),
    )
