"""Session and run state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from spire.core.types import DeferredKind, LogColor, Screen
from spire.domain.entities import EnemyInstance, Equipment, Player
from spire.domain.progression import RUN_STARTING_XP_TO_NEXT

PROFILE_SLOT_COUNT = 2


@dataclass(slots=True)
class FleePenalty:
    xp_lost: int
    shards_lost: int


@dataclass(slots=True)
class RunState:
    """One attempt at the Spire. Discarded when the run summary closes."""

    current_enemy: EnemyInstance
    player_hp: int
    floor: int = 1
    run_level: int = 1
    run_xp: int = 0
    run_xp_to_next_level: int = RUN_STARTING_XP_TO_NEXT
    xp_earned: int = 0
    pending_loot: Equipment | None = None
    enemies_killed: int = 0
    shards_earned: int = 0
    defeated: bool = False
    fled: bool = False
    flee_penalty: FleePenalty | None = None

    @property
    def is_over(self) -> bool:
        return self.defeated or self.fled

    @property
    def awaiting_advance(self) -> bool:
        """True between a loot-free kill and the queued floor advance."""
        return not self.is_over and self.pending_loot is None and not self.current_enemy.is_alive


@dataclass(frozen=True, slots=True)
class LogEntry:
    id: int
    message: str
    color: LogColor


@dataclass(frozen=True, slots=True)
class DeferredEvent:
    """A timed transition the presentation layer fires back after ``delay_ms``."""

    kind: DeferredKind
    delay_ms: int


@dataclass(slots=True)
class SessionContext:
    """Explicit session: profile slots, the active slot and the live run."""

    profiles: List[Player | None] = field(default_factory=lambda: [None] * PROFILE_SLOT_COUNT)
    screen: Screen = "start"
    active_index: int | None = None
    run: RunState | None = None
    logs: List[LogEntry] = field(default_factory=list)
    deferred: List[DeferredEvent] = field(default_factory=list)
    next_log_id: int = 1

    @property
    def player(self) -> Player | None:
        if self.active_index is None:
            return None
        return self.profiles[self.active_index]

    def add_log(self, message: str, color: LogColor = "neutral") -> LogEntry:
        entry = LogEntry(id=self.next_log_id, message=message, color=color)
        self.next_log_id += 1
        self.logs.append(entry)
        return entry

    def clear_run(self) -> None:
        self.run = None
        self.logs.clear()
        self.deferred.clear()
