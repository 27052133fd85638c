"""Achievement progress tracking and reward claims."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from spire.data.repositories import AchievementsRepository
from spire.domain.defs import AchievementDef
from spire.domain.entities import Player


@dataclass(slots=True)
class AchievementView:
    id: str
    title: str
    description: str
    progress: int
    goal: int
    is_buff: bool
    is_complete: bool
    is_claimed: bool
    can_claim: bool


@dataclass(slots=True)
class AchievementClaimedEvent:
    achievement_id: str
    title: str
    shards: int
    potions: int


class AchievementService:
    """Keeps per-achievement counters non-decreasing and pays out rewards once."""

    def __init__(self, achievements_repo: AchievementsRepository) -> None:
        self._achievements_repo = achievements_repo

    def record_kill(self, player: Player, enemy_id: str) -> None:
        for achievement in self._achievements_repo.in_display_order():
            if achievement.type == "slay" and achievement.target_id == enemy_id:
                self._increment(player, achievement.id, 1)

    def record_floor(self, player: Player, floor: int) -> None:
        self._record_max(player, "reach_floor", floor)

    def record_level(self, player: Player, level: int) -> None:
        self._record_max(player, "account_level", level)

    def progress(self, player: Player, achievement_id: str) -> int:
        return player.achievement_progress.get(achievement_id, 0)

    def build_views(self, player: Player) -> List[AchievementView]:
        views: List[AchievementView] = []
        for achievement in self._achievements_repo.in_display_order():
            progress = self._progress_for(player, achievement)
            complete = progress >= achievement.goal
            claimed = achievement.id in player.claimed_achievements
            views.append(
                AchievementView(
                    id=achievement.id,
                    title=achievement.title,
                    description=achievement.description,
                    progress=min(progress, achievement.goal),
                    goal=achievement.goal,
                    is_buff=achievement.is_buff,
                    is_complete=complete,
                    is_claimed=claimed,
                    can_claim=complete and not claimed and not achievement.is_buff,
                )
            )
        return views

    def claim(self, player: Player, achievement_id: str) -> AchievementClaimedEvent | None:
        """Grant rewards for a completed, unclaimed, non-buff achievement."""
        try:
            achievement = self._achievements_repo.get(achievement_id)
        except KeyError:
            return None
        if achievement.is_buff or achievement_id in player.claimed_achievements:
            return None
        if self._progress_for(player, achievement) < achievement.goal:
            return None

        rewards = achievement.rewards
        if rewards.shards:
            player.add_shards(rewards.shards)
        delivered = player.add_potions(rewards.potions) if rewards.potions else 0
        player.claimed_achievements.append(achievement_id)
        return AchievementClaimedEvent(
            achievement_id=achievement_id,
            title=achievement.title,
            shards=rewards.shards,
            potions=delivered,
        )

    def _progress_for(self, player: Player, achievement: AchievementDef) -> int:
        # Level goals also read the live account level.
        progress = player.achievement_progress.get(achievement.id, 0)
        if achievement.type == "account_level":
            return max(progress, player.level)
        return progress

    def _record_max(self, player: Player, kind: str, value: int) -> None:
        for achievement in self._achievements_repo.in_display_order():
            if achievement.type == kind and value > player.achievement_progress.get(achievement.id, 0):
                player.achievement_progress[achievement.id] = value

    @staticmethod
    def _increment(player: Player, achievement_id: str, amount: int) -> None:
        player.achievement_progress[achievement_id] = player.achievement_progress.get(achievement_id, 0) + amount
