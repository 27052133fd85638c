"""Repository for achievement definitions."""
from __future__ import annotations

from typing import Dict, List

from spire.data.errors import DataReferenceError, DataValidationError
from spire.data.json_loader import load_json
from spire.data.repositories.base import RepositoryBase
from spire.data.repositories.enemies_repo import EnemiesRepository
from spire.domain.defs import AchievementDef, RewardDef

_TYPES = ("slay", "reach_floor", "account_level")


class AchievementsRepository(RepositoryBase[AchievementDef]):
    """Loads achievement definitions, keeping file order for display."""

    def __init__(self, enemies_repo: EnemiesRepository | None = None, base_path=None) -> None:
        super().__init__("achievements.json", base_path)
        self._enemies_repo = enemies_repo or EnemiesRepository(base_path=base_path)
        self._ordered_ids: List[str] = []

    def _load_raw(self) -> list[object]:
        file_path = self._get_file_path()
        raw = load_json(file_path)
        if not isinstance(raw, list):
            raise DataValidationError("achievements.json must be a list.")
        return raw

    def _build(self, raw: list[object]) -> Dict[str, AchievementDef]:
        enemy_ids = {enemy.id for enemy in self._enemies_repo.all()}
        achievements: Dict[str, AchievementDef] = {}
        ordered: List[str] = []
        for index, entry in enumerate(raw):
            context = f"achievements[{index}]"
            data = self._require_mapping(entry, context)
            self._assert_required(data, {"id", "title", "description", "type", "goal", "rewards"}, context)
            achievement_id = self._require_str(data["id"], f"{context}.id")
            if achievement_id in achievements:
                raise DataValidationError(f"{context} duplicates id '{achievement_id}'.")
            kind = self._require_str(data["type"], f"{context}.type")
            if kind not in _TYPES:
                raise DataValidationError(f"{context}.type must be one of {list(_TYPES)}.")
            goal = self._require_int(data["goal"], f"{context}.goal")
            if goal <= 0:
                raise DataValidationError(f"{context}.goal must be positive.")
            target_id = data.get("target_id")
            if kind == "slay":
                target_id = self._require_str(target_id, f"{context}.target_id")
                if target_id not in enemy_ids:
                    raise DataReferenceError(f"{context} targets missing enemy '{target_id}'.")
            rewards = self._require_mapping(data["rewards"], f"{context}.rewards")
            achievements[achievement_id] = AchievementDef(
                id=achievement_id,
                title=self._require_str(data["title"], f"{context}.title"),
                description=self._require_str(data["description"], f"{context}.description"),
                type=kind,
                goal=goal,
                rewards=RewardDef(
                    shards=self._require_int(rewards.get("shards", 0), f"{context}.rewards.shards"),
                    potions=self._require_int(rewards.get("potions", 0), f"{context}.rewards.potions"),
                ),
                target_id=target_id,
                is_buff=self._require_bool(data.get("is_buff", False), f"{context}.is_buff"),
            )
            ordered.append(achievement_id)
        self._ordered_ids = ordered
        return achievements

    def in_display_order(self) -> List[AchievementDef]:
        self._ensure_loaded()
        return [self.get(achievement_id) for achievement_id in self._ordered_ids]
