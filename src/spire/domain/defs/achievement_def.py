"""Achievement definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from spire.core.types import AchievementType


@dataclass(slots=True)
class RewardDef:
    shards: int = 0
    potions: int = 0


@dataclass(slots=True)
class AchievementDef:
    """Static achievement: slay, floor or account-level goal."""

    id: str
    title: str
    description: str
    type: AchievementType
    goal: int
    rewards: RewardDef
    target_id: str | None = None
    is_buff: bool = False
