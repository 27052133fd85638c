"""Service layer exports."""

from .errors import FactoryError, SaveLoadError
from .achievement_service import AchievementService
from .battle_service import BattleService
from .loot_service import LootDrop, LootService
from .run_service import RunService
from .save_service import SaveService
from .shop_service import ShopService

__all__ = [
    "AchievementService",
    "BattleService",
    "FactoryError",
    "LootDrop",
    "LootService",
    "RunService",
    "SaveLoadError",
    "SaveService",
    "ShopService",
]
