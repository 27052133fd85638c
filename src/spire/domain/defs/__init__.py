"""Domain definition exports."""

from .achievement_def import AchievementDef, RewardDef
from .class_def import ClassDef, StarterItemDef
from .enemy_def import EnemyDef
from .item_def import ItemTemplateDef, LootTierDef, ShopTierDef

__all__ = [
    "AchievementDef",
    "ClassDef",
    "EnemyDef",
    "ItemTemplateDef",
    "LootTierDef",
    "RewardDef",
    "ShopTierDef",
    "StarterItemDef",
]
