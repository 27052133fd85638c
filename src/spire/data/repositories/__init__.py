"""Repository exports."""

from .achievements_repo import AchievementsRepository
from .classes_repo import ClassesRepository
from .enemies_repo import EnemiesRepository
from .items_repo import ItemTemplatesRepository
from .rarities_repo import RaritiesRepository

__all__ = [
    "AchievementsRepository",
    "ClassesRepository",
    "EnemiesRepository",
    "ItemTemplatesRepository",
    "RaritiesRepository",
]
