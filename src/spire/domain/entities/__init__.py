"""Runtime entity exports."""

from .enemy import EnemyInstance
from .equipment import Equipment
from .player import POTION_CAP, Player
from .stats import EVASION_CAP, STAT_ORDER, EnemyStats, Stats

__all__ = [
    "EVASION_CAP",
    "EnemyInstance",
    "EnemyStats",
    "Equipment",
    "POTION_CAP",
    "Player",
    "STAT_ORDER",
    "Stats",
]
