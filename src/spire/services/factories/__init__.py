"""Factory helpers for runtime entities."""

from .enemy_factory import generate_enemy
from .equipment_factory import build_equipment, create_starter_equipment, distribute_budget, round_half_up
from .id_factory import make_instance_id
from .player_factory import create_player_from_class_id

__all__ = [
    "build_equipment",
    "create_player_from_class_id",
    "create_starter_equipment",
    "distribute_budget",
    "generate_enemy",
    "make_instance_id",
    "round_half_up",
]
