"""Factory for creating player profiles from class definitions."""
from __future__ import annotations

from spire.data.repositories import ClassesRepository
from spire.domain.entities import Player, Stats
from spire.domain.stat_model import recompute
from spire.services.errors import FactoryError

from .equipment_factory import create_starter_equipment


def create_player_from_class_id(
    class_id: str,
    name: str | None,
    classes_repo: ClassesRepository,
) -> Player:
    """Instantiate a level-1 player with the class starter weapon equipped and full HP.

    The shop inventory is left empty; the shop service stocks it.
    """
    try:
        class_def = classes_repo.get(class_id)
    except KeyError as exc:
        raise FactoryError(f"Class '{class_id}' not found.") from exc

    starter = create_starter_equipment(class_def.starting_weapon)
    player = Player(
        name=name.strip() if name and name.strip() else class_def.name,
        class_id=class_id,
        base_stats=Stats.from_mapping(class_def.base_stats),
        equipment={starter.slot: starter},
    )
    recompute(player)
    player.current_hp = player.max_hp
    return player
