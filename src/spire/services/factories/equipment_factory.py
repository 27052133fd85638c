"""Point-budget equipment rolling shared by loot drops and shop stock."""
from __future__ import annotations

import math
from typing import Dict

from spire.core.rng import RNG
from spire.core.types import Rarity
from spire.data.repositories import RaritiesRepository
from spire.domain.defs import ItemTemplateDef, StarterItemDef
from spire.domain.entities import STAT_ORDER, Equipment


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up."""
    return math.floor(value + 0.5)


def distribute_budget(
    template: ItemTemplateDef,
    budget: int,
    rarities_repo: RaritiesRepository,
    rng: RNG,
) -> Dict[str, int]:
    """Spend ``budget`` points one at a time on stats from the template's pool.

    Each point adds the picked stat's weight to its running total. Totals are
    rounded half-up and zero results are dropped, so the map only ever holds
    non-zero integers in STAT_ORDER.
    """
    totals: Dict[str, float] = {}
    for _ in range(budget):
        stat_name = rng.choice(template.stat_pool)
        totals[stat_name] = totals.get(stat_name, 0.0) + rarities_repo.stat_weight(stat_name)

    bonuses: Dict[str, int] = {}
    for stat_name in STAT_ORDER:
        if stat_name not in totals:
            continue
        value = round_half_up(totals[stat_name])
        if value != 0:
            bonuses[stat_name] = value
    return bonuses


def build_equipment(
    template: ItemTemplateDef,
    *,
    prefix: str,
    rarity: Rarity,
    item_level: int,
    stats: Dict[str, int],
) -> Equipment:
    return Equipment(
        name=f"{prefix} {template.name}",
        slot=template.slot,
        icon=template.icon,
        rarity=rarity,
        item_level=item_level,
        stats=stats,
        weapon_type=template.weapon_type,
        two_handed=template.two_handed,
    )


def create_starter_equipment(starter: StarterItemDef) -> Equipment:
    """Materialize a class's fixed starter weapon."""
    return Equipment(
        name=starter.name,
        slot=starter.slot,
        icon=starter.icon,
        rarity="Common",
        item_level=1,
        stats=dict(starter.stats),
        weapon_type=starter.weapon_type,
        two_handed=starter.two_handed,
    )
