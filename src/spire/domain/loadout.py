"""Gear slot occupancy rules for a player's equipment map."""
from __future__ import annotations

from typing import List

from spire.domain.entities import Equipment, Player


def can_equip(player: Player, item: Equipment) -> bool:
    """An off-hand item needs a one-handed main-hand weapon; everything else always fits."""
    if item.slot != "off_hand":
        return True
    main_hand = player.equipment.get("main_hand")
    return main_hand is not None and not main_hand.two_handed


def equip(player: Player, item: Equipment) -> List[Equipment]:
    """Place ``item`` in its slot and return the items it displaced.

    A two-handed main-hand weapon also clears the off-hand. Callers check
    :func:`can_equip` first and recompute stats afterwards.
    """
    displaced: List[Equipment] = []
    previous = player.equipment.get(item.slot)
    if previous is not None:
        displaced.append(previous)
    player.equipment[item.slot] = item
    if item.slot == "main_hand" and item.two_handed:
        off_hand = player.equipment.pop("off_hand", None)
        if off_hand is not None:
            displaced.append(off_hand)
    return displaced
