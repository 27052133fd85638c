"""Shared type aliases for the core and domain layers."""
from typing import Literal

Screen = Literal[
    "start",
    "profile_select",
    "class_select",
    "hub",
    "combat",
    "run_summary",
    "shop",
    "achievements",
]

GearSlot = Literal[
    "main_hand",
    "off_hand",
    "helmet",
    "armor",
    "boots",
    "gloves",
    "necklace",
    "ring",
    "earring",
    "belt",
]

GEAR_SLOTS: tuple[GearSlot, ...] = (
    "main_hand",
    "off_hand",
    "helmet",
    "armor",
    "boots",
    "gloves",
    "necklace",
    "ring",
    "earring",
    "belt",
)

Rarity = Literal["Common", "Uncommon", "Rare", "Epic"]

AchievementType = Literal["slay", "reach_floor", "account_level"]

LogColor = Literal["neutral", "crit", "progress", "shards", "miss", "block", "drain"]

DeferredKind = Literal["advance_floor", "show_run_summary"]

__all__ = [
    "AchievementType",
    "DeferredKind",
    "GEAR_SLOTS",
    "GearSlot",
    "LogColor",
    "Rarity",
    "Screen",
]
