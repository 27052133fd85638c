"""Turns battle and run events into color-tagged log lines."""
from __future__ import annotations

from typing import Iterable, List, Tuple

from spire.core.types import LogColor
from spire.services.battle_service import (
    AttackEvadedEvent,
    AttackResolvedEvent,
    BattleEvent,
    EnemyDefeatedEvent,
    EquipmentDroppedEvent,
    LifestealEvent,
    PlayerDefeatedEvent,
    PlayerEvadedEvent,
    PlayerHitEvent,
    PotionFoundEvent,
    PotionUsedEvent,
    RunLevelUpEvent,
    RunXpGainedEvent,
    ShardsFoundEvent,
)
from spire.services.run_service import (
    EquipBlockedEvent,
    FloorAdvancedEvent,
    ItemDiscardedEvent,
    ItemEquippedEvent,
    RunEvent,
    RunFledEvent,
    RunStartedEvent,
)

LogLine = Tuple[str, LogColor]


def format_battle_event(event: BattleEvent) -> LogLine | None:
    if isinstance(event, AttackEvadedEvent):
        return f"The {event.enemy_name} dodged your attack!", "miss"
    if isinstance(event, AttackResolvedEvent):
        suffix = " (CRIT!)" if event.is_crit else ""
        return f"You hit the {event.enemy_name} for {event.damage} damage{suffix}.", (
            "crit" if event.is_crit else "neutral"
        )
    if isinstance(event, LifestealEvent):
        return f"You drained {event.amount} HP from the enemy.", "drain"
    if isinstance(event, EnemyDefeatedEvent):
        return f"You have defeated the {event.enemy_name}!", "progress"
    if isinstance(event, EquipmentDroppedEvent):
        return f"The enemy dropped a piece of equipment: {event.item.name}!", "progress"
    if isinstance(event, RunXpGainedEvent):
        return f"You gained {event.amount} XP.", "progress"
    if isinstance(event, RunLevelUpEvent):
        return f"You leveled up to Run Level {event.run_level}! HP Restored!", "progress"
    if isinstance(event, ShardsFoundEvent):
        return f"The enemy dropped {event.amount} Eternal Shards.", "shards"
    if isinstance(event, PotionFoundEvent):
        return f"You found a Health Potion! You now have {event.potion_count}.", "progress"
    if isinstance(event, PlayerEvadedEvent):
        return f"You dodged the {event.enemy_name}'s attack!", "miss"
    if isinstance(event, PlayerHitEvent):
        if event.blocked:
            return f"You BLOCKED! Took reduced damage ({event.damage}).", "block"
        return f"{event.enemy_name} hits you for {event.damage} damage.", "neutral"
    if isinstance(event, PlayerDefeatedEvent):
        return "You have been defeated...", "progress"
    if isinstance(event, PotionUsedEvent):
        return f"You used a Health Potion and restored {event.healed} HP.", "neutral"
    return None


def format_run_event(event: RunEvent) -> LogLine | None:
    if isinstance(event, RunStartedEvent):
        return f"You enter the Spire. A {event.enemy_name} appears!", "neutral"
    if isinstance(event, FloorAdvancedEvent):
        if event.is_boss:
            return f"You advance to Floor {event.floor}. The {event.enemy_name} blocks the way!", "progress"
        return f"You advance to Floor {event.floor}. A {event.enemy_name} appears!", "progress"
    if isinstance(event, ItemEquippedEvent):
        return f"You equipped {event.item.name}.", "neutral"
    if isinstance(event, ItemDiscardedEvent):
        return f"You discarded {event.item.name}.", "neutral"
    if isinstance(event, EquipBlockedEvent):
        return "Cannot equip Off-Hand: Requires a One-Handed weapon.", "miss"
    if isinstance(event, RunFledEvent):
        return f"You fled the Spire, losing {event.xp_lost} XP and {event.shards_lost} Eternal Shards.", "miss"
    return None


def format_events(events: Iterable[BattleEvent | RunEvent]) -> List[LogLine]:
    lines: List[LogLine] = []
    for event in events:
        if isinstance(event, RunEvent):
            line = format_run_event(event)
        else:
            line = format_battle_event(event)
        if line is not None:
            lines.append(line)
    return lines
