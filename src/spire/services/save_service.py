"""Serialization helpers for the two profile slots."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from spire.core.types import GEAR_SLOTS
from spire.data.repositories import ClassesRepository
from spire.domain.entities import STAT_ORDER, Equipment, Player, Stats
from spire.domain.state import PROFILE_SLOT_COUNT
from spire.domain.stat_model import recompute
from spire.services.errors import SaveLoadError

SavePayload = Dict[str, Any]
_VALID_RARITIES = ("Common", "Uncommon", "Rare", "Epic")
_COUNTERS = (
    "max_floor_reached",
    "total_enemies_killed",
    "total_deaths",
    "total_accumulated_xp",
    "total_lifetime_shards",
    "total_flees",
)


class SaveService:
    """Converts profile slots to/from a validated, versioned payload."""

    SAVE_VERSION = 1

    def __init__(self, *, classes_repo: ClassesRepository) -> None:
        self._classes_repo = classes_repo

    def serialize(self, profiles: Sequence[Player | None]) -> SavePayload:
        """Return a JSON-serializable payload for the profile store."""
        return {
            "save_version": self.SAVE_VERSION,
            "profiles": [None if player is None else self._serialize_player(player) for player in profiles],
        }

    def deserialize(self, payload: Mapping[str, Any]) -> List[Player | None]:
        """Rehydrate both profile slots. Current stats are rebuilt, never trusted."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        if payload.get("save_version") != self.SAVE_VERSION:
            raise SaveLoadError("Unsupported save version.")
        raw_profiles = payload.get("profiles")
        if not isinstance(raw_profiles, list) or len(raw_profiles) != PROFILE_SLOT_COUNT:
            raise SaveLoadError(f"profiles must be a list of {PROFILE_SLOT_COUNT} slots.")
        profiles: List[Player | None] = []
        for index, entry in enumerate(raw_profiles):
            if entry is None:
                profiles.append(None)
                continue
            profiles.append(self._deserialize_player(entry, f"profiles[{index}]"))
        return profiles

    # -----------------------
    # Serialization
    # -----------------------

    def _serialize_player(self, player: Player) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": player.name,
            "class_id": player.class_id,
            "level": player.level,
            "xp": player.xp,
            "xp_to_next_level": player.xp_to_next_level,
            "base_stats": player.base_stats.to_dict(),
            "current_hp": player.current_hp,
            "eternal_shards": player.eternal_shards,
            "potion_count": player.potion_count,
            "equipment": {
                slot: self._serialize_equipment(player.equipment[slot])
                for slot in GEAR_SLOTS
                if slot in player.equipment
            },
            "shop_inventory": [self._serialize_equipment(item) for item in player.shop_inventory],
            "last_shop_refresh_level": player.last_shop_refresh_level,
            "shop_refreshes": {"level": player.shop_refresh_level, "count": player.shop_refresh_count},
            "achievement_progress": dict(player.achievement_progress),
            "claimed_achievements": list(player.claimed_achievements),
        }
        for counter in _COUNTERS:
            payload[counter] = getattr(player, counter)
        return payload

    @staticmethod
    def _serialize_equipment(item: Equipment) -> Dict[str, Any]:
        return {
            "name": item.name,
            "slot": item.slot,
            "icon": item.icon,
            "rarity": item.rarity,
            "item_level": item.item_level,
            "stats": dict(item.stats),
            "cost": item.cost,
            "weapon_type": item.weapon_type,
            "two_handed": item.two_handed,
        }

    # -----------------------
    # Deserialization
    # -----------------------

    def _deserialize_player(self, value: Any, context: str) -> Player:
        data = self._require_mapping(value, context)
        class_id = self._require_str(data.get("class_id"), f"{context}.class_id")
        try:
            self._classes_repo.get(class_id)
        except KeyError as exc:
            raise SaveLoadError(f"{context} references unknown class '{class_id}'.") from exc

        base_stats = self._coerce_stats(data.get("base_stats"), f"{context}.base_stats")
        equipment_raw = self._require_mapping(data.get("equipment"), f"{context}.equipment")
        equipment: Dict[str, Equipment] = {}
        for slot, item_raw in equipment_raw.items():
            if slot not in GEAR_SLOTS:
                raise SaveLoadError(f"{context}.equipment uses unknown slot '{slot}'.")
            item = self._coerce_equipment(item_raw, f"{context}.equipment.{slot}")
            if item.slot != slot:
                raise SaveLoadError(f"{context}.equipment.{slot} holds a '{item.slot}' item.")
            equipment[slot] = item

        shop_raw = data.get("shop_inventory", [])
        if not isinstance(shop_raw, list):
            raise SaveLoadError(f"{context}.shop_inventory must be a list.")
        refreshes = self._require_mapping(
            data.get("shop_refreshes", {"level": 1, "count": 0}), f"{context}.shop_refreshes"
        )

        player = Player(
            name=self._require_str(data.get("name"), f"{context}.name"),
            class_id=class_id,
            base_stats=base_stats,
            level=self._require_positive_int(data.get("level"), f"{context}.level"),
            xp=self._require_non_negative_int(data.get("xp"), f"{context}.xp"),
            xp_to_next_level=self._require_positive_int(data.get("xp_to_next_level"), f"{context}.xp_to_next_level"),
            current_hp=self._require_int(data.get("current_hp"), f"{context}.current_hp"),
            eternal_shards=self._require_non_negative_int(data.get("eternal_shards"), f"{context}.eternal_shards"),
            potion_count=self._require_non_negative_int(data.get("potion_count"), f"{context}.potion_count"),
            equipment=equipment,
            shop_inventory=[
                self._coerce_equipment(item, f"{context}.shop_inventory[{index}]")
                for index, item in enumerate(shop_raw)
            ],
            last_shop_refresh_level=self._require_positive_int(
                data.get("last_shop_refresh_level", 1), f"{context}.last_shop_refresh_level"
            ),
            shop_refresh_level=self._require_positive_int(
                refreshes.get("level"), f"{context}.shop_refreshes.level"
            ),
            shop_refresh_count=self._require_non_negative_int(
                refreshes.get("count"), f"{context}.shop_refreshes.count"
            ),
            achievement_progress=self._coerce_int_dict(
                data.get("achievement_progress", {}), f"{context}.achievement_progress"
            ),
            claimed_achievements=self._coerce_str_list(
                data.get("claimed_achievements", []), f"{context}.claimed_achievements"
            ),
        )
        for counter in _COUNTERS:
            setattr(player, counter, self._require_non_negative_int(data.get(counter, 0), f"{context}.{counter}"))
        recompute(player)
        return player

    def _coerce_stats(self, value: Any, context: str) -> Stats:
        data = self._require_mapping(value, context)
        unknown = set(data) - set(STAT_ORDER)
        if unknown:
            raise SaveLoadError(f"{context} has unknown stats: {sorted(unknown)}.")
        return Stats.from_mapping(
            {name: self._require_int(amount, f"{context}.{name}") for name, amount in data.items()}
        )

    def _coerce_equipment(self, value: Any, context: str) -> Equipment:
        data = self._require_mapping(value, context)
        slot = self._require_str(data.get("slot"), f"{context}.slot")
        if slot not in GEAR_SLOTS:
            raise SaveLoadError(f"{context}.slot '{slot}' is unknown.")
        rarity = self._require_str(data.get("rarity"), f"{context}.rarity")
        if rarity not in _VALID_RARITIES:
            raise SaveLoadError(f"{context}.rarity '{rarity}' is unknown.")
        stats = self._coerce_int_dict(data.get("stats", {}), f"{context}.stats")
        unknown = set(stats) - set(STAT_ORDER)
        if unknown:
            raise SaveLoadError(f"{context}.stats has unknown stats: {sorted(unknown)}.")
        cost = data.get("cost")
        weapon_type = data.get("weapon_type")
        two_handed = data.get("two_handed", False)
        if not isinstance(two_handed, bool):
            raise SaveLoadError(f"{context}.two_handed must be a boolean.")
        return Equipment(
            name=self._require_str(data.get("name"), f"{context}.name"),
            slot=slot,
            icon=self._require_str(data.get("icon"), f"{context}.icon"),
            rarity=rarity,
            item_level=self._require_positive_int(data.get("item_level"), f"{context}.item_level"),
            stats=stats,
            cost=None if cost is None else self._require_non_negative_int(cost, f"{context}.cost"),
            weapon_type=None if weapon_type is None else self._require_str(weapon_type, f"{context}.weapon_type"),
            two_handed=two_handed,
        )

    @staticmethod
    def _require_mapping(value: Any, context: str) -> Mapping[str, Any]:
        if not isinstance(value, Mapping):
            raise SaveLoadError(f"{context} must be an object.")
        return value

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str):
            raise SaveLoadError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: Any, context: str) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise SaveLoadError(f"{context} must be an integer.")
        return value

    def _require_non_negative_int(self, value: Any, context: str) -> int:
        value_int = self._require_int(value, context)
        if value_int < 0:
            raise SaveLoadError(f"{context} must be a non-negative integer.")
        return value_int

    def _require_positive_int(self, value: Any, context: str) -> int:
        value_int = self._require_int(value, context)
        if value_int < 1:
            raise SaveLoadError(f"{context} must be a positive integer.")
        return value_int

    def _coerce_int_dict(self, value: Any, context: str) -> Dict[str, int]:
        data = self._require_mapping(value, context)
        return {str(key): self._require_int(amount, f"{context}[{key}]") for key, amount in data.items()}

    def _coerce_str_list(self, value: Any, context: str) -> List[str]:
        if not isinstance(value, list):
            raise SaveLoadError(f"{context} must be a list.")
        return [self._require_str(entry, f"{context}[{index}]") for index, entry in enumerate(value)]
