"""Classes repository with reference validation."""
from __future__ import annotations

from typing import Dict

from spire.core.types import GEAR_SLOTS
from spire.data.errors import DataReferenceError, DataValidationError
from spire.data.repositories.base import RepositoryBase
from spire.domain.defs import ClassDef, StarterItemDef
from spire.domain.entities import STAT_ORDER


class ClassesRepository(RepositoryBase[ClassDef]):
    """Loads classes and ensures base stats and starter gear reference known stats and slots."""

    def __init__(self, base_path=None) -> None:
        super().__init__("classes.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ClassDef]:
        classes: Dict[str, ClassDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Class IDs must be strings.")
            context = f"class '{raw_id}'"
            class_data = self._require_mapping(payload, context)
            self._assert_required(
                class_data,
                {"name", "description", "icon", "base_stats", "allowed_weapon_types", "starting_weapon"},
                context,
            )
            weapon_data = self._require_mapping(class_data["starting_weapon"], f"{context} starting_weapon")
            self._assert_required(weapon_data, {"name", "slot", "icon", "stats"}, f"{context} starting_weapon")
            slot = self._require_str(weapon_data["slot"], f"{context} starting_weapon.slot")
            if slot not in GEAR_SLOTS:
                raise DataReferenceError(f"{context} starting weapon uses unknown slot '{slot}'.")
            weapon_type = weapon_data.get("weapon_type")

            classes[raw_id] = ClassDef(
                id=raw_id,
                name=self._require_str(class_data["name"], f"{context} name"),
                description=self._require_str(class_data["description"], f"{context} description"),
                icon=self._require_str(class_data["icon"], f"{context} icon"),
                base_stats=self._require_stat_map(class_data["base_stats"], f"{context} base_stats"),
                allowed_weapon_types=tuple(
                    self._require_str_list(class_data["allowed_weapon_types"], f"{context} allowed_weapon_types")
                ),
                starting_weapon=StarterItemDef(
                    name=self._require_str(weapon_data["name"], f"{context} starting_weapon.name"),
                    slot=slot,
                    icon=self._require_str(weapon_data["icon"], f"{context} starting_weapon.icon"),
                    stats=self._require_stat_map(weapon_data["stats"], f"{context} starting_weapon.stats"),
                    weapon_type=(
                        None
                        if weapon_type is None
                        else self._require_str(weapon_type, f"{context} starting_weapon.weapon_type")
                    ),
                    two_handed=self._require_bool(
                        weapon_data.get("two_handed", False), f"{context} starting_weapon.two_handed"
                    ),
                ),
            )
        return classes

    def _require_stat_map(self, value: object, context: str) -> Dict[str, int]:
        mapping = self._require_mapping(value, context)
        stats: Dict[str, int] = {}
        for stat_name, amount in mapping.items():
            if stat_name not in STAT_ORDER:
                raise DataReferenceError(f"{context} references unknown stat '{stat_name}'.")
            stats[stat_name] = self._require_int(amount, f"{context}.{stat_name}")
        return stats
