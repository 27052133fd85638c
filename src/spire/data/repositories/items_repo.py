"""Repository for item templates keyed by gear slot."""
from __future__ import annotations

from typing import Dict, List

from spire.core.types import GEAR_SLOTS
from spire.data.errors import DataReferenceError, DataValidationError
from spire.data.repositories.base import RepositoryBase
from spire.domain.defs import ItemTemplateDef
from spire.domain.entities import STAT_ORDER


class ItemTemplatesRepository(RepositoryBase[ItemTemplateDef]):
    """Loads item templates and indexes them by slot."""

    def __init__(self, base_path=None) -> None:
        super().__init__("item_templates.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ItemTemplateDef]:
        templates: Dict[str, ItemTemplateDef] = {}
        for raw_id, payload in raw.items():
            context = f"item template '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_required(data, {"name", "slot", "icon", "stat_pool"}, context)
            slot = self._require_str(data["slot"], f"{context} slot")
            if slot not in GEAR_SLOTS:
                raise DataReferenceError(f"{context} uses unknown slot '{slot}'.")
            stat_pool = self._require_str_list(data["stat_pool"], f"{context} stat_pool")
            if not stat_pool:
                raise DataValidationError(f"{context} stat_pool must not be empty.")
            for stat_name in stat_pool:
                if stat_name not in STAT_ORDER:
                    raise DataReferenceError(f"{context} references unknown stat '{stat_name}'.")
            weapon_type = data.get("weapon_type")
            templates[raw_id] = ItemTemplateDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                slot=slot,
                icon=self._require_str(data["icon"], f"{context} icon"),
                stat_pool=tuple(stat_pool),
                weapon_type=None if weapon_type is None else self._require_str(weapon_type, f"{context} weapon_type"),
                two_handed=self._require_bool(data.get("two_handed", False), f"{context} two_handed"),
            )
        return templates

    def for_slot(self, slot: str) -> List[ItemTemplateDef]:
        """Return templates for a slot in file order."""
        self._ensure_loaded()
        assert self._definitions is not None
        return [template for template in self._definitions.values() if template.slot == slot]

    def populated_slots(self) -> List[str]:
        """Return the gear slots that have at least one template, in gear-slot order."""
        self._ensure_loaded()
        assert self._definitions is not None
        used = {template.slot for template in self._definitions.values()}
        return [slot for slot in GEAR_SLOTS if slot in used]
