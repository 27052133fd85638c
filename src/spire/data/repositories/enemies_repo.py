"""Enemies repository."""
from __future__ import annotations

from typing import Dict, List

from spire.data.errors import DataValidationError
from spire.data.repositories.base import RepositoryBase
from spire.domain.defs import EnemyDef


class EnemiesRepository(RepositoryBase[EnemyDef]):
    """Loads and validates enemy templates."""

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyDef]:
        enemies: Dict[str, EnemyDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Enemy IDs must be strings.")
            context = f"enemy '{raw_id}'"
            enemy_data = self._require_mapping(payload, context)
            required_fields = {"name", "icon", "max_hp", "attack", "defense", "evasion", "xp_reward"}
            self._assert_required(enemy_data, required_fields, context)

            max_hp = self._require_int(enemy_data["max_hp"], f"{context} max_hp")
            if max_hp <= 0:
                raise DataValidationError(f"{context} max_hp must be positive.")
            enemies[raw_id] = EnemyDef(
                id=raw_id,
                name=self._require_str(enemy_data["name"], f"{context} name"),
                icon=self._require_str(enemy_data["icon"], f"{context} icon"),
                max_hp=max_hp,
                attack=self._require_int(enemy_data["attack"], f"{context} attack"),
                defense=self._require_int(enemy_data["defense"], f"{context} defense"),
                evasion=self._require_int(enemy_data["evasion"], f"{context} evasion"),
                xp_reward=self._require_int(enemy_data["xp_reward"], f"{context} xp_reward"),
                is_boss=self._require_bool(enemy_data.get("is_boss", False), f"{context} is_boss"),
            )
        bosses = [enemy for enemy in enemies.values() if enemy.is_boss]
        if len(bosses) != 1:
            raise DataValidationError("enemies.json must define exactly one boss template.")
        if not any(not enemy.is_boss for enemy in enemies.values()):
            raise DataValidationError("enemies.json must define at least one regular template.")
        return enemies

    def regular_templates(self) -> List[EnemyDef]:
        """Return the non-boss templates in deterministic order."""
        return [enemy for enemy in self.all() if not enemy.is_boss]

    def boss_template(self) -> EnemyDef:
        return next(enemy for enemy in self.all() if enemy.is_boss)
