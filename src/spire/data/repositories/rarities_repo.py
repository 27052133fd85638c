"""Repository for rarity tiers, prefixes and stat weights."""
from __future__ import annotations

from typing import Dict, List

from spire.data.errors import DataReferenceError, DataValidationError
from spire.data.repositories.base import RepositoryBase
from spire.domain.defs import LootTierDef, ShopTierDef
from spire.domain.entities import STAT_ORDER

_RARITIES = ("Common", "Uncommon", "Rare", "Epic")


class RaritiesRepository(RepositoryBase[LootTierDef]):
    """Loads rarities.json. ``get``/``all`` expose the loot tiers keyed by rarity."""

    def __init__(self, base_path=None) -> None:
        super().__init__("rarities.json", base_path)
        self._stat_weights: Dict[str, float] = {}
        self._loot_tiers: List[LootTierDef] = []
        self._shop_tiers: List[ShopTierDef] = []

    def _build(self, raw: dict[str, object]) -> Dict[str, LootTierDef]:
        self._assert_required(raw, {"stat_weights", "loot_tiers", "shop_tiers"}, "rarities.json")
        weights_raw = self._require_mapping(raw["stat_weights"], "rarities.json stat_weights")
        weights: Dict[str, float] = {}
        for stat_name in STAT_ORDER:
            if stat_name not in weights_raw:
                raise DataReferenceError(f"rarities.json is missing a weight for '{stat_name}'.")
            weight = self._require_number(weights_raw[stat_name], f"stat_weights.{stat_name}")
            if weight <= 0:
                raise DataValidationError(f"stat_weights.{stat_name} must be positive.")
            weights[stat_name] = weight
        self._stat_weights = weights

        loot_tiers: List[LootTierDef] = []
        for index, entry in enumerate(self._require_list(raw["loot_tiers"], "loot_tiers")):
            context = f"loot_tiers[{index}]"
            data = self._require_mapping(entry, context)
            self._assert_required(data, {"rarity", "roll_below", "prefixes", "budget_base", "budget_divisor"}, context)
            divisor = self._require_int(data["budget_divisor"], f"{context}.budget_divisor")
            if divisor <= 0:
                raise DataValidationError(f"{context}.budget_divisor must be positive.")
            loot_tiers.append(
                LootTierDef(
                    rarity=self._require_rarity(data["rarity"], f"{context}.rarity"),
                    roll_below=self._require_number(data["roll_below"], f"{context}.roll_below"),
                    prefixes=self._require_prefixes(data["prefixes"], f"{context}.prefixes"),
                    budget_base=self._require_int(data["budget_base"], f"{context}.budget_base"),
                    budget_divisor=divisor,
                )
            )
        self._validate_thresholds([tier.roll_below for tier in loot_tiers], "loot_tiers")
        self._loot_tiers = loot_tiers

        shop_tiers: List[ShopTierDef] = []
        for index, entry in enumerate(self._require_list(raw["shop_tiers"], "shop_tiers")):
            context = f"shop_tiers[{index}]"
            data = self._require_mapping(entry, context)
            self._assert_required(
                data, {"rarity", "roll_below", "prefixes", "budget_min_mult", "budget_max_mult"}, context
            )
            min_mult = self._require_number(data["budget_min_mult"], f"{context}.budget_min_mult")
            max_mult = self._require_number(data["budget_max_mult"], f"{context}.budget_max_mult")
            if min_mult > max_mult:
                raise DataValidationError(f"{context} budget multiplier range invalid.")
            shop_tiers.append(
                ShopTierDef(
                    rarity=self._require_rarity(data["rarity"], f"{context}.rarity"),
                    roll_below=self._require_number(data["roll_below"], f"{context}.roll_below"),
                    prefixes=self._require_prefixes(data["prefixes"], f"{context}.prefixes"),
                    budget_min_mult=min_mult,
                    budget_max_mult=max_mult,
                )
            )
        self._validate_thresholds([tier.roll_below for tier in shop_tiers], "shop_tiers")
        self._shop_tiers = shop_tiers
        return {tier.rarity: tier for tier in loot_tiers}

    def stat_weight(self, stat_name: str) -> float:
        self._ensure_loaded()
        return self._stat_weights[stat_name]

    def loot_tiers(self) -> List[LootTierDef]:
        """Return loot tiers ordered by ascending roll threshold."""
        self._ensure_loaded()
        return list(self._loot_tiers)

    def shop_tiers(self) -> List[ShopTierDef]:
        """Return shop tiers ordered by ascending roll threshold."""
        self._ensure_loaded()
        return list(self._shop_tiers)

    def _require_rarity(self, value: object, context: str) -> str:
        rarity = self._require_str(value, context)
        if rarity not in _RARITIES:
            raise DataValidationError(f"{context} must be one of {list(_RARITIES)}.")
        return rarity

    def _require_prefixes(self, value: object, context: str) -> tuple[str, ...]:
        prefixes = self._require_str_list(value, context)
        if not prefixes:
            raise DataValidationError(f"{context} must not be empty.")
        return tuple(prefixes)

    @staticmethod
    def _validate_thresholds(thresholds: List[float], context: str) -> None:
        if not thresholds:
            raise DataValidationError(f"{context} must not be empty.")
        if thresholds != sorted(thresholds) or thresholds[-1] != 1.0:
            raise DataValidationError(f"{context} thresholds must ascend and end at 1.0.")
