import json
from pathlib import Path

import pytest

from spire.data import paths
from spire.data.errors import DataLoadError, DataReferenceError, DataValidationError
from spire.data.repositories import (
    AchievementsRepository,
    ClassesRepository,
    EnemiesRepository,
    ItemTemplatesRepository,
    RaritiesRepository,
)

_SLIME = {"name": "Slime", "icon": "s", "max_hp": 20, "attack": 5, "defense": 2, "evasion": 0, "xp_reward": 10}
_BOSS = {
    "name": "Boss",
    "icon": "b",
    "max_hp": 150,
    "attack": 18,
    "defense": 8,
    "evasion": 5,
    "xp_reward": 100,
    "is_boss": True,
}


def test_bundled_definitions_load() -> None:
    assert {cls.id for cls in ClassesRepository().all()} == {"mage", "rogue", "warrior"}
    enemies = EnemiesRepository()
    assert enemies.boss_template().id == "goblin_champion"
    assert [enemy.id for enemy in enemies.regular_templates()] == ["bat", "goblin", "slime"]
    assert len(AchievementsRepository().in_display_order()) == 8
    assert ItemTemplatesRepository().populated_slots()[0] == "main_hand"


def test_bundled_rarity_tiers_are_ordered() -> None:
    repo = RaritiesRepository()
    assert [tier.rarity for tier in repo.loot_tiers()] == ["Common", "Uncommon", "Rare", "Epic"]
    assert [tier.rarity for tier in repo.shop_tiers()] == ["Common", "Uncommon", "Rare"]
    assert repo.stat_weight("max_hp") == 5
    assert repo.stat_weight("evasion") == 0.4


def test_warrior_starter_is_one_handed_sword() -> None:
    warrior = ClassesRepository().get("warrior")
    assert warrior.starting_weapon.slot == "main_hand"
    assert warrior.starting_weapon.stats == {"block_chance": 5}
    assert not warrior.starting_weapon.two_handed


def test_enemies_repo_get_missing_raises(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "enemies.json", {"slime": _SLIME, "boss": _BOSS})
    repo = EnemiesRepository(base_path=definitions_dir)
    with pytest.raises(KeyError):
        repo.get("dragon")


def test_enemies_repo_requires_exactly_one_boss(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "enemies.json",
        {"slime": _SLIME, "boss": _BOSS, "second_boss": dict(_BOSS, name="Other")},
    )
    with pytest.raises(DataValidationError):
        EnemiesRepository(base_path=definitions_dir).all()


def test_enemies_repo_rejects_wrong_type(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "enemies.json", {"slime": dict(_SLIME, attack="five"), "boss": _BOSS})
    with pytest.raises(DataValidationError):
        EnemiesRepository(base_path=definitions_dir).all()


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    with pytest.raises(DataLoadError):
        ClassesRepository(base_path=definitions_dir).all()


def test_invalid_json_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    (definitions_dir / "enemies.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(DataLoadError):
        EnemiesRepository(base_path=definitions_dir).all()


def test_classes_repo_rejects_unknown_stat(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "classes.json",
        {
            "monk": {
                "name": "Monk",
                "description": "Fists.",
                "icon": "fist",
                "base_stats": {"strength": 5, "luck": 3},
                "allowed_weapon_types": [],
                "starting_weapon": {"name": "Wraps", "slot": "gloves", "icon": "wraps", "stats": {}},
            }
        },
    )
    with pytest.raises(DataReferenceError):
        ClassesRepository(base_path=definitions_dir).all()


def test_item_templates_reject_unknown_slot(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "item_templates.json",
        {"tail_ring": {"name": "Tail Ring", "slot": "tail", "icon": "ring", "stat_pool": ["strength"]}},
    )
    with pytest.raises(DataReferenceError):
        ItemTemplatesRepository(base_path=definitions_dir).all()


def test_rarity_thresholds_must_end_at_one(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    payload = json.loads((paths.get_definitions_path() / "rarities.json").read_text(encoding="utf-8"))
    payload["loot_tiers"][-1]["roll_below"] = 0.99
    _write_json(definitions_dir / "rarities.json", payload)
    with pytest.raises(DataValidationError):
        RaritiesRepository(base_path=definitions_dir).loot_tiers()


def test_achievements_reject_unknown_slay_target(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "enemies.json", {"slime": _SLIME, "boss": _BOSS})
    (definitions_dir / "achievements.json").write_text(
        json.dumps(
            [
                {
                    "id": "quest_slay_dragons",
                    "title": "Dragon Slayer",
                    "description": "Defeat a dragon.",
                    "type": "slay",
                    "target_id": "dragon",
                    "goal": 1,
                    "rewards": {"shards": 10},
                }
            ]
        ),
        encoding="utf-8",
    )
    with pytest.raises(DataReferenceError):
        AchievementsRepository(base_path=definitions_dir).all()


def test_achievements_keep_file_order(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "enemies.json", {"slime": _SLIME, "boss": _BOSS})
    entries = [
        {"id": "z_floor", "title": "Z", "description": "z", "type": "reach_floor", "goal": 3, "rewards": {}},
        {"id": "a_slime", "title": "A", "description": "a", "type": "slay", "target_id": "slime", "goal": 2,
         "rewards": {"potions": 1}},
    ]
    (definitions_dir / "achievements.json").write_text(json.dumps(entries), encoding="utf-8")

    repo = AchievementsRepository(base_path=definitions_dir)

    assert [achievement.id for achievement in repo.in_display_order()] == ["z_floor", "a_slime"]
    assert repo.get("a_slime").rewards.potions == 1
    assert repo.get("z_floor").rewards.shards == 0


def _write_json(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _make_definitions_dir(tmp_path: Path) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    return definitions_dir
