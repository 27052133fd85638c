from __future__ import annotations

from tests.helpers.builders import make_achievement_service, make_player


def test_slay_progress_counts_only_matching_enemy() -> None:
    service = make_achievement_service()
    player = make_player()
    for _ in range(3):
        service.record_kill(player, "bat")
    service.record_kill(player, "slime")

    assert service.progress(player, "quest_slay_20_bats") == 3
    assert service.progress(player, "quest_slay_25_slimes") == 1
    assert service.progress(player, "quest_slay_10_goblins") == 0


def test_floor_progress_keeps_maximum() -> None:
    service = make_achievement_service()
    player = make_player()
    service.record_floor(player, 12)
    service.record_floor(player, 4)

    assert service.progress(player, "quest_reach_floor_10") == 12
    assert service.progress(player, "quest_reach_floor_25") == 12


def test_claim_grants_shards_and_capped_potions_once() -> None:
    service = make_achievement_service()
    player = make_player()
    player.potion_count = 4
    player.achievement_progress["quest_slay_3_champions"] = 3

    event = service.claim(player, "quest_slay_3_champions")

    assert event is not None
    assert event.shards == 300
    assert event.potions == 1
    assert player.eternal_shards == 300
    assert player.total_lifetime_shards == 300
    assert player.potion_count == 5
    assert service.claim(player, "quest_slay_3_champions") is None
    assert player.eternal_shards == 300


def test_claim_requires_goal() -> None:
    service = make_achievement_service()
    player = make_player()
    player.achievement_progress["quest_slay_10_goblins"] = 9

    assert service.claim(player, "quest_slay_10_goblins") is None
    assert player.claimed_achievements == []


def test_buffs_and_unknown_ids_cannot_be_claimed() -> None:
    service = make_achievement_service()
    player = make_player()
    player.level = 9

    assert service.claim(player, "buff_level_5") is None
    assert service.claim(player, "no_such_achievement") is None


def test_views_follow_display_order_and_flags() -> None:
    service = make_achievement_service()
    player = make_player()
    player.level = 6
    player.achievement_progress["quest_reach_floor_10"] = 14
    player.claimed_achievements.append("quest_reach_floor_10")

    views = {view.id: view for view in service.build_views(player)}
    ordered_ids = [view.id for view in service.build_views(player)]

    assert ordered_ids[:2] == ["buff_level_5", "buff_level_8"]
    assert views["buff_level_5"].is_complete
    assert not views["buff_level_5"].can_claim
    assert not views["buff_level_8"].is_complete
    assert views["quest_reach_floor_10"].progress == 10
    assert views["quest_reach_floor_10"].is_claimed
    assert not views["quest_reach_floor_10"].can_claim
