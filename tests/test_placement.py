# tests/test_placement.py
from dataclasses import replace

from memorymaze.config import PLACEMENT
from memorymaze.items import ItemDef
from memorymaze.mapgen.placement import (
    Tier, collect_floor_tiles, distance, plan_placements, score_tile, seeded_shuffle, weighted_index,
)


def _item(item_id):
    return ItemDef(id=item_id, emoji="", name=item_id, score=10, rarity=1.0)


def _floor(tiles):
    tiles = set(tiles)
    return lambda x, y: (x, y) in tiles


def test_distance():
    assert distance(0, 0, 3, 4) == 7
    assert distance(0, 0, 3, 4, euclidean=True) == 5.0
    assert distance(-2, 5, -2, 5) == 0


def test_collect_floor_tiles_ring_order():
    cfg = replace(PLACEMENT, min_from_spawn=0)
    tiles = collect_floor_tiles(5, 10, lambda x, y: True, (0, 0), cfg)
    assert tiles == [(0, 0), (-1, -1), (-1, 1), (0, -1), (0, 1)]


def test_collect_floor_tiles_respects_spawn_window():
    cfg = replace(PLACEMENT, min_from_spawn=2, max_from_spawn=3)
    tiles = collect_floor_tiles(1000, 6, lambda x, y: True, (0, 0), cfg)
    assert tiles
    assert all(2 <= abs(x) + abs(y) <= 3 for x, y in tiles)
    assert len(tiles) == len(set(tiles)) == 20


def test_seeded_shuffle_is_a_deterministic_permutation():
    tiles = [(x, 0) for x in range(30)]
    a = seeded_shuffle(tiles, 42)
    assert a == seeded_shuffle(tiles, 42)
    assert sorted(a) == tiles
    assert tiles == [(x, 0) for x in range(30)]
    assert a != seeded_shuffle(tiles, 43)


def test_weighted_index_in_range():
    for seed in range(500):
        assert 0 <= weighted_index(seed, 7) < 7
        assert weighted_index(seed, 1) == 0


def test_score_tile():
    cfg = replace(PLACEMENT, min_from_spawn=0, max_from_spawn=10)
    floor = lambda x, y: True
    # ideal spawn distance is 5
    assert score_tile((5, 0), (0, 0), set(), [], [], 4, floor, cfg) == 200
    assert score_tile((0, 0), (0, 0), set(), [], [], 4, floor, cfg) == 190
    assert score_tile((5, 0), (0, 0), {(5, 0)}, [], [], 4, floor, cfg) == 0
    assert score_tile((11, 0), (0, 0), set(), [], [], 4, floor, cfg) == 0
    assert score_tile((5, 0), (0, 0), set(), [], [(6, 0)], 4, floor, cfg) == 0
    assert score_tile((5, 0), (0, 0), set(), [], [], 4, lambda x, y: False, cfg) == 0
    # nearest same-type 5 away, mean placed distance 5
    assert score_tile((5, 0), (0, 0), set(), [(10, 0)], [(10, 0)], 4, floor, cfg) == 200 + 25 + 10


def test_all_targets_placed_on_open_ground():
    room = [(x, y) for x in range(20) for y in range(10)]
    cfg = replace(PLACEMENT, min_same_type=0, min_from_spawn=0, harvest_radius=30, harvest_radius_cap=40)
    targets = [_item("a"), _item("b"), _item("c")]
    plan = plan_placements(targets, _floor(room), (0, 0), 42, cfg)

    assert not plan.unplaced
    assert [p.item.id for p in plan.placements] == ["a", "b", "c"]
    assert all(p.tier is Tier.PRIMARY for p in plan.placements)
    tiles = [p.tile for p in plan.placements]
    assert len(set(tiles)) == 3
    assert set(tiles) <= set(room)


def test_plan_is_deterministic():
    room = [(x, y) for x in range(-15, 15) for y in range(-15, 15) if (x + y) % 3]
    targets = [_item(c) for c in "abcdef"]
    a = plan_placements(targets, _floor(room), (0, 0), 7)
    b = plan_placements(targets, _floor(room), (0, 0), 7)
    assert a.reservations == b.reservations
    assert len(a.placements) == 6


def test_starved_map_terminates_and_reports():
    calls = []

    def is_floor(x, y):
        calls.append((x, y))
        return (x, y) in ((1, 0), (0, 1))

    cfg = replace(PLACEMENT, min_from_spawn=0, harvest_radius=5, harvest_radius_step=5, harvest_radius_cap=15)
    targets = [_item(c) for c in "vwxyz"]
    plan = plan_placements(targets, is_floor, (0, 0), 3, cfg)

    assert len(plan.placements) == 2
    assert [i.id for i in plan.unplaced] == ["x", "y", "z"]
    assert {p.tile for p in plan.placements} == {(1, 0), (0, 1)}
    assert len(calls) < 10000


def test_nothing_harvested_means_nothing_placed():
    cfg = replace(PLACEMENT, harvest_radius=4, harvest_radius_cap=4)
    plan = plan_placements([_item("a")], lambda x, y: (x, y) == (1, 0), (0, 0), 1, cfg)
    assert plan.candidates == 0
    assert not plan.placements
    assert [i.id for i in plan.unplaced] == ["a"]


def test_relaxed_tier_loosens_same_type_distance():
    # two copies of one item, candidates 3 apart: too close for 4, fine for 2
    cfg = replace(PLACEMENT, min_from_spawn=2, harvest_radius=10, harvest_radius_cap=10)
    a = _item("a")
    plan = plan_placements([a, a], _floor([(5, 0), (8, 0)]), (0, 0), 11, cfg)
    assert [p.tier for p in plan.placements] == [Tier.PRIMARY, Tier.RELAXED]
    assert not plan.unplaced


def test_final_tier_when_relaxing_disabled():
    cfg = replace(PLACEMENT, relax_on_failure=False, harvest_radius=10, harvest_radius_cap=10)
    a = _item("a")
    plan = plan_placements([a, a], _floor([(5, 0), (7, 0)]), (0, 0), 11, cfg)
    assert [p.tier for p in plan.placements] == [Tier.PRIMARY, Tier.FINAL]


def test_same_type_too_close_everywhere_is_unplaced():
    cfg = replace(PLACEMENT, harvest_radius=10, harvest_radius_cap=10)
    a = _item("a")
    plan = plan_placements([a, a], _floor([(5, 0), (6, 0)]), (0, 0), 11, cfg)
    assert len(plan.placements) == 1
    assert plan.unplaced == [a]
    assert plan.tier_of("a") is Tier.PRIMARY
    assert plan.tiers == {"a": Tier.PRIMARY}


def test_no_targets():
    plan = plan_placements([], lambda x, y: True, (0, 0), 1)
    assert plan.placements == [] and plan.unplaced == []


def test_euclidean_spawn_window_and_spacing():
    # (3,4) is 5 away in a straight line but 7 by Manhattan distance
    floor = _floor([(3, 4), (0, 5), (4, 4), (1, 0)])
    a = _item("a")
    common = dict(min_from_spawn=2, max_from_spawn=5, harvest_radius=10, harvest_radius_cap=10)

    plan = plan_placements([a, a], floor, (0, 0), 11, replace(PLACEMENT, use_euclidean=True, **common))
    assert {p.tile for p in plan.placements} == {(3, 4), (0, 5)}
    # the two copies sit ~3.16 apart: under 4, so the second one is relaxed
    assert [p.tier for p in plan.placements] == [Tier.PRIMARY, Tier.RELAXED]

    plan = plan_placements([a, a], floor, (0, 0), 11, replace(PLACEMENT, **common))
    assert [p.tile for p in plan.placements] == [(0, 5)]
    assert plan.unplaced == [a]


def test_attempt_budget_capped_by_candidates():
    room = [(x, y) for x in range(-12, 12) for y in range(-12, 12) if (x * y) % 4]
    targets = [_item(c) for c in "abcdefgh"] + [_item("a"), _item("b")]
    base = plan_placements(targets, _floor(room), (0, 0), 5)
    # ten targets harvest about 40 candidates
    for attempts, relaxed in [(10**9, 10**9), (2000, 3000), (48, 48)]:
        cfg = replace(PLACEMENT, max_attempts=attempts, relaxed_attempts=relaxed)
        plan = plan_placements(targets, _floor(room), (0, 0), 5, cfg)
        assert plan.reservations == base.reservations
