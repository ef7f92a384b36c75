# tests/test_ambient.py
from dataclasses import replace

from memorymaze.config import PROCGEN
from memorymaze.items import CATALOGUE, ItemDef, by_id
from memorymaze.mapgen.ambient import AmbientRoller, resolve_item
from memorymaze.tiles import FLOOR, WALL, tile_key

ALL_FLOOR = lambda x, y: FLOOR
ALL_WALL = lambda x, y: WALL


def test_shares_are_normalised():
    roller = AmbientRoller(CATALOGUE)
    assert abs(sum(roller.shares) - 1.0) < 1e-9
    assert roller.bounds == sorted(roller.bounds)
    assert abs(roller.bounds[-1] - 1.0) < 1e-9


def test_pick_uses_catalogue_order():
    roller = AmbientRoller(CATALOGUE)
    assert roller.pick(0.0) is CATALOGUE[0]
    assert roller.pick(roller.bounds[0]) is CATALOGUE[0]
    assert roller.pick(roller.bounds[0] + 1e-9) is CATALOGUE[1]
    assert roller.pick(roller.bounds[10]) is CATALOGUE[10]
    assert roller.pick(1.5) is None


def test_single_item_table_always_rolls_it():
    only = ItemDef(id="coin", emoji="", name="coin", score=1, rarity=3.0)
    roller = AmbientRoller([only], replace(PROCGEN, spawn_chance=1.0))
    for tx in range(-5, 5):
        for ty in range(-5, 5):
            assert roller.roll(tx, ty, 77) is only


def test_spawn_rate_is_sparse():
    roller = AmbientRoller(CATALOGUE)
    hits = sum(
        1 for tx in range(-40, 40) for ty in range(-40, 40)
        if roller.roll(tx, ty, 42) is not None
    )
    assert 0.02 < hits / 6400 < 0.2


def test_resolution_order():
    roller = AmbientRoller(CATALOGUE)
    gpu = by_id(CATALOGUE)["gpu"]
    reserved = {tile_key(3, 4): gpu}
    kw = dict(reserved=reserved, roller=roller)

    assert resolve_item(3, 4, 1, classify=ALL_FLOOR, collected=set(), **kw) is gpu
    assert resolve_item(3, 4, 1, classify=ALL_FLOOR, collected={tile_key(3, 4)}, **kw) is None
    assert resolve_item(3, 4, 1, classify=ALL_WALL, collected=set(), **kw) is None


def test_resolution_is_idempotent():
    roller = AmbientRoller(CATALOGUE)
    for tx in range(-20, 20):
        for ty in range(-20, 20):
            a = resolve_item(tx, ty, 9, classify=ALL_FLOOR, reserved={}, collected=(), roller=roller)
            b = resolve_item(tx, ty, 9, classify=ALL_FLOOR, reserved={}, collected=(), roller=roller)
            assert a is b
            assert a is roller.roll(tx, ty, 9)
