#!/usr/bin/env python3
import argparse, csv, logging, sys

from memorymaze.engine.state import World
from memorymaze.grid import TileWindow
from memorymaze.items import by_id
from memorymaze.tiles import parse_tile_key


def write_tsv(mat, out, include_header=False):
    w = csv.writer(out, delimiter='\t', lineterminator='\n')
    if include_header:
        w.writerow(list(range(len(mat[0]))))
    for r in mat:
        w.writerow(r)


def make_world(args):
    world = World(seed=args.seed, base_seed=args.base_seed)
    if args.level != 1:
        world.reset(args.level, seed=args.seed)
    return world


def cmd_emit(args):
    world = make_world(args)
    win = TileWindow.capture(world.classify, args.x, args.y, args.width, args.height)
    if args.text:
        print(win.as_text())
        return
    if args.out == '-':
        write_tsv(win.as_matrix(), sys.stdout, include_header=args.header)
        return
    with open(args.out, 'w', newline='') as f:
        write_tsv(win.as_matrix(), f, include_header=args.header)
    print(f"Wrote {args.out}")


def cmd_plan(args):
    world = make_world(args)
    plan = world.plan
    wanted = None
    if args.item:
        known = by_id(world.catalogue)
        if args.item not in known:
            raise SystemExit(f"unknown item id {args.item!r}")
        wanted = known[args.item]
    sx, sy = world.spawn_tile
    print(f"seed={world.level_seed} spawn=({sx},{sy}) candidates={plan.candidates}")
    for key, item in world.reservations.items():
        if wanted is not None and item is not wanted:
            continue
        tx, ty = parse_tile_key(key)
        print(f"{item.id:14s} ({tx},{ty})\t{plan.tier_of(item.id).value}")
    for item in plan.unplaced:
        if wanted is None or item is wanted:
            print(f"{item.id:14s} UNPLACED")


def main():
    p = argparse.ArgumentParser(description="Inspect generated mazes and item plans")
    p.add_argument('-v', '--verbose', action='store_true')
    seeds = p.add_mutually_exclusive_group()
    seeds.add_argument('--seed', type=int, default=None, help='explicit level seed')
    seeds.add_argument('--base-seed', type=int, default=1, help='base seed for the per-level stream')
    p.add_argument('--level', type=int, default=1)
    sub = p.add_subparsers(dest='cmd', required=True)

    p1 = sub.add_parser('emit', help='dump a tile window (0=floor, 1=wall)')
    p1.add_argument('--x', type=int, default=-10)
    p1.add_argument('--y', type=int, default=-6)
    p1.add_argument('--width', type=int, default=20)
    p1.add_argument('--height', type=int, default=12)
    p1.add_argument('--out', type=str, default='-')
    p1.add_argument('--header', action='store_true')
    p1.add_argument('--text', action='store_true', help='ASCII art instead of TSV')
    p1.set_defaults(func=cmd_emit)

    p2 = sub.add_parser('plan', help='print guaranteed item placements')
    p2.add_argument('--item', type=str, default=None, help='only show this item id')
    p2.set_defaults(func=cmd_plan)

    args = p.parse_args()
    if args.level < 1:
        raise SystemExit("--level must be >= 1")
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    args.func(args)


if __name__ == '__main__':
    main()
