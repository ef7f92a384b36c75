#!/usr/bin/env python3
# Render a window of the generated maze to a PNG using Pillow.
# Floor/wall as flat colours, items as dots (reserved targets get a ring).

import argparse, os
from PIL import Image, ImageDraw

from memorymaze.engine.state import World
from memorymaze.grid import TileWindow
from memorymaze.render.colors import RESERVED_RING, SPAWN_COLOR, item_color, tile_color
from memorymaze.tiles import tile_key


def render_window(world, x0, y0, width, height, out_png, tile_size=16, items=True):
    win = TileWindow.capture(world.classify, x0, y0, width, height)
    canvas = Image.new("RGBA", (width * tile_size, height * tile_size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(canvas)
    for y in range(height):
        for x in range(width):
            tx, ty = x0 + x, y0 + y
            box = (x * tile_size, y * tile_size, (x + 1) * tile_size - 1, (y + 1) * tile_size - 1)
            draw.rectangle(box, fill=tile_color(win.get(tx, ty)))
            if (tx, ty) == world.spawn_tile:
                draw.rectangle(box, outline=SPAWN_COLOR, width=2)
            if not items:
                continue
            item = world.item_at(tx, ty)
            if item is None:
                continue
            pad = tile_size // 4
            dot = (box[0] + pad, box[1] + pad, box[2] - pad, box[3] - pad)
            draw.ellipse(dot, fill=item_color(item))
            if tile_key(tx, ty) in world.reservations:
                draw.ellipse(box, outline=RESERVED_RING, width=2)
    out_dir = os.path.dirname(out_png)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    canvas.save(out_png)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=None, help="explicit level seed")
    ap.add_argument("--base-seed", type=int, default=1, help="base seed for the per-level stream")
    ap.add_argument("--levels", type=int, default=1, help="render levels 1..N")
    ap.add_argument("--radius", type=int, default=40, help="half-size of the window in tiles")
    ap.add_argument("--outdir", type=str, default="out/png", help="Where to write PNGs")
    ap.add_argument("--tile", type=int, default=8, help="Tile size in pixels")
    ap.add_argument("--no-items", action="store_true")
    args = ap.parse_args()
    if args.levels < 1 or args.radius < 1:
        raise SystemExit("--levels and --radius must be >= 1")

    world = World(seed=args.seed, base_seed=args.base_seed)
    size = 2 * args.radius
    for lvl in range(1, args.levels + 1):
        if lvl > 1:
            world.reset(lvl, seed=args.seed)
        png = os.path.join(args.outdir, f"{lvl:02d}.png")
        render_window(world, -args.radius, -args.radius, size, size, png,
                      tile_size=args.tile, items=not args.no_items)
    print(f"Wrote PNGs to {args.outdir}")


if __name__ == "__main__":
    main()
