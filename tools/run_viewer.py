#!/usr/bin/env python3
# Minimal interactive viewer for generated mazes (no gameplay).
# - Arrow keys / WASD: scroll one tile (hold SHIFT for a macro cell)
# - R: next level (new seed), C: recentre on spawn
# - G: toggle item overlay
# - 60 Hz fixed loop

import argparse, logging
import pygame

from memorymaze.engine.state import World
from memorymaze.render.colors import SPAWN_COLOR
from memorymaze.render.tileset import Tileset
from memorymaze.tiles import tile_key


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=None, help="explicit level seed")
    ap.add_argument("--base-seed", type=int, default=None, help="base seed for the per-level stream")
    ap.add_argument("--tile", type=int, default=24, help="Tile size in pixels")
    ap.add_argument("--cols", type=int, default=40)
    ap.add_argument("--rows", type=int, default=24)
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    world = World(seed=args.seed, base_seed=args.base_seed)

    pygame.init()
    clock = pygame.time.Clock()
    screen = pygame.display.set_mode((args.cols * args.tile, args.rows * args.tile))
    tiles = Tileset(args.tile)
    font = pygame.font.SysFont("Consolas", 14)

    def centred_on_spawn():
        sx, sy = world.spawn_tile
        return sx - args.cols // 2, sy - args.rows // 2

    ox, oy = centred_on_spawn()
    show_items = True
    running = True
    while running:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                step = world.procgen.cell_size if (ev.mod & pygame.KMOD_SHIFT) else 1
                if ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.key in (pygame.K_LEFT, pygame.K_a):
                    ox -= step
                elif ev.key in (pygame.K_RIGHT, pygame.K_d):
                    ox += step
                elif ev.key in (pygame.K_UP, pygame.K_w):
                    oy -= step
                elif ev.key in (pygame.K_DOWN, pygame.K_s):
                    oy += step
                elif ev.key == pygame.K_r:
                    world.reset(world.level + 1, seed=None if args.seed is None else args.seed + world.level)
                    ox, oy = centred_on_spawn()
                elif ev.key == pygame.K_c:
                    ox, oy = centred_on_spawn()
                elif ev.key == pygame.K_g:
                    show_items = not show_items

        screen.fill((0, 0, 0))
        for y in range(args.rows):
            for x in range(args.cols):
                tx, ty = ox + x, oy + y
                pos = (x * args.tile, y * args.tile)
                screen.blit(tiles.tile(world.classify(tx, ty)), pos)
                if not show_items:
                    continue
                item = world.item_at(tx, ty)
                if item is not None:
                    screen.blit(tiles.item(item, tile_key(tx, ty) in world.reservations), pos)

        sx, sy = world.spawn_tile
        spawn_rect = pygame.Rect((sx - ox) * args.tile, (sy - oy) * args.tile, args.tile, args.tile)
        pygame.draw.rect(screen, SPAWN_COLOR, spawn_rect, 2)

        dbg = (
            f"level {world.level} seed {world.level_seed}  view=({ox},{oy})  "
            f"targets {len(world.targets)}/{len(world.target_pool)}"
        )
        screen.blit(font.render(dbg, True, (255, 255, 0)), (4, args.rows * args.tile - 18))
        pygame.display.set_caption(f"memorymaze viewer - level {world.level}")
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()


if __name__ == "__main__":
    main()
