"""
Live simulation: animals run their little Lisp programs, eat, fork, and evolve.

    python main.py                      # pygame viewer
    python main.py --headless --ticks 5000 --seed 7
"""

from __future__ import annotations
import argparse
import sys

from loguru import logger
import pygame

import config
from program.tree import node_count, to_pretty
from render import colors
from render.renderer import draw_animals, draw_food, draw_hud
from world.world import World


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="lispworld - evolving Lisp-driven animals on a torus")
    parser.add_argument("--seed", type=int, default=None, help="random seed (default: random)")
    parser.add_argument("--width", type=int, default=config.WORLD_W, help=f"grid width (default: {config.WORLD_W})")
    parser.add_argument("--height", type=int, default=config.WORLD_H, help=f"grid height (default: {config.WORLD_H})")
    parser.add_argument("--headless", action="store_true", help="run without a window")
    parser.add_argument("--ticks", type=int, default=10000, help="ticks to run in headless mode")
    parser.add_argument("--report-every", type=int, default=config.REPORT_EVERY, help="headless stats interval")
    parser.add_argument("--log-level", default="INFO", help="loguru level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def setup_logger(level: str) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <level>{message}</level>",
    )


def log_stats(stats: dict) -> None:
    logger.info(
        "[Run] tick={tick} population={population} births={births} deaths={deaths} "
        "plants={plant_mass} avg_energy={avg_energy:.1f}",
        **stats,
    )


def log_fittest(world: World) -> None:
    if not world.animals:
        return
    best = max(world.animals, key=lambda a: a.energy)
    logger.info(
        "[Run] Richest animal at ({}, {}) energy={} nodes={}:\n{}\n{}",
        best.x, best.y, best.energy, node_count(best.program),
        "\n".join(best.sprite.rows()), to_pretty(best.program),
    )


def run_headless(world: World, ticks: int, report_every: int) -> dict:
    for _ in range(ticks):
        world.step()
        if report_every > 0 and world.tick % report_every == 0:
            log_stats(world.stats())
    log_fittest(world)
    return world.stats()


def run_viewer(world: World) -> None:
    pygame.init()
    cell = config.CELL_PX
    screen = pygame.display.set_mode((world.width * cell, world.height * cell + config.HUD_HEIGHT))
    pygame.display.set_caption("lispworld")
    clock = pygame.time.Clock()

    paused = False
    running = True
    while running:
        clock.tick(config.FPS)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            elif e.type == pygame.KEYDOWN:
                if e.key == pygame.K_SPACE:
                    paused = not paused
                elif e.key == pygame.K_TAB:
                    log_fittest(world)
                elif e.key == pygame.K_ESCAPE:
                    running = False

        if not paused:
            world.step()

        screen.fill(colors.BG)
        draw_food(screen, world, cell)
        draw_animals(screen, world, cell)
        draw_hud(screen, world.stats(), fps=clock.get_fps(), paused=paused)
        pygame.display.flip()

    pygame.quit()
    log_stats(world.stats())


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logger(args.log_level)

    world = World.create(args.width, args.height, seed=args.seed)
    if args.headless:
        run_headless(world, args.ticks, args.report_every)
    else:
        run_viewer(world)


if __name__ == "__main__":
    main()
