"""
lispworld module: render/renderer.py

Pygame rendering of the world (top-down, fixed scale).
"""

from __future__ import annotations
import numpy as np
import pygame

from render import colors
from world.world import World


def grid_to_rgb(grid: np.ndarray, max_food: int) -> np.ndarray:
    """(height, width) food grid -> (width, height, 3) array for pygame.surfarray."""
    f = np.clip(grid.astype(np.float32) / max_food, 0.0, 1.0)
    rgb = np.empty(grid.shape + (3,), dtype=np.uint8)
    rgb[...] = colors.BG
    food = grid > 0
    rgb[..., 0][food] = (64 - 64 * f[food]).astype(np.uint8)
    rgb[..., 1][food] = (64 + 191 * f[food]).astype(np.uint8)
    rgb[..., 2][food] = 0
    rgb[grid < 0] = colors.OBSTACLE
    return np.ascontiguousarray(rgb.transpose(1, 0, 2))


def draw_food(screen: pygame.Surface, world: World, cell_px: int) -> None:
    surface = pygame.surfarray.make_surface(grid_to_rgb(world.grid, world.max_food))
    if cell_px != 1:
        surface = pygame.transform.scale(surface, (world.width * cell_px, world.height * cell_px))
    screen.blit(surface, (0, 0))


def draw_animals(screen: pygame.Surface, world: World, cell_px: int) -> None:
    # sprites are 5 sub-pixels across but only 3 fit per cell, so bodies overlap neighbors a little
    ps = max(1, cell_px // 3)
    for a in world.animals:
        col = colors.animal_color(a.color, a.energy)
        cx = a.x * cell_px + cell_px // 2
        cy = a.y * cell_px + cell_px // 2
        for r, row in enumerate(a.rotated_sprite().cells):
            for c, on in enumerate(row):
                if on:
                    sx = cx + (c - 2) * ps - ps // 2
                    sy = cy + (r - 2) * ps - ps // 2
                    pygame.draw.rect(screen, col, (sx, sy, ps, ps))


def draw_hud(screen: pygame.Surface, stats: dict, fps: float = 0.0, paused: bool = False) -> None:
    font = pygame.font.Font(None, 22)

    line = (
        f"creatures: {stats.get('population', 0)}  "
        f"plants: {stats.get('plant_mass', 0) // 1000}k  "
        f"births: {stats.get('births', 0)}  deaths: {stats.get('deaths', 0)}  "
        f"tick: {stats.get('tick', 0)}  fps: {fps:.0f}"
    )
    if paused:
        line += "  PAUSED"

    h = screen.get_height()
    txt = font.render(line, True, colors.HUD_TEXT, colors.HUD_BG)
    screen.blit(txt, (8, h - txt.get_height() - 6))
