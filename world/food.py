"""
lispworld module: world/food.py

Terrain for the grid:
- obstacles are -1 and never hold food
- food arrives in round blobs, richest at the center, fading with
  Manhattan distance
"""

from __future__ import annotations
import math
import random
from typing import List, Tuple

import numpy as np

OBSTACLE = -1


def new_grid(width: int, height: int) -> np.ndarray:
    return np.zeros((height, width), dtype=np.int16)


def blob_cells(radius: int) -> List[Tuple[int, int, int]]:
    """
    Offsets (dx, dy, manhattan distance) covered by a blob.

    Columns span the full radius; each column is cut to the circle.
    """
    cells: List[Tuple[int, int, int]] = []
    for dx in range(-radius, radius + 1):
        span = int(math.sqrt(radius * radius - dx * dx))
        for dy in range(-span, span + 1):
            cells.append((dx, dy, abs(dx) + abs(dy)))
    return cells


def blob_amount(dist: int, radius: int, max_food: int) -> int:
    return max(1, int(max_food * (1 - dist / radius)))


def add_food_blob(
    grid: np.ndarray,
    cx: int,
    cy: int,
    radius: int,
    max_food: int,
) -> int:
    """Pile food around (cx, cy), wrapping at the edges. Returns food added."""
    height, width = grid.shape
    added = 0
    for dx, dy, dist in blob_cells(radius):
        x = (cx + dx) % width
        y = (cy + dy) % height
        cell = int(grid[y, x])
        if cell < 0:
            continue
        new = min(max_food, cell + blob_amount(dist, radius, max_food))
        grid[y, x] = new
        added += new - cell
    return added


def place_obstacles(grid: np.ndarray, rng: random.Random, density: int) -> int:
    """
    Scatter single obstacle cells, then grow twice as many next to them.

    Returns the number of obstacle cells on the grid afterwards.
    """
    height, width = grid.shape
    seeds = (width * height) // density
    placed: List[Tuple[int, int]] = []

    for _ in range(seeds):
        x = rng.randrange(width)
        y = rng.randrange(height)
        grid[y, x] = OBSTACLE
        placed.append((x, y))

    if not placed:
        return 0

    for _ in range(seeds * 2):
        x, y = rng.choice(placed)
        if rng.random() < 0.5:
            x = (x + rng.choice((-1, 1))) % width
        else:
            y = (y + rng.choice((-1, 1))) % height
        grid[y, x] = OBSTACLE
        placed.append((x, y))

    return int(np.count_nonzero(grid == OBSTACLE))


def plant_mass(grid: np.ndarray) -> int:
    return int(grid[grid > 0].sum(dtype=np.int64))
