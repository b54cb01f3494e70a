"""
lispworld module: organism/sprite.py

5x5 body shapes.

Invariants (checked by Sprite.is_valid):
- left/right mirror symmetric
- the four corners are off
- 4..13 cells on
- on-cells form a single 4-connected blob
"""

from __future__ import annotations
from dataclasses import dataclass, field
import random
from typing import List, Tuple

import config

SIZE = 5
MIN_CELLS = 4
MAX_CELLS = 13

# (row, col)
HEAD_CELLS: Tuple[Tuple[int, int], ...] = ((0, 2), (2, 2))
CORNERS: Tuple[Tuple[int, int], ...] = ((0, 0), (0, SIZE - 1), (SIZE - 1, 0), (SIZE - 1, SIZE - 1))

_DEFAULT_ROWS = (
    "..#..",
    ".###.",
    "..#..",
    ".###.",
    ".#.#.",
)


def _blank() -> List[List[bool]]:
    return [[False] * SIZE for _ in range(SIZE)]


@dataclass
class Sprite:
    cells: List[List[bool]] = field(default_factory=_blank)

    @staticmethod
    def from_rows(rows) -> "Sprite":
        return Sprite(cells=[[ch == "#" for ch in row] for row in rows])

    @staticmethod
    def default() -> "Sprite":
        return Sprite.from_rows(_DEFAULT_ROWS)

    def clone(self) -> "Sprite":
        return Sprite(cells=[list(row) for row in self.cells])

    def rows(self) -> List[str]:
        return ["".join("#" if c else "." for c in row) for row in self.cells]

    def count(self) -> int:
        return sum(sum(1 for c in row if c) for row in self.cells)

    def set_mirrored(self, row: int, col: int, value: bool) -> None:
        self.cells[row][col] = value
        self.cells[row][SIZE - 1 - col] = value

    def clear_corners(self) -> None:
        for r, c in CORNERS:
            self.cells[r][c] = False

    def is_symmetric(self) -> bool:
        return all(row[c] == row[SIZE - 1 - c] for row in self.cells for c in range(SIZE))

    def is_connected(self) -> bool:
        """Flood fill from the first on-cell (row-major); must reach every on-cell."""
        start = next(
            ((r, c) for r in range(SIZE) for c in range(SIZE) if self.cells[r][c]),
            None,
        )
        if start is None:
            return False

        seen = set()
        stack = [start]
        while stack:
            r, c = stack.pop()
            if not (0 <= r < SIZE and 0 <= c < SIZE):
                continue
            if (r, c) in seen or not self.cells[r][c]:
                continue
            seen.add((r, c))
            stack.extend(((r + 1, c), (r - 1, c), (r, c + 1), (r, c - 1)))

        return len(seen) == self.count()

    def is_valid(self) -> bool:
        if any(self.cells[r][c] for r, c in CORNERS):
            return False
        if not MIN_CELLS <= self.count() <= MAX_CELLS:
            return False
        return self.is_symmetric() and self.is_connected()

    def rotated(self, quarter_turns: int) -> "Sprite":
        """Clockwise rotation by 90 degrees per turn; never touches self."""
        cells = self.cells
        for _ in range(quarter_turns % 4):
            out = _blank()
            for r in range(SIZE):
                for c in range(SIZE):
                    out[c][SIZE - 1 - r] = cells[r][c]
            cells = out
        return Sprite(cells=[list(row) for row in cells])


def quarter_turns_for_heading(dx: int, dy: int) -> int:
    # sprites are drawn facing up (0, -1)
    if dx == 1:
        return 1
    if dy == 1:
        return 2
    if dx == -1:
        return 3
    return 0


def _try_generate(rng: random.Random, density: float) -> Sprite:
    sprite = Sprite()
    for r, c in HEAD_CELLS:
        sprite.cells[r][c] = True

    half = SIZE // 2 + 1
    for r in range(SIZE):
        for c in range(half):
            if rng.random() < density:
                sprite.set_mirrored(r, c, True)

    sprite.clear_corners()
    return sprite


def generate_sprite(rng: random.Random, attempts: int = config.SPRITE_GENERATION_ATTEMPTS) -> Sprite:
    """Random body for a brand new lineage, or the default shape if nothing valid turns up."""
    for _ in range(attempts):
        sprite = _try_generate(rng, config.SPRITE_DENSITY)
        if sprite.is_valid():
            return sprite
    return Sprite.default()
