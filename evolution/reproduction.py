"""
Fork helpers: what a child inherits and how the parent's energy is split.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Any, Tuple

import config
from evolution.mutate import mutate_program, mutate_sprite
from organism.sprite import Sprite
from program.tree import Expr, deep_copy


@dataclass
class ChildSpawn:
    sprite: Sprite
    program: Expr
    color: int


def clamp_percentage(value: Any) -> int:
    if isinstance(value, (int, float)):
        pct = int(value)
    else:
        pct = 0
    return max(config.FORK_MIN_PCT, min(config.FORK_MAX_PCT, pct))


def split_energy(energy: int, pct: int, tax: float = config.FORK_TAX) -> Tuple[int, int]:
    """
    Returns (parent_energy, child_energy).

    The parent first loses ``1 - tax`` of its energy, then hands ``pct``
    percent of what is left to the child.
    """
    taxed = int(energy * tax)
    child = int(taxed * pct / 100)
    parent = int(taxed * (100 - pct) / 100)
    return parent, child


def drift_color(color: int, rng: random.Random, drift: int = config.COLOR_DRIFT) -> int:
    return (color + rng.randint(-drift, drift)) % 256


def clone_for_spawn(
    sprite: Sprite,
    program: Expr,
    color: int,
    rng: random.Random,
    p_sprite: float = config.MUT_P_SPRITE,
    p_program: float = config.MUT_P_PROGRAM,
) -> ChildSpawn:
    child_sprite = mutate_sprite(sprite, rng) if rng.random() < p_sprite else sprite.clone()
    child_program = mutate_program(program, rng) if rng.random() < p_program else deep_copy(program)
    return ChildSpawn(
        sprite=child_sprite,
        program=child_program,
        color=drift_color(color, rng),
    )
