"""
lispworld module: evolution/mutate.py

Mutation operators for programs (tree edits) and sprites (mirrored bit flips).
"""

from __future__ import annotations
import random
from typing import Optional

import config
from organism.sprite import CORNERS, HEAD_CELLS, SIZE, Sprite
from program.tree import (
    ACTIONS, BEGIN, COMPARISONS, FOR, FORK, IF, SENSORS,
    Expr, Path, deep_copy, get_at, is_form, iter_paths, set_at,
)


def random_action(rng: random.Random) -> list:
    action = rng.choice(ACTIONS)
    if action == FORK:
        return [FORK, rng.randint(20, 79)]
    return [action]


def random_comparison(rng: random.Random) -> list:
    return [rng.choice(COMPARISONS), [rng.choice(SENSORS)], rng.randint(0, 99)]


def _pick_path(expr: Expr, rng: random.Random) -> Optional[Path]:
    # reservoir sampling over every non-root node
    chosen = None
    seen = 0
    for path in iter_paths(expr):
        if not path:
            continue
        seen += 1
        if rng.randrange(seen) == 0:
            chosen = path
    return chosen


def _point_mutate(node: Expr, rng: random.Random) -> Expr:
    if node is None:
        return random_action(rng)
    if isinstance(node, bool) or not isinstance(node, (int, float, list)):
        return node
    if isinstance(node, (int, float)):
        return max(0, node + rng.randint(-20, 20))
    if not node:
        return node

    op, args = node[0], node[1:]

    if op in SENSORS:
        return [rng.choice(SENSORS)]
    if op in ACTIONS:
        return random_action(rng)
    if op in COMPARISONS:
        return [rng.choice(COMPARISONS)] + args
    if op == IF:
        padded = args + [None] * (3 - len(args))
        return [IF, padded[0], padded[2], padded[1]] + padded[3:]
    if op == FOR:
        count = args[0] if args else None
        if isinstance(count, bool) or not isinstance(count, int):
            count = 2
        body = args[1] if len(args) > 1 else None
        return [FOR, max(1, count + rng.choice((1, -1))), body]
    if op == BEGIN:
        shuffled = list(args)
        rng.shuffle(shuffled)
        return [BEGIN] + shuffled

    return node


def _simplify(node: Expr, rng: random.Random) -> Expr:
    if not is_form(node):
        return None

    op, args = node[0], node[1:]

    if op == IF:
        return rng.choice((args[1] if len(args) > 1 else None, args[2] if len(args) > 2 else None))
    if op == FOR:
        return args[1] if len(args) > 1 else None
    if op == BEGIN:
        return rng.choice(args) if args else None

    return None


def mutate_program(program: Expr, rng: random.Random) -> Expr:
    """
    Return a mutated deep copy of ``program``.

    One non-root node is picked uniformly and one of four edits applied:
      - complexify: wrap it in an if (both branches the node) or a (for 2 ...)
      - point mutation: small in-kind change (see _point_mutate)
      - duplicate: add a copy next to it inside a begin
      - simplify: collapse it to one of its children, or to nil
    """
    expr = deep_copy(program)
    path = _pick_path(expr, rng)
    if path is None:
        return expr

    node = get_at(expr, path)
    parent = get_at(expr, path[:-1])
    index = path[-1]

    roll = rng.random()
    if roll < 0.25:
        if rng.random() < 0.5:
            replacement = [IF, random_comparison(rng), deep_copy(node), deep_copy(node)]
        else:
            replacement = [FOR, 2, deep_copy(node)]
        expr = set_at(expr, path, replacement)
    elif roll < 0.5:
        expr = set_at(expr, path, _point_mutate(node, rng))
    elif roll < 0.75:
        if parent[0] == BEGIN:
            parent.insert(index, deep_copy(node))
        else:
            expr = set_at(expr, path, [BEGIN, deep_copy(node), deep_copy(node)])
    else:
        expr = set_at(expr, path, _simplify(node, rng))

    return expr


def _flippable(row: int, col: int) -> bool:
    return (row, col) not in CORNERS and (row, col) not in HEAD_CELLS


def mutate_sprite(
    sprite: Sprite,
    rng: random.Random,
    attempts: int = config.SPRITE_MUTATION_ATTEMPTS,
) -> Sprite:
    """
    Flip one left-half cell (and its mirror) until the result is valid.

    Picks that land on a corner or a head cell burn an attempt. Returns an
    unchanged copy when every attempt fails.
    """
    half = SIZE // 2 + 1
    for _ in range(attempts):
        row = rng.randrange(SIZE)
        col = rng.randrange(half)
        if not _flippable(row, col):
            continue

        candidate = sprite.clone()
        candidate.set_mirrored(row, col, not candidate.cells[row][col])
        candidate.clear_corners()
        if candidate.is_valid():
            return candidate

    return sprite.clone()
