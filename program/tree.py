"""
lispworld module: program/tree.py

Program trees for the animals' tiny Lisp.

Representation:
- None is nil
- int is a number literal
- str is a bare symbol
- list is a form: [operator, arg1, arg2, ...]

Trees are never parsed from text; they are born from the default program
and reshaped by evolution/mutate.py.
"""

from __future__ import annotations
from typing import Iterator, Tuple, Union

Expr = Union[None, int, float, str, list]
Path = Tuple[int, ...]

# Sensors
FOOD_HERE = "food-here"
FOOD_AHEAD = "food-ahead"
MY_ENERGY = "my-energy"

# Control
IF = "if"
BEGIN = "begin"
FOR = "for"

# Actions
MOVE = "move"
MOVE_BACK = "move-back"
TURN_LEFT = "turn-left"
TURN_RIGHT = "turn-right"
TURN_RANDOM = "turn-random"
EAT = "eat"
FORK = "fork"
HIT = "hit"

SENSORS = (FOOD_HERE, FOOD_AHEAD, MY_ENERGY)
ACTIONS = (MOVE, MOVE_BACK, TURN_LEFT, TURN_RIGHT, TURN_RANDOM, EAT, FORK, HIT)
COMPARISONS = (">", "<", "=")
ARITHMETIC = ("+", "-", "*", "/")
CONTROL = (IF, BEGIN, FOR)

OPERATORS = frozenset(SENSORS + ACTIONS + COMPARISONS + ARITHMETIC + CONTROL)


HERBIVORE = [
    BEGIN,
    [IF, [">", [FOOD_HERE], 0],
        [BEGIN,
            [EAT],
            [IF, [">", [MY_ENERGY], 700], [FORK, 30], None]],
        [IF, [">", [FOOD_AHEAD], 0],
            [MOVE],
            [BEGIN,
                [FOR, 3,
                    [BEGIN,
                        [TURN_LEFT],
                        [IF, [">", [FOOD_AHEAD], 0], [MOVE], None]]],
                [FOR, 4,
                    [IF, [">", [FOOD_HERE], 0],
                        [EAT],
                        [MOVE]]]]]],
]


def default_program() -> list:
    """A fresh copy of the starting program every new lineage is born with."""
    return deep_copy(HERBIVORE)


def deep_copy(expr: Expr) -> Expr:
    if isinstance(expr, list):
        return [deep_copy(e) for e in expr]
    return expr


def is_form(expr: Expr) -> bool:
    return isinstance(expr, list) and len(expr) > 0


def iter_paths(expr: Expr, path: Path = ()) -> Iterator[Path]:
    """
    Yield the path of every node, root first.

    A path is the sequence of list indices leading to a node. Operator heads
    (index 0) are part of their form, not separate nodes.
    """
    yield path
    if is_form(expr):
        for i in range(1, len(expr)):
            yield from iter_paths(expr[i], path + (i,))


def get_at(expr: Expr, path: Path) -> Expr:
    for i in path:
        expr = expr[i]
    return expr


def set_at(expr: Expr, path: Path, value: Expr) -> Expr:
    """Replace the node at ``path`` and return the (possibly new) root."""
    if not path:
        return value
    parent = get_at(expr, path[:-1])
    parent[path[-1]] = value
    return expr


def node_count(expr: Expr) -> int:
    return sum(1 for _ in iter_paths(expr))


def is_well_formed(expr: Expr) -> bool:
    """True when every form is non-empty and headed by a known operator."""
    if expr is None or isinstance(expr, (int, float, str)):
        return True
    if not is_form(expr):
        return False
    if expr[0] not in OPERATORS:
        return False
    return all(is_well_formed(arg) for arg in expr[1:])



def _is_atom(expr: Expr) -> bool:
    return not isinstance(expr, list)


def to_sexp(expr: Expr) -> str:
    if expr is None:
        return "nil"
    if isinstance(expr, bool):
        return "true" if expr else "false"
    if not isinstance(expr, list):
        return str(expr)
    if not expr:
        return "()"

    op, args = expr[0], expr[1:]
    if not args:
        return f"({op})"
    return f"({op} {' '.join(to_sexp(a) for a in args)})"


def to_pretty(expr: Expr, indent: int = 0) -> str:
    """
    Indented rendering for inspection.

    Sensor forms and forms whose arguments are all atoms stay on one line;
    anything else puts each argument on its own line, two spaces deeper.
    """
    if not is_form(expr):
        return to_sexp(expr)

    op, args = expr[0], expr[1:]
    if not args:
        return f"({op})"

    if op in SENSORS or all(_is_atom(a) for a in args):
        return to_sexp(expr)

    pad = "  " * (indent + 1)
    inner = "\n".join(pad + to_pretty(a, indent + 1) for a in args)
    return f"({op}\n{inner})"

