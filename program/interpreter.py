"""
lispworld module: program/interpreter.py

Resumable tree-walking evaluator.

evaluate() is a generator: it performs an action on the animal and then
yields the action's name, handing control back to the world. Nested forms
are evaluated with ``yield from``, so a suspended generator chain remembers
exactly which child of which begin/for/if comes next.

Nothing in here raises for odd programs:
- unknown operators evaluate to False
- division by zero evaluates to 0
- non-numeric operands count as 0
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generator, Optional

from program.tree import (
    Expr,
    FOOD_HERE, FOOD_AHEAD, MY_ENERGY,
    IF, BEGIN, FOR,
    MOVE, MOVE_BACK, TURN_LEFT, TURN_RIGHT, TURN_RANDOM, EAT, FORK, HIT,
)

if TYPE_CHECKING:
    from organism.animal import Animal

Evaluation = Generator[str, None, Any]


class Status(Enum):
    SUSPENDED = 0
    COMPLETED = 1


@dataclass
class Resumption:
    status: Status
    value: Any = None
    state: Optional[Evaluation] = None  # pass back to resume() while suspended
    action: Optional[str] = None


def _num(value: Any):
    # bool is an int subclass, so True/False act as 1/0
    if isinstance(value, (int, float)):
        return value
    return 0


def _div(a, b):
    if b == 0:
        return 0
    q = abs(a) // abs(b)
    return int(q) if (a >= 0) == (b > 0) else -int(q)


def _arg(args: list, i: int) -> Expr:
    return args[i] if i < len(args) else None


_ARITHMETIC = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _div,
}

_COMPARISONS = {
    ">": lambda a, b: a > b,
    "<": lambda a, b: a < b,
    "=": lambda a, b: a == b,
}

_PLAIN_ACTIONS = {
    MOVE: "move",
    MOVE_BACK: "move_back",
    TURN_LEFT: "turn_left",
    TURN_RIGHT: "turn_right",
    TURN_RANDOM: "turn_random",
    EAT: "eat",
    HIT: "hit",
}


def evaluate(expr: Expr, animal: "Animal") -> Evaluation:
    if expr is None:
        return False
    if not isinstance(expr, list):
        return expr
    if not expr:
        return False

    op, args = expr[0], expr[1:]

    if op == FOOD_HERE:
        return animal.food_here()
    if op == FOOD_AHEAD:
        return animal.food_ahead()
    if op == MY_ENERGY:
        return animal.energy

    if op in _ARITHMETIC or op in _COMPARISONS:
        a = yield from evaluate(_arg(args, 0), animal)
        b = yield from evaluate(_arg(args, 1), animal)
        fn = _ARITHMETIC.get(op) or _COMPARISONS[op]
        return fn(_num(a), _num(b))

    if op == IF:
        cond = yield from evaluate(_arg(args, 0), animal)
        branch = _arg(args, 1) if cond else _arg(args, 2)
        return (yield from evaluate(branch, animal))

    if op == BEGIN:
        result = None
        for child in args:
            result = yield from evaluate(child, animal)
        return result

    if op == FOR:
        count = yield from evaluate(_arg(args, 0), animal)
        for _ in range(int(_num(count))):
            yield from evaluate(_arg(args, 1), animal)
        return None

    if op == FORK:
        pct = yield from evaluate(_arg(args, 0), animal)
        animal.fork(pct)
        yield op
        return None

    method = _PLAIN_ACTIONS.get(op)
    if method is not None:
        getattr(animal, method)()
        yield op
        return None

    return False


def resume(program: Expr, animal: "Animal", state: Optional[Evaluation] = None) -> Resumption:
    """
    Run one scheduling quantum of ``program`` for ``animal``.

    Starts from the root when ``state`` is None, otherwise continues the
    suspended evaluation. Stops right after one action (SUSPENDED, with the
    state to resume next time) or when the root finishes (COMPLETED).
    """
    if state is None:
        state = evaluate(program, animal)
    try:
        action = next(state)
    except StopIteration as done:
        return Resumption(status=Status.COMPLETED, value=done.value)
    return Resumption(status=Status.SUSPENDED, state=state, action=action)
