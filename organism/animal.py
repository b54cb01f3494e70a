"""
lispworld module: organism/animal.py

An animal: a position and heading on the torus, an energy budget, a body
sprite, and the program that drives it.

The interpreter calls the action methods (move, eat, fork, ...) and the
sensors (food_here, food_ahead, energy). The world calls step() once per
tick.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Tuple

import config
from evolution.reproduction import clamp_percentage, clone_for_spawn, split_energy
from organism.sprite import Sprite, quarter_turns_for_heading
from program.interpreter import Evaluation, resume
from program.tree import Expr, default_program

if TYPE_CHECKING:
    from world.world import World


@dataclass(eq=False)
class Animal:
    world: "World" = field(repr=False)
    x: int
    y: int
    sprite: Sprite
    program: Expr = field(default_factory=default_program, repr=False)
    dx: int = 1
    dy: int = 0
    energy: int = config.START_ENERGY
    wait: int = 0
    color: int = 0

    # suspended evaluation of ``program``; None when idle
    execution: Optional[Evaluation] = field(default=None, repr=False)

    @property
    def alive(self) -> bool:
        return self.energy >= 1

    # ---- geometry ----

    def ahead(self) -> Tuple[int, int]:
        return self.world.wrap(self.x + self.dx, self.y + self.dy)

    def behind(self) -> Tuple[int, int]:
        return self.world.wrap(self.x - self.dx, self.y - self.dy)

    def rotated_sprite(self) -> Sprite:
        return self.sprite.rotated(quarter_turns_for_heading(self.dx, self.dy))

    # ---- sensors ----

    def food_here(self) -> int:
        return self.world.food(self.x, self.y)

    def food_ahead(self) -> int:
        return self.world.food(*self.ahead())

    # ---- actions ----

    def turn_left(self) -> None:
        self.dx, self.dy = self.dy, -self.dx
        self.wait = config.WAIT_TURN

    def turn_right(self) -> None:
        self.dx, self.dy = -self.dy, self.dx
        self.wait = config.WAIT_TURN

    def turn_random(self) -> None:
        if self.world.rng.random() < 0.5:
            self.turn_left()
        else:
            self.turn_right()

    def _step_to(self, x: int, y: int) -> None:
        if not self.world.is_free(x, y):
            return
        self.world.move_animal(self, x, y)
        self.wait = config.WAIT_MOVE

    def move(self) -> None:
        self._step_to(*self.ahead())

    def move_back(self) -> None:
        self._step_to(*self.behind())

    def eat(self) -> None:
        here = self.world.food(self.x, self.y)
        bite = max(0, min(here, config.EAT_BITE))
        self.energy += bite
        self.world.set_food(self.x, self.y, here - bite)
        self.wait = config.WAIT_EAT

    def hit(self) -> None:
        x, y = self.ahead()
        target = self.world.animal_at(x, y)
        if target is None:
            return
        if target.energy > 0:
            self.world.add_food(x, y, target.energy)
        target.energy = config.HIT_SENTINEL
        self.wait = config.WAIT_HIT

    def fork(self, percentage: Any) -> Optional["Animal"]:
        """
        Split off a child onto the cell ahead.

        Nothing is born (and no energy is spent) when that cell is blocked.
        """
        pct = clamp_percentage(percentage)
        self.wait = config.WAIT_FORK

        x, y = self.ahead()
        if not self.world.is_free(x, y):
            return None

        rng = self.world.rng
        spawn = clone_for_spawn(
            self.sprite,
            self.program,
            self.color,
            rng,
            p_sprite=config.MUT_P_SPRITE,
            p_program=config.MUT_P_PROGRAM,
        )
        self.energy, child_energy = split_energy(self.energy, pct)

        child = Animal(
            world=self.world,
            x=x,
            y=y,
            sprite=spawn.sprite,
            program=spawn.program,
            dx=self.dx,
            dy=self.dy,
            energy=child_energy,
            wait=config.WAIT_FORK,
            color=spawn.color,
        )
        self.world.add_animal(child)
        return child

    # ---- scheduling ----

    def step(self) -> None:
        """One tick: drain the wait timer, or run the program up to its next action."""
        if self.wait > 0:
            self.wait -= 1
            return

        result = resume(self.program, self, self.execution)
        self.execution = result.state
