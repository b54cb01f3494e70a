"""
lispworld module: world/world.py

World state container: the toroidal food/obstacle grid, the animals, and the
per-tick loop that ties them together.
"""

from __future__ import annotations
import random
from typing import Dict, List, Optional, Tuple

from loguru import logger
import numpy as np

import config
from organism.animal import Animal
from organism.sprite import generate_sprite
from program.tree import default_program
from world.food import OBSTACLE, add_food_blob, new_grid, place_obstacles, plant_mass


class World:
    def __init__(
        self,
        width: int,
        height: int,
        rng: Optional[random.Random] = None,
        max_food: int = config.MAX_FOOD,
        min_population: int = config.MIN_POP,
        blob_chance: float = config.BLOB_CHANCE,
        blob_radius: int = config.BLOB_RADIUS,
        cull_chance: float = config.CULL_CHANCE,
    ):
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.max_food = max_food
        self.min_population = min_population
        self.blob_chance = blob_chance
        self.blob_radius = blob_radius
        self.cull_chance = cull_chance

        self.grid = new_grid(width, height)
        self.animals: List[Animal] = []
        # (x, y) -> the animal standing there; kept in step with self.animals
        self.occupied: Dict[Tuple[int, int], Animal] = {}

        self.tick = 0
        self.births = 0
        self.deaths = 0

    @staticmethod
    def create(
        w: int = config.WORLD_W,
        h: int = config.WORLD_H,
        seed: Optional[int] = None,
        start_pop: int = config.START_POP,
    ) -> "World":
        world = World(w, h, rng=random.Random(seed))
        obstacles = place_obstacles(world.grid, world.rng, config.OBSTACLE_DENSITY)
        for _ in range(w):
            world.food_blob()
        for _ in range(start_pop):
            if world.spawn_animal() is None:
                logger.warning("[World] Grid full after {} animals", len(world.animals))
                break
        logger.info(
            "[World] Created {}x{} seed={} obstacles={} animals={}",
            w, h, seed, obstacles, len(world.animals),
        )
        return world

    # ---- grid ----

    def wrap(self, x: int, y: int) -> Tuple[int, int]:
        return x % self.width, y % self.height

    def food(self, x: int, y: int) -> int:
        return int(self.grid[y, x])

    def set_food(self, x: int, y: int, value: int) -> None:
        self.grid[y, x] = max(OBSTACLE, min(self.max_food, value))

    def add_food(self, x: int, y: int, amount: int) -> int:
        """Add food to a non-obstacle cell up to max_food. Returns what was actually added."""
        cell = self.food(x, y)
        if cell < 0 or amount <= 0:
            return 0
        new = min(self.max_food, cell + amount)
        self.grid[y, x] = new
        return new - cell

    def food_blob(self) -> int:
        cx = self.rng.randrange(self.width)
        cy = self.rng.randrange(self.height)
        return add_food_blob(self.grid, cx, cy, self.blob_radius, self.max_food)

    # ---- animals ----

    def animal_at(self, x: int, y: int) -> Optional[Animal]:
        return self.occupied.get((x, y))

    def is_free(self, x: int, y: int) -> bool:
        return self.food(x, y) >= 0 and (x, y) not in self.occupied

    def free_cells(self) -> List[Tuple[int, int]]:
        ys, xs = np.nonzero(self.grid >= 0)
        return [(x, y) for x, y in zip(xs.tolist(), ys.tolist()) if (x, y) not in self.occupied]

    def put_animal(self, animal: Animal) -> None:
        self.animals.append(animal)
        self.occupied[(animal.x, animal.y)] = animal

    def add_animal(self, animal: Animal) -> None:
        """Register a newborn."""
        self.put_animal(animal)
        self.births += 1

    def move_animal(self, animal: Animal, x: int, y: int) -> None:
        del self.occupied[(animal.x, animal.y)]
        animal.x, animal.y = x, y
        self.occupied[(x, y)] = animal

    def spawn_animal(self) -> Optional[Animal]:
        """
        New lineage on a random free cell: fresh sprite, default program.

        Returns None when every cell is an obstacle or taken.
        """
        free = self.free_cells()
        if not free:
            return None
        x, y = free[self.rng.randrange(len(free))]

        animal = Animal(
            world=self,
            x=x,
            y=y,
            sprite=generate_sprite(self.rng),
            program=default_program(),
            color=self.rng.randrange(256),
        )
        self.put_animal(animal)
        return animal

    # ---- simulation ----

    def _remove_dead(self) -> int:
        survivors: List[Animal] = []
        removed = 0
        for a in self.animals:
            if a.energy < 1 or self.rng.random() < self.cull_chance:
                self.add_food(a.x, a.y, a.energy)
                del self.occupied[(a.x, a.y)]
                removed += 1
            else:
                survivors.append(a)
        self.animals = survivors
        return removed

    def step(self) -> None:
        self.tick += 1

        if self.rng.random() < self.blob_chance:
            self.food_blob()

        for animal in list(self.animals):
            if animal.alive:
                animal.step()
            animal.energy -= config.ENERGY_DECAY

        removed = self._remove_dead()
        self.deaths += removed

        spawned = 0
        while len(self.animals) < self.min_population:
            if self.spawn_animal() is None:
                break
            spawned += 1

        if removed or spawned:
            logger.debug(
                "[World] tick={} removed={} spawned={} population={}",
                self.tick, removed, spawned, len(self.animals),
            )

    def stats(self) -> dict:
        population = len(self.animals)
        avg_energy = sum(a.energy for a in self.animals) / population if population else 0.0
        return {
            "tick": self.tick,
            "population": population,
            "births": self.births,
            "deaths": self.deaths,
            "plant_mass": plant_mass(self.grid),
            "avg_energy": avg_energy,
        }
