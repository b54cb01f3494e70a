import random

import pytest

from organism.animal import Animal
from organism.sprite import Sprite
from program.tree import get_at, iter_paths
from world.world import World


def shares_structure(a, b):
    """True if any list object appears in both trees."""
    ids = {id(get_at(a, p)) for p in iter_paths(a) if isinstance(get_at(a, p), list)}
    return any(isinstance(get_at(b, p), list) and id(get_at(b, p)) in ids for p in iter_paths(b))


class ScriptedRandom(random.Random):
    """random.Random whose random() replays fixed values first; everything else stays seeded."""

    def __init__(self, values, seed=0):
        super().__init__(seed)
        self.values = list(values)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return super().random()

    def getrandbits(self, k):
        # keeps randrange/choice on the bit generator instead of random()
        return super().getrandbits(k)


@pytest.fixture
def world():
    """Empty 10x10 torus: no obstacles, no food, no random blobs, culls or respawns."""
    return World(10, 10, rng=random.Random(1234), min_population=0, blob_chance=0.0, cull_chance=0.0)


@pytest.fixture
def place(world):
    def _place(x, y, program=None, energy=200, dx=1, dy=0, wait=0, color=0):
        animal = Animal(
            world=world,
            x=x,
            y=y,
            sprite=Sprite.default(),
            program=program if program is not None else ["begin"],
            dx=dx,
            dy=dy,
            energy=energy,
            wait=wait,
            color=color,
        )
        world.put_animal(animal)
        return animal

    return _place
