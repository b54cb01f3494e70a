import random

import pytest

from program.interpreter import Status, resume
from world.world import World
from organism.animal import Animal
from organism.sprite import Sprite


def run_to_completion(program, animal, limit=100):
    """Resume until COMPLETED; returns (actions, value)."""
    actions = []
    state = None
    for _ in range(limit):
        result = resume(program, animal, state)
        if result.status is Status.COMPLETED:
            return actions, result.value
        actions.append(result.action)
        state = result.state
    raise AssertionError("program did not complete")


@pytest.fixture
def animal(place):
    return place(5, 5)


@pytest.mark.parametrize(
    "expr, expected",
    [
        (7, 7),
        (None, False),
        (["+", 2, 3], 5),
        (["-", 2, 5], -3),
        (["*", 4, 5], 20),
        (["/", 7, 2], 3),
        (["/", -7, 2], -3),
        (["/", 7, -2], -3),
        (["/", 7, 0], 0),
        ([">", 3, 2], True),
        (["<", 3, 2], False),
        (["=", 4, 4], True),
        (["+", None, 2], 2),
        (["*", ["+", 1, 1], ["-", 5, 2]], 6),
        (["if", 0, 1, 2], 2),
        (["if", 1, 1, 2], 1),
        (["if", None, 1], False),
        (["begin", 1, 2, 3], 3),
        (["begin"], None),
        (["for", 3, 1], None),
        (["frobnicate", 1, 2], False),
        ([], False),
    ],
)
def test_pure_expressions_complete_in_one_resumption(animal, expr, expected):
    result = resume(expr, animal)
    assert result.status is Status.COMPLETED
    assert result.value == expected
    assert result.state is None
    assert result.action is None


def test_sensors_read_state_without_suspending(world, animal):
    world.set_food(5, 5, 40)
    world.set_food(6, 5, 70)
    animal.energy = 321

    assert resume(["food-here"], animal).value == 40
    assert resume(["food-ahead"], animal).value == 70
    assert resume(["my-energy"], animal).value == 321
    assert resume(["+", ["food-here"], ["food-ahead"]], animal).value == 110


def test_each_action_is_its_own_suspension_point(animal):
    program = ["begin", ["turn-left"], ["turn-left"], ["turn-left"]]

    result = resume(program, animal)
    assert result.status is Status.SUSPENDED
    assert result.action == "turn-left"
    assert (animal.dx, animal.dy) == (0, -1)

    result = resume(program, animal, result.state)
    assert result.status is Status.SUSPENDED
    assert (animal.dx, animal.dy) == (-1, 0)

    result = resume(program, animal, result.state)
    assert result.status is Status.SUSPENDED
    assert (animal.dx, animal.dy) == (0, 1)

    result = resume(program, animal, result.state)
    assert result.status is Status.COMPLETED
    assert (animal.dx, animal.dy) == (0, 1)


def test_n_actions_take_n_resumptions_then_complete(animal):
    actions, _ = run_to_completion(["begin", ["turn-left"], ["eat"], ["turn-right"], ["eat"]], animal)
    assert actions == ["turn-left", "eat", "turn-right", "eat"]


def test_for_loop_suspends_inside_every_iteration(animal):
    actions, value = run_to_completion(["for", 3, ["turn-right"]], animal)
    assert actions == ["turn-right"] * 3
    assert value is None


@pytest.mark.parametrize("count", [0, -4, None, ["eat"]])
def test_for_loop_with_non_positive_count_skips_body(animal, count):
    program = ["for", count, ["turn-left"]]
    actions, _ = run_to_completion(program, animal)
    # an (eat) count performs the eat but evaluates to nil, which counts as zero
    assert "turn-left" not in actions


def test_for_count_is_evaluated_once(world, animal):
    world.set_food(5, 5, 3)
    # the count reads food-here, which eating inside the loop would change
    actions, _ = run_to_completion(["for", ["food-here"], ["eat"]], animal)
    assert actions == ["eat", "eat", "eat"]


def test_resumes_inside_partially_evaluated_if(world, animal):
    program = ["if", [">", ["my-energy"], 0], ["begin", ["turn-left"], ["eat"]], ["move"]]
    world.set_food(5, 5, 30)

    result = resume(program, animal)
    assert result.action == "turn-left"

    # the condition is not evaluated again after resuming
    animal.energy = 0
    result = resume(program, animal, result.state)
    assert result.action == "eat"
    assert animal.energy == 30

    assert resume(program, animal, result.state).status is Status.COMPLETED


def test_only_one_branch_runs(animal):
    actions, _ = run_to_completion(["if", 1, ["turn-left"], ["turn-right"]], animal)
    assert actions == ["turn-left"]
    actions, _ = run_to_completion(["if", 0, ["turn-left"], ["turn-right"]], animal)
    assert actions == ["turn-right"]


def test_operands_run_left_to_right_including_actions(animal):
    actions, value = run_to_completion(["+", ["turn-left"], ["eat"]], animal)
    assert actions == ["turn-left", "eat"]
    assert value == 0


def test_division_by_zero_still_evaluates_dividend(animal):
    actions, value = run_to_completion(["/", ["turn-left"], 0], animal)
    assert actions == ["turn-left"]
    assert value == 0


def test_fork_argument_is_evaluated_before_forking(world, animal):
    animal.energy = 1000
    result = resume(["fork", ["+", 20, 30]], animal)
    assert result.action == "fork"
    assert len(world.animals) == 2
    assert animal.energy == 450


def test_unknown_operator_inside_program_is_harmless(animal):
    actions, value = run_to_completion(["begin", ["mystery", ["eat"]], ["turn-left"]], animal)
    assert actions == ["turn-left"]
    assert value is None


def _trace(seed):
    world = World(10, 10, rng=random.Random(seed), min_population=0, blob_chance=0.0, cull_chance=0.0)
    animal = Animal(world=world, x=2, y=2, sprite=Sprite.default())
    world.put_animal(animal)
    program = ["for", 12, ["begin", ["turn-random"], ["move"]]]
    trace = []
    state = None
    while True:
        result = resume(program, animal, state)
        if result.status is Status.COMPLETED:
            return trace
        trace.append((result.action, animal.x, animal.y, animal.dx, animal.dy))
        state = result.state


def test_evaluation_is_deterministic_for_a_seed():
    assert _trace(99) == _trace(99)
    assert len(_trace(99)) == 24
