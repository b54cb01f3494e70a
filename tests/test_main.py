from loguru import logger

from main import log_fittest, main, parse_args, run_headless
from program.tree import node_count
from world.world import World


def test_parse_args_defaults_and_overrides():
    args = parse_args([])
    assert not args.headless
    assert args.seed is None

    args = parse_args(["--headless", "--ticks", "25", "--seed", "9", "--width", "50", "--height", "40"])
    assert args.headless
    assert (args.ticks, args.seed, args.width, args.height) == (25, 9, 50, 40)


def test_run_headless_reports_final_stats():
    world = World.create(30, 20, seed=1, start_pop=5)
    stats = run_headless(world, ticks=40, report_every=20)
    assert stats["tick"] == 40
    assert stats["population"] >= 30


def test_tiny_grid_runs_headless_to_the_end():
    main(["--headless", "--ticks", "3", "--width", "4", "--height", "4", "--seed", "1", "--log-level", "WARNING"])


def test_fittest_report_shows_size_body_and_program():
    world = World.create(30, 20, seed=2, start_pop=5)
    messages = []
    handler = logger.add(messages.append, format="{message}")
    try:
        log_fittest(world)
    finally:
        logger.remove(handler)

    text = "".join(messages)
    best = max(world.animals, key=lambda a: a.energy)
    assert f"nodes={node_count(best.program)}" in text
    assert "\n".join(best.sprite.rows()) in text
    assert "(begin\n" in text
