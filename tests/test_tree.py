from conftest import shares_structure
from program.tree import (
    HERBIVORE,
    default_program,
    get_at,
    is_well_formed,
    iter_paths,
    node_count,
    set_at,
    to_pretty,
    to_sexp,
)


def test_to_sexp_atoms_and_forms():
    assert to_sexp(None) == "nil"
    assert to_sexp(42) == "42"
    assert to_sexp(["eat"]) == "(eat)"
    assert to_sexp(["fork", 30]) == "(fork 30)"
    assert to_sexp(["if", [">", ["food-here"], 0], ["move"], None]) == "(if (> (food-here) 0) (move) nil)"


def test_to_sexp_herbivore_round_shape():
    text = to_sexp(HERBIVORE)
    assert text.startswith("(begin (if (> (food-here) 0) (begin (eat) (if (> (my-energy) 700) (fork 30) nil))")
    assert text.count("(") == text.count(")")


def test_to_pretty_keeps_leaf_forms_on_one_line():
    assert to_pretty(["eat"]) == "(eat)"
    assert to_pretty(["fork", 30]) == "(fork 30)"
    assert to_pretty(["food-here"]) == "(food-here)"
    assert to_pretty(None) == "nil"


def test_to_pretty_indents_nested_forms():
    assert to_pretty(["begin", ["eat"], ["move"]]) == "(begin\n  (eat)\n  (move))"
    assert to_pretty(["begin", ["for", 2, ["eat"]]]) == "(begin\n  (for\n    2\n    (eat)))"


def test_well_formed():
    assert is_well_formed(HERBIVORE)
    assert is_well_formed(None)
    assert is_well_formed(["begin"])
    assert not is_well_formed([])
    assert not is_well_formed(["bogus", 1])
    assert not is_well_formed(["begin", ["eat"], ["nope"]])


def test_iter_paths_skips_operator_heads():
    expr = ["begin", ["eat"], ["fork", 30]]
    assert list(iter_paths(expr)) == [(), (1,), (2,), (2, 1)]
    assert node_count(expr) == 4


def test_get_and_set_at():
    expr = ["begin", ["eat"], ["fork", 30]]
    assert get_at(expr, (2, 1)) == 30
    set_at(expr, (2, 1), 55)
    assert expr == ["begin", ["eat"], ["fork", 55]]
    assert set_at(expr, (), ["move"]) == ["move"]


def test_default_program_is_a_fresh_copy():
    a = default_program()
    b = default_program()
    assert a == HERBIVORE
    assert a is not HERBIVORE
    assert not shares_structure(a, HERBIVORE)
    assert not shares_structure(a, b)
