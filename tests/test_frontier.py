"""
Unit tests for the indexed binary heap used as the engine frontier.
"""

import random

import pytest

from dijkstrax.exceptions import AlgorithmError
from dijkstrax.frontier import IndexedFrontier


def test_pop_in_key_order():
    f = IndexedFrontier()
    for v, k in [("a", 5.0), ("b", 1.0), ("c", 3.0), ("d", 0.0)]:
        f.push(v, k)

    assert len(f) == 4
    assert [f.pop_min() for _ in range(4)] == [("d", 0.0), ("b", 1.0), ("c", 3.0), ("a", 5.0)]
    assert not f


def test_decrease_key_moves_vertex_without_duplicates():
    f = IndexedFrontier()
    f.push("a", 10.0)
    f.push("b", 2.0)
    f.push("c", 7.0)

    f.decrease_key("c", 1.0)

    assert len(f) == 3
    assert f.key_of("c") == 1.0
    assert f.peek() == ("c", 1.0)
    assert f.pop_min() == ("c", 1.0)
    assert "c" not in f
    assert [f.pop_min()[0] for _ in range(2)] == ["b", "a"]


def test_equal_keys_pop_in_insertion_order():
    f = IndexedFrontier()
    for v in ["x", "y", "z"]:
        f.push(v, float("inf"))
    f.decrease_key("z", 1.0)
    f.decrease_key("y", 1.0)

    # y was inserted before z, so it wins the tie even though z was lowered first
    assert [f.pop_min()[0] for _ in range(3)] == ["y", "z", "x"]


def test_errors():
    f = IndexedFrontier()
    with pytest.raises(AlgorithmError):
        f.pop_min()
    assert f.peek() is None

    f.push("a", 1.0)
    with pytest.raises(AlgorithmError):
        f.push("a", 0.5)
    with pytest.raises(AlgorithmError):
        f.decrease_key("a", 2.0)
    with pytest.raises(AlgorithmError):
        f.decrease_key("missing", 0.0)
    with pytest.raises(AlgorithmError):
        f.key_of("missing")


def test_random_operations_match_sorted_order():
    rng = random.Random(7)
    f = IndexedFrontier()
    keys = {}
    for v in range(200):
        keys[v] = rng.random() * 100
        f.push(v, keys[v])
    for v in rng.sample(range(200), 80):
        keys[v] = keys[v] * rng.random()
        f.decrease_key(v, keys[v])

    popped = [f.pop_min() for _ in range(len(f))]

    assert [k for _, k in popped] == sorted(keys.values())
    assert sorted(v for v, _ in popped) == list(range(200))
