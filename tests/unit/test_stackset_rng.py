import random

import pytest

from abstractgames.core.rng import copy_rng, make_rng, random_int, shuffle
from abstractgames.core.stackset import StackSet


def test_stackset_tracks_membership_with_the_stack():
    s = StackSet.of("a1")
    s.push("b1")
    assert len(s) == 2
    assert s.has("a1") and s.has("b1")
    assert s.path("c1") == ["a1", "b1", "c1"]
    s.pop()
    assert not s.has("b1")
    assert s.stack == ["a1"]


def test_cycle_source_is_on_the_path_but_not_visited():
    s = StackSet.of("a1", cycle=True)
    assert s.stack == ["a1"]
    assert not s.has("a1")
    assert s.path("a1") == ["a1", "a1"]


def test_same_seed_same_sequence():
    a, b = make_rng(7), make_rng(7)
    assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]


def test_copied_rng_continues_identically():
    a = make_rng(3)
    a.random()
    b = copy_rng(a)
    assert a.random() == b.random()


def test_shuffle_is_a_permutation_and_leaves_input_alone():
    items = list(range(20))
    out = shuffle(items, random.Random(5))
    assert items == list(range(20))
    assert sorted(out) == items
    assert shuffle(items, random.Random(5)) == out


def test_random_int_range():
    r = random.Random(0)
    rolls = {random_int(6, r) for _ in range(200)}
    assert rolls == {1, 2, 3, 4, 5, 6}
    with pytest.raises(ValueError):
        random_int(0, r)
