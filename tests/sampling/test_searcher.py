"""Tests for landscape exploration with the Searcher."""

from __future__ import annotations

import jax
import pytest

from nksearch.errors import InvalidMutationError, LengthMismatchError
from nksearch.landscape import Network
from nksearch.sampling import Searcher


class TestStatesAndMutants:
  """Random states, point mutants and neighbors."""

  def test_random_state(self):
    """Random states have one binary entry per node."""
    searcher = Searcher(Network(20))
    s1 = searcher.random_state()

    assert len(s1) == 20
    assert set(s1) == {0, 1}

  def test_random_state_custom_values(self):
    searcher = Searcher(Network(30))
    state = searcher.random_state(possible=("a", "c", "g", "t"))
    assert set(state) <= {"a", "c", "g", "t"}

  def test_random_states_differ_between_calls(self):
    searcher = Searcher(Network(32))
    assert searcher.random_state() != searcher.random_state()

  def test_random_state_without_values(self):
    searcher = Searcher(Network(4))
    with pytest.raises(ValueError, match="possible value"):
      searcher.random_state(possible=())

  def test_seeded_searchers_agree(self):
    """Two searchers with the same key make the same choices."""
    net = Network(16)
    a = Searcher(net, key=jax.random.PRNGKey(3))
    b = Searcher(net, key=jax.random.PRNGKey(3))
    assert a.random_state() == b.random_state()
    assert a.point_mutant((0,) * 16) == b.point_mutant((0,) * 16)

  def test_point_mutant(self):
    searcher = Searcher(Network(10))
    s1 = [0] * 10

    s1m = searcher.point_mutant(s1, 7)
    assert s1m[7] != 0
    s1m = searcher.point_mutant(s1, 7, [0, 99])
    assert s1m[7] == 99
    s1m = searcher.point_mutant(s1)
    assert searcher.hamming(s1, s1m) == 1
    assert s1 == [0] * 10

  def test_point_mutant_without_alternatives(self):
    searcher = Searcher(Network(3))
    with pytest.raises(InvalidMutationError):
      searcher.point_mutant([1, 1, 1], 0, possible=[1])

  def test_neighbors(self):
    """Every position gets exactly one mutant, in position order."""
    searcher = Searcher(Network(5))
    sm = searcher.neighbors([0, 0, 0, 0, 0])

    assert sm == [
      (1, 0, 0, 0, 0),
      (0, 1, 0, 0, 0),
      (0, 0, 1, 0, 0),
      (0, 0, 0, 1, 0),
      (0, 0, 0, 0, 1),
    ]

  def test_neighbors_non_binary(self):
    searcher = Searcher(Network(5))
    state = (0, 1, 2, 0, 1)
    sm = searcher.neighbors(state, possible=(0, 1, 2))

    assert len(sm) == 5
    for position, mutant in enumerate(sm):
      assert searcher.hamming(state, mutant) == 1
      assert mutant[position] != state[position]

  def test_hamming_length_mismatch(self):
    searcher = Searcher(Network(3))
    with pytest.raises(LengthMismatchError):
      searcher.hamming([0, 1, 0], [0, 1])

  def test_mutants_of_array_states_can_be_scored(self, rng_key):
    """Mutants and walks built from a JAX array hold plain Python values."""
    net = Network(5, [[1], [2], [3], [4], [0]])
    searcher = Searcher(net)
    start = jax.random.randint(rng_key, (5,), 0, 2)

    mutant = searcher.point_mutant(start, 0)
    assert all(isinstance(v, int) for v in mutant)
    walk = searcher.mutant_walk(start, 1, 4)
    assert walk[0] == tuple(start.tolist())
    ranked = searcher.totalistic_sort([start, start, *walk])
    assert len(ranked) == 6


class TestMutantWalk:
  """Random walks through one-mutation (or k-mutation) neighborhoods."""

  def test_single_change_walk(self):
    searcher = Searcher(Network(5))
    sm = searcher.mutant_walk([0, 0, 0, 0, 0], 1, 10)

    assert len(sm) == 10
    assert sm[0] == (0, 0, 0, 0, 0)
    for idx in range(9):
      assert searcher.hamming(sm[idx], sm[idx + 1]) == 1

  def test_changes_per_step_is_honored(self):
    """With changes=2 consecutive states differ in exactly two positions."""
    searcher = Searcher(Network(5))
    sm = searcher.mutant_walk([0, 0, 0, 0, 0], 2, 8)

    assert len(sm) == 8
    for idx in range(7):
      assert searcher.hamming(sm[idx], sm[idx + 1]) == 2

  def test_length_one(self):
    searcher = Searcher(Network(4))
    assert searcher.mutant_walk((1, 0, 1, 0), 1, 1) == [(1, 0, 1, 0)]

  def test_walks_are_not_repeated(self):
    """Each call draws fresh randomness."""
    searcher = Searcher(Network(12))
    start = (0,) * 12
    assert searcher.mutant_walk(start, 1, 20) != searcher.mutant_walk(start, 1, 20)

  def test_walk_records_history(self):
    searcher = Searcher(Network(4))
    walk = searcher.mutant_walk((0, 0, 0, 0), 1, 5)
    assert searcher.history == walk

    searcher.clear_history()
    assert searcher.history == []

  @pytest.mark.parametrize("changes", [0, 6])
  def test_invalid_changes(self, changes):
    searcher = Searcher(Network(5))
    with pytest.raises(InvalidMutationError):
      searcher.mutant_walk((0,) * 5, changes, 3)

  def test_invalid_length(self):
    searcher = Searcher(Network(5))
    with pytest.raises(ValueError):
      searcher.mutant_walk((0,) * 5, 1, 0)


class TestSorting:
  """Lexicase and totalistic ranking of states."""

  def test_lexicase_sort(self, searcher_20):
    """Sorted ascending by the chosen node's score; a different node gives a different order."""
    samples = [searcher_20.random_state() for _ in range(100)]
    nodes = searcher_20.network.nodes

    l2 = searcher_20.lexicase_sort(samples, 2)
    new_order = [nodes[2].score(s) for s in l2]
    assert new_order == sorted(new_order)
    assert sorted(l2) == sorted(samples)

    l13 = searcher_20.lexicase_sort(samples, 13)
    l13_order = [nodes[13].score(s) for s in l13]
    assert l13_order == sorted(l13_order)
    assert l13 != l2

  @pytest.mark.parametrize("index", [-1, 20, 33])
  def test_lexicase_index_is_not_wrapped(self, searcher_20, index):
    with pytest.raises(IndexError):
      searcher_20.lexicase_sort([searcher_20.random_state()], index)

  def test_lexicase_shuffles_ties(self, distinct_states_6):
    """With every score tied, two sorts come out in different orders."""
    n6 = Network(6)
    searcher = Searcher(n6)
    node = n6.nodes[2]
    node.scores[(0,)] = 999
    node.scores[(1,)] = 999

    l2a = searcher.lexicase_sort(distinct_states_6, 2)
    l2b = searcher.lexicase_sort(distinct_states_6, 2)
    assert sorted(l2a) == sorted(l2b) == sorted(distinct_states_6)
    assert l2a != l2b

  def test_totalistic_sort(self, searcher_20):
    samples = [searcher_20.random_state() for _ in range(100)]
    tots = searcher_20.totalistic_sort(samples)

    new_order = [searcher_20.network.total_score(s) for s in tots]
    assert new_order == sorted(new_order)
    assert sorted(tots) == sorted(samples)

  def test_totalistic_shuffles_ties(self, distinct_states_6):
    n6 = Network(6)
    searcher = Searcher(n6)
    for s in distinct_states_6:
      n6.evaluate_state(s)
    for node in n6.nodes:
      for substate in node.scores:
        node.scores[substate] = 999

    tots_a = searcher.totalistic_sort(distinct_states_6)
    tots_b = searcher.totalistic_sort(distinct_states_6)
    assert tots_a != tots_b

  def test_sorts_return_new_lists(self, searcher_20):
    samples = [searcher_20.random_state() for _ in range(5)]
    before = list(samples)
    searcher_20.totalistic_sort(samples)
    searcher_20.lexicase_sort(samples, 0)
    assert samples == before

  def test_sorting_empty_collection(self, searcher_20):
    assert searcher_20.lexicase_sort([], 0) == []
    assert searcher_20.totalistic_sort([]) == []

  def test_searcher_does_not_add_nodes(self, searcher_20):
    nodes = list(searcher_20.network.nodes)
    searcher_20.totalistic_sort([searcher_20.random_state() for _ in range(3)])
    assert searcher_20.network.nodes == nodes
