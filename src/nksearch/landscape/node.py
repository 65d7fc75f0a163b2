"""A single NK node with a lazily populated, persistent score table."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import jax

from nksearch.errors import InvalidStateError
from nksearch.models.nk_landscape import (
  DEFAULT_PRNG_SEED,
  DEFAULT_SCORE_RANGE,
  validate_score_range,
)
from nksearch.utils.nk_landscape import draw_score, state_values

if TYPE_CHECKING:
  from collections.abc import Iterable

  from jaxtyping import PRNGKeyArray

  from nksearch.models.types import State, Substate


def _dedupe_inputs(node_id: int, others: Iterable[int]) -> tuple[int, ...]:
  """Prefix `node_id` and drop repeats, keeping first occurrences."""
  return tuple(dict.fromkeys([node_id, *others]))


class Node:
  """One node of an NK network.

  The node reads the values at its input positions (its own id first) and
  looks the resulting substate up in `scores`. Unseen substates get a fresh
  uniform draw from [0, score_range), which is stored and returned unchanged
  on every later lookup.

  Attributes:
      id: Node identity, always the first input.
      inputs: Input indices, deduplicated. Resolved modulo the state length
          when scoring, so negative and out-of-range indices are allowed.
      scores: Mapping of substate tuples to scores.
      score_range: Exclusive upper bound for fresh scores.
      key: PRNG key consumed by `random_score`.

  """

  def __init__(
    self,
    node_id: int,
    inputs: Iterable[int] = (),
    *,
    key: PRNGKeyArray | None = None,
    score_range: int = DEFAULT_SCORE_RANGE,
  ) -> None:
    self.id = node_id
    self.inputs = _dedupe_inputs(node_id, inputs)
    validate_score_range(score_range)
    self.scores: dict[Substate, int] = {}
    self.score_range = score_range
    if key is None:
      key = jax.random.fold_in(jax.random.PRNGKey(DEFAULT_PRNG_SEED), node_id)
    self.key = key
    self._lock = threading.Lock()

  def __repr__(self) -> str:
    return f"Node(id={self.id}, inputs={list(self.inputs)}, cached={len(self.scores)})"

  def set_inputs(self, other_nodes: Iterable[int]) -> None:
    """Rewire the node. Cached scores are kept."""
    self.inputs = _dedupe_inputs(self.id, other_nodes)

  def clear_scores(self) -> None:
    """Forget every cached score."""
    with self._lock:
      self.scores.clear()

  def substate(self, state: State) -> Substate:
    """Read the values at this node's inputs, wrapping indices modulo len(state).

    JAX arrays are converted to Python values first so the substate is hashable.

    Raises:
        InvalidStateError: If `state` is empty.

    """
    state_size = len(state)
    if state_size == 0:
      msg = f"Node {self.id} cannot score an empty state."
      raise InvalidStateError(msg)
    values = state_values(state)
    return tuple(values[i % state_size] for i in self.inputs)

  def score(self, state: State) -> int:
    """Return the score of `state`, generating and storing it on first sight."""
    substate = self.substate(state)
    with self._lock:
      if substate not in self.scores:
        self.scores[substate] = self.random_score()
      return self.scores[substate]

  def random_score(self) -> int:
    """Draw a fresh integer score from [0, score_range), advancing `key`."""
    self.key, value = draw_score(self.key, self.score_range)
    return int(value)
