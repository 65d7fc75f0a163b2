"""Landscape exploration over an NK network.

The Searcher never creates nodes; it only asks the network it is bound to for
scores. Every random choice consumes a fresh split of the searcher's own key,
so repeated calls differ while a fixed seed reproduces a whole session.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import jax

from nksearch.models.nk_landscape import DEFAULT_PRNG_SEED
from nksearch.utils.mutation import hamming_distance, multi_point_mutant, point_mutant
from nksearch.utils.nk_landscape import state_values

if TYPE_CHECKING:
  from collections.abc import Callable, Hashable, Sequence

  from jaxtyping import PRNGKeyArray

  from nksearch.landscape.network import Network
  from nksearch.models.types import State

logger = logging.getLogger(__name__)

BINARY = (0, 1)


class Searcher:
  """Random states, mutants, walks and rankings over a shared network.

  Attributes:
      network: The network being explored. Shared, not owned.
      history: States visited by `mutant_walk`, oldest first.
      key: PRNG key for every random choice the searcher makes.

  """

  def __init__(self, network: Network, *, key: PRNGKeyArray | None = None) -> None:
    self.network = network
    self.history: list[tuple[Hashable, ...]] = []
    if key is None:
      key = jax.random.PRNGKey(DEFAULT_PRNG_SEED)
    self.key = key

  def _next_key(self) -> PRNGKeyArray:
    self.key, subkey = jax.random.split(self.key)
    return subkey

  def clear_history(self) -> None:
    """Forget all visited states."""
    self.history.clear()

  def random_state(self, possible: Sequence[Hashable] = BINARY) -> tuple[Hashable, ...]:
    """Draw one value per node uniformly from `possible`.

    Raises:
        ValueError: If `possible` is empty.

    """
    if not possible:
      msg = "random_state needs at least one possible value."
      raise ValueError(msg)
    picks = jax.random.randint(self._next_key(), (self.network.size,), 0, len(possible))
    return tuple(possible[i] for i in picks.tolist())

  def point_mutant(
    self,
    state: State,
    position: int | None = None,
    possible: Sequence[Hashable] = BINARY,
  ) -> tuple[Hashable, ...]:
    """Copy `state` with one position changed to a different value from `possible`.

    See `nksearch.utils.mutation.point_mutant` for the failure modes.
    """
    return point_mutant(self._next_key(), state, position, possible)

  def neighbors(
    self,
    state: State,
    possible: Sequence[Hashable] = BINARY,
  ) -> list[tuple[Hashable, ...]]:
    """Return one point mutant per position of `state`, in position order."""
    if len(state) == 0:
      return []
    keys = jax.random.split(self._next_key(), len(state))
    return [point_mutant(keys[i], state, i, possible) for i in range(len(state))]

  def mutant_walk(
    self,
    start: State,
    changes: int = 1,
    length: int = 10,
    possible: Sequence[Hashable] = BINARY,
  ) -> list[tuple[Hashable, ...]]:
    """Walk from `start`, mutating `changes` distinct positions per step.

    With `changes == 1` each step is a uniform draw from the neighbors of
    the previous state. Every state of the walk is appended to `history`.

    Args:
        start: First state of the walk.
        changes: Positions mutated per step.
        length: Number of states returned, `start` included.
        possible: Values a position may take.

    Returns:
        `length` states; consecutive states differ in exactly `changes` positions.

    Raises:
        ValueError: If `length` < 1.
        InvalidMutationError: If `changes` is outside [1, len(start)].

    """
    if length < 1:
      msg = f"length must be >= 1, got {length}."
      raise ValueError(msg)

    walk = [state_values(start)]
    if length > 1:
      for step_key in jax.random.split(self._next_key(), length - 1):
        walk.append(multi_point_mutant(step_key, walk[-1], changes, possible))
    self.history.extend(walk)
    logger.debug("Mutant walk of %d steps with %d change(s) per step.", length - 1, changes)
    return walk

  def hamming(self, s1: State, s2: State) -> int:
    """Count differing positions; unequal lengths raise LengthMismatchError."""
    return hamming_distance(s1, s2)

  def _shuffled(self, states: Sequence[State]) -> list[State]:
    order = jax.random.permutation(self._next_key(), len(states))
    return [states[i] for i in order.tolist()]

  def _ranked(self, states: Sequence[State], key_fn: Callable[[State], int]) -> list[State]:
    # Shuffle first so tied states come out in random order under the stable sort.
    if not states:
      return []
    return sorted(self._shuffled(states), key=key_fn)

  def lexicase_sort(self, states: Sequence[State], index: int) -> list[State]:
    """Order `states` by ascending score at node `index`, ties in random order.

    Raises:
        IndexError: If `index` is not a node position of the network.

    """
    if not 0 <= index < self.network.size:
      msg = f"Node index {index} out of range for network of {self.network.size} nodes."
      raise IndexError(msg)
    node = self.network.nodes[index]
    logger.debug("Lexicase sort of %d states on node %d.", len(states), index)
    return self._ranked(states, node.score)

  def totalistic_sort(self, states: Sequence[State]) -> list[State]:
    """Order `states` by ascending summed node score, ties in random order."""
    logger.debug("Totalistic sort of %d states.", len(states))
    return self._ranked(states, self.network.total_score)
