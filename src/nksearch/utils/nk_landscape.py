"""JAX-based helpers for NK landscape wiring and score draws.

The wiring generators return plain nested lists, the format accepted by
`Network.set_wiring`.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

import jax
import jax.numpy as jnp
from jax import vmap

if TYPE_CHECKING:
  from collections.abc import Hashable

  from jaxtyping import Array, Int, PRNGKeyArray

  from nksearch.models.types import State

  InteractionTable = Int[Array, "N K"]


@partial(jax.jit, static_argnames=("score_range",))
def draw_score(key: PRNGKeyArray, score_range: int) -> tuple[PRNGKeyArray, Int[Array, ""]]:
  """Draw one integer score uniformly from [0, score_range).

  Args:
      key: JAX PRNG key owned by the caller.
      score_range: Exclusive upper bound of the draw.

  Returns:
      The key to carry forward and the drawn score.

  """
  next_key, subkey = jax.random.split(key)
  return next_key, jax.random.randint(subkey, (), 0, score_range)


def state_values(state: State) -> tuple[Hashable, ...]:
  """Copy a state into a tuple of plain Python values.

  JAX array elements are unhashable, so arrays go through `tolist` first.
  """
  if isinstance(state, jax.Array):
    return tuple(state.tolist())
  return tuple(state)


def complete_wiring(n: int) -> list[list[int]]:
  """Wire every node to every other node (K = N - 1).

  Example:
      >>> complete_wiring(3)
      [[1, 2], [0, 2], [0, 1]]

  """
  return [[j for j in range(n) if j != i] for i in range(n)]


@partial(jax.jit, static_argnames=("n", "k"))
def _generate_interactions(key: PRNGKeyArray, n: int, k: int) -> InteractionTable:
  """Pick k distinct neighbors, never the site itself, for each of n sites."""
  sites = jnp.arange(n)
  possible_neighbors = jnp.array([jnp.roll(sites, -i - 1)[:-1] for i in range(n)])

  def _select_k_neighbors(key_site: PRNGKeyArray, site_neighbors: Int[Array, "N-1"]) -> Int:
    return jax.random.choice(key_site, site_neighbors, shape=(k,), replace=False)

  keys = jax.random.split(key, n)
  return vmap(_select_k_neighbors)(keys, possible_neighbors)


def random_wiring(key: PRNGKeyArray, n: int, k: int) -> list[list[int]]:
  """Generate classic NK wiring: k random distinct other nodes per node.

  Args:
      key: JAX PRNG key.
      n: Number of nodes (N).
      k: Number of extra inputs per node (K). Clamped to N - 1.

  Returns:
      One list of k extra input indices per node.

  Raises:
      ValueError: If n or k is negative.

  """
  if n < 0 or k < 0:
    msg = f"n and k must be non-negative, got n={n}, k={k}."
    raise ValueError(msg)
  k = min(k, max(n - 1, 0))
  if k == 0:
    return [[] for _ in range(n)]
  return _generate_interactions(key, n, k).tolist()
