"""An ordered collection of NK nodes and the wiring between them."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import jax
import jax.numpy as jnp

from nksearch.landscape.node import Node
from nksearch.models.nk_landscape import (
  DEFAULT_PRNG_SEED,
  DEFAULT_SCORE_RANGE,
  validate_score_range,
)
from nksearch.utils.nk_landscape import complete_wiring, random_wiring

if TYPE_CHECKING:
  from jaxtyping import PRNGKeyArray

  from nksearch.models.nk_landscape import NKLandscapeConfig
  from nksearch.models.types import ScoreVector, State, Wiring

logger = logging.getLogger(__name__)


class Network:
  """A network of `size` nodes, node `i` having id `i`.

  Wiring only assigns input indices to nodes; those indices are resolved
  modulo the length of whatever state is evaluated, so a state need not have
  one entry per node.
  """

  def __init__(
    self,
    size: int,
    wiring: Wiring = (),
    *,
    key: PRNGKeyArray | None = None,
    score_range: int = DEFAULT_SCORE_RANGE,
  ) -> None:
    """Create `size` unwired nodes, then apply `wiring` if given.

    Args:
        size: Number of nodes.
        wiring: Extra input indices per node, as accepted by `set_wiring`.
        key: PRNG key split into one key per node.
        score_range: Exclusive upper bound for node scores.

    Raises:
        ValueError: If `size` is negative or `score_range` does not fit in int32.

    """
    if size < 0:
      msg = f"Network size must be non-negative, got {size}."
      raise ValueError(msg)
    validate_score_range(score_range)
    if key is None:
      key = jax.random.PRNGKey(DEFAULT_PRNG_SEED)
    node_keys = jax.random.split(key, size) if size else []
    self.nodes = [
      Node(i, key=node_keys[i], score_range=score_range) for i in range(size)
    ]
    if wiring:
      self.set_wiring(wiring)
    logger.debug("Created network of %d nodes.", size)

  @classmethod
  def from_config(cls, config: NKLandscapeConfig) -> Network:
    """Build a network with random K-wiring as described by `config`."""
    key_wiring, key_nodes = jax.random.split(jax.random.PRNGKey(config.prng_seed))
    wiring = random_wiring(key_wiring, config.n, config.k)
    logger.info(
      "Building NK network with N=%d, K=%d, seed=%d.",
      config.n,
      config.k,
      config.prng_seed,
    )
    return cls(config.n, wiring, key=key_nodes, score_range=config.score_range)

  @property
  def size(self) -> int:
    """Number of nodes."""
    return len(self.nodes)

  def __len__(self) -> int:
    return len(self.nodes)

  def __repr__(self) -> str:
    return f"Network(size={self.size})"

  def set_wiring(self, new_inputs: Wiring, *, clear_scores: bool = False) -> None:
    """Replace the extra inputs of the first len(new_inputs) nodes.

    Entry `idx` of `new_inputs` rewires `nodes[idx]`; nodes past the end of
    `new_inputs` keep their current inputs.

    Args:
        new_inputs: Extra input indices per node. Any integer is allowed.
        clear_scores: Also forget the cached scores of every rewired node.

    Raises:
        IndexError: If `new_inputs` has more entries than there are nodes.

    """
    if len(new_inputs) > self.size:
      msg = f"Wiring has {len(new_inputs)} entries but the network has {self.size} nodes."
      raise IndexError(msg)
    for idx, others in enumerate(new_inputs):
      node = self.nodes[idx]
      node.set_inputs(others)
      if clear_scores:
        node.clear_scores()
    logger.debug("Rewired %d of %d nodes.", len(new_inputs), self.size)

  def input_graph(self) -> list[list[int]]:
    """Return each node's current inputs, in node order."""
    return [list(node.inputs) for node in self.nodes]

  def evaluate_state(self, state: State) -> ScoreVector:
    """Score `state` at every node.

    Returns:
        One score per node; its length is the node count whatever len(state) is.

    """
    return jnp.asarray([node.score(state) for node in self.nodes], dtype=jnp.int32)

  def total_score(self, state: State) -> int:
    """Sum of the per-node scores of `state`."""
    return sum(node.score(state) for node in self.nodes)

  def complete_network(self) -> list[list[int]]:
    """Return a wiring giving every node every other node as input."""
    return complete_wiring(self.size)
