"""Common fixtures and utilities for testing."""

from __future__ import annotations

from itertools import product
from typing import TYPE_CHECKING

import jax
import pytest

if TYPE_CHECKING:
  from jaxtyping import PRNGKeyArray

from nksearch.landscape import Network
from nksearch.sampling import Searcher


@pytest.fixture
def rng_key() -> PRNGKeyArray:
  """Provide a consistent PRNG key for testing."""
  return jax.random.PRNGKey(42)


@pytest.fixture
def binary_states_3() -> list[tuple[int, ...]]:
  """All 8 binary states of length 3."""
  return list(product((0, 1), repeat=3))


@pytest.fixture
def complete_network_20(rng_key: PRNGKeyArray) -> Network:
  """Provide a fully connected 20-node network (K = 19)."""
  network = Network(20, key=rng_key)
  network.set_wiring(network.complete_network())
  return network


@pytest.fixture
def searcher_20(complete_network_20: Network) -> Searcher:
  """Provide a searcher bound to the complete 20-node network."""
  return Searcher(complete_network_20, key=jax.random.PRNGKey(7))


@pytest.fixture
def distinct_states_6() -> list[tuple[int, ...]]:
  """Provide ten distinct binary states of length 6."""
  return list(product((0, 1), repeat=6))[:10]
