"""Utilities for mutating and comparing states.

These take the PRNG key explicitly; `Searcher` wraps them with its own key.
States may hold any hashable values, so mutants are built as tuples rather
than JAX arrays.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import TYPE_CHECKING

import jax

from nksearch.errors import InvalidMutationError, InvalidStateError, LengthMismatchError
from nksearch.utils.nk_landscape import state_values

if TYPE_CHECKING:
  from jaxtyping import PRNGKeyArray

  from nksearch.models.types import State


def _alternatives(current: Hashable, possible: Sequence[Hashable]) -> list[Hashable]:
  """Distinct values of `possible` other than `current`, in first-seen order."""
  return [value for value in dict.fromkeys(possible) if value != current]


def point_mutant(
  key: PRNGKeyArray,
  state: State,
  position: int | None = None,
  possible: Sequence[Hashable] = (0, 1),
) -> tuple[Hashable, ...]:
  """Copy a state and change the value at one position.

  Args:
      key: JAX PRNG key.
      state: State to mutate. It is not modified.
      position: Position to change. Chosen uniformly at random if None.
      possible: Values a position may take.

  Returns:
      The mutant, differing from `state` at exactly `position`.

  Raises:
      InvalidStateError: If `state` is empty.
      IndexError: If `position` is outside [0, len(state)).
      InvalidMutationError: If `possible` offers no value other than the current one.

  """
  values = state_values(state)
  if not values:
    msg = "Cannot mutate an empty state."
    raise InvalidStateError(msg)

  key_position, key_value = jax.random.split(key)
  if position is None:
    position = int(jax.random.randint(key_position, (), 0, len(values)))
  elif not 0 <= position < len(values):
    msg = f"position {position} out of range for state of length {len(values)}."
    raise IndexError(msg)

  alternatives = _alternatives(values[position], possible)
  if not alternatives:
    msg = f"No alternative to {values[position]!r} among possible values {tuple(possible)!r}."
    raise InvalidMutationError(msg)

  choice = int(jax.random.randint(key_value, (), 0, len(alternatives)))
  return (*values[:position], alternatives[choice], *values[position + 1 :])


def multi_point_mutant(
  key: PRNGKeyArray,
  state: State,
  changes: int,
  possible: Sequence[Hashable] = (0, 1),
) -> tuple[Hashable, ...]:
  """Copy a state and change the values at `changes` distinct random positions.

  With `changes == 1` this is a uniform draw from the one-mutation neighbors
  of `state`.

  Raises:
      InvalidStateError: If `state` is empty.
      InvalidMutationError: If `changes` is outside [1, len(state)], or a
          chosen position has no alternative value.

  """
  values = state_values(state)
  if not values:
    msg = "Cannot mutate an empty state."
    raise InvalidStateError(msg)
  if not 1 <= changes <= len(values):
    msg = f"changes must be in [1, {len(values)}], got {changes}."
    raise InvalidMutationError(msg)

  key_positions, key_values = jax.random.split(key)
  positions = jax.random.choice(key_positions, len(values), shape=(changes,), replace=False)
  mutant = values
  for position, key_value in zip(positions.tolist(), jax.random.split(key_values, changes)):
    mutant = point_mutant(key_value, mutant, position, possible)
  return mutant


def hamming_distance(s1: State, s2: State) -> int:
  """Count the positions where two equal-length states differ.

  Raises:
      LengthMismatchError: If the states differ in length.

  """
  if len(s1) != len(s2):
    msg = f"Cannot compare states of length {len(s1)} and {len(s2)}."
    raise LengthMismatchError(msg)
  return sum(a != b for a, b in zip(s1, s2))
