"""Data structures for NK landscape configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

import jax.numpy as jnp

DEFAULT_SCORE_RANGE = 1024
DEFAULT_PRNG_SEED = 42
MAX_SCORE_RANGE = int(jnp.iinfo(jnp.int32).max)
"""Scores are drawn and stored as int32."""


def validate_score_range(score_range: int) -> None:
  """Check that scores drawn from [0, score_range) fit in int32.

  Raises:
      ValueError: If score_range is not in [1, MAX_SCORE_RANGE].

  """
  if not 0 < score_range <= MAX_SCORE_RANGE:
    msg = f"score_range must be in [1, {MAX_SCORE_RANGE}], got {score_range}."
    raise ValueError(msg)


@dataclass(frozen=True)
class NKLandscapeConfig:
  """Configuration for an NK landscape.

  Attributes:
      n: Number of nodes (N).
      k: Number of extra epistatic inputs per node (K).
      score_range: Scores are drawn uniformly from [0, score_range).
      prng_seed: Seed for the landscape's PRNG key.

  """

  n: int = field(default=20)
  k: int = field(default=2)
  score_range: int = field(default=DEFAULT_SCORE_RANGE)
  prng_seed: int = field(default=DEFAULT_PRNG_SEED)

  def __post_init__(self) -> None:
    """Validate the configuration."""
    if self.n < 0:
      msg = f"n must be non-negative, got {self.n}."
      raise ValueError(msg)
    if self.k < 0:
      msg = f"k must be non-negative, got {self.k}."
      raise ValueError(msg)
    validate_score_range(self.score_range)
