"""Models for configuring NK landscapes."""

from .nk_landscape import (
  DEFAULT_PRNG_SEED,
  DEFAULT_SCORE_RANGE,
  MAX_SCORE_RANGE,
  NKLandscapeConfig,
  validate_score_range,
)
from .types import ScoreVector, State, Substate, Wiring

__all__ = [
  "DEFAULT_PRNG_SEED",
  "DEFAULT_SCORE_RANGE",
  "MAX_SCORE_RANGE",
  "NKLandscapeConfig",
  "ScoreVector",
  "State",
  "Substate",
  "Wiring",
  "validate_score_range",
]
