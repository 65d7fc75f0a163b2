"""Utility functions for building and exploring NK landscapes."""

from .mutation import hamming_distance, multi_point_mutant, point_mutant
from .nk_landscape import complete_wiring, draw_score, random_wiring, state_values

__all__ = [
  "complete_wiring",
  "draw_score",
  "hamming_distance",
  "multi_point_mutant",
  "point_mutant",
  "random_wiring",
  "state_values",
]
