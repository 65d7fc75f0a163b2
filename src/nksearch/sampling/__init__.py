"""Landscape exploration for NK networks."""

from .searcher import Searcher

__all__ = [
  "Searcher",
]
