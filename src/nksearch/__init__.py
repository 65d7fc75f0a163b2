"""Package for NKSearch."""

from . import errors, landscape, models, sampling, utils

__all__ = [
  "errors",
  "landscape",
  "models",
  "sampling",
  "utils",
]
