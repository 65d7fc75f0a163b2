"""Exceptions raised by the nksearch package."""

from __future__ import annotations


class NKSearchError(ValueError):
  """Base class for NK landscape errors."""


class InvalidStateError(NKSearchError):
  """A state vector is empty or otherwise cannot be scored."""


class InvalidMutationError(NKSearchError):
  """A requested mutation has no valid alternative value to choose from."""


class LengthMismatchError(NKSearchError):
  """Two state vectors that must have equal length do not."""
