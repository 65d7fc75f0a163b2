"""Core types used throughout the nksearch library.

States are plain Python sequences rather than JAX arrays: a node keys its
score table on the tuple of values it reads, so the values only need to be
hashable and comparable. The default generators produce binary values, but
nothing below the Searcher assumes that.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence

from jaxtyping import Array, Int

State = Sequence[Hashable]
"""A global state: one value per node position."""
Substate = tuple[Hashable, ...]
"""The values read from a node's input positions, used as a score table key."""
Wiring = Sequence[Sequence[int]]
"""Extra input indices for each node, one entry per node."""
ScoreVector = Int[Array, "N"]
"""Per-node scores for one state."""
