"""Nodes and networks making up an NK landscape."""

from .network import Network
from .node import Node

__all__ = [
  "Network",
  "Node",
]
