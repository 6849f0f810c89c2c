"""
Field: the rectangular simulation area and the ordered set of nodes in it.

Node order is creation order and never changes. It fixes the order of
position snapshots and of proximity edges in the trace.
"""

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from motiongen.core.node import Node, Waypoint
from motiongen.core.motion import step


@dataclass
class FieldConfig:
    """Field bounds."""

    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Field bounds must be non-negative, got {self.width}x{self.height}")


class Field:
    """
    Bounds plus the ordered node sequence.

    Bounds are enforced (horizontally) for free nodes only. Guided nodes
    carry the bounds of their input graph but move without reflection.
    """

    def __init__(self, config: FieldConfig, waypoints: list[Waypoint] | None = None):
        self.config = config
        self.nodes: list[Node] = []
        # Waypoints that guided nodes' targets index into
        self.waypoints: list[Waypoint] = waypoints if waypoints is not None else []

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def add(self, node: Node) -> None:
        """Append a node; insertion order is kept for the whole run."""
        self.nodes.append(node)

    def positions(self) -> list[tuple[str, int, int]]:
        """Snapshot of (node_id, x, y) in field order."""
        return [(n.node_id, n.x, n.y) for n in self.nodes]

    def position_array(self) -> np.ndarray:
        """Positions as an int64 array of shape (n, 2)."""
        return np.array([n.position for n in self.nodes], dtype=np.int64).reshape(-1, 2)

    def move(self, rng: np.random.Generator) -> None:
        """Advance every node by one tick, in node order."""
        for node in self.nodes:
            step(node, self.width, self.height, self.waypoints, rng)
