"""
Node: the mutable state of a single moving point.

A node lives in exactly one of two modes for the whole run:
- free: velocity-driven random walk (x_speed, y_speed)
- guided: heads toward a waypoint of the transport graph at linear_speed

The navigation target is stored as an index into the transport graph's
waypoint list rather than as a reference to another node.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field


@dataclass
class Node:
    """A moving node on the field."""

    node_id: str
    x: int
    y: int

    # Free mode
    x_speed: int = 0
    y_speed: int = 0

    # Guided mode
    target: int | None = None  # Waypoint index
    linear_speed: int = 0

    @property
    def is_guided(self) -> bool:
        """True if the node follows the transport graph."""
        return self.target is not None

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def velocity(self) -> tuple[int, int]:
        return self.x_speed, self.y_speed


@dataclass
class Waypoint:
    """
    A fixed node of the transport graph.

    `neighbors` holds indices of directly reachable waypoints in the order
    the edges appeared in the input document. It is filled once while the
    graph is built and never changed afterwards.
    """

    node_id: str
    x: int
    y: int
    neighbors: list[int] = field(default_factory=list)

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y


def distance(a: tuple[int, int], b: tuple[int, int]) -> float:
    """Euclidean distance between two integer points."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return math.sqrt(dx * dx + dy * dy)


def within(a: tuple[int, int], b: tuple[int, int], radius: int) -> bool:
    """True if a and b are at most `radius` apart (exact integer test)."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy <= radius * radius
