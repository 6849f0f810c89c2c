"""
Transport graph: fixed waypoints with a directed adjacency relation.

Guided nodes travel from waypoint to waypoint. Before each move a node
whose target is within REACH_DISTANCE picks a new target among the current
target's neighbors, and keeps picking until the target is out of reach.

Two situations make that impossible:
- a waypoint without outgoing edges has to supply a next target
  (DeadEndError)
- no waypoint beyond reach distance can be reached from the current
  target, so picking would loop forever. This is checked every
  `max_reroutes` picks and raises RoutingLoopError
"""

from __future__ import annotations
import logging
from collections import deque
from typing import Iterable, Sequence

import numpy as np

from motiongen.core.node import Node, Waypoint, within


logger = logging.getLogger(__name__)

REACH_DISTANCE = 20
MAX_REROUTES = 10_000


class TransportError(ValueError):
    """The transport graph cannot support the requested motion."""


class DeadEndError(TransportError):
    """A waypoint with no outgoing edges was asked for a next target."""


class RoutingLoopError(TransportError):
    """Re-routing never found a target beyond the reach distance."""


class TransportGraph:
    """
    Waypoints plus directed adjacency, addressed by waypoint index.

    Waypoint ids are kept verbatim from the input. Duplicate ids resolve to
    the first waypoint carrying that id.
    """

    def __init__(self, width: int, height: int, waypoints: Sequence[Waypoint] = ()):
        self.width = width
        self.height = height
        self.waypoints: list[Waypoint] = list(waypoints)
        self._index: dict[str, int] = {}
        for i, wp in enumerate(self.waypoints):
            self._index.setdefault(wp.node_id, i)

    def __len__(self) -> int:
        return len(self.waypoints)

    def add_waypoint(self, node_id: str, x: int, y: int) -> int:
        """Append a waypoint and return its index."""
        self.waypoints.append(Waypoint(node_id, x, y))
        index = len(self.waypoints) - 1
        self._index.setdefault(node_id, index)
        return index

    def index_of(self, node_id: str) -> int | None:
        return self._index.get(node_id)

    def add_edge(self, source: str, target: str) -> bool:
        """
        Add a directed edge by waypoint id.

        Edges naming an unknown waypoint are dropped.

        Returns:
            True if the edge was added
        """
        i = self.index_of(source)
        j = self.index_of(target)
        if i is None or j is None:
            logger.debug("Dropping edge %s -> %s: unknown endpoint", source, target)
            return False
        self.waypoints[i].neighbors.append(j)
        return True

    def add_edges(self, edges: Iterable[tuple[str, str]]) -> int:
        """Add edges in order; return how many were kept."""
        return sum(self.add_edge(source, target) for source, target in edges)

    def position(self, index: int) -> tuple[int, int]:
        return self.waypoints[index].position

    def random_waypoint(self, rng: np.random.Generator) -> int:
        """Pick a waypoint index uniformly."""
        if not self.waypoints:
            raise DeadEndError("Transport graph has no waypoints")
        return int(rng.integers(len(self.waypoints)))

    def random_neighbor(self, index: int, rng: np.random.Generator) -> int:
        """Pick uniformly among the neighbors of waypoint `index`."""
        neighbors = self.waypoints[index].neighbors
        if not neighbors:
            raise DeadEndError(
                f"Waypoint {self.waypoints[index].node_id} has no outgoing edges"
            )
        return neighbors[int(rng.integers(len(neighbors)))]

    def has_exit(self, start: int, origin: tuple[int, int], reach_distance: int) -> bool:
        """
        True if some waypoint reachable from `start` (itself included) lies
        beyond `reach_distance` from `origin`.
        """
        seen = {start}
        queue = deque([start])
        while queue:
            index = queue.popleft()
            if not within(origin, self.position(index), reach_distance):
                return True
            for j in self.waypoints[index].neighbors:
                if j not in seen:
                    seen.add(j)
                    queue.append(j)
        return False

    def reroute(
        self,
        node: Node,
        rng: np.random.Generator,
        reach_distance: int = REACH_DISTANCE,
        max_reroutes: int = MAX_REROUTES,
    ) -> int:
        """
        Replace the node's target until it lies beyond `reach_distance`.

        A target at exactly `reach_distance` counts as reached. Every
        `max_reroutes` picks the graph is searched from the current target;
        picking goes on as long as an out-of-reach waypoint is reachable.

        Returns:
            Number of new targets picked (0 if the node was still traveling)

        Raises:
            RoutingLoopError: no waypoint out of reach can be reached any more
        """
        picks = 0
        since_check = 0
        while within(node.position, self.position(node.target), reach_distance):
            if since_check >= max_reroutes:
                if not self.has_exit(node.target, node.position, reach_distance):
                    raise RoutingLoopError(
                        f"Node {node.node_id} found no target beyond {reach_distance} "
                        f"units after {picks} picks (last target "
                        f"{self.waypoints[node.target].node_id})"
                    )
                since_check = 0
            node.target = self.random_neighbor(node.target, rng)
            picks += 1
            since_check += 1
        if picks:
            logger.debug(
                "Node %s re-routed to %s after %d picks",
                node.node_id, self.waypoints[node.target].node_id, picks,
            )
        return picks
