"""
Trace assembly: the generation loop for both motion models.

Brownian run:
    place nodes at random, then for each generation record positions,
    build proximity edges, and advance the field one tick.

Transport run:
    place nodes on random waypoints heading to a random neighbor, then for
    each generation re-route nodes that reached their target, record
    positions and edges, and advance the field one tick.

The random generator is passed in explicitly; the same seed and inputs
always give the same trace.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

import numpy as np

from motiongen.core.field import Field, FieldConfig
from motiongen.core.motion import draw_speed
from motiongen.core.node import Node
from motiongen.core.proximity import EDGE_RADIUS, Edge, build_edges
from motiongen.core.transport import MAX_REROUTES, REACH_DISTANCE, TransportGraph


logger = logging.getLogger(__name__)

LINEAR_SPEED_LOW = 1  # Inclusive
LINEAR_SPEED_HIGH = 20  # Exclusive


@dataclass
class BrownianConfig:
    """Parameters of a random-walk run."""

    width: int
    height: int
    node_count: int
    generation_count: int

    def __post_init__(self):
        _check_non_negative(
            width=self.width,
            height=self.height,
            node_count=self.node_count,
            generation_count=self.generation_count,
        )


@dataclass
class TransportConfig:
    """Parameters of a transport-graph run."""

    node_count: int
    generation_count: int
    reach_distance: int = REACH_DISTANCE
    max_reroutes: int = MAX_REROUTES

    def __post_init__(self):
        _check_non_negative(
            node_count=self.node_count,
            generation_count=self.generation_count,
            reach_distance=self.reach_distance,
            max_reroutes=self.max_reroutes,
        )


def _check_non_negative(**values: int) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")


@dataclass
class Generation:
    """One tick of the trace: positions snapshot plus proximity edges."""

    n: int  # 1-based
    nodes: list[tuple[str, int, int]]  # (node_id, x, y) in field order
    edges: list[Edge]

    @property
    def node_ids(self) -> list[str]:
        return [node_id for node_id, _, _ in self.nodes]

    def position_array(self) -> np.ndarray:
        """Positions as an int64 array of shape (n, 2)."""
        return np.array(
            [(x, y) for _, x, y in self.nodes], dtype=np.int64
        ).reshape(-1, 2)


@dataclass
class Trace:
    """A complete run: field bounds and one Generation per tick."""

    width: int
    height: int
    generations: list[Generation] = field(default_factory=list)

    @property
    def generation_count(self) -> int:
        return len(self.generations)

    def trajectories(self) -> dict[str, np.ndarray]:
        """Per-node (ticks, 2) position arrays, keyed by node id."""
        paths: dict[str, list[tuple[int, int]]] = {}
        for gen in self.generations:
            for node_id, x, y in gen.nodes:
                paths.setdefault(node_id, []).append((x, y))
        return {
            node_id: np.array(points, dtype=np.int64)
            for node_id, points in paths.items()
        }


def node_id(index: int) -> str:
    """Id of the moving node at 0-based `index`."""
    return f"n{index + 1}"


def snapshot(field_: Field, n: int, radius: int = EDGE_RADIUS) -> Generation:
    """Record positions and proximity edges of the field as generation `n`."""
    nodes = field_.positions()
    edges = build_edges([entry[0] for entry in nodes], field_.position_array(), radius)
    return Generation(n=n, nodes=nodes, edges=edges)


def _draw_coordinate(rng: np.random.Generator, bound: int) -> int:
    """Uniform integer in [0, bound); a zero-sized bound pins to 0."""
    if bound <= 0:
        return 0
    return int(rng.integers(bound))


def create_brownian_field(config: BrownianConfig, rng: np.random.Generator) -> Field:
    """Place `node_count` free nodes with random positions and velocities."""
    field_ = Field(FieldConfig(config.width, config.height))
    for i in range(config.node_count):
        x = _draw_coordinate(rng, config.width)
        y = _draw_coordinate(rng, config.height)
        x_speed = draw_speed(rng)
        y_speed = draw_speed(rng)
        field_.add(Node(node_id(i), x, y, x_speed=x_speed, y_speed=y_speed))
    return field_


def create_transport_field(
    graph: TransportGraph,
    config: TransportConfig,
    rng: np.random.Generator,
) -> Field:
    """
    Place `node_count` guided nodes on random waypoints.

    Each node starts on a waypoint, targets a random neighbor of it, and
    gets a linear speed in [LINEAR_SPEED_LOW, LINEAR_SPEED_HIGH).

    Raises:
        DeadEndError: if the graph is empty or a start waypoint has no
            outgoing edges
    """
    field_ = Field(FieldConfig(graph.width, graph.height), waypoints=graph.waypoints)
    for i in range(config.node_count):
        start = graph.random_waypoint(rng)
        target = graph.random_neighbor(start, rng)
        speed = int(rng.integers(LINEAR_SPEED_LOW, LINEAR_SPEED_HIGH))
        x, y = graph.position(start)
        field_.add(Node(node_id(i), x, y, target=target, linear_speed=speed))
    return field_


def generate_brownian(config: BrownianConfig, rng: np.random.Generator) -> Trace:
    """Run the random-walk model and return its trace."""
    logger.info(
        "Brownian run: %dx%d field, %d nodes, %d generations",
        config.width, config.height, config.node_count, config.generation_count,
    )
    field_ = create_brownian_field(config, rng)
    trace = Trace(width=config.width, height=config.height)

    for g in range(1, config.generation_count + 1):
        trace.generations.append(snapshot(field_, g))
        field_.move(rng)

    return trace


def generate_transport(
    graph: TransportGraph,
    config: TransportConfig,
    rng: np.random.Generator,
) -> Trace:
    """
    Run the transport-graph model and return its trace.

    Raises:
        DeadEndError: a node needs a target from a waypoint without edges
        RoutingLoopError: a node could not get a target out of reach
    """
    logger.info(
        "Transport run: %d waypoints, %d nodes, %d generations",
        len(graph), config.node_count, config.generation_count,
    )
    field_ = create_transport_field(graph, config, rng)
    trace = Trace(width=graph.width, height=graph.height)

    for g in range(1, config.generation_count + 1):
        for node in field_:
            graph.reroute(node, rng, config.reach_distance, config.max_reroutes)
        trace.generations.append(snapshot(field_, g))
        field_.move(rng)

    return trace
