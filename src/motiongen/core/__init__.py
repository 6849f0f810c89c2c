"""
Core motion engine.

- Node / Waypoint: moving points and fixed transport-graph points
- Field: bounds plus the ordered node set, advanced one tick at a time
- motion: free (random-walk) and guided (graph-following) steps
- proximity: per-generation edges between nodes within EDGE_RADIUS
- TransportGraph: waypoint adjacency and target re-routing
- trace: the generation loop for both models
"""

from motiongen.core.node import Node, Waypoint, distance
from motiongen.core.field import Field, FieldConfig
from motiongen.core.motion import move_free, move_guided, step
from motiongen.core.proximity import EDGE_RADIUS, Edge, build_edges
from motiongen.core.transport import (
    REACH_DISTANCE,
    TransportGraph,
    TransportError,
    DeadEndError,
    RoutingLoopError,
)
from motiongen.core.trace import (
    BrownianConfig,
    TransportConfig,
    Generation,
    Trace,
    generate_brownian,
    generate_transport,
)

__all__ = [
    "Node",
    "Waypoint",
    "distance",
    "Field",
    "FieldConfig",
    "move_free",
    "move_guided",
    "step",
    "EDGE_RADIUS",
    "Edge",
    "build_edges",
    "REACH_DISTANCE",
    "TransportGraph",
    "TransportError",
    "DeadEndError",
    "RoutingLoopError",
    "BrownianConfig",
    "TransportConfig",
    "Generation",
    "Trace",
    "generate_brownian",
    "generate_transport",
]
